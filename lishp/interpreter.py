from __future__ import annotations

from pathlib import Path

from lishp.config import DEFAULT_PROMPT, PROMPT_VAR
from lishp.errors import LishpError
from lishp.evaluation.evaluator import evaluate
from lishp.modules.startup import load_prelude, load_rc_file
from lishp.reader.parser import can_parse, parse_line, parse_program
from lishp.types.expression import Atom, Expression
from lishp.types.state import State


class Interpreter:
    """
    A lishp shell session: one State plus the startup files loaded into it.

    `prelude` and `rc_file` accept 'auto' (the configured location), an explicit
    path, or None to skip loading.
    """

    def __init__(self, prelude: str | Path | None = 'auto', rc_file: str | Path | None = 'auto'):
        self.state = State()

        if prelude == 'auto':
            load_prelude(self)
        elif prelude is not None:
            load_prelude(self, Path(prelude))

        if rc_file == 'auto':
            load_rc_file(self)
        elif rc_file is not None:
            load_rc_file(self, Path(rc_file))

    def eval_prelude(self, code: str) -> None:
        """Evaluate every form of a multi-form source, e.g. the prelude."""
        for expr in parse_program(code, self.state.aliases):
            self.eval_expr(expr)

    def eval_expr(self, expr: Expression, is_top_level: bool = False) -> Expression:
        try:
            return evaluate(expr, self.state, is_top_level)
        except RecursionError:
            raise LishpError("maximum evaluation depth exceeded") from None

    def eval(self, line: str) -> Expression:
        """Evaluate one command line as a top-level command."""
        expr = parse_line(line, self.state.aliases)
        return self.eval_expr(expr, is_top_level=True)

    def can_parse(self, line: str) -> bool:
        return can_parse(line, self.state.aliases)

    def show(self, expr: Expression) -> str:
        """Printed form of a value, as the REPL writes it."""
        try:
            return str(expr)
        except RecursionError:
            raise LishpError("value too deeply nested to print") from None

    def prompt(self) -> str:
        """The flattened value of `lishp_prompt` if defined, else the default prompt."""
        if PROMPT_VAR not in self.state.defs:
            return DEFAULT_PROMPT
        value = self.eval_expr(Atom(PROMPT_VAR))
        try:
            return value.ident()
        except RecursionError:
            raise LishpError("lishp_prompt value too deeply nested") from None
