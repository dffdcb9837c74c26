"""Core evaluator and trampoline for lishp.

Evaluation is tree rewriting: a Call is dispatched on its head name to a
builtin, a user function or an external command; an Atom is looked up in the
definitions table; a List is already a value. Calls in tail position (function
bodies and the branches of `if` and `let`) come back as TailCall objects and
are stepped by the trampoline in `evaluate`, so tail recursion runs in
constant Python stack.
"""

from __future__ import annotations

from lishp.builtin import BUILTINS
from lishp.config import EXIT_STATUS_VAR
from lishp.errors import LishpSyntaxError
from lishp.evaluation.apply import apply
from lishp.process.runner import run_command
from lishp.types.expression import Atom, Call, Expression, List
from lishp.types.state import State
from lishp.types.tail_call import TailCall


def evaluate(expr: Expression, state: State, is_top_level: bool = False) -> Expression:
    """
    Trampoline evaluator: tail-call aware evaluation.
    `is_top_level` marks the expression as the whole command line, which lets
    an external command inherit stdout and set `$?`.
    """
    result = evaluate0(expr, state, is_top_level, True)
    while isinstance(result, TailCall):
        result = evaluate0(result.body, state, False, True)
    return result


def _head_name(head: Expression, state: State) -> str:
    match head:
        case Atom(text):
            return text
        case List():
            return head.ident()
        case Call():
            return evaluate0(head, state).ident()
    return head.ident()


def evaluate0(
    expr: Expression,
    state: State,
    is_top_level: bool = False,
    is_tail_call: bool = False,
) -> Expression | TailCall:
    """
    Core evaluator: single-step evaluation with tail-call awareness.
    Returns a value, or a TailCall only when `is_tail_call` is set.
    """
    match expr:
        case Call(()):
            raise LishpSyntaxError("Empty call expression")

        case Call((head, *tail_args)):
            name = _head_name(head, state)

            # --- Builtins get their arguments unevaluated ---
            if name in BUILTINS:
                return BUILTINS[name](tail_args, state, evaluate0, is_tail_call)

            # --- User functions: evaluate arguments left to right, then substitute ---
            fn = state.funcs.get(name)
            if fn is not None:
                args = [evaluate0(arg, state) for arg in tail_args]
                return apply(fn, args, state, evaluate0, is_tail_call)

            return run_command(name, tail_args, state, evaluate0, is_top_level)

        case Atom(text):
            if text == EXIT_STATUS_VAR:
                return Atom(str(state.last_ret_code))
            bound = state.defs.get(text)
            if bound is None:
                return expr
            # A bound Call is pending syntax; reading it runs it
            if isinstance(bound, Call):
                return evaluate0(bound, state)
            return bound

    # --- Lists return as-is ---
    return expr
