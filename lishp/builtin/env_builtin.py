"""Process environment builtins: cd, exit, getenv and export."""
from __future__ import annotations

import logging
import math
import os

from lishp import EvaluatorFn
from lishp.builtin.arithmetic import to_number
from lishp.config import get_home_dir
from lishp.errors import LishpArityError, LishpError, LishpIOError, LishpTypeError
from lishp.types.expression import Atom, EMPTY, Expression
from lishp.types.state import State

logger = logging.getLogger(__name__)


def cd(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """(cd [dir]) changes the working directory; no argument means $HOME."""
    if len(tail) > 1:
        raise LishpArityError("cd takes at most one argument")
    target = evaluate_fn(tail[0], state).ident() if tail else str(get_home_dir())
    try:
        os.chdir(target)
    except (OSError, ValueError) as e:
        raise LishpIOError(f"Failed to change directory: {e}")
    os.environ["PWD"] = os.getcwd()
    logger.debug("cwd is now %s", os.environ["PWD"])
    return EMPTY


def exit_builtin(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """(exit [status]) leaves the shell at once."""
    if len(tail) > 1:
        raise LishpArityError("exit takes at most one argument")
    if not tail:
        raise SystemExit(0)
    value = evaluate_fn(tail[0], state)
    status = to_number(value)
    if not math.isfinite(status):
        raise LishpTypeError(f"{value.ident()} is not a valid exit status")
    raise SystemExit(int(status))


def getenv(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    if len(tail) != 1:
        raise LishpArityError("getenv requires one argument")
    name = evaluate_fn(tail[0], state).ident()
    value = os.environ.get(name)
    if value is None:
        raise LishpError(f"env var not found: {name}")
    return Atom(value)


def export(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """(export NAME value) sets a variable for this shell and every later child."""
    if len(tail) != 2:
        raise LishpArityError("export requires two arguments")
    name = evaluate_fn(tail[0], state).ident()
    value = evaluate_fn(tail[1], state).ident()
    try:
        os.environ[name] = value
    except ValueError as e:
        raise LishpError(f"export: {e}")
    return EMPTY
