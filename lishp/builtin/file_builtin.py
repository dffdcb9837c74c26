"""Whole-file builtins: write, append and read."""
from __future__ import annotations

from lishp import EvaluatorFn
from lishp.errors import LishpArityError, LishpIOError
from lishp.types.expression import Atom, EMPTY, Expression
from lishp.types.state import State


def _content_and_path(name: str, tail: list[Expression], state: State, evaluate_fn: EvaluatorFn) -> tuple[str, str]:
    if len(tail) != 2:
        raise LishpArityError(f"{name} requires two arguments")
    content = evaluate_fn(tail[0], state).ident()
    path = evaluate_fn(tail[1], state).ident()
    return content, path


def _store(name: str, mode: str, tail: list[Expression], state: State, evaluate_fn: EvaluatorFn) -> Atom:
    content, path = _content_and_path(name, tail, state, evaluate_fn)
    try:
        with open(path, mode, encoding="utf-8", newline="") as f:
            f.write(content)
    except (OSError, ValueError) as e:
        raise LishpIOError(f"{name}: {e}")
    return EMPTY


def write(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """(write content file) replaces the file's content, creating it if needed."""
    return _store("write", "w", tail, state, evaluate_fn)


def append(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """(append content file) adds to the end of the file, creating it if needed."""
    return _store("append", "a", tail, state, evaluate_fn)


def read(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """(read file) is the whole content of the file as one atom."""
    if len(tail) != 1:
        raise LishpArityError("read requires one argument")
    path = evaluate_fn(tail[0], state).ident()
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return Atom(f.read())
    except (OSError, ValueError) as e:
        raise LishpIOError(f"read: {e}")
