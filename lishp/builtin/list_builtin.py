"""Sequence builtins shared by atoms and lists.

An atom behaves as a sequence of characters and a list as a sequence of
expressions, so (first "abc") is a and (rest '(a b c)) is (b c).
"""
from __future__ import annotations

from lishp import EvaluatorFn
from lishp.errors import LishpArityError, LishpTypeError
from lishp.types.expression import Atom, Expression, List
from lishp.types.state import State


def _one(name: str, tail: list[Expression], state: State, evaluate_fn: EvaluatorFn) -> Expression:
    if len(tail) != 1:
        raise LishpArityError(f"{name} requires one argument")
    return evaluate_fn(tail[0], state)


def first(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Expression:
    """First element of a list, or first character of an atom."""
    match _one("first", tail, state, evaluate_fn):
        case List(items):
            if not items:
                raise LishpTypeError("tried to call first on empty list")
            return items[0]
        case Atom(text):
            if not text:
                raise LishpTypeError("tried to call first on empty string")
            return Atom(text[0])
        case other:
            raise LishpTypeError(f"first expects a list or an atom, got {other}")


def rest(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Expression:
    """Everything but the first element; the rest of an empty sequence is empty."""
    match _one("rest", tail, state, evaluate_fn):
        case List(items):
            return List(items[1:])
        case Atom(text):
            return Atom(text[1:])
        case other:
            raise LishpTypeError(f"rest expects a list or an atom, got {other}")


def list_builtin(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> List:
    """Evaluate every argument and collect the values into a list."""
    return List(evaluate_fn(expr, state) for expr in tail)


def cons(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Expression:
    """Prepend x to xs.

    Behavior:
    - one-character atom onto an atom concatenates: (cons a bc) -> abc
    - one-character atom onto '() stays an atom:    (cons a '()) -> a
    - anything onto a list prepends:                (cons a '(b)) -> (a b)
    - anything else onto "" starts a new list:      (cons '(a) "") -> ((a))
    """
    if len(tail) != 2:
        raise LishpArityError("cons requires two arguments")
    x = evaluate_fn(tail[0], state)
    xs = evaluate_fn(tail[1], state)

    match x, xs:
        case Atom(c), List(()) if len(c) == 1:
            return x
        case Atom(c), Atom(s) if len(c) == 1:
            return Atom(c + s)
        case _, List(items):
            return List((x, *items))
        case _, Atom(""):
            return List((x,))
    raise LishpTypeError("cons second argument must be list-like")
