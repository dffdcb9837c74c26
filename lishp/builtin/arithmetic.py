"""Numeric builtins: + - * / % ^ and the ordering comparisons.

Atoms stay text until a builtin needs a number. Operands are parsed as
decimal floating point and results are printed back to text, so (+ 1 2)
is the atom 3 and (/ 1 2) is the atom 0.5.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Callable

from lishp import EvaluatorFn
from lishp.errors import LishpArityError, LishpTypeError
from lishp.types.expression import Atom, Expression, boolean
from lishp.types.state import State

_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def to_number(expr: Expression) -> float:
    """Parse the flattened text of `expr` as a decimal number."""
    text = expr.ident()
    if not _NUMBER_RE.fullmatch(text):
        raise LishpTypeError(f"{text} is not a number")
    return float(text)


def format_number(x: float) -> str:
    """Shortest decimal text for x, without exponent; integral values lose the '.0'."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    text = format(Decimal(repr(x)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _mod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


def _pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except ValueError:
        return math.nan
    except OverflowError:
        odd = b.is_integer() and b % 2 == 1
        return -math.inf if a < 0 and odd else math.inf


def _fold(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn,
          init: float, op: Callable[[float, float], float]) -> Atom:
    acc = init
    for expr in tail:
        acc = op(acc, to_number(evaluate_fn(expr, state)))
    return Atom(format_number(acc))


def _binary(name: str, tail: list[Expression], state: State,
            evaluate_fn: EvaluatorFn) -> tuple[float, float]:
    if len(tail) != 2:
        raise LishpArityError(f"{name} requires exactly 2 arguments")
    # Each operand is parsed right after it is evaluated
    x = to_number(evaluate_fn(tail[0], state))
    y = to_number(evaluate_fn(tail[1], state))
    return x, y


def add(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """Sum of any number of operands; (+) is 0."""
    return _fold(tail, state, evaluate_fn, 0.0, lambda a, b: a + b)


def mul(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """Product of any number of operands; (*) is 1."""
    return _fold(tail, state, evaluate_fn, 1.0, lambda a, b: a * b)


def sub(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    x, y = _binary("-", tail, state, evaluate_fn)
    return Atom(format_number(x - y))


def div(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """IEEE division: (/ 1 0) is inf, (/ 0 0) is NaN."""
    x, y = _binary("/", tail, state, evaluate_fn)
    return Atom(format_number(_div(x, y)))


def mod(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """Remainder with the sign of the dividend (fmod)."""
    x, y = _binary("%", tail, state, evaluate_fn)
    return Atom(format_number(_mod(x, y)))


def power(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    x, y = _binary("^", tail, state, evaluate_fn)
    return Atom(format_number(_pow(x, y)))


def lt(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    x, y = _binary("<", tail, state, evaluate_fn)
    return boolean(x < y)


def gt(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    x, y = _binary(">", tail, state, evaluate_fn)
    return boolean(x > y)


def lte(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    x, y = _binary("<=", tail, state, evaluate_fn)
    return boolean(x <= y)


def gte(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    x, y = _binary(">=", tail, state, evaluate_fn)
    return boolean(x >= y)
