from lishp import EvaluatorFn
from lishp.errors import LishpArityError, LishpTypeError
from lishp.types.expression import Atom, Expression, TRUE, FALSE, boolean, lishp_equal
from lishp.types.state import State
from lishp.types.tail_call import TailCall


def _is_true(val: Expression) -> bool:
    return val.ident() == "true"


def if_form(
    tail: list[Expression],
    state: State,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> Expression | TailCall:
    """(if cond then else): only the chosen branch is evaluated."""
    if len(tail) != 3:
        raise LishpArityError("if requires three arguments")

    cond, then_expr, else_expr = tail
    if _is_true(evaluate_fn(cond, state)):
        return evaluate_fn(then_expr, state, is_tail_call=is_tail_call)
    return evaluate_fn(else_expr, state, is_tail_call=is_tail_call)


def and_form(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """Logical AND over the text "true".

    Every operand is evaluated left to right, including the ones after the
    first false value, so commands in later operands still run.
    """
    result = True
    for expr in tail:
        result = _is_true(evaluate_fn(expr, state)) and result
    return boolean(result)


def or_form(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """Logical OR over the text "true"; evaluates every operand like `and`."""
    result = False
    for expr in tail:
        result = _is_true(evaluate_fn(expr, state)) or result
    return boolean(result)


def not_form(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    if len(tail) != 1:
        raise LishpArityError("not requires one argument")
    val = evaluate_fn(tail[0], state)
    if val == TRUE:
        return FALSE
    if val == FALSE:
        return TRUE
    raise LishpTypeError("not expects a boolean argument")


def equals(tail: list[Expression], state: State, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> Atom:
    """(= a b): structural equality, with "" equal to '()."""
    if len(tail) != 2:
        raise LishpArityError("= requires exactly 2 arguments")
    a = evaluate_fn(tail[0], state)
    b = evaluate_fn(tail[1], state)
    return boolean(lishp_equal(a, b))
