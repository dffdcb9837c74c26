"""Application of user-defined functions.

Arguments arrive already evaluated. Each renamed parameter in the stored body
is replaced by its argument value, and the substituted body is then either
handed back to the trampoline as a TailCall (tail position) or stepped to a
value right here.
"""

from __future__ import annotations

from lishp import EvaluatorFn
from lishp.errors import LishpArityError
from lishp.types.expression import Expression
from lishp.types.function import Function
from lishp.types.state import State
from lishp.types.tail_call import TailCall


def resolve_tail(value: Expression | TailCall, state: State, evaluate_fn: EvaluatorFn) -> Expression:
    """Step pending tail calls until a plain value comes out."""
    while isinstance(value, TailCall):
        value = evaluate_fn(value.body, state, is_tail_call=True)
    return value


def apply(
    fn: Function,
    args: list[Expression],
    state: State,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> Expression | TailCall:
    if len(args) != len(fn.params):
        raise LishpArityError(
            f"{fn.name} expects {len(fn.params)} argument(s), got {len(args)}"
        )

    body = fn.body
    for param, value in zip(fn.params, args):
        body = body.replace(param, value)

    if is_tail_call:
        return TailCall(body)
    return resolve_tail(TailCall(body), state, evaluate_fn)
