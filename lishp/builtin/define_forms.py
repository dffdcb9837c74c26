"""Definition builtins: def, defun, alias and let.

None of these evaluate their name arguments; `def` and `alias` store their
remaining arguments unevaluated, `defun` stores a renamed body and `let`
substitutes evaluated values into its body before evaluating it.
"""

from __future__ import annotations

from lishp import EvaluatorFn
from lishp.errors import LishpArityError, LishpTypeError
from lishp.types.expression import Atom, Call, Expression, List
from lishp.types.function import Function
from lishp.types.state import State
from lishp.types.tail_call import TailCall


def _symbol(form: str, expr: Expression) -> str:
    if not isinstance(expr, Atom) or not expr.text:
        raise LishpTypeError(f"{form} name must be a symbol, got {expr}")
    return expr.text


def def_form(
    tail: list[Expression],
    state: State,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> Atom:
    """
    (def name value)
    The value is stored as written and substituted wherever `name` is read.
    """
    if len(tail) != 2:
        raise LishpArityError("def requires two arguments")
    name = _symbol("def", tail[0])
    state.define(name, tail[1])
    return Atom(f"defined {name}")


def defun_form(
    tail: list[Expression],
    state: State,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> Atom:
    """
    (defun name (param...) body)

    Each parameter is renamed to a globally unique spelling before the body is
    stored, so substituting one function's body into another's can never
    capture a parameter of the same name.
    """
    if len(tail) != 3:
        raise LishpArityError("defun requires three arguments")
    name = _symbol("defun", tail[0])
    params_expr, body = tail[1], tail[2]

    params: list[str] = []
    for param in params_expr.atoms():
        fresh = state.fresh_name(param)
        body = body.replace(param, Atom(fresh))
        params.append(fresh)

    state.define_function(Function(name, params, body))
    return Atom(f"defined {name}")


def _replacement_groups(tail: list[Expression]) -> tuple[str, ...]:
    groups: list[str] = []
    for expr in tail:
        match expr:
            case Atom(text):
                groups.append(text)
            case Call(items) | List(items):
                groups.extend(str(e) for e in items)
    return tuple(groups)


def alias_form(
    tail: list[Expression],
    state: State,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> Atom:
    """
    (alias name replacement...)
    (alias ll (ls -l)), (alias ll ls -l) and (alias ll "ls -l") are equivalent.
    """
    if len(tail) < 2:
        raise LishpArityError("alias requires a name and a replacement")
    name = _symbol("alias", tail[0])
    state.define_alias(name, _replacement_groups(tail[1:]))
    return Atom("created alias")


def _bindings(expr: Expression) -> list[tuple[str, Expression]]:
    """Accept ((a 1) (b 2)) as well as the flat form (a 1 b 2)."""
    if not isinstance(expr, (Call, List)):
        raise LishpTypeError(f"let bindings must be a list, got {expr}")
    items = list(expr.items)
    pairs: list[tuple[str, Expression]] = []
    i = 0
    while i < len(items):
        match items[i]:
            case Call((Atom(name), value)) | List((Atom(name), value)):
                i += 1
            case Atom(name) if i + 1 < len(items):
                value = items[i + 1]
                i += 2
            case other:
                raise LishpTypeError(f"let binding must be a (name value) pair, got {other}")
        pairs.append((name, value))
    return pairs


def let_form(
    tail: list[Expression],
    state: State,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> Expression | TailCall:
    """
    (let ((var val)...) body)
    Values are evaluated in order against the surrounding state, never against
    earlier bindings, and substituted into body without renaming.
    """
    if len(tail) != 2:
        raise LishpArityError("let requires two arguments")
    bindings, body = tail
    for name, value_expr in _bindings(bindings):
        body = body.replace(name, evaluate_fn(value_expr, state))
    return evaluate_fn(body, state, is_tail_call=is_tail_call)
