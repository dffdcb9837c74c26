"""Registry of builtins for the lishp evaluator.

Maps names to handler functions. Every handler receives its arguments
unevaluated, together with the interpreter state and the evaluator, and
decides itself what to evaluate and in which order; that is what lets `if`
skip a branch and `def` keep its value as written. The evaluator consults
this table before user functions and external commands.
"""

from lishp import BuiltinFn
from lishp.builtin.arithmetic import add, sub, mul, div, mod, power, lt, gt, lte, gte
from lishp.builtin.logic_forms import if_form, and_form, or_form, not_form, equals
from lishp.builtin.list_builtin import first, rest, list_builtin, cons
from lishp.builtin.define_forms import def_form, defun_form, alias_form, let_form
from lishp.builtin.env_builtin import cd, exit_builtin, getenv, export
from lishp.builtin.file_builtin import write, append, read

BUILTINS: dict[str, BuiltinFn] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "^": power,
    "<": lt,
    ">": gt,
    "<=": lte,
    ">=": gte,
    "=": equals,
    "if": if_form,
    "and": and_form,
    "or": or_form,
    "not": not_form,
    "first": first,
    "rest": rest,
    "list": list_builtin,
    "cons": cons,
    "def": def_form,
    "defun": defun_form,
    "alias": alias_form,
    "let": let_form,
    "cd": cd,
    "exit": exit_builtin,
    "getenv": getenv,
    "export": export,
    "write": write,
    "append": append,
    "read": read,
}
