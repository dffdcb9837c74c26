# Core type aliases for lishp.
# Every value and every piece of syntax is an Expression (Call, List or Atom);
# numbers and booleans are Atoms whose text is parsed when a builtin needs it.
#
# Naming guidance:
# - EvaluatorFn: the evaluator handed to builtins so they choose what to evaluate.
# - BuiltinFn:   signature of an entry in the builtin table.

from typing import Callable

from lishp.types.expression import Expression

__version__ = "0.1.0"

EvaluatorFn = Callable[..., Expression]

BuiltinFn = Callable[..., Expression]
