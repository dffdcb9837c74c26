"""User-defined function representation for lishp."""

from __future__ import annotations

from io import StringIO

from lishp.types.expression import Expression


class Function:
    """A `defun` body with its parameters already renamed to unique symbols."""

    __slots__ = ("name", "params", "body")

    def __init__(self, name: str, params: list[str], body: Expression):
        self.name = name
        self.params: list[str] = params
        self.body: Expression = body

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(defun ")
            buffer.write(self.name)
            buffer.write(" (")
            buffer.write(" ".join(self.params))
            buffer.write(") ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
