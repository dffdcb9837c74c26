"""Symbolic expressions: the single data type for both syntax and values.

Three variants:

    - Call(items)  -> an unevaluated form, head first
    - List(items)  -> evaluated data (quoted forms, (list ...), captured output)
    - Atom(text)   -> a scalar; string, number and boolean all at once

Expressions are immutable; substitution builds new trees and shares the
untouched subtrees, so "cloning" a bound value is just handing it out again.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable

from lishp.config import LIST_WRAP_WIDTH


class Expression:
    __slots__ = ()

    def replace(self, name: str, value: Expression) -> Expression:
        """Substitute `value` for every atom spelled `name` in pending syntax."""
        return self

    def ident(self) -> str:
        """Flatten to text by concatenating all atoms."""
        raise NotImplementedError

    def atoms(self) -> list[str]:
        """Flatten to the texts of all atoms, in order."""
        raise NotImplementedError

    def size(self) -> int:
        """Length of the flattened text."""
        return len(self.ident())


class Atom(Expression):
    __slots__ = ("text",)
    __match_args__ = ("text",)

    def __init__(self, text: str = ""):
        self.text = text

    def replace(self, name: str, value: Expression) -> Expression:
        return value if self.text == name else self

    def ident(self) -> str:
        return self.text

    def atoms(self) -> list[str]:
        return [self.text]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Atom) and self.text == other.text

    def __hash__(self) -> int:
        return hash((Atom, self.text))

    def __repr__(self) -> str:
        return f"Atom({self.text!r})"

    def __str__(self) -> str:
        if not self.text:
            return '""'
        if any(c.isspace() for c in self.text):
            return f'"{self.text}"'
        return self.text


class _Sequence(Expression):
    __slots__ = ("items",)
    __match_args__ = ("items",)

    def __init__(self, items: Iterable[Expression] = ()):
        self.items: tuple[Expression, ...] = tuple(items)

    def ident(self) -> str:
        return "".join(e.ident() for e in self.items)

    def atoms(self) -> list[str]:
        out: list[str] = []
        for e in self.items:
            out.extend(e.atoms())
        return out

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.items == other.items

    def __hash__(self) -> int:
        return hash((type(self), self.items))

    def __iter__(self):
        return iter(self.items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items)!r})"


class Call(_Sequence):
    """Pending syntax: (head arg...)."""

    __slots__ = ()

    def replace(self, name: str, value: Expression) -> Expression:
        return Call(e.replace(name, value) for e in self.items)

    def __str__(self) -> str:
        return "(" + " ".join(str(e) for e in self.items) + ")"


class List(_Sequence):
    """Evaluated data. Substitution never descends into a List."""

    __slots__ = ()

    def __str__(self) -> str:
        wrap = self.size() > LIST_WRAP_WIDTH
        sep = "\n\t" if wrap else " "
        with StringIO() as buffer:
            buffer.write("(")
            if wrap:
                buffer.write("\n\t")
            buffer.write(sep.join(str(e) for e in self.items))
            if wrap:
                buffer.write("\n")
            buffer.write(")")
            return buffer.getvalue()


EMPTY = Atom("")
TRUE = Atom("true")
FALSE = Atom("false")


def boolean(value: bool) -> Atom:
    return TRUE if value else FALSE


def is_empty(expr: Expression) -> bool:
    """True for the empty atom and the empty list."""
    match expr:
        case Atom(text):
            return not text
        case List(items):
            return not items
    return False


def lishp_equal(a: Expression, b: Expression) -> bool:
    """Structural equality where "" and '() are the same "no value"."""
    if isinstance(a, Atom) != isinstance(b, Atom) and is_empty(a) and is_empty(b):
        return True
    return a == b
