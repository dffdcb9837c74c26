"""Mutable interpreter state threaded through every evaluation.

Holds the alias table consulted by the lexer, the global substitution table
filled by `def`, the user functions registered by `defun`, the counter used to
mint hygienic parameter names, and the exit status of the last top-level
command.
"""

from __future__ import annotations

import logging
from itertools import count

from lishp.types.expression import Expression
from lishp.types.function import Function

logger = logging.getLogger(__name__)


class State:
    __slots__ = ("aliases", "defs", "funcs", "last_ret_code", "_name_counter")

    def __init__(self):
        self.aliases: dict[str, tuple[str, ...]] = {}
        self.defs: dict[str, Expression] = {}
        self.funcs: dict[str, Function] = {}
        self.last_ret_code: int = 0
        self._name_counter = count(0)

    def fresh_name(self, name: str) -> str:
        """Mint a globally unique spelling for parameter `name`, e.g. #x#0#."""
        return f"#{name}#{next(self._name_counter)}#"

    def define(self, name: str, value: Expression) -> None:
        logger.debug("def %s = %s", name, value)
        self.defs[name] = value

    def define_function(self, fn: Function) -> None:
        logger.debug("defun %s", fn)
        self.funcs[fn.name] = fn

    def define_alias(self, name: str, groups: tuple[str, ...]) -> None:
        logger.debug("alias %s -> %s", name, groups)
        self.aliases[name] = groups

    def __repr__(self) -> str:
        return (
            f"<State defs={sorted(self.defs)} funcs={sorted(self.funcs)} "
            f"aliases={sorted(self.aliases)} $?={self.last_ret_code}>"
        )
