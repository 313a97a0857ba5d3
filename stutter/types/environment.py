"""Runtime environments for Stutter.

Two tiers:

- LocalEnvironment: a persistent, immutable Symbol -> value map. Binding a
  name returns a new environment that shares structure with the old one
  (a pyrsistent hash array mapped trie), so every let clause and every
  lambda call gets its own cheap snapshot and no scope is ever mutated.
- GlobalEnvironment: one mutable table for top-level `def` and the
  standard library, consulted when a local lookup misses.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Iterator

from pyrsistent import PMap, pmap

from stutter import LispValue
from stutter.errors import StutterTypeError, StutterUnboundSymbol
from stutter.types.symbol import Symbol

logger = logging.getLogger(__name__)


def _check_symbol(name: object) -> None:
    if not isinstance(name, Symbol):
        raise StutterTypeError(f"Cannot bind {name!r}, expecting a symbol")


class GlobalEnvironment:
    """Process-wide mutable mapping from Symbols to values."""

    __slots__ = ("vars",)

    def __init__(self):
        self.vars: dict[Symbol, LispValue] = {}

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value`, silently replacing any previous binding."""
        _check_symbol(name)
        if name in self.vars:
            logger.debug("redefining global %s", name)
        self.vars[name] = value

    def lookup(self, name: Symbol) -> LispValue:
        try:
            return self.vars[name]
        except KeyError:
            raise StutterUnboundSymbol(f"'{name}' is not in scope") from None

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<GlobalEnvironment {")
            buffer.write(", ".join(str(k) for k in self.vars))
            buffer.write("}>")
            return buffer.getvalue()


class LocalEnvironment:
    """Persistent mapping from Symbols to values; see module docstring."""

    __slots__ = ("vars",)

    def __init__(self, bindings: PMap | None = None):
        self.vars: PMap = bindings if bindings is not None else pmap()

    def bind(self, name: Symbol, value: LispValue) -> LocalEnvironment:
        """Return a new environment with `name` bound; `self` is unchanged."""
        _check_symbol(name)
        return LocalEnvironment(self.vars.set(name, value))

    def lookup(self, name: Symbol, global_env: GlobalEnvironment) -> LispValue:
        """Resolve `name` locally first, then globally.

        Raises StutterUnboundSymbol if neither tier binds it.
        """
        try:
            return self.vars[name]
        except KeyError:
            return global_env.lookup(name)

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<LocalEnvironment {")
            buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
            buffer.write("}>")
            return buffer.getvalue()
