"""Lexical scopes and the symbols declared in them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .types import SemanticType


class SymbolKind(enum.Enum):
    VARIABLE = "variable"
    FUNCTION = "function"


@dataclass(frozen=True)
class Symbol:
    """A declared name; for functions ``type`` is the return type."""

    name: str
    kind: SymbolKind
    type: SemanticType
    params: tuple[SemanticType, ...] = ()

    @classmethod
    def variable(cls, name: str, type_: SemanticType) -> Symbol:
        return cls(name, SymbolKind.VARIABLE, type_)

    @classmethod
    def function(cls, name: str, return_type: SemanticType, params: Iterable[SemanticType]) -> Symbol:
        return cls(name, SymbolKind.FUNCTION, return_type, tuple(params))


class Scope:
    """A table of symbols with an optional enclosing scope."""

    def __init__(self, parent: Optional[Scope] = None) -> None:
        self.parent = parent
        self._symbols: dict[str, Symbol] = {}

    def lookup_current(self, name: str) -> Optional[Symbol]:
        """Find ``name`` in this scope only."""
        return self._symbols.get(name)

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find ``name`` here or in the nearest enclosing scope that has it."""
        scope: Optional[Scope] = self
        while scope is not None:
            symbol = scope._symbols.get(name)
            if symbol is not None:
                return symbol
            scope = scope.parent
        return None

    def declare(self, symbol: Symbol) -> bool:
        """Add ``symbol``; return False, leaving the scope unchanged, if the name is taken here."""
        if symbol.name in self._symbols:
            return False
        self._symbols[symbol.name] = symbol
        return True

    def __iter__(self) -> Iterator[Symbol]:
        """Iterate over this scope's own symbols in declaration order."""
        return iter(list(self._symbols.values()))

    def __contains__(self, name: object) -> bool:
        """Whether ``name`` is declared in this scope itself."""
        return name in self._symbols