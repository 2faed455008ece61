"""Diagnostics produced by semantic analysis."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ErrorKind(enum.Enum):
    """Category of a semantic diagnostic."""

    TYPE = "TypeError"
    NAME = "NameError"
    DECLARATION = "DeclarationError"
    DEVELOPER = "DeveloperError"

    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class SemanticError:
    """One diagnostic with its source position."""

    kind: ErrorKind
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.kind.display_name()} at line {self.line}, column {self.column}: {self.message}"