"""Semantic types and the rules for comparing them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from . import ast


class TypeKind(enum.Enum):
    """Kinds of semantic type, valued by their display name."""

    INT = "int"
    FLOAT = "float"
    CHAR = "char"
    BOOL = "bool"
    VOID = "void"
    ARRAY = "array"
    POINTER = "pointer"
    ERROR = "error"


@dataclass(frozen=True)
class SemanticType:
    """A type; arrays and pointers carry an element type, arrays an optional size."""

    kind: TypeKind
    element_type: Optional[SemanticType] = None
    array_size: Optional[int] = None

    def matches(self, other: Optional[SemanticType]) -> bool:
        """Structural type equality as the checker understands it."""
        if other is None or self.kind is not other.kind:
            return False
        if self.kind not in (TypeKind.ARRAY, TypeKind.POINTER):
            return True
        if self.kind is TypeKind.ARRAY and self.array_size != other.array_size:
            return False
        if self.element_type is None:
            return False
        return self.element_type.matches(other.element_type)

    def name(self) -> str:
        return self.kind.value

    def is_numeric(self) -> bool:
        return self.kind in (TypeKind.INT, TypeKind.FLOAT)

    def is_bool(self) -> bool:
        return self.kind is TypeKind.BOOL

    def is_error(self) -> bool:
        return self.kind is TypeKind.ERROR


def primitive(kind: TypeKind) -> SemanticType:
    return SemanticType(kind)


def pointer_to(element_type: Optional[SemanticType]) -> SemanticType:
    return SemanticType(TypeKind.POINTER, element_type)


def array_of(element_type: Optional[SemanticType], size: Optional[int] = None) -> SemanticType:
    return SemanticType(TypeKind.ARRAY, element_type, size)


_NAMED_KINDS = {
    ast.TypeNameKind.INT: TypeKind.INT,
    ast.TypeNameKind.FLOAT: TypeKind.FLOAT,
    ast.TypeNameKind.CHAR: TypeKind.CHAR,
    ast.TypeNameKind.BOOL: TypeKind.BOOL,
    ast.TypeNameKind.VOID: TypeKind.VOID,
}


def type_from_ast(node: Optional[ast.Node]) -> SemanticType:
    """Resolve a type node of the syntax tree; anything unknown becomes the error type."""
    if isinstance(node, ast.TypePointer):
        return pointer_to(type_from_ast(node.target_type))

    if isinstance(node, ast.TypeArray):
        size = None
        if isinstance(node.size_expr, ast.IntLiteral):
            size = int(node.size_expr.value)
        element_node = node.element_type
        if (
            node.size_expr is not None
            and isinstance(element_node, ast.TypeArray)
            and element_node.size_expr is None
        ):
            element_node = element_node.element_type
        return array_of(type_from_ast(element_node), size)

    if isinstance(node, ast.TypeName):
        if node.kind is ast.TypeNameKind.ARRAY:
            return array_of(primitive(TypeKind.ERROR))
        return primitive(_NAMED_KINDS.get(node.kind, TypeKind.ERROR))

    return primitive(TypeKind.ERROR)


def is_compatible(expected: Optional[SemanticType], actual: Optional[SemanticType]) -> bool:
    """Whether a value of ``actual`` type may be stored where ``expected`` is required."""
    if expected is None or actual is None:
        return False
    if expected.matches(actual):
        return True
    if expected.kind is TypeKind.CHAR and actual.kind is TypeKind.INT:
        return True
    if expected.kind is not TypeKind.ARRAY or actual.kind is not TypeKind.ARRAY:
        return False
    if (
        expected.array_size is not None
        and actual.array_size is not None
        and expected.array_size != actual.array_size
    ):
        return False
    return is_compatible(expected.element_type, actual.element_type)