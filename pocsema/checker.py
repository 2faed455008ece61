"""Type checking of expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import ast
from .errors import ErrorKind, SemanticError
from .scope import Scope, SymbolKind
from .types import (
    SemanticType,
    TypeKind,
    array_of,
    is_compatible,
    pointer_to,
    primitive,
)


@dataclass
class FunctionContext:
    """The function whose body is being checked."""

    function_name: str
    return_type: SemanticType


def _error_type() -> SemanticType:
    return primitive(TypeKind.ERROR)


def _type_name(type_: Optional[SemanticType]) -> str:
    return "unknown" if type_ is None else type_.name()


def _is_non_void_pointer(type_: Optional[SemanticType]) -> bool:
    return (
        type_ is not None
        and type_.kind is TypeKind.POINTER
        and type_.element_type is not None
        and type_.element_type.kind is not TypeKind.VOID
    )


def _is_ordered_comparable(type_: Optional[SemanticType]) -> bool:
    return type_ is not None and (type_.is_numeric() or type_.kind is TypeKind.CHAR)


def _is_deref(node: Optional[ast.Node]) -> bool:
    return isinstance(node, ast.Unary) and node.op is ast.UnaryOp.DEREF


_ARITHMETIC = {ast.BinaryOp.ADD, ast.BinaryOp.SUB, ast.BinaryOp.MUL, ast.BinaryOp.DIV}
_ORDERING = {ast.BinaryOp.GT, ast.BinaryOp.LT, ast.BinaryOp.GTE, ast.BinaryOp.LTE}
_EQUALITY = {ast.BinaryOp.EQ, ast.BinaryOp.NEQ}
_LOGICAL = {ast.BinaryOp.AND, ast.BinaryOp.OR}


class ExpressionChecker:
    """Computes expression types and records the diagnostics found on the way."""

    def __init__(self, errors: Optional[list[SemanticError]] = None) -> None:
        self.errors: list[SemanticError] = [] if errors is None else errors

    def report(self, node: Optional[ast.Node], kind: ErrorKind, message: str) -> None:
        """Record a diagnostic at the position of ``node`` (0:0 when absent)."""
        line = node.line if node is not None else 0
        column = node.column if node is not None else 0
        self.errors.append(SemanticError(kind, line, column, message))

    def check(self, node: Optional[ast.Node], scope: Scope) -> SemanticType:
        """Return the type of expression ``node``; failures yield the error type."""
        if node is None:
            return _error_type()
        if isinstance(node, ast.Identifier):
            return self._check_identifier(node, scope)
        if isinstance(node, ast.IntLiteral):
            return primitive(TypeKind.INT)
        if isinstance(node, ast.FloatLiteral):
            return primitive(TypeKind.FLOAT)
        if isinstance(node, ast.CharLiteral):
            return primitive(TypeKind.CHAR)
        if isinstance(node, ast.StringLiteral):
            return pointer_to(primitive(TypeKind.CHAR))
        if isinstance(node, ast.BoolLiteral):
            return primitive(TypeKind.BOOL)
        if isinstance(node, ast.ArrayLiteral):
            return self._check_array_literal(node, scope)
        if isinstance(node, ast.ArrayAccess):
            return self._check_array_access(node, scope)
        if isinstance(node, ast.Binary):
            return self._check_binary(node, scope)
        if isinstance(node, ast.Unary):
            return self._check_unary(node, scope)
        if isinstance(node, ast.Call):
            return self._check_call(node, scope)
        if isinstance(node, ast.Assign):
            return self._check_assign(node, scope)
        return _error_type()

    def check_assignment_target(self, node: Optional[ast.Node], scope: Scope) -> SemanticType:
        """Return the type of the storage location that ``node`` names."""
        if isinstance(node, ast.Identifier):
            symbol = scope.lookup(node.name)
            if symbol is not None and symbol.kind is SymbolKind.VARIABLE:
                return symbol.type
            return _error_type()
        if isinstance(node, ast.ArrayAccess):
            return self._check_array_access(node, scope)
        if _is_deref(node):
            pointer_type = self.check(node.operand, scope)
            if pointer_type.is_error():
                return pointer_type
            if pointer_type.kind is not TypeKind.POINTER or pointer_type.element_type is None:
                self.report(node, ErrorKind.TYPE, "cannot dereference non-pointer value")
                return _error_type()
            return pointer_type.element_type
        return _error_type()

    def _check_identifier(self, node: ast.Identifier, scope: Scope) -> SemanticType:
        symbol = scope.lookup(node.name)
        if symbol is None or symbol.kind is not SymbolKind.VARIABLE:
            self.report(node, ErrorKind.NAME, f"use of undeclared variable '{node.name}'")
            return _error_type()
        return symbol.type

    def _check_assign(self, node: ast.Assign, scope: Scope) -> SemanticType:
        target_type = self.check_assignment_target(node.target, scope)
        value_type = self.check(node.value, scope)
        if (
            not target_type.is_error()
            and not value_type.is_error()
            and not is_compatible(target_type, value_type)
        ):
            if _is_deref(node.target):
                self.report(
                    node,
                    ErrorKind.TYPE,
                    f"assignment expects {_type_name(target_type)} but got {_type_name(value_type)}",
                )
            else:
                self.report(node, ErrorKind.TYPE, "assignment types are incompatible")
        return target_type

    def _check_binary(self, node: ast.Binary, scope: Scope) -> SemanticType:
        left = self.check(node.left, scope)
        right = self.check(node.right, scope)
        op = node.op

        if op in _ARITHMETIC:
            if left.is_numeric() and right.is_numeric() and left.matches(right):
                return left
            if (
                op in (ast.BinaryOp.ADD, ast.BinaryOp.SUB)
                and _is_non_void_pointer(left)
                and right.kind is TypeKind.INT
            ):
                return left
            self.report(node, ErrorKind.TYPE, f"operator '{op.value}' requires numeric operands")
            return _error_type()

        if op in _ORDERING:
            if _is_ordered_comparable(left) and _is_ordered_comparable(right) and left.matches(right):
                return primitive(TypeKind.BOOL)
            self.report(node, ErrorKind.TYPE, "comparison requires compatible numeric operands")
            return _error_type()

        if op in _EQUALITY:
            if left.matches(right):
                return primitive(TypeKind.BOOL)
            self.report(node, ErrorKind.TYPE, "comparison requires compatible operands")
            return _error_type()

        if op in _LOGICAL:
            if left.is_bool() and right.is_bool():
                return primitive(TypeKind.BOOL)
            self.report(node, ErrorKind.TYPE, "logical operators require bool operands")
            return _error_type()

        return _error_type()

    def _check_unary(self, node: ast.Unary, scope: Scope) -> SemanticType:
        if node.op is ast.UnaryOp.ADDRESS_OF:
            if not isinstance(node.operand, (ast.Identifier, ast.ArrayAccess)):
                self.report(node, ErrorKind.TYPE, "address-of requires an addressable expression")
                return _error_type()
            operand_type = self.check_assignment_target(node.operand, scope)
            if operand_type.is_error():
                return operand_type
            return pointer_to(operand_type)

        operand_type = self.check(node.operand, scope)

        if node.op is ast.UnaryOp.DEREF:
            if operand_type.kind is not TypeKind.POINTER or operand_type.element_type is None:
                self.report(node, ErrorKind.TYPE, "cannot dereference non-pointer value")
                return _error_type()
            return operand_type.element_type

        if node.op is ast.UnaryOp.NOT:
            if not operand_type.is_bool():
                self.report(node, ErrorKind.TYPE, "operator '!' requires bool operand")
                return _error_type()
            return primitive(TypeKind.BOOL)

        if not operand_type.is_numeric():
            self.report(node, ErrorKind.TYPE, "operator '-' requires numeric operand")
            return _error_type()
        return operand_type

    def _check_array_literal(self, node: ast.ArrayLiteral, scope: Scope) -> SemanticType:
        element_type: Optional[SemanticType] = None
        for element in node.elements:
            current = self.check(element, scope)
            if element_type is None:
                element_type = current
            elif not current.is_error() and not element_type.matches(current):
                self.report(node, ErrorKind.TYPE, "array literal elements must have compatible types")
                element_type = _error_type()
        return array_of(element_type if element_type is not None else _error_type())

    def _check_array_access(self, node: ast.ArrayAccess, scope: Scope) -> SemanticType:
        base_type = self.check(node.base, scope)
        for index in node.indices:
            index_type = self.check(index, scope)
            if not index_type.is_error() and index_type.kind is not TypeKind.INT:
                self.report(index, ErrorKind.TYPE, "array index must be int")
            if base_type.kind is not TypeKind.ARRAY:
                self.report(
                    node,
                    ErrorKind.TYPE,
                    f"cannot index non-array value of type {_type_name(base_type)}",
                )
                return _error_type()
            base_type = base_type.element_type if base_type.element_type is not None else _error_type()
        return base_type

    def _check_call(self, node: ast.Call, scope: Scope) -> SemanticType:
        callee_node = node.callee
        if not isinstance(callee_node, ast.Identifier):
            return _error_type()

        callee = scope.lookup(callee_node.name)
        if callee is None or callee.kind is not SymbolKind.FUNCTION:
            self.report(callee_node, ErrorKind.NAME, f"call to undeclared function '{callee_node.name}'")
            return _error_type()

        if len(node.args) != len(callee.params):
            self.report(
                callee_node,
                ErrorKind.TYPE,
                f"function '{callee.name}' expects {len(callee.params)} arguments "
                f"but got {len(node.args)}",
            )
            return _error_type()

        for position, (arg, expected) in enumerate(zip(node.args, callee.params), start=1):
            arg_type = self.check(arg, scope)
            if not arg_type.is_error() and not is_compatible(expected, arg_type):
                self.report(
                    arg,
                    ErrorKind.TYPE,
                    f"argument {position} of function '{callee.name}' expects "
                    f"{_type_name(expected)} but got {_type_name(arg_type)}",
                )
        return callee.type