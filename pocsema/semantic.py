"""Semantic analysis: symbol collection and statement validation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from . import ast
from .checker import ExpressionChecker, FunctionContext
from .errors import ErrorKind, SemanticError
from .scope import Scope, Symbol, SymbolKind
from .types import TypeKind, is_compatible, type_from_ast


class Flow(enum.Enum):
    """Whether control can fall out of a statement or always returns."""

    CONTINUES = "continues"
    RETURNS = "returns"


@dataclass
class SemanticResult:
    """Outcome of analysis: the global declarations and every diagnostic found."""

    global_scope: Scope
    errors: list[SemanticError] = field(default_factory=list)

    def ok(self) -> bool:
        """True when analysis found no errors."""
        return not self.errors


def _report(errors: list[SemanticError], node: Optional[ast.Node], kind: ErrorKind, message: str) -> None:
    line = node.line if node is not None else 0
    column = node.column if node is not None else 0
    errors.append(SemanticError(kind, line, column, message))


def _report_duplicate(errors: list[SemanticError], node: ast.Node, name: str) -> None:
    _report(errors, node, ErrorKind.DECLARATION, f"duplicate declaration of '{name}'")


def collect_symbols(node: Optional[ast.Node], scope: Scope, errors: list[SemanticError]) -> None:
    """Declare the names in ``node`` into ``scope``, reporting duplicates into ``errors``.

    Blocks and function bodies get scopes of their own that are discarded afterwards,
    so only top-level names remain in ``scope``.
    """
    if node is None:
        return
    if isinstance(node, ast.Program):
        for item in node.items:
            collect_symbols(item, scope, errors)
    elif isinstance(node, ast.Block):
        block_scope = Scope(scope)
        for item in node.items:
            collect_symbols(item, block_scope, errors)
    elif isinstance(node, ast.VarDecl):
        symbol = Symbol.variable(node.name, type_from_ast(node.declared_type))
        if not scope.declare(symbol):
            _report_duplicate(errors, node, node.name)
    elif isinstance(node, ast.If):
        collect_symbols(node.then_branch, scope, errors)
        collect_symbols(node.else_branch, scope, errors)
    elif isinstance(node, (ast.While, ast.For)):
        collect_symbols(node.body, scope, errors)
    elif isinstance(node, ast.FuncDecl):
        _collect_function(node, scope, errors)


def _collect_function(node: ast.FuncDecl, scope: Scope, errors: list[SemanticError]) -> None:
    symbol = Symbol.function(
        node.name,
        type_from_ast(node.return_type),
        [type_from_ast(param.declared_type) for param in node.params],
    )
    if not scope.declare(symbol):
        _report_duplicate(errors, node, node.name)

    function_scope = Scope(scope)
    for param in node.params:
        param_symbol = Symbol.variable(param.name, type_from_ast(param.declared_type))
        if not function_scope.declare(param_symbol):
            _report_duplicate(errors, param, param.name)

    if not node.is_extern:
        collect_symbols(node.body, function_scope, errors)


def _is_literal_initializer(node: ast.Node) -> bool:
    return isinstance(
        node, (ast.IntLiteral, ast.FloatLiteral, ast.StringLiteral, ast.BoolLiteral)
    )


def _declare_variable(name: str, declared_type: Optional[ast.Node], scope: Scope) -> None:
    if name not in scope:
        scope.declare(Symbol.variable(name, type_from_ast(declared_type)))


@dataclass
class Validator:
    """Walks statements, checking types, returns and loop control."""

    checker: ExpressionChecker = field(default_factory=ExpressionChecker)
    current_function: Optional[FunctionContext] = None
    loop_depth: int = 0

    @property
    def errors(self) -> list[SemanticError]:
        return self.checker.errors

    def validate(self, node: Optional[ast.Node], scope: Scope) -> Flow:
        """Validate ``node`` in ``scope`` and report how control leaves it."""
        if node is None:
            return Flow.CONTINUES
        if isinstance(node, ast.Program):
            for item in node.items:
                if isinstance(item, ast.VarDecl):
                    self._validate_variable(item, scope, require_literal=True)
                else:
                    self.validate(item, scope)
            return Flow.CONTINUES
        if isinstance(node, ast.Block):
            return self._validate_block(node, scope)
        if isinstance(node, ast.VarDecl):
            self._validate_variable(node, scope, require_literal=False)
            return Flow.CONTINUES
        if isinstance(node, ast.ExprStmt):
            self.checker.check(node.expression, scope)
            return Flow.CONTINUES
        if isinstance(node, ast.Assign):
            self.checker.check(node, scope)
            return Flow.CONTINUES
        if isinstance(node, ast.If):
            return self._validate_if(node, scope)
        if isinstance(node, ast.While):
            self._check_condition(node.condition, scope)
            self._validate_loop_body(node.body, scope)
            return Flow.CONTINUES
        if isinstance(node, ast.For):
            self._validate_for(node, scope)
            return Flow.CONTINUES
        if isinstance(node, ast.FuncDecl):
            self._validate_function(node, scope)
            return Flow.CONTINUES
        if isinstance(node, ast.Return):
            self._validate_return(node, scope)
            return Flow.RETURNS
        if isinstance(node, ast.Break):
            if self.loop_depth == 0:
                self.checker.report(node, ErrorKind.DEVELOPER, "break statement outside loop")
            return Flow.CONTINUES
        if isinstance(node, ast.Continue):
            if self.loop_depth == 0:
                self.checker.report(node, ErrorKind.DEVELOPER, "continue statement outside loop")
            return Flow.CONTINUES
        return Flow.CONTINUES

    def _validate_variable(self, node: ast.VarDecl, scope: Scope, require_literal: bool) -> None:
        declared = type_from_ast(node.declared_type)
        initializer = node.initializer
        if initializer is not None:
            if require_literal and not _is_literal_initializer(initializer):
                self.checker.report(
                    node, ErrorKind.TYPE, f"global initializer for '{node.name}' must be a literal"
                )
            else:
                actual = self.checker.check(initializer, scope)
                if not actual.is_error() and not is_compatible(declared, actual):
                    self.checker.report(
                        node,
                        ErrorKind.TYPE,
                        f"cannot initialize variable '{node.name}' of type "
                        f"{declared.name()} with {actual.name()}",
                    )
        _declare_variable(node.name, node.declared_type, scope)

    def _validate_block(self, node: ast.Block, scope: Scope) -> Flow:
        block_scope = Scope(scope)
        flow = Flow.CONTINUES
        for item in node.items:
            if flow is Flow.RETURNS:
                self.checker.report(item, ErrorKind.DEVELOPER, "unreachable code")
                self.validate(item, block_scope)
                continue
            flow = self.validate(item, block_scope)
        return flow

    def _check_condition(self, condition: Optional[ast.Node], scope: Scope) -> None:
        condition_type = self.checker.check(condition, scope)
        if not condition_type.is_error() and not condition_type.is_bool():
            self.checker.report(condition, ErrorKind.TYPE, "condition must be bool")

    def _validate_loop_body(self, body: Optional[ast.Node], scope: Scope) -> None:
        self.loop_depth += 1
        try:
            self.validate(body, scope)
        finally:
            self.loop_depth -= 1

    def _validate_if(self, node: ast.If, scope: Scope) -> Flow:
        self._check_condition(node.condition, scope)
        then_flow = self.validate(node.then_branch, scope)
        if node.else_branch is None:
            return Flow.CONTINUES
        else_flow = self.validate(node.else_branch, scope)
        if then_flow is Flow.RETURNS and else_flow is Flow.RETURNS:
            return Flow.RETURNS
        return Flow.CONTINUES

    def _validate_for(self, node: ast.For, scope: Scope) -> None:
        for_scope = Scope(scope)
        if node.init is not None:
            self.validate(node.init, for_scope)
        if node.condition is not None:
            self._check_condition(node.condition, for_scope)
        if node.update is not None:
            self.checker.check(node.update, for_scope)
        self._validate_loop_body(node.body, for_scope)

    def _validate_function(self, node: ast.FuncDecl, scope: Scope) -> None:
        if node.is_extern:
            return
        function_scope = Scope(scope)
        context = FunctionContext(node.name, type_from_ast(node.return_type))
        previous = self.current_function
        self.current_function = context
        try:
            for param in node.params:
                _declare_variable(param.name, param.declared_type, function_scope)
            flow = self.validate(node.body, function_scope)
            if context.return_type.kind is not TypeKind.VOID and flow is not Flow.RETURNS:
                self.checker.report(
                    node,
                    ErrorKind.TYPE,
                    f"function '{node.name}' with return type "
                    f"{context.return_type.name()} must return a value",
                )
        finally:
            self.current_function = previous

    def _validate_return(self, node: ast.Return, scope: Scope) -> None:
        context = self.current_function
        if context is None:
            self.checker.report(node, ErrorKind.TYPE, "return statement outside function")
            return
        expected = context.return_type
        is_void = expected.kind is TypeKind.VOID

        if node.value is None:
            if not is_void:
                self.checker.report(
                    node,
                    ErrorKind.TYPE,
                    f"function '{context.function_name}' with return type "
                    f"{expected.name()} cannot use empty return",
                )
            return

        actual = self.checker.check(node.value, scope)
        if is_void:
            self.checker.report(
                node,
                ErrorKind.TYPE,
                f"function '{context.function_name}' with return type void cannot return a value",
            )
        elif not actual.is_error() and not expected.matches(actual):
            self.checker.report(
                node,
                ErrorKind.TYPE,
                f"return type of function '{context.function_name}' expects "
                f"{expected.name()} but got {actual.name()}",
            )


def _validation_root(global_scope: Scope) -> Scope:
    root = Scope()
    for symbol in global_scope:
        if symbol.kind is SymbolKind.FUNCTION:
            root.declare(symbol)
    return root


def analyze(program: Optional[ast.Node]) -> SemanticResult:
    """Run symbol collection and validation over ``program``."""
    errors: list[SemanticError] = []
    global_scope = Scope()
    collect_symbols(program, global_scope, errors)
    validator = Validator(ExpressionChecker(errors))
    validator.validate(program, _validation_root(global_scope))
    return SemanticResult(global_scope, errors)