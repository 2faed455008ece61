"""Syntax tree nodes for the language front end."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Iterator, Optional


class TypeNameKind(enum.Enum):
    """The kind of a named type in source code."""

    INT = "int"
    FLOAT = "float"
    CHAR = "char"
    BOOL = "bool"
    VOID = "void"
    ARRAY = "array"
    CUSTOM = "custom"


class BinaryOp(enum.Enum):
    """Binary operators, valued by their source spelling."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    EQ = "=="
    NEQ = "!="
    AND = "&&"
    OR = "||"


class UnaryOp(enum.Enum):
    """Unary operators, valued by their source spelling."""

    NEGATE = "-"
    NOT = "!"
    ADDRESS_OF = "&"
    DEREF = "*"


class AssignOp(enum.Enum):
    """Assignment operators, valued by their source spelling."""

    SET = "="
    ADD = "+="
    SUB = "-="


@dataclass
class Node:
    """Base of every syntax tree node; carries its source position."""

    line: int = field(default=0, kw_only=True)
    column: int = field(default=0, kw_only=True)

    def children(self) -> Iterator[Node]:
        """Yield the direct child nodes in field order, skipping absent ones."""
        for spec in fields(self):
            value = getattr(self, spec.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, (list, tuple)):
                yield from (item for item in value if isinstance(item, Node))


@dataclass
class Program(Node):
    items: list[Node] = field(default_factory=list)


@dataclass
class Block(Node):
    items: list[Node] = field(default_factory=list)


@dataclass
class VarDecl(Node):
    name: str
    declared_type: Optional[Node] = None
    initializer: Optional[Node] = None


@dataclass
class Param(Node):
    name: str
    declared_type: Optional[Node] = None


@dataclass
class FuncDecl(Node):
    name: str
    params: list[Param] = field(default_factory=list)
    return_type: Optional[Node] = None
    body: Optional[Node] = None
    is_extern: bool = False


@dataclass
class If(Node):
    condition: Optional[Node]
    then_branch: Optional[Node] = None
    else_branch: Optional[Node] = None


@dataclass
class While(Node):
    condition: Optional[Node]
    body: Optional[Node] = None


@dataclass
class For(Node):
    init: Optional[Node] = None
    condition: Optional[Node] = None
    update: Optional[Node] = None
    body: Optional[Node] = None


@dataclass
class Return(Node):
    value: Optional[Node] = None


@dataclass
class Break(Node):
    pass


@dataclass
class Continue(Node):
    pass


@dataclass
class ExprStmt(Node):
    expression: Optional[Node]


@dataclass
class Assign(Node):
    op: AssignOp
    target: Node
    value: Node


@dataclass
class Binary(Node):
    op: BinaryOp
    left: Node
    right: Node


@dataclass
class Unary(Node):
    op: UnaryOp
    operand: Node


@dataclass
class Call(Node):
    callee: Node
    args: list[Node] = field(default_factory=list)


@dataclass
class ArrayAccess(Node):
    base: Node
    indices: list[Node] = field(default_factory=list)


@dataclass
class ArrayLiteral(Node):
    elements: list[Node] = field(default_factory=list)


@dataclass
class Identifier(Node):
    name: str


@dataclass
class IntLiteral(Node):
    value: int


@dataclass
class FloatLiteral(Node):
    value: float


@dataclass
class CharLiteral(Node):
    value: str


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class BoolLiteral(Node):
    value: bool


@dataclass
class TypeName(Node):
    kind: TypeNameKind
    name: str


@dataclass
class TypeArray(Node):
    element_type: Optional[Node]
    size_expr: Optional[Node] = None


@dataclass
class TypePointer(Node):
    target_type: Optional[Node]


def walk(node: Optional[Node]) -> Iterator[Node]:
    """Yield ``node`` and all its descendants in pre-order."""
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(current.children())))