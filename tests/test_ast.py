from pocsema.ast import (
    Assign,
    AssignOp,
    Binary,
    BinaryOp,
    Block,
    Break,
    Call,
    FuncDecl,
    Identifier,
    If,
    IntLiteral,
    Param,
    Program,
    Return,
    TypeName,
    TypeNameKind,
    Unary,
    UnaryOp,
    walk,
)


def test_binary_children_are_left_then_right():
    left = IntLiteral(1)
    right = IntLiteral(2)
    node = Binary(BinaryOp.ADD, left, right)
    children = list(node.children())
    assert [id(c) for c in children] == [id(left), id(right)]


def test_call_children_include_callee_and_args():
    callee = Identifier("print")
    arg = Identifier("x")
    node = Call(callee, [arg])
    children = list(node.children())
    assert children[0] is callee
    assert children[1] is arg


def test_if_without_else_skips_missing_branch():
    cond = Identifier("flag")
    then = Block([])
    node = If(cond, then)
    children = list(node.children())
    assert [id(c) for c in children] == [id(cond), id(then)]


def test_leaves_have_no_children():
    assert list(IntLiteral(7).children()) == []
    assert list(Break().children()) == []


def test_positions_are_keyword_only_and_kept():
    node = IntLiteral(5, line=3, column=4)
    assert (node.value, node.line, node.column) == (5, 3, 4)
    assert IntLiteral(5).line == 0


def test_walk_is_preorder():
    ret_value = IntLiteral(1)
    body = Block([Return(ret_value)])
    func = FuncDecl(
        "main",
        [Param("a", TypeName(TypeNameKind.INT, "int"))],
        TypeName(TypeNameKind.INT, "int"),
        body,
    )
    program = Program([func])
    kinds = [type(n) for n in walk(program)]
    assert kinds == [Program, FuncDecl, Param, TypeName, TypeName, Block, Return, IntLiteral]


def test_walk_of_none_yields_nothing():
    assert list(walk(None)) == []


def test_walk_visits_every_node_once():
    target = Identifier("x")
    value = Unary(UnaryOp.NEGATE, IntLiteral(1))
    assign = Assign(AssignOp.SET, target, value)
    visited = list(walk(assign))
    assert len({id(n) for n in visited}) == len(visited)
    assert visited[0] is assign
    assert any(n is target for n in visited)


def test_operators_are_looked_up_by_source_spelling():
    add = Binary(BinaryOp("+"), IntLiteral(1), IntLiteral(2))
    div = Binary(BinaryOp("/"), IntLiteral(4), IntLiteral(2))
    negation = Unary(UnaryOp("!"), Identifier("flag"))
    assert add.op is BinaryOp.ADD
    assert div.op is BinaryOp.DIV
    assert negation.op is UnaryOp.NOT