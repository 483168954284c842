import pytest
from hypothesis import given, strategies as st

from scrap.ast.nodes import (
    BinaryExprNode, BoolNode, CallNode, CharNode, FloatNode, FunctionExprNode, FunctionNode,
    IdentifierNode, IfNode, IntegerNode, LiteralArrayNode, LiteralObjectNode, ModuleAccessNode,
    ModuleNode, ObjectAccessNode, ObjectDestructuringNode, ReassignmentNode, StringNode,
    UndefinedNode, VariableNode,
)
from scrap.errors import ScrapSyntaxError
from scrap.reader import Parser, lex
from scrap.types.functions import Param


def kinds(source):
    return [(t.kind, t.value) for t in lex(source)]


def expr(source):
    return Parser(source).parse_expression()


@pytest.mark.parametrize(
    "source, expected",
    [
        ("a", [("name", "a")]),
        ("fn main", [("keyword", "fn"), ("name", "main")]),
        ("42 3.14", [("integer", "42"), ("float", "3.14")]),
        ("0xFF", [("integer", "255")]),
        ('"hi\\n"', [("string", "hi\n")]),
        ("'c'", [("char", "c")]),
        ("std::print", [("name", "std"), ("op", "::"), ("name", "print")]),
        ("...rest", [("op", "..."), ("name", "rest")]),
        ("a == b != c", [("name", "a"), ("op", "=="), ("name", "b"), ("op", "!="), ("name", "c")]),
        ("x // trailing\n y", [("name", "x"), ("name", "y")]),
        ("x /* a\n b */ y", [("name", "x"), ("name", "y")]),
        ("{ a: 1 }", [("punct", "{"), ("name", "a"), ("punct", ":"), ("integer", "1"), ("punct", "}")]),
    ],
)
def test_lex(source, expected):
    assert kinds(source) == expected


def test_lex_tracks_lines_and_columns():
    tokens = list(lex("fn\n  main"))
    assert (tokens[1].line, tokens[1].column) == (2, 3)


@pytest.mark.parametrize("source", ["#", "/* never closed", '"\\q"'])
def test_lex_errors(source):
    with pytest.raises(ScrapSyntaxError):
        list(lex(source))


@given(st.integers(min_value=0, max_value=10**12))
def test_integer_literals(n):
    assert expr(str(n)) == IntegerNode(n)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("1", IntegerNode(1)),
        ("-1", IntegerNode(-1)),
        ("2.5", FloatNode(2.5)),
        ('"s"', StringNode("s")),
        ("'c'", CharNode("c")),
        ("true", BoolNode(True)),
        ("undefined", UndefinedNode()),
        ("x", IdentifierNode("x")),
        ("1 + 2 * 3", BinaryExprNode("+", IntegerNode(1), BinaryExprNode("*", IntegerNode(2), IntegerNode(3)))),
        ("1 - 2 - 3", BinaryExprNode("-", BinaryExprNode("-", IntegerNode(1), IntegerNode(2)), IntegerNode(3))),
        ("a == b < c", BinaryExprNode("==", IdentifierNode("a"), BinaryExprNode("<", IdentifierNode("b"), IdentifierNode("c")))),
        ("-x", BinaryExprNode("-", IntegerNode(0), IdentifierNode("x"))),
        ("f(1, x)", CallNode(IdentifierNode("f"), [IntegerNode(1), IdentifierNode("x")])),
        ("o.a.b", ObjectAccessNode(ObjectAccessNode(IdentifierNode("o"), "a"), "b")),
        ("std::print", ModuleAccessNode(IdentifierNode("std"), "print")),
        ("a::b::c", ModuleAccessNode(ModuleAccessNode(IdentifierNode("a"), "b"), "c")),
        ("x = y = 1", ReassignmentNode(IdentifierNode("x"), ReassignmentNode(IdentifierNode("y"), IntegerNode(1)))),
        ("o.k = 1", ReassignmentNode(ObjectAccessNode(IdentifierNode("o"), "k"), IntegerNode(1))),
        ("[1, 2,]", LiteralArrayNode([IntegerNode(1), IntegerNode(2)])),
        ('{ a: 1, "b c": 2 }', LiteralObjectNode([("a", IntegerNode(1)), ("b c", IntegerNode(2))])),
        ("fn (x) = x", FunctionExprNode([Param("x")], [], IdentifierNode("x"))),
        ("x instanceof Object", BinaryExprNode("instanceof", IdentifierNode("x"), IdentifierNode("Object"))),
    ],
)
def test_parse_expression(source, expected):
    assert expr(source) == expected


def test_parse_function_declaration_with_block_body():
    node = Parser("export fn f(a, ...rest) { const b = a; return b }").parse_root()
    assert node == FunctionNode(
        "f",
        [Param("a"), Param("rest", True)],
        [VariableNode("b", True, IdentifierNode("a"))],
        IdentifierNode("b"),
        is_exported=True,
    )


def test_function_without_return_yields_undefined():
    node = Parser("fn f() { g() }").parse_root()
    assert node.return_value == UndefinedNode()
    assert node.body == [CallNode(IdentifierNode("g"), [])]


def test_parse_module_and_variables():
    nodes = list(Parser("module m { export const a = 1; var b = 2 }\nconst c = 3").parse_all())
    assert nodes == [
        ModuleNode("m", [VariableNode("a", True, IntegerNode(1), True), VariableNode("b", False, IntegerNode(2))]),
        VariableNode("c", True, IntegerNode(3)),
    ]


def test_parse_if_else_chain_and_destructuring():
    node = Parser("fn f(o) { const { a, b } = o; if a { b = 1 } else if b { b = 2 } else { b = 3 } }").parse_root()
    destructure, branch = node.body
    assert destructure == ObjectDestructuringNode(["a", "b"], True, IdentifierNode("o"))
    assert isinstance(branch, IfNode)
    assert isinstance(branch.else_body[0], IfNode)
    assert branch.else_body[0].else_body == [ReassignmentNode(IdentifierNode("b"), IntegerNode(3))]


def test_nodes_keep_source_lines():
    node = Parser("\n\nfn f() = 1").parse_root()
    assert node.line == 3


@pytest.mark.parametrize(
    "source, message",
    [
        ("fn f() { return 1; g() }", "'return' must be the last statement"),
        ("fn f(...a, b) = 1", "rest parameter must be the last"),
        ("fn f(a, a) = 1", "Duplicate parameter 'a'"),
        ("const { a } = o", "Destructuring is only allowed inside function bodies"),
        ("f()", "Expected a declaration"),
        ("fn f() = 1 = 2", "Invalid assignment target"),
        ("fn f() { export const a = 1 }", "'export' is only allowed at module level"),
        ("fn f() {", "Unexpected end of input"),
    ],
)
def test_syntax_errors(source, message):
    with pytest.raises(ScrapSyntaxError, match=message):
        list(Parser(source).parse_all())


def test_syntax_error_reports_position():
    with pytest.raises(ScrapSyntaxError) as info:
        list(Parser("fn f() = 1\nfn g( = 2").parse_all())
    assert info.value.line == 2
