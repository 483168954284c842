"""
  Scrap parser

- Recursive descent over the token stream produced by scrap.reader.lexer
- Binary expressions by precedence climbing over BINARY_OPERATORS_PRECEDENCE
- Streaming: `parse_root` yields one top-level declaration per call, so the
  evaluator can interleave parsing and evaluation
"""

from __future__ import annotations

from typing import Iterator, Optional

from scrap.ast.nodes import (
    BINARY_OPERATORS_PRECEDENCE,
    BinaryExprNode,
    BoolNode,
    CallNode,
    CharNode,
    EntityNode,
    FloatNode,
    FunctionExprNode,
    FunctionNode,
    IdentifierNode,
    IfNode,
    Instruction,
    IntegerNode,
    LiteralArrayNode,
    LiteralObjectNode,
    ModuleAccessNode,
    ModuleNode,
    ObjectAccessNode,
    ObjectDestructuringNode,
    ReassignmentNode,
    StringNode,
    UndefinedNode,
    ValueNode,
    VariableNode,
)
from scrap.errors import ScrapSyntaxError
from scrap.reader.lexer import Token, lex
from scrap.types.functions import Param


class Parser:
    def __init__(self, source: str):
        self.tokens: Iterator[Token] = lex(source)
        self.buffer: list[Token] = []
        self.last: Optional[Token] = None

    # ------------------------
    # Token stream
    # ------------------------
    def peek(self, offset: int = 0) -> Optional[Token]:
        while len(self.buffer) <= offset:
            tok = next(self.tokens, None)
            if tok is None:
                return None
            self.buffer.append(tok)
        return self.buffer[offset]

    def advance(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise self.error("Unexpected end of input")
        self.last = self.buffer.pop(0)
        return tok

    def check(self, kind: str, value: str | None = None, offset: int = 0) -> bool:
        tok = self.peek(offset)
        return tok is not None and tok.kind == kind and (value is None or tok.value == value)

    def accept(self, kind: str, value: str | None = None) -> Optional[Token]:
        if self.check(kind, value):
            return self.advance()
        return None

    def expect(self, kind: str, value: str | None = None, what: str | None = None) -> Token:
        if self.check(kind, value):
            return self.advance()
        tok = self.peek()
        wanted = what or repr(value or kind)
        found = "end of input" if tok is None else repr(tok.value)
        raise self.error(f"Expected {wanted}, found {found}")

    def error(self, message: str) -> ScrapSyntaxError:
        tok = self.peek() or self.last
        if tok is None:
            return ScrapSyntaxError(message)
        return ScrapSyntaxError(message, tok.line, tok.column)

    @property
    def has_finished(self) -> bool:
        return self.peek() is None

    # ------------------------
    # Declarations
    # ------------------------
    def parse_root(self) -> EntityNode:
        """Parse the next top-level declaration."""
        node = self.parse_declaration()
        self.accept("punct", ";")
        return node

    def parse_all(self) -> Iterator[EntityNode]:
        while not self.has_finished:
            yield self.parse_root()

    def parse_declaration(self) -> EntityNode:
        is_exported = self.accept("keyword", "export") is not None
        if self.check("keyword", "fn"):
            return self.parse_function_decl(is_exported)
        if self.check("keyword", "const") or self.check("keyword", "var"):
            if self.check("punct", "{", offset=1):
                raise self.error("Destructuring is only allowed inside function bodies")
            return self.parse_variable_decl(is_exported)
        if self.check("keyword", "module"):
            return self.parse_module(is_exported)
        raise self.error("Expected a declaration (fn, const, var or module)")

    def parse_function_decl(self, is_exported: bool = False) -> FunctionNode:
        line = self.expect("keyword", "fn").line
        name = self.expect("name", what="function name").value
        params = self.parse_params()
        body, return_value = self.parse_function_body()
        return FunctionNode(name, params, body, return_value, is_exported, line=line)

    def parse_params(self) -> list[Param]:
        self.expect("punct", "(")
        params: list[Param] = []
        while not self.accept("punct", ")"):
            is_rest = self.accept("op", "...") is not None
            tok = self.expect("name", what="parameter name")
            if any(p.name == tok.value for p in params):
                raise ScrapSyntaxError(f"Duplicate parameter '{tok.value}'", tok.line, tok.column)
            params.append(Param(tok.value, is_rest))
            if is_rest and not self.check("punct", ")"):
                raise self.error("A rest parameter must be the last parameter")
            if not self.check("punct", ")"):
                self.expect("punct", ",")
        return params

    def parse_function_body(self) -> tuple[list[Instruction], ValueNode]:
        if self.accept("op", "="):
            return [], self.parse_expression()

        self.expect("punct", "{", what="function body")
        body: list[Instruction] = []
        return_value: ValueNode = UndefinedNode()
        while not self.accept("punct", "}"):
            if self.check("keyword", "return"):
                return_value = self.parse_return()
                if not self.accept("punct", "}"):
                    raise self.error("'return' must be the last statement of a function body")
                break
            body.append(self.parse_instruction())
        return body, return_value

    def parse_return(self) -> ValueNode:
        self.expect("keyword", "return")
        if self.check("punct", "}") or self.check("punct", ";"):
            value: ValueNode = UndefinedNode()
        else:
            value = self.parse_expression()
        self.accept("punct", ";")
        return value

    def parse_variable_decl(self, is_exported: bool = False) -> VariableNode:
        tok = self.advance()  # const | var
        name = self.expect("name", what="variable name").value
        self.expect("op", "=")
        value = self.parse_expression()
        return VariableNode(name, tok.value == "const", value, is_exported, line=tok.line)

    def parse_destructuring(self) -> ObjectDestructuringNode:
        tok = self.advance()  # const | var
        self.expect("punct", "{")
        names: list[str] = []
        while not self.accept("punct", "}"):
            names.append(self.expect("name", what="property name").value)
            if not self.check("punct", "}"):
                self.expect("punct", ",")
        self.expect("op", "=")
        source = self.parse_expression()
        return ObjectDestructuringNode(names, tok.value == "const", source, line=tok.line)

    def parse_module(self, is_exported: bool = False) -> ModuleNode:
        line = self.expect("keyword", "module").line
        name = self.expect("name", what="module name").value
        self.expect("punct", "{")
        body: list[EntityNode] = []
        while not self.accept("punct", "}"):
            if self.has_finished:
                raise self.error(f"Unterminated module '{name}'")
            body.append(self.parse_declaration())
            self.accept("punct", ";")
        return ModuleNode(name, body, is_exported, line=line)

    # ------------------------
    # Statements
    # ------------------------
    def parse_instruction(self) -> Instruction:
        node: Instruction
        if self.check("keyword", "const") or self.check("keyword", "var"):
            if self.check("punct", "{", offset=1):
                node = self.parse_destructuring()
            else:
                node = self.parse_variable_decl()
        elif self.check("keyword", "fn") and self.check("name", offset=1):
            node = self.parse_function_decl()
        elif self.check("keyword", "module"):
            node = self.parse_module()
        elif self.check("keyword", "if"):
            node = self.parse_if()
        elif self.check("keyword", "export"):
            raise self.error("'export' is only allowed at module level")
        elif self.check("keyword", "return"):
            raise self.error("'return' must be the last statement of a function body")
        else:
            node = self.parse_expression()
        self.accept("punct", ";")
        return node

    def parse_block(self) -> list[Instruction]:
        self.expect("punct", "{", what="block")
        body: list[Instruction] = []
        while not self.accept("punct", "}"):
            if self.has_finished:
                raise self.error("Unterminated block")
            body.append(self.parse_instruction())
        return body

    def parse_if(self) -> IfNode:
        line = self.expect("keyword", "if").line
        condition = self.parse_expression()
        body = self.parse_block()
        else_body = None
        if self.accept("keyword", "else"):
            if self.check("keyword", "if"):
                else_body = [self.parse_if()]
            else:
                else_body = self.parse_block()
        return IfNode(condition, body, else_body, line=line)

    # ------------------------
    # Expressions
    # ------------------------
    def parse_expression(self) -> ValueNode:
        left = self.parse_binary(1)
        if self.check("op", "="):
            if not isinstance(left, (IdentifierNode, ObjectAccessNode)):
                raise self.error("Invalid assignment target")
            line = self.advance().line
            return ReassignmentNode(left, self.parse_expression(), line=line)
        return left

    def binary_operator(self) -> Optional[str]:
        tok = self.peek()
        if tok is None or tok.kind not in ("op", "keyword"):
            return None
        return tok.value if tok.value in BINARY_OPERATORS_PRECEDENCE else None

    def parse_binary(self, min_precedence: int) -> ValueNode:
        left = self.parse_unary()
        while (op := self.binary_operator()) is not None:
            precedence = BINARY_OPERATORS_PRECEDENCE[op]
            if precedence < min_precedence:
                break
            line = self.advance().line
            right = self.parse_binary(precedence + 1)
            left = BinaryExprNode(op, left, right, line=line)
        return left

    def parse_unary(self) -> ValueNode:
        if self.check("op", "-"):
            line = self.advance().line
            if self.check("integer"):
                return self.parse_postfix(IntegerNode(-int(self.advance().value), line=line))
            if self.check("float"):
                return self.parse_postfix(FloatNode(-float(self.advance().value), line=line))
            return BinaryExprNode("-", IntegerNode(0, line=line), self.parse_unary(), line=line)
        return self.parse_postfix(self.parse_primary())

    def parse_postfix(self, node: ValueNode) -> ValueNode:
        while True:
            if self.check("punct", "("):
                line = self.peek().line
                node = CallNode(node, self.parse_args(), line=line)
            elif self.check("punct", "."):
                line = self.advance().line
                tok = self.peek()
                if tok is None or tok.kind not in ("name", "keyword"):
                    raise self.error("Expected a property name after '.'")
                node = ObjectAccessNode(node, self.advance().value, line=line)
            elif self.check("op", "::"):
                if not isinstance(node, (IdentifierNode, ModuleAccessNode)):
                    raise self.error("'::' must follow a module name")
                line = self.advance().line
                member = self.expect("name", what="module member").value
                node = ModuleAccessNode(node, member, line=line)
            else:
                return node

    def parse_args(self) -> list[ValueNode]:
        self.expect("punct", "(")
        args: list[ValueNode] = []
        while not self.accept("punct", ")"):
            args.append(self.parse_expression())
            if not self.check("punct", ")"):
                self.expect("punct", ",")
        return args

    def parse_primary(self) -> ValueNode:
        tok = self.peek()
        if tok is None:
            raise self.error("Unexpected end of input")

        if tok.kind == "integer":
            self.advance()
            return IntegerNode(int(tok.value), line=tok.line)
        if tok.kind == "float":
            self.advance()
            return FloatNode(float(tok.value), line=tok.line)
        if tok.kind == "string":
            self.advance()
            return StringNode(tok.value, line=tok.line)
        if tok.kind == "char":
            self.advance()
            return CharNode(tok.value, line=tok.line)
        if tok.kind == "name":
            self.advance()
            return IdentifierNode(tok.value, line=tok.line)

        if tok.kind == "keyword":
            if tok.value in ("true", "false"):
                self.advance()
                return BoolNode(tok.value == "true", line=tok.line)
            if tok.value == "undefined":
                self.advance()
                return UndefinedNode(line=tok.line)
            if tok.value == "fn":
                return self.parse_function_expr()

        if tok.kind == "punct":
            if tok.value == "(":
                self.advance()
                node = self.parse_expression()
                self.expect("punct", ")")
                return node
            if tok.value == "{":
                return self.parse_object_literal()
            if tok.value == "[":
                return self.parse_array_literal()

        raise self.error(f"Unexpected token {tok.value!r}")

    def parse_function_expr(self) -> FunctionExprNode:
        line = self.expect("keyword", "fn").line
        name = self.accept("name")
        params = self.parse_params()
        body, return_value = self.parse_function_body()
        return FunctionExprNode(params, body, return_value, name.value if name else "anonymous", line=line)

    def parse_object_literal(self) -> LiteralObjectNode:
        line = self.expect("punct", "{").line
        pairs: list[tuple[str, ValueNode]] = []
        while not self.accept("punct", "}"):
            tok = self.peek()
            if tok is None or tok.kind not in ("name", "keyword", "string"):
                raise self.error("Expected a property key")
            key = self.advance().value
            self.expect("punct", ":")
            pairs.append((key, self.parse_expression()))
            if not self.check("punct", "}"):
                self.expect("punct", ",")
        return LiteralObjectNode(pairs, line=line)

    def parse_array_literal(self) -> LiteralArrayNode:
        line = self.expect("punct", "[").line
        elements: list[ValueNode] = []
        while not self.accept("punct", "]"):
            elements.append(self.parse_expression())
            if not self.check("punct", "]"):
                self.expect("punct", ",")
        return LiteralArrayNode(elements, line=line)
