"""Syntax tree consumed by the evaluator.

Nodes form three closed families:

- ValueNode:   expressions that produce a Value
- EntityNode:  declarations that produce a named Entity
- ControlNode: statements that steer execution

The evaluator matches on the concrete node classes below; a new node kind must
be added here and to the matching dispatch in scrap.evaluation.evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from scrap.types.functions import Param

# Higher number binds tighter
BINARY_OPERATORS_PRECEDENCE: dict[str, int] = {
    "*": 4,
    "/": 4,
    "%": 4,

    "+": 3,
    "-": 3,

    "<": 2,
    ">": 2,
    "<=": 2,
    ">=": 2,
    "instanceof": 2,
    "in": 2,

    "==": 1,
    "!=": 1,
}


@dataclass
class Node:
    line: int = field(default=0, kw_only=True, compare=False)


class ValueNode(Node):
    pass


class EntityNode(Node):
    pass


class ControlNode(Node):
    pass


Instruction = Union[ValueNode, ControlNode, EntityNode]


# ---------------------------------------------
# Value nodes
# ---------------------------------------------
@dataclass
class FunctionExprNode(ValueNode):
    params: list[Param]
    body: list[Instruction]
    return_value: ValueNode
    name: str = "anonymous"


@dataclass
class ReassignmentNode(ValueNode):
    target: ValueNode  # IdentifierNode or ObjectAccessNode
    value: ValueNode


@dataclass
class ModuleAccessNode(ValueNode):
    module: ValueNode  # IdentifierNode or a nested ModuleAccessNode
    member: str


@dataclass
class ObjectDestructuringNode(ValueNode):
    names: list[str]
    is_const: bool
    source: ValueNode


@dataclass
class ObjectAccessNode(ValueNode):
    target: ValueNode
    member: str


@dataclass
class BinaryExprNode(ValueNode):
    operator: str
    left: ValueNode
    right: ValueNode


@dataclass
class CallNode(ValueNode):
    callee: ValueNode
    args: list[ValueNode]


@dataclass
class IdentifierNode(ValueNode):
    symbol: str


@dataclass
class LiteralObjectNode(ValueNode):
    pairs: list[tuple[str, ValueNode]]


@dataclass
class LiteralArrayNode(ValueNode):
    elements: list[ValueNode]


@dataclass
class StringNode(ValueNode):
    value: str


@dataclass
class IntegerNode(ValueNode):
    value: int


@dataclass
class FloatNode(ValueNode):
    value: float


@dataclass
class CharNode(ValueNode):
    value: str


@dataclass
class BoolNode(ValueNode):
    value: bool


@dataclass
class UndefinedNode(ValueNode):
    pass


# ---------------------------------------------
# Entity nodes
# ---------------------------------------------
@dataclass
class FunctionNode(EntityNode):
    name: str
    params: list[Param]
    body: list[Instruction]
    return_value: ValueNode
    is_exported: bool = False


@dataclass
class ModuleNode(EntityNode):
    name: str
    body: list[EntityNode]
    is_exported: bool = False


@dataclass
class VariableNode(EntityNode):
    name: str
    is_const: bool
    value: ValueNode
    is_exported: bool = False


# ---------------------------------------------
# Control nodes
# ---------------------------------------------
@dataclass
class IfNode(ControlNode):
    condition: ValueNode
    body: list[Instruction]
    else_body: Optional[list[Instruction]] = None
