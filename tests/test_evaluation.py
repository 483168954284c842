from dataclasses import dataclass

import pytest

from scrap.ast.nodes import (
    BoolNode, CharNode, ControlNode, EntityNode, FloatNode, IdentifierNode, IntegerNode,
    LiteralArrayNode, LiteralObjectNode, ReassignmentNode, StringNode, UndefinedNode,
    ValueNode, VariableNode,
)
from scrap.errors import (
    ScrapRuntimeError, ScrapTypeError, ScrapUnresolvedReference, ScrapUnsupportedConstruct,
)
from scrap.types.entities import Module, Variable
from scrap.types.environment import Scope
from scrap.types.values import Array, Bool, Char, Float, Integer, Object, String, Undefined


@dataclass
class LoopNode(ControlNode):
    times: int = 0


@dataclass
class MacroNode(ValueNode):
    pass


@dataclass
class ClassNode(EntityNode):
    pass


@pytest.mark.parametrize(
    "node, expected",
    [
        (IntegerNode(7), Integer(7)),
        (FloatNode(0.5), Float(0.5)),
        (StringNode("hey"), String("hey")),
        (CharNode("z"), Char("z")),
        (BoolNode(False), Bool(False)),
        (UndefinedNode(), Undefined),
    ],
)
def test_literals(evaluator, scope, node, expected):
    assert evaluator.compute_value(node, scope) == expected


def test_literal_composites(evaluator, scope):
    obj = evaluator.compute_value(LiteralObjectNode([("a", IntegerNode(1)), ("b", StringNode("x"))]), scope)
    assert isinstance(obj, Object)
    assert obj.get("a") == Integer(1)
    assert obj.prototype is None

    arr = evaluator.compute_value(LiteralArrayNode([IntegerNode(1), IntegerNode(2)]), scope)
    assert isinstance(arr, Array)
    assert arr.value == [Integer(1), Integer(2)]


def test_identifier_copies_primitives(evaluator, scope):
    stored = Integer(3)
    scope.add_entry("n", Variable(False, "n", stored))
    result = evaluator.compute_value(IdentifierNode("n"), scope)
    assert result == stored
    assert result is not stored


def test_identifier_shares_objects(evaluator, scope):
    obj = Object()
    scope.add_entry("o", Variable(True, "o", obj))
    assert evaluator.compute_value(IdentifierNode("o"), scope) is obj


def test_identifier_resolves_through_parent(evaluator, scope):
    scope.add_entry("n", Variable(True, "n", Integer(1)))
    inner = scope.child("inner")
    assert evaluator.compute_value(IdentifierNode("n"), inner) == Integer(1)


def test_unresolved_identifier(evaluator, scope):
    with pytest.raises(ScrapUnresolvedReference, match="'ghost' is not defined"):
        evaluator.compute_value(IdentifierNode("ghost"), scope)


def test_module_is_not_a_value(evaluator, scope):
    scope.add_entry("m", Module("m", scope.child("m")))
    with pytest.raises(ScrapTypeError):
        evaluator.compute_value(IdentifierNode("m"), scope)


def test_reassignment_rebinds_variable(evaluator, scope):
    scope.add_entry("v", Variable(False, "v", Integer(1)))
    result = evaluator.compute_value(ReassignmentNode(IdentifierNode("v"), IntegerNode(2)), scope)
    assert result == Integer(2)
    assert scope.get_reference("v").value == Integer(2)


def test_reassignment_of_constant_fails(evaluator, scope):
    scope.add_entry("c", Variable(True, "c", Integer(1)))
    with pytest.raises(ScrapRuntimeError, match="Cannot reassign constant 'c'"):
        evaluator.compute_value(ReassignmentNode(IdentifierNode("c"), IntegerNode(2)), scope)


def test_reassignment_of_undeclared_name(evaluator, scope):
    with pytest.raises(ScrapUnresolvedReference):
        evaluator.compute_value(ReassignmentNode(IdentifierNode("nope"), IntegerNode(2)), scope)


def test_variable_declaration_builds_entity(evaluator, scope):
    entity = evaluator.compute_entity(VariableNode("x", True, IntegerNode(4), is_exported=True), scope)
    assert isinstance(entity, Variable)
    assert (entity.name, entity.is_const, entity.is_exported) == ("x", True, True)
    assert entity.value == Integer(4)
    # computing an entity does not declare it
    assert scope.get_reference("x") is None


def test_instruction_declares_entities(evaluator, scope):
    evaluator.compute_instruction(VariableNode("x", False, IntegerNode(1)), scope)
    assert scope.get_reference("x").value == Integer(1)
    with pytest.raises(ScrapRuntimeError, match="already defined"):
        evaluator.compute_instruction(VariableNode("x", False, IntegerNode(1)), scope)


def test_unknown_value_node_is_unsupported(evaluator, scope):
    with pytest.raises(ScrapUnsupportedConstruct, match="doesn't support interpreting 'MacroNode'"):
        evaluator.compute_value(MacroNode(), scope)


def test_unknown_entity_node_is_unsupported(evaluator, scope):
    with pytest.raises(ScrapUnsupportedConstruct):
        evaluator.compute_entity(ClassNode(), scope)


def test_unknown_control_node_is_ignored(evaluator, scope):
    assert evaluator.compute_control(LoopNode(3), scope) is None
    evaluator.compute_instruction(LoopNode(1), Scope("other"))
