from __future__ import annotations

from typing import TYPE_CHECKING

from scrap.ast.nodes import ObjectAccessNode, ObjectDestructuringNode, ValueNode
from scrap.errors import ScrapRuntimeError, ScrapTypeError
from scrap.types.entities import Variable
from scrap.types.environment import Scope, add_to_scope
from scrap.types.values import (
    Array, Integer, Object, PropertyDescriptor, String, Undefined, Value, detach,
)

if TYPE_CHECKING:
    from scrap.evaluation.evaluator import Evaluator


def read_member(target: Value, name: str) -> Value:
    if isinstance(target, Object):
        return target.get(name)
    if isinstance(target, (Array, String)) and name == "length":
        return Integer(len(target.value))
    if isinstance(target, Array):
        return Undefined
    raise ScrapTypeError(f"Cannot read property '{name}' of {target.format()}")


def compute_object_access(evaluator: Evaluator, node: ObjectAccessNode, scope: Scope) -> Value:
    return read_member(evaluator.compute_value(node.target, scope), node.member)


def assign_member(evaluator: Evaluator, target: ObjectAccessNode, value_node: ValueNode, scope: Scope) -> Value:
    obj = evaluator.compute_value(target.target, scope)
    if not isinstance(obj, Object):
        raise ScrapTypeError(f"Cannot set property '{target.member}' of {obj.format()}")

    existing = obj.own_property(target.member)
    if existing is not None and not existing.writeable:
        raise ScrapRuntimeError(f"Property '{target.member}' is read-only")

    value = evaluator.compute_value(value_node, scope)
    if existing is not None:
        obj.set(target.member, PropertyDescriptor(value, existing.is_static, existing.visibility, existing.writeable))
    else:
        obj.set(target.member, PropertyDescriptor(value))
    return value


def compute_object_destruction(evaluator: Evaluator, node: ObjectDestructuringNode, scope: Scope) -> Value:
    """
    `const { a, b } = source` declares `a` and `b` in the current scope from
    the source object's properties (Undefined when absent).
    """
    source = evaluator.compute_value(node.source, scope)
    if not isinstance(source, Object):
        raise ScrapTypeError(f"Cannot destructure {source.format()}, it is not an object")
    for name in node.names:
        add_to_scope(Variable(node.is_const, name, detach(source.get(name))), scope)
    return source
