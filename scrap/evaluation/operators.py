"""Binary operator semantics.

Operands are evaluated left then right through the evaluator's value dispatch;
the operator decides the result. Arithmetic always builds a new Primitive.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Callable

from scrap.ast.nodes import BinaryExprNode, IdentifierNode, ValueNode
from scrap.errors import ScrapRuntimeError, ScrapTypeError, ScrapUnsupportedConstruct
from scrap.types.environment import Scope
from scrap.types.functions import Function
from scrap.types.values import (
    NUMERIC, Array, Bool, Char, Float, Integer, Object, Primitive, String, UndefinedType, Value,
)

if TYPE_CHECKING:
    from scrap.evaluation.evaluator import Evaluator


def type_name(value: Value) -> str:
    """Runtime classification of `value`, as used by instanceof and std::typeof."""
    match value:
        case Bool():
            return "Boolean"
        case Integer():
            return "Integer"
        case Float():
            return "Float"
        case String():
            return "String"
        case Char():
            return "Char"
        case UndefinedType():
            return "Undefined"
        case Function():
            return "Function"
        case Array():
            return "Array"
        case Object():
            return "Object"
    return type(value).__name__


TYPE_NAMES = frozenset({
    "Integer", "Float", "String", "Char", "Boolean", "Undefined", "Object", "Array", "Function",
})


def is_truthy(value: Value) -> bool:
    """false, undefined, 0, 0.0 and "" are falsy; everything else is truthy."""
    if isinstance(value, UndefinedType):
        return False
    if isinstance(value, Primitive):
        return bool(value.value)
    return True


def values_equal(a: Value, b: Value) -> bool:
    if isinstance(a, NUMERIC) and isinstance(b, NUMERIC):
        return a.value == b.value
    if isinstance(a, Primitive) or isinstance(a, UndefinedType):
        return a == b
    return a is b


def _numeric_result(result: int | float, a: Value, b: Value) -> Value:
    if isinstance(a, Float) or isinstance(b, Float):
        return Float(result)
    return Integer(result)


def _divide(a: Value, b: Value) -> Value:
    if b.value == 0:
        raise ScrapRuntimeError("Division by zero")
    if isinstance(a, Integer) and isinstance(b, Integer) and a.value % b.value == 0:
        return Integer(a.value // b.value)
    return Float(a.value / b.value)


def _modulo(a: Value, b: Value) -> Value:
    if b.value == 0:
        raise ScrapRuntimeError("Modulo by zero")
    return _numeric_result(a.value % b.value, a, b)


ARITHMETIC: dict[str, Callable[[Value, Value], Value]] = {
    "+": lambda a, b: _numeric_result(a.value + b.value, a, b),
    "-": lambda a, b: _numeric_result(a.value - b.value, a, b),
    "*": lambda a, b: _numeric_result(a.value * b.value, a, b),
    "/": _divide,
    "%": _modulo,
}

COMPARISON: dict[str, Callable[[object, object], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


def _mismatch(op: str, a: Value, b: Value) -> ScrapTypeError:
    return ScrapTypeError(f"Operator '{op}' cannot be applied to {type_name(a)} and {type_name(b)}")


def arithmetic(op: str, a: Value, b: Value) -> Value:
    if isinstance(a, NUMERIC) and isinstance(b, NUMERIC):
        try:
            return ARITHMETIC[op](a, b)
        except OverflowError:
            raise ScrapRuntimeError(f"Numeric overflow: the result of '{op}' is out of the Float range") from None
    if op == "+" and (isinstance(a, String) or isinstance(b, String)):
        return String(a.format() + b.format())
    raise _mismatch(op, a, b)


def compare(op: str, a: Value, b: Value) -> Bool:
    if isinstance(a, NUMERIC) and isinstance(b, NUMERIC):
        return Bool(COMPARISON[op](a.value, b.value))
    if isinstance(a, (String, Char)) and isinstance(b, (String, Char)):
        return Bool(COMPARISON[op](a.value, b.value))
    raise _mismatch(op, a, b)


def membership(key: Value, container: Value) -> Bool:
    if isinstance(container, Array):
        if not isinstance(key, Integer):
            raise _mismatch("in", key, container)
        return Bool(0 <= key.value < container.length)
    if isinstance(container, Object):
        if not isinstance(key, (String, Char)):
            raise _mismatch("in", key, container)
        return Bool(container.has(key.value))
    raise _mismatch("in", key, container)


def instance_of(evaluator: Evaluator, value: Value, type_node: ValueNode, scope: Scope) -> Bool:
    # A bare built-in type name is checked by classification unless the program shadows it
    if (
        isinstance(type_node, IdentifierNode)
        and type_node.symbol in TYPE_NAMES
        and scope.get_reference(type_node.symbol) is None
    ):
        name = type_node.symbol
        if name == "Object":
            return Bool(isinstance(value, Object))
        return Bool(type_name(value) == name)

    proto = evaluator.compute_value(type_node, scope)
    if not isinstance(proto, Object):
        raise ScrapTypeError(f"The right side of 'instanceof' must be a type name or an object, got {type_name(proto)}")
    if not isinstance(value, Object):
        return Bool(False)
    return Bool(any(ancestor is proto for ancestor in value.chain() if ancestor is not value))


def compute_binary(evaluator: Evaluator, node: BinaryExprNode, scope: Scope) -> Value:
    op = node.operator
    left = evaluator.compute_value(node.left, scope)

    if op == "instanceof":
        return instance_of(evaluator, left, node.right, scope)

    right = evaluator.compute_value(node.right, scope)
    if op in ARITHMETIC:
        return arithmetic(op, left, right)
    if op in COMPARISON:
        return compare(op, left, right)
    if op == "in":
        return membership(left, right)
    if op == "==":
        return Bool(values_equal(left, right))
    if op == "!=":
        return Bool(not values_equal(left, right))
    raise ScrapUnsupportedConstruct(f"Unsupported binary operator '{op}'")
