from __future__ import annotations

from typing import TYPE_CHECKING

from scrap.ast.nodes import IdentifierNode, ObjectAccessNode, ReassignmentNode, VariableNode
from scrap.errors import ScrapTypeError, ScrapUnresolvedReference, ScrapUnsupportedConstruct
from scrap.evaluation.forms.objects import assign_member
from scrap.types.entities import Variable
from scrap.types.environment import Scope
from scrap.types.values import Value

if TYPE_CHECKING:
    from scrap.evaluation.evaluator import Evaluator


def compute_var(evaluator: Evaluator, node: VariableNode, scope: Scope) -> Variable:
    value = evaluator.compute_value(node.value, scope)
    return Variable(node.is_const, node.name, value, node.is_exported)


def compute_reassignment(evaluator: Evaluator, node: ReassignmentNode, scope: Scope) -> Value:
    """
    `name = expr` rebinds a mutable variable; `obj.key = expr` sets an own
    property. Evaluates to the assigned value.
    """
    target = node.target
    if isinstance(target, ObjectAccessNode):
        return assign_member(evaluator, target, node.value, scope)
    if not isinstance(target, IdentifierNode):
        raise ScrapUnsupportedConstruct(f"Cannot assign to '{type(target).__name__}'")

    name = target.symbol
    entity = scope.get_reference(name)
    if entity is None:
        raise ScrapUnresolvedReference(name)
    if not isinstance(entity, Variable):
        raise ScrapTypeError(f"Cannot assign to '{name}', it is not a variable")

    value = evaluator.compute_value(node.value, scope)
    entity.assign(value)
    return value
