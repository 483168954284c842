from __future__ import annotations

from typing import TYPE_CHECKING

from scrap.ast.nodes import IdentifierNode, ModuleAccessNode, ModuleNode, ValueNode
from scrap.errors import (
    ScrapRuntimeError, ScrapTypeError, ScrapUnresolvedReference, ScrapUnsupportedConstruct,
)
from scrap.types.entities import Entity, Module
from scrap.types.environment import Scope, add_to_scope
from scrap.types.values import Value

if TYPE_CHECKING:
    from scrap.evaluation.evaluator import Evaluator


def compute_mod(evaluator: Evaluator, node: ModuleNode, scope: Scope) -> Module:
    module = Module(node.name, Scope(node.name, parent=scope), node.is_exported)
    for declaration in node.body:
        add_to_scope(evaluator.compute_entity(declaration, module.scope), module.scope)
    return module


def member_entity(module: Module, name: str) -> Entity:
    entity = module.get_entity(name)
    if entity is None:
        raise ScrapUnresolvedReference(f"{module.name}::{name}")
    if not entity.is_exported:
        raise ScrapRuntimeError(f"'{name}' is not exported by module '{module.name}'")
    return entity


def resolve_module(node: ValueNode, scope: Scope) -> Module:
    """Resolve the module part of `A::B::member` (here `A::B`)."""
    if isinstance(node, IdentifierNode):
        entity = scope.get_reference(node.symbol)
        if entity is None:
            raise ScrapUnresolvedReference(node.symbol)
        name = node.symbol
    elif isinstance(node, ModuleAccessNode):
        entity = member_entity(resolve_module(node.module, scope), node.member)
        name = node.member
    else:
        raise ScrapUnsupportedConstruct(f"'{type(node).__name__}' cannot name a module")

    if not isinstance(entity, Module):
        raise ScrapTypeError(f"'{name}' is not a module")
    return entity


def compute_module_access(evaluator: Evaluator, node: ModuleAccessNode, scope: Scope) -> Value:
    entity = member_entity(resolve_module(node.module, scope), node.member)
    return evaluator.entity_value(entity, node.member)
