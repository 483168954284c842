"""Core evaluator for the Scrap interpreter.

Dispatches syntax-tree nodes to the forms that implement them:

- compute_value:       ValueNode   -> Value
- compute_entity:      EntityNode  -> Entity
- compute_control:     ControlNode -> None
- compute_instruction: any statement of a function body

and drives a whole program through `run`.
"""

from __future__ import annotations

import logging

from scrap.ast.nodes import (
    BinaryExprNode,
    BoolNode,
    CallNode,
    CharNode,
    ControlNode,
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
from scrap.errors import (
    ScrapArityError, ScrapRuntimeError, ScrapTypeError, ScrapUnresolvedReference, ScrapUnsupportedConstruct,
)
from scrap.evaluation import apply
from scrap.evaluation.forms import controls, functions, modules, objects, variables
from scrap.evaluation.operators import compute_binary
from scrap.types.entities import Entity, Module, Variable
from scrap.types.environment import Scope, add_to_scope
from scrap.types.functions import DefinedFunction, Function
from scrap.types.values import (
    Array, Bool, Char, Float, Integer, Object, PropertyDescriptor, String, Undefined, Value, detach,
)

logger = logging.getLogger(__name__)


def unsupported(node: object) -> ScrapUnsupportedConstruct:
    return ScrapUnsupportedConstruct(f"Scrap still doesn't support interpreting '{type(node).__name__}'")


class Evaluator:
    """
    Turns syntax-tree nodes into values and entities. Stateless apart from the
    scopes it is handed, so one instance can serve a whole program.
    """

    # --- Values ---
    def compute_value(self, node: ValueNode, scope: Scope) -> Value:
        match node:
            case FunctionExprNode():
                return functions.compute_fn(node, scope)
            case ReassignmentNode():
                return variables.compute_reassignment(self, node, scope)
            case ModuleAccessNode():
                return modules.compute_module_access(self, node, scope)
            case ObjectDestructuringNode():
                return objects.compute_object_destruction(self, node, scope)
            case ObjectAccessNode():
                return objects.compute_object_access(self, node, scope)
            case BinaryExprNode():
                return compute_binary(self, node, scope)
            case CallNode():
                return self.compute_call(node, scope)
            case IdentifierNode():
                return self.compute_identifier(node, scope)
            case LiteralObjectNode():
                return self.compute_literal_object(node, scope)
            case LiteralArrayNode():
                return self.compute_literal_array(node, scope)
            case StringNode(value=value):
                return String(value)
            case IntegerNode(value=value):
                return Integer(value)
            case FloatNode(value=value):
                return Float(value)
            case CharNode(value=value):
                return Char(value)
            case BoolNode(value=value):
                return Bool(value)
            case UndefinedNode():
                return Undefined
        raise unsupported(node)

    def compute_identifier(self, node: IdentifierNode, scope: Scope) -> Value:
        """
        Value currently bound to the identifier. A primitive is copied out of
        its variable; objects, arrays and functions are returned by reference.
        """
        referred = scope.get_reference(node.symbol)
        if referred is None:
            raise ScrapUnresolvedReference(node.symbol)
        return self.entity_value(referred, node.symbol)

    def entity_value(self, entity: Entity, name: str) -> Value:
        if isinstance(entity, Variable):
            return detach(entity.value)
        if isinstance(entity, Function):
            return entity
        raise ScrapTypeError(f"'{name}' is a module and cannot be used as a value")

    def compute_literal_object(self, node: LiteralObjectNode, scope: Scope) -> Object:
        entries: dict[str, PropertyDescriptor] = {}
        for key, value_node in node.pairs:
            entries[key] = PropertyDescriptor(self.compute_value(value_node, scope))
        return Object(None, entries)

    def compute_literal_array(self, node: LiteralArrayNode, scope: Scope) -> Array:
        return Array([self.compute_value(element, scope) for element in node.elements])

    # --- Calls ---
    def compute_call(self, node: CallNode, scope: Scope) -> Value:
        return apply.compute_call(self, node, scope)

    def invoke(self, fn: Function, args: list[Value]) -> Value:
        return apply.invoke(self, fn, args)

    # --- Entities ---
    def compute_entity(self, node: EntityNode, scope: Scope) -> Entity:
        match node:
            case FunctionNode():
                return functions.compute_fn(node, scope)
            case ModuleNode():
                return modules.compute_mod(self, node, scope)
            case VariableNode():
                return variables.compute_var(self, node, scope)
        raise unsupported(node)

    # --- Control flow ---
    def compute_control(self, node: ControlNode, scope: Scope) -> None:
        match node:
            case IfNode():
                controls.compute_if(self, node, scope)
            case _:
                logger.debug("ignoring control statement %s", type(node).__name__)

    def compute_instruction(self, node: Instruction, scope: Scope) -> None:
        if isinstance(node, ValueNode):
            self.compute_value(node, scope)
        elif isinstance(node, ControlNode):
            self.compute_control(node, scope)
        elif isinstance(node, EntityNode):
            entity = add_to_scope(self.compute_entity(node, scope), scope)
            logger.debug("declared %s in %s", entity.name, scope.owner)
        else:
            raise unsupported(node)

    # --- Program ---
    def run(self, parser, main_module: Module, std: Module, argv: list[str]) -> None:
        """
        Evaluate every top-level declaration into `main_module`, expose `argv`
        as `std::args`, then execute the body of `main`.
        """
        while not parser.has_finished:
            node = parser.parse_root()
            entity = self.compute_entity(node, main_module.scope)
            add_to_scope(entity, main_module.scope)
            logger.debug("registered %s in module %s", entity.name, main_module.name)

        main_fn = main_module.get_entity("main")
        if not isinstance(main_fn, DefinedFunction):
            raise ScrapRuntimeError("Missing program entry point (main function)")
        if main_fn.params:
            raise ScrapArityError("The entry point 'main' must not declare parameters")

        # args is rebound on every run
        std.scope.entries.pop("args", None)
        args = Array([String(arg) for arg in argv])
        add_to_scope(Variable(True, "args", args, True), std.scope)

        self.run_entry_point(main_fn)

    def run_entry_point(self, main_fn: DefinedFunction) -> None:
        """Execute `main` directly: no parameter binding and its return value is ignored."""
        scope = Scope(main_fn.name, parent=main_fn.scope)
        for instruction in main_fn.body:
            self.compute_instruction(instruction, scope)
        scope.clean()
