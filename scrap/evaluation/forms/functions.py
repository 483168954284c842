from __future__ import annotations

from scrap.ast.nodes import FunctionExprNode, FunctionNode
from scrap.types.environment import Scope
from scrap.types.functions import DefinedFunction


def compute_fn(node: FunctionNode | FunctionExprNode, scope: Scope) -> DefinedFunction:
    """
    Build a closure over `scope`, the scope the function is defined in.
    Works for both declarations (`fn f() {}`) and expressions (`fn (x) = x`).
    """
    is_exported = node.is_exported if isinstance(node, FunctionNode) else False
    return DefinedFunction(node.name, is_exported, scope, node.params, node.body, node.return_value)
