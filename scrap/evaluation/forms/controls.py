from __future__ import annotations

from typing import TYPE_CHECKING

from scrap.ast.nodes import IfNode
from scrap.evaluation.operators import is_truthy
from scrap.types.environment import Scope

if TYPE_CHECKING:
    from scrap.evaluation.evaluator import Evaluator


def compute_if(evaluator: Evaluator, node: IfNode, scope: Scope) -> None:
    condition = evaluator.compute_value(node.condition, scope)
    branch = node.body if is_truthy(condition) else node.else_body
    if branch is None:
        return

    # Declarations inside a branch stay local to it
    block_scope = Scope(scope.owner, parent=scope)
    for instruction in branch:
        evaluator.compute_instruction(instruction, block_scope)
