# Core type aliases for Scrap's evaluation core.
#
# Naming guidance:
# - Instruction: a node that may appear in a function body (value, control or entity node).
# - NativeAction: the host callable wrapped by a NativeFunction.
# Concrete runtime values live in scrap.types.values; syntax nodes in scrap.ast.nodes.

from typing import Any, Callable

__version__ = "0.4.0"

# Host callable backing a native function: receives evaluated Values, returns one Value
NativeAction = Callable[..., Any]
