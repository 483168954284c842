from scrap.ast.nodes import *  # noqa: F401,F403
from scrap.ast.nodes import BINARY_OPERATORS_PRECEDENCE, Instruction  # noqa: F401
