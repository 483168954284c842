"""Function values: user-defined closures and host-provided natives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from scrap import NativeAction
from scrap.errors import ScrapArityError, ScrapRuntimeError
from scrap.types.entities import Entity
from scrap.types.environment import Scope
from scrap.types.values import Object

if TYPE_CHECKING:
    from scrap.ast.nodes import Instruction, ValueNode


@dataclass(frozen=True)
class Param:
    name: str
    is_rest: bool = False


class Function(Object, Entity):
    """
    A function is a value and a declaration at once.

    Being an Object it can carry properties; being an Entity it has a name and
    an export flag, so a declaration like `fn f() = 1` registers the function
    itself in the enclosing scope.
    """

    def __init__(self, name: str, is_exported: bool = False):
        Object.__init__(self, None)
        Entity.__init__(self, name, is_exported)

    def _format_at(self, depth: int) -> str:
        return self.format()


class DefinedFunction(Function):
    """A function written in Scrap, closing over the scope it was defined in."""

    def __init__(
        self,
        name: str,
        is_exported: bool,
        scope: Scope,
        params: list[Param],
        body: list[Instruction],
        return_value: ValueNode,
    ):
        super().__init__(name, is_exported)
        if any(p.is_rest for p in params[:-1]):
            raise ScrapRuntimeError(f"'{name}': only the last parameter may be a rest parameter")
        self.scope = scope
        self.params = list(params)
        self.body = list(body)
        self.return_value = return_value

    @property
    def rest_param(self) -> Optional[Param]:
        if self.params and self.params[-1].is_rest:
            return self.params[-1]
        return None

    def format(self) -> str:
        return f"fn {self.name}({len(self.params)} params) []"

    def __repr__(self) -> str:
        return f"<fn {self.name}({', '.join(('...' if p.is_rest else '') + p.name for p in self.params)})>"


class NativeFunction(Function):
    """A function implemented by the host. `arity` of None means variadic."""

    def __init__(
        self,
        name: str,
        action: NativeAction,
        arity: Optional[int] = None,
        is_exported: bool = True,
    ):
        super().__init__(name, is_exported)
        self.action = action
        self.arity = arity

    def check_arity(self, received: int) -> None:
        if self.arity is not None and received > self.arity:
            raise ScrapArityError(
                f"'{self.name}' expects {self.arity} arguments, but {received} has been received"
            )

    def format(self) -> str:
        return f"fn {self.name}({self.arity if self.arity is not None else '...'}) [ native code ]"

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"
