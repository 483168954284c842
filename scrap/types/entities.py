"""Named, exportable declarations: variables and modules.

Functions are entities too, but since they are also values they live in
scrap.types.functions.
"""

from __future__ import annotations

from typing import Optional

from scrap.errors import ScrapRuntimeError
from scrap.types.environment import Scope
from scrap.types.values import Value


class Entity:
    """Something with a name that can be declared in a scope and exported."""

    def __init__(self, name: str, is_exported: bool = False):
        self.name = name
        self.is_exported = is_exported


class Variable(Entity):
    """
    A named binding to a value, either constant or mutable.

        const answer = 42
        answer = 10   // error, answer is constant

        var counter = 0
        counter = 1   // fine, the binding now points at a new value
    """

    def __init__(self, is_const: bool, name: str, value: Value, is_exported: bool = False):
        super().__init__(name, is_exported)
        self.is_const = is_const
        self._value = value

    @property
    def value(self) -> Value:
        return self._value

    def assign(self, value: Value) -> None:
        """Rebind to `value`. The previous value is left untouched."""
        if self.is_const:
            raise ScrapRuntimeError(f"Cannot reassign constant '{self.name}'")
        self._value = value

    def __repr__(self) -> str:
        kind = "const" if self.is_const else "var"
        return f"<{kind} {self.name} = {self._value!r}>"


class Module(Entity):
    """A named group of declarations with its own scope."""

    def __init__(self, name: str, scope: Scope, is_exported: bool = False):
        super().__init__(name, is_exported)
        self.scope = scope

    def insert(self, name: str, entity: Entity) -> bool:
        return self.scope.add_entry(name, entity)

    def get_entity(self, name: str) -> Optional[Entity]:
        return self.scope.entries.get(name)

    def exports(self) -> dict[str, Entity]:
        return {k: e for k, e in self.scope.entries.items() if e.is_exported}

    def __repr__(self) -> str:
        return f"<module {self.name}>"
