"""Lexical scopes for Scrap.

A Scope maps names to Entities (variables, functions, modules) and links to a
parent scope through a non-owning `parent` reference. Lookups walk the chain
outward; declarations only ever touch the scope's own table.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Optional

from scrap.errors import ScrapRuntimeError

if TYPE_CHECKING:
    from scrap.types.entities import Entity


class Scope:
    """Hierarchical mapping from names to Entities."""

    __slots__ = ("owner", "parent", "_entries")

    def __init__(self, owner: str, parent: Optional[Scope] = None):
        self.owner: str = owner
        self.parent: Scope | None = parent
        self._entries: dict[str, Entity] = {}

    @property
    def entries(self) -> dict[str, Entity]:
        return self._entries

    def add_entry(self, name: str, entity: Entity) -> bool:
        """Declare `name` in this scope.

        Returns False, leaving the table untouched, when `name` is already
        declared here. Parent scopes are not consulted, so shadowing an outer
        binding is allowed.
        """
        if name in self._entries:
            return False
        self._entries[name] = entity
        return True

    def has_own(self, name: str) -> bool:
        return name in self._entries

    def find(self, name: str) -> Optional[Scope]:
        """Find the nearest scope in the chain that declares `name`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope._entries:
                return scope
            scope = scope.parent
        return None

    def get_reference(self, name: str) -> Optional[Entity]:
        """Nearest binding for `name`, or None when the chain is exhausted."""
        scope = self.find(name)
        return scope._entries[name] if scope is not None else None

    def clean(self) -> None:
        """Release every binding declared in this scope. The parent is left alone."""
        self._entries.clear()

    def child(self, owner: str) -> Scope:
        return Scope(owner, parent=self)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"<{self.owner}> {{")
            buffer.write(", ".join(self._entries))
            buffer.write("}")
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        chain = []
        scope: Optional[Scope] = self
        while scope is not None:
            chain.append(f"{scope.owner}{{{', '.join(scope._entries)}}}")
            scope = scope.parent
        return f"<Scope chain: {' -> '.join(chain)}>"


def add_to_scope(entity: Entity, scope: Scope) -> Entity:
    """Declare `entity` under its own name, failing on a duplicate in `scope`."""
    if not scope.add_entry(entity.name, entity):
        raise ScrapRuntimeError(f"'{entity.name}' is already defined at '{scope.owner}'")
    return entity
