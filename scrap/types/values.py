"""Runtime values for Scrap.

Every datum produced by evaluation is a Value. Primitives wrap one host scalar
and never change after construction; Objects and Arrays are composite and are
shared by reference, so mutation through one alias is visible through all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from scrap.errors import ScrapRuntimeError

INDENT = "  "


class Value:
    """Base class of every runtime value."""

    __slots__ = ("_value",)

    def __init__(self, value: object = None):
        self._value = value

    @property
    def value(self):
        return self._value

    def format(self) -> str:
        return str(self._value)

    def _format_at(self, depth: int) -> str:
        # Rendering when nested inside a composite
        return self.format()

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class Primitive(Value):
    """A scalar literal. The payload is read-only."""

    __slots__ = ()

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))


class Integer(Primitive):
    __slots__ = ()

    def __init__(self, value: int):
        super().__init__(int(value))

    def increment(self) -> Integer:
        return Integer(self._value + 1)

    def decrement(self) -> Integer:
        return Integer(self._value - 1)


class Float(Primitive):
    __slots__ = ()

    def __init__(self, value: float):
        super().__init__(float(value))


class String(Primitive):
    __slots__ = ()

    def __init__(self, value: str):
        super().__init__(str(value))

    def _format_at(self, depth: int) -> str:
        return '"' + self._value.replace('\\', '\\\\').replace('"', '\\"') + '"'


class Char(Primitive):
    __slots__ = ()

    def __init__(self, value: str):
        if len(value) != 1:
            raise ScrapRuntimeError(f"A char holds exactly one character, got {value!r}")
        super().__init__(value)

    def _format_at(self, depth: int) -> str:
        return f"'{self._value}'"


class Bool(Primitive):
    __slots__ = ()

    def __init__(self, value: bool):
        super().__init__(bool(value))

    def format(self) -> str:
        return "true" if self._value else "false"


class UndefinedType(Value):
    """The absent value. Use the module-level `Undefined` singleton."""

    __slots__ = ()

    def format(self) -> str:
        return "undefined"

    def __repr__(self) -> str:
        return "Undefined"

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other) -> bool:
        return isinstance(other, UndefinedType)

    def __hash__(self) -> int:
        return hash("undefined")


Undefined = UndefinedType()

NUMERIC = (Integer, Float)


def detach(value: Value) -> Value:
    """Copy a primitive out of its binding; composites keep reference semantics."""
    if isinstance(value, Primitive):
        return type(value)(value.value)
    return value


@dataclass
class PropertyDescriptor:
    """One entry of an Object's own property table."""
    value: Value
    is_static: bool = False
    visibility: str = "public"
    writeable: bool = True


class Object(Value):
    """
    A composite value with named properties.

    `prototype` points to another Object used as fallback for lookups, in the
    ecma-262 manner. The chain is kept acyclic: assigning a prototype that
    would reach back to this object is rejected.
    """

    __slots__ = ("_prototype",)

    def __init__(
        self,
        prototype: Optional[Object] = None,
        entries: dict[str, PropertyDescriptor] | None = None,
    ):
        super().__init__(dict(entries) if entries else {})
        self._prototype: Optional[Object] = None
        if prototype is not None:
            self.set_prototype(prototype)

    @property
    def prototype(self) -> Optional[Object]:
        return self._prototype

    @property
    def value(self) -> dict[str, PropertyDescriptor]:
        return self._value

    def set_prototype(self, prototype: Optional[Object]) -> None:
        """Point this object at `prototype`, refusing to close a cycle."""
        proto = prototype
        while proto is not None:
            if proto is self:
                raise ScrapRuntimeError("Cyclic prototype chain: an object cannot inherit from itself")
            proto = proto._prototype
        self._prototype = prototype

    def chain(self) -> Iterator[Object]:
        """Yield this object followed by each of its prototypes."""
        obj: Optional[Object] = self
        while obj is not None:
            yield obj
            obj = obj._prototype

    def get(self, name: str) -> Value:
        """Bound value for `name` in the own table or the prototype chain, else Undefined."""
        for obj in self.chain():
            prop = obj._value.get(name)
            if prop is not None:
                return prop.value
        return Undefined

    def set(self, key: str, descriptor: PropertyDescriptor) -> None:
        """Insert or overwrite `key` in the own table; prototypes are never touched."""
        self._value[key] = descriptor

    def has(self, name: str) -> bool:
        """True if `name` is found in the own table or anywhere up the prototype chain."""
        return any(name in obj._value for obj in self.chain())

    def has_own(self, name: str) -> bool:
        return name in self._value

    def own_property(self, name: str) -> Optional[PropertyDescriptor]:
        return self._value.get(name)

    def keys(self) -> list[str]:
        return list(self._value)

    def _format_at(self, depth: int) -> str:
        entries = list(self._value.items())
        if not entries:
            return "{}"
        rendered = [f"{key}: {prop.value._format_at(depth + 1)}" for key, prop in entries]
        if len(entries) > 2:
            pad = INDENT * (depth + 1)
            return "{\n" + ",\n".join(pad + r for r in rendered) + "\n" + INDENT * depth + "}"
        return "{ " + ", ".join(rendered) + " }"

    def format(self) -> str:
        return self._format_at(0)

    def __repr__(self) -> str:
        return f"Object({', '.join(self._value)})"


class Array(Value):
    """An ordered sequence of values, shared by reference."""

    __slots__ = ()

    def __init__(self, elements: list[Value] | None = None):
        super().__init__(list(elements) if elements else [])

    @property
    def value(self) -> list[Value]:
        return self._value

    @property
    def length(self) -> int:
        return len(self._value)

    def get(self, index: int) -> Value:
        if 0 <= index < len(self._value):
            return self._value[index]
        return Undefined

    def push(self, value: Value) -> int:
        self._value.append(value)
        return len(self._value)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def _format_at(self, depth: int) -> str:
        return "[" + ", ".join(v._format_at(depth) for v in self._value) + "]"

    def format(self) -> str:
        return self._format_at(0)

    def __repr__(self) -> str:
        return f"Array({self._value!r})"
