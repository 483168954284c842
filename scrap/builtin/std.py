"""The `std` module: native functions exposed to Scrap code.

Natives receive evaluated Values and return one Value (None is read as
undefined). They are reached from Scrap as `std::name(...)`; the driver adds
`std::args` before `main` runs.
"""
from __future__ import annotations

import sys
from typing import Optional

from scrap.errors import ScrapTypeError
from scrap.evaluation.operators import type_name
from scrap.types.entities import Module
from scrap.types.environment import Scope, add_to_scope
from scrap.types.functions import NativeFunction
from scrap.types.values import (
    Array, Integer, Object, String, Undefined, UndefinedType, Value,
)


def print_builtin(*args: Value) -> None:
    """Write the formatted arguments separated by spaces, then a newline."""
    sys.stdout.write(" ".join(arg.format() for arg in args) + "\n")


def length(value: Value = Undefined) -> Integer:
    """Characters of a string, elements of an array, or own keys of an object."""
    if isinstance(value, (String, Array)):
        return Integer(len(value.value))
    if isinstance(value, Object):
        return Integer(len(value.keys()))
    raise ScrapTypeError(f"len expects a String, Array or Object, got {type_name(value)}")


def push(array: Value = Undefined, value: Value = Undefined) -> Integer:
    """Append to an array in place; returns the new length."""
    if not isinstance(array, Array):
        raise ScrapTypeError(f"push expects an Array, got {type_name(array)}")
    return Integer(array.push(value))


def at(array: Value = Undefined, index: Value = Undefined) -> Value:
    if not isinstance(array, Array) or not isinstance(index, Integer):
        raise ScrapTypeError(f"at expects an Array and an Integer, got {type_name(array)} and {type_name(index)}")
    return array.get(index.value)


def keys(obj: Value = Undefined) -> Array:
    if not isinstance(obj, Object):
        raise ScrapTypeError(f"keys expects an Object, got {type_name(obj)}")
    return Array([String(k) for k in obj.keys()])


def typeof(value: Value = Undefined) -> String:
    return String(type_name(value))


def _prototype_arg(name: str, value: Value) -> Optional[Object]:
    if isinstance(value, UndefinedType):
        return None
    if not isinstance(value, Object):
        raise ScrapTypeError(f"{name} expects an Object or undefined as prototype, got {type_name(value)}")
    return value


def create(proto: Value = Undefined) -> Object:
    """A new empty object inheriting from `proto`."""
    return Object(_prototype_arg("create", proto))


def set_prototype(obj: Value = Undefined, proto: Value = Undefined) -> Object:
    if not isinstance(obj, Object):
        raise ScrapTypeError(f"setPrototype expects an Object, got {type_name(obj)}")
    obj.set_prototype(_prototype_arg("setPrototype", proto))
    return obj


NATIVES: dict[str, tuple] = {
    "print": (print_builtin, None),
    "len": (length, 1),
    "push": (push, 2),
    "at": (at, 2),
    "keys": (keys, 1),
    "typeof": (typeof, 1),
    "create": (create, 1),
    "setPrototype": (set_prototype, 2),
}


def register(module: Module) -> Module:
    """Register all std natives into the given module."""
    for name, (action, arity) in NATIVES.items():
        add_to_scope(NativeFunction(name, action, arity), module.scope)
    return module


def make_std(parent: Optional[Scope] = None) -> Module:
    return register(Module("std", Scope("std", parent=parent), is_exported=True))
