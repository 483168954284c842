from scrap.types.values import (
    Value, Primitive, Integer, Float, String, Char, Bool,
    Undefined, UndefinedType, PropertyDescriptor, Object, Array,
)
from scrap.types.environment import Scope, add_to_scope
from scrap.types.entities import Entity, Variable, Module
from scrap.types.functions import Param, Function, DefinedFunction, NativeFunction
