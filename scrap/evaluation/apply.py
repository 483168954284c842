"""Call protocol for Scrap.

This module centralizes function application:
- Callee resolution (by name through the caller's scope, or any callable expression).
- Arity checks for natives (fixed or variadic) and defined functions (exact or rest).
- Parameter binding into a fresh per-call scope whose parent is the closure scope,
  so recursive and re-entrant calls never share bindings.
- Body execution, the local-escape check on the return expression, and the
  return value.

Arguments are always evaluated in the caller's scope, never the callee's.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scrap.ast.nodes import CallNode, IdentifierNode, UndefinedNode
from scrap.errors import (
    ScrapArityError, ScrapRuntimeError, ScrapTypeError, ScrapUnresolvedReference,
)
from scrap.types.entities import Variable
from scrap.types.environment import Scope
from scrap.types.functions import DefinedFunction, Function, NativeFunction
from scrap.types.values import Array, Undefined, Value

if TYPE_CHECKING:
    from scrap.evaluation.evaluator import Evaluator

logger = logging.getLogger(__name__)


def find_callee(evaluator: Evaluator, call: CallNode, scope: Scope) -> Function:
    """Resolve what `call` invokes, failing when it is missing or not callable."""
    if isinstance(call.callee, IdentifierNode):
        name = call.callee.symbol
        callee = scope.get_reference(name)
        if callee is None:
            raise ScrapUnresolvedReference(name)
        if isinstance(callee, Variable):
            if not isinstance(callee.value, Function):
                raise ScrapTypeError(
                    f"The expression is not callable. '{name}' doesn't contain a value with a call signature"
                )
            return callee.value
        if not isinstance(callee, Function):
            raise ScrapTypeError(f"The expression is not callable. '{name}' is a module")
        return callee

    callee = evaluator.compute_value(call.callee, scope)
    if not isinstance(callee, Function):
        raise ScrapTypeError(f"The expression is not callable. '{callee.format()}' has no call signature")
    return callee


def check_arity(fn: Function, received: int) -> None:
    if isinstance(fn, NativeFunction):
        fn.check_arity(received)
        return
    if not isinstance(fn, DefinedFunction):
        raise ScrapTypeError(f"'{fn.name}' is not callable")

    if fn.rest_param is not None:
        required = len(fn.params) - 1
        if received < required:
            raise ScrapArityError(
                f"'{fn.name}' expects from {required} to multiple arguments, but received {received}"
            )
    elif received != len(fn.params):
        raise ScrapArityError(f"'{fn.name}' expects {len(fn.params)} arguments, but received {received}")


def bind_arguments(fn: DefinedFunction, args: list[Value]) -> Scope:
    """
    Build the call scope for `fn`: positional parameters become mutable
    variables, a trailing rest parameter becomes a constant array holding the
    remaining arguments (possibly empty).
    """
    call_scope = Scope(fn.name, parent=fn.scope)
    rest = fn.rest_param
    positional = fn.params[:-1] if rest is not None else fn.params

    for param, value in zip(positional, args):
        call_scope.add_entry(param.name, Variable(False, param.name, value))
    if rest is not None:
        call_scope.add_entry(rest.name, Variable(True, rest.name, Array(args[len(positional):])))
    return call_scope


def exec_defined(evaluator: Evaluator, fn: DefinedFunction, args: list[Value]) -> Value:
    call_scope = bind_arguments(fn, args)
    for instruction in fn.body:
        evaluator.compute_instruction(instruction, call_scope)

    ret = fn.return_value
    # Only a bare identifier is checked; locals nested in a larger expression are not traced
    if (
        isinstance(ret, IdentifierNode)
        and call_scope.has_own(ret.symbol)
        and all(p.name != ret.symbol for p in fn.params)
    ):
        raise ScrapRuntimeError(
            f"You returned a locally scoped value in '{fn.name}', which will be destroyed after the execution ends"
        )

    if isinstance(ret, UndefinedNode):
        return Undefined
    return evaluator.compute_value(ret, call_scope)


def invoke(evaluator: Evaluator, fn: Function, args: list[Value]) -> Value:
    """Apply `fn` to already-evaluated arguments."""
    check_arity(fn, len(args))
    logger.debug("call %s with %d argument(s)", fn.name, len(args))
    if isinstance(fn, NativeFunction):
        result = fn.action(*args)
        return Undefined if result is None else result
    return exec_defined(evaluator, fn, args)


def compute_call(evaluator: Evaluator, call: CallNode, scope: Scope) -> Value:
    callee = find_callee(evaluator, call, scope)
    if isinstance(callee, DefinedFunction):
        # defined functions reject a bad argument count before any argument is evaluated
        check_arity(callee, len(call.args))
    args = [evaluator.compute_value(arg, scope) for arg in call.args]
    return invoke(evaluator, callee, args)
