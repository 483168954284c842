from __future__ import annotations

import logging
from typing import Optional

from scrap.builtin.std import make_std
from scrap.errors import ScrapTypeError, ScrapUnresolvedReference
from scrap.evaluation.evaluator import Evaluator
from scrap.reader.parser import Parser
from scrap.types.entities import Module
from scrap.types.environment import Scope, add_to_scope
from scrap.types.functions import Function
from scrap.types.values import Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Scrap programs.

    Holds a global scope with the `std` module and a `main` module whose scope
    is the root scope of the program. Declarations persist across `load` calls.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None):
        self.evaluator = evaluator or Evaluator()
        self.globals = Scope("global")
        self.std: Module = make_std(self.globals)
        add_to_scope(self.std, self.globals)
        self.main_module = Module("main", Scope("main", parent=self.globals))

    @property
    def scope(self) -> Scope:
        return self.main_module.scope

    def load(self, source: str) -> Module:
        """Evaluate every top-level declaration of `source` into the main module."""
        parser = Parser(source)
        while not parser.has_finished:
            entity = self.evaluator.compute_entity(parser.parse_root(), self.scope)
            add_to_scope(entity, self.scope)
            logger.debug("loaded %s", entity.name)
        return self.main_module

    def call(self, name: str, *args: Value) -> Value:
        """Invoke a loaded function with already-evaluated arguments."""
        entity = self.scope.get_reference(name)
        if entity is None:
            raise ScrapUnresolvedReference(name)
        fn = self.evaluator.entity_value(entity, name)
        if not isinstance(fn, Function):
            raise ScrapTypeError(f"The expression is not callable. '{name}' is not a function")
        return self.evaluator.invoke(fn, list(args))

    def run(self, source: str, argv: Optional[list[str]] = None) -> None:
        """Run a whole program: declarations first, then `main`."""
        self.evaluator.run(Parser(source), self.main_module, self.std, list(argv or []))
