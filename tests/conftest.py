import pytest

from scrap.evaluation.evaluator import Evaluator
from scrap.interpreter import Interpreter
from scrap.types.environment import Scope

# Shared fixtures. Most end-to-end tests load a program into a fresh
# Interpreter and call one of its functions directly, which returns the value
# that the driver itself would discard for `main`.


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def evaluator():
    return Evaluator()


@pytest.fixture
def scope():
    return Scope("test")


@pytest.fixture
def call_main(interp):
    """Load `source` and return the value produced by calling its `main`."""
    def _call(source: str, name: str = "main", *args):
        interp.load(source)
        return interp.call(name, *args)
    return _call
