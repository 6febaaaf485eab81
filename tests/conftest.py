import pytest

from swisp.builtin.env_builtin import register
from swisp.evaluation.evaluator import evaluate
from swisp.interpreter import Interpreter
from swisp.output import BufferOutput
from swisp.reader.parser import parse
from swisp.types.environment import Environment


@pytest.fixture
def output():
    """Captures what `print` and `load` write."""
    return BufferOutput()


@pytest.fixture
def env(output):
    """Fresh global environment with builtins loaded."""
    e = Environment()
    register(e, output)
    return e


@pytest.fixture
def run(env):
    """Parse and evaluate source text in the `env` fixture, like one REPL line."""
    def _run(source):
        return evaluate(env, parse(source))
    return _run


@pytest.fixture(scope="module")
def interp():
    """Interpreter with the standard prelude, shared within a test module."""
    return Interpreter(output=BufferOutput())
