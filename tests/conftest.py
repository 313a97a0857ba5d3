import pytest

from stutter.interpreter import Interpreter, run
from stutter.modules.bootstrap import pad
from stutter.types.environment import GlobalEnvironment


# Most tests build a bare Interpreter (prelude=None) so that only the core
# forms are in play; the standard library tests load it themselves.


@pytest.fixture
def global_env():
    return GlobalEnvironment()


@pytest.fixture
def itp():
    return Interpreter(prelude=None)


@pytest.fixture
def run_form(global_env):
    """Run one form against a shared global environment, the way drivers do."""

    def _run(source):
        return run(pad(source), global_env)

    return _run
