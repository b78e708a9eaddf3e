"""
Shared pytest fixtures for airportsim tests.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import pytest

from airportsim.core.random_source import RandomSource


class ScriptedRandom(RandomSource):
    """RandomSource whose draws are chosen by the test.

    ``doubles`` are returned in order by uniform_double(); once exhausted,
    ``default_double`` is returned forever. uniform_int() returns ``fuel`` when
    given, otherwise the lower bound of the requested range.
    """

    def __init__(self, doubles: Iterable[float] = (), default_double: float = 0.999999, fuel: int | None = None):
        super().__init__(seed=0)
        self._doubles = list(doubles)
        self._default_double = default_double
        self._fuel = fuel
        self.double_draws = 0

    def uniform_double(self) -> float:
        self.double_draws += 1
        if self._doubles:
            return self._doubles.pop(0)
        return self._default_double

    def uniform_int(self, minimum: int, maximum: int) -> int:
        if self._fuel is not None:
            return self._fuel
        return minimum


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def quiet_random():
    """A random source that never spawns and never breaks anything down."""
    return ScriptedRandom()


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_name = request.node.name

    test_dir = test_output_root / module_name / test_name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_airportsim_logging():
    """Reset logging state before each test.

    Ensures tests start with a clean logging configuration:
    - Removes all handlers except NullHandler
    - Resets level to NOTSET (inherit from parent)
    """
    logger = logging.getLogger("airportsim")

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()

    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)

    yield

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)
