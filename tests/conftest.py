"""
Shared pytest fixtures for surprise-lift tests.
"""

import logging
from pathlib import Path

import pytest

from surpriselift.game.audio import Cue


class RecordingPlayer:
    """Audio player that remembers every call."""

    def __init__(self):
        self.played: list[tuple[Cue, bool]] = []
        self.stopped: list[int] = []
        self._next_handle = 0

    def play(self, cue: Cue, loop: bool = False) -> int:
        self._next_handle += 1
        self.played.append((cue, loop))
        return self._next_handle

    def stop(self, handle: int) -> None:
        self.stopped.append(handle)

    @property
    def cues(self) -> list[Cue]:
        return [cue for cue, _ in self.played]


@pytest.fixture
def player() -> RecordingPlayer:
    return RecordingPlayer()


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
def reset_surpriselift_logging():
    """Reset the library logger before and after each test.

    Removes every handler except a NullHandler and resets the level so
    logging configuration from one test never leaks into another.
    """
    logger = logging.getLogger("surpriselift")

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
