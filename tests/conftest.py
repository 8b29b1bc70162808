"""Pytest configuration and fixtures."""

import logging

import pytest

from minitest.assertions import AssertionContext
from minitest.runner import Runner


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up minitest loggers after each test to prevent handler leaks."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("minitest")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


class RecordingSink:
    """Output sink that keeps everything written to it."""

    def __init__(self):
        self.chunks: list[str] = []
        self.flushes = 0

    def write(self, text: str) -> None:
        self.chunks.append(text)

    def flush(self) -> None:
        self.flushes += 1

    @property
    def text(self) -> str:
        return "".join(self.chunks)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def ctx():
    return AssertionContext()


@pytest.fixture
def make_runner(sink):
    """Build a runner that writes to the recording sink."""

    def _make(**kwargs) -> Runner:
        kwargs.setdefault("shuffle", False)
        return Runner(output=sink, **kwargs)

    return _make
