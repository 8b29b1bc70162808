"""Assertion system for test methods."""

from minitest.assertions.base import AssertionFailure, FailureKind, compose_message
from minitest.assertions.checks import Check
from minitest.assertions.context import ASSERTION_NAMES, AssertionContext
from minitest.assertions.install import install

__all__ = [
    "ASSERTION_NAMES",
    "AssertionContext",
    "AssertionFailure",
    "Check",
    "FailureKind",
    "compose_message",
    "install",
]
