"""Base data structures for the assertion system."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Union

Message = Union[str, Callable[[], str], None]


class FailureKind(str, Enum):
    ASSERTION = "assertion"
    ERROR = "error"


class AssertionFailure(AssertionError):
    """Raised when an assertion does not hold.

    Attributes:
        kind: Discriminant used by the runner to tell expected assertion
            failures apart from unexpected errors.
        message: The fully rendered failure message.
    """

    kind = FailureKind.ASSERTION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def resolve_message(msg: Message) -> str | None:
    """Evaluate a message that may be a zero-argument callable."""
    if callable(msg):
        return msg()
    return msg


class ComposedMessage:
    """A lazily rendered caller message plus default description.

    Nothing is evaluated until the instance is called, which only happens
    when an assertion is about to fail.

        no message        -> "<default>."
        "custom"          -> "custom.\\n<default>."
        ""                -> "<default>."
    """

    def __init__(self, msg: Message, default: Callable[[], str]):
        self.msg = msg
        self.default = default

    def __call__(self) -> str:
        custom = resolve_message(self.msg)
        if custom is not None:
            custom = str(custom).strip().removesuffix(".")
        if not custom:
            return f"{self.default()}."
        return f"{custom}.\n{self.default()}."


def compose_message(msg: Message, default: Callable[[], str]) -> ComposedMessage:
    """Combine a caller message with a default description, leaving composed ones as-is."""
    if isinstance(msg, ComposedMessage):
        return msg
    return ComposedMessage(msg, default)
