from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from minitest.assertions.base import FailureKind


class Status(str, Enum):
    PASS = "pass"
    FAILURE = "failure"
    ERROR = "error"


@dataclass
class Failure:
    """A failure or error recorded for one test.

    Attributes:
        kind: ``FailureKind.ASSERTION`` for assertion failures, otherwise
            ``FailureKind.ERROR``.
        message: Rendered message (possibly multi-line).
        case: Label of the test case the test belongs to.
        test: Name of the test method that produced it.
        exc_type: Class name of the raised exception.
        traceback: Formatted traceback; only kept for errors.
    """

    kind: FailureKind
    message: str
    case: str
    test: str
    exc_type: str = ""
    traceback: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TestResult:
    __test__ = False

    case: str
    test: str
    status: Status = Status.PASS
    assertions: int = 0
    duration_seconds: float = 0.0
    problems: list[Failure] = field(default_factory=list)


@dataclass
class RunReport:
    """Aggregate of one ``Runner.run()`` call."""

    seed: int | None = None
    tests: int = 0
    assertions: int = 0
    failures: list[Failure] = field(default_factory=list)
    errors: list[Failure] = field(default_factory=list)
    results: list[TestResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures and not self.errors

    def record(self, failure: Failure) -> None:
        if failure.kind is FailureKind.ASSERTION:
            self.failures.append(failure)
        else:
            self.errors.append(failure)
