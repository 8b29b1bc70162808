from __future__ import annotations

import logging
import random
import time
import traceback
from enum import Enum
from typing import Any

from minitest.assertions.base import FailureKind
from minitest.assertions.context import AssertionContext
from minitest.assertions.install import install
from minitest.discovery import case_label, discover_tests, find_hook, get_member
from minitest.output import OutputSink, default_sink
from minitest.reporting.console import (
    PROGRESS_MARKERS,
    format_problem,
    format_seed,
    format_summary,
)
from minitest.results import Failure, RunReport, Status, TestResult


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    REPORTING = "reporting"


def classify(exc: BaseException) -> FailureKind:
    """Assertion failures are expected; anything else is an error."""
    if isinstance(exc, AssertionError):
        return FailureKind.ASSERTION
    return FailureKind.ERROR


class Runner:
    """Registers test cases and runs them against a shared assertion context.

    Test methods within a case run in random order (seeded, reported in the
    ``Run options`` header) unless ``shuffle=False``. Random order exposes tests
    that depend on each other; each test still runs exactly once per run.

    Registering cases while ``run()`` is executing is not supported.
    """

    def __init__(
        self,
        output: OutputSink | None = None,
        seed: int | None = None,
        shuffle: bool = True,
        logger: logging.Logger | None = None,
    ):
        self.output = output if output is not None else default_sink()
        self.seed = seed
        self.shuffle = shuffle
        self.logger = logger if logger is not None else logging.getLogger("minitest")
        self.assertions = AssertionContext()
        self.state = RunState.IDLE
        self._cases: list[Any] = []

    def new_test_case(self, case: Any) -> None:
        """Register a case for the next run. Its shape is checked at discovery."""
        self._cases.append(case)

    def list_test_cases(self) -> list[Any]:
        return list(self._cases)

    def pollute(self, target: Any, names: list[str] | None = None) -> list[str]:
        """Install this runner's assertions into ``target`` without clobbering callables."""
        return install(target, self.assertions, names)

    def order_tests(self, names: list[str], rng: random.Random) -> list[str]:
        ordered = list(names)
        if self.shuffle:
            rng.shuffle(ordered)
        return ordered

    def run(self) -> RunReport:
        """Run every registered case and write progress and reports to the sink."""
        self.state = RunState.RUNNING
        self.assertions.reset()

        seed = self.seed if self.seed is not None else random.randrange(0xFFFF)
        rng = random.Random(seed)
        report = RunReport(seed=seed if self.shuffle else None)

        self.logger.debug(f"Starting run with {len(self._cases)} case(s), seed={report.seed}")
        if self.shuffle:
            self.output.write(format_seed(seed))

        for case in list(self._cases):
            start = len(report.results)
            self._run_case(case, report, rng)

            self.state = RunState.REPORTING
            self._report_case(report, start)
            self.state = RunState.RUNNING

        if not self._cases:
            self.output.write(format_summary(report) + "\n")

        self.output.flush()
        self.state = RunState.IDLE
        self.logger.debug(
            f"Run finished: {report.tests} tests, {report.assertions} assertions, "
            f"{len(report.failures)} failures, {len(report.errors)} errors"
        )
        return report

    def _run_case(self, case: Any, report: RunReport, rng: random.Random) -> None:
        label = case_label(case)
        try:
            if isinstance(case, type):
                case = case()
            names = discover_tests(case)
        except Exception as e:
            self.logger.debug(f"Discovery failed for case '{label}': {e}")
            result = TestResult(case=label, test="<discovery>")
            self._record(result, report, e)
            report.results.append(result)
            self.output.write(PROGRESS_MARKERS[result.status])
            return

        self.logger.debug(f"Case '{label}': {len(names)} test(s) discovered")
        for name in self.order_tests(names, rng):
            result = self._run_test(case, label, name, report)
            report.tests += 1
            report.assertions = self.assertions.assertions
            report.results.append(result)
            self.output.write(PROGRESS_MARKERS[result.status])

    def _run_test(self, case: Any, label: str, name: str, report: RunReport) -> TestResult:
        """Run one test between the case's setup and teardown hooks."""
        result = TestResult(case=label, test=name)
        context = self.assertions
        setup = find_hook(case, "setup")
        teardown = find_hook(case, "teardown")
        before = context.assertions
        started = time.perf_counter()

        self.logger.debug(f"Running {label}#{name}")
        try:
            if setup is not None:
                setup(context)
            get_member(case, name)(context)
        except Exception as e:
            self._record(result, report, e)
        finally:
            if teardown is not None:
                try:
                    teardown(context)
                except Exception as e:
                    self._record(result, report, e)

        result.duration_seconds = time.perf_counter() - started
        result.assertions = context.assertions - before
        self.logger.debug(f"{label}#{name}: {result.status.value}")
        return result

    def _record(self, result: TestResult, report: RunReport, exc: Exception) -> None:
        kind = classify(exc)
        message = str(exc)
        if not message and kind is FailureKind.ASSERTION:
            message = "Failed assertion, no message given"
        failure = Failure(
            kind=kind,
            message=message,
            case=result.case,
            test=result.test,
            exc_type=type(exc).__name__,
        )
        if kind is FailureKind.ERROR:
            failure.traceback = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
            result.status = Status.ERROR
        elif result.status is Status.PASS:
            result.status = Status.FAILURE
        result.problems.append(failure)
        report.record(failure)

    def _report_case(self, report: RunReport, start: int) -> None:
        index = sum(len(r.problems) for r in report.results[:start])
        text = "\n"
        for result in report.results[start:]:
            for problem in result.problems:
                index += 1
                text += format_problem(index, problem)
        text += "\n" + format_summary(report) + "\n"
        self.output.write(text)
