"""Text rendering for progress markers, failure listings and the summary line."""

from __future__ import annotations

import textwrap

from minitest.assertions.base import FailureKind
from minitest.results import Failure, RunReport, Status

PROGRESS_MARKERS = {
    Status.PASS: ".",
    Status.FAILURE: "F",
    Status.ERROR: "E",
}


def format_seed(seed: int) -> str:
    return f"Run options: --seed {seed}\n\n"


def format_problem(index: int, failure: Failure) -> str:
    """Render one numbered failure or error entry."""
    header = f"{failure.test}({failure.case})"
    if failure.kind is FailureKind.ASSERTION:
        return f"\n  {index}) Failure:\n{header}:\n{failure.message}\n"

    text = f"\n  {index}) Error:\n{header}:\n{failure.exc_type}: {failure.message}\n"
    if failure.traceback:
        text += textwrap.indent(failure.traceback.rstrip("\n"), "    ") + "\n"
    return text


def format_summary(report: RunReport) -> str:
    return (
        f"{report.tests} tests, {report.assertions} assertions, "
        f"{len(report.failures)} failures, {len(report.errors)} errors."
    )
