from __future__ import annotations

from pathlib import Path

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from minitest.assertions.base import FailureKind
from minitest.results import RunReport


def build_junit(report: RunReport) -> JUnitXml:
    """Convert a run report into a JUnitXml document, one suite per test case."""
    xml = JUnitXml(name="minitest")
    suites: dict[str, TestSuite] = {}
    assertion_counts: dict[str, int] = {}

    for result in report.results:
        suite = suites.get(result.case)
        if suite is None:
            suite = TestSuite(result.case)
            if report.seed is not None:
                suite.add_property("seed", str(report.seed))
            suites[result.case] = suite
            assertion_counts[result.case] = 0
        assertion_counts[result.case] += result.assertions

        case = TestCase(result.test, classname=result.case, time=result.duration_seconds)
        outcomes = []
        for problem in result.problems:
            if problem.kind is FailureKind.ASSERTION:
                outcome = Failure(problem.message, problem.exc_type)
            else:
                outcome = Error(problem.message, problem.exc_type)
                outcome.text = problem.traceback
            outcomes.append(outcome)
        if outcomes:
            case.result = outcomes
        suite.add_testcase(case)

    for name, suite in suites.items():
        suite.add_property("assertions", str(assertion_counts[name]))
        # Use append (not +=) to preserve properties
        xml.append(suite)
    return xml


def write_junit(report: RunReport, path: Path) -> Path:
    """Write junit.xml for ``report`` to ``path`` and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    build_junit(report).write(str(path), pretty=True)
    return path
