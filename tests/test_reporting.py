from junitparser import Error, Failure, JUnitXml

from minitest.assertions.base import FailureKind
from minitest.reporting.console import format_problem, format_summary
from minitest.reporting.junit import build_junit, write_junit
from minitest import results


class MixedCase:
    def test_pass(self, t):
        t.assert_(True)

    def test_fail(self, t):
        t.assert_equal(1, 2)

    def test_error(self, t):
        raise KeyError("missing")


def _run(make_runner, **kwargs):
    runner = make_runner(**kwargs)
    runner.new_test_case(MixedCase())
    return runner.run()


def test_write_junit(make_runner, tmp_path):
    report = _run(make_runner)
    path = write_junit(report, tmp_path / "out" / "junit.xml")

    xml = JUnitXml.fromfile(str(path))
    suites = list(xml)
    assert len(suites) == 1
    suite = suites[0]
    assert suite.name == "MixedCase"
    assert suite.tests == 3
    assert suite.failures == 1
    assert suite.errors == 1

    props = {p.name: p.value for p in suite.properties()}
    assert props["assertions"] == "2"
    assert "seed" not in props

    outcomes = {case.name: case.result for case in suite}
    assert outcomes["test_pass"] == []
    assert isinstance(outcomes["test_fail"][0], Failure)
    assert outcomes["test_fail"][0].message == "Expected 1, not 2."
    assert isinstance(outcomes["test_error"][0], Error)
    assert "KeyError" in outcomes["test_error"][0].text


def test_junit_records_seed_when_shuffled(make_runner):
    report = _run(make_runner, shuffle=True, seed=99)
    suite = next(iter(build_junit(report)))
    props = {p.name: p.value for p in suite.properties()}
    assert props["seed"] == "99"


def test_junit_classname_is_case_label(make_runner):
    report = _run(make_runner)
    suite = next(iter(build_junit(report)))
    assert {case.classname for case in suite} == {"MixedCase"}


def test_format_summary():
    report = results.RunReport(tests=3, assertions=5)
    report.record(results.Failure(FailureKind.ASSERTION, "m", "C", "test_a"))
    assert format_summary(report) == "3 tests, 5 assertions, 1 failures, 0 errors."


def test_format_problem_error_includes_trace():
    failure = results.Failure(
        FailureKind.ERROR,
        "boom",
        "C",
        "test_b",
        exc_type="ValueError",
        traceback="Traceback (most recent call last):\n  File x\nValueError: boom\n",
    )
    text = format_problem(2, failure)
    assert text.startswith("\n  2) Error:\ntest_b(C):\nValueError: boom\n")
    assert "    Traceback (most recent call last):" in text
