"""The assertion context handed to every test method."""

from __future__ import annotations

import re
from typing import Any, Callable

from minitest.assertions import checks
from minitest.assertions.base import AssertionFailure, Message, compose_message
from minitest.assertions.checks import Check

ASSERTION_NAMES = (
    "assert_",
    "refute",
    "assert_empty",
    "refute_empty",
    "assert_equal",
    "refute_equal",
    "assert_in_delta",
    "refute_in_delta",
    "assert_in_epsilon",
    "refute_in_epsilon",
    "assert_includes",
    "refute_includes",
    "assert_instance_of",
    "refute_instance_of",
    "assert_kind_of",
    "refute_kind_of",
    "assert_match",
    "refute_match",
    "assert_nil",
    "refute_nil",
    "assert_operator",
    "refute_operator",
    "assert_predicate",
    "refute_predicate",
    "assert_raises",
    "refute_raises",
    "assert_respond_to",
    "refute_respond_to",
    "assert_same",
    "refute_same",
    "assert_output",
    "assert_silent",
    "flunk",
    "pass_",
)


def _evaluate(test: Any) -> Any:
    return test() if callable(test) else test


class AssertionContext:
    """Assertion and refutation operations sharing a single counter.

    Test methods receive the context as an explicit argument::

        def test_addition(self, t):
            t.assert_equal(4, 2 + 2)

    Attributes:
        assertions: Number of ``assert_`` calls since the last :meth:`reset`.
            Every other operation goes through ``assert_``, so this counts
            each check exactly once.
    """

    def __init__(self) -> None:
        self.assertions = 0

    def reset(self) -> None:
        self.assertions = 0

    # -- primitives ---------------------------------------------------------

    def assert_(self, test: Any, msg: Message = None) -> bool:
        """Fail unless ``test`` (or ``test()`` when callable) is truthy.

        This is the only place the assertion counter is incremented; every
        other operation ends up here exactly once.
        """
        self.assertions += 1
        value = _evaluate(test)
        if not value:
            render = compose_message(msg, lambda: f"Expected {value!r} to be truthy")
            raise AssertionFailure(render())
        return True

    def refute(self, test: Any, msg: Message = None) -> bool:
        """Fail if ``test`` (or ``test()`` when callable) is truthy."""
        seen: list[Any] = []

        def negated() -> bool:
            seen.append(_evaluate(test))
            return not seen[-1]

        return self.assert_(
            negated,
            compose_message(msg, lambda: f"Expected {seen[-1]!r} to not be truthy"),
        )

    def _expect(self, check: Check, msg: Message, negated: bool = False) -> bool:
        text = compose_message(msg, check.describe(negated))
        if negated:
            return self.refute(check.condition, text)
        return self.assert_(check.condition, text)

    # -- derived assertions -------------------------------------------------

    def assert_empty(self, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.empty(obj), msg)

    def refute_empty(self, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.empty(obj), msg, negated=True)

    def assert_equal(self, expected: Any, actual: Any, msg: Message = None) -> bool:
        return self._expect(checks.equal(expected, actual), msg)

    def refute_equal(self, expected: Any, actual: Any, msg: Message = None) -> bool:
        return self._expect(checks.equal(expected, actual), msg, negated=True)

    def assert_in_delta(
        self,
        expected: Any,
        actual: Any,
        delta: float = checks.DEFAULT_DELTA,
        msg: Message = None,
    ) -> bool:
        return self._expect(checks.in_delta(expected, actual, delta), msg)

    def refute_in_delta(
        self,
        expected: Any,
        actual: Any,
        delta: float = checks.DEFAULT_DELTA,
        msg: Message = None,
    ) -> bool:
        return self._expect(checks.in_delta(expected, actual, delta), msg, negated=True)

    def assert_in_epsilon(
        self, a: Any, b: Any, epsilon: float = checks.DEFAULT_EPSILON, msg: Message = None
    ) -> bool:
        return self._expect(checks.in_epsilon(a, b, epsilon), msg)

    def refute_in_epsilon(
        self, a: Any, b: Any, epsilon: float = checks.DEFAULT_EPSILON, msg: Message = None
    ) -> bool:
        return self._expect(checks.in_epsilon(a, b, epsilon), msg, negated=True)

    def assert_includes(self, collection: Any, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.includes(collection, obj), msg)

    def refute_includes(self, collection: Any, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.includes(collection, obj), msg, negated=True)

    def assert_instance_of(self, cls: type, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.instance_of(cls, obj), msg)

    def refute_instance_of(self, cls: type, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.instance_of(cls, obj), msg, negated=True)

    def assert_kind_of(self, cls: Any, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.kind_of(cls, obj), msg)

    def refute_kind_of(self, cls: Any, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.kind_of(cls, obj), msg, negated=True)

    def assert_match(self, pattern: Any, actual: Any, msg: Message = None) -> bool:
        return self._expect(checks.match(pattern, actual), msg)

    def refute_match(self, pattern: Any, actual: Any, msg: Message = None) -> bool:
        return self._expect(checks.match(pattern, actual), msg, negated=True)

    def assert_nil(self, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.nil(obj), msg)

    def refute_nil(self, obj: Any, msg: Message = None) -> bool:
        return self._expect(checks.nil(obj), msg, negated=True)

    def assert_operator(self, left: Any, op: Any, right: Any, msg: Message = None) -> bool:
        return self._expect(checks.operator(left, op, right), msg)

    def refute_operator(self, left: Any, op: Any, right: Any, msg: Message = None) -> bool:
        return self._expect(checks.operator(left, op, right), msg, negated=True)

    def assert_predicate(self, obj: Any, name: str, msg: Message = None) -> bool:
        return self._expect(checks.predicate(obj, name), msg)

    def refute_predicate(self, obj: Any, name: str, msg: Message = None) -> bool:
        return self._expect(checks.predicate(obj, name), msg, negated=True)

    def assert_respond_to(self, obj: Any, name: str, msg: Message = None) -> bool:
        return self._expect(checks.respond_to(obj, name), msg)

    def refute_respond_to(self, obj: Any, name: str, msg: Message = None) -> bool:
        return self._expect(checks.respond_to(obj, name), msg, negated=True)

    def assert_same(self, expected: Any, actual: Any, msg: Message = None) -> bool:
        return self._expect(checks.same(expected, actual), msg)

    def refute_same(self, expected: Any, actual: Any, msg: Message = None) -> bool:
        return self._expect(checks.same(expected, actual), msg, negated=True)

    def assert_raises(
        self, expected: Any, callback: Callable[[], Any], msg: Message = None
    ) -> BaseException:
        """Fail unless ``callback()`` raises ``expected``; return the exception.

        ``expected`` may be an exception class, a tuple of classes or a class
        name. Exceptions of any other kind propagate out of the call.
        """
        check = checks.raises(expected, callback)
        self._expect(check, msg)
        return check.value

    def refute_raises(
        self, expected: Any, callback: Callable[[], Any], msg: Message = None
    ) -> bool:
        return self._expect(checks.raises(expected, callback), msg, negated=True)

    def assert_output(
        self,
        callback: Callable[[], Any],
        stdout: str | re.Pattern[str] | None = None,
        stderr: str | re.Pattern[str] | None = None,
        msg: Message = None,
    ) -> bool:
        """Run ``callback`` and compare what it printed.

        Each expected stream is either an exact string or a compiled pattern;
        ``None`` leaves that stream unchecked.
        """
        out, err = checks.capture_output(callback)
        if stdout is not None:
            self._expect(checks.stream_matches("stdout", stdout, out), msg)
        if stderr is not None:
            self._expect(checks.stream_matches("stderr", stderr, err), msg)
        return True

    def assert_silent(self, callback: Callable[[], Any], msg: Message = None) -> bool:
        return self.assert_output(callback, "", "", msg)

    def flunk(self, msg: Message = None) -> bool:
        return self.assert_(False, compose_message(msg, lambda: "Epic Fail!"))

    def pass_(self, msg: Message = None) -> bool:
        return self.assert_(True, msg)
