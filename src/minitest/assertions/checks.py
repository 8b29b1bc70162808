"""Predicate builders shared by the assert and refute forms of each assertion.

Each builder returns a :class:`Check`: a condition thunk plus a description
that knows both polarities. ``AssertionContext`` turns a check into an
``assert_*`` call or a ``refute_*`` call, so every concept is written once.
"""

from __future__ import annotations

import contextlib
import io
import numbers
import operator as _operator
import re
from dataclasses import dataclass
from typing import Any, Callable

DEFAULT_DELTA = 0.001
DEFAULT_EPSILON = 0.001

_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "<": _operator.lt,
    "<=": _operator.le,
    "==": _operator.eq,
    "!=": _operator.ne,
    ">": _operator.gt,
    ">=": _operator.ge,
    "in": lambda a, b: a in b,
    "is": _operator.is_,
}


@dataclass(frozen=True)
class Check:
    """A condition and the description to use if it does not hold.

    Attributes:
        condition: Zero-argument predicate; evaluated by ``assert_``.
        expectation: Builds the default description. Receives ``True``
            when rendering the refute form.
        value: Optional payload handed back to the caller on success
            (e.g. the exception caught by a raises check).
    """

    condition: Callable[[], bool]
    expectation: Callable[[bool], str]
    value: Any = None

    def describe(self, negated: bool = False) -> Callable[[], str]:
        return lambda: self.expectation(negated)


def _to(negated: bool) -> str:
    return "to not" if negated else "to"


def loosely_equal(expected: Any, actual: Any) -> bool:
    """``==`` with numeric/string coercion, so ``1`` equals ``"1"``."""
    if expected == actual:
        return True
    if isinstance(actual, str) and isinstance(expected, numbers.Real):
        expected, actual = actual, expected
    if isinstance(expected, str) and isinstance(actual, numbers.Real):
        text = expected.strip()
        if not text:
            return actual == 0
        try:
            return float(text) == actual
        except ValueError:
            return False
    return False


def empty(obj: Any) -> Check:
    def condition() -> bool:
        if hasattr(obj, "__len__"):
            return len(obj) == 0
        return not vars(obj)

    return Check(condition, lambda negated: f"Expected {obj!r} {_to(negated)} be empty")


def equal(expected: Any, actual: Any) -> Check:
    def expectation(negated: bool) -> str:
        if negated:
            return f"Expected {actual!r} to not be equal to {expected!r}"
        return f"Expected {expected!r}, not {actual!r}"

    return Check(lambda: loosely_equal(expected, actual), expectation)


def in_delta(expected: Any, actual: Any, delta: float = DEFAULT_DELTA) -> Check:
    def expectation(negated: bool) -> str:
        diff = abs(expected - actual)
        return (
            f"Expected |{expected!r} - {actual!r}| ({diff!r}) "
            f"{_to(negated)} be <= {delta!r}"
        )

    return Check(lambda: abs(expected - actual) <= delta, expectation)


def in_epsilon(a: Any, b: Any, epsilon: float = DEFAULT_EPSILON) -> Check:
    return in_delta(a, b, min(abs(a), abs(b)) * epsilon)


def includes(collection: Any, obj: Any) -> Check:
    return Check(
        lambda: obj in collection,
        lambda negated: f"Expected {collection!r} {_to(negated)} include {obj!r}",
    )


def respond_to(obj: Any, name: str) -> Check:
    return Check(
        lambda: callable(getattr(obj, name, None)),
        lambda negated: (
            f"Expected {obj!r} ({type(obj).__name__}) {_to(negated)} respond to {name}"
        ),
    )


def same(expected: Any, actual: Any) -> Check:
    return Check(
        lambda: expected is actual,
        lambda negated: (
            f"Expected {actual!r} (id={id(actual)}) {_to(negated)} be the same as "
            f"{expected!r} (id={id(expected)})"
        ),
    )


def match(pattern: str | re.Pattern[str], actual: Any) -> Check:
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return Check(
        lambda: compiled.search(str(actual)) is not None,
        lambda negated: (
            f"Expected /{compiled.pattern}/ {_to(negated)} match {actual!r}"
        ),
    )


def nil(obj: Any) -> Check:
    return Check(
        lambda: obj is None,
        lambda negated: f"Expected {obj!r} {_to(negated)} be None",
    )


def instance_of(cls: type, obj: Any) -> Check:
    return Check(
        lambda: type(obj) is cls,
        lambda negated: (
            f"Expected {obj!r} {_to(negated)} be an instance of {cls.__name__}, "
            f"not {type(obj).__name__}"
        ),
    )


def kind_of(cls: type | tuple[type, ...], obj: Any) -> Check:
    return Check(
        lambda: isinstance(obj, cls),
        lambda negated: (
            f"Expected {obj!r} {_to(negated)} be a kind of {_names(cls)}, "
            f"not {type(obj).__name__}"
        ),
    )


def resolve_operator(op: str | Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    if callable(op):
        return op
    if op in _OPERATORS:
        return _OPERATORS[op]
    func = getattr(_operator, op, None)
    if func is None or op.startswith("_"):
        raise ValueError(f"Unknown operator: {op!r}")
    return func


def operator(left: Any, op: str | Callable[[Any, Any], Any], right: Any) -> Check:
    func = resolve_operator(op)
    label = op if isinstance(op, str) else getattr(op, "__name__", repr(op))
    return Check(
        lambda: bool(func(left, right)),
        lambda negated: f"Expected {left!r} {_to(negated)} be {label} {right!r}",
    )


def predicate(obj: Any, name: str) -> Check:
    return Check(
        lambda: bool(getattr(obj, name)()),
        lambda negated: f"Expected {obj!r} {_to(negated)} be {name}",
    )


def _names(expected: Any) -> str:
    if isinstance(expected, tuple):
        return " or ".join(_names(e) for e in expected)
    if isinstance(expected, str):
        return expected
    return expected.__name__


def exception_matches(exc: BaseException, expected: Any) -> bool:
    """Compare a raised exception against a class, tuple of classes or class name."""
    if isinstance(expected, tuple):
        return any(exception_matches(exc, e) for e in expected)
    if isinstance(expected, str):
        return any(cls.__name__ == expected for cls in type(exc).__mro__)
    return isinstance(exc, expected)


def raises(expected: Any, callback: Callable[[], Any]) -> Check:
    """Invoke ``callback`` and check whether it raised ``expected``.

    Exceptions of any other kind propagate unchanged, so a broken callback
    surfaces as an error rather than a silent pass or fail.
    """
    raised: BaseException | None = None
    try:
        callback()
    except Exception as exc:
        if not exception_matches(exc, expected):
            raise
        raised = exc

    def expectation(negated: bool) -> str:
        if negated:
            return (
                f"Expected {_names(expected)} to not be raised, "
                f"but {type(raised).__name__}: {raised} was raised"
            )
        return f"Expected {_names(expected)} to be raised, but nothing was raised"

    return Check(lambda: raised is not None, expectation, value=raised)


def capture_output(callback: Callable[[], Any]) -> tuple[str, str]:
    """Run ``callback`` and return what it wrote to stdout and stderr."""
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        callback()
    return out.getvalue(), err.getvalue()


def stream_matches(stream: str, expected: str | re.Pattern[str], actual: str) -> Check:
    if isinstance(expected, str):
        condition = lambda: actual == expected  # noqa: E731
        shown = repr(expected)
    else:
        condition = lambda: expected.search(actual) is not None  # noqa: E731
        shown = f"/{expected.pattern}/"
    return Check(
        condition,
        lambda negated: f"In {stream}: expected {shown} {_to(negated)} match {actual!r}",
    )
