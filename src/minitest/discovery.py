"""Test-method discovery on arbitrary test-case objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterator

TEST_PREFIX = "test"


def _member_names(case: Any) -> Iterator[str]:
    """Yield every attribute name reachable on ``case``, own members first.

    Mappings expose their keys. Other objects expose their instance
    ``__dict__`` followed by the ``__dict__`` of each class in the MRO, so
    methods inherited from a shared base class are found too.
    """
    if isinstance(case, Mapping):
        yield from case
        return

    own = getattr(case, "__dict__", None)
    if own is not None:
        yield from list(own)

    chain = case.__mro__ if isinstance(case, type) else type(case).__mro__
    for cls in chain:
        if cls is object:
            continue
        yield from list(vars(cls))


def get_member(case: Any, name: str) -> Any:
    if isinstance(case, Mapping):
        return case.get(name)
    return getattr(case, name, None)


def find_hook(case: Any, name: str) -> Callable[..., Any] | None:
    """Return the callable ``setup``/``teardown`` member of ``case``, if any."""
    hook = get_member(case, name)
    return hook if callable(hook) else None


def discover_tests(case: Any, prefix: str = TEST_PREFIX) -> list[str]:
    """Names of callable members starting with ``prefix``, in discovery order.

    Each name appears once even when it is defined at several levels of the
    class hierarchy.
    """
    seen: set[str] = set()
    names = []
    for name in _member_names(case):
        if not isinstance(name, str) or not name.startswith(prefix) or name in seen:
            continue
        seen.add(name)
        if callable(get_member(case, name)):
            names.append(name)
    return names


def case_label(case: Any) -> str:
    """Human-readable name for a registered case."""
    if isinstance(case, type):
        return case.__name__
    if isinstance(case, Mapping):
        return str(case.get("name", "Mapping"))
    name = getattr(case, "__name__", None)
    if isinstance(name, str):
        return name
    return type(case).__name__
