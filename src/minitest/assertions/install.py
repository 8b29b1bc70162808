"""Opt-in installation of assertion operations into an ambient scope."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Iterable

from minitest.assertions.context import ASSERTION_NAMES, AssertionContext


def _lookup(target: Any, name: str) -> Any:
    if isinstance(target, MutableMapping):
        return target.get(name)
    return getattr(target, name, None)


def install(
    target: Any,
    context: AssertionContext,
    names: Iterable[str] | None = None,
) -> list[str]:
    """Bind assertion operations of ``context`` onto ``target``.

    ``target`` is a mutable mapping such as ``globals()`` or any object that
    accepts attributes. A name already bound to a callable on the target is
    left untouched. Returns the names that were installed.
    """
    installed = []
    for name in names if names is not None else ASSERTION_NAMES:
        if callable(_lookup(target, name)):
            continue
        operation = getattr(context, name)
        if isinstance(target, MutableMapping):
            target[name] = operation
        else:
            setattr(target, name, operation)
        installed.append(name)
    return installed
