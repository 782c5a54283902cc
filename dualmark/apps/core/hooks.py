"""Extension points: named, ordered lists of callables.

An extension point threads a value through every registered callable in
priority order (lower runs first; equal priorities keep registration order)
and returns the result. Each app owns the points it invokes and other apps
register into them from ``AppConfig.ready()``.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

DEFAULT_PRIORITY = 10


class ExtensionPoint:
    """A fixed point at which registered callables may rewrite a value."""

    def __init__(self, name: str):
        self.name = name
        self._entries: list[tuple[int, int, Callable[..., Any]]] = []
        self._sequence = itertools.count()

    def __repr__(self) -> str:
        return f"<ExtensionPoint {self.name} ({len(self._entries)} registered)>"

    def __contains__(self, func: object) -> bool:
        return any(entry[2] == func for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, func: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        """Register ``func``. Registering the same callable twice is an error."""
        if func in self:
            raise ValueError(f"{func!r} is already registered on '{self.name}'")
        self._entries.append((priority, next(self._sequence), func))
        self._entries.sort(key=lambda entry: entry[:2])

    def unregister(self, func: Callable[..., Any]) -> bool:
        """Remove ``func``. Returns whether it was registered."""
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry[2] != func]
        return len(self._entries) != before

    def apply(self, value: Any, *args: Any, **kwargs: Any) -> Any:
        """Pass ``value`` through each callable; extra arguments go to every call."""
        for _priority, _seq, func in list(self._entries):
            value = func(value, *args, **kwargs)
        return value

    @contextmanager
    def registered(
        self, func: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> Iterator[None]:
        """Register ``func`` for the duration of a ``with`` block."""
        self.register(func, priority)
        try:
            yield
        finally:
            self.unregister(func)
