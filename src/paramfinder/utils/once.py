"""
Write-once cell.

Holds a value that is computed at most once and is read-only afterwards.
The factory runs under a lock so racing first callers see a single result.
A factory that raises leaves the cell empty.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class OnceCell(Generic[T]):
    """A value that is set at most once."""

    def __init__(self) -> None:
        self._value: T | None = None
        self._set = False
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._set

    def get(self) -> T | None:
        """Return the value, or None if it has not been set."""
        return self._value

    def get_or_init(self, factory: Callable[[], T]) -> T:
        """Return the value, computing it with ``factory`` on first use."""
        if self._set:
            return self._value  # type: ignore[return-value]

        with self._lock:
            if not self._set:
                self._value = factory()
                self._set = True
        return self._value  # type: ignore[return-value]

    def set_if_empty(self, value: T) -> T:
        """Store ``value`` unless the cell already holds one. Returns the held value."""
        return self.get_or_init(lambda: value)
