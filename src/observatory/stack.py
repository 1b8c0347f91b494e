"""Priority-ordered observer storage for a single signal.

CONTENTS:
- StackEntry: An observer paired with its priority
- PriorityQueueStack: Sorted collection of entries with snapshot traversal

ORDERING: Lower priority values are traversed first. Entries registered
without an explicit priority receive 1, 2, 3, ... from a per-stack counter,
so they keep their registration order relative to each other.

THREAD SAFETY: Mutation and snapshotting are protected by threading.RLock
unless the stack is created with ``thread_safe=False``. Traversal always runs
over a snapshot, so observers may connect or disconnect while being called.
"""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from .errors import InvalidObserver, InvalidPriority
from .protocols import F, Priority


@dataclass(frozen=True, slots=True)
class StackEntry:
    """Registration record for one observer."""

    observer: Callable[..., Any]
    """The callable invoked on notification."""

    priority: Priority
    """Sort key; lower values are called earlier."""


class PriorityQueueStack:
    """Observers registered against one signal, kept sorted by priority.

    Despite the name this is not a LIFO stack: iteration yields observers in
    ascending priority order.

    Example:
        ```python
        stack = PriorityQueueStack()
        stack.push(audit, 10)
        stack.push(validate, -10)
        stack.push(store)
        list(stack)  # [validate, store, audit]
        ```
    """

    def __init__(self, thread_safe: bool = True):
        self._entries: list[StackEntry] = []
        """Entries sorted ascending by priority."""

        self._default_priority: Priority = 0
        """Last value handed out to an observer without explicit priority."""

        self._lock: contextlib.AbstractContextManager[Any] = (
            threading.RLock() if thread_safe else contextlib.nullcontext()
        )

    def push(self, observer: F, priority: Priority | None = None) -> F:
        """Add ``observer`` to the stack and re-sort.

        Args:
            observer: Callable object that acts as observer
            priority: Optional sort key; lower runs earlier. When omitted the
                next value of the internal counter is used.

        Returns:
            The original ``observer``, usable later as a handle for ``delete``.

        Raises:
            InvalidObserver: ``observer`` is not callable
            InvalidPriority: ``priority`` is given and is not an ``int``
        """
        if not callable(observer):
            raise InvalidObserver(f"Observer is not callable: {observer!r}")
        if priority is not None and (
            not isinstance(priority, int) or isinstance(priority, bool)
        ):
            raise InvalidPriority(f"Priority must be an int, got {priority!r}")

        with self._lock:
            if priority is None:
                priority = self._next_default_priority()
            self._entries.append(StackEntry(observer=observer, priority=priority))
            self._entries.sort(key=lambda entry: entry.priority)
        return observer

    def delete(self, observer: Callable[..., Any]) -> Callable[..., Any] | None:
        """Remove every entry for ``observer``.

        Observers are matched with ``==``: plain functions match only
        themselves, bound methods match the same function on the same instance.

        Returns:
            ``observer`` if at least one entry was removed, ``None`` otherwise.
        """
        with self._lock:
            remaining = [entry for entry in self._entries if entry.observer != observer]
            if len(remaining) == len(self._entries):
                return None
            self._entries = remaining
        return observer

    def size(self) -> int:
        """Number of entries currently held."""
        return len(self._entries)

    def snapshot(self) -> tuple[Callable[..., Any], ...]:
        """Observers in traversal order as of now."""
        with self._lock:
            return tuple(entry.observer for entry in self._entries)

    def entries(self) -> tuple[StackEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def _next_default_priority(self) -> Priority:
        self._default_priority += 1
        return self._default_priority

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, observer: object) -> bool:
        with self._lock:
            return any(entry.observer == observer for entry in self._entries)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size()})"
