"""Type aliases and callable protocols shared across the package."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .event import Event

SignalName = str
Priority = int
F = TypeVar("F", bound=Callable[..., Any])


@runtime_checkable
class ObserverCallable(Protocol):
    """Observer used with ``notify`` and ``notify_until``."""

    def __call__(self, event: Event) -> Any: ...


@runtime_checkable
class FilterCallable(Protocol):
    """Observer used with ``filter``; returns the value passed down the chain."""

    def __call__(self, event: Event, value: Any) -> Any: ...
