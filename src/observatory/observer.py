"""Declarative observer methods with explicit wiring.

The ``@observe`` decorator doesn't create a wrapper - it attaches binding
metadata to the function. ``Observer`` subclasses collect that metadata once,
when the class is created, into ``__observer_bindings__``. Nothing is
registered until ``connect_observers()`` runs, which ``build_observer`` and
``Observer.create`` do right after construction.

Example:
    ```python
    class Spy(Observer):
        def __init__(self, dispatcher: Dispatcher, buffer: list[str]):
            self.dispatcher = dispatcher
            self.buffer = buffer

        @observe("post.publish")
        def log_publication(self, event: Event) -> None:
            self.buffer.append(f"Post titled {event.parameters['title']} was published")

        @observe("post.title", priority=-10)
        def title_filter(self, event: Event, value: str) -> str:
            return value.upper()


    spy = Spy.create(dispatcher, [])
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, NamedTuple, TypeVar

from .errors import InvalidArgument, InvalidPriority
from .observable import require_dispatcher
from .protocols import F, Priority, SignalName

if TYPE_CHECKING:
    from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)

T_Observer = TypeVar("T_Observer", bound="Observer")


class ObserverBinding(NamedTuple):
    """One declared registration: call ``method`` on ``signal``."""

    signal: SignalName
    method: str
    priority: Priority | None


def observe(*signals: SignalName, priority: Priority | None = None) -> Callable[[F], F]:
    """
    Mark a method as an observer for one or more signals.

    The decorator may be stacked to bind the same method with different
    priorities. Priorities are validated here so mistakes surface when the
    class body is executed rather than at wiring time.

    Args:
        signals: Signal names to observe
        priority: Optional stack position; lower runs earlier

    Raises:
        InvalidArgument: No signal given
        InvalidPriority: ``priority`` is not an int
    """
    if not signals:
        raise InvalidArgument("observe() requires at least one signal")
    if priority is not None and (not isinstance(priority, int) or isinstance(priority, bool)):
        raise InvalidPriority(f"Priority must be an int, got {priority!r}")

    def decorator(fn: F) -> F:
        existing = getattr(fn, "_observer_config", ())
        fn._observer_config = (  # type: ignore[attr-defined]
            *existing,
            *((str(signal), priority) for signal in signals),
        )
        return fn

    return decorator


class Observer:
    """Base class for objects whose methods observe signals.

    Subclasses set ``self.dispatcher`` during construction and declare
    observer methods with ``@observe``. Registration is a separate step,
    performed by ``connect_observers()``.
    """

    __observer_bindings__: ClassVar[tuple[ObserverBinding, ...]] = ()

    dispatcher: Dispatcher

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        # Walk base classes first so overrides replace inherited bindings
        declared: dict[str, tuple[tuple[SignalName, Priority | None], ...]] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                config = getattr(attr, "_observer_config", None)
                if config:
                    declared[name] = config
                elif name in declared:
                    del declared[name]

        cls.__observer_bindings__ = tuple(
            ObserverBinding(signal, name, priority)
            for name, config in declared.items()
            for signal, priority in config
        )

    @classmethod
    def create(cls: type[T_Observer], *args: Any, **kwargs: Any) -> T_Observer:
        """Construct an instance and connect its observers."""
        return build_observer(cls, *args, **kwargs)

    def connect_observers(self) -> list[tuple[SignalName, Callable[..., Any]]]:
        """Register every declared observer method with ``self.dispatcher``.

        Runs once per instance; later calls return the existing registrations
        without connecting anything again.

        Returns:
            ``(signal, bound_method)`` pairs that are connected

        Raises:
            MissingDispatcher: ``self.dispatcher`` is not set
        """
        connected: list[tuple[SignalName, Callable[..., Any]]] | None = getattr(
            self, "_connected_observers", None
        )
        if connected is not None:
            return list(connected)

        dispatcher = require_dispatcher(self)
        connected = []
        for binding in type(self).__observer_bindings__:
            method = getattr(self, binding.method)
            dispatcher.connect(binding.signal, method, binding.priority)
            connected.append((binding.signal, method))

        self._connected_observers = connected
        logger.debug(f"Connected {len(connected)} observer(s) for {type(self).__name__}")
        return list(connected)

    def disconnect_observers(self) -> int:
        """Remove the registrations made by ``connect_observers()``.

        Returns:
            Number of registrations removed
        """
        connected = getattr(self, "_connected_observers", None)
        if not connected:
            return 0

        dispatcher = require_dispatcher(self)
        removed = 0
        for signal, method in connected:
            if dispatcher.disconnect(signal, method) is not None:
                removed += 1

        self._connected_observers = None
        return removed


def build_observer(cls: type[T_Observer], *args: Any, **kwargs: Any) -> T_Observer:
    """Construct ``cls(*args, **kwargs)``, then wire up its declared observers.

    Two-phase construction: the object's own ``__init__`` completes before
    any registration happens, and registration happens exactly once.
    """
    instance = cls(*args, **kwargs)
    instance.connect_observers()
    return instance
