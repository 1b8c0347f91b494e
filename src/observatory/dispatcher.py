"""Dispatcher: signal registry and the three notification algorithms.

CONTENTS:
- Dispatcher: Maps signal names to PriorityQueueStack instances and delivers
  Events to the registered observers

NOTIFICATION MODES:
- notify(): Call every observer with the event; return values are ignored
- notify_until(): Call observers until one returns a truthy value, then mark
  the event processed and stop
- filter(): Pass a value through every observer in turn and store the final
  value in ``event.return_value``

CONCURRENCY: Delivery is synchronous on the caller's thread. Each notification
traverses a snapshot of the stack taken before the first observer runs, so
observers that connect or disconnect only affect later notifications.
Registry mutation is lock-protected unless ``thread_safe=False``.

ERROR HANDLING: Registration errors (InvalidObserver, InvalidPriority) are
raised at the offending call. Exceptions raised by observers are never caught:
they abort the remaining traversal and propagate to the caller. In debug mode
they are logged first.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .config import DispatcherConfig
from .errors import InvalidObserver
from .event import Event
from .protocols import F, Priority, SignalName
from .stack import PriorityQueueStack
from .tracing import EventTracer

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Central repository of observers, used by observables to send out signals.

    A Dispatcher is not a singleton: every instance keeps its own registry, so
    several independent dispatchers can coexist. Pass the instance to the
    objects that need it.

    TYPICAL USAGE:
    ```python
    dispatcher = Dispatcher()


    # Register with connect() ...
    def log_publication(event: Event) -> None:
        print(f"Published {event.parameters['title']}")


    dispatcher.connect("post.publish", log_publication)


    # ... or with the on() decorator
    @dispatcher.on("post.title", priority=-10)
    def shout(event: Event, value: str) -> str:
        return value.upper()


    dispatcher.notify(Event(post, "post.publish", {"title": "Hello"}))
    title = dispatcher.filter(Event(post, "post.title"), "hello").return_value
    ```

    PRIORITIES:
    - Lower values run first; negative values are allowed
    - Without an explicit priority, observers run in registration order
    - To run last, use a large positive number; to run first, a large negative one
    """

    def __init__(self, config: DispatcherConfig | None = None, **overrides: Any):
        """
        Initialize Dispatcher.

        Args:
            config: Dispatcher settings; defaults to ``DispatcherConfig()``
            **overrides: Individual DispatcherConfig fields, applied on top of ``config``
        """
        if config is None:
            config = DispatcherConfig(**overrides)
        elif overrides:
            config = DispatcherConfig(**{**config.model_dump(), **overrides})
        self._config = config
        self._debug = config.debug

        self._observers: dict[SignalName, PriorityQueueStack] = {}
        """Registered observers grouped by signal."""

        self._lock: contextlib.AbstractContextManager[Any] = (
            threading.RLock() if config.thread_safe else contextlib.nullcontext()
        )

        self._tracer = EventTracer(
            enabled=config.event_trace,
            verbosity=config.trace_verbosity,
            use_rich=config.trace_use_rich,
        )
        if config.event_trace:
            logger.debug("Event tracing enabled")

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    @property
    def observers(self) -> Mapping[SignalName, PriorityQueueStack]:
        """Read-only view of all registered observers grouped by signal."""
        return MappingProxyType(self._observers)

    def signals(self) -> list[SignalName]:
        """Signals that have ever had an observer registered."""
        with self._lock:
            return list(self._observers)

    def has_observers(self, signal: SignalName) -> bool:
        stack = self._observers.get(str(signal))
        return stack is not None and stack.size() > 0

    def count(self, signal: SignalName | None = None) -> int:
        """Number of registered observers for ``signal``, or across all signals."""
        with self._lock:
            if signal is not None:
                stack = self._observers.get(str(signal))
                return stack.size() if stack is not None else 0
            return sum(stack.size() for stack in self._observers.values())

    def connect(
        self,
        signal: SignalName,
        observer: F | None = None,
        priority: Priority | None = None,
    ) -> F:
        """Register ``observer`` for ``signal``.

        Args:
            signal: Name the observable uses to trigger observers
            observer: Function, lambda, closure or bound method reacting to the event
            priority: Optional position in the stack; lower runs earlier

        Returns:
            The original ``observer``, to be passed to ``disconnect`` later.

        Raises:
            InvalidObserver: No observer given, or it is not callable
            InvalidPriority: ``priority`` is not an int
        """
        if observer is None:
            raise InvalidObserver(
                "Use a function, method or the on() decorator to specify an observer"
            )

        signal = str(signal)
        with self._lock:
            stack = self._observers.get(signal)
            if stack is None:
                stack = PriorityQueueStack(thread_safe=self._config.thread_safe)
                stack.push(observer, priority)
                self._observers[signal] = stack
            else:
                stack.push(observer, priority)

        if self._debug:
            logger.debug(
                f"Connected {_describe(observer)} to {signal!r}"
                + (f" at priority {priority}" if priority is not None else "")
            )
        return observer

    def on(self, signal: SignalName, priority: Priority | None = None) -> Callable[[F], F]:
        """Decorator form of ``connect``.

        Example:
            ```python
            @dispatcher.on("pulp", priority=10)
            def dare(event: Event) -> None:
                print("I dare you!")


            @dispatcher.on("pulp", priority=-10)
            def double_dare(event: Event) -> None:
                print("I double-dare you!")

            # "pulp" prints the double dare first
            ```
        """

        def decorator(fn: F) -> F:
            return self.connect(signal, fn, priority)

        return decorator

    def disconnect(self, signal: SignalName, observer: Callable[..., Any]) -> Callable[..., Any] | None:
        """Remove ``observer`` from the stack for ``signal``.

        Returns:
            The removed observer, or None if it was not registered.
        """
        stack = self._observers.get(str(signal))
        if stack is None:
            return None

        removed = stack.delete(observer)
        if self._debug:
            if removed is None:
                logger.debug(f"{_describe(observer)} was not connected to {signal!r}")
            else:
                logger.debug(f"Disconnected {_describe(observer)} from {signal!r}")
        return removed

    def notify(self, event: Event) -> Event:
        """Call every observer for ``event.signal`` with the event.

        Returns:
            The same event, as modified by the observers.
        """
        observers = self._snapshot(event.signal)
        with self._dispatching(event, "notify", len(observers)):
            for observer in observers:
                observer(event)
        return event

    def notify_until(self, event: Event) -> Event:
        """Like ``notify``, but stop at the first observer returning a truthy value.

        That observer's event is marked processed; check ``event.processed``
        to learn whether any observer handled it.
        """
        observers = self._snapshot(event.signal)
        with self._dispatching(event, "notify_until", len(observers)):
            for observer in observers:
                if observer(event):
                    event.mark_processed()
                    break
        return event

    def filter(self, event: Event, value: Any) -> Event:
        """Let every observer transform ``value`` in turn.

        Each observer is called as ``observer(event, value)`` and its return
        value becomes the ``value`` of the next one. The final value is stored
        in ``event.return_value``; with no observers that is ``value`` itself.
        """
        observers = self._snapshot(event.signal)
        with self._dispatching(event, "filter", len(observers)):
            for observer in observers:
                value = observer(event, value)
            event.return_value = value
        return event

    def set_event_trace(self, enabled: bool, verbosity: int = 1, use_rich: bool = True) -> None:
        """
        Enable or disable event tracing with configurable output.

        Args:
            enabled: Whether to enable event tracing
            verbosity: Level of detail (0=minimal, 1=normal, 2=verbose)
            use_rich: Whether to use Rich formatting for output

        Raises:
            pydantic.ValidationError: ``verbosity`` outside 0-2

        The change is reflected in ``config``.
        """
        self._config = DispatcherConfig(
            **{
                **self._config.model_dump(),
                "event_trace": enabled,
                "trace_verbosity": verbosity,
                "trace_use_rich": use_rich,
            }
        )
        self._tracer.configure(enabled, verbosity, use_rich, owner=self.__class__.__name__)

    @property
    def event_trace_enabled(self) -> bool:
        return self._tracer.enabled

    def _snapshot(self, signal: SignalName) -> tuple[Callable[..., Any], ...]:
        stack = self._observers.get(signal)
        if stack is None:
            return ()
        return stack.snapshot()

    @contextlib.contextmanager
    def _dispatching(self, event: Event, mode: str, observer_count: int) -> Iterator[None]:
        start_time = time.perf_counter()
        try:
            yield
        except Exception as e:
            if self._debug:
                logger.exception(f"Observer failed during {mode}({event.signal!r})")
            self._tracer.trace(
                event,
                mode,
                observer_count,
                duration_ms=(time.perf_counter() - start_time) * 1000,
                error=e,
            )
            raise
        self._tracer.trace(
            event,
            mode,
            observer_count,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(signals={len(self._observers)}, observers={self.count()})"


def _describe(observer: Callable[..., Any]) -> str:
    return getattr(observer, "__qualname__", None) or repr(observer)
