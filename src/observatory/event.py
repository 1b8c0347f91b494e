"""Per-notification value object passed from the observable to its observers.

See ``examples/dispatcher/basic_usage.py`` for how an Event flows through a
Dispatcher and back to the code that raised it.
"""

from __future__ import annotations

from typing import Any

from .errors import InvalidArgument
from .protocols import SignalName

_MISSING: Any = object()


class Event:
    """Record of one occurrence raised by a subject.

    The same instance travels by reference through every observer and is
    returned to the caller, so observers can report back through
    ``parameters``, ``return_value`` and the processed flag.

    ``subject`` and ``signal`` are fixed at construction. ``processed`` only
    ever goes from False to True, via ``mark_processed()``.
    """

    __slots__ = ("_subject", "_signal", "_processed", "parameters", "return_value")

    def __init__(
        self,
        subject: Any = _MISSING,
        signal: Any = _MISSING,
        parameters: dict[str, Any] | None = None,
    ):
        """
        Args:
            subject: The object that raised the event; any value, including None
            signal: Signal name; non-string values are converted with ``str()``
            parameters: Additional values for observers (copied)

        Raises:
            InvalidArgument: ``subject`` omitted, ``signal`` omitted or None, or empty signal
        """
        if subject is _MISSING:
            raise InvalidArgument("Event requires a subject")
        if signal is _MISSING or signal is None:
            raise InvalidArgument("Event requires a signal")

        signal = str(signal)
        if not signal:
            raise InvalidArgument("Event signal must not be empty")

        self._subject = subject
        self._signal: SignalName = signal
        self._processed = False

        self.parameters: dict[str, Any] = dict(parameters or {})
        """Auxiliary values shared between the observable and observers (mutable)."""

        self.return_value: Any = None
        """Result slot for the observable; ``filter`` stores its final value here."""

    @property
    def subject(self) -> Any:
        """The object that raised this event."""
        return self._subject

    @property
    def signal(self) -> SignalName:
        """Name of the signal this event was raised for."""
        return self._signal

    @property
    def processed(self) -> bool:
        """Whether an observer has handled this event.

        Set by ``Dispatcher.notify_until`` when an observer returns a truthy value.
        """
        return self._processed

    def mark_processed(self) -> bool:
        """Mark the event as handled. Idempotent.

        Returns:
            Always True
        """
        self._processed = True
        return True

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(signal={self._signal!r}, "
            f"subject={self._subject!r}, processed={self._processed})"
        )
