"""Mixin that lets an object raise events naming itself as the subject."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .errors import MissingDispatcher
from .event import Event
from .protocols import SignalName

if TYPE_CHECKING:
    from .dispatcher import Dispatcher


class Observable:
    """Shortcut methods for publishing events through ``self.dispatcher``.

    The methods mirror those of Dispatcher, except the Event is built for you
    with ``self`` as its subject. The mixin declares the ``dispatcher``
    attribute but does not set it; the class populates it itself, usually via
    constructor injection.

    Example:
        ```python
        class Post(Observable):
            def __init__(self, title: str, dispatcher: Dispatcher):
                self._title = title
                self.dispatcher = dispatcher

            def publish(self) -> None:
                self.notify("post.publish", title=self._title)

            @property
            def title(self) -> str:
                return self.filter("post.title", self._title).return_value
        ```
    """

    dispatcher: Dispatcher

    def notify(self, signal: SignalName, parameters: dict[str, Any] | None = None, **kwargs: Any) -> Event:
        """See ``Dispatcher.notify``."""
        event = self._make_event(signal, parameters, kwargs)
        self._require_dispatcher().notify(event)
        return event

    def notify_until(self, signal: SignalName, parameters: dict[str, Any] | None = None, **kwargs: Any) -> Event:
        """See ``Dispatcher.notify_until``."""
        event = self._make_event(signal, parameters, kwargs)
        self._require_dispatcher().notify_until(event)
        return event

    def filter(
        self,
        signal: SignalName,
        value: Any,
        parameters: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Event:
        """See ``Dispatcher.filter``."""
        event = self._make_event(signal, parameters, kwargs)
        self._require_dispatcher().filter(event, value)
        return event

    def _make_event(self, signal: SignalName, parameters: dict[str, Any] | None, kwargs: dict[str, Any]) -> Event:
        return Event(self, signal, {**(parameters or {}), **kwargs})

    def _require_dispatcher(self) -> Dispatcher:
        return require_dispatcher(self)


def require_dispatcher(owner: Any) -> Dispatcher:
    """Return ``owner.dispatcher`` or raise MissingDispatcher."""
    dispatcher = getattr(owner, "dispatcher", None)
    if dispatcher is None:
        raise MissingDispatcher(
            f"{owner.__class__.__name__} has no dispatcher; set self.dispatcher first"
        )
    return dispatcher
