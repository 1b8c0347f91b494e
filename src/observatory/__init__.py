"""observatory - in-process publish/subscribe dispatcher.

Observables raise named signals through a Dispatcher; observers registered for
those signals react in priority order using one of three protocols: notify,
notify_until and filter.
"""

import logging

from .config import DispatcherConfig
from .dispatcher import Dispatcher
from .errors import (
    InvalidArgument,
    InvalidObserver,
    InvalidPriority,
    MissingDispatcher,
    ObservatoryError,
)
from .event import Event
from .observable import Observable
from .observer import Observer, ObserverBinding, build_observer, observe
from .protocols import FilterCallable, ObserverCallable, Priority, SignalName
from .stack import PriorityQueueStack, StackEntry

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Dispatcher",
    "DispatcherConfig",
    "Event",
    "PriorityQueueStack",
    "StackEntry",
    # Observable / observer helpers
    "Observable",
    "Observer",
    "ObserverBinding",
    "build_observer",
    "observe",
    # Errors
    "ObservatoryError",
    "InvalidArgument",
    "InvalidObserver",
    "InvalidPriority",
    "MissingDispatcher",
    # Type aliases and protocols
    "FilterCallable",
    "ObserverCallable",
    "Priority",
    "SignalName",
]
