"""Exception hierarchy raised by the dispatcher and its helpers.

All errors are raised synchronously at the call that triggered them and are
never caught or retried inside the library.
"""

from __future__ import annotations


class ObservatoryError(Exception):
    """Base class for every error raised by observatory."""

    pass


class InvalidObserver(ObservatoryError, TypeError):
    """Registration target is not callable, or no observer was supplied."""

    pass


class InvalidPriority(ObservatoryError, TypeError):
    """An explicit priority was supplied that is not an integer."""

    pass


class InvalidArgument(ObservatoryError, ValueError):
    """An Event was constructed without its subject or signal."""

    pass


class MissingDispatcher(ObservatoryError, AttributeError):
    """An observable or observer was used before its dispatcher was set."""

    pass
