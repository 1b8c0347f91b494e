from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(levelname)s %(name)s - %(message)s"

PACKAGE_LOGGER = "observatory"


def configure_library_logging(level: int = logging.INFO, format: str = DEFAULT_FORMAT, **kwargs):
    """Configure a basic logging setup for observatory if none is present.

    Applications that already configured the root logger are left untouched.
    """

    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    logging.basicConfig(level=level, format=format, **kwargs)


def set_debug_logging(enabled: bool = True) -> logging.Logger:
    """Raise or reset the level of every ``observatory.*`` logger.

    Pair with ``Dispatcher(debug=True)`` to see registrations and observer
    failures.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if enabled else logging.NOTSET)
    return package_logger
