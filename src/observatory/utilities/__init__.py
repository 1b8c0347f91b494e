from observatory.utilities.logger import (
    DEFAULT_FORMAT,
    PACKAGE_LOGGER,
    configure_library_logging,
    set_debug_logging,
)

__all__ = [
    "DEFAULT_FORMAT",
    "PACKAGE_LOGGER",
    "configure_library_logging",
    "set_debug_logging",
]
