import io

import pytest
from rich.console import Console

from observatory import Dispatcher


@pytest.fixture()
def dispatcher() -> Dispatcher:
    """A fresh dispatcher with default settings."""
    return Dispatcher()


@pytest.fixture()
def trace_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def trace_console(trace_buffer: io.StringIO) -> Console:
    """Plain-text rich console writing into ``trace_buffer``."""
    return Console(file=trace_buffer, width=200, color_system=None)
