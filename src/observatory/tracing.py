"""Console tracing of dispatcher notifications.

One line is emitted per ``notify``/``notify_until``/``filter`` call with the
signal, the notification mode, how many observers were in the snapshot, the
duration and the outcome. Verbosity 2 adds a table of event parameters.

Output goes to a rich Console on stderr so it does not interfere with stdout.
With ``use_rich=False`` the same information is logged at DEBUG level.
"""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .event import Event

logger = logging.getLogger(__name__)

_console = Console(stderr=True)

_MODE_COLORS = {
    "notify": "cyan",
    "notify_until": "blue",
    "filter": "magenta",
}


def _truncate(value: Any, limit: int) -> str:
    text = str(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def _duration_style(duration_ms: float) -> str:
    # green under 10ms, yellow under 100ms
    if duration_ms < 10:
        return "bold green"
    return "bold yellow" if duration_ms < 100 else "bold red"


class EventTracer:
    """Formats and prints dispatch traces for one Dispatcher."""

    def __init__(
        self,
        enabled: bool = False,
        verbosity: int = 1,
        use_rich: bool = True,
        console: Console | None = None,
    ):
        self.enabled = enabled
        self.verbosity = verbosity
        self.use_rich = use_rich
        self.console = console or _console

    def configure(self, enabled: bool, verbosity: int = 1, use_rich: bool = True, owner: str = "Dispatcher") -> None:
        """Switch tracing on or off and announce the change.

        Callers validate ``verbosity``; Dispatcher routes it through DispatcherConfig.
        """
        self.enabled = enabled
        self.verbosity = verbosity
        self.use_rich = use_rich

        state = "enabled" if enabled else "disabled"
        msg = f"Event tracing {state} for {owner} (verbosity={verbosity})"
        if use_rich:
            self.console.print(Text(msg, style="green" if enabled else "yellow"))
        else:
            logger.info(msg)

    def format(
        self,
        event: Event,
        mode: str,
        observer_count: int,
        duration_ms: float | None = None,
        error: BaseException | None = None,
    ) -> tuple[Text, Table | None]:
        """Build the trace line and, at verbosity 2, the parameter table."""
        color = _MODE_COLORS.get(mode, "white")
        segments: list[tuple[str, str]] = [
            (event.signal, f"bold {color}"),
            (f"{mode}()", color),
            (f"observers: {observer_count}", "green")
            if observer_count
            else ("no observers", "dim red"),
        ]
        if duration_ms is not None:
            segments.append((f"{duration_ms:.2f}ms", _duration_style(duration_ms)))
        if mode == "notify_until":
            segments.append(
                ("processed", "bold green") if event.processed else ("unprocessed", "dim")
            )
        if error:
            segments.append((f"ERROR: {error!r}", "bold red"))

        text = Text(" | ").join(Text(part, style=style) for part, style in segments)

        table = None
        if self.verbosity >= 2:
            table = Table(show_header=True, header_style="bold cyan", box=None)
            table.add_column("Field", style="cyan", width=15)
            table.add_column("Value", overflow="fold")

            table.add_row("subject", _truncate(repr(event.subject), 100))
            for key, value in event.parameters.items():
                table.add_row("param:" + str(key), _truncate(value, 100))

            if mode == "filter" and error is None:
                table.add_row("return_value", _truncate(event.return_value, 200), style="green")

            if error:
                table.add_row("error", str(error), style="red")

        return text, table

    def trace(
        self,
        event: Event,
        mode: str,
        observer_count: int,
        duration_ms: float | None = None,
        error: BaseException | None = None,
    ) -> None:
        """Emit the trace for one finished notification, if enabled."""
        if not self.enabled:
            return

        if not self.use_rich:
            parts = [
                "[EVENT TRACE]",
                f"signal={event.signal!r}",
                f"mode={mode}",
                f"observers={observer_count}",
            ]
            if duration_ms is not None:
                parts.append(f"duration={duration_ms:.2f}ms")
            if mode == "notify_until":
                parts.append(f"processed={event.processed}")
            if mode == "filter" and error is None:
                parts.append(f"return_value={_truncate(event.return_value, 100)}")
            if error:
                parts.append(f"error={error!r}")
            if event.parameters:
                parts.append(f"params={_truncate(event.parameters, 200)}")
            logger.debug(" | ".join(parts))
            return

        text, table = self.format(event, mode, observer_count, duration_ms, error)

        if self.verbosity == 1 and event.parameters:
            summary = Text(" ")
            summary.append("[", style="dim")
            items = [
                f"{key}={_truncate(value, 20)}"
                for key, value in list(event.parameters.items())[:3]
            ]
            summary.append(", ".join(items), style="dim")
            if len(event.parameters) > 3:
                summary.append(f", +{len(event.parameters) - 3} more", style="dim italic")
            summary.append("]", style="dim")
            text.append(summary)

        self.console.print(text)
        if table is not None:
            self.console.print(table)
