"""Dispatcher configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DispatcherConfig(BaseModel):
    """Settings controlling logging, tracing and locking of a Dispatcher."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    debug: bool = Field(
        default=False,
        description="Log registrations and observer failures at debug level",
    )
    event_trace: bool = Field(
        default=False,
        description="Trace every notification to the console",
    )
    trace_verbosity: int = Field(
        default=1,
        ge=0,
        le=2,
        description="Trace detail: 0=minimal, 1=normal, 2=verbose",
    )
    trace_use_rich: bool = Field(
        default=True,
        description="Render traces with rich instead of the standard logger",
    )
    thread_safe: bool = Field(
        default=True,
        description="Guard registry mutation with a re-entrant lock",
    )
