"""Utility helpers shared across the :mod:`rhyme_highlighter` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .observability import (
    StructuredLoggerAdapter,
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    start_span,
)
from .telemetry import PassTelemetry, TelemetryLogger

__all__ = [
    "configure_logging",
    "PassTelemetry",
    "TelemetryLogger",
    "StructuredLoggerAdapter",
    "add_span_attributes",
    "create_counter",
    "create_histogram",
    "get_logger",
    "start_span",
]
