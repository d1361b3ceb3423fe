"""Logging, metrics and tracing helpers shared by the highlighter.

Metrics are registered with the default :mod:`prometheus_client` registry and
spans go through the OpenTelemetry API, which stays a no-op until the host
installs an SDK. Neither is allowed to interrupt a highlighting pass.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry import trace
from prometheus_client import REGISTRY, Counter, Histogram


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Adapter that renders structured context inline with messages."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra)
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        event_context: Dict[str, Any] = dict(self.extra)
        provided = kwargs.pop("context", None)
        if isinstance(provided, dict):
            event_context.update(provided)
        if event_context:
            payload = json.dumps(event_context, sort_keys=True, default=str)
            msg = f"{msg} | {payload}"
        return msg, kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a project logger with optional bound context."""

    return StructuredLoggerAdapter(logging.getLogger(name), context)


def _registered(name: str) -> Any:
    # prometheus_client stores counters under their base name without ``_total``.
    collectors = getattr(REGISTRY, "_names_to_collectors", {})
    return collectors.get(name) or collectors.get(name.removesuffix("_total"))


class CounterHandle:
    """Thin wrapper around a Prometheus counter."""

    def __init__(self, impl: Optional[Counter]) -> None:
        self._impl = impl

    def inc(self, amount: float = 1.0) -> None:
        if self._impl is not None:
            self._impl.inc(amount)


class HistogramHandle:
    """Thin wrapper around a Prometheus histogram."""

    def __init__(self, impl: Optional[Histogram]) -> None:
        self._impl = impl

    def observe(self, value: float) -> None:
        if self._impl is not None:
            self._impl.observe(value)

    @contextmanager
    def time(self) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(time.perf_counter() - start)


def create_counter(name: str, documentation: str) -> CounterHandle:
    """Create (or re-use) a counter registered under ``name``."""

    try:
        impl = Counter(name, documentation)
    except ValueError:
        # Duplicated timeseries: the module was imported twice.
        impl = _registered(name)
    return CounterHandle(impl)


def create_histogram(name: str, documentation: str) -> HistogramHandle:
    """Create (or re-use) a histogram registered under ``name``."""

    try:
        impl = Histogram(name, documentation)
    except ValueError:
        impl = _registered(name)
    return HistogramHandle(impl)


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None):
    """Start an OpenTelemetry span named ``name``."""

    tracer = trace.get_tracer("rhyme_highlighter")
    with tracer.start_as_current_span(name) as span:
        if attributes:
            add_span_attributes(span, attributes)
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    """Attach ``attributes`` to ``span`` when one is active."""

    if span is None:
        return
    for key, value in attributes.items():
        if isinstance(key, str):
            span.set_attribute(key, value)


__all__ = [
    "StructuredLoggerAdapter",
    "get_logger",
    "CounterHandle",
    "HistogramHandle",
    "create_counter",
    "create_histogram",
    "start_span",
    "add_span_attributes",
]
