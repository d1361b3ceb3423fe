"""Per-pass telemetry for highlighting runs."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


class PassTelemetry:
    """Collects stage timings and counters for the most recent pass.

    Each :meth:`start_pass` discards the previous pass; the last finished
    pass stays available through :meth:`latest_snapshot` so a host can show
    what the latest recomputation cost.
    """

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._lock = threading.RLock()
        self._pass_id = 0
        self._listeners: list[TelemetryListener] = list(listeners or [])
        self._latest_snapshot: Dict[str, Any] = {}
        self._reset_state()

    def _reset_state(self) -> None:
        self._stages: Dict[str, float] = {}
        self._counters: Dict[str, int] = {}

    def _build_snapshot_locked(self) -> Dict[str, Any]:
        return {
            "pass_id": self._pass_id,
            "stages": dict(self._stages),
            "counters": dict(self._counters),
        }

    def _notify(self, event_type: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            listeners: Tuple[TelemetryListener, ...] = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, dict(payload))
            except Exception:
                # A broken listener must not cost the editor its highlights.
                continue

    def now(self) -> float:
        return float(self._time_fn())

    def start_pass(self) -> int:
        """Reset collected data and return the new pass id."""

        with self._lock:
            self._pass_id += 1
            self._reset_state()
            pass_id = self._pass_id
        self._notify("pass_started", {"pass_id": pass_id})
        return pass_id

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Time the enclosed block as stage ``name`` of the current pass."""

        start = self.now()
        try:
            yield
        finally:
            duration = max(0.0, self.now() - start)
            with self._lock:
                self._stages[name] = self._stages.get(name, 0.0) + duration
            self._notify("stage", {"name": name, "duration": duration})

    def count(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + int(amount)
            value = self._counters[name]
        self._notify("counter", {"name": name, "value": value})

    def finish_pass(self) -> Dict[str, Any]:
        """Freeze the current pass as the latest snapshot and return it."""

        with self._lock:
            snapshot = self._build_snapshot_locked()
            self._latest_snapshot = deepcopy(snapshot)
        self._notify("pass_finished", snapshot)
        return snapshot

    def latest_snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return deepcopy(self._latest_snapshot)

    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners = [entry for entry in self._listeners if entry is not listener]


class TelemetryLogger:
    """Listener that forwards telemetry events to the project logger."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._level = level

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        name = payload.get("name") or payload.get("pass_id") or "event"
        context = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items()})
        self._logger.log(self._level, f"Telemetry {event_type}: {name}", context=context)


__all__ = ["PassTelemetry", "TelemetryLogger", "TelemetryListener"]
