from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterator

logger = logging.getLogger("pykeyset")


@dataclass(frozen=True)
class PlanEvent:
    """Represents a single pagination plan for tracing."""

    table: str
    sort_column: str | None = None
    direction: str | None = None
    page_mode: str | None = None
    duration_ms: float = 0.0
    error: str | None = None


class _ObservabilityState:
    """Global mutable state for observability."""

    def __init__(self) -> None:
        self.enabled: bool = False
        self.slow_plan_threshold_ms: float = 5.0
        self.listeners: list[Callable[[PlanEvent], Any]] = []
        self.events: list[PlanEvent] = []
        self.capture_events: bool = False


_state = _ObservabilityState()


def enable_tracing(slow_plan_ms: float = 5.0, capture_events: bool = False) -> None:
    """Enable plan tracing and observability."""
    _state.enabled = True
    _state.slow_plan_threshold_ms = slow_plan_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Disable tracing and clear all state."""
    _state.enabled = False
    _state.slow_plan_threshold_ms = 5.0
    _state.listeners.clear()
    _state.events.clear()
    _state.capture_events = False


def get_events() -> list[PlanEvent]:
    """Return captured events."""
    return list(_state.events)


def clear_events() -> None:
    """Clear captured events."""
    _state.events.clear()


def add_listener(callback: Callable[[PlanEvent], Any]) -> None:
    """Register a listener that receives a PlanEvent for each plan."""
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[PlanEvent], Any]) -> None:
    """Remove a previously registered listener."""
    _state.listeners.remove(callback)


def emit_event(event: PlanEvent) -> None:
    """Emit a plan event: store, log slow plans, notify listeners."""
    if not _state.enabled:
        return

    if _state.capture_events:
        _state.events.append(event)

    if event.duration_ms > _state.slow_plan_threshold_ms:
        logger.warning(
            "Slow plan: %s page on %s took %.1fms (threshold: %.1fms)",
            event.page_mode or "failed",
            event.table,
            event.duration_ms,
            _state.slow_plan_threshold_ms,
        )

    for listener in _state.listeners:
        listener(event)

    _try_emit_otel_span(event)


def _try_emit_otel_span(event: PlanEvent) -> None:
    """Attempt to emit an OpenTelemetry span if the library is available."""
    try:
        from opentelemetry import trace
    except ImportError:
        return

    attributes = {f"pykeyset.{name}": value for name, value in asdict(event).items() if value is not None}
    with trace.get_tracer("pykeyset").start_as_current_span("pykeyset.paginate", attributes=attributes):
        pass


@contextmanager
def track_plan(table: str, sort_column: str | None = None, direction: str | None = None) -> Iterator[dict[str, Any]]:
    """Context manager that times a plan and emits a PlanEvent."""
    if not _state.enabled:
        yield {"page_mode": None}
        return

    start = time.perf_counter()
    ctx: dict[str, Any] = {"page_mode": None}
    error: str | None = None
    try:
        yield ctx
    except Exception as exc:
        error = type(exc).__name__
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        event = PlanEvent(
            table=table,
            sort_column=sort_column,
            direction=direction,
            page_mode=ctx.get("page_mode"),
            duration_ms=duration_ms,
            error=error,
        )
        emit_event(event)
