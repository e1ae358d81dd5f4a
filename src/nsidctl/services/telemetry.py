"""Telemetry for service calls: ``@traced`` roots and ``trace_span`` steps.

Off unless ``--verbose`` turns it on. When on, each traced service call
becomes a root span, ``trace_span`` blocks inside it become children, and
the finished tree lands in ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from nsidctl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("nsidctl_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("nsidctl_span", default=None)

log = structlog.get_logger("nsidctl.telemetry")


@dataclass
class Span:
    """A timed step. ``duration_ms`` stays 0.0 until :meth:`finish`."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0
    started: float = field(default_factory=time.perf_counter, repr=False)

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def finish(self) -> None:
        self.duration_ms = (time.perf_counter() - self.started) * 1000

    def to_dict(self) -> dict[str, Any]:
        tree: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 3)}
        if self.annotations:
            tree["annotations"] = self.annotations
        if self.children:
            tree["children"] = [child.to_dict() for child in self.children]
        return tree


@contextmanager
def _active(span: Span) -> Generator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.finish()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a step of the running traced call.

    Yields None when telemetry is off or no traced call is running.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _active(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Run a service method as a root span and attach the tree to its result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        try:
            with _active(span):
                result = func(*args, **kwargs)
        except Exception:
            log.debug("span.complete", span_name=span.name, duration_ms=span.duration_ms, ok=False)
            raise

        ok = True
        if isinstance(result, ServiceResult):
            ok = result.ok
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 3),
            ok=ok,
            children=len(span.children),
        )
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn tracing on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
