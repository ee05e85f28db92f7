"""Timing spans for verbose runs.

``-v`` switches tracing on for the invocation.  Every ``@traced`` service
method then opens a root span, the expensive stages inside it (instance
expansion, frontier search, transform saving) open child spans with
:func:`trace_span`, and the finished tree is attached to the result as
``meta["telemetry"]`` for the verbose renderer.

With tracing off both helpers cost a single ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec

import structlog

from ifsctl.services.result import ServiceResult

_tracing: ContextVar[bool] = ContextVar("ifsctl_tracing", default=False)
_current_span: ContextVar[Span | None] = ContextVar("ifsctl_current_span", default=None)

log = structlog.get_logger("ifsctl.telemetry")


@dataclass
class Span:
    """One timed stage.  Counts describing the stage go in ``annotations``."""

    name: str
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    ended: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.ended is None:
            return 0.0
        return (self.ended - self.started) * 1000

    def annotate(self, **values: Any) -> None:
        self.annotations.update(values)

    def finish(self) -> None:
        self.ended = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def set_tracing(enabled: bool) -> None:
    """Turn span collection on or off for the current context."""
    _tracing.set(enabled)


def tracing_enabled() -> bool:
    return _tracing.get()


@contextmanager
def trace_span(name: str, **annotations: Any) -> Iterator[Span | None]:
    """Time a stage as a child of the active span.

    Yields None when tracing is off or no ``@traced`` call is running.
    """
    parent = _current_span.get() if _tracing.get() else None
    if parent is None:
        yield None
        return

    child = Span(name, annotations=dict(annotations))
    parent.children.append(child)
    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.finish()
        _current_span.reset(token)


_P = ParamSpec("_P")


def traced(method: Callable[_P, ServiceResult]) -> Callable[_P, ServiceResult]:  # noqa: UP047
    """Wrap a service method in a root span named after it.

    The span tree is merged into the returned result's ``meta``.  Failed
    results carry their error code as a root annotation.
    """

    @functools.wraps(method)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        if not _tracing.get():
            return method(*args, **kwargs)

        span = Span(method.__qualname__)
        token = _current_span.set(span)
        try:
            result = method(*args, **kwargs)
        except Exception:
            log.debug("span.raised", span=span.name, children=len(span.children))
            raise
        finally:
            span.finish()
            _current_span.reset(token)

        if result.error is not None:
            span.annotate(error=result.error.code)
        log.debug(
            "span.complete",
            span=span.name,
            duration_ms=round(span.duration_ms, 2),
            ok=result.ok,
        )
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})

    return wrapper
