"""Span helpers for service-layer operations."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

P = ParamSpec("P")
T = TypeVar("T")

# Keyword arguments recorded as span attributes. PINs, tokens and announcement
# text never reach a span.
SPAN_ARG_ALLOWLIST = frozenset({
    "role", "requested_role", "capability", "identity_id", "announcement_id",
    "category", "priority", "now", "skip", "limit",
})


def span_args(kwargs: dict[str, Any]) -> dict[str, str]:
    """Allowlisted kwargs as span attributes (arg.<name>: str(value))."""
    return {
        f"arg.{key}": str(getattr(value, "value", value))
        for key, value in kwargs.items()
        if key in SPAN_ARG_ALLOWLIST and value is not None
    }


def traced(
    operation_name: str, **attributes: str | int | float | bool
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Run a coroutine function inside a span named operation_name.

    Exceptions are recorded on the span, which is marked ERROR, and re-raised.

        @traced("expiry_sweeper.run")
        async def run(self, now=None): ...
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        tracer = trace.get_tracer(func.__module__)

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with tracer.start_as_current_span(
                operation_name,
                attributes={**attributes, **span_args(kwargs)},
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                    raise
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span (no-op when not recording)."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)
