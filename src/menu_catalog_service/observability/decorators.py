"""OpenTelemetry tracing decorators."""

import functools
import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

from menu_catalog_service.models.errors import MenuCatalogError

F = TypeVar("F", bound=Callable[..., Any])


@contextmanager
def _operation_span(tracer: trace.Tracer, name: str, func_name: str, service_name: str) -> Iterator[Span]:
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("service.name", service_name)
        if name != func_name:
            span.set_attribute("function.name", func_name)

        try:
            yield span
            span.set_attribute("success", True)
        except Exception as e:
            span.set_attribute("success", False)
            span.set_attribute("error.type", type(e).__name__)
            # Expected failures (bad input, unknown id) are not exceptional for the span
            if isinstance(e, MenuCatalogError):
                span.set_attribute("error.http_status", e.http_status)
                span.set_attribute("error.message", e.message)
            else:
                span.record_exception(e)
            raise


def traced(span_name: str | None = None, service_name: str = "menu-catalog-svc") -> Callable[[F], F]:
    """Decorator to add OpenTelemetry tracing to a function.

    Creates a span around the decorated callable, marking success or failure.
    Menu catalog errors annotate the span with their HTTP status; anything else
    is recorded as an exception. Both sync and async functions are supported.

    Args:
        span_name: Name for the span (defaults to function name if not provided)
        service_name: Service name for span attributes

    Returns:
        Decorated function with tracing

    Example:
        @traced("add_menu_item")
        async def add_item(self, data: MenuItemCreate) -> MenuItem:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _operation_span(tracer, name, func.__name__, service_name):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _operation_span(tracer, name, func.__name__, service_name):
                return func(*args, **kwargs)

        return sync_wrapper  # type: ignore

    return decorator
