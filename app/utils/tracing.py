from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

try:  # Optional OpenTelemetry import
    from opentelemetry import trace
except ImportError:  # pragma: no cover
    trace = None


@contextmanager
def traced_span(name: str, **attributes) -> Iterator[None]:
    if trace:
        tracer = trace.get_tracer(__name__)
        with tracer.start_as_current_span(name) as span:
            for key, value in attributes.items():
                span.set_attribute(key, value)
            yield
    else:
        yield
