from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

# Trace ID of the request or task on whose behalf repository calls are made.
# None means no caller has bound one.
trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)


@contextmanager
def bind_trace_id(trace_id: Optional[str]) -> Iterator[None]:
    """Set the trace ID for the enclosed block and restore the previous one after."""
    token = trace_id_var.set(trace_id)
    try:
        yield
    finally:
        trace_id_var.reset(token)
