"""Shared telemetry: logging setup and tracing helpers."""

from pathconfig.shared.telemetry.logging import setup_logging
from pathconfig.shared.telemetry.tracing import (
    add_span_attributes,
    get_trace_id,
    traced,
)

__all__ = [
    "setup_logging",
    "traced",
    "add_span_attributes",
    "get_trace_id",
]
