"""Utility functions for b3prop."""

from b3prop.utils.helpers import (
    format_trace_id,
    format_span_id,
    is_lower_hex,
    pad_left,
    parse_trace_id,
    parse_span_id,
)

__all__ = [
    "format_trace_id",
    "format_span_id",
    "is_lower_hex",
    "pad_left",
    "parse_trace_id",
    "parse_span_id",
]
