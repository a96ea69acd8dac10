"""Validation and construction of span contexts from raw B3 header fields.

Parsing is a pure function returning a tagged result. ``build_span_context``
collapses that result into either a valid remote ``SpanContext`` or
``INVALID_SPAN_CONTEXT``; malformed headers from peers are ordinary traffic,
so failures are logged at INFO and never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from opentelemetry.trace import (
    INVALID_SPAN_CONTEXT,
    INVALID_SPAN_ID,
    INVALID_TRACE_ID,
    SpanContext,
    TraceFlags,
)
from opentelemetry.trace.span import DEFAULT_TRACE_STATE

from b3prop.errors import ValidationError
from b3prop.utils.helpers import is_lower_hex, pad_left, parse_span_id, parse_trace_id

logger = logging.getLogger(__name__)

MAX_TRACE_ID_LENGTH = 32
MAX_SPAN_ID_LENGTH = 16
TRUE_INT = "1"

SAMPLED_FLAGS = TraceFlags(TraceFlags.SAMPLED)
NOT_SAMPLED_FLAGS = TraceFlags(TraceFlags.DEFAULT)

# Longest header fragment echoed back into diagnostics
_PREVIEW_LENGTH = 64


@dataclass(frozen=True)
class ParseSuccess:
    span_context: SpanContext

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseFailure:
    error: ValidationError

    @property
    def ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return str(self.error)


ParseResult = Union[ParseSuccess, ParseFailure]


def is_trace_id_valid(value: Optional[str]) -> bool:
    return bool(value) and len(value) <= MAX_TRACE_ID_LENGTH


def is_span_id_valid(value: Optional[str]) -> bool:
    return bool(value) and len(value) <= MAX_SPAN_ID_LENGTH


def is_sampled(value: Optional[str]) -> bool:
    """Accept either "1" or "true" (any case) as the sampled decision."""
    if value is None:
        return False
    return value == TRUE_INT or value.lower() == "true"


def _preview(value: Optional[str]) -> Optional[str]:
    if value is None or len(value) <= _PREVIEW_LENGTH:
        return value
    return value[:_PREVIEW_LENGTH] + "..."


def _failure(message: str, **details: Optional[str]) -> ParseFailure:
    return ParseFailure(
        ValidationError(message, {k: repr(_preview(v)) for k, v in details.items()})
    )


def parse_span_context(
    trace_id: Optional[str],
    span_id: Optional[str],
    sampled: Optional[str],
) -> ParseResult:
    """
    Parse raw B3 fields into a remote SpanContext.

    Trace ids shorter than 32 characters are left-padded with zeros, so a
    64-bit B3 trace id occupies the low half of the 128-bit space. Span ids
    are never padded.

    Args:
        trace_id: Raw trace id header value
        span_id: Raw span id header value
        sampled: Raw sampled header value, may be None

    Returns:
        ParseSuccess with the context, or ParseFailure describing the problem
    """
    if not is_trace_id_valid(trace_id):
        return _failure("Invalid TraceId in B3 header", trace_id=trace_id)
    if not is_span_id_valid(span_id):
        return _failure("Invalid SpanId in B3 header", span_id=span_id)

    padded_trace_id = pad_left(trace_id, MAX_TRACE_ID_LENGTH)
    if not is_lower_hex(padded_trace_id):
        return _failure("TraceId is not lowercase hex", trace_id=trace_id)
    if len(span_id) != MAX_SPAN_ID_LENGTH:
        return _failure(
            f"SpanId must be {MAX_SPAN_ID_LENGTH} hex characters", span_id=span_id
        )
    if not is_lower_hex(span_id):
        return _failure("SpanId is not lowercase hex", span_id=span_id)

    trace_id_value = parse_trace_id(padded_trace_id)
    span_id_value = parse_span_id(span_id)
    if trace_id_value == INVALID_TRACE_ID:
        return _failure("TraceId is all zeros", trace_id=trace_id)
    if span_id_value == INVALID_SPAN_ID:
        return _failure("SpanId is all zeros", span_id=span_id)

    trace_flags = SAMPLED_FLAGS if is_sampled(sampled) else NOT_SAMPLED_FLAGS
    return ParseSuccess(
        SpanContext(
            trace_id=trace_id_value,
            span_id=span_id_value,
            is_remote=True,
            trace_flags=trace_flags,
            trace_state=DEFAULT_TRACE_STATE,
        )
    )


def build_span_context(
    trace_id: Optional[str],
    span_id: Optional[str],
    sampled: Optional[str],
) -> SpanContext:
    """Return the parsed SpanContext, or INVALID_SPAN_CONTEXT on any failure."""
    result = parse_span_context(trace_id, span_id, sampled)
    if isinstance(result, ParseSuccess):
        return result.span_context
    logger.info(
        "Error parsing B3 header: %s. Returning INVALID span context.", result.reason
    )
    return INVALID_SPAN_CONTEXT
