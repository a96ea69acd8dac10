"""Extractors reading B3 headers in single-header or multi-header layout."""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional, Tuple

from opentelemetry.context import Context
from opentelemetry.propagators.textmap import CarrierT, Getter
from opentelemetry.trace import (
    INVALID_SPAN_CONTEXT,
    NonRecordingSpan,
    SpanContext,
    set_span_in_context,
)

from b3prop.constants import (
    PARENT_SPAN_ID_HEADER,
    SAMPLED_HEADER,
    SINGLE_HEADER,
    SINGLE_HEADER_DELIMITER,
    SPAN_ID_HEADER,
    TRACE_ID_HEADER,
)
from b3prop.context.getters import default_getter, extract_first_element
from b3prop.context.validation import build_span_context

logger = logging.getLogger(__name__)


class B3Headers(NamedTuple):
    """Raw B3 fields as read from a carrier."""

    trace_id: Optional[str]
    span_id: Optional[str]
    sampled: Optional[str] = None
    parent_span_id: Optional[str] = None


class B3Extractor:
    """
    Base class for B3 extractors.

    Subclasses implement ``read_headers``; validation and context assembly
    are shared.
    """

    def read_headers(
        self, carrier: CarrierT, getter: Getter[CarrierT] = default_getter
    ) -> Optional[B3Headers]:
        raise NotImplementedError

    @property
    def fields(self) -> Tuple[str, ...]:
        raise NotImplementedError

    def extract_span_context(
        self, carrier: CarrierT, getter: Getter[CarrierT] = default_getter
    ) -> SpanContext:
        """Return the remote SpanContext in the carrier, or INVALID_SPAN_CONTEXT."""
        headers = self.read_headers(carrier, getter)
        if headers is None:
            return INVALID_SPAN_CONTEXT
        return build_span_context(headers.trace_id, headers.span_id, headers.sampled)

    def extract(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        getter: Getter[CarrierT] = default_getter,
    ) -> Context:
        """
        Extract into an OpenTelemetry Context.

        A valid span context is set as the current span of the returned
        context. If nothing valid was found, ``context`` is returned as is
        (a fresh empty Context when None was passed).
        """
        if context is None:
            context = Context()
        span_context = self.extract_span_context(carrier, getter)
        if span_context is INVALID_SPAN_CONTEXT:
            return context
        return set_span_in_context(NonRecordingSpan(span_context), context)


class B3SingleHeaderExtractor(B3Extractor):
    """Reads ``{traceId}-{spanId}[-{sampled}][-{parentSpanId}]`` from one header."""

    def __init__(self, header: str = SINGLE_HEADER) -> None:
        self.header = header

    @property
    def fields(self) -> Tuple[str, ...]:
        return (self.header,)

    def read_headers(
        self, carrier: CarrierT, getter: Getter[CarrierT] = default_getter
    ) -> Optional[B3Headers]:
        value = extract_first_element(getter.get(carrier, self.header))
        if value is None:
            logger.debug("Missing or empty combined header: %s", self.header)
            return None

        parts = value.split(SINGLE_HEADER_DELIMITER)
        # trailing empty fields are not counted
        while parts and not parts[-1]:
            parts.pop()
        if len(parts) < 2 or len(parts) > 4:
            logger.info(
                "Invalid combined header '%s'. Returning INVALID span context.",
                self.header,
            )
            return None

        return B3Headers(
            trace_id=parts[0],
            span_id=parts[1],
            sampled=parts[2] if len(parts) >= 3 else None,
            parent_span_id=parts[3] if len(parts) == 4 else None,
        )


class B3MultiHeaderExtractor(B3Extractor):
    """Reads trace id, span id, sampled and parent span id from separate headers."""

    def __init__(
        self,
        trace_id_header: str = TRACE_ID_HEADER,
        span_id_header: str = SPAN_ID_HEADER,
        sampled_header: str = SAMPLED_HEADER,
        parent_span_id_header: str = PARENT_SPAN_ID_HEADER,
    ) -> None:
        self.trace_id_header = trace_id_header
        self.span_id_header = span_id_header
        self.sampled_header = sampled_header
        self.parent_span_id_header = parent_span_id_header

    @property
    def fields(self) -> Tuple[str, ...]:
        return (
            self.trace_id_header,
            self.span_id_header,
            self.sampled_header,
            self.parent_span_id_header,
        )

    def read_headers(
        self, carrier: CarrierT, getter: Getter[CarrierT] = default_getter
    ) -> Optional[B3Headers]:
        def first(key: str) -> Optional[str]:
            return extract_first_element(getter.get(carrier, key))

        trace_id = first(self.trace_id_header)
        span_id = first(self.span_id_header)
        if trace_id is None and span_id is None:
            logger.debug(
                "Missing B3 headers: %s, %s", self.trace_id_header, self.span_id_header
            )
            return None

        return B3Headers(
            trace_id=trace_id,
            span_id=span_id,
            sampled=first(self.sampled_header),
            parent_span_id=first(self.parent_span_id_header),
        )


def create_extractor(format: str = "multi", **headers: Any) -> B3Extractor:
    """
    Build the extractor for a header layout.

    Args:
        format: "multi" for X-B3-* headers, "single" for the combined header
        **headers: Header name overrides passed to the extractor

    Raises:
        ValueError: If the format is unknown
    """
    if format == "multi":
        return B3MultiHeaderExtractor(**headers)
    if format == "single":
        return B3SingleHeaderExtractor(**headers)
    raise ValueError(f"Unknown B3 format: {format!r}")
