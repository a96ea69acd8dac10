"""B3 trace context extraction for host request pipelines."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from opentelemetry.context import Context
from opentelemetry.propagators.textmap import CarrierT, Getter
from opentelemetry.trace import INVALID_SPAN_CONTEXT, SpanContext

from b3prop.config import B3PropConfig, PropagationConfig
from b3prop.context.extractors import (
    B3Extractor,
    B3MultiHeaderExtractor,
    B3SingleHeaderExtractor,
    create_extractor,
)
from b3prop.context.getters import default_getter
from b3prop.utils.helpers import format_span_id, format_trace_id


class B3Propagator:
    """
    Extract-only B3 propagator bound to one header layout.

    Use ``from_config`` to build it from loaded configuration.
    """

    def __init__(self, format: str = "multi", extractor: Optional[B3Extractor] = None) -> None:
        self.format = format
        self._extractor = extractor or create_extractor(format)

    @classmethod
    def from_config(cls, config: B3PropConfig | PropagationConfig) -> "B3Propagator":
        propagation = config.propagation if isinstance(config, B3PropConfig) else config
        if propagation.format == "single":
            extractor: B3Extractor = B3SingleHeaderExtractor(propagation.single_header)
        else:
            extractor = B3MultiHeaderExtractor(
                trace_id_header=propagation.trace_id_header,
                span_id_header=propagation.span_id_header,
                sampled_header=propagation.sampled_header,
                parent_span_id_header=propagation.parent_span_id_header,
            )
        return cls(format=propagation.format, extractor=extractor)

    @property
    def extractor(self) -> B3Extractor:
        return self._extractor

    @property
    def fields(self) -> Tuple[str, ...]:
        """Header names this propagator reads."""
        return self._extractor.fields

    def extract(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        getter: Getter[CarrierT] = default_getter,
    ) -> Context:
        return self._extractor.extract(carrier, context=context, getter=getter)

    def extract_span_context(
        self, carrier: CarrierT, getter: Getter[CarrierT] = default_getter
    ) -> SpanContext:
        return self._extractor.extract_span_context(carrier, getter)


def extract_first_valid(
    carrier: CarrierT,
    extractors: Iterable[B3Extractor],
    getter: Getter[CarrierT] = default_getter,
) -> SpanContext:
    """Try each extractor in order and return the first valid span context."""
    for extractor in extractors:
        span_context = extractor.extract_span_context(carrier, getter)
        if span_context is not INVALID_SPAN_CONTEXT:
            return span_context
    return INVALID_SPAN_CONTEXT


def extract_b3(headers: Dict[str, str], format: str = "multi") -> Optional[SpanContext]:
    """
    Extract a B3 span context from a headers dict.

    Header names are matched case-insensitively.

    Returns:
        The remote SpanContext, or None if the headers hold no valid B3 context
    """
    span_context = create_extractor(format).extract_span_context(headers)
    if span_context is INVALID_SPAN_CONTEXT:
        return None
    return span_context


def format_b3_ids(span_context: SpanContext) -> Tuple[str, str]:
    """Return (trace_id, span_id) of a span context as lowercase hex strings."""
    return format_trace_id(span_context.trace_id), format_span_id(span_context.span_id)
