"""B3 trace context extraction."""

from b3prop.context.extractors import (
    B3Extractor,
    B3Headers,
    B3MultiHeaderExtractor,
    B3SingleHeaderExtractor,
    create_extractor,
)
from b3prop.context.getters import HeaderGetter, default_getter
from b3prop.context.propagators import (
    B3Propagator,
    extract_b3,
    extract_first_valid,
    format_b3_ids,
)
from b3prop.context.validation import (
    NOT_SAMPLED_FLAGS,
    SAMPLED_FLAGS,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    build_span_context,
    parse_span_context,
)

__all__ = [
    "B3Extractor",
    "B3Headers",
    "B3MultiHeaderExtractor",
    "B3SingleHeaderExtractor",
    "create_extractor",
    "HeaderGetter",
    "default_getter",
    "B3Propagator",
    "extract_b3",
    "extract_first_valid",
    "format_b3_ids",
    "SAMPLED_FLAGS",
    "NOT_SAMPLED_FLAGS",
    "ParseSuccess",
    "ParseFailure",
    "ParseResult",
    "parse_span_context",
    "build_span_context",
]
