"""b3prop: B3 (Zipkin) trace context extraction for OpenTelemetry."""

from b3prop import config
from b3prop.config import B3PropConfig, configure_logging, load_config
from b3prop.context import (
    B3MultiHeaderExtractor,
    B3Propagator,
    B3SingleHeaderExtractor,
    build_span_context,
    extract_b3,
    extract_first_valid,
)
from b3prop.errors import B3PropError, ConfigError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "config",
    "B3PropConfig",
    "configure_logging",
    "load_config",
    "B3MultiHeaderExtractor",
    "B3Propagator",
    "B3SingleHeaderExtractor",
    "build_span_context",
    "extract_b3",
    "extract_first_valid",
    "B3PropError",
    "ConfigError",
    "ValidationError",
]
