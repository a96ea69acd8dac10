"""B3 header names."""

SINGLE_HEADER = "b3"
TRACE_ID_HEADER = "X-B3-TraceId"
SPAN_ID_HEADER = "X-B3-SpanId"
SAMPLED_HEADER = "X-B3-Sampled"
PARENT_SPAN_ID_HEADER = "X-B3-ParentSpanId"
SINGLE_HEADER_DELIMITER = "-"
