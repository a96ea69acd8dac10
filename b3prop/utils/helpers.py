"""Hex codec helpers for B3 trace and span identifiers."""

from __future__ import annotations

from typing import Optional

_LOWER_HEX = frozenset("0123456789abcdef")


def pad_left(value: str, length: int, pad_char: str = "0") -> str:
    """
    Left-pad a string to the given length.

    Values already at or beyond ``length`` are returned unchanged.

    Args:
        value: String to pad
        length: Target length
        pad_char: Single padding character

    Returns:
        Padded string
    """
    if len(value) >= length:
        return value
    return pad_char * (length - len(value)) + value


def is_lower_hex(value: Optional[str]) -> bool:
    """Return True if value is non-empty and made only of lowercase hex digits."""
    if not value:
        return False
    return all(ch in _LOWER_HEX for ch in value)


def format_trace_id(trace_id: int) -> str:
    """
    Format an integer trace_id as a hex string.

    Args:
        trace_id: 128-bit trace id

    Returns:
        32-character hex string
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format an integer span_id as a hex string.

    Args:
        span_id: 64-bit span id

    Returns:
        16-character hex string
    """
    return format(span_id, '016x')


def parse_trace_id(hex_string: str) -> int:
    """
    Parse a hex string trace_id into its integer form.

    Callers check the charset first.
    """
    return int(hex_string, 16)


def parse_span_id(hex_string: str) -> int:
    """Parse a hex string span_id into its integer form."""
    return int(hex_string, 16)
