"""b3prop error hierarchy and exceptions."""

from __future__ import annotations

from typing import Any, Dict, Optional


class B3PropError(Exception):
    """
    Base exception for all b3prop errors.

    ``details`` holds the offending values (header names, raw header
    fragments, config keys) so log lines show what was rejected.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details) if details else {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"


class ConfigError(B3PropError):
    """Raised when configuration is invalid or conflicting."""


class ValidationError(B3PropError):
    """Describes a B3 header that failed validation.

    Extraction never raises this; it travels inside a ParseFailure.
    """
