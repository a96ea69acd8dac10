"""Header readers for mapping carriers."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from opentelemetry.propagators.textmap import Getter


class HeaderGetter(Getter[Mapping[str, Any]]):
    """
    Getter for dict-like header carriers.

    Looks the key up exactly first, then case-insensitively, since HTTP
    header names are case-insensitive but plain dicts are not.
    """

    def get(self, carrier: Mapping[str, Any], key: str) -> Optional[List[Any]]:
        value = carrier.get(key)
        if value is None:
            lowered = key.lower()
            for name, candidate in carrier.items():
                if isinstance(name, str) and name.lower() == lowered:
                    value = candidate
                    break
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def keys(self, carrier: Mapping[str, Any]) -> List[str]:
        return list(carrier.keys())


default_getter = HeaderGetter()


def extract_first_element(values: Optional[Sequence[Any]]) -> Optional[str]:
    """
    Return the first header value as a string.

    Empty values count as absent. Byte values (ASGI-style headers) are
    decoded as ASCII; anything undecodable or not text counts as absent.
    """
    if not values:
        return None
    first = values[0]
    if isinstance(first, (bytes, bytearray)):
        try:
            first = first.decode("ascii")
        except UnicodeDecodeError:
            return None
    if not isinstance(first, str):
        return None
    return first or None
