"""Delimiter pair table consulted by auto-pairing and paired delete."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

PAIRS: Mapping[str, str] = MappingProxyType(
    {
        "{": "}",
        "[": "]",
        "(": ")",
        '"': '"',
        "'": "'",
        "`": "`",
    }
)

QUOTES = frozenset({'"', "'", "`"})
BRACKET_OPENERS = frozenset({"{", "[", "("})
BRACKET_CLOSERS = frozenset({"}", "]", ")"})


def is_empty_pair(before: str, after: str) -> bool:
    """True when ``before``+``after`` is an opener immediately followed by its closer."""

    return bool(before) and bool(after) and PAIRS.get(before) == after


__all__ = [
    "PAIRS",
    "QUOTES",
    "BRACKET_OPENERS",
    "BRACKET_CLOSERS",
    "is_empty_pair",
]
