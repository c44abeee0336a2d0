"""
Folio Server - Number Parser

Helpers for turning volume and chapter range strings ("3", "1-3", "2.5")
into numbers.
"""

import re

_RANGE_PATTERN = re.compile(r"^[\d\-.]+$")


def _Tokens(range_text: str) -> list:
    return [float(token) for token in range_text.replace("_", "").split("-") if token]


def MinNumberFromRange(range_text: str) -> float:
    """
    Lowest number in a range string, 0.0 when the string is not numeric

    Examples:
        "1-3" -> 1.0, "5" -> 5.0, "Special" -> 0.0
    """
    if not range_text or not _RANGE_PATTERN.match(range_text):
        return 0.0
    try:
        tokens = _Tokens(range_text)
    except ValueError:
        return 0.0
    return min(tokens) if tokens else 0.0


def MaxNumberFromRange(range_text: str) -> float:
    """Highest number in a range string, 0.0 when the string is not numeric"""
    if not range_text or not _RANGE_PATTERN.match(range_text):
        return 0.0
    try:
        tokens = _Tokens(range_text)
    except ValueError:
        return 0.0
    return max(tokens) if tokens else 0.0
