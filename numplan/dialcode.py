"""Dial-code disambiguation for digit-only E.164 strings."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

# Two-digit ITU codes that are never the start of a three-digit code
# (21x, 22x, 35x, 50x, 59x ... resolve as three digits).
TWO_DIGIT_DIAL_CODES: FrozenSet[str] = frozenset(
    """
    20 27 30 31 32 33 34 36 39 40 41 43 44 45 46 47 48 49 51 52 53 54 55 56 57 58
    60 61 62 63 64 65 66 81 82 86 90 91 92 93 94 95 98
    """.split()
)

NANP_DIAL_CODE = "1"
MIN_RESOLVABLE_DIGITS = 10

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class DialCodeSplit:
    dial_code: str
    national_number: str


def digits_only(raw: Optional[str]) -> str:
    """Strip everything but ASCII digits from ``raw``."""

    if not raw or not isinstance(raw, str):
        return ""
    return _NON_DIGITS.sub("", raw)


def resolve_dial_code(digits: str) -> Optional[DialCodeSplit]:
    """Split a digit-only string into dial code and national number.

    NANP wins first, then the two-digit allow-list, then three digits.
    Strings shorter than ten digits never resolve.
    """

    if digits.startswith(NANP_DIAL_CODE) and len(digits) >= 11:
        return DialCodeSplit(NANP_DIAL_CODE, digits[1:])
    if len(digits) < MIN_RESOLVABLE_DIGITS:
        return None
    two = digits[:2]
    if two in TWO_DIGIT_DIAL_CODES:
        return DialCodeSplit(two, digits[2:])
    return DialCodeSplit(digits[:3], digits[3:])


def split_e164(value: Optional[str]) -> Optional[DialCodeSplit]:
    """Like :func:`resolve_dial_code` but accepts a formatted ``+`` number."""

    digits = digits_only(value)
    if not digits:
        return None
    return resolve_dial_code(digits)


__all__ = [
    "DialCodeSplit",
    "NANP_DIAL_CODE",
    "TWO_DIGIT_DIAL_CODES",
    "digits_only",
    "resolve_dial_code",
    "split_e164",
]
