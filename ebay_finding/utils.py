"""Utility functions shared by the filter parser and the operation builders."""
import math
import re
from datetime import datetime, timezone
from typing import List, Mapping, Optional

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_TIMESTAMP_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?Z", re.ASCII
)
# Characters eBay treats as search operators inside keywords.
_KEYWORD_SEPARATORS = re.compile(r"[ ,()\"\-*@+]+")


def parse_int(value: str) -> Optional[int]:
    """Parse an optionally signed ASCII integer; None when malformed."""
    if not _INT_RE.fullmatch(value):
        return None
    return int(value)


def parse_float(value: str) -> Optional[float]:
    """Parse a finite decimal number; None when malformed."""
    if not _FLOAT_RE.fullmatch(value):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def parse_utc_timestamp(value: str) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp in UTC ("Z" suffix only)."""
    match = _TIMESTAMP_RE.fullmatch(value)
    if not match:
        return None
    year, month, day, hour, minute, second, fraction = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        return datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second),
            micros, tzinfo=timezone.utc,
        )
    except ValueError:
        return None


def split_keywords(keywords: str) -> List[str]:
    """Split a keyword query into individual words on eBay's operator characters."""
    return [k for k in _KEYWORD_SEPARATORS.split(keywords) if k]


def indexed_key(prefix: str, index: int, suffix: str = "") -> str:
    return f"{prefix}({index}){suffix}"


def has_indexed_key(params: Mapping[str, str], prefix: str, suffix: str = "") -> bool:
    """Whether any prefix(N)suffix key is present, whatever N is."""
    pattern = re.compile(re.escape(prefix) + r"\([0-9]+\)" + re.escape(suffix))
    return any(pattern.fullmatch(k) for k in params)


def scan_indexed(params: Mapping[str, str], prefix: str, suffix: str = "") -> List[str]:
    """Collect prefix(0)suffix, prefix(1)suffix, ... in order.

    The scan stops at the first missing index: gaps are never bridged, and
    indices that do not start at 0 yield nothing.
    """
    values: List[str] = []
    # A mapping with n keys cannot hold more than n consecutive indices.
    for i in range(len(params)):
        key = indexed_key(prefix, i, suffix)
        if key not in params:
            break
        values.append(params[key])
    return values


def is_valid_isbn(isbn: str) -> bool:
    """Check an ISBN-10 or ISBN-13 checksum."""
    if len(isbn) == 10:
        total = acc = 0
        for i, ch in enumerate(isbn):
            if ch.isascii() and ch.isdigit():
                digit = int(ch)
            elif i == 9 and ch == "X":
                digit = 10
            else:
                return False
            # Running sum of running sums == weights 10..1
            acc += digit
            total += acc
        return total % 11 == 0

    total = 0
    for i, ch in enumerate(isbn):
        if not (ch.isascii() and ch.isdigit()):
            return False
        total += int(ch) if i % 2 == 0 else int(ch) * 3
    return total % 10 == 0


def is_valid_ean(code: str) -> bool:
    """Check an EAN-8, UPC-A (12 digits) or EAN-13 checksum."""
    if not code or not all(ch.isascii() and ch.isdigit() for ch in code):
        return False
    n = len(code)
    total = 0
    for i, ch in enumerate(code[:-1]):
        digit = int(ch)
        tripled = (i % 2 == 0) if n in (8, 12) else (i % 2 == 1)
        total += digit * 3 if tripled else digit
    return (total + int(code[-1])) % 10 == 0
