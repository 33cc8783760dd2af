from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil import parser as date_parser

from .rules import SIZE_PATTERNS

# ASCII word boundaries: "32W" must match but "32ª" must not.
_SIZE_RES = [re.compile(p, re.IGNORECASE | re.ASCII) for p in SIZE_PATTERNS]

_DEFAULT_DATE = datetime(1970, 1, 1)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def extract_size(title: str) -> str:
    """
    Pull a size out of a product title.

    Waist sizes win over NN/NN pairs, which win over letter sizes.
    Matches are upper-cased ("32w" -> "32W", "xl" -> "XL").
    """
    if not title:
        return ""
    for pattern in _SIZE_RES:
        m = pattern.search(title)
        if m:
            return m.group(0).upper()
    return ""


def parse_timestamp(raw: str) -> Optional[int]:
    """Parse a date cell into epoch milliseconds; naive values are read as UTC."""
    if not raw or not raw.strip():
        return None
    try:
        parsed = date_parser.parse(raw.strip(), default=_DEFAULT_DATE)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        # offsets of 24h or more only fail once the offset is applied
        return (parsed - _EPOCH) // timedelta(milliseconds=1)
    except (ValueError, OverflowError):
        return None
