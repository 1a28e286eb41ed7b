"""Duration-string parsing and ``HH:MM:SS`` formatting.

Accepted input is any number of ``<digits><unit>`` tokens, unit one of
``h``, ``m`` or ``s``, in any order and separated by anything at all::

    parse_duration("1h 2m 3s")   # 3723
    parse_duration("90m")        # 5400
    parse_duration("1h1h")       # 7200 (repeated units add up)
    parse_duration("soon")       # 0, nothing usable

Units are lowercase only and digits are ASCII only.  Everything that is
not part of a token is skipped, so parsing never fails; a result of ``0``
is how callers learn the text held no duration.
"""

from __future__ import annotations

import re
import sys


_TOKEN_RE = re.compile(r"([0-9]+)([hms])")

UNIT_SECONDS: dict[str, int] = {
    "h": 3600,
    "m": 60,
    "s": 1,
}

# Python 3.11+ refuses int<->str conversions past a digit limit (0 = none).
# Longer runs clamp to the largest value that still formats as HH:MM:SS.
_STR_DIGITS = getattr(sys, "get_int_max_str_digits", lambda: 0)()
MAX_DIGITS: int | None = _STR_DIGITS - 8 if _STR_DIGITS else None


def _to_int(digits: str) -> int:
    digits = digits.lstrip("0")
    if not digits:
        return 0
    if MAX_DIGITS is not None and len(digits) > MAX_DIGITS:
        return 10 ** MAX_DIGITS - 1
    return int(digits)


def parse_duration(text: str) -> int:
    """Return the total number of seconds encoded in *text* (0 if none)."""
    total = 0
    for digits, unit in _TOKEN_RE.findall(text):
        total += _to_int(digits) * UNIT_SECONDS[unit]
    return total


def format_hms(seconds: int) -> str:
    """Zero-padded ``HH:MM:SS``.  Hours are not wrapped at 24."""
    seconds = max(0, seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
