"""Decoders for the non-numeric header encodings.

Petra stores text in fixed-width fields and timestamps as Delphi
``TDateTime`` values: a float64 count of days since 1899-12-30 whose
fractional part is the time of day.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from petragrid.errors import InvalidDateTime

# ---------------------------------------------------------------------------
# Fixed-width strings
# ---------------------------------------------------------------------------

# The decoder this format was reverse-engineered from scans for ASCII '0'
# (0x30), not NUL.  Kept as observed: text containing the digit 0 is cut
# short, and NUL padding is returned as part of the string.
DEFAULT_TERMINATOR = b"0"


def decode_fixed_string(data: bytes, terminator: bytes = DEFAULT_TERMINATOR) -> str:
    """Decode a fixed-width string field.

    Everything before the first *terminator* byte is decoded as UTF-8,
    with invalid sequences replaced.  When the terminator does not occur
    the whole span is decoded.

    Parameters
    ----------
    data : bytes
        The raw field, exactly as wide as the field.
    terminator : bytes
        A single terminator byte.

    Returns
    -------
    str
    """
    if len(terminator) != 1:
        raise ValueError(f"Terminator must be a single byte, got {terminator!r}")
    end = data.find(terminator)
    if end < 0:
        end = len(data)
    return data[:end].decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Delphi TDateTime
# ---------------------------------------------------------------------------

LEGACY_EPOCH = datetime(1899, 12, 30)
SECONDS_PER_DAY = 86_400


def legacy_datetime(days: float) -> datetime:
    """Convert a Delphi day count to a naive :class:`datetime`.

    ``0.0`` is the epoch itself, ``1.0`` one day later and ``0.5`` noon
    on the epoch day.  Values outside the range of :class:`datetime`
    raise :class:`InvalidDateTime`.
    """
    if not math.isfinite(days):
        raise InvalidDateTime(days)
    try:
        return LEGACY_EPOCH + timedelta(seconds=days * SECONDS_PER_DAY)
    except OverflowError as exc:
        raise InvalidDateTime(days) from exc
