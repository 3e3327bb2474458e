"""Ramadan time-slot tables, time-range canonicalization, and cell adjustment.

Two disjoint tables map a regular (non-Ramadan) slot to its shortened Ramadan
slot: one for regular classes and one for lab sessions.  Free-form OCR text
such as ``"8:00am–9:20 am"`` is reduced to a canonical form before lookup so
that spacing, casing, dash style and leading zeros do not matter.

Adjustment works in two tiers:
  1. exact lookup of the whole cell's canonical form
  2. scan the cell for embedded time ranges and rewrite each match in place
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from ramadan_routine.schedule.patterns import (
    COLON_SPACING_RE,
    DASH_RE,
    HOUR_LEADING_ZERO_RE,
    MERIDIEM_GLUE_RE,
    TIME_RANGE_RE,
    WHITESPACE_RE,
)

logger = logging.getLogger(__name__)


# ─── Time Tables ─────────────────────────────────────────────────────────────

CLASS_TIME_MAP: Mapping[str, str] = MappingProxyType(
    {
        "08:00 AM - 09:20 AM": "08:00 AM - 09:05 AM",
        "09:30 AM - 10:50 AM": "09:15 AM - 10:20 AM",
        "11:00 AM - 12:20 PM": "10:30 AM - 11:35 AM",
        "12:30 PM - 01:50 PM": "11:45 AM - 12:50 PM",
        "02:00 PM - 03:20 PM": "01:00 PM - 02:05 PM",
        "03:30 PM - 04:50 PM": "02:15 PM - 03:20 PM",
        "05:00 PM - 06:20 PM": "03:30 PM - 04:35 PM",
    }
)

LAB_TIME_MAP: Mapping[str, str] = MappingProxyType(
    {
        "08:00 AM - 10:50 AM": "08:00 AM - 10:20 AM",
        "11:00 AM - 01:50 PM": "10:30 AM - 12:50 PM",
        "02:00 PM - 04:50 PM": "01:00 PM - 03:20 PM",
        "05:00 PM - 07:50 PM": "03:30 PM - 05:50 PM",
    }
)


# ─── Canonicalization ────────────────────────────────────────────────────────


def canonicalize(text: str) -> str:
    """Reduce a time-range string to the form used for equality lookups.

    ``" 08:00am -- 09 : 20 AM"``, ``"8:00 AM–9:20 AM"`` and
    ``"08:00 AM - 09:20 AM"`` all become ``"8:00 AM - 9:20 AM"``.  Text that
    is not a time range goes through the same rules and is otherwise left
    alone, so the function never fails.
    """
    result = WHITESPACE_RE.sub(" ", text)
    result = DASH_RE.sub(" - ", result)
    result = COLON_SPACING_RE.sub(":", result)
    result = HOUR_LEADING_ZERO_RE.sub(r"\1", result)
    result = result.upper()
    result = MERIDIEM_GLUE_RE.sub(r"\1 \2", result)
    return result.strip()


def _build_adjustment_map() -> Mapping[str, str]:
    """Merge both tables under canonical keys; regular-class entries take precedence over lab entries."""
    merged: dict[str, str] = {}
    for source, target in CLASS_TIME_MAP.items():
        merged[canonicalize(source)] = target
    for source, target in LAB_TIME_MAP.items():
        key = canonicalize(source)
        if key in merged:
            logger.warning("Lab slot %r collides with a regular slot; keeping the regular mapping", source)
            continue
        merged[key] = target
    return MappingProxyType(merged)


# Canonical source range -> target range, built once and never mutated
ADJUSTMENT_MAP: Mapping[str, str] = _build_adjustment_map()


def lookup(text: str) -> str | None:
    """Return the adjusted range for *text* if its canonical form is a known slot, else None."""
    return ADJUSTMENT_MAP.get(canonicalize(text))


# ─── Adjustment ──────────────────────────────────────────────────────────────


def scan_and_replace_ranges(text: str) -> str:
    """Rewrite every embedded time range that matches a known slot, leaving all other text byte-identical."""

    def _replace(match) -> str:
        adjusted = lookup(match.group(0))
        return adjusted if adjusted is not None else match.group(0)

    return TIME_RANGE_RE.sub(_replace, text)


def adjust_single_value(text):
    """Adjust one cell value to its Ramadan timing.

    A cell that is exactly a known slot is replaced by the mapped value
    verbatim (original spacing and casing are discarded).  Otherwise any time
    ranges embedded in the text are rewritten individually.  Values that are
    not strings, or that contain nothing recognisable, come back unchanged.
    """
    if not isinstance(text, str) or not text:
        return text

    adjusted = lookup(text)
    if adjusted is not None:
        return adjusted
    return scan_and_replace_ranges(text)
