"""Compiled regex patterns for time-range text.

These patterns drive both canonicalization (time_maps.py) and the content
score used to spot the time column of an unlabeled table (columns.py).
"""

import re

# ─── Canonicalization Patterns ────────────────────────────────────────────────

# Any run of whitespace (including non-breaking spaces from OCR output)
WHITESPACE_RE = re.compile(r"\s+")

# A run of hyphens, en dashes, em dashes or minus signs ("--", "–-"), with surrounding spacing
DASH_CHARS = "-–—−"
DASH_RE = re.compile(rf"\s*[{DASH_CHARS}]+\s*")

# "08 : 00" -> "08:00"
COLON_SPACING_RE = re.compile(r"\s*:\s*")

# Leading zero on an hour, e.g. the "0" in "08:00" but not in "10:00"
HOUR_LEADING_ZERO_RE = re.compile(r"(?<!\d)0(\d:)")

# Digit glued to its meridiem marker, e.g. "8:00AM" (applied after uppercasing)
MERIDIEM_GLUE_RE = re.compile(r"(\d)(AM|PM)\b")


# ─── Time-Range Shape ────────────────────────────────────────────────────────

# One clock time, e.g. "8:00 AM", "08:00PM", "11 : 30 pm"
_CLOCK = r"\d{1,2}\s*:\s*\d{2}\s*[AaPp][Mm]"

# Full time range embedded anywhere in a string
TIME_RANGE_RE = re.compile(rf"{_CLOCK}\s*[{DASH_CHARS}]+\s*{_CLOCK}")


# ─── Column Label Hints ──────────────────────────────────────────────────────

# Substrings that mark a header as the time column, matched case-insensitively
TIME_HEADER_SYNONYMS = ("time", "slot", "period")
