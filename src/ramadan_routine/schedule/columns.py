"""Time-column detection and Ramadan adjustment of extracted rows.

The recognition service returns rows keyed by whatever headers it read off
the table, and does not reliably put the time column first or label it
consistently.  The time column is chosen by label first, then by content.
"""

import logging

from ramadan_routine.schedule.patterns import TIME_HEADER_SYNONYMS, TIME_RANGE_RE
from ramadan_routine.schedule.time_maps import adjust_single_value

logger = logging.getLogger(__name__)


def header_union(rows: list[dict]) -> list[str]:
    """Return every key seen across *rows*, in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return list(seen)


def _label_match(headers: list[str]) -> str | None:
    """Return the first header whose label contains a time synonym."""
    for header in headers:
        lowered = header.lower()
        if any(synonym in lowered for synonym in TIME_HEADER_SYNONYMS):
            return header
    return None


def score_headers(rows: list[dict], headers: list[str]) -> dict[str, int]:
    """Count, per header, how many rows hold a time-range-shaped value under it."""
    scores = {header: 0 for header in headers}
    for row in rows:
        for header in headers:
            value = row.get(header)
            if isinstance(value, str) and TIME_RANGE_RE.search(value):
                scores[header] += 1
    return scores


def select_time_column(rows: list[dict]) -> str | None:
    """Pick the header most likely to hold the time ranges.

    A header labelled like "Time", "Slot" or "Period" wins outright.  Failing
    that, the header with the most time-shaped values is chosen, ties going to
    the leftmost header.  Returns None only when the rows have no keys at all.
    """
    headers = header_union(rows)
    if not headers:
        return None

    labelled = _label_match(headers)
    if labelled is not None:
        logger.debug("Time column %r selected by label", labelled)
        return labelled

    scores = score_headers(rows, headers)
    # max() keeps the first of equal scores, i.e. the earliest header
    best = max(headers, key=lambda header: scores[header])
    logger.debug("Time column %r selected by content score %d (scores=%s)", best, scores[best], scores)
    return best


def select_and_adjust(rows: list[dict]) -> list[dict]:
    """Return copies of *rows* with the time column rewritten to Ramadan timings.

    If adjusting the detected column changes nothing anywhere, the detection
    is assumed to be wrong and every cell of every row is passed through the
    adjuster instead.  Cells without a known slot are returned unchanged
    either way.
    """
    column = select_time_column(rows)
    if column is None:
        return [dict(row) for row in rows]

    adjusted_rows: list[dict] = []
    changed = 0
    for row in rows:
        new_row = dict(row)
        if column in row:
            new_row[column] = adjust_single_value(row[column])
            if new_row[column] != row[column]:
                changed += 1
        adjusted_rows.append(new_row)

    if changed:
        logger.info("Adjusted %d/%d rows in time column %r", changed, len(rows), column)
        return adjusted_rows

    # Nothing recognisable under the chosen header: sweep the whole table
    logger.warning("No slot in column %r matched the Ramadan tables; sweeping all columns", column)
    swept = [{key: adjust_single_value(value) for key, value in row.items()} for row in rows]
    swept_changes = sum(1 for before, after in zip(rows, swept) if before != after)
    logger.info("Full-table sweep adjusted %d/%d rows", swept_changes, len(rows))
    return swept
