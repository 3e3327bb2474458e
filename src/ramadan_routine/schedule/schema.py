"""Pydantic model for a rectangular schedule table, and the row normalizer.

Rows decoded from the recognition service are sparse dicts whose key sets can
differ from row to row.  ``normalize`` projects them onto a single header list
so the renderer always sees a rectangular grid.
"""

from pydantic import BaseModel, model_validator

from ramadan_routine.schedule.columns import header_union

NO_DATA_HEADER = "Schedule"
NO_DATA_MESSAGE = "No schedule data found."


class ScheduleTable(BaseModel):
    """Headers plus rows, where every row has exactly ``len(headers)`` cells.

    The model_validator rejects ragged rows and duplicate headers, so anything
    holding a ScheduleTable can index cells by header position without
    checking bounds.
    """

    headers: list[str]
    rows: list[list[str]]

    @model_validator(mode="after")
    def validate_shape(self) -> "ScheduleTable":
        """Ensure headers are distinct and every row matches the header count."""
        if len(set(self.headers)) != len(self.headers):
            raise ValueError(f"Duplicate column headers: {self.headers}")
        n_cols = len(self.headers)
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols} (matching headers)")
        return self

    @property
    def is_placeholder(self) -> bool:
        """True for the fixed table produced when no rows were extracted."""
        return self.headers == [NO_DATA_HEADER] and self.rows == [[NO_DATA_MESSAGE]]


def _cell_text(value) -> str:
    """Render a cell value as text; missing and null cells become empty strings."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize(rows: list[dict]) -> ScheduleTable:
    """Convert heterogeneous row dicts into a rectangular ScheduleTable.

    An empty row list yields a one-cell placeholder table carrying a
    "no data" message rather than an error.
    """
    if not rows:
        return ScheduleTable(headers=[NO_DATA_HEADER], rows=[[NO_DATA_MESSAGE]])

    headers = header_union(rows)
    grid = [[_cell_text(row.get(header)) for header in headers] for row in rows]
    return ScheduleTable(headers=headers, rows=grid)
