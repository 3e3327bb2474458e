"""Paginated table rendering with variable row heights.

Lays out a ScheduleTable in a single top-to-bottom pass.  Each data row is
as tall as its tallest wrapped cell (never shorter than the minimum row
height).  When the next row would run past the bottom margin a new page is
started and the header row is drawn again.  Zebra striping follows the
global row index, so a page break never changes a row's shade.
"""

import logging

from pydantic import BaseModel, ConfigDict

from ramadan_routine.render.surface import Box, DrawingSurface
from ramadan_routine.schedule.schema import ScheduleTable

logger = logging.getLogger(__name__)


class TableLayout(BaseModel):
    """Geometry and colours of the rendered table (points and hex colours)."""

    model_config = ConfigDict(frozen=True)

    margin: float = 30.0
    bottom_margin: float = 40.0

    # First (time) column: min(first_col_cap, first_col_ratio * usable width)
    first_col_cap: float = 155.0
    first_col_ratio: float = 0.24

    header_height: float = 22.0
    min_row_height: float = 22.0
    cell_pad_x: float = 3.0
    cell_pad_y: float = 4.0
    font_size: float = 7.5

    title_font_size: float = 14.0
    title_gap: float = 7.0

    header_fill: str = "#2c3e50"
    header_text: str = "#ffffff"
    even_fill: str = "#f0f4f8"
    odd_fill: str = "#ffffff"
    border: str = "#cccccc"
    text_color: str = "#000000"


class RenderResult(BaseModel):
    """What the renderer produced: page count and the page each data row landed on."""

    page_count: int
    row_pages: list[int]


def column_widths(n_cols: int, usable_width: float, layout: TableLayout) -> list[float]:
    """Size the first column to a capped fraction of the width and split the rest equally.

    A single-column table gets the full usable width.
    """
    if n_cols <= 1:
        return [usable_width] * n_cols
    first = min(layout.first_col_cap, usable_width * layout.first_col_ratio)
    other = (usable_width - first) / (n_cols - 1)
    return [first] + [other] * (n_cols - 1)


class TableRenderer:
    """Issue draw calls for a ScheduleTable onto a DrawingSurface."""

    def __init__(self, surface: DrawingSurface, layout: TableLayout | None = None):
        self.surface = surface
        self.layout = layout or TableLayout()

    # ── Geometry ─────────────────────────────────────────────────────────

    def _inner(self, box: Box) -> Box:
        """Shrink a cell box by the cell padding."""
        x, y, width, height = box
        pad_x, pad_y = self.layout.cell_pad_x, self.layout.cell_pad_y
        return (x + pad_x, y + pad_y, max(width - 2 * pad_x, 0.0), max(height - 2 * pad_y, 0.0))

    def row_height(self, cells: list[str], widths: list[float]) -> float:
        """Tallest wrapped cell plus vertical padding, floored at the minimum row height."""
        layout = self.layout
        tallest = 0.0
        for text, width in zip(cells, widths):
            text_width = max(width - 2 * layout.cell_pad_x, 1.0)
            tallest = max(tallest, self.surface.measure_wrapped_height(text, text_width, font_size=layout.font_size))
        return max(layout.min_row_height, tallest + 2 * layout.cell_pad_y)

    # ── Drawing ──────────────────────────────────────────────────────────

    def _draw_title(self, title: str, y: float, usable_width: float) -> float:
        """Draw the centred title and return the y just below it."""
        layout = self.layout
        height = self.surface.measure_wrapped_height(title, usable_width, font_size=layout.title_font_size, bold=True)
        height = max(height, layout.title_font_size * 1.2)
        self.surface.draw_text(
            title,
            (layout.margin, y, usable_width, height),
            font_size=layout.title_font_size,
            bold=True,
            color=layout.text_color,
            truncate=False,
            align="center",
        )
        return y + height + layout.title_gap

    def _draw_header(self, headers: list[str], widths: list[float], y: float) -> float:
        """Draw the fixed-height header row and return the y just below it."""
        layout = self.layout
        x = layout.margin
        for header, width in zip(headers, widths):
            box = (x, y, width, layout.header_height)
            self.surface.fill_rect(box, layout.header_fill)
            self.surface.stroke_rect(box, layout.header_fill)
            self.surface.draw_text(header, self._inner(box), font_size=layout.font_size, bold=True, color=layout.header_text, wrap=False)
            x += width
        return y + layout.header_height

    def _draw_row(self, cells: list[str], widths: list[float], y: float, height: float, index: int) -> None:
        """Draw one data row; the fill alternates on the global row *index*."""
        layout = self.layout
        fill = layout.even_fill if index % 2 == 0 else layout.odd_fill
        x = layout.margin
        for text, width in zip(cells, widths):
            box = (x, y, width, height)
            self.surface.fill_rect(box, fill)
            self.surface.stroke_rect(box, layout.border)
            if text:
                self.surface.draw_text(text, self._inner(box), font_size=layout.font_size, color=layout.text_color)
            x += width

    def render(self, table: ScheduleTable, title: str) -> RenderResult:
        """Lay out *table* under *title*, breaking pages by accumulated height.

        A row that does not fit in the remaining space moves to a new page,
        below a redrawn header.  A row taller than a whole page is drawn at
        the top of its page rather than paging forever.
        """
        layout = self.layout
        surface = self.surface
        usable_width = surface.page_width - 2 * layout.margin
        widths = column_widths(len(table.headers), usable_width, layout)
        limit = surface.page_height - layout.bottom_margin
        fresh_page_y = layout.margin + layout.header_height

        y = self._draw_title(title, layout.margin, usable_width)
        y = self._draw_header(table.headers, widths, y)

        page = 0
        row_pages: list[int] = []
        for index, cells in enumerate(table.rows):
            height = self.row_height(cells, widths)
            if y + height > limit and y > fresh_page_y:
                surface.start_new_page()
                page += 1
                y = self._draw_header(table.headers, widths, layout.margin)
                logger.debug("Page break before row %d (row height %.1f)", index, height)
            self._draw_row(cells, widths, y, height, index)
            row_pages.append(page)
            y += height

        logger.info("Rendered %d rows x %d columns on %d page(s)", len(table.rows), len(table.headers), page + 1)
        return RenderResult(page_count=page + 1, row_pages=row_pages)
