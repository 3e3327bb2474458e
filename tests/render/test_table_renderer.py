"""Unit tests for table layout, row heights, pagination, and zebra striping.

A recording surface replaces PyMuPDF: every draw call is captured as a tuple
and text height is one 9pt line per newline-separated line, so page breaks
fall at predictable positions.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from ramadan_routine.render.table import TableLayout, TableRenderer, column_widths
from ramadan_routine.schedule.schema import ScheduleTable, normalize

LAYOUT = TableLayout()
EVEN = LAYOUT.even_fill
ODD = LAYOUT.odd_fill
HEADER = LAYOUT.header_fill


class RecordingSurface:
    """DrawingSurface that records operations instead of drawing them."""

    def __init__(self, page_width: float = 400.0, page_height: float = 200.0):
        self.page_width = page_width
        self.page_height = page_height
        self.ops: list[tuple] = []
        self.page = 0

    def fill_rect(self, box, fill):
        self.ops.append(("fill", self.page, box, fill))

    def stroke_rect(self, box, color):
        self.ops.append(("stroke", self.page, box, color))

    def draw_text(self, text, box, **options):
        self.ops.append(("text", self.page, text, box, options))

    def measure_wrapped_height(self, text, width, *, font_size, bold=False):  # pylint: disable=unused-argument
        if not text:
            return 0.0
        return (text.count("\n") + 1) * font_size * 1.2

    def start_new_page(self):
        self.page += 1
        self.ops.append(("new_page", self.page))

    def finish(self):
        return b""

    # ── helpers for assertions ──

    def texts(self, value: str) -> list[tuple]:
        return [op for op in self.ops if op[0] == "text" and op[2] == value]

    def data_fills(self) -> list[tuple]:
        return [op for op in self.ops if op[0] == "fill" and op[3] != HEADER]


def _table(n_rows: int, n_cols: int = 2) -> ScheduleTable:
    headers = ["Time"] + [f"Day {c}" for c in range(1, n_cols)]
    rows = [[f"r{r}c{c}" for c in range(n_cols)] for r in range(n_rows)]
    return ScheduleTable(headers=headers, rows=rows)


# ===========================================================================
# column_widths tests
# ===========================================================================


class TestColumnWidths:

    def test_first_column_capped(self):
        widths = column_widths(3, 782.0, LAYOUT)
        assert widths[0] == 155.0
        assert widths[1] == widths[2] == pytest.approx((782.0 - 155.0) / 2)

    def test_first_column_ratio_on_narrow_pages(self):
        widths = column_widths(2, 340.0, LAYOUT)
        assert widths[0] == pytest.approx(340.0 * 0.24)
        assert sum(widths) == pytest.approx(340.0)

    def test_single_column_takes_full_width(self):
        assert column_widths(1, 500.0, LAYOUT) == [500.0]

    def test_widths_sum_to_usable_width(self):
        assert sum(column_widths(8, 782.0, LAYOUT)) == pytest.approx(782.0)


# ===========================================================================
# Row height tests
# ===========================================================================


class TestRowHeight:

    def test_short_cells_use_minimum(self):
        renderer = TableRenderer(RecordingSurface())
        assert renderer.row_height(["a", "b"], [100.0, 100.0]) == LAYOUT.min_row_height

    def test_tallest_cell_drives_height(self):
        renderer = TableRenderer(RecordingSurface())
        line = LAYOUT.font_size * 1.2
        expected = 4 * line + 2 * LAYOUT.cell_pad_y
        assert renderer.row_height(["a\nb\nc\nd", "x"], [100.0, 100.0]) == pytest.approx(expected)

    def test_empty_cells(self):
        renderer = TableRenderer(RecordingSurface())
        assert renderer.row_height(["", ""], [100.0, 100.0]) == LAYOUT.min_row_height


# ===========================================================================
# Pagination tests
# ===========================================================================


class TestPagination:

    def test_single_page(self):
        surface = RecordingSurface()
        result = TableRenderer(surface).render(_table(3), "Schedule")
        assert result.page_count == 1
        assert result.row_pages == [0, 0, 0]
        assert not [op for op in surface.ops if op[0] == "new_page"]

    def test_overflow_triggers_exactly_one_break_with_header_redrawn(self):
        """Title + header leave room for 3 rows of 22pt on a 200pt page; rows 3-4 spill over."""
        surface = RecordingSurface()
        result = TableRenderer(surface).render(_table(5), "Schedule")

        assert result.page_count == 2
        assert result.row_pages == [0, 0, 0, 1, 1]
        assert len([op for op in surface.ops if op[0] == "new_page"]) == 1

        header_draws = surface.texts("Time")
        assert [op[1] for op in header_draws] == [0, 1]
        assert all(op[4]["bold"] for op in header_draws)

    def test_header_sits_at_top_margin_after_break(self):
        surface = RecordingSurface()
        TableRenderer(surface).render(_table(5), "Schedule")
        second_header = surface.texts("Time")[1]
        assert second_header[3][1] == pytest.approx(LAYOUT.margin + LAYOUT.cell_pad_y)

    def test_first_row_on_new_page_follows_header(self):
        surface = RecordingSurface()
        TableRenderer(surface).render(_table(5), "Schedule")
        row3 = surface.texts("r3c0")[0]
        assert row3[1] == 1
        assert row3[3][1] == pytest.approx(LAYOUT.margin + LAYOUT.header_height + LAYOUT.cell_pad_y)

    def test_zebra_parity_continues_across_break(self):
        surface = RecordingSurface()
        TableRenderer(surface).render(_table(5), "Schedule")
        # Two cells per row, so fills come in pairs per row index
        fills = [op[3] for op in surface.data_fills()]
        assert fills == [EVEN, EVEN, ODD, ODD, EVEN, EVEN, ODD, ODD, EVEN, EVEN]
        # Row 3 is the first row on page 2 and keeps its odd shade
        page_two = [op for op in surface.data_fills() if op[1] == 1]
        assert page_two[0][3] == ODD

    def test_tall_rows_move_to_next_page(self):
        table = ScheduleTable(headers=["Time", "Sunday"], rows=[["08:00 AM - 09:05 AM", "a"], ["t", "l1\nl2\nl3\nl4\nl5\nl6\nl7\nl8\nl9\nl10"]])
        result = TableRenderer(RecordingSurface()).render(table, "Schedule")
        assert result.row_pages == [0, 1]

    def test_row_taller_than_a_page_does_not_loop(self):
        tall = "\n".join(f"line {i}" for i in range(40))
        table = ScheduleTable(headers=["Time"], rows=[[tall], ["short"]])
        surface = RecordingSurface()
        result = TableRenderer(surface).render(table, "Schedule")
        assert result.row_pages == [1, 2]
        assert result.page_count == 3

    def test_every_cell_is_bordered(self):
        surface = RecordingSurface()
        TableRenderer(surface).render(_table(2, n_cols=3), "Schedule")
        strokes = [op for op in surface.ops if op[0] == "stroke" and op[3] == LAYOUT.border]
        assert len(strokes) == 2 * 3


# ===========================================================================
# Title / placeholder tests
# ===========================================================================


class TestTitleAndPlaceholder:

    def test_title_is_centred_and_bold(self):
        surface = RecordingSurface()
        TableRenderer(surface).render(_table(1), "Ramadan Class Schedule")
        title = surface.texts("Ramadan Class Schedule")[0]
        assert title[4]["align"] == "center"
        assert title[4]["bold"] is True

    def test_placeholder_table_renders_message(self):
        surface = RecordingSurface()
        result = TableRenderer(surface).render(normalize([]), "Ramadan Class Schedule")
        assert result.page_count == 1
        assert surface.texts("No schedule data found.")
