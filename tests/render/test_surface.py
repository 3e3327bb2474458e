"""Unit tests for the text layout helpers and the PyMuPDF drawing surface."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import fitz  # PyMuPDF
import pytest

from ramadan_routine.render.surface import ELLIPSIS, PdfSurface, ellipsize, hex_to_rgb, wrap_lines

# One unit per character keeps the wrapping arithmetic obvious
CHAR_WIDTH = len


class TestWrapLines:

    def test_fits_on_one_line(self):
        assert wrap_lines("CSE101 Room 404", 20, CHAR_WIDTH) == ["CSE101 Room 404"]

    def test_breaks_between_words(self):
        assert wrap_lines("CSE101 Room 404 Dr. Rahman", 11, CHAR_WIDTH) == ["CSE101 Room", "404 Dr.", "Rahman"]

    def test_honours_newlines(self):
        assert wrap_lines("CSE101\nRoom 404", 50, CHAR_WIDTH) == ["CSE101", "Room 404"]

    def test_blank_line_between_paragraphs_is_kept(self):
        assert wrap_lines("a\n\nb", 10, CHAR_WIDTH) == ["a", "", "b"]

    def test_long_word_is_split(self):
        assert wrap_lines("ABCDEFGHIJ", 4, CHAR_WIDTH) == ["ABCD", "EFGH", "IJ"]

    def test_long_word_after_short_word(self):
        assert wrap_lines("x ABCDEFGH", 4, CHAR_WIDTH) == ["x", "ABCD", "EFGH"]

    def test_empty_text(self):
        assert wrap_lines("", 10, CHAR_WIDTH) == []


class TestEllipsize:

    def test_fitting_line_unchanged(self):
        assert ellipsize("CSE101", 10, CHAR_WIDTH) == "CSE101"

    def test_overlong_line_trimmed(self):
        result = ellipsize("Introduction to Programming", 10, CHAR_WIDTH)
        assert result.endswith(ELLIPSIS)
        assert len(result) <= 10

    def test_forced_ellipsis_on_fitting_line(self):
        assert ellipsize("CSE101", 20, CHAR_WIDTH, force=True) == "CSE101" + ELLIPSIS

    def test_too_narrow_for_anything(self):
        assert ellipsize("CSE101", 2, CHAR_WIDTH) == ""


class TestHexToRgb:

    def test_white(self):
        assert hex_to_rgb("#ffffff") == (1.0, 1.0, 1.0)

    def test_header_colour(self):
        r, g, b = hex_to_rgb("#2c3e50")
        assert r == pytest.approx(0x2C / 255)
        assert g == pytest.approx(0x3E / 255)
        assert b == pytest.approx(0x50 / 255)


class TestPdfSurface:

    def test_produces_pdf_with_one_page_per_break(self):
        surface = PdfSurface()
        surface.draw_text("Ramadan Class Schedule", (30, 30, 782, 20), font_size=14, bold=True, align="center")
        surface.start_new_page()
        surface.fill_rect((30, 30, 100, 22), "#2c3e50")
        surface.stroke_rect((30, 30, 100, 22), "#cccccc")
        data = surface.finish()

        assert data.startswith(b"%PDF")
        with fitz.open(stream=data, filetype="pdf") as doc:
            assert doc.page_count == 2
            assert doc[0].rect.width == pytest.approx(842.0)
            assert "Ramadan Class Schedule" in doc[0].get_text()

    def test_measure_grows_with_wrapping(self):
        surface = PdfSurface()
        short = surface.measure_wrapped_height("CSE101", 200, font_size=7.5)
        wrapped = surface.measure_wrapped_height("CSE101 Introduction to Structured Programming Language", 40, font_size=7.5)
        surface.finish()
        assert short == pytest.approx(7.5 * 1.2)
        assert wrapped > short

    def test_measure_empty_text(self):
        surface = PdfSurface()
        assert surface.measure_wrapped_height("", 100, font_size=7.5) == 0.0
        surface.finish()
