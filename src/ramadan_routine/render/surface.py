"""Drawing surface used by the table renderer, and its PyMuPDF implementation.

The renderer only decides *where* things go.  Everything that touches fonts
or the PDF file (filling boxes, placing wrapped text, measuring how tall a
wrapped string will be, starting pages) lives behind ``DrawingSurface``.
"""

import logging
from collections.abc import Callable
from typing import Protocol

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)

# (x, y, width, height) in points, origin at the top-left of the page
Box = tuple[float, float, float, float]

# A4 landscape in points
A4_LANDSCAPE = (842.0, 595.0)

ELLIPSIS = "..."


class DrawingSurface(Protocol):
    """Page-oriented drawing capability; y/x bookkeeping is left to the caller."""

    page_width: float
    page_height: float

    def fill_rect(self, box: Box, fill: str) -> None:
        """Fill a rectangle with a hex colour."""

    def stroke_rect(self, box: Box, color: str) -> None:
        """Outline a rectangle with a hex colour."""

    def draw_text(
        self,
        text: str,
        box: Box,
        *,
        font_size: float,
        bold: bool = False,
        color: str = "#000000",
        wrap: bool = True,
        truncate: bool = True,
        align: str = "left",
    ) -> None:
        """Place *text* inside *box*, wrapping to its width and cutting off what does not fit."""

    def measure_wrapped_height(self, text: str, width: float, *, font_size: float, bold: bool = False) -> float:
        """Height *text* occupies when wrapped to *width*."""

    def start_new_page(self) -> None:
        """Begin a fresh page; subsequent drawing goes there."""

    def finish(self) -> bytes:
        """Close the document and return its bytes."""


# ---------------------------------------------------------------------------
# Text layout helpers (font-agnostic)
# ---------------------------------------------------------------------------


def _split_long_word(word: str, width: float, text_width: Callable[[str], float]) -> list[str]:
    """Break a word wider than *width* into character chunks that each fit."""
    chunks: list[str] = []
    current = ""
    for char in word:
        if current and text_width(current + char) > width:
            chunks.append(current)
            current = char
        else:
            current += char
    if current:
        chunks.append(current)
    return chunks


def wrap_lines(text: str, width: float, text_width: Callable[[str], float]) -> list[str]:
    """Greedy word wrap of *text* to *width*, honouring explicit newlines.

    Empty text yields no lines; an empty line between paragraphs is kept.
    """
    if not text:
        return []

    lines: list[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if text_width(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            if text_width(word) <= width:
                current = word
            else:
                *full, current = _split_long_word(word, width, text_width)
                lines.extend(full)
        lines.append(current)
    return lines


def ellipsize(line: str, width: float, text_width: Callable[[str], float], force: bool = False) -> str:
    """Trim *line* and append an ellipsis so that the result fits *width*.

    Lines that already fit are returned as-is unless *force* is set, which
    marks text that continues past this line.
    """
    if not force and text_width(line) <= width:
        return line
    trimmed = line.rstrip()
    while trimmed and text_width(trimmed + ELLIPSIS) > width:
        trimmed = trimmed[:-1]
    return trimmed.rstrip() + ELLIPSIS if trimmed else ""


def hex_to_rgb(color: str) -> tuple[float, float, float]:
    """Convert ``#rrggbb`` to the 0-1 float triple PyMuPDF expects."""
    value = color.lstrip("#")
    return tuple(int(value[i : i + 2], 16) / 255 for i in (0, 2, 4))


# ---------------------------------------------------------------------------
# PyMuPDF implementation
# ---------------------------------------------------------------------------


class PdfSurface:
    """DrawingSurface that writes a PDF with PyMuPDF using the built-in Helvetica fonts."""

    REGULAR_FONT = "helv"
    BOLD_FONT = "hebo"

    def __init__(self, page_size: tuple[float, float] = A4_LANDSCAPE, line_spacing: float = 1.2):
        self.page_width, self.page_height = page_size
        self.line_spacing = line_spacing
        self._doc = fitz.open()
        self._page = self._doc.new_page(width=self.page_width, height=self.page_height)

    def _font(self, bold: bool) -> str:
        return self.BOLD_FONT if bold else self.REGULAR_FONT

    def _text_width(self, font_size: float, bold: bool) -> Callable[[str], float]:
        fontname = self._font(bold)
        return lambda text: fitz.get_text_length(text, fontname=fontname, fontsize=font_size)

    @staticmethod
    def _rect(box: Box) -> fitz.Rect:
        x, y, width, height = box
        return fitz.Rect(x, y, x + width, y + height)

    def fill_rect(self, box: Box, fill: str) -> None:
        self._page.draw_rect(self._rect(box), color=None, fill=hex_to_rgb(fill), width=0)

    def stroke_rect(self, box: Box, color: str) -> None:
        self._page.draw_rect(self._rect(box), color=hex_to_rgb(color), width=0.5)

    def draw_text(
        self,
        text: str,
        box: Box,
        *,
        font_size: float,
        bold: bool = False,
        color: str = "#000000",
        wrap: bool = True,
        truncate: bool = True,
        align: str = "left",
    ) -> None:
        x, y, width, height = box
        text_width = self._text_width(font_size, bold)
        line_height = font_size * self.line_spacing

        lines = wrap_lines(text, width, text_width) if wrap else text.splitlines()
        max_lines = max(1, int(height // line_height)) if wrap else 1
        if truncate and len(lines) > max_lines:
            lines = lines[:max_lines]
            lines[-1] = ellipsize(lines[-1], width, text_width, force=True)
        elif truncate and lines:
            lines[-1] = ellipsize(lines[-1], width, text_width)

        for i, line in enumerate(lines):
            offset = 0.0
            if align == "center":
                offset = (width - text_width(line)) / 2
            elif align == "right":
                offset = width - text_width(line)
            baseline = y + i * line_height + font_size
            self._page.insert_text(
                fitz.Point(x + max(offset, 0.0), baseline),
                line,
                fontname=self._font(bold),
                fontsize=font_size,
                color=hex_to_rgb(color),
            )

    def measure_wrapped_height(self, text: str, width: float, *, font_size: float, bold: bool = False) -> float:
        lines = wrap_lines(text, width, self._text_width(font_size, bold))
        return len(lines) * font_size * self.line_spacing

    def start_new_page(self) -> None:
        self._page = self._doc.new_page(width=self.page_width, height=self.page_height)

    def finish(self) -> bytes:
        data = self._doc.tobytes()
        logger.debug("PDF finished: %d page(s), %.1f KB", self._doc.page_count, len(data) / 1024)
        self._doc.close()
        return data
