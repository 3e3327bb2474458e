"""Input acquisition: turn an uploaded schedule file into request content.

PDFs with a text layer are sent as text (cheaper and more exact than vision).
Scanned PDFs with no text layer are rasterized page by page, and image files
are sent as a single inline image.
"""

import base64
import logging
from pathlib import Path

import fitz  # PyMuPDF

from ramadan_routine.config import PDF_DPI
from ramadan_routine.extraction.errors import UnsupportedInput

logger = logging.getLogger(__name__)

PDF_EXTENSIONS = {".pdf"}
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".webp"}
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | IMAGE_EXTENSIONS


def _mime_type(suffix: str) -> str:
    """Map a file suffix to its image MIME type ("jpg" is served as image/jpeg)."""
    suffix = suffix.lower().lstrip(".")
    return "image/jpeg" if suffix in ("jpg", "jpeg") else f"image/{suffix}"


def image_content(data: bytes, mime_type: str) -> dict:
    """Build one OpenAI ``image_url`` content part carrying *data* as a base64 data URI."""
    image_b64 = base64.b64encode(data).decode("utf-8")
    return {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{image_b64}", "detail": "auto"}}


def image_to_content(path: Path) -> dict:
    """Read an image file into an inline content part."""
    data = path.read_bytes()
    logger.info("Loaded image %s (%.1f KB)", path.name, len(data) / 1024)
    return image_content(data, _mime_type(path.suffix))


def _open_pdf(path: Path) -> fitz.Document:
    """Open a PDF, reporting corrupt or empty files as UnsupportedInput."""
    try:
        return fitz.open(path)
    except fitz.FileDataError as exc:
        logger.warning("Cannot read %s as a PDF: %s", path.name, exc)
        raise UnsupportedInput(f"Could not read {path.name} as a PDF: {exc}") from exc


def pdf_to_text(path: Path) -> str:
    """Concatenate the text layer of every page of a PDF."""
    with _open_pdf(path) as doc:
        text = "\n".join(page.get_text() for page in doc)
    logger.info("Extracted %d chars of text from %s", len(text.strip()), path.name)
    return text


def pdf_to_images(path: Path, dpi: int = PDF_DPI) -> list[dict]:
    """Rasterize every page of a PDF to a PNG content part."""
    parts: list[dict] = []
    with _open_pdf(path) as doc:
        for page in doc:
            pixmap = page.get_pixmap(dpi=dpi)
            parts.append(image_content(pixmap.tobytes("png"), "image/png"))
    logger.info("Rasterized %d page(s) of %s at %d dpi", len(parts), path.name, dpi)
    return parts


def load_content(path: str | Path) -> str | list[dict]:
    """Return document text for text PDFs, or a list of image content parts otherwise.

    Raises UnsupportedInput for unknown file types, unreadable PDFs, and PDFs with neither
    text nor pages.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedInput(f"Unsupported file type '{suffix}'. Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}")

    if suffix in IMAGE_EXTENSIONS:
        return [image_to_content(path)]

    text = pdf_to_text(path)
    if text.strip():
        logger.debug("PDF text (first 1000 chars):\n%s", text[:1000])
        return text

    # Scanned PDF: no text layer, fall back to the vision path
    logger.info("%s has no text layer; sending page images instead", path.name)
    images = pdf_to_images(path)
    if not images:
        raise UnsupportedInput(f"Could not extract text or pages from {path.name}")
    return images
