"""End-to-end conversion of a schedule file into a Ramadan-adjusted PDF.

Steps, run sequentially for one input:
  1. load_content        -- PDF text, PDF page images, or an image file
  2. extract_and_adjust  -- recognition service + local time-column adjustment
  3. normalize           -- sparse row dicts -> rectangular ScheduleTable
  4. render              -- paginated PDF bytes written next to the input

Usage:
  python -m ramadan_routine path/to/schedule.pdf
"""

import logging
import time
from pathlib import Path

from ramadan_routine.config import DEFAULT_TITLE, OUTPUT_SUFFIX
from ramadan_routine.extraction.loaders import load_content
from ramadan_routine.extraction.orchestrator import ModelPolicy, extract_and_adjust
from ramadan_routine.extraction.resources import RecognitionClient
from ramadan_routine.render.surface import PdfSurface
from ramadan_routine.render.table import TableRenderer
from ramadan_routine.schedule.schema import normalize

logger = logging.getLogger(__name__)


def default_output_path(input_path: Path) -> Path:
    """``schedule.png`` -> ``schedule_ramadan.pdf`` in the same directory."""
    return input_path.with_name(input_path.stem + OUTPUT_SUFFIX)


def render_pdf(rows: list[dict], title: str = DEFAULT_TITLE) -> bytes:
    """Normalize adjusted rows and render them to PDF bytes."""
    table = normalize(rows)
    if table.is_placeholder:
        logger.warning("No schedule rows extracted; rendering the empty-schedule placeholder")
    surface = PdfSurface()
    TableRenderer(surface).render(table, title)
    return surface.finish()


def process_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    title: str = DEFAULT_TITLE,
    policy: ModelPolicy | None = None,
    client: RecognitionClient | None = None,
) -> Path:
    """Convert one schedule file to an adjusted PDF and return the PDF's path."""
    input_path = Path(input_path)
    if not input_path.is_file():
        raise FileNotFoundError(f"File not found: {input_path}")
    output_path = Path(output_path) if output_path else default_output_path(input_path)

    t0 = time.time()
    logger.info("Processing %s", input_path.name)

    content = load_content(input_path)
    rows = extract_and_adjust(content, policy=policy, client=client)
    logger.info("After extraction: %d rows", len(rows))

    pdf_bytes = render_pdf(rows, title)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf_bytes)

    logger.info("Wrote %s (%.1f KB) in %.1fs", output_path, len(pdf_bytes) / 1024, time.time() - t0)
    return output_path
