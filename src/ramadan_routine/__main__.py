"""Command-line entry point: convert a schedule PDF or image to a Ramadan-adjusted PDF.

Usage:
    python -m ramadan_routine schedule.pdf
    python -m ramadan_routine routine.png --output out.pdf --model gpt-4o --fallback-model gpt-4o-mini
"""

import argparse
import logging
import sys

from ramadan_routine.config import DEFAULT_TITLE, FALLBACK_MODEL, PRIMARY_MODEL
from ramadan_routine.extraction.errors import ExtractionError, UnsupportedInput
from ramadan_routine.extraction.orchestrator import ModelPolicy
from ramadan_routine.pipeline import process_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Define the CLI arguments."""
    parser = argparse.ArgumentParser(prog="ramadan-routine", description="Rewrite a class schedule to Ramadan timings and export it as PDF.")
    parser.add_argument("input", help="Schedule PDF or image (.pdf, .jpg, .jpeg, .png, .bmp, .webp)")
    parser.add_argument("--output", "-o", default=None, help="Output PDF path (default: <input>_ramadan.pdf)")
    parser.add_argument("--title", default=DEFAULT_TITLE, help="Title printed above the table")
    parser.add_argument("--model", default=PRIMARY_MODEL, help="Primary recognition model")
    parser.add_argument("--fallback-model", default=FALLBACK_MODEL, help="Model tried once if the primary call fails")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log raw model output and layout details")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline for one file; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)

    policy = ModelPolicy(primary=args.model, fallback=args.fallback_model or None)
    try:
        output = process_file(args.input, args.output, title=args.title, policy=policy)
    except (FileNotFoundError, UnsupportedInput) as exc:
        logger.error("Input error: %s", exc)
        return 1
    except ExtractionError as exc:
        logger.error("Extraction failed: %s", exc)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
