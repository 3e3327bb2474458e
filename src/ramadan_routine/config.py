"""Shared configuration for the Ramadan routine pipeline.

Values are read from environment variables (loaded from ``.env`` at the
project root) so that the CLI, the web service and the tests all agree on
model names, limits and storage paths.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# ─── Recognition Service ─────────────────────────────────────────────────────

PRIMARY_MODEL = os.getenv("RAMADAN_PRIMARY_MODEL", "gpt-4o")
FALLBACK_MODEL = os.getenv("RAMADAN_FALLBACK_MODEL", "gpt-4o-mini")

MAX_COMPLETION_TOKENS = int(os.getenv("RAMADAN_MAX_COMPLETION_TOKENS", "8192"))
REQUEST_TIMEOUT = float(os.getenv("RAMADAN_REQUEST_TIMEOUT", "120"))

# ─── Input / Output ──────────────────────────────────────────────────────────

UPLOAD_DIR = Path(os.getenv("RAMADAN_UPLOAD_DIR", str(ROOT / "data" / "uploads")))

# Resolution used when a scanned PDF has to be rasterized for the vision model
PDF_DPI = int(os.getenv("RAMADAN_PDF_DPI", "150"))

DEFAULT_TITLE = "Ramadan Class Schedule"
OUTPUT_SUFFIX = "_ramadan.pdf"

# ─── Web Service ─────────────────────────────────────────────────────────────

# Comma-separated origins allowed to call the API from a browser ("*" for any)
CORS_ORIGINS = [origin.strip() for origin in os.getenv("RAMADAN_CORS_ORIGINS", "*").split(",") if origin.strip()]
