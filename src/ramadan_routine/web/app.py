"""FastAPI web server for the Ramadan routine converter.

Accepts a schedule upload (PDF or image), runs the conversion pipeline, and
serves the resulting PDF for download.

Usage:
    python -m ramadan_routine.web.app
    # => Uvicorn running on http://localhost:5000
"""

import asyncio
import logging
import os
import uuid
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse

from ramadan_routine.config import CORS_ORIGINS, OUTPUT_SUFFIX, UPLOAD_DIR
from ramadan_routine.extraction.errors import ExtractionError, UnsupportedInput
from ramadan_routine.extraction.loaders import SUPPORTED_EXTENSIONS
from ramadan_routine.pipeline import process_file

logger = logging.getLogger(__name__)

# Name offered to the browser for every generated PDF
DOWNLOAD_NAME = "RamadanSchedule.pdf"

app = FastAPI(title="Ramadan Routine")

# The upload front end is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/", response_class=PlainTextResponse)
async def health():
    """Liveness check."""
    return "Ramadan Routine backend running"


@app.post("/api/upload")
async def upload(file: UploadFile | None = File(default=None)):
    """Save the uploaded schedule, convert it, and return the download URL of the adjusted PDF."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    suffix = Path(file.filename).suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Unsupported file type")

    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    stem = uuid.uuid4().hex
    source = UPLOAD_DIR / f"{stem}{suffix}"
    content = await file.read()
    source.write_bytes(content)
    logger.info("Saved upload %s as %s (%.1f KB)", file.filename, source.name, len(content) / 1024)

    output = UPLOAD_DIR / f"{stem}{OUTPUT_SUFFIX}"
    try:
        # The pipeline blocks on the recognition service; keep it off the event loop
        await asyncio.to_thread(process_file, source, output)
    except UnsupportedInput as exc:
        logger.warning("Rejected %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ExtractionError as exc:
        logger.exception("Failed to process %s", file.filename)
        raise HTTPException(status_code=502, detail=f"Failed to process file: {exc}") from exc

    return {"download": f"/api/download/{output.name}"}


@app.get("/api/download/{filename}")
async def download(filename: str):
    """Serve a previously generated PDF."""
    path = UPLOAD_DIR / filename
    # Only bare generated names are served, never paths outside the upload dir
    if Path(filename).name != filename or not filename.endswith(OUTPUT_SUFFIX) or not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path, media_type="application/pdf", filename=DOWNLOAD_NAME)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))


if __name__ == "__main__":
    main()
