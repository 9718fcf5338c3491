"""FastAPI application for the PageForge HTML cleaning engine.

Exports ``app`` for use with ``uvicorn main:app``.
"""

import json
import logging
import traceback
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

# Load .env next to this file so OPENAI_API_KEY / OPENAI_BASE_URL are set
load_dotenv(Path(__file__).resolve().parent / ".env")

from engine.pipeline import EmptyDocumentError, clean
from models.request import CleanRequest
from models.response import CleanResponse


# ---------------------------------------------------------------------------
# Structured JSON logging
# ---------------------------------------------------------------------------

class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter for structured log output."""

    EXTRA_FIELDS = (
        "session_id",
        "option",
        "platform",
        "embeds",
        "nodes_removed",
        "bytes_saved",
        "prompt_tokens",
        "completion_tokens",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Include optional extra fields when present
        for key in self.EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_data[key] = val
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


_handler = logging.StreamHandler()
_handler.setFormatter(StructuredFormatter())

logger = logging.getLogger("pageforge")
logger.addHandler(_handler)
logger.setLevel(logging.INFO)
# Prevent propagation to root logger to avoid duplicate output
logger.propagate = False


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="PageForge HTML Cleaner")

DOWNLOAD_FILENAME = "cleaned_page.html"


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

@app.exception_handler(EmptyDocumentError)
async def empty_document_handler(request: Request, exc: EmptyDocumentError) -> JSONResponse:
    """Blank input is the one condition that prevents a result."""
    logger.info("rejected empty document")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and answer with a generic 500."""
    logger.error(
        "Unhandled exception: %s: %s\n%s",
        type(exc).__name__,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred during the cleaning process."},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Health check."""
    return {"status": "healthy"}


@app.post("/clean", response_model=CleanResponse)
async def clean_html(request: CleanRequest) -> CleanResponse:
    """Clean the posted HTML and return the result bundle.

    Delegates to the cleaning pipeline, which parses the document, applies
    the enabled transforms, and measures the size delta.
    """
    logger.info("clean request", extra={"session_id": request.session_id})
    result = await clean(request.html, request.options, session_id=request.session_id)
    return result.to_response()


@app.post("/clean/download")
async def download_cleaned_html(request: CleanRequest) -> Response:
    """Clean the posted HTML and return it as a downloadable ``.html`` file."""
    logger.info("download request", extra={"session_id": request.session_id})
    result = await clean(request.html, request.options, session_id=request.session_id)
    return Response(
        content=result.cleaned_html,
        media_type="text/html",
        headers={"Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"'},
    )
