"""
Arogya Wellness Stub Service - FastAPI Application Entry Point

Serves a local, deterministic implementation of the guidance service
contract (/health-assist, /recommendations, /follow-up) so presentation
layers and end-to-end tests can run without the real backend.

Run with:  uvicorn wellness.main:app --port 5000
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Resolve .env relative to project root (parent of wellness/)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=True)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from wellness.config import settings
from wellness.routers import guidance

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Arogya Wellness Stub Service")

# CORS - allow all origins for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies in the service's error shape."""
    logger.info("Rejected malformed body for %s", request.url.path)
    return guidance.error_response(400, "Invalid request body.")


app.include_router(guidance.router, tags=["guidance"])
