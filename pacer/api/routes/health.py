"""Health check API route."""

import logging

from fastapi import APIRouter

from pacer import __version__
from pacer.services.tokenizer import TOKENIZER_VERSION, TextSegmenter

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    try:
        TextSegmenter().segment("health check")
        tokenizer_ok = True
    except Exception:
        logger.exception("Health check tokenizer self-check failed")
        tokenizer_ok = False

    return {
        "status": "ok" if tokenizer_ok else "degraded",
        "tokenizer": TOKENIZER_VERSION if tokenizer_ok else "unavailable",
        "version": __version__,
    }
