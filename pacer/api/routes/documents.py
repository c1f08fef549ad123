"""Document analysis API route."""

import logging

from fastapi import APIRouter, Depends

from pacer.api.errors import APIError
from pacer.config import Settings, get_settings
from pacer.schemas.document import AnalyzeRequest, AnalyzeResponse, LandmarkDTO
from pacer.schemas.settings import PacingSettings
from pacer.services.playback import PacingEngine, format_loaded_stats
from pacer.services.tokenizer import format_duration

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_document(
    request: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    """
    Segment a text and report its landmarks and estimated reading time.

    The estimate replays every chunk delay from ``start_index`` as a fresh
    playback session would.
    """
    if len(request.text) > settings.max_input_chars:
        raise APIError.payload_too_large(
            f"Input text exceeds maximum size of {settings.max_input_chars:,} characters"
        )

    pacing = PacingSettings(
        wpm=request.wpm or settings.default_wpm,
        chunk_size=request.chunk_size or settings.default_chunk_size,
    )
    engine = PacingEngine(pacing)
    engine.load(request.text, request.start_index, source_type=request.source_type)

    if not engine.total_tokens:
        raise APIError.bad_request("Text contains no readable tokens")

    seconds = engine.get_remaining_seconds()
    logger.debug("Analyzed %d tokens (%.1fs at %d WPM)", engine.total_tokens, seconds, pacing.wpm)

    return AnalyzeResponse(
        token_count=engine.total_tokens,
        start_index=engine.current_index,
        wpm=pacing.wpm,
        chunk_size=pacing.chunk_size,
        landmarks=[LandmarkDTO.model_validate(landmark) for landmark in engine.get_landmarks()],
        estimated_seconds=round(seconds, 3),
        estimated_duration=format_duration(seconds),
        stats=format_loaded_stats(engine.remaining_tokens, engine.total_tokens, seconds),
    )
