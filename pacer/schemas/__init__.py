"""Pydantic schemas for the pacing API."""

from pacer.schemas.document import AnalyzeRequest, AnalyzeResponse, LandmarkDTO, SchemaBase
from pacer.schemas.session import ChunkMessage, PlaybackCommand, StreamEvent, TokenDTO
from pacer.schemas.settings import PacingSettings

__all__ = [
    "SchemaBase",
    # Settings snapshot
    "PacingSettings",
    # Document schemas
    "AnalyzeRequest",
    "AnalyzeResponse",
    "LandmarkDTO",
    # Playback stream schemas
    "PlaybackCommand",
    "StreamEvent",
    "TokenDTO",
    "ChunkMessage",
]
