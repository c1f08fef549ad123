"""Domain models for the pacing engine."""

from pacer.models.document import LoadedDocument
from pacer.models.enums import LandmarkKind, PlaybackStatus, SourceType
from pacer.models.landmark import CALLOUT_LEVEL, BreadcrumbContext, Landmark
from pacer.models.session import ChunkEvent, PlaybackState
from pacer.models.token import Token

__all__ = [
    "LoadedDocument",
    "Token",
    "Landmark",
    "BreadcrumbContext",
    "PlaybackState",
    "ChunkEvent",
    "SourceType",
    "PlaybackStatus",
    "LandmarkKind",
    "CALLOUT_LEVEL",
]
