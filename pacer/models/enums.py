"""Enums shared by the pacing models."""

from enum import Enum


class SourceType(str, Enum):
    """Enum for document source types."""

    PASTE = "paste"
    MARKDOWN = "md"


class PlaybackStatus(str, Enum):
    """Lifecycle state of a pacing engine."""

    IDLE = "idle"
    LOADED = "loaded"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


class LandmarkKind(str, Enum):
    """Type of structural landmark recorded by the structure indexer."""

    HEADING = "heading"
    CALLOUT = "callout"
