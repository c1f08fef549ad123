"""Pydantic schemas for the playback websocket stream."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from pacer.models.enums import SourceType
from pacer.schemas.document import LandmarkDTO, SchemaBase

PlaybackCommandName = Literal[
    "load",
    "play",
    "pause",
    "toggle",
    "stop",
    "seek",
    "jump",
    "settings",
    "status",
    "ping",
]


class PlaybackCommand(BaseModel):
    """One client command received over the playback stream."""

    command: PlaybackCommandName
    text: str | None = None
    source_type: SourceType = SourceType.PASTE
    start_index: int | None = None
    delta: int | None = None
    index: int | None = None
    settings: dict = Field(default_factory=dict)


class StreamEvent(BaseModel):
    """WebSocket stream event."""

    event_type: str
    session_id: str
    data: dict = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)


class TokenDTO(SchemaBase):
    index: int
    text: str
    display: str


class ChunkMessage(BaseModel):
    """Payload of a ``chunk`` event."""

    index: int
    tokens: list[TokenDTO]
    text: str
    breadcrumb: list[LandmarkDTO]
    breadcrumb_changed: bool
    is_final: bool
    delay_ms: float
