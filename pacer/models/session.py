"""Playback session models owned by the pacing engine."""

from dataclasses import dataclass
from typing import Optional

from pacer.models.landmark import BreadcrumbContext
from pacer.models.token import Token


@dataclass
class PlaybackState:
    """Mutable playback position and session timers.

    Exactly one instance exists per engine. Times are monotonic clock seconds;
    ``paused_accumulated_ms`` is the total paused duration of the session.
    """

    current_index: int = 0
    playing: bool = False
    session_start_time: Optional[float] = None
    paused_accumulated_ms: float = 0.0
    last_pause_time: Optional[float] = None
    tokens_consumed_this_session: int = 0
    chunk_size: int = 1
    session_start_wpm: Optional[float] = None

    @property
    def in_session(self) -> bool:
        return self.session_start_time is not None


@dataclass(frozen=True)
class ChunkEvent:
    """Payload delivered to the renderer on every emission.

    Attributes:
        tokens: The ``chunk_size`` tokens starting at ``index`` (fewer at the end).
        breadcrumb: Landmark ancestry for ``index``.
        is_final: Whether this chunk reaches the end of the document.
        index: Token index of the first token in the chunk.
        delay_ms: How long the chunk stays on screen; 0.0 for display-only updates.
    """

    tokens: tuple[Token, ...]
    breadcrumb: BreadcrumbContext
    is_final: bool
    index: int
    delay_ms: float = 0.0

    @property
    def text(self) -> str:
        return " ".join(token.text for token in self.tokens)
