"""
Pacing engine: the playback state machine.

States: IDLE -> LOADED -> PLAYING <-> PAUSED, with COMPLETED reached from
PLAYING once the position passes the last token. ``stop()`` returns to LOADED
from anywhere.

Playback is a chain of single-shot ticks. Each tick emits one chunk, computes
its delay, advances the position and schedules the next tick. At most one tick
is pending; every cancellation bumps a generation counter that the pending
tick checks before it runs, so a cancelled tick can never emit.

The engine never raises during normal operation. Bad input is ignored or
clamped, and renderer callback failures are logged.
"""

import dataclasses
import logging
import time
from collections.abc import Callable, Iterator
from functools import partial
from typing import Optional

from pacer.logging_config import log_performance
from pacer.models.document import LoadedDocument
from pacer.models.enums import PlaybackStatus, SourceType
from pacer.models.landmark import BreadcrumbContext, Landmark
from pacer.models.session import ChunkEvent, PlaybackState
from pacer.models.token import Token
from pacer.schemas.settings import PacingSettings
from pacer.services.tokenizer import StructureIndexer, TextSegmenter, normalize_text

from .breadcrumb import BreadcrumbResolver
from .estimator import DurationEstimator, chunk_text, compute_chunk_delay_ms
from .ramp import RampController
from .scheduler import AsyncioTickScheduler, ScheduledTick, TickScheduler
from .stats import format_loaded_stats, format_reading_stats

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[ChunkEvent], None]
CompleteCallback = Callable[[], None]


class PacingEngine:
    """
    Drive timed chunk emission over one loaded document.

    Args:
        settings: Initial settings snapshot (defaults to ``PacingSettings()``).
        scheduler: Tick scheduler, an asyncio one by default.
        clock: Monotonic clock in seconds.
        on_chunk: Renderer callback receiving every ``ChunkEvent``.
        on_complete: Renderer callback fired once playback completes.

    Example:
        >>> engine = PacingEngine(on_chunk=print)
        >>> engine.load("One two three", start_index=1)
        >>> engine.current_index
        1
    """

    def __init__(
        self,
        settings: Optional[PacingSettings] = None,
        *,
        scheduler: Optional[TickScheduler] = None,
        clock: Callable[[], float] = time.monotonic,
        on_chunk: Optional[ChunkCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
    ) -> None:
        self._settings = settings or PacingSettings()
        self._scheduler = scheduler or AsyncioTickScheduler()
        self._clock = clock
        self.on_chunk = on_chunk
        self.on_complete = on_complete

        self._segmenter = TextSegmenter()
        self._indexer = StructureIndexer()
        self._document = LoadedDocument(tokens=(), landmarks=())
        self._resolver = BreadcrumbResolver()

        self._state = PlaybackState(chunk_size=self._settings.chunk_size)
        self._status = PlaybackStatus.IDLE
        self._display_index = 0
        self._pending: Optional[ScheduledTick] = None
        self._generation = 0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def settings(self) -> PacingSettings:
        return self._settings

    @property
    def document(self) -> LoadedDocument:
        return self._document

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._document.tokens

    @property
    def state(self) -> PlaybackState:
        """Copy of the playback state; mutate the engine through its operations."""
        return dataclasses.replace(self._state)

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def display_index(self) -> int:
        """Index of the first token of the chunk last shown."""
        return self._display_index

    @property
    def total_tokens(self) -> int:
        return self._document.token_count

    @property
    def remaining_tokens(self) -> int:
        return max(0, self.total_tokens - self._state.current_index)

    @property
    def is_playing(self) -> bool:
        return self._status is PlaybackStatus.PLAYING

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @log_performance("Document load")
    def load(
        self,
        text: str,
        start_index: Optional[int] = None,
        *,
        source_type: SourceType | str = SourceType.PASTE,
    ) -> None:
        """
        Replace the document and move to LOADED.

        Empty or whitespace-only input (and input the normalizer rejects) is
        ignored: the engine keeps whatever it had before.
        """
        source = SourceType(source_type).value
        try:
            normalized = normalize_text(text or "", source)
        except ValueError as e:
            logger.warning("Load ignored: %s", e)
            return

        tokens = tuple(self._segmenter.segment(normalized))
        if not tokens:
            logger.debug("Load ignored: no tokens in input")
            return

        self._cancel_pending()
        landmarks = tuple(self._indexer.index(tokens))
        self._document = LoadedDocument(tokens=tokens, landmarks=landmarks, source_text=normalized)
        self._resolver = BreadcrumbResolver(landmarks)

        start = self._clamp(start_index or 0)
        self._state = PlaybackState(current_index=start, chunk_size=self._settings.chunk_size)
        self._display_index = start
        self._set_status(PlaybackStatus.LOADED)

        logger.info(
            "Loaded %d tokens, %d landmarks, start at %d",
            len(tokens),
            len(landmarks),
            start,
        )

    def play(self) -> None:
        """Start or resume playback; restart from the beginning after completion."""
        if self._status in (PlaybackStatus.IDLE, PlaybackStatus.PLAYING):
            return

        if self._status is PlaybackStatus.COMPLETED:
            self._state = PlaybackState(chunk_size=self._settings.chunk_size)
            self._display_index = 0

        state = self._state
        now = self._clock()

        if not state.in_session:
            state.session_start_time = now
            state.paused_accumulated_ms = 0.0
            state.last_pause_time = None
            state.tokens_consumed_this_session = 0
            state.session_start_wpm = float(self._settings.wpm)
            logger.debug("Session started at %d (%.0f WPM)", state.current_index, state.session_start_wpm)
        elif state.last_pause_time is not None:
            state.paused_accumulated_ms += (now - state.last_pause_time) * 1000.0
            state.last_pause_time = None

        state.playing = True
        self._set_status(PlaybackStatus.PLAYING)
        self._tick()

    def pause(self) -> None:
        """Pause playback, cancelling the pending tick."""
        if self._status is not PlaybackStatus.PLAYING:
            return

        self._cancel_pending()
        self._state.playing = False
        self._state.last_pause_time = self._clock()
        self._set_status(PlaybackStatus.PAUSED)

    def toggle(self) -> None:
        """Pause when playing, play otherwise."""
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def stop(self) -> None:
        """Return to the start of the document and clear the session."""
        self._cancel_pending()
        self._state = PlaybackState(chunk_size=self._settings.chunk_size)
        self._display_index = 0
        self._set_status(PlaybackStatus.LOADED if self.total_tokens else PlaybackStatus.IDLE)

    def seek(self, delta_tokens: int) -> None:
        """
        Move the position by ``delta_tokens``, clamped to the document.

        While playing the next chunk is emitted right away from the new
        position; otherwise only the displayed chunk is refreshed.
        """
        if not self.total_tokens:
            return

        target = self._clamp(self._state.current_index + delta_tokens)
        logger.debug("Seek %+d: %d -> %d", delta_tokens, self._state.current_index, target)
        self._state.current_index = target

        if self._status is PlaybackStatus.PLAYING:
            self._cancel_pending()
            self._tick()
            return

        if self._status is PlaybackStatus.COMPLETED:
            self._set_status(PlaybackStatus.PAUSED)

        self._emit_display()

    def jump_to(self, token_index: int) -> None:
        """Seek to an absolute token index (for outline navigation)."""
        self.seek(token_index - self._state.current_index)

    def jump_to_landmark(self, landmark: Landmark) -> None:
        self.jump_to(landmark.token_index)

    def update_settings(self, settings: PacingSettings) -> None:
        """Swap in a new settings snapshot; it applies from the next tick."""
        self._settings = settings
        logger.debug("Settings updated: wpm=%d chunk_size=%d", settings.wpm, settings.chunk_size)

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_progress_fraction(self) -> float:
        if not self.total_tokens:
            return 0.0
        return min(1.0, self._state.current_index / self.total_tokens)

    def get_elapsed_seconds(self) -> float:
        """Played seconds in the current session, pauses excluded."""
        return self._played_seconds() or 0.0

    def get_current_wpm(self) -> int:
        if not self.total_tokens:
            return 0
        ramps = RampController(self._settings)
        return round(ramps.effective_wpm(self._state.session_start_wpm, self._played_seconds()))

    def iter_remaining_delays(self) -> Iterator[float]:
        """Per-chunk delays (ms) from the current position to the end."""
        state = self._state
        estimator = DurationEstimator(self._settings)

        if not state.in_session or self._status is PlaybackStatus.COMPLETED:
            return estimator.iter_token_delays(self.tokens, state.current_index, chunk_size=self._settings.chunk_size)

        return estimator.iter_token_delays(
            self.tokens,
            state.current_index,
            chunk_size=self._settings.chunk_size,
            tokens_consumed=state.tokens_consumed_this_session,
            start_wpm=state.session_start_wpm,
            elapsed_seconds=self._played_seconds() or 0.0,
        )

    def get_remaining_seconds(self) -> float:
        if self._state.current_index >= self.total_tokens:
            return 0.0
        return sum(self.iter_remaining_delays()) / 1000.0

    def get_landmarks(self) -> list[Landmark]:
        return self._resolver.outline()

    def get_breadcrumb(self, token_index: Optional[int] = None) -> BreadcrumbContext:
        if not self.total_tokens:
            return BreadcrumbContext()
        index = self._display_index if token_index is None else token_index
        return self._resolver.resolve(index)

    def get_siblings(self, landmark: Landmark) -> list[Landmark]:
        return self._resolver.siblings(landmark)

    def get_context(self, context_words: Optional[int] = None) -> tuple[list[Token], list[Token]]:
        """Tokens shown around the displayed chunk: ``(before, after)``."""
        if context_words is None:
            context_words = self._settings.context_words
        if not self.total_tokens or context_words <= 0:
            return [], []

        start = self._display_index
        end = start + self._settings.chunk_size
        before = list(self.tokens[max(0, start - context_words):start])
        after = list(self.tokens[end:end + context_words])
        return before, after

    def format_stats(self) -> str:
        """
        Status line for the renderer.

        Reading stats (``"150/500 words | 0:45 | 200 WPM | 1:45 left"``) during a
        session, loaded stats (``"500 words loaded - ~2:30"``) before one.
        """
        if not self._state.in_session:
            return format_loaded_stats(self.remaining_tokens, self.total_tokens, self.get_remaining_seconds())

        return format_reading_stats(
            self._state.current_index,
            self.total_tokens,
            self.get_elapsed_seconds(),
            self.get_current_wpm(),
            self.get_remaining_seconds(),
        )

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        state = self._state
        settings = self._settings
        tokens = self.tokens
        count = len(tokens)

        if state.current_index >= count:
            self._complete()
            return

        state.chunk_size = settings.chunk_size
        start = state.current_index
        chunk = tokens[start:start + state.chunk_size]

        delay_ms = compute_chunk_delay_ms(
            chunk_text(tokens, start, state.chunk_size),
            settings,
            tokens_consumed=state.tokens_consumed_this_session,
            start_wpm=state.session_start_wpm,
            elapsed_seconds=self._played_seconds(),
        )

        next_index = start + len(chunk)
        event = ChunkEvent(
            tokens=chunk,
            breadcrumb=self._resolver.resolve(start),
            is_final=next_index >= count,
            index=start,
            delay_ms=delay_ms,
        )

        state.current_index = next_index
        state.tokens_consumed_this_session += 1
        self._display_index = start

        generation = self._generation
        self._emit(event)

        # The renderer may have paused, stopped or seeked from its callback
        if generation != self._generation or self._status is not PlaybackStatus.PLAYING:
            return

        if next_index >= count:
            self._complete()
        else:
            self._schedule(delay_ms)

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation or self._status is not PlaybackStatus.PLAYING:
            logger.debug("Dropping stale tick (generation %d)", generation)
            return
        self._pending = None
        self._tick()

    def _schedule(self, delay_ms: float) -> None:
        self._cancel_pending()
        self._pending = self._scheduler.call_later(delay_ms, partial(self._on_tick, self._generation))

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _complete(self) -> None:
        self._cancel_pending()
        self._state.playing = False
        self._state.last_pause_time = self._clock()
        self._set_status(PlaybackStatus.COMPLETED)

        if self.on_complete is not None:
            try:
                self.on_complete()
            except Exception:
                logger.exception("Completion callback failed")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, event: ChunkEvent) -> None:
        if self.on_chunk is None:
            return
        try:
            self.on_chunk(event)
        except Exception:
            logger.exception("Chunk callback failed at token %d", event.index)

    def _emit_display(self) -> None:
        start = self._state.current_index
        chunk = self.tokens[start:start + self._settings.chunk_size]
        self._display_index = start
        self._emit(
            ChunkEvent(
                tokens=chunk,
                breadcrumb=self._resolver.resolve(start),
                is_final=start + len(chunk) >= self.total_tokens,
                index=start,
            )
        )

    def _played_seconds(self) -> Optional[float]:
        state = self._state
        if state.session_start_time is None:
            return None

        now = self._clock()
        paused_ms = state.paused_accumulated_ms
        if state.last_pause_time is not None:
            paused_ms += (now - state.last_pause_time) * 1000.0
        return max(0.0, (now - state.session_start_time) - paused_ms / 1000.0)

    def _clamp(self, index: int) -> int:
        if not self.total_tokens:
            return 0
        return max(0, min(index, self.total_tokens - 1))

    def _set_status(self, status: PlaybackStatus) -> None:
        if status is not self._status:
            logger.debug("Status %s -> %s", self._status.value, status.value)
        self._status = status
