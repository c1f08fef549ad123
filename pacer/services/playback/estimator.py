"""
Remaining-time estimation by replaying the delay formula.

The estimate walks every remaining chunk and applies exactly what the engine
would apply on each tick: the content multiplier, the slow-start factor for
the session's consumed count and, with acceleration on, the WPM reached after
the simulated played clock has advanced by every earlier delay.
"""

from collections.abc import Iterator, Sequence
from typing import Optional

from pacer.models.token import Token
from pacer.schemas.settings import PacingSettings
from pacer.services.tokenizer.timing import DelayCalculator, calculate_base_duration_ms

from .ramp import SLOW_START_TOKENS, RampController


def chunk_text(tokens: Sequence[Token], start: int, chunk_size: int) -> str:
    """Space-joined text of the chunk starting at ``start``."""
    return " ".join(token.text for token in tokens[start:start + chunk_size])


def compute_chunk_delay_ms(
    text: str,
    settings: PacingSettings,
    *,
    tokens_consumed: int,
    start_wpm: Optional[float],
    elapsed_seconds: Optional[float],
    ramp_tokens: int = SLOW_START_TOKENS,
) -> float:
    """
    Delay for one emission: base interval x content multiplier x slow start.

    Shared by the engine tick and the estimator so both always agree.
    """
    ramps = RampController(settings, ramp_tokens)
    wpm = ramps.effective_wpm(start_wpm, elapsed_seconds)
    base_ms = calculate_base_duration_ms(wpm)
    return base_ms * DelayCalculator(settings).calculate_delay(text) * ramps.delay_factor(tokens_consumed)


class DurationEstimator:
    """Replay per-chunk delays from a position to the end of the document."""

    def __init__(self, settings: PacingSettings, ramp_tokens: int = SLOW_START_TOKENS) -> None:
        self.settings = settings
        self.ramp_tokens = ramp_tokens

    def iter_token_delays(
        self,
        tokens: Sequence[Token],
        start: int,
        *,
        chunk_size: int = 1,
        tokens_consumed: int = 0,
        start_wpm: Optional[float] = None,
        elapsed_seconds: float = 0.0,
    ) -> Iterator[float]:
        """
        Yield the delay in ms of every remaining emission, in playback order.

        With ``chunk_size`` 1 this is one delay per token. Outside a session
        pass the defaults: the replay then starts a fresh session at the
        configured WPM.

        Args:
            tokens: The loaded token sequence.
            start: Index of the next chunk to be emitted.
            chunk_size: Tokens per emission.
            tokens_consumed: Emissions already made in the current session.
            start_wpm: Acceleration start rate captured at session start.
            elapsed_seconds: Played (pause-free) seconds of the session so far.
        """
        settings = self.settings
        step = max(1, chunk_size)
        if start_wpm is None:
            start_wpm = float(settings.wpm)

        consumed = tokens_consumed
        elapsed = elapsed_seconds
        position = max(0, start)

        while position < len(tokens):
            delay_ms = compute_chunk_delay_ms(
                chunk_text(tokens, position, step),
                settings,
                tokens_consumed=consumed,
                start_wpm=start_wpm,
                elapsed_seconds=elapsed,
                ramp_tokens=self.ramp_tokens,
            )
            yield delay_ms

            consumed += 1
            elapsed += delay_ms / 1000.0
            position += step

    def estimate_ms(self, tokens: Sequence[Token], start: int, **session) -> float:
        """Total remaining time in milliseconds (see ``iter_token_delays``)."""
        return sum(self.iter_token_delays(tokens, start, **session))
