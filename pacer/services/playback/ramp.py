"""
Speed ramps applied on top of the per-token delay multipliers.

Two independent adjustments:
- Slow start: the first ``SLOW_START_TOKENS`` chunks of a session are shown
  longer, easing linearly back to normal speed.
- Acceleration: the effective WPM itself moves linearly from the session's
  start rate to a target rate over a number of played seconds.
"""

from pacer.schemas.settings import PacingSettings

# Chunks eased in at the start of every playback session
SLOW_START_TOKENS = 5


def slow_start_multiplier(tokens_consumed: int, ramp_tokens: int = SLOW_START_TOKENS) -> float:
    """
    Delay factor for the slow-start ramp.

    Examples:
        >>> slow_start_multiplier(0)
        2.0
        >>> slow_start_multiplier(4)
        1.2
        >>> slow_start_multiplier(5)
        1.0
    """
    if tokens_consumed >= ramp_tokens:
        return 1.0
    return 1.0 + (ramp_tokens - max(0, tokens_consumed)) / ramp_tokens


def accelerated_wpm(start_wpm: float, target_wpm: float, elapsed_seconds: float, duration_seconds: float) -> float:
    """
    Linear WPM interpolation for the acceleration ramp.

    Examples:
        >>> accelerated_wpm(200, 600, 15, 30)
        400.0
        >>> accelerated_wpm(200, 600, 40, 30)
        600.0
    """
    if duration_seconds <= 0 or elapsed_seconds >= duration_seconds:
        return float(target_wpm)

    progress = max(0.0, elapsed_seconds) / duration_seconds
    return start_wpm + (target_wpm - start_wpm) * progress


class RampController:
    """Apply the slow-start and acceleration ramps for a settings snapshot."""

    def __init__(self, settings: PacingSettings, ramp_tokens: int = SLOW_START_TOKENS) -> None:
        self.settings = settings
        self.ramp_tokens = ramp_tokens

    def delay_factor(self, tokens_consumed: int) -> float:
        """Slow-start delay factor, 1.0 when the ramp is disabled."""
        if not self.settings.enable_slow_start:
            return 1.0
        return slow_start_multiplier(tokens_consumed, self.ramp_tokens)

    def effective_wpm(self, start_wpm: float | None, elapsed_seconds: float | None) -> float:
        """
        WPM feeding the base interval.

        Without acceleration, or outside a session (no start rate or no
        elapsed time yet), this is the configured ``wpm``.
        """
        settings = self.settings
        if not settings.enable_acceleration or start_wpm is None or elapsed_seconds is None:
            return float(settings.wpm)

        return accelerated_wpm(
            start_wpm,
            settings.acceleration_target_wpm,
            elapsed_seconds,
            settings.acceleration_duration,
        )
