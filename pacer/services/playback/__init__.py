"""
Playback package: the pacing engine and its collaborators.

- engine: PacingEngine state machine and tick loop
- ramp: slow-start and acceleration ramps
- breadcrumb: ancestry resolution over the landmark list
- estimator: remaining-time replay
- scheduler: tick scheduling seam (asyncio implementation)
- stats: status line formatting
"""

from .breadcrumb import BreadcrumbResolver, breadcrumb_changed
from .engine import PacingEngine
from .estimator import DurationEstimator, compute_chunk_delay_ms
from .ramp import SLOW_START_TOKENS, RampController, accelerated_wpm, slow_start_multiplier
from .scheduler import AsyncioTickScheduler, ScheduledTick, TickScheduler
from .stats import format_clock, format_loaded_stats, format_reading_stats

__all__ = [
    "PacingEngine",
    "RampController",
    "SLOW_START_TOKENS",
    "slow_start_multiplier",
    "accelerated_wpm",
    "BreadcrumbResolver",
    "breadcrumb_changed",
    "DurationEstimator",
    "compute_chunk_delay_ms",
    "TickScheduler",
    "ScheduledTick",
    "AsyncioTickScheduler",
    "format_clock",
    "format_reading_stats",
    "format_loaded_stats",
]
