"""Immutable pacing settings snapshot supplied by the settings store."""

from pydantic import BaseModel, ConfigDict, Field


class PacingSettings(BaseModel):
    """Numeric and boolean configuration read by the engine on every tick.

    Instances are frozen: callers build a new snapshot (``model_copy(update=...)``)
    and hand it to ``PacingEngine.update_settings``. Field bounds are the settings
    store's validation; the engine itself uses whatever it receives.
    """

    model_config = ConfigDict(frozen=True)

    # Reading speed
    wpm: int = Field(300, ge=50, le=5000)
    chunk_size: int = Field(1, ge=1, le=10)
    context_words: int = Field(3, ge=0, le=20)

    # Micropauses
    enable_micropause: bool = True
    micropause_punctuation: float = Field(2.5, ge=1.0, le=10.0)
    micropause_other_punctuation: float = Field(1.5, ge=1.0, le=10.0)
    micropause_numbers: float = Field(1.8, ge=1.0, le=10.0)
    micropause_long_words: float = Field(1.4, ge=1.0, le=10.0)
    micropause_paragraph: float = Field(2.5, ge=1.0, le=10.0)
    micropause_section_markers: float = Field(2.0, ge=1.0, le=10.0)
    micropause_list_bullets: float = Field(1.8, ge=1.0, le=10.0)
    micropause_callouts: float = Field(2.0, ge=1.0, le=10.0)
    long_word_threshold: int = Field(8, ge=1, le=50)

    # Ramps
    enable_slow_start: bool = True
    enable_acceleration: bool = False
    acceleration_duration: float = Field(30.0, gt=0, le=300)
    acceleration_target_wpm: int = Field(450, ge=50, le=5000)
