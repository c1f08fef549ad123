"""
Timing and delay multiplier calculations for paced display.

This module provides the DelayCalculator class for computing delay
multipliers from token content: structural markers, enumerators and
bullets, punctuation, digits, token length and paragraph breaks.

The delay multiplier determines how long to display a chunk relative
to the base token duration (derived from the effective WPM).
"""

from pacer.schemas.settings import PacingSettings

from .constants import (
    CALLOUT_PREFIX_PATTERN,
    DIGIT_PATTERN,
    HEADING_PAUSE_MULTIPLIERS,
    HEADING_PREFIX_PATTERN,
    LIST_BULLETS,
    OTHER_PAUSE_PUNCTUATION,
    PARAGRAPH_BREAK,
    SECTION_MARKER_PATTERN,
    SENTENCE_ENDERS,
)
from .text_utils import get_terminal_punctuation


class DelayCalculator:
    """
    Calculate delay multipliers for paced token display.

    Every matching rule contributes a factor and the factors multiply, so
    evaluation order never changes the result. Each factor is floored at 1.0,
    which keeps the product at or above 1.0 whatever the settings hold.

    Rules:
    - Heading marker: fixed per-level table (H1 2.0 down to H6 1.1)
    - Callout marker: ``micropause_callouts``
    - Section marker at start ("1.", "IV.", "a."): ``micropause_section_markers``
    - List bullet at start: ``micropause_list_bullets``
    - Terminal punctuation: ``.!?`` -> ``micropause_punctuation``, otherwise
      ``;:,`` -> ``micropause_other_punctuation`` (never both)
    - Any ASCII digit: ``micropause_numbers``
    - Length above ``long_word_threshold``: ``micropause_long_words``
    - Embedded line break: ``micropause_paragraph``

    The digit and length rules read the trimmed token text, markers included,
    so ``"[H1]Intro"`` counts as nine characters with a digit.

    Example usage:
        >>> calc = DelayCalculator(PacingSettings())
        >>> calc.calculate_delay("hello")
        1.0
        >>> calc.calculate_delay("end.")
        2.5
        >>> calc.calculate_delay("1000x!")
        4.5
    """

    def __init__(self, settings: PacingSettings) -> None:
        self.settings = settings

    def calculate_delay(self, text: str) -> float:
        """
        Calculate the delay multiplier for a token or chunk text.

        Args:
            text: Token text (or space-joined chunk text), markers included.

        Returns:
            Delay multiplier, always >= 1.0.
        """
        settings = self.settings
        if not settings.enable_micropause or not text:
            return 1.0

        trimmed = text.strip()
        multiplier = 1.0

        heading = HEADING_PREFIX_PATTERN.match(trimmed)
        if heading:
            multiplier *= _factor(HEADING_PAUSE_MULTIPLIERS[int(heading.group(1))])

        if CALLOUT_PREFIX_PATTERN.match(trimmed):
            multiplier *= _factor(settings.micropause_callouts)

        if SECTION_MARKER_PATTERN.match(trimmed):
            multiplier *= _factor(settings.micropause_section_markers)

        if trimmed.startswith(LIST_BULLETS):
            multiplier *= _factor(settings.micropause_list_bullets)

        terminal = get_terminal_punctuation(text)
        if terminal in SENTENCE_ENDERS:
            multiplier *= _factor(settings.micropause_punctuation)
        elif terminal in OTHER_PAUSE_PUNCTUATION:
            multiplier *= _factor(settings.micropause_other_punctuation)

        if DIGIT_PATTERN.search(trimmed):
            multiplier *= _factor(settings.micropause_numbers)

        if len(trimmed) > settings.long_word_threshold:
            multiplier *= _factor(settings.micropause_long_words)

        if PARAGRAPH_BREAK in text:
            multiplier *= _factor(settings.micropause_paragraph)

        return multiplier


def _factor(value: float) -> float:
    return max(1.0, value)


def delay_multiplier(text: str, settings: PacingSettings) -> float:
    """Functional form of ``DelayCalculator(settings).calculate_delay(text)``."""
    return DelayCalculator(settings).calculate_delay(text)


def calculate_base_duration_ms(wpm: float) -> float:
    """
    Calculate the base token display duration from WPM (words per minute).

    Args:
        wpm: Reading speed in words per minute.

    Returns:
        Base duration in milliseconds for one token.

    Raises:
        ValueError: If wpm is not positive.

    Examples:
        >>> calculate_base_duration_ms(300)
        200.0
        >>> calculate_base_duration_ms(600)
        100.0
    """
    if wpm <= 0:
        raise ValueError(f"WPM must be positive, got {wpm}")

    # 60,000 ms per minute / words per minute = ms per word
    return 60_000.0 / wpm


def format_duration(total_seconds: float) -> str:
    """
    Format a reading duration as a short human string.

    Examples:
        >>> format_duration(360)
        '6 min'
        >>> format_duration(4140)
        '1 hr 9 min'
        >>> format_duration(20)
        '1 min'
    """
    total_minutes = int(total_seconds / 60)

    if total_minutes < 60:
        return f"{max(1, total_minutes)} min"

    hours = total_minutes // 60
    minutes = total_minutes % 60

    if minutes == 0:
        return f"{hours} hr"

    return f"{hours} hr {minutes} min"
