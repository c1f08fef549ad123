"""Tests for delay multiplier calculations.

Covers every rule of the delay calculator:
- Heading table and callout markers
- Section markers and list bullets
- Terminal punctuation (sentence enders vs lighter punctuation)
- Digits, long tokens and paragraph breaks
- Multiplicative compounding and the 1.0 floor
"""

import pytest

from pacer.schemas.settings import PacingSettings
from pacer.services.tokenizer import (
    HEADING_PAUSE_MULTIPLIERS,
    DelayCalculator,
    calculate_base_duration_ms,
    delay_multiplier,
    format_duration,
    get_terminal_punctuation,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings():
    return PacingSettings()


@pytest.fixture
def calculator(settings):
    return DelayCalculator(settings)


# =============================================================================
# Individual rules
# =============================================================================


class TestSingleRules:
    def test_plain_word(self, calculator):
        assert calculator.calculate_delay("hello") == 1.0

    def test_empty_text(self, calculator):
        assert calculator.calculate_delay("") == 1.0

    @pytest.mark.parametrize("level,expected", sorted(HEADING_PAUSE_MULTIPLIERS.items()))
    def test_heading_table(self, calculator, settings, level, expected):
        # The digit in the marker counts toward the number rule
        assert calculator.calculate_delay(f"[H{level}]Go") == pytest.approx(expected * settings.micropause_numbers)

    def test_heading_table_values(self):
        assert HEADING_PAUSE_MULTIPLIERS == {1: 2.0, 2: 1.8, 3: 1.5, 4: 1.3, 5: 1.2, 6: 1.1}

    def test_callout(self, calculator, settings):
        expected = settings.micropause_callouts * settings.micropause_long_words
        assert calculator.calculate_delay("[CALLOUT:note]Heads") == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["IV.", "a.", "B."])
    def test_section_marker(self, calculator, settings, token):
        # Section markers end with a period, so the sentence rule applies too
        expected = settings.micropause_section_markers * settings.micropause_punctuation
        assert calculator.calculate_delay(token) == pytest.approx(expected)

    def test_numeric_section_marker(self, calculator, settings):
        expected = (
            settings.micropause_section_markers
            * settings.micropause_punctuation
            * settings.micropause_numbers
        )
        assert calculator.calculate_delay("12.") == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["-", "*", "+", "•", "-item"])
    def test_list_bullets(self, calculator, settings, token):
        assert calculator.calculate_delay(token) == pytest.approx(settings.micropause_list_bullets)

    @pytest.mark.parametrize("token", ["end.", "wow!", "why?"])
    def test_sentence_punctuation(self, calculator, settings, token):
        assert calculator.calculate_delay(token) == pytest.approx(settings.micropause_punctuation)

    @pytest.mark.parametrize("token", ["first,", "list:", "clause;"])
    def test_other_punctuation(self, calculator, settings, token):
        assert calculator.calculate_delay(token) == pytest.approx(settings.micropause_other_punctuation)

    def test_digits(self, calculator, settings):
        assert calculator.calculate_delay("2024") == pytest.approx(settings.micropause_numbers)

    @pytest.mark.parametrize("token", ["x\u00b2", "\u2460", "\u0663"])
    def test_non_ascii_digits_ignored(self, calculator, token):
        assert calculator.calculate_delay(token) == 1.0

    def test_long_word(self, calculator, settings):
        assert calculator.calculate_delay("extraordinary") == pytest.approx(settings.micropause_long_words)

    def test_threshold_is_exclusive(self, calculator):
        assert calculator.calculate_delay("abcdefgh") == 1.0
        assert calculator.calculate_delay("abcdefghi") > 1.0

    def test_long_word_counts_marker_text(self, calculator, settings):
        """The marker counts toward token length; the trailing line break does not."""
        expected = 2.0 * settings.micropause_numbers * settings.micropause_long_words
        assert calculator.calculate_delay("[H1]Abcdefgh") == pytest.approx(expected)
        assert calculator.calculate_delay("abcdefgh\n") == pytest.approx(settings.micropause_paragraph)

    def test_custom_threshold(self, settings):
        calc = DelayCalculator(settings.model_copy(update={"long_word_threshold": 3}))
        assert calc.calculate_delay("four") == pytest.approx(settings.micropause_long_words)

    def test_paragraph_break(self, calculator, settings):
        assert calculator.calculate_delay("word\n") == pytest.approx(settings.micropause_paragraph)


# =============================================================================
# Compounding
# =============================================================================


class TestCompounding:
    def test_number_and_sentence_end(self):
        settings = PacingSettings(micropause_numbers=1.8, micropause_punctuation=2.5)
        assert delay_multiplier("1000x!", settings) == pytest.approx(4.5)

    def test_punctuation_before_paragraph_break(self, calculator, settings):
        expected = settings.micropause_punctuation * settings.micropause_paragraph
        assert calculator.calculate_delay("Hello!\n") == pytest.approx(expected)

    def test_heading_with_break(self, calculator, settings):
        expected = (
            HEADING_PAUSE_MULTIPLIERS[2]
            * settings.micropause_numbers
            * settings.micropause_long_words
            * settings.micropause_paragraph
        )
        assert calculator.calculate_delay("[H2]Methods\n") == pytest.approx(expected)

    def test_chunk_text(self, calculator, settings):
        """A chunk is judged as one text: start rules on its first token, end rules on its last."""
        expected = settings.micropause_list_bullets * settings.micropause_punctuation
        assert calculator.calculate_delay("- buy milk.") == pytest.approx(expected * settings.micropause_long_words)


class TestPunctuationExclusion:
    @pytest.mark.parametrize("token", ["end.", "a,b.", "x;.", "etc.\n"])
    def test_sentence_end_never_applies_lighter_rule(self, calculator, settings, token):
        multiplier = calculator.calculate_delay(token)
        lighter = settings.micropause_other_punctuation
        # Only the sentence factor (and possibly the break factor) is present
        remaining = multiplier / settings.micropause_punctuation
        if token.endswith("\n"):
            remaining /= settings.micropause_paragraph
        assert remaining == pytest.approx(1.0)
        assert remaining != pytest.approx(lighter)

    def test_terminal_punctuation_lookup(self):
        assert get_terminal_punctuation("end.") == "."
        assert get_terminal_punctuation("first,\n") == ","
        assert get_terminal_punctuation("word") is None
        assert get_terminal_punctuation("\n") is None


class TestLowerBound:
    TOKENS = [
        "",
        "a",
        "1000x!",
        "[H1]Title\n",
        "[CALLOUT:x]y",
        "IV.",
        "•",
        "supercalifragilistic;",
        "end.\n",
        "   ",
    ]

    @pytest.mark.parametrize("token", TOKENS)
    def test_multiplier_at_least_one(self, calculator, token):
        assert calculator.calculate_delay(token) >= 1.0

    @pytest.mark.parametrize("token", TOKENS)
    def test_factors_below_one_are_floored(self, token):
        """Unvalidated settings cannot shorten the base interval."""
        values = PacingSettings().model_dump()
        values.update({key: 0.5 for key in values if key.startswith("micropause_")})
        settings = PacingSettings.model_construct(**values)
        assert delay_multiplier(token, settings) >= 1.0

    def test_floored_factors_contribute_nothing(self):
        values = PacingSettings().model_dump()
        values.update({key: 0.5 for key in values if key.startswith("micropause_")})
        settings = PacingSettings.model_construct(**values)
        assert delay_multiplier("1000x!\n", settings) == 1.0

    def test_disabled_micropause(self):
        settings = PacingSettings(enable_micropause=False)
        assert delay_multiplier("[H1]1000x!\n", settings) == 1.0


# =============================================================================
# Duration helpers
# =============================================================================


class TestDurations:
    @pytest.mark.parametrize("wpm,expected", [(300, 200.0), (600, 100.0), (60, 1000.0)])
    def test_base_duration(self, wpm, expected):
        assert calculate_base_duration_ms(wpm) == expected

    def test_base_duration_rejects_zero(self):
        with pytest.raises(ValueError):
            calculate_base_duration_ms(0)

    @pytest.mark.parametrize(
        "seconds,expected",
        [(20, "1 min"), (360, "6 min"), (3600, "1 hr"), (4140, "1 hr 9 min")],
    )
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected
