"""Tests for the slow-start and acceleration ramps."""

import pytest

from pacer.schemas.settings import PacingSettings
from pacer.services.playback import SLOW_START_TOKENS, RampController, accelerated_wpm, slow_start_multiplier


class TestSlowStart:
    @pytest.mark.parametrize(
        "consumed,expected",
        [(0, 2.0), (1, 1.8), (2, 1.6), (3, 1.4), (4, 1.2), (5, 1.0), (50, 1.0)],
    )
    def test_linear_decay(self, consumed, expected):
        assert slow_start_multiplier(consumed) == pytest.approx(expected)

    def test_ramp_length(self):
        assert SLOW_START_TOKENS == 5

    def test_controller_respects_toggle(self):
        assert RampController(PacingSettings(enable_slow_start=True)).delay_factor(0) == pytest.approx(2.0)
        assert RampController(PacingSettings(enable_slow_start=False)).delay_factor(0) == 1.0


class TestAcceleration:
    def test_midway(self):
        assert accelerated_wpm(200, 600, 15, 30) == pytest.approx(400)

    def test_clamped_after_duration(self):
        assert accelerated_wpm(200, 600, 40, 30) == pytest.approx(600)

    def test_start(self):
        assert accelerated_wpm(200, 600, 0, 30) == pytest.approx(200)

    def test_deceleration(self):
        assert accelerated_wpm(600, 200, 15, 30) == pytest.approx(400)

    def test_controller(self):
        settings = PacingSettings(
            wpm=200,
            enable_acceleration=True,
            acceleration_target_wpm=600,
            acceleration_duration=30,
        )
        ramps = RampController(settings)
        assert ramps.effective_wpm(200, 15) == pytest.approx(400)
        assert ramps.effective_wpm(200, 40) == pytest.approx(600)

    def test_outside_session_uses_configured_wpm(self):
        settings = PacingSettings(wpm=250, enable_acceleration=True)
        assert RampController(settings).effective_wpm(None, None) == 250

    def test_disabled(self):
        settings = PacingSettings(wpm=250, enable_acceleration=False, acceleration_target_wpm=900)
        assert RampController(settings).effective_wpm(250, 100) == 250
