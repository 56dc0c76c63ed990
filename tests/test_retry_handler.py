"""
Unit tests for the backoff policy and sleepers.
"""

from unittest.mock import patch

import pytest

from rainbridge.utils.retry_handler import (
    ExponentialBackoff,
    RealSleeper,
    Sleeper,
    backoff_delay,
)


class TestBackoffDelay:
    """Test the exponential backoff calculation."""

    @pytest.mark.parametrize("attempt", range(0, 11))
    def test_delay_within_jitter_bounds(self, attempt):
        """Delay lies in [base*2^n, 1.1*base*2^n] for random jitter."""
        expected = 2**attempt
        for _ in range(20):
            delay = backoff_delay(attempt)
            assert expected <= delay <= expected * 1.1

    def test_delay_without_jitter(self):
        assert backoff_delay(0, rand=lambda: 0.0) == 1.0
        assert backoff_delay(1, rand=lambda: 0.0) == 2.0
        assert backoff_delay(4, rand=lambda: 0.0) == 16.0

    def test_delay_with_maximum_jitter(self):
        assert backoff_delay(0, rand=lambda: 1.0) == pytest.approx(1.1)
        assert backoff_delay(3, rand=lambda: 1.0) == pytest.approx(8.8)

    def test_custom_base_delay(self):
        assert backoff_delay(2, base_delay=0.5, rand=lambda: 0.0) == 2.0

    def test_negative_attempt_rejected(self):
        with pytest.raises(ValueError):
            backoff_delay(-1)


class TestExponentialBackoff:
    """Test the strategy object used by the request executor."""

    def test_get_delay_uses_base_delay(self):
        backoff = ExponentialBackoff(base_delay=2.0, rand=lambda: 0.5)

        assert backoff.get_delay(0) == pytest.approx(2.1)
        assert backoff.get_delay(2) == pytest.approx(8.4)

    def test_default_base_delay_is_one_second(self):
        assert ExponentialBackoff().base_delay == 1.0


class TestRealSleeper:
    """Test the production sleeper."""

    def test_sleep_delegates_to_time_sleep(self):
        with patch("rainbridge.utils.retry_handler.time.sleep") as mock_sleep:
            RealSleeper().sleep(1.5)

        mock_sleep.assert_called_once_with(1.5)

    def test_satisfies_sleeper_protocol(self):
        assert isinstance(RealSleeper(), Sleeper)
