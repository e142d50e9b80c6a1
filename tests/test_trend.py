"""
ReFlex/TrendFlex 오실레이터 테스트
"""

import numpy as np
import pytest

from src.ehlers_filters import ReFlex, TrendFlex


@pytest.mark.parametrize("cls", [ReFlex, TrendFlex])
class TestFlexCommon:

    def test_zero_until_history_full(self, cls, prices):
        flex = cls(20)
        out = flex.feed(prices[:20])

        np.testing.assert_array_equal(out, 0.0)
        assert not flex.is_warmed_up

        flex.update(prices[20])
        assert flex.is_warmed_up

    def test_bounded_by_five(self, cls):
        rng = np.random.default_rng(11)
        out = cls(10).feed(rng.normal(100.0, 5.0, 1000))
        assert np.abs(out).max() <= 5.0 + 1e-9

    def test_invalid_window(self, cls):
        with pytest.raises(ValueError):
            cls(0)

    def test_reset(self, cls, prices):
        flex = cls(20)
        first = flex.feed(prices)
        flex.reset()
        np.testing.assert_array_equal(flex.feed(prices), first)


class TestTrendFlex:

    def test_sum_matches_definition(self):
        trendflex = TrendFlex(4)
        lags = np.array([1.0, 2.0, 5.0, -1.0])
        expected = np.sum(7.0 - lags) / 4

        assert trendflex._flex_sum(7.0, lags[-1], lags.sum()) == pytest.approx(expected)

    def test_uptrend_is_positive(self):
        out = TrendFlex(20).feed(np.arange(200.0))
        assert out[-1] > 0

    def test_downtrend_is_negative(self):
        out = TrendFlex(20).feed(np.arange(200.0, 0.0, -1.0))
        assert out[-1] < 0


class TestReFlex:

    def test_sum_matches_definition(self):
        """Σ(k=1..L) (Filt + k×Slope - Filt[k]) / L 와 동일"""
        reflex = ReFlex(5)
        lags = np.array([3.0, 1.5, 4.0, 2.0, 6.0])  # Filt[1] ... Filt[5]
        current = 2.5
        slope = (lags[-1] - current) / 5
        expected = np.sum(current + np.arange(1, 6) * slope - lags) / 5

        assert reflex._flex_sum(current, lags[-1], lags.sum()) == pytest.approx(expected)

    def test_oscillates_on_cycle(self, sine_wave):
        out = ReFlex(20).feed(sine_wave)
        assert out[100:].max() > 0.5
        assert out[100:].min() < -0.5
