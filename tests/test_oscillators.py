"""
오실레이터 필터 테스트 (Center of Gravity, Cyber Cycle, Laguerre RSI, RSI)
"""

import logging

import numpy as np
import pytest

from src.ehlers_filters import CenterOfGravity, CyberCycle, LaguerreRSI, RSI


class TestCenterOfGravity:

    def test_scenario_window_three(self):
        """[1, 2, 3] 입력 시 단계별 출력"""
        cg = CenterOfGravity(3)

        cg.update(1.0)
        assert cg.last() == pytest.approx(0.0, abs=1e-6)
        cg.update(2.0)
        assert cg.last() == pytest.approx(1.0 / 6.0, abs=1e-6)
        cg.update(3.0)
        assert cg.last() == pytest.approx(1.0 / 3.0, abs=1e-6)

    def test_window_cap(self):
        """윈도우가 가득 찬 뒤에는 최근 window_len개 값만 반영"""
        cg = CenterOfGravity(3)
        cg.feed([9.0, 9.0, 3.0, 4.0, 5.0])

        reference = CenterOfGravity(3)
        reference.feed([3.0, 4.0, 5.0])

        assert cg.last() == pytest.approx(reference.last())
        assert cg.last() == pytest.approx(-22.0 / 12.0 + 2.0)

    def test_weights_allocated_once(self):
        cg = CenterOfGravity(4)
        weights, scratch = cg._weights, cg._scratch
        cg.feed([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        assert cg._weights is weights
        assert cg._scratch is scratch
        np.testing.assert_array_equal(weights, [4.0, 3.0, 2.0, 1.0])
        assert cg.last() == pytest.approx(-(4 * 3 + 3 * 4 + 2 * 5 + 1 * 6) / 18.0 + 2.5)

    @pytest.mark.parametrize("window_len", [1, 3, 16])
    def test_zero_guard(self, window_len):
        cg = CenterOfGravity(window_len)
        for _ in range(window_len + 2):
            cg.update(0.0)
            assert cg.last() == 0.0

    def test_zero_denominator_mixed_signs(self):
        cg = CenterOfGravity(2)
        cg.feed([1.0, -1.0])
        assert cg.last() == 0.0

    def test_upswing_is_positive(self):
        out = CenterOfGravity(10).feed(np.arange(1.0, 31.0))
        assert np.all(out[1:] > 0)

    def test_flat_series_centers_at_zero(self):
        out = CenterOfGravity(8).feed([5.0] * 20)
        np.testing.assert_allclose(out, 0.0, atol=1e-12)

    def test_warm_up_flag(self):
        cg = CenterOfGravity(4)
        cg.feed([1.0, 2.0, 3.0])
        assert not cg.is_warmed_up
        cg.update(4.0)
        assert cg.is_warmed_up

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            CenterOfGravity(0)

    def test_warm_up_logged_once(self, caplog):
        caplog.set_level(logging.INFO, logger="src.ehlers_filters")
        CenterOfGravity(3).feed(range(1, 11))

        messages = [r.getMessage() for r in caplog.records if "워밍업 완료" in r.getMessage()]
        assert len(messages) == 1


class TestLaguerreRSI:

    @pytest.mark.parametrize("window_len", [1, 4, 16, 100])
    def test_first_updates_are_zero(self, window_len):
        lrsi = LaguerreRSI(window_len)
        lrsi.update(123.0)
        assert lrsi.last() == 0.0
        lrsi.update(50.0)
        assert lrsi.last() == 0.0
        assert not lrsi.is_warmed_up

    def test_bounded_output(self, prices):
        lrsi = LaguerreRSI(16)
        for price in prices:
            lrsi.update(price)
            assert 0.0 <= lrsi.last() <= 1.0

    def test_bounded_output_random(self):
        rng = np.random.default_rng(7)
        out = LaguerreRSI(5).feed(rng.normal(0.0, 10.0, 500))
        assert np.all((out >= 0.0) & (out <= 1.0))

    def test_gamma(self):
        assert LaguerreRSI(16).gamma == pytest.approx(2.0 / 17.0)

    def test_first_recurrence_step(self):
        """gamma = 0.5, 상수 1 입력 시 세 번째 샘플에서 CU = 0.9375, CD = 0.375"""
        lrsi = LaguerreRSI(3)
        lrsi.feed([1.0, 1.0, 1.0])

        assert lrsi.is_warmed_up
        assert lrsi.last() == pytest.approx(5.0 / 7.0)

    def test_rising_ramp_tends_to_one(self):
        out = LaguerreRSI(16).feed(np.arange(1.0, 101.0))
        assert out[-1] > 0.99

    def test_falling_ramp_tends_to_zero(self):
        out = LaguerreRSI(16).feed(np.arange(100.0, 0.0, -1.0))
        assert out[-1] < 0.01

    def test_holds_value_when_flat(self):
        """CU + CD = 0이면 이전 값 유지 (window_len = 1이면 gamma = 1로 모든 단계가 0)"""
        lrsi = LaguerreRSI(1)
        out = lrsi.feed([1.0, 2.0, 3.0, 4.0])
        np.testing.assert_array_equal(out, 0.0)

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            LaguerreRSI(0)


class TestCyberCycle:

    def test_constant_input_is_zero(self):
        out = CyberCycle(16).feed([100.0] * 30)
        np.testing.assert_array_equal(out, 0.0)

    def test_early_second_difference(self):
        """처음 6개 샘플은 (P - 2P[1] + P[2]) / 4"""
        out = CyberCycle(16).feed([1.0, 2.0, 4.0, 7.0])
        np.testing.assert_allclose(out, [0.0, 0.0, 0.25, 0.25])

    def test_warm_up_after_seven_samples(self, prices):
        cc = CyberCycle(16)
        cc.feed(prices[:6])
        assert not cc.is_warmed_up
        cc.update(prices[6])
        assert cc.is_warmed_up

    def test_oscillates_around_zero(self, sine_wave):
        out = CyberCycle(16).feed(sine_wave)
        assert out[50:].max() > 0
        assert out[50:].min() < 0

    def test_alpha(self):
        assert CyberCycle(9).alpha == pytest.approx(0.2)


class TestRSI:

    def test_warm_up_is_zero(self):
        rsi = RSI(3)
        out = rsi.feed([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(out, 0.0)
        assert not rsi.is_warmed_up

    def test_only_gains(self):
        out = RSI(3).feed([1.0, 2.0, 3.0, 4.0])
        assert out[-1] == 100.0

    def test_only_losses(self):
        out = RSI(3).feed([4.0, 3.0, 2.0, 1.0])
        assert out[-1] == pytest.approx(0.0)

    def test_wilder_smoothing(self):
        rsi = RSI(3)
        rsi.feed([1.0, 2.0, 1.0, 2.0])
        assert rsi.last() == pytest.approx(200.0 / 3.0)

        rsi.update(1.0)
        assert rsi.last() == pytest.approx(100.0 - 100.0 / 1.8)

    def test_range(self, prices):
        out = RSI(14).feed(prices)
        assert np.all((out >= 0.0) & (out <= 100.0))
