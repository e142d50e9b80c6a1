"""
평활/대역 필터 구현

Super Smoother, Roofing Filter(고역 통과 + Super Smoother), Laguerre 저역 통과 필터를 제공합니다.
"""

import math
import logging
from typing import Any, Dict, Optional

from .sliding_window import ChainedTransform, RingBuffer, StreamTransform, validate_window_len

logger = logging.getLogger(__name__)


class SuperSmoother:
    """
    2극 Super Smoother 재귀 계산기

    출처: John Ehlers, "Cycle Analytics for Traders" (2013)

    계산 공식:
    - a1 = exp(-1.414π / period), b1 = 2×a1×cos(1.414π / period)
    - c2 = b1, c3 = -a1², c1 = 1 - c2 - c3
    - Filt = c1×(x + x[1])/2 + c2×Filt[1] + c3×Filt[2]

    첫 입력으로 이전 입력/출력을 채워 시작합니다.
    """

    def __init__(self, period: float):
        if period <= 0:
            raise ValueError(f"Super Smoother 기간은 0보다 커야 합니다: {period}")

        self.period = period
        a1 = math.exp(-1.414 * math.pi / period)
        b1 = 2.0 * a1 * math.cos(1.414 * math.pi / period)
        self.c2 = b1
        self.c3 = -a1 * a1
        self.c1 = 1.0 - self.c2 - self.c3
        self.reset()

    def reset(self) -> None:
        self._prev_input = None
        self._filt1 = 0.0
        self._filt2 = 0.0

    def step(self, value: float) -> float:
        if self._prev_input is None:
            self._prev_input = value
            self._filt1 = self._filt2 = value
            return value

        filt = (self.c1 * (value + self._prev_input) / 2.0
                + self.c2 * self._filt1
                + self.c3 * self._filt2)
        self._prev_input = value
        self._filt2 = self._filt1
        self._filt1 = filt
        return filt


class RoofingFilter(ChainedTransform):
    """
    Roofing Filter (대역 통과)

    출처: John Ehlers, "Cycle Analytics for Traders" (2013)

    계산 공식:
    - alpha1 = (cos(0.707×2π/hp_len) + sin(0.707×2π/hp_len) - 1) / cos(0.707×2π/hp_len)
    - HP = (1 - alpha1/2)²×(P - 2×P[1] + P[2]) + 2×(1 - alpha1)×HP[1] - (1 - alpha1)²×HP[2]
    - Filt = SuperSmoother(HP, ss_len)

    특징:
    - hp_len보다 긴 주기(추세)와 ss_len보다 짧은 주기(잡음)를 제거
    - 상수 입력에 대해 0을 출력
    - 샘플이 3개 모이기 전까지 HP = 0
    """

    def __init__(self, hp_len: int = 48, ss_len: int = 10, inner: Optional[StreamTransform] = None):
        """
        Roofing Filter 초기화

        Args:
            hp_len (int): 고역 통과 필터 기간 (기본값: 48)
            ss_len (int): Super Smoother 기간 (기본값: 10)
            inner (StreamTransform): 내부 변환 (기본값: Echo)
        """
        super().__init__(inner)
        self.hp_len = validate_window_len(hp_len, "hp_len")
        self.ss_len = validate_window_len(ss_len, "ss_len")

        angle = 0.707 * 2.0 * math.pi / self.hp_len
        self.alpha1 = (math.cos(angle) + math.sin(angle) - 1.0) / math.cos(angle)
        self._smoother = SuperSmoother(self.ss_len)
        self._reset_state()

        logger.debug(f"Roofing Filter 생성: hp_len={self.hp_len}, ss_len={self.ss_len}")

    def get_params(self) -> Dict[str, Any]:
        return {'hp_len': self.hp_len, 'ss_len': self.ss_len}

    def _reset_state(self) -> None:
        self._prices = RingBuffer(3)
        self._hp1 = 0.0
        self._hp2 = 0.0
        self._smoother.reset()

    def _calculate(self, value: float) -> float:
        prices = self._prices
        prices.append(value)

        if prices.is_full():
            a = self.alpha1
            hp = ((1.0 - a / 2.0) ** 2 * (prices.lag(0) - 2.0 * prices.lag(1) + prices.lag(2))
                  + 2.0 * (1.0 - a) * self._hp1
                  - (1.0 - a) ** 2 * self._hp2)
        else:
            hp = 0.0
        self._hp2 = self._hp1
        self._hp1 = hp

        out = self._smoother.step(hp)
        if prices.is_full():
            self._out = out
            self._mark_warmed_up()
        return out


class LaguerreFilter(ChainedTransform):
    """
    Laguerre 저역 통과 필터

    출처: http://mesasoftware.com/papers/TimeWarp.pdf

    계산 공식:
    - L0 = (1 - g)×v + g×L0[1]
    - L1 = -g×L0 + L0[1] + g×L1[1]
    - L2 = -g×L1 + L1[1] + g×L2[1]
    - L3 = -g×L2 + L2[1] + g×L3[1]
    - Filt = (L0 + 2×L1 + 2×L2 + L3) / 6

    gamma가 1에 가까울수록 더 강하게 평활합니다. gamma = 0이면 4탭 FIR 필터가 됩니다.
    첫 샘플로 모든 단계를 채우므로 상수 입력은 그대로 통과합니다.
    """

    def __init__(self, gamma: float = 0.8, inner: Optional[StreamTransform] = None):
        super().__init__(inner)
        if isinstance(gamma, bool) or not isinstance(gamma, (int, float)):
            raise ValueError(f"gamma는 숫자여야 합니다: {gamma!r}")
        if not 0.0 <= gamma < 1.0:
            raise ValueError(f"gamma는 0 이상 1 미만이어야 합니다: {gamma}")

        self.gamma = float(gamma)
        self._reset_state()

        logger.debug(f"Laguerre Filter 생성: gamma={self.gamma}")

    def get_params(self) -> Dict[str, Any]:
        return {'gamma': self.gamma}

    def _reset_state(self) -> None:
        self._stages = None

    def _calculate(self, value: float) -> float:
        if self._stages is None:
            self._stages = (value, value, value, value)
            self._out = value
            self._mark_warmed_up()
            return value

        g = self.gamma
        l0_prev, l1_prev, l2_prev, l3_prev = self._stages

        l0 = (1.0 - g) * value + g * l0_prev
        l1 = -g * l0 + l0_prev + g * l1_prev
        l2 = -g * l1 + l1_prev + g * l2_prev
        l3 = -g * l2 + l2_prev + g * l3_prev
        self._stages = (l0, l1, l2, l3)

        return (l0 + 2.0 * l1 + 2.0 * l2 + l3) / 6.0
