"""
추세/반전 오실레이터 구현

John Ehlers의 ReFlex(반전 감지)와 TrendFlex(추세 감지) 오실레이터를 제공합니다.
출처: John Ehlers, "Reflex: A New Zero-Lag Indicator", TASC (2020)
"""

import numpy as np
import logging
from abc import abstractmethod
from typing import Any, Dict, Optional

from .sliding_window import ChainedTransform, RingBuffer, StreamTransform, validate_window_len
from .smoothing import SuperSmoother

logger = logging.getLogger(__name__)


class _FlexOscillator(ChainedTransform):
    """
    ReFlex/TrendFlex 공통 구조

    - Filt = SuperSmoother(v, window_len / 2)
    - Sum = 하위 클래스가 정의하는 window_len개 차이의 평균
    - MS = 0.04×Sum² + 0.96×MS[1]
    - 출력 = Sum / sqrt(MS) (MS = 0이면 이전 값 유지)

    Filt 이력이 window_len + 1개가 될 때까지 출력은 0입니다.
    MS가 현재 Sum²을 포함하므로 출력의 절댓값은 5를 넘지 않습니다.
    """

    def __init__(self, window_len: int = 20, inner: Optional[StreamTransform] = None):
        super().__init__(inner)
        self.window_len = validate_window_len(window_len)
        self._smoother = SuperSmoother(self.window_len / 2.0)
        self._scratch = np.empty(self.window_len + 1, dtype=np.float64)
        self._reset_state()

        logger.debug(f"{self.__class__.__name__} 생성: window_len={self.window_len}")

    def get_params(self) -> Dict[str, Any]:
        return {'window_len': self.window_len}

    def _reset_state(self) -> None:
        self._filt = RingBuffer(self.window_len + 1)
        self._ms = 0.0
        self._smoother.reset()

    def _calculate(self, value: float) -> float:
        self._filt.append(self._smoother.step(value))
        if not self._filt.is_full():
            return self._out

        filt = self._filt.get_data(out=self._scratch)
        total = self._flex_sum(filt[-1], filt[0], float(filt[:-1].sum()))
        self._ms = 0.04 * total * total + 0.96 * self._ms

        out = self._out
        if self._ms != 0.0:
            out = total / np.sqrt(self._ms)

        self._out = out
        self._mark_warmed_up()
        return out

    @abstractmethod
    def _flex_sum(self, current: float, oldest: float, lag_sum: float) -> float:
        """
        Args:
            current (float): 현재 Filt 값
            oldest (float): Filt[window_len]
            lag_sum (float): Filt[1] + ... + Filt[window_len]
        """


class ReFlex(_FlexOscillator):
    """
    ReFlex 오실레이터

    window_len 전 값과 현재 값을 잇는 직선에서 각 과거 값이 벗어난 정도를 평균합니다.
    - Slope = (Filt[L] - Filt) / L
    - Sum = Σ(k=1..L) (Filt + k×Slope - Filt[k]) / L
    """

    def _flex_sum(self, current: float, oldest: float, lag_sum: float) -> float:
        length = self.window_len
        slope = (oldest - current) / length
        # Σk (k=1..L) = L(L+1)/2
        return (length * current + slope * length * (length + 1) / 2.0 - lag_sum) / length


class TrendFlex(_FlexOscillator):
    """
    TrendFlex 오실레이터

    - Sum = Σ(k=1..L) (Filt - Filt[k]) / L
    """

    def _flex_sum(self, current: float, oldest: float, lag_sum: float) -> float:
        return (self.window_len * current - lag_sum) / self.window_len
