"""
보조 필터 구현

ROC(Rate of Change)와 최소-최대 정규화(Normalizer)를 제공합니다.
"""

import numpy as np
import logging
from typing import Any, Dict, Optional

from .sliding_window import ChainedTransform, RingBuffer, StreamTransform, validate_window_len

logger = logging.getLogger(__name__)


class ROC(ChainedTransform):
    """
    ROC(Rate of Change) 필터

    현재 값과 n 샘플 전 값 간의 퍼센트 변화율입니다.

    계산 공식:
    ROC = ((V - V[n]) / V[n]) × 100

    특징:
    - 무제한 범위 (퍼센트 변화율)
    - n + 1개 샘플이 모이기 전까지 0
    - 이전 값이 0이면 0
    """

    def __init__(self, window_len: int = 12, inner: Optional[StreamTransform] = None):
        """
        ROC 필터 초기화

        Args:
            window_len (int): 비교할 과거 샘플 거리 n (기본값: 12)
            inner (StreamTransform): 내부 변환 (기본값: Echo)
        """
        super().__init__(inner)
        self.window_len = validate_window_len(window_len)
        self._reset_state()

        logger.debug(f"ROC 생성: window_len={self.window_len}")

    def get_params(self) -> Dict[str, Any]:
        return {'window_len': self.window_len}

    def _reset_state(self) -> None:
        self._values = RingBuffer(self.window_len + 1)

    def _calculate(self, value: float) -> float:
        self._values.append(value)
        if not self._values.is_full():
            return 0.0

        previous = self._values.lag(self.window_len)
        if previous != 0:
            roc = ((value - previous) / previous) * 100.0
        else:
            roc = 0.0  # 이전 값이 0이면 변화율 0

        self._out = roc
        self._mark_warmed_up()
        return roc


class Normalizer(ChainedTransform):
    """
    최근 window_len개 값 기준 최소-최대 정규화

    Normalized = 2 × (V - min) / (max - min) - 1, 범위 -1~1
    윈도우의 최댓값과 최솟값이 같으면 0을 출력합니다.
    """

    def __init__(self, window_len: int, inner: Optional[StreamTransform] = None):
        super().__init__(inner)
        self.window_len = validate_window_len(window_len)
        self._scratch = np.empty(self.window_len, dtype=np.float64)
        self._reset_state()

        logger.debug(f"Normalizer 생성: window_len={self.window_len}")

    def get_params(self) -> Dict[str, Any]:
        return {'window_len': self.window_len}

    def _reset_state(self) -> None:
        self._values = RingBuffer(self.window_len)

    def _calculate(self, value: float) -> float:
        self._values.append(value)

        window = self._values.get_data(out=self._scratch)
        low = float(window.min())
        high = float(window.max())

        if high != low:
            out = 2.0 * (value - low) / (high - low) - 1.0
        else:
            out = 0.0

        if self._values.is_full():
            self._out = out
            self._mark_warmed_up()
        return out
