"""
오실레이터 필터 구현

John Ehlers의 Center of Gravity, Cyber Cycle, Laguerre RSI와
Wilder 방식의 고전 RSI를 스트리밍 방식으로 계산하는 클래스들을 제공합니다.
모든 필터는 내부 변환 하나를 소유하며 고정 크기 이력만 유지합니다.
"""

import numpy as np
import logging
from typing import Any, Dict, Optional

from .sliding_window import ChainedTransform, RingBuffer, StreamTransform, validate_window_len

logger = logging.getLogger(__name__)


class CenterOfGravity(ChainedTransform):
    """
    Center of Gravity 오실레이터

    출처: https://mesasoftware.com/papers/TheCGOscillator.pdf

    계산 공식 (윈도우 내 값을 오래된 것부터 i = 0, 1, ... 로 번호 매김):
    - weight_i = q_len - i (가장 오래된 값이 q_len, 최신 값이 1)
    - CG = -Σ(weight_i × value_i) / Σ(value_i) + (q_len + 1) / 2

    특징:
    - 워밍업 중에는 채워진 만큼의 부분 윈도우로 계산
    - 가격 상승 구간에서 출력이 커짐
    - 분모가 0이면 출력 0
    """

    def __init__(self, window_len: int, inner: Optional[StreamTransform] = None):
        """
        Center of Gravity 오실레이터 초기화

        Args:
            window_len (int): 슬라이딩 윈도우 길이 (1 이상)
            inner (StreamTransform): 내부 변환 (기본값: Echo)

        Example:
            >>> cg = CenterOfGravity(16)
            >>> cg.update(100.0)
            >>> cg.last()
            0.0
        """
        super().__init__(inner)
        self.window_len = validate_window_len(window_len)

        # 가중치 window_len..1 과 작업용 배열은 생성 시 한 번만 할당
        self._weights = np.arange(self.window_len, 0, -1, dtype=np.float64)
        self._scratch = np.empty(self.window_len, dtype=np.float64)
        self._reset_state()

        logger.debug(f"Center of Gravity 생성: window_len={self.window_len}")

    def get_params(self) -> Dict[str, Any]:
        return {'window_len': self.window_len}

    def _reset_state(self) -> None:
        self._window = RingBuffer(self.window_len)

    def _calculate(self, value: float) -> float:
        self._window.append(value)

        values = self._window.get_data(out=self._scratch)
        q_len = len(values)

        # 워밍업 중에는 가중치 q_len..1 (뒤쪽 q_len개)
        numerator = float(np.dot(self._weights[self.window_len - q_len:], values))
        denominator = float(values.sum())

        if denominator != 0.0:
            out = -numerator / denominator + (q_len + 1) / 2.0
        else:
            out = 0.0

        if self._window.is_full():
            self._out = out
            self._mark_warmed_up()
        return out


class CyberCycle(ChainedTransform):
    """
    Cyber Cycle 오실레이터

    출처: John Ehlers, "Cybernetic Analysis for Stocks and Futures" (2004)

    계산 공식:
    - alpha = 2 / (window_len + 1)
    - Smooth = (P + 2×P[1] + 2×P[2] + P[3]) / 6
    - Cycle = (1 - alpha/2)² × (Smooth - 2×Smooth[1] + Smooth[2])
              + 2×(1 - alpha)×Cycle[1] - (1 - alpha)²×Cycle[2]
    - 처음 6개 샘플: Cycle = (P - 2×P[1] + P[2]) / 4
    """

    WARMUP_SAMPLES = 7

    def __init__(self, window_len: int, inner: Optional[StreamTransform] = None):
        super().__init__(inner)
        self.window_len = validate_window_len(window_len)
        self.alpha = 2.0 / (self.window_len + 1.0)
        self._reset_state()

        logger.debug(f"Cyber Cycle 생성: window_len={self.window_len}, alpha={self.alpha:.4f}")

    def get_params(self) -> Dict[str, Any]:
        return {'window_len': self.window_len, 'alpha': self.alpha}

    def _reset_state(self) -> None:
        self._prices = RingBuffer(4)
        self._smooth = RingBuffer(3)
        self._cycles = RingBuffer(2)
        self._count = 0

    def _calculate(self, value: float) -> float:
        prices = self._prices
        prices.append(value)
        if self._count < self.WARMUP_SAMPLES:
            self._count += 1

        if prices.is_full():
            smooth = (prices.lag(0) + 2.0 * prices.lag(1) + 2.0 * prices.lag(2) + prices.lag(3)) / 6.0
        else:
            smooth = value
        self._smooth.append(smooth)

        if self._count < self.WARMUP_SAMPLES:
            if len(prices) >= 3:
                cycle = (prices.lag(0) - 2.0 * prices.lag(1) + prices.lag(2)) / 4.0
            else:
                cycle = 0.0
        else:
            a = self.alpha
            s = self._smooth
            c = self._cycles
            cycle = ((1.0 - 0.5 * a) ** 2 * (s.lag(0) - 2.0 * s.lag(1) + s.lag(2))
                     + 2.0 * (1.0 - a) * c.lag(0)
                     - (1.0 - a) ** 2 * c.lag(1))
            self._out = cycle
            self._mark_warmed_up()

        self._cycles.append(cycle)
        return cycle


class LaguerreRSI(ChainedTransform):
    """
    Laguerre RSI

    출처: http://mesasoftware.com/papers/TimeWarp.pdf

    4단 Laguerre 평활 캐스케이드(L0~L3) 위에서 계산하는 저지연 RSI 오실레이터입니다.
    각 단계는 최근 3개 값만 보관하며, 이 크기는 window_len과 무관합니다.
    window_len은 감쇠 상수 gamma = 2 / (window_len + 1) 계산에만 사용됩니다.

    계산 공식 (prev = 각 단계에 저장된 값 중 끝에서 두 번째):
    - L0 = (1 - g)×v + g×L0_prev
    - L1 = -g×L0 + L0_prev + g×L1_prev
    - L2 = -g×L1 + L1_prev + g×L2_prev
    - L3 = -g×L2 + L2_prev + g×L3_prev
    - CU/CD: (L0, L1), (L1, L2), (L2, L3) 쌍의 상승분/하락분 합
    - RSI = CU / (CU + CD), 범위 0~1

    특징:
    - 각 단계에 값이 2개 미만이면 0을 채우고 출력은 이전 값(최초 0) 유지
    - CU + CD = 0이면 이전 값 유지
    """

    HISTORY_LEN = 3

    def __init__(self, window_len: int, inner: Optional[StreamTransform] = None):
        """
        Laguerre RSI 초기화

        Args:
            window_len (int): gamma 계산용 윈도우 길이 (1 이상)
            inner (StreamTransform): 내부 변환 (기본값: Echo)
        """
        super().__init__(inner)
        self.window_len = validate_window_len(window_len)
        self.gamma = 2.0 / (self.window_len + 1.0)
        self._reset_state()

        logger.debug(f"Laguerre RSI 생성: window_len={self.window_len}, gamma={self.gamma:.4f}")

    def get_params(self) -> Dict[str, Any]:
        return {'window_len': self.window_len, 'gamma': self.gamma}

    def _reset_state(self) -> None:
        self._stages = [RingBuffer(self.HISTORY_LEN) for _ in range(4)]

    def _calculate(self, value: float) -> float:
        stages = self._stages

        # 워밍업: 단계별 이전 값 2개가 생길 때까지 0으로 채움
        if len(stages[0]) < 2:
            for stage in stages:
                stage.append(0.0)
            return self._out

        g = self.gamma
        l0_prev, l1_prev, l2_prev, l3_prev = (stage.lag(1) for stage in stages)

        l0 = (1.0 - g) * value + g * l0_prev
        l1 = -g * l0 + l0_prev + g * l1_prev
        l2 = -g * l1 + l1_prev + g * l2_prev
        l3 = -g * l2 + l2_prev + g * l3_prev

        for stage, new_value in zip(stages, (l0, l1, l2, l3)):
            stage.append(new_value)

        cu = 0.0
        cd = 0.0
        for upper, lower in ((l0, l1), (l1, l2), (l2, l3)):
            if upper >= lower:
                cu += upper - lower
            else:
                cd += lower - upper

        out = self._out
        if cu + cd != 0.0:
            out = cu / (cu + cd)

        self._out = out
        self._mark_warmed_up()
        return out


class RSI(ChainedTransform):
    """
    RSI(Relative Strength Index)

    계산 공식:
    - RS = 평균 상승폭 / 평균 하락폭
    - RSI = 100 - (100 / (1 + RS))
    - 첫 평균은 window_len개 변화량의 단순평균, 이후 Wilder's smoothing (α = 1/window_len)

    특징:
    - 0~100 범위의 값
    - 평균 계산 전(워밍업)에는 0
    - 평균 하락폭이 0이면 100
    """

    def __init__(self, window_len: int = 14, inner: Optional[StreamTransform] = None):
        super().__init__(inner)
        self.window_len = validate_window_len(window_len)

        # Wilder's smoothing factor (1/period)
        self.alpha = 1.0 / self.window_len
        self._reset_state()

        logger.debug(f"RSI 생성: window_len={self.window_len}")

    def get_params(self) -> Dict[str, Any]:
        return {'window_len': self.window_len}

    def _reset_state(self) -> None:
        self._previous = None
        self._change_count = 0
        self._gain_sum = 0.0
        self._loss_sum = 0.0
        self.avg_gain = None
        self.avg_loss = None

    def _calculate(self, value: float) -> float:
        if self._previous is None:
            self._previous = value
            return self._out

        change = value - self._previous
        self._previous = value
        gain = max(0.0, change)
        loss = max(0.0, -change)

        if self.avg_gain is None:
            # 초기 평균 (단순평균)
            self._gain_sum += gain
            self._loss_sum += loss
            self._change_count += 1
            if self._change_count < self.window_len:
                return self._out

            self.avg_gain = self._gain_sum / self.window_len
            self.avg_loss = self._loss_sum / self.window_len
        else:
            self.avg_gain = self.alpha * gain + (1 - self.alpha) * self.avg_gain
            self.avg_loss = self.alpha * loss + (1 - self.alpha) * self.avg_loss

        if self.avg_loss != 0:
            rs = self.avg_gain / self.avg_loss
            rsi = 100.0 - (100.0 / (1.0 + rs))
        else:
            rsi = 100.0  # 손실이 없으면 RSI는 100

        self._out = rsi
        self._mark_warmed_up()
        return rsi
