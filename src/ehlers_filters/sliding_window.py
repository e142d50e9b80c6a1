"""
스트리밍 필터 공통 계약과 슬라이딩 윈도우 지원

모든 필터가 구현하는 StreamTransform 인터페이스(update/last)와
내부 변환을 소유하는 체인 기반 클래스, 고정 크기 링 버퍼를 정의합니다.
필터는 한 번에 하나의 샘플을 받아 하나의 출력을 만들며, 유한한 상태만 유지합니다.
"""

import numpy as np
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Union

logger = logging.getLogger(__name__)


def validate_window_len(window_len: Any, name: str = "window_len") -> int:
    """
    윈도우 길이 파라미터 검증

    Args:
        window_len: 검증할 값
        name (str): 오류 메시지에 사용할 파라미터 이름

    Returns:
        int: 검증된 윈도우 길이

    Raises:
        ValueError: 정수가 아니거나 1보다 작은 경우
    """
    if isinstance(window_len, bool) or not isinstance(window_len, (int, np.integer)):
        raise ValueError(f"{name}은(는) 정수여야 합니다: {window_len!r}")
    if window_len < 1:
        raise ValueError(f"{name}은(는) 1 이상이어야 합니다: {window_len}")
    return int(window_len)


def validate_sample(value: Any) -> float:
    """
    입력 샘플을 검증하고 float으로 변환

    Raises:
        ValueError: 숫자가 아니거나 NaN/무한값인 경우
    """
    try:
        sample = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"잘못된 입력 데이터: {value!r}") from e

    if not np.isfinite(sample):
        raise ValueError(f"NaN 또는 무한값은 처리할 수 없습니다: {value!r}")
    return sample


class StreamTransform(ABC):
    """
    스트리밍 변환 계약

    update()로 시간 순서대로 샘플을 하나씩 받고, last()로 가장 최근 출력을 조회합니다.
    알고리즘은 이력에 의존하므로 샘플 순서를 바꾸거나 중간부터 재생할 수 없습니다.
    """

    @abstractmethod
    def update(self, value: float) -> None:
        """다음 샘플을 받아 내부 상태를 갱신"""

    @abstractmethod
    def last(self) -> float:
        """가장 최근에 계산된 출력 반환 (부작용 없음)"""

    @abstractmethod
    def reset(self) -> None:
        """생성 직후 상태로 초기화"""

    @property
    @abstractmethod
    def is_warmed_up(self) -> bool:
        """자체 이력이 모두 채워졌는지 여부"""

    def feed(self, values: Union[Iterable[float], np.ndarray]) -> np.ndarray:
        """
        여러 샘플을 순서대로 적용하고 샘플별 출력을 반환

        Args:
            values: 시간순 입력 샘플

        Returns:
            np.ndarray: 입력 하나당 출력 하나

        Example:
            >>> cg = CenterOfGravity(3)
            >>> cg.feed([1.0, 2.0, 3.0])
        """
        outputs = []
        for value in values:
            self.update(value)
            outputs.append(self.last())
        return np.array(outputs, dtype=np.float64)

    def get_params(self) -> Dict[str, Any]:
        return {}

    def get_status(self) -> Dict[str, Any]:
        """
        현재 필터 상태 정보 반환

        Returns:
            Dict: 파라미터, 워밍업 여부, 현재 값, 내부 변환 이름
        """
        inner = getattr(self, 'inner', None)
        return {
            'name': self.__class__.__name__,
            'params': self.get_params(),
            'is_warmed_up': self.is_warmed_up,
            'current_value': self.last(),
            'inner': inner.__class__.__name__ if inner is not None else None
        }

    def __str__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in self.get_params().items())
        return f"{self.__class__.__name__}({params})"

    def __repr__(self) -> str:
        return self.__str__()


class ChainedTransform(StreamTransform):
    """
    내부 변환 하나를 소유하는 필터의 기본 클래스

    update()는 샘플을 검증한 뒤 내부 변환에 먼저 전달하고,
    내부 변환의 출력으로 _calculate()를 호출해 자신의 출력을 계산합니다.
    내부 변환을 지정하지 않으면 Echo(항등 변환)를 사용합니다.
    """

    def __init__(self, inner: Optional[StreamTransform] = None):
        if inner is None:
            from .echo import Echo
            inner = Echo()
        elif not isinstance(inner, StreamTransform):
            raise TypeError(f"내부 변환은 StreamTransform이어야 합니다: {type(inner).__name__}")

        self.inner = inner
        self._out = 0.0
        self._warmed_up = False

    def update(self, value: float) -> None:
        sample = validate_sample(value)
        self.inner.update(sample)
        self._out = self._calculate(self.inner.last())

    def last(self) -> float:
        return self._out

    @property
    def is_warmed_up(self) -> bool:
        return self._warmed_up

    def reset(self) -> None:
        """필터와 내부 체인 전체를 생성 직후 상태로 초기화"""
        self.inner.reset()
        self._out = 0.0
        self._warmed_up = False
        self._reset_state()
        logger.debug(f"{self} 상태 초기화")

    def _mark_warmed_up(self) -> None:
        if not self._warmed_up:
            self._warmed_up = True
            logger.info(f"{self} 워밍업 완료, 첫 값: {self._out:.6f}")

    @abstractmethod
    def _reset_state(self) -> None:
        """알고리즘별 이력 초기화 (생성자에서도 호출)"""

    @abstractmethod
    def _calculate(self, value: float) -> float:
        """
        내부 변환 출력 하나로 새 출력을 계산

        Args:
            value (float): 내부 변환의 현재 출력

        Returns:
            float: 새 출력 값
        """


class RingBuffer:
    """
    고정 크기 순환 버퍼

    가득 찬 상태에서 추가하면 가장 오래된 값을 덮어씁니다.
    메모리 재할당 없이 O(1)로 추가하며, 필터 이력 저장에 사용합니다.
    """

    def __init__(self, capacity: int):
        """
        Args:
            capacity (int): 버퍼의 최대 크기

        Raises:
            ValueError: capacity가 1보다 작은 경우
        """
        self._capacity = validate_window_len(capacity, "capacity")
        self._buffer = np.zeros(self._capacity, dtype=np.float64)
        self._head = 0  # 다음 쓰기 위치
        self._size = 0

    def append(self, value: float) -> None:
        self._buffer[self._head] = value
        self._head = (self._head + 1) % self._capacity

        if self._size < self._capacity:
            self._size += 1

    def get_data(self, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        저장된 데이터를 오래된 것부터 반환

        Args:
            out: 결과를 쓸 미리 할당된 배열 (길이 capacity 이상).
                지정하면 새 배열을 만들지 않고 out[:size] 뷰를 반환합니다.

        Returns:
            np.ndarray: 시간순으로 정렬된 데이터
        """
        if out is None:
            out = np.empty(self._size, dtype=np.float64)
        elif len(out) < self._capacity:
            raise ValueError(f"출력 배열 길이가 버퍼 용량보다 작습니다: {len(out)} < {self._capacity}")

        if self._size < self._capacity:
            out[:self._size] = self._buffer[:self._size]
        else:
            tail = self._capacity - self._head
            out[:tail] = self._buffer[self._head:]
            out[tail:self._capacity] = self._buffer[:self._head]
        return out[:self._size]

    def lag(self, k: int) -> float:
        """
        최신 값으로부터 k 샘플 이전 값 반환 (lag(0)은 최신 값)

        Raises:
            IndexError: 저장된 데이터보다 먼 과거를 요청한 경우
        """
        if k < 0 or k >= self._size:
            raise IndexError(f"lag {k} 범위 초과 (size={self._size})")
        return float(self._buffer[(self._head - 1 - k) % self._capacity])

    def get_latest(self) -> Optional[float]:
        if self._size == 0:
            return None
        return self.lag(0)

    def is_full(self) -> bool:
        """버퍼가 가득 찼는지 확인"""
        return self._size >= self._capacity

    def clear(self) -> None:
        self._head = 0
        self._size = 0
        self._buffer.fill(0)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size
