"""
항등 변환(Echo)

입력을 그대로 출력하는 체인의 기본(종단) 노드입니다.
내부 변환 없이 생성된 모든 필터는 Echo를 기본 내부 변환으로 사용합니다.
"""

import logging
from typing import Optional

from .sliding_window import StreamTransform, validate_sample

logger = logging.getLogger(__name__)


class Echo(StreamTransform):
    """
    입력 값을 그대로 저장하고 반환하는 변환

    다른 변환을 감쌀 수도 있으며, 이 경우 내부 변환의 출력을 그대로 전달합니다.

    Example:
        >>> echo = Echo()
        >>> echo.update(101.5)
        >>> echo.last()
        101.5
    """

    def __init__(self, inner: Optional[StreamTransform] = None):
        if inner is not None and not isinstance(inner, StreamTransform):
            raise TypeError(f"내부 변환은 StreamTransform이어야 합니다: {type(inner).__name__}")

        self.inner = inner
        self._value = 0.0
        self._seen = False

    def update(self, value: float) -> None:
        sample = validate_sample(value)
        if self.inner is not None:
            self.inner.update(sample)
            sample = self.inner.last()
        self._value = sample
        self._seen = True

    def last(self) -> float:
        return self._value

    @property
    def is_warmed_up(self) -> bool:
        return self._seen

    def reset(self) -> None:
        if self.inner is not None:
            self.inner.reset()
        self._value = 0.0
        self._seen = False
