"""
필터 생성 팩토리

이름으로 필터를 생성하고, 여러 필터를 안쪽부터 감싸 파이프라인을 구성합니다.
파라미터를 생략하면 설정(config.Settings)의 기본값을 사용합니다.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from config.config import get_settings

from .auxiliary import ROC, Normalizer
from .echo import Echo
from .oscillators import RSI, CenterOfGravity, CyberCycle, LaguerreRSI
from .sliding_window import StreamTransform
from .smoothing import LaguerreFilter, RoofingFilter
from .trend import ReFlex, TrendFlex

logger = logging.getLogger(__name__)

FILTER_REGISTRY: Dict[str, Type[StreamTransform]] = {
    'echo': Echo,
    'center_of_gravity': CenterOfGravity,
    'cyber_cycle': CyberCycle,
    'laguerre_rsi': LaguerreRSI,
    'rsi': RSI,
    're_flex': ReFlex,
    'trend_flex': TrendFlex,
    'roofing_filter': RoofingFilter,
    'laguerre_filter': LaguerreFilter,
    'roc': ROC,
    'normalizer': Normalizer,
}

# 필터별 파라미터 -> 설정 항목
_DEFAULT_PARAMS: Dict[str, Dict[str, str]] = {
    'center_of_gravity': {'window_len': 'DEFAULT_WINDOW_LEN'},
    'cyber_cycle': {'window_len': 'DEFAULT_WINDOW_LEN'},
    'laguerre_rsi': {'window_len': 'DEFAULT_WINDOW_LEN'},
    'rsi': {'window_len': 'RSI_PERIOD'},
    're_flex': {'window_len': 'DEFAULT_WINDOW_LEN'},
    'trend_flex': {'window_len': 'DEFAULT_WINDOW_LEN'},
    'roofing_filter': {'hp_len': 'ROOFING_HP_LEN', 'ss_len': 'ROOFING_SS_LEN'},
    'laguerre_filter': {'gamma': 'LAGUERRE_GAMMA'},
    'roc': {'window_len': 'DEFAULT_WINDOW_LEN'},
    'normalizer': {'window_len': 'DEFAULT_WINDOW_LEN'},
}

StageSpec = Union[str, Tuple[str, Dict[str, Any]]]


class FilterFactory:
    """
    필터 객체를 생성하는 팩토리 클래스

    다양한 설정으로 필터와 파이프라인을 쉽게 생성할 수 있습니다.
    """

    @staticmethod
    def available_filters() -> List[str]:
        return sorted(FILTER_REGISTRY)

    @staticmethod
    def create(name: str, inner: Optional[StreamTransform] = None, **params: Any) -> StreamTransform:
        """
        이름으로 필터 생성

        Args:
            name (str): 필터 이름 (예: 'center_of_gravity')
            inner (StreamTransform): 내부 변환 (기본값: Echo)
            **params: 필터 파라미터 (생략 시 설정 기본값)

        Returns:
            StreamTransform: 생성된 필터

        Raises:
            ValueError: 등록되지 않은 필터 이름이거나 파라미터가 잘못된 경우
            TypeError: inner가 StreamTransform이 아닌 경우

        Example:
            >>> cg = FilterFactory.create('center_of_gravity', window_len=10)
        """
        if inner is not None and not isinstance(inner, StreamTransform):
            raise TypeError(f"내부 변환은 StreamTransform이어야 합니다: {type(inner).__name__}")
        if name not in FILTER_REGISTRY:
            raise ValueError(f"등록되지 않은 필터: {name} (사용 가능: {', '.join(sorted(FILTER_REGISTRY))})")

        settings = get_settings()
        for param, setting_name in _DEFAULT_PARAMS.get(name, {}).items():
            params.setdefault(param, getattr(settings, setting_name))

        try:
            transform = FILTER_REGISTRY[name](inner=inner, **params)
        except TypeError as e:
            raise ValueError(f"{name} 파라미터 오류: {e}") from e

        logger.debug(f"필터 생성: {transform}")
        return transform

    @staticmethod
    def build_pipeline(stages: Sequence[StageSpec]) -> StreamTransform:
        """
        안쪽부터 나열된 단계들로 파이프라인 구성

        Args:
            stages: ('이름', {파라미터}) 쌍 또는 이름 문자열의 목록.
                첫 단계가 입력을 가장 먼저 받고, 마지막 단계가 최종 출력이 됩니다.

        Returns:
            StreamTransform: 가장 바깥쪽 필터

        Example:
            >>> pipeline = FilterFactory.build_pipeline([
            ...     ('roofing_filter', {'hp_len': 48, 'ss_len': 10}),
            ...     ('center_of_gravity', {'window_len': 8}),
            ... ])
        """
        if not stages:
            raise ValueError("파이프라인에는 최소 한 단계가 필요합니다")

        transform = None
        for stage in stages:
            if isinstance(stage, str):
                name, params = stage, {}
            else:
                name, params = stage
            transform = FilterFactory.create(name, inner=transform, **dict(params))

        logger.info(f"파이프라인 구성: {' -> '.join(stage if isinstance(stage, str) else stage[0] for stage in stages)}")
        return transform

    @staticmethod
    def create_standard_set() -> Dict[str, StreamTransform]:
        """
        설정 기본값으로 모든 필터를 하나씩 생성

        Returns:
            dict: 필터 이름 -> 독립 실행 필터

        Example:
            >>> filters = FilterFactory.create_standard_set()
            >>> lrsi = filters['laguerre_rsi']
        """
        return {name: FilterFactory.create(name) for name in FILTER_REGISTRY if name != 'echo'}
