"""
Ehlers 스트리밍 필터 패키지

이 패키지는 가격 등 스칼라 시계열에 적용하는 John Ehlers 방식의 디지털 신호 처리 필터들을 포함합니다.
각 필터는 샘플을 하나씩 받아 출력 하나를 만들고, 다른 필터를 감싸 파이프라인으로 연결할 수 있습니다.
"""

from .sliding_window import StreamTransform, ChainedTransform, RingBuffer
from .echo import Echo
from .oscillators import CenterOfGravity, CyberCycle, LaguerreRSI, RSI
from .trend import ReFlex, TrendFlex
from .smoothing import SuperSmoother, RoofingFilter, LaguerreFilter
from .auxiliary import ROC, Normalizer
from .factory import FilterFactory, FILTER_REGISTRY

__all__ = [
    'StreamTransform',
    'ChainedTransform',
    'RingBuffer',
    'Echo',
    'CenterOfGravity',
    'CyberCycle',
    'LaguerreRSI',
    'RSI',
    'ReFlex',
    'TrendFlex',
    'SuperSmoother',
    'RoofingFilter',
    'LaguerreFilter',
    'ROC',
    'Normalizer',
    'FilterFactory',
    'FILTER_REGISTRY'
]

__version__ = '0.1.0'
