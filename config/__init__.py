"""
Ehlers 스트리밍 필터 설정 모듈

이 모듈은 라이브러리 전체에서 사용할 수 있는 설정을 제공합니다.
"""

from .config import settings, get_settings, validate_settings, configure_logging, Settings

__all__ = [
    "settings",
    "get_settings",
    "validate_settings",
    "configure_logging",
    "Settings"
]
