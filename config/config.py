"""
Ehlers 스트리밍 필터 라이브러리 설정 파일

환경 변수(또는 .env 파일)를 통해 설정을 로드하고
FilterFactory 기본값과 로깅 설정에서 사용할 수 있는 중앙 집중식 설정 관리 모듈
"""

import logging
from typing import List
from decouple import config

logger = logging.getLogger(__name__)


class Settings:
    """라이브러리 설정 클래스"""

    # =============================================================================
    # 기본 설정
    # =============================================================================
    APP_NAME: str = config("APP_NAME", default="ehlers-filters")
    APP_VERSION: str = config("APP_VERSION", default="0.1.0")
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config(
        "LOG_FORMAT",
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # =============================================================================
    # 필터 기본 파라미터 (FilterFactory에서 파라미터 생략 시 사용)
    # =============================================================================
    DEFAULT_WINDOW_LEN: int = config("DEFAULT_WINDOW_LEN", default=16, cast=int)
    RSI_PERIOD: int = config("RSI_PERIOD", default=14, cast=int)
    ROOFING_HP_LEN: int = config("ROOFING_HP_LEN", default=48, cast=int)
    ROOFING_SS_LEN: int = config("ROOFING_SS_LEN", default=10, cast=int)
    LAGUERRE_GAMMA: float = config("LAGUERRE_GAMMA", default=0.8, cast=float)


# 전역 설정 인스턴스
settings = Settings()


def get_settings() -> Settings:
    """설정 인스턴스 반환"""
    return settings


def validate_settings() -> List[str]:
    """설정 유효성 검증 및 경고 메시지 반환"""
    warnings = []

    for name in ("DEFAULT_WINDOW_LEN", "RSI_PERIOD", "ROOFING_HP_LEN", "ROOFING_SS_LEN"):
        if getattr(settings, name) < 1:
            warnings.append(f"{name}은(는) 1 이상이어야 합니다: {getattr(settings, name)}")

    if not 0.0 <= settings.LAGUERRE_GAMMA < 1.0:
        warnings.append(f"LAGUERRE_GAMMA는 0 이상 1 미만이어야 합니다: {settings.LAGUERRE_GAMMA}")

    if logging.getLevelName(settings.LOG_LEVEL.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
        warnings.append(f"알 수 없는 LOG_LEVEL입니다: {settings.LOG_LEVEL}")

    return warnings


def configure_logging() -> None:
    """LOG_LEVEL/LOG_FORMAT 설정으로 루트 로거 구성"""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT
    )
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} 로깅 설정: level={settings.LOG_LEVEL}")


if __name__ == "__main__":
    # 설정 확인 스크립트
    print(f"{settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"기본 윈도우 길이: {settings.DEFAULT_WINDOW_LEN}")

    warnings = validate_settings()
    if warnings:
        print("\n설정 경고:")
        for warning in warnings:
            print(f"  - {warning}")
    else:
        print("\n모든 설정이 올바르게 구성되었습니다!")
