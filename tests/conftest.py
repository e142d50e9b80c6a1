"""
테스트 공통 픽스처

재현 가능한 합성 가격 데이터를 제공합니다.
"""

from typing import List

import numpy as np
import pytest


def generate_test_data(count: int = 200, start_price: float = 100.0, volatility: float = 0.02) -> List[float]:
    """
    테스트용 가격 데이터 생성 (랜덤 워크 + 트렌드 + 사인파)

    Args:
        count: 생성할 데이터 포인트 수
        start_price: 시작 가격
        volatility: 변동성 (표준편차)
    """
    rng = np.random.default_rng(42)
    prices = [start_price]

    for i in range(1, count):
        trend = 0.0005 * i
        cycle = 0.02 * np.sin(2 * np.pi * i / 20)
        price_change = np.clip(trend + cycle + rng.normal(0, volatility), -0.1, 0.1)
        prices.append(float(prices[-1] * (1 + price_change)))

    return prices


@pytest.fixture
def prices() -> List[float]:
    return generate_test_data()


@pytest.fixture
def sine_wave() -> np.ndarray:
    """주기 20, 진폭 1의 사인파"""
    return np.sin(2 * np.pi * np.arange(300) / 20)
