"""
Ehlers 스트리밍 필터 사용 예제

합성 가격 스트림을 샘플 단위로 흘려보내며 개별 필터와 파이프라인 출력을 시연
"""

import logging
import math
import random
from typing import Dict, List

from config import configure_logging
from src.ehlers_filters import FilterFactory

logger = logging.getLogger(__name__)


def simulate_price_stream(count: int = 200, start_price: float = 100.0) -> List[float]:
    """랜덤 워크 + 20샘플 주기 사인파 가격 시뮬레이션"""
    random.seed(42)
    prices = [start_price]
    for i in range(1, count):
        cycle = 0.5 * math.sin(2 * math.pi * i / 20)
        prices.append(prices[-1] + cycle + random.uniform(-0.5, 0.5))
    return prices


class RealTimeFilterProcessor:
    """
    실시간 필터 처리기

    표준 필터 세트와 Roofing -> Center of Gravity -> Laguerre RSI 파이프라인을 함께 갱신합니다.
    """

    def __init__(self):
        self.filters = FilterFactory.create_standard_set()
        self.pipeline = FilterFactory.build_pipeline([
            ('roofing_filter', {'hp_len': 48, 'ss_len': 10}),
            ('center_of_gravity', {'window_len': 8}),
            ('laguerre_rsi', {'window_len': 16}),
        ])

    def process(self, price: float) -> Dict[str, float]:
        results = {}
        for name, transform in self.filters.items():
            transform.update(price)
            results[name] = transform.last()

        self.pipeline.update(price)
        results['pipeline'] = self.pipeline.last()
        return results


def main():
    configure_logging()
    processor = RealTimeFilterProcessor()

    results = {}
    for i, price in enumerate(simulate_price_stream()):
        results = processor.process(price)
        if i % 50 == 49:
            logger.info(f"{i + 1}번째 샘플 가격={price:.2f}, 파이프라인={results['pipeline']:.4f}")

    print("\n최종 필터 출력:")
    for name, value in results.items():
        print(f"  {name:>18}: {value:10.4f}")


if __name__ == "__main__":
    main()
