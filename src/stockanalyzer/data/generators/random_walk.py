"""
Seeded random-walk series generator.

Synthesises a daily OHLCV series from a single base price:
  1. A running price takes a step of ``(u - 0.48) * 2.5 %`` each day, which
     gives the walk a slight upward drift.
  2. The running price is clamped so it never falls below half the base.
  3. Open, high and low are jittered around the running price so the
     candle ordering holds by construction.

All prices are rounded to cents before storage; the unrounded running price
carries over to the next day.

The floor is half the base raised to the next whole cent, so once the clamp
engages the running price can sit up to a cent above ``base_price * 0.5``.
"""
import math
import numbers
from datetime import date, timedelta
from typing import List, Optional

import numpy as np
from loguru import logger

from src.stockanalyzer.data.base import SeriesSource
from src.stockanalyzer.data.schemas import PricePoint
from src.stockanalyzer.exceptions import InvalidParameterError

STEP_BIAS = 0.48
STEP_SCALE = 0.025
OPEN_JITTER = 0.01
WICK_SCALE = 0.015
FLOOR_RATIO = 0.5
VOLUME_MIN = 10_000_000
VOLUME_MAX = 60_000_000


class RandomWalkGenerator(SeriesSource):
    """Concrete SeriesSource backed by a NumPy random generator."""

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Args:
            seed: Seed for a fresh ``numpy.random.default_rng``.  Ignored
                  when *rng* is given.
            rng: Pre-built generator to draw from.  Sharing one generator
                 across calls yields a different series per call while the
                 whole sequence stays reproducible.
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(
        self,
        base_price: float,
        days: int = 90,
        end_date: Optional[date] = None,
    ) -> List[PricePoint]:
        if base_price is None or not base_price > 0 or not math.isfinite(base_price):
            logger.error(f"Rejected base price: {base_price}")
            raise InvalidParameterError(f"base_price must be a finite number > 0, got {base_price}")
        if isinstance(days, bool) or not isinstance(days, numbers.Integral) or days < 1:
            logger.error(f"Rejected day count: {days}")
            raise InvalidParameterError(f"days must be an integer >= 1, got {days}")
        days = int(days)

        end_date = end_date or date.today()
        floor = self._price_floor(base_price)

        logger.debug(
            f"Generating {days + 1} points from base {base_price} "
            f"(floor {floor}) ending {end_date}"
        )

        series = []
        price = base_price

        for offset in range(days, -1, -1):
            change = (self.rng.random() - STEP_BIAS) * price * STEP_SCALE
            price = max(price + change, floor)

            open_ = price + (self.rng.random() - 0.5) * price * OPEN_JITTER
            high = max(price, open_) * (1 + self.rng.random() * WICK_SCALE)
            low = min(price, open_) * (1 - self.rng.random() * WICK_SCALE)
            volume = int(self.rng.integers(VOLUME_MIN, VOLUME_MAX))

            series.append(
                PricePoint(
                    date=end_date - timedelta(days=offset),
                    open=round(open_, 2),
                    high=round(high, 2),
                    low=round(low, 2),
                    close=round(price, 2),
                    volume=volume,
                )
            )

        return series

    @staticmethod
    def _price_floor(base_price: float) -> float:
        """Half the base price, raised to the next whole cent.

        Clamping to a cent-exact floor keeps the rounded close at or above
        ``base_price * 0.5``.
        """
        cents = math.ceil(round(base_price * FLOOR_RATIO * 100, 6))
        return cents / 100
