"""
Abstract base class for price-series sources.

Every concrete source (the seeded random walk today, a recorded fixture or
a live feed later) must implement the ``generate`` interface defined here.
The module also provides ``validate_series``, a final safety net run on a
finished series before it reaches the indicator stages.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from loguru import logger

from src.stockanalyzer.data.schemas import PricePoint


class SeriesSource(ABC):
    """Contract that all series sources must satisfy."""

    @abstractmethod
    def generate(
        self,
        base_price: float,
        days: int = 90,
        end_date: Optional[date] = None,
    ) -> List[PricePoint]:
        """Produce a daily OHLCV series anchored at *base_price*.

        Args:
            base_price: Reference price the series starts from.  Must be > 0.
            days: Number of day-over-day steps.  The series holds
                  ``days + 1`` points.
            end_date: Date of the newest point (defaults to today).

        Returns:
            Points ordered by ascending date, one per calendar day.

        Raises:
            InvalidParameterError: If *base_price* or *days* is out of range.
        """


def validate_series(series: List[PricePoint]) -> bool:
    """Verify the structural invariants of a finished series.

    Individual points already validate their own OHLC ordering when they
    are constructed, but enrichment uses ``model_copy`` (which skips
    validation) so the checks are repeated here along with the ordering of
    dates across points.

    Returns:
        ``True`` if validation passes.

    Raises:
        ValueError: On the first violated invariant.
    """
    previous: Optional[PricePoint] = None

    for idx, point in enumerate(series):
        if min(point.open, point.high, point.low, point.close) <= 0:
            logger.critical(f"Non-positive price at index {idx}: {point}")
            raise ValueError(f"Series contains a non-positive price at index {idx}")

        if point.low > min(point.open, point.close) or point.high < max(point.open, point.close):
            logger.critical(f"OHLC ordering violated at index {idx}: {point}")
            raise ValueError(f"Series violates OHLC ordering at index {idx}")

        if previous is not None and point.date <= previous.date:
            logger.critical(
                f"Dates not strictly increasing at index {idx}: "
                f"{previous.date} -> {point.date}"
            )
            raise ValueError(f"Series dates are not strictly increasing at index {idx}")

        previous = point

    return True
