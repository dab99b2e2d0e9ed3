"""
Simple (non-Wilder) relative strength index.

Each value is recomputed from scratch over its own trailing window of
day-over-day close differences: gains and losses are plain sums, not
smoothed averages.  Windows with no losses substitute a tiny epsilon for
the denominator, which pins the index just under 100 instead of failing.
"""
from typing import List

import numpy as np
from loguru import logger
from numpy.lib.stride_tricks import sliding_window_view

from src.stockanalyzer.data.schemas import PricePoint
from src.stockanalyzer.exceptions import InvalidParameterError

DEFAULT_PERIOD = 14
LOSS_EPSILON = 0.0001


def with_rsi(series: List[PricePoint], period: int = DEFAULT_PERIOD) -> List[PricePoint]:
    """Attach ``rsi`` to every point from index *period* onward.

    For index ``i`` the window covers the differences
    ``close[j] - close[j - 1]`` for ``j`` in ``[i - period + 1, i]``;
    ``RS = gains / (losses or 1e-4)`` and ``RSI = 100 - 100 / (1 + RS)``,
    rounded to 2 decimals.  Earlier points keep ``rsi=None``.

    Raises:
        InvalidParameterError: If *period* is below 1.
    """
    if period < 1:
        raise InvalidParameterError(f"RSI period must be >= 1, got {period}")

    if len(series) <= period:
        if series:
            logger.warning(
                f"Series of {len(series)} points is too short for RSI({period}); "
                "no values attached."
            )
        return list(series)

    closes = np.array([p.close for p in series], dtype=float)
    diffs = np.diff(closes)
    gains = np.where(diffs > 0, diffs, 0.0)
    losses = np.where(diffs < 0, -diffs, 0.0)

    # Window k sums diffs[k : k + period], i.e. the RSI of point k + period.
    gain_sums = sliding_window_view(gains, period).sum(axis=1)
    loss_sums = sliding_window_view(losses, period).sum(axis=1)

    rs = gain_sums / np.where(loss_sums == 0, LOSS_EPSILON, loss_sums)
    rsi = 100 - 100 / (1 + rs)

    logger.debug(f"RSI({period}) computed for {len(rsi)} of {len(series)} points")

    enriched = list(series[:period])
    for point, value in zip(series[period:], rsi):
        enriched.append(point.model_copy(update={"rsi": round(float(value), 2)}))
    return enriched
