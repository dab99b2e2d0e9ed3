"""
Trailing moving averages of the close.

Early points use whatever history exists (a partial window) instead of
being left empty, so the MA lines start on the first day of the chart.
"""
from typing import List, Sequence

import pandas as pd
from loguru import logger

from src.stockanalyzer.data.schemas import PricePoint
from src.stockanalyzer.exceptions import InvalidParameterError

DEFAULT_WINDOWS = (20, 60)


def with_moving_averages(
    series: List[PricePoint],
    windows: Sequence[int] = DEFAULT_WINDOWS,
) -> List[PricePoint]:
    """Attach ``ma{N}`` fields for each window in *windows*.

    At index ``i`` the value is the mean close of the last
    ``min(i + 1, N)`` points, rounded to 2 decimals.

    Args:
        series: Points ordered by ascending date.
        windows: Window lengths.  Each must name a ``ma{N}`` field on
                 ``PricePoint`` (currently 20 and 60).

    Returns:
        A new list of points; *series* is left untouched.

    Raises:
        InvalidParameterError: If a window is non-positive or has no
                               matching field.
    """
    for window in windows:
        if window < 1:
            raise InvalidParameterError(f"Moving-average window must be >= 1, got {window}")
        if f"ma{window}" not in PricePoint.model_fields:
            raise InvalidParameterError(f"No PricePoint field for window {window}")

    if not series:
        return []

    closes = pd.Series([p.close for p in series], dtype="float64")
    averages = {
        # Window mean via the builtin sum over Python floats; rounded per value below.
        f"ma{window}": closes.rolling(window=window, min_periods=1).apply(
            lambda w: sum(w.tolist()) / len(w), raw=True,
        )
        for window in windows
    }

    logger.debug(f"Moving averages {list(averages)} over {len(series)} points")

    return [
        point.model_copy(
            update={
                field: round(float(values.iloc[i]), 2)
                for field, values in averages.items()
            }
        )
        for i, point in enumerate(series)
    ]
