"""
MACD-style oscillator.

``with_macd_like`` stores only the divergence term EMA12 - EMA26.  The
signal line and histogram of a full MACD are left to the opt-in
``with_macd_signal`` stage.
"""
from typing import List

import pandas as pd
from loguru import logger

from src.stockanalyzer.data.schemas import PricePoint
from src.stockanalyzer.exceptions import InvalidParameterError

FAST_SPAN = 12
SLOW_SPAN = 26
SIGNAL_SPAN = 9


def _divergence(series: List[PricePoint]) -> pd.Series:
    """Unrounded EMA12 - EMA26, both EMAs seeded at the first close."""
    closes = pd.Series([p.close for p in series], dtype="float64")
    # adjust=False gives the recursive form ema = close * k + ema * (1 - k)
    # with k = 2 / (span + 1) and ema[0] = close[0].
    ema_fast = closes.ewm(span=FAST_SPAN, adjust=False).mean()
    ema_slow = closes.ewm(span=SLOW_SPAN, adjust=False).mean()
    return ema_fast - ema_slow


def with_macd_like(series: List[PricePoint]) -> List[PricePoint]:
    """Attach ``macd = EMA12 - EMA26`` (3 decimals) to every point.

    The first point always carries exactly ``0.0``.
    """
    if not series:
        return []

    macd = _divergence(series)
    logger.debug(f"MACD divergence computed for {len(series)} points")

    return [
        point.model_copy(update={"macd": round(float(macd.iloc[i]), 3)})
        for i, point in enumerate(series)
    ]


def with_macd_signal(series: List[PricePoint], period: int = SIGNAL_SPAN) -> List[PricePoint]:
    """Attach ``macd_signal`` (EMA of the divergence) and ``macd_hist``.

    Works from the unrounded divergence, so it may run before or after
    ``with_macd_like``.  Both values are rounded to 3 decimals.

    Raises:
        InvalidParameterError: If *period* is below 1.
    """
    if period < 1:
        raise InvalidParameterError(f"Signal period must be >= 1, got {period}")
    if not series:
        return []

    divergence = _divergence(series)
    signal = divergence.ewm(span=period, adjust=False).mean()
    hist = divergence - signal

    logger.debug(f"MACD signal({period}) computed for {len(series)} points")

    return [
        point.model_copy(
            update={
                "macd_signal": round(float(signal.iloc[i]), 3),
                "macd_hist": round(float(hist.iloc[i]), 3),
            }
        )
        for i, point in enumerate(series)
    ]
