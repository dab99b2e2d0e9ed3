"""
Scalar statistics and display projections derived from an enriched series.

``project_summary`` feeds the headline price block and the indicator
cards; ``display_window`` and ``price_axis_bounds`` describe what the
charts show.  Nothing here feeds back into the series.
"""
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from src.stockanalyzer.data.schemas import PricePoint

# Placeholder band: a fixed ratio of the current price, not a rolling extremum.
WEEK52_HIGH_RATIO = 1.28
WEEK52_LOW_RATIO = 0.72

RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0

AXIS_PADDING_LOW = 0.995
AXIS_PADDING_HIGH = 1.005

RsiZone = Literal["overbought", "oversold", "neutral"]


class MarketSummary(BaseModel):
    """Headline figures for the selected symbol."""

    symbol: str = ""
    current_price: float
    previous_price: float
    change: float
    change_percent: float
    is_up: bool
    week52_high: float = Field(..., description="current_price * 1.28 (heuristic)")
    week52_low: float = Field(..., description="current_price * 0.72 (heuristic)")
    latest_rsi: Optional[float] = Field(
        None, description="Most recent defined RSI; None when unavailable"
    )
    rsi_zone: Optional[RsiZone] = None


def latest_rsi(series: List[PricePoint]) -> Optional[float]:
    """Return the most recent defined RSI, or None if no point has one."""
    for point in reversed(series):
        if point.rsi is not None:
            return point.rsi
    return None


def classify_rsi(value: Optional[float]) -> Optional[RsiZone]:
    if value is None:
        return None
    if value >= RSI_OVERBOUGHT:
        return "overbought"
    if value <= RSI_OVERSOLD:
        return "oversold"
    return "neutral"


def project_summary(
    series: List[PricePoint],
    base_price: float,
    symbol: str = "",
) -> MarketSummary:
    """Derive the headline statistics from an enriched series.

    Args:
        series: Enriched points, oldest first.
        base_price: Fallback for the current and previous price when the
                    series has fewer than one or two points.
        symbol: Carried through for display.

    Returns:
        A ``MarketSummary``.  ``change_percent`` is unrounded; formatting
        is left to the consumer.
    """
    current = series[-1].close if series else base_price
    previous = series[-2].close if len(series) >= 2 else base_price
    change = current - previous
    rsi = latest_rsi(series)

    return MarketSummary(
        symbol=symbol,
        current_price=current,
        previous_price=previous,
        change=change,
        change_percent=change / previous * 100,
        is_up=change >= 0,
        week52_high=current * WEEK52_HIGH_RATIO,
        week52_low=current * WEEK52_LOW_RATIO,
        latest_rsi=rsi,
        rsi_zone=classify_rsi(rsi),
    )


def display_window(series: List[PricePoint], size: int = 60) -> List[PricePoint]:
    """Return the trailing *size* points shown by the charts."""
    if size <= 0:
        return []
    return list(series[-size:])


def price_axis_bounds(window: List[PricePoint]) -> Tuple[float, float]:
    """Padded (min low, max high) range for the price panel's y-axis."""
    if not window:
        return 0.0, 0.0
    lowest = min(p.low for p in window)
    highest = max(p.high for p in window)
    return lowest * AXIS_PADDING_LOW, highest * AXIS_PADDING_HIGH
