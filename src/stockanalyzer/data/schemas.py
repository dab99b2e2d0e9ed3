"""
Strict data contracts for price series and reference data.

Pydantic models defined here are the single source of truth for the OHLCV
record and the static fundamentals table.  Price points are frozen: each
enrichment stage returns new points via ``model_copy`` instead of mutating
the series it was given.
"""
import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PricePoint(BaseModel):
    """One trading day of synthetic OHLCV data plus derived indicators."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Calendar date of the trading session")

    open: float = Field(..., gt=0, description="Opening price")
    high: float = Field(..., gt=0, description="Intraday high")
    low: float = Field(..., gt=0, description="Intraday low")
    close: float = Field(..., gt=0, description="Closing price")

    # Volume of zero is valid (e.g. market halt), but negative is not.
    volume: int = Field(..., ge=0, description="Number of shares traded")

    # Derived fields stay None until the matching enrichment stage runs.
    ma20: Optional[float] = Field(None, description="Trailing 20-day mean close")
    ma60: Optional[float] = Field(None, description="Trailing 60-day mean close")
    rsi: Optional[float] = Field(None, ge=0, le=100, description="Simple RSI")
    macd: Optional[float] = Field(None, description="EMA12 - EMA26 divergence")
    macd_signal: Optional[float] = Field(None, description="EMA9 of the divergence")
    macd_hist: Optional[float] = Field(None, description="Divergence minus signal")

    @model_validator(mode="after")
    def check_ohlc_ordering(self) -> "PricePoint":
        """Ensure low <= min(open, close) and max(open, close) <= high."""
        body_low = min(self.open, self.close)
        body_high = max(self.open, self.close)
        if self.low > body_low:
            raise ValueError(
                f"Low price ({self.low}) is above the candle body ({body_low})"
            )
        if self.high < body_high:
            raise ValueError(
                f"High price ({self.high}) is below the candle body ({body_high})"
            )
        return self


class TickerProfile(BaseModel):
    """Static fundamentals for one supported symbol."""

    symbol: str = Field(..., description="Lookup key (e.g. AAPL, 600519)")
    name: str
    price: float = Field(..., gt=0, description="Base price for the generator")
    sector: str
    pe: float = Field(..., description="Price / earnings ratio")
    pb: float = Field(..., description="Price / book ratio")
    mktcap: str = Field(..., description="Market capitalisation, display text")
    roe: str
    revenue: str
    net_income: str
    debt_ratio: str
    div_yield: str
    eps: str
    beta: str


class QuarterlyReport(BaseModel):
    """One row of the quarterly financials table."""

    quarter: str = Field(..., description="Quarter label (e.g. 'Q1 2024')")
    revenue: float
    net_income: float
    eps: float
