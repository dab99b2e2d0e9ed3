"""
Configuration and result contracts for the analysis pipeline.

``AnalyzerConfig`` validates the tunable parameters once, up front, so the
indicator stages never see a nonsensical window.  ``from_env`` reads the
``STOCK_ANALYZER_*`` variables; call ``load_dotenv()`` first if they live
in a ``.env`` file.
"""
import os
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from src.stockanalyzer.analysis.summary import MarketSummary
from src.stockanalyzer.data.schemas import PricePoint, TickerProfile

ENV_PREFIX = "STOCK_ANALYZER_"


class AnalyzerConfig(BaseModel):
    """Parameters shared across pipeline runs."""

    days: int = Field(90, ge=1, description="Day-over-day steps to generate")
    rsi_period: int = Field(14, ge=1, description="RSI lookback")
    ma_windows: Tuple[int, ...] = Field(
        (20, 60), description="Moving-average windows (ma20, ma60)",
    )
    display_days: int = Field(60, ge=1, description="Points shown by the charts")
    macd_signal: bool = Field(
        False, description="Also attach the EMA9 signal line and histogram",
    )
    seed: Optional[int] = Field(None, description="Seed for the random walk")

    @field_validator("ma_windows")
    @classmethod
    def windows_must_be_supported(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        """Only windows with a matching ``PricePoint`` field are allowed."""
        for window in v:
            if f"ma{window}" not in PricePoint.model_fields:
                raise ValueError(f"Unsupported moving-average window: {window}")
        return v

    @classmethod
    def from_env(cls, **overrides) -> "AnalyzerConfig":
        """Build a config from ``STOCK_ANALYZER_*`` environment variables.

        Keyword *overrides* that are not None win over the environment.
        """
        values = {}
        for field, env_name in (
            ("days", "DAYS"),
            ("rsi_period", "RSI_PERIOD"),
            ("display_days", "DISPLAY_DAYS"),
            ("seed", "SEED"),
        ):
            raw = os.getenv(ENV_PREFIX + env_name)
            if raw not in (None, ""):
                values[field] = raw

        flag = os.getenv(ENV_PREFIX + "MACD_SIGNAL")
        if flag not in (None, ""):
            values["macd_signal"] = flag.strip().lower() in ("1", "true", "yes", "on")

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class AnalysisResult(BaseModel):
    """Everything the presentation layer needs for one symbol selection."""

    symbol: str
    profile: TickerProfile
    series: List[PricePoint]
    summary: MarketSummary
    generation: int = Field(0, description="Selection token that produced this result")
