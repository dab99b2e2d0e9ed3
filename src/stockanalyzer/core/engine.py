"""
Analysis pipeline orchestrator.

Runs the full, linear pipeline for one symbol:
  1. Resolve the symbol against the reference table.
  2. Generate a synthetic OHLCV series from the profile's base price.
  3. Attach moving averages, RSI and the MACD divergence (plus the
     signal line when configured).
  4. Validate the finished series and project the summary statistics.

Each call recomputes everything from scratch; nothing is cached between
symbol selections.
"""
from datetime import date
from typing import Optional

from loguru import logger

from src.stockanalyzer.analysis.summary import project_summary
from src.stockanalyzer.core.types import AnalysisResult, AnalyzerConfig
from src.stockanalyzer.data.base import SeriesSource, validate_series
from src.stockanalyzer.data.generators.random_walk import RandomWalkGenerator
from src.stockanalyzer.indicators.macd import with_macd_like, with_macd_signal
from src.stockanalyzer.indicators.moving_average import with_moving_averages
from src.stockanalyzer.indicators.rsi import with_rsi
from src.stockanalyzer.reference.loader import ReferenceLoader


class AnalysisEngine:
    """Symbol in, enriched series and summary out."""

    def __init__(
        self,
        loader: Optional[ReferenceLoader] = None,
        source: Optional[SeriesSource] = None,
        config: Optional[AnalyzerConfig] = None,
    ):
        """
        Args:
            loader: Reference table used for symbol lookup.  Defaults to the
                    table shipped with the package.
            source: Series source.  Defaults to a ``RandomWalkGenerator``
                    seeded from ``config.seed``.
            config: Pipeline parameters.
        """
        self.config = config or AnalyzerConfig()
        self.loader = loader or ReferenceLoader()
        self.source = source or RandomWalkGenerator(seed=self.config.seed)

    def run(
        self,
        symbol: str,
        end_date: Optional[date] = None,
        generation: int = 0,
    ) -> AnalysisResult:
        """Execute the full pipeline for *symbol*.

        Args:
            symbol: Raw user input; trimmed and case-normalised before lookup.
            end_date: Date of the newest point (defaults to today).
            generation: Selection token stamped on the result.

        Raises:
            UnknownSymbolError: If the symbol is not in the reference table.
            InvalidParameterError: If the profile's base price is unusable.
        """
        key = self.loader.resolve_symbol(symbol)
        profile = self.loader.get_profile(key)

        logger.info(
            f"Running pipeline for {key} (base {profile.price}, "
            f"{self.config.days} days)"
        )

        series = self.source.generate(profile.price, self.config.days, end_date)
        series = with_moving_averages(series, self.config.ma_windows)
        series = with_rsi(series, self.config.rsi_period)
        series = with_macd_like(series)
        if self.config.macd_signal:
            series = with_macd_signal(series)

        validate_series(series)

        summary = project_summary(series, profile.price, symbol=key)

        logger.success(
            f"{key}: {summary.current_price:.2f} "
            f"({summary.change_percent:+.2f}%), RSI {summary.latest_rsi}"
        )

        return AnalysisResult(
            symbol=key,
            profile=profile,
            series=series,
            summary=summary,
            generation=generation,
        )
