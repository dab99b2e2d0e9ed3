"""
Command-line entry point.

Runs a single analysis for one symbol:
  1. Resolve the symbol against the reference table.
  2. Generate the synthetic series and attach the indicators.
  3. Print the headline summary.
  4. Archive summary, series and charts to a timestamped folder.

Usage::

    uv run main.py --symbol AAPL
    uv run main.py --symbol 600519 --days 120 --seed 7 --macd-signal
"""
import argparse
import json
import os
import shutil
import sys
from datetime import datetime

from dotenv import load_dotenv
from loguru import logger

from src.stockanalyzer.utils.logger import LOG_FILE_PREFIX, setup_logger

setup_logger()
load_dotenv()

from src.stockanalyzer.analysis.plotter import ChartPlotter  # noqa: E402
from src.stockanalyzer.core.engine import AnalysisEngine  # noqa: E402
from src.stockanalyzer.core.session import AnalysisSession  # noqa: E402
from src.stockanalyzer.core.types import AnalyzerConfig  # noqa: E402
from src.stockanalyzer.data.frames import series_to_frame  # noqa: E402
from src.stockanalyzer.exceptions import UnknownSymbolError  # noqa: E402


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def create_outcome_dir(symbol: str, days: int) -> str:
    """Create and return a timestamped output directory under ``outcomes/``."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    folder_name = f"{timestamp}_{symbol}_{days}d"

    target_dir = os.path.join("outcomes", folder_name)
    os.makedirs(target_dir, exist_ok=True)

    logger.info(f"Output directory created: {target_dir}")
    return target_dir


def save_json(data: dict, folder: str, filename: str) -> None:
    """Serialise *data* as pretty-printed JSON into *folder*/*filename*."""
    path = os.path.join(folder, filename)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.success(f"Saved {filename}")


def archive_current_log(target_dir: str) -> None:
    """Copy today's log file into *target_dir* for post-mortem analysis."""
    log_dir = "logs"
    try:
        today_str = datetime.now().strftime("%Y-%m-%d")
        src_log = os.path.join(log_dir, f"{LOG_FILE_PREFIX}_{today_str}.log")

        if os.path.exists(src_log):
            dst_log = os.path.join(target_dir, "execution.log")
            shutil.copy2(src_log, dst_log)
            logger.info(f"Archived execution log to {dst_log}")
        else:
            logger.warning("Log file not found for archiving.")
    except OSError as e:
        logger.warning(f"Failed to archive log: {e}")


def print_summary(result) -> None:
    s = result.summary
    arrow = "▲" if s.is_up else "▼"
    rsi = f"{s.latest_rsi:.1f} ({s.rsi_zone})" if s.latest_rsi is not None else "--"
    profile = result.profile

    lines = [
        f"{result.symbol}  {profile.name}  [{profile.sector}]",
        f"  Price      {s.current_price:.2f}  {arrow} {abs(s.change):.2f} "
        f"({s.change_percent:+.2f}%)",
        f"  52W High   {s.week52_high:.2f}",
        f"  52W Low    {s.week52_low:.2f}",
        f"  RSI(14)    {rsi}",
        f"  Mkt cap    {profile.mktcap}   P/E {profile.pe}   P/B {profile.pb}",
    ]
    print("\n".join(lines))


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Stock Analyzer — synthetic series and technical indicators",
    )
    parser.add_argument(
        "--symbol", type=str, default="AAPL",
        help="Symbol to analyse (e.g. AAPL, 600519)",
    )
    parser.add_argument(
        "--days", type=int, default=None,
        help="Number of daily steps to generate (default 90)",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for a reproducible series",
    )
    parser.add_argument(
        "--macd-signal", action="store_true", default=None,
        help="Also compute the MACD signal line and histogram",
    )
    parser.add_argument(
        "--no-chart", action="store_true",
        help="Skip chart rendering",
    )
    args = parser.parse_args()

    try:
        config = AnalyzerConfig.from_env(
            days=args.days, seed=args.seed, macd_signal=args.macd_signal,
        )
        session = AnalysisSession(AnalysisEngine(config=config))
        result = session.select(args.symbol)
    except (UnknownSymbolError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(2)

    output_dir = create_outcome_dir(result.symbol, config.days)

    try:
        print_summary(result)

        save_json(result.summary.model_dump(), output_dir, "summary.json")
        series_to_frame(result.series).to_csv(os.path.join(output_dir, "series.csv"))
        logger.success("Saved series.csv")

        if not args.no_chart:
            plotter = ChartPlotter(display_days=config.display_days)
            plotter.plot_technical(result, os.path.join(output_dir, "technical.png"))
            plotter.plot_financials(
                session.engine.loader.get_quarterly(),
                os.path.join(output_dir, "financials.png"),
                title=f"{result.symbol} Quarterly Financials",
            )

        logger.success(f"Results archived to: {output_dir}")
        archive_current_log(output_dir)

    except Exception as e:
        logger.exception(f"Pipeline failed: {e}")
        archive_current_log(output_dir)
        sys.exit(1)


if __name__ == "__main__":
    main()
