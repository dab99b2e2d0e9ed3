"""
Chart rendering for an analysis result.

Generates two figures:
  1. **Technical panel** — close with MA20/MA60 (top), RSI with the 70/30
     reference lines, MACD bars around zero, and volume bars, all over the
     trailing display window.
  2. **Financials** — quarterly revenue / net income bars with an EPS line.

The plotter only reads the enriched series; it never feeds back into it.
"""
from pathlib import Path
from typing import List, Optional

import matplotlib.gridspec as gridspec
import matplotlib.pyplot as plt
import matplotlib.ticker as mtick
import numpy as np
from loguru import logger

from src.stockanalyzer.analysis.summary import (
    RSI_OVERBOUGHT,
    RSI_OVERSOLD,
    display_window,
    price_axis_bounds,
)
from src.stockanalyzer.core.types import AnalysisResult
from src.stockanalyzer.data.frames import series_to_frame
from src.stockanalyzer.data.schemas import QuarterlyReport

COLORS = {
    "close": "#00ff88",
    "ma20": "#00b8ff",
    "ma60": "#ff9500",
    "rsi": "#a855f7",
    "macd": "#00b8ff",
    "signal": "#ff9500",
    "volume": "#00b8ff",
    "revenue": "#00b8ff",
    "net_income": "#00ff88",
    "down": "#ff4d6d",
}


class ChartPlotter:
    """Renders the technical and financials charts to image files."""

    def __init__(self, style: str = "dark_background", display_days: int = 60):
        plt.style.use(style)
        self.display_days = display_days

    # ------------------------------------------------------------------
    # Technical panel
    # ------------------------------------------------------------------

    def plot_technical(
        self,
        result: AnalysisResult,
        output_file: str = "technical.png",
    ) -> Path:
        """Render price/MA, RSI, MACD and volume panels for *result*.

        Args:
            result: Output of ``AnalysisEngine.run``.
            output_file: Destination image path.

        Returns:
            The path the figure was written to.
        """
        logger.info(f"Generating technical chart for {result.symbol}...")

        window = display_window(result.series, self.display_days)
        df = series_to_frame(window)

        fig = plt.figure(figsize=(16, 14))
        gs = gridspec.GridSpec(4, 1, height_ratios=[3, 1, 1, 1], hspace=0.08)

        ax_price = fig.add_subplot(gs[0])
        ax_rsi = fig.add_subplot(gs[1], sharex=ax_price)
        ax_macd = fig.add_subplot(gs[2], sharex=ax_price)
        ax_vol = fig.add_subplot(gs[3], sharex=ax_price)

        # --- Price + moving averages ---
        ax_price.plot(df.index, df["close"], label="Close", color=COLORS["close"], linewidth=2)
        ax_price.fill_between(df.index, df["close"], 0, color=COLORS["close"], alpha=0.08)
        for field in ("ma20", "ma60"):
            if df[field].notna().any():
                ax_price.plot(
                    df.index, df[field], label=field.upper(),
                    color=COLORS[field], linewidth=1.5, linestyle="--",
                )

        low, high = price_axis_bounds(window)
        if high > low:
            ax_price.set_ylim(low, high)

        summary = result.summary
        arrow = "▲" if summary.is_up else "▼"
        ax_price.set_title(
            f"{result.symbol} {result.profile.name}  {summary.current_price:.2f}  "
            f"{arrow} {abs(summary.change):.2f} ({summary.change_percent:+.2f}%)",
            fontsize=16, color="white", pad=15, weight="bold",
        )
        ax_price.set_ylabel("Price", fontsize=11)
        ax_price.grid(True, color="#444444", linestyle="-", linewidth=0.5, alpha=0.3)
        ax_price.legend(loc="upper left", fontsize=10, facecolor="#1a1a1a", edgecolor="gray")

        # --- RSI ---
        ax_rsi.plot(df.index, df["rsi"], color=COLORS["rsi"], linewidth=1.5, label="RSI")
        ax_rsi.axhline(y=RSI_OVERBOUGHT, color=COLORS["down"], linestyle="--", linewidth=1, alpha=0.7)
        ax_rsi.axhline(y=RSI_OVERSOLD, color=COLORS["close"], linestyle="--", linewidth=1, alpha=0.7)
        ax_rsi.set_ylim(0, 100)
        ax_rsi.set_ylabel("RSI", fontsize=10)
        ax_rsi.grid(True, axis="y", linestyle="--", alpha=0.3)

        # --- MACD ---
        macd = df["macd"].fillna(0.0)
        bar_colors = np.where(macd >= 0, COLORS["macd"], COLORS["down"])
        ax_macd.bar(df.index, macd, color=bar_colors, width=0.8)
        if df["macd_signal"].notna().any():
            ax_macd.plot(
                df.index, df["macd_signal"], color=COLORS["signal"],
                linewidth=1.2, label="Signal",
            )
        ax_macd.axhline(y=0, color="white", linewidth=0.8, alpha=0.2)
        ax_macd.set_ylabel("MACD", fontsize=10)
        ax_macd.grid(True, axis="y", linestyle="--", alpha=0.3)

        # --- Volume ---
        ax_vol.bar(df.index, df["volume"], color=COLORS["volume"], alpha=0.5, width=0.8)
        ax_vol.yaxis.set_major_formatter(
            mtick.FuncFormatter(lambda v, _: f"{v / 1e6:.0f}M")
        )
        ax_vol.set_ylabel("Volume", fontsize=10)
        ax_vol.grid(True, axis="y", linestyle="--", alpha=0.3)

        for ax in (ax_price, ax_rsi, ax_macd):
            plt.setp(ax.get_xticklabels(), visible=False)

        return self._save(fig, output_file, "Technical chart")

    # ------------------------------------------------------------------
    # Quarterly financials
    # ------------------------------------------------------------------

    def plot_financials(
        self,
        quarterly: List[QuarterlyReport],
        output_file: str = "financials.png",
        title: Optional[str] = None,
    ) -> Optional[Path]:
        """Render revenue / net income bars and an EPS line per quarter.

        Returns:
            The written path, or None when there is nothing to plot.
        """
        if not quarterly:
            logger.warning("No quarterly data to plot.")
            return None

        logger.info("Generating quarterly financials chart...")

        labels = [q.quarter for q in quarterly]
        x = np.arange(len(labels))
        width = 0.38

        fig, (ax_bars, ax_eps) = plt.subplots(1, 2, figsize=(16, 6))

        ax_bars.bar(x - width / 2, [q.revenue for q in quarterly], width,
                    label="Revenue", color=COLORS["revenue"], alpha=0.6)
        ax_bars.bar(x + width / 2, [q.net_income for q in quarterly], width,
                    label="Net income", color=COLORS["net_income"], alpha=0.7)
        ax_bars.set_xticks(x)
        ax_bars.set_xticklabels(labels, fontsize=9)
        ax_bars.set_title("Revenue & Net Income", fontsize=13, color="white")
        ax_bars.grid(True, axis="y", linestyle="--", alpha=0.3)
        ax_bars.legend(loc="upper left", fontsize=10, facecolor="#1a1a1a", edgecolor="gray")

        eps = [q.eps for q in quarterly]
        ax_eps.plot(x, eps, color=COLORS["close"], linewidth=2, marker="o")
        ax_eps.fill_between(x, eps, 0, color=COLORS["close"], alpha=0.15)
        ax_eps.set_xticks(x)
        ax_eps.set_xticklabels(labels, fontsize=9)
        ax_eps.set_title("EPS", fontsize=13, color="white")
        ax_eps.grid(True, axis="y", linestyle="--", alpha=0.3)

        if title:
            fig.suptitle(title, fontsize=16, color="white", weight="bold")

        return self._save(fig, output_file, "Financials chart")

    @staticmethod
    def _save(fig, output_file: str, label: str) -> Path:
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        logger.success(f"{label} saved to {path}")
        return path
