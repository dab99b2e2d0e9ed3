"""
test_summary.py
"""
from datetime import date, timedelta

import pytest

from src.stockanalyzer.analysis.summary import (
    classify_rsi,
    display_window,
    latest_rsi,
    price_axis_bounds,
    project_summary,
)
from src.stockanalyzer.data.schemas import PricePoint

START = date(2026, 3, 1)


def point(i, close, rsi=None, low=None, high=None):
    return PricePoint(
        date=START + timedelta(days=i),
        open=close,
        high=high if high is not None else close,
        low=low if low is not None else close,
        close=close,
        volume=0,
        rsi=rsi,
    )


def test_change_and_percent():
    summary = project_summary([point(0, 100.0), point(1, 95.0)], base_price=120.0, symbol="TSLA")
    assert summary.symbol == "TSLA"
    assert summary.current_price == 95.0
    assert summary.previous_price == 100.0
    assert summary.change == pytest.approx(-5.0)
    assert summary.change_percent == pytest.approx(-5.0)
    assert summary.is_up is False


def test_flat_day_counts_as_up():
    summary = project_summary([point(0, 50.0), point(1, 50.0)], base_price=50.0)
    assert summary.change == 0.0
    assert summary.is_up is True


def test_percent_consistency():
    summary = project_summary([point(0, 189.37), point(1, 191.02)], base_price=189.5)
    expected = (summary.current_price - summary.previous_price) / summary.previous_price * 100
    assert summary.change_percent == pytest.approx(expected)
    assert summary.is_up == (summary.change >= 0)


def test_week52_band_heuristic():
    summary = project_summary([point(0, 100.0)], base_price=80.0)
    assert summary.week52_high == pytest.approx(128.0)
    assert summary.week52_low == pytest.approx(72.0)


def test_empty_series_falls_back_to_base_price():
    summary = project_summary([], base_price=77.2)
    assert summary.current_price == 77.2
    assert summary.previous_price == 77.2
    assert summary.change == 0.0
    assert summary.is_up is True
    assert summary.latest_rsi is None
    assert summary.rsi_zone is None


def test_single_point_uses_base_as_previous():
    summary = project_summary([point(0, 80.0)], base_price=77.2)
    assert summary.previous_price == 77.2
    assert summary.change == pytest.approx(2.8)


def test_latest_rsi_skips_trailing_gaps():
    series = [point(0, 10.0, rsi=40.0), point(1, 11.0, rsi=55.5), point(2, 12.0)]
    assert latest_rsi(series) == 55.5


def test_rsi_unavailable_marker():
    summary = project_summary([point(0, 10.0), point(1, 11.0)], base_price=10.0)
    assert summary.latest_rsi is None


@pytest.mark.parametrize(
    "value, zone",
    [(75.0, "overbought"), (70.0, "overbought"), (50.0, "neutral"), (30.0, "oversold"), (None, None)],
)
def test_classify_rsi(value, zone):
    assert classify_rsi(value) == zone


def test_display_window_takes_trailing_points():
    series = [point(i, 10.0 + i) for i in range(91)]
    window = display_window(series, 60)
    assert len(window) == 60
    assert window[0] is series[31]
    assert window[-1] is series[-1]
    assert len(display_window(series[:10], 60)) == 10
    assert display_window(series, 0) == []


def test_price_axis_bounds():
    window = [point(0, 10.0, low=9.0, high=11.0), point(1, 12.0, low=11.5, high=13.0)]
    low, high = price_axis_bounds(window)
    assert low == pytest.approx(9.0 * 0.995)
    assert high == pytest.approx(13.0 * 1.005)
    assert price_axis_bounds([]) == (0.0, 0.0)
