"""
test_indicators.py
"""
from datetime import date, timedelta

import pytest

from src.stockanalyzer.data.generators.random_walk import RandomWalkGenerator
from src.stockanalyzer.data.schemas import PricePoint
from src.stockanalyzer.exceptions import InvalidParameterError
from src.stockanalyzer.indicators.macd import with_macd_like, with_macd_signal
from src.stockanalyzer.indicators.moving_average import with_moving_averages
from src.stockanalyzer.indicators.rsi import with_rsi

START = date(2026, 1, 1)


def make_series(closes):
    return [
        PricePoint(
            date=START + timedelta(days=i),
            open=c, high=c, low=c, close=c, volume=1_000_000,
        )
        for i, c in enumerate(closes)
    ]


@pytest.fixture
def generated():
    return RandomWalkGenerator(seed=3).generate(875.4, days=90, end_date=date(2026, 10, 18))


# --- Moving averages -------------------------------------------------------

def test_ma_partial_window_at_start(generated):
    enriched = with_moving_averages(generated)
    first = enriched[0]
    assert first.ma20 == first.close
    assert first.ma60 == first.close

    closes = [p.close for p in generated]
    expected = round(sum(closes[:6]) / 6, 2)
    assert enriched[5].ma20 == expected
    assert enriched[5].ma60 == expected


def test_ma_full_window(generated):
    enriched = with_moving_averages(generated)
    closes = [p.close for p in generated]
    assert enriched[50].ma20 == round(sum(closes[31:51]) / 20, 2)
    assert enriched[90].ma60 == round(sum(closes[31:91]) / 60, 2)


@pytest.mark.parametrize("seed", range(25))
def test_ma_rounds_each_window_mean_like_the_naive_loop(seed):
    series = RandomWalkGenerator(seed=seed).generate(189.5, days=90, end_date=date(2026, 10, 18))
    enriched = with_moving_averages(series)
    closes = [p.close for p in series]
    for i, point in enumerate(enriched):
        for window, value in ((20, point.ma20), (60, point.ma60)):
            chunk = closes[max(0, i - window + 1):i + 1]
            assert value == round(sum(chunk) / len(chunk), 2), (seed, i, window)


def test_ma_half_cent_mean_uses_python_rounding():
    enriched = with_moving_averages(make_series([193.86, 193.87]))
    assert enriched[1].ma20 == round((193.86 + 193.87) / 2, 2)


def test_ma_exact_values():
    enriched = with_moving_averages(make_series([1.0, 2.0, 3.0, 4.0]))
    assert [p.ma20 for p in enriched] == [1.0, 1.5, 2.0, 2.5]


def test_ma_does_not_mutate_input(generated):
    with_moving_averages(generated)
    assert all(p.ma20 is None for p in generated)


def test_ma_leaves_ohlcv_untouched(generated):
    enriched = with_moving_averages(generated)
    for before, after in zip(generated, enriched):
        assert (before.open, before.high, before.low, before.close, before.volume) == (
            after.open, after.high, after.low, after.close, after.volume
        )


def test_ma_empty_series():
    assert with_moving_averages([]) == []


@pytest.mark.parametrize("windows", [(0,), (15,)])
def test_ma_rejects_bad_window(windows):
    with pytest.raises(InvalidParameterError):
        with_moving_averages(make_series([1.0]), windows)


# --- RSI -------------------------------------------------------------------

def test_rsi_absent_before_period(generated):
    enriched = with_rsi(generated)
    assert all(p.rsi is None for p in enriched[:14])
    assert all(p.rsi is not None for p in enriched[14:])


def test_rsi_bounds(generated):
    for point in with_rsi(generated):
        if point.rsi is not None:
            assert 0.0 <= point.rsi <= 100.0


def test_rsi_zero_losses_is_near_100():
    enriched = with_rsi(make_series([100.0 + i for i in range(15)]))
    assert enriched[14].rsi == pytest.approx(100.0, abs=0.01)
    assert enriched[14].rsi <= 100.0


def test_rsi_flat_window_is_zero():
    enriched = with_rsi(make_series([50.0] * 15))
    assert enriched[14].rsi == 0.0


def test_rsi_all_losses_is_zero():
    enriched = with_rsi(make_series([100.0 - i for i in range(15)]))
    assert enriched[14].rsi == 0.0


def test_rsi_matches_naive_recomputation(generated):
    enriched = with_rsi(generated)
    closes = [p.close for p in generated]
    for i in range(14, len(closes)):
        gains = losses = 0.0
        for j in range(i - 13, i + 1):
            diff = closes[j] - closes[j - 1]
            if diff > 0:
                gains += diff
            else:
                losses -= diff
        rs = gains / (losses or 0.0001)
        assert enriched[i].rsi == pytest.approx(100 - 100 / (1 + rs), abs=0.011)


def test_rsi_known_value():
    # Seven +1 steps and seven -1 steps: RS = 1, RSI = 50.
    closes = [10.0]
    for step in [1, -1] * 7:
        closes.append(closes[-1] + step)
    assert with_rsi(make_series(closes))[14].rsi == 50.0


def test_rsi_short_series_has_no_values():
    enriched = with_rsi(make_series([1.0 + i for i in range(14)]))
    assert all(p.rsi is None for p in enriched)


def test_rsi_rejects_bad_period():
    with pytest.raises(InvalidParameterError):
        with_rsi(make_series([1.0, 2.0]), period=0)


# --- MACD ------------------------------------------------------------------

def test_macd_zero_at_origin(generated):
    enriched = with_macd_like(generated)
    assert enriched[0].macd == 0.0
    assert all(p.macd is not None for p in enriched)


def test_macd_matches_recursive_ema(generated):
    enriched = with_macd_like(generated)
    k12, k26 = 2 / 13, 2 / 27
    ema12 = ema26 = generated[0].close
    for i, point in enumerate(generated):
        if i > 0:
            ema12 = point.close * k12 + ema12 * (1 - k12)
            ema26 = point.close * k26 + ema26 * (1 - k26)
        assert enriched[i].macd == pytest.approx(ema12 - ema26, abs=0.0011)


def test_macd_positive_on_rising_series():
    enriched = with_macd_like(make_series([10.0 + i for i in range(30)]))
    assert all(p.macd > 0 for p in enriched[1:])


def test_macd_like_leaves_signal_empty(generated):
    enriched = with_macd_like(generated)
    assert all(p.macd_signal is None and p.macd_hist is None for p in enriched)


def test_macd_signal_and_histogram(generated):
    enriched = with_macd_signal(with_macd_like(generated))
    assert enriched[0].macd_signal == 0.0
    assert enriched[0].macd_hist == 0.0
    for point in enriched:
        assert point.macd_hist == pytest.approx(point.macd - point.macd_signal, abs=0.0021)


def test_macd_empty_series():
    assert with_macd_like([]) == []
    assert with_macd_signal([]) == []


# --- Full chain ------------------------------------------------------------

def test_chain_keeps_all_fields(generated):
    enriched = with_macd_like(with_rsi(with_moving_averages(generated)))
    last = enriched[-1]
    assert None not in (last.ma20, last.ma60, last.rsi, last.macd)
    assert len(enriched) == len(generated)
