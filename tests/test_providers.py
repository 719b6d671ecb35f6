from datetime import date

import pytest

from rerf_forecaster.core.bars import Bar
from rerf_forecaster.providers import CsvBarSource, SyntheticBarSource, ensure_chronological


def test_synthetic_source_returns_weekday_history() -> None:
    end = date(2024, 6, 3)
    bars = SyntheticBarSource(days=252, end=end, random_state=0).fetch_bars("spy")

    assert 170 <= len(bars) <= 182
    assert all(bar.date.weekday() < 5 for bar in bars)
    assert all(bar.date < end for bar in bars)
    assert [bar.date for bar in bars] == sorted(bar.date for bar in bars)
    assert all(bar.low <= min(bar.open, bar.close) for bar in bars)
    assert all(bar.high >= max(bar.open, bar.close) for bar in bars)
    assert all(35_000_000 <= bar.volume < 75_000_000 for bar in bars)


def test_synthetic_source_is_seeded() -> None:
    end = date(2024, 6, 3)
    first = SyntheticBarSource(days=40, end=end, random_state=5).fetch_bars("AAPL")
    second = SyntheticBarSource(days=40, end=end, random_state=5).fetch_bars("AAPL")
    assert first == second


def test_synthetic_source_uses_symbol_base_price() -> None:
    end = date(2024, 6, 3)
    googl = SyntheticBarSource(days=10, end=end, random_state=1).fetch_bars("GOOGL")
    aapl = SyntheticBarSource(days=10, end=end, random_state=1).fetch_bars("AAPL")

    assert 2_500 < googl[0].close < 3_100
    assert 150 < aapl[0].close < 200


def test_synthetic_source_rejects_non_positive_days() -> None:
    with pytest.raises(ValueError):
        SyntheticBarSource(days=0)


def test_csv_source_parses_yahoo_export(tmp_path) -> None:
    path = tmp_path / "spy.csv"
    path.write_text(
        "Date,Open,High,Low,Close,Adj Close,Volume\n"
        "2024-05-06,101,103,100,102,102,1000\n"
        "2024-05-03,100,101,99,100.5,100.5,900\n"
        "2024-05-04,100,101,99,100.7,100.7,900\n"
        "2024-05-07,102,104,101,,103,1100\n"
        "2024-05-08,103,105,102,104,104,\n"
    )
    bars = CsvBarSource(path).fetch_bars("spy")

    assert [bar.date for bar in bars] == [date(2024, 5, 3), date(2024, 5, 6), date(2024, 5, 8)]
    assert bars[1].close == 102.0
    assert bars[2].volume == 0.0


def test_csv_source_requires_close_column(tmp_path) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("Date,Open\n2024-05-06,101\n")
    with pytest.raises(ValueError):
        CsvBarSource(path).fetch_bars("SPY")


def test_csv_source_rejects_files_without_rows(tmp_path) -> None:
    path = tmp_path / "weekend.csv"
    path.write_text("Date,Close\n2024-05-04,100\n")
    with pytest.raises(ValueError):
        CsvBarSource(path).fetch_bars("SPY")


def test_ensure_chronological_sorts_bars() -> None:
    later = Bar(date(2024, 5, 7), 1.0, 1.0, 1.0, 1.0, 0.0, 1.0)
    earlier = Bar(date(2024, 5, 6), 1.0, 1.0, 1.0, 1.0, 0.0, 1.0)
    assert ensure_chronological([later, earlier]) == [earlier, later]
