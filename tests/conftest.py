"""Shared test fixtures for the indicator_engine test suite."""
from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from indicator_engine.data.timeseries import TimeSeries


def _dates(n: int, start: str = "2024-01-01"):
    return [ts.date() for ts in pd.bdate_range(start, periods=n)]


# ── Data fixtures ────────────────────────────────────────────────────


@pytest.fixture
def make_series():
    """Factory: build a business-day TimeSeries from a list of values."""
    def _make(values, start: str = "2024-01-01") -> TimeSeries:
        values = list(values)
        return TimeSeries(_dates(len(values), start), values)
    return _make


@pytest.fixture
def random_walk_log_prices() -> TimeSeries:
    """250 business days of a log-price random walk starting at log(100)."""
    rng = np.random.default_rng(42)
    n = 250
    log_price = math.log(100.0) + np.cumsum(rng.normal(0.0003, 0.015, n))
    return TimeSeries(_dates(n), log_price)


@pytest.fixture
def trending_log_prices() -> TimeSeries:
    """20 trading days with a constant daily log gain of 0.01."""
    n = 20
    return TimeSeries(_dates(n), [math.log(100.0) + 0.01 * i for i in range(n)])


@pytest.fixture
def price_csv(tmp_path):
    """Write a two-symbol ``date,symbol,close`` CSV and return its path."""
    n = 30
    dates = pd.bdate_range("2024-01-01", periods=n)
    rng = np.random.default_rng(7)
    up = 100.0 * np.exp(0.01 * np.arange(n))
    noisy = 50.0 * np.exp(np.cumsum(rng.normal(0.0, 0.02, n)))
    rows = []
    for d, c in zip(dates, up):
        rows.append({"date": d.strftime("%Y-%m-%d"), "symbol": "UPTR", "close": c})
    for d, c in zip(dates, noisy):
        rows.append({"date": d.strftime("%Y-%m-%d"), "symbol": "NOIS", "close": c})
    path = tmp_path / "prices.csv"
    pd.DataFrame(rows).sample(frac=1.0, random_state=3).to_csv(path, index=False)
    return path
