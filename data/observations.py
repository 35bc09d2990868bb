"""
Closing-price observations and assembly of per-instrument log-price series.

Observations arrive unordered and possibly mixed across instruments (one row
per date/symbol).  These helpers group them, order them by date and take the
natural log of the close so indicators see additive returns.
"""
from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

from .timeseries import TimeSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockObservation:
    """One closing price for one instrument on one date."""
    date: date
    symbol: str
    close: float

    def __post_init__(self):
        if not isinstance(self.close, numbers.Real) or isinstance(self.close, bool):
            raise ValueError(f"close must be numeric, got {type(self.close).__name__}")
        if not math.isfinite(self.close) or self.close <= 0:
            raise ValueError(
                f"close for {self.symbol} on {self.date} must be a positive finite "
                f"number to take its log, got {self.close}"
            )


def observations_to_frame(observations: Iterable[StockObservation]) -> pd.DataFrame:
    """Flatten observations into a ``date, symbol, close`` DataFrame.

    Duplicate ``(date, symbol)`` rows keep the last occurrence.
    """
    rows = [(o.date, str(o.symbol).upper(), float(o.close)) for o in observations]
    frame = pd.DataFrame(rows, columns=["date", "symbol", "close"])
    dupes = frame.duplicated(subset=["date", "symbol"], keep="last")
    if dupes.any():
        logger.warning(
            "Dropping %d duplicate date/symbol observations (keeping the last)",
            int(dupes.sum()),
        )
        frame = frame.loc[~dupes]
    return frame.sort_values(["symbol", "date"]).reset_index(drop=True)


def _log_series(frame: pd.DataFrame) -> TimeSeries:
    return TimeSeries(list(frame["date"]), np.log(frame["close"].to_numpy(dtype=np.float64)))


def build_log_price_series(
    observations: Iterable[StockObservation],
    symbol: str,
) -> TimeSeries:
    """Log-price series for *symbol*, ordered by date.

    Returns an empty series when no observation matches *symbol*.
    """
    frame = observations_to_frame(observations)
    subset = frame.loc[frame["symbol"] == str(symbol).upper()]
    return _log_series(subset)


def group_log_prices(observations: Iterable[StockObservation]) -> Dict[str, TimeSeries]:
    """Split observations into one log-price series per symbol."""
    frame = observations_to_frame(observations)
    series: Dict[str, TimeSeries] = {}
    for symbol, group in frame.groupby("symbol", sort=True):
        series[str(symbol)] = _log_series(group)
    logger.debug("Assembled log-price series for %d symbols", len(series))
    return series


def observations_from_frame(frame: pd.DataFrame) -> List[StockObservation]:
    """Build observations from a ``date, symbol, close`` DataFrame (e.g. a CSV)."""
    missing = {"date", "symbol", "close"} - {str(c).lower() for c in frame.columns}
    if missing:
        raise ValueError(f"observation frame is missing columns: {sorted(missing)}")
    frame = frame.rename(columns={c: str(c).lower() for c in frame.columns})
    dates = pd.to_datetime(frame["date"]).dt.date
    return [
        StockObservation(date=d, symbol=str(s), close=float(c))
        for d, s, c in zip(dates, frame["symbol"], frame["close"])
    ]
