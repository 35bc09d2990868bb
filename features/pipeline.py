"""
Feature Pipeline - runs a set of indicators over log-price series.

``IndicatorEngine`` turns one instrument's log-price series into a training
frame (one column per indicator, one row per date) or into the latest value
of every indicator, and repeats the latter across a universe of symbols.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Sequence

import numpy as np
import pandas as pd

from ..data.timeseries import TimeSeries
from ..indicators.base import ConfigurationError, Indicator
from ..indicators.factory import IndicatorSpec, indicators_from

logger = logging.getLogger(__name__)


class IndicatorEngine:
    """Apply a fixed list of indicators to log-price series.

    Parameters
    ----------
    indicators : sequence of Indicator
        Indicators to run.  Their names become output column names and must
        be unique.
    """

    def __init__(self, indicators: Sequence[Indicator]):
        self._indicators: List[Indicator] = list(indicators)
        names = [ind.name for ind in self._indicators]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ConfigurationError(f"Duplicate indicator names: {', '.join(dupes)}")

    @classmethod
    def from_specs(cls, specs: Iterable[IndicatorSpec]) -> "IndicatorEngine":
        """Build an engine from factory specs (names, pairs or mappings)."""
        return cls(indicators_from(specs))

    @property
    def indicators(self) -> List[Indicator]:
        return list(self._indicators)

    @property
    def names(self) -> List[str]:
        return [ind.name for ind in self._indicators]

    @property
    def min_window_size(self) -> int:
        """History needed before every indicator's latest value is defined."""
        return max((ind.min_window_size for ind in self._indicators), default=0)

    def compute_training(self, log_price: TimeSeries) -> pd.DataFrame:
        """
        Compute every indicator's training series.

        Args:
            log_price: log-price series for one instrument

        Returns:
            DataFrame with one column per indicator (same index as input)
        """
        features = pd.DataFrame(index=pd.Index(list(log_price.index), name="date"))
        for ind in self._indicators:
            features[ind.name] = np.asarray(ind.get_training(log_price).values)
        return features

    def compute_latest(self, log_price: TimeSeries) -> Dict[str, float]:
        """Latest value of every indicator, each over its own trailing window."""
        if len(log_price) < self.min_window_size:
            logger.warning(
                "Series has %d observations, fewer than the %d required; "
                "latest values fall back to indicator fill values",
                len(log_price), self.min_window_size,
            )
        window = log_price.tail(self.min_window_size)
        return {ind.name: float(ind.get_last(window)) for ind in self._indicators}

    def compute_universe_latest(self, series_by_symbol: Mapping[str, TimeSeries]) -> pd.DataFrame:
        """Latest indicator values for many symbols, one row per symbol."""
        rows = {}
        for symbol, log_price in series_by_symbol.items():
            rows[symbol] = self.compute_latest(log_price)
        frame = pd.DataFrame.from_dict(rows, orient="index", columns=self.names)
        frame.index.name = "symbol"
        logger.info(
            "Computed %d indicators for %d symbols", len(self._indicators), len(rows),
        )
        return frame
