"""
Relative Strength Index over log prices.

RSI compares the average size of recent up moves with recent down moves and
maps the ratio onto a 0-100 scale:

    RS  = mean(U, n) / mean(D, n)
    RSI = 100 - 100 / (1 + RS)

where U is the positive part and D the negative part of each daily change
and n is ``rsi_period``.  D stays signed (<= 0), so the division follows
IEEE-754 for the sign/zero cases instead of being guarded: an all-up window
gives RS = +inf and RSI = 100, a flat window gives 0/0 = NaN which the fill
step turns into the neutral 50.
"""
import numpy as np

from ..config import RSI_DEFAULT_PERIOD, RSI_NEUTRAL_VALUE
from ..data.timeseries import TimeSeries
from .base import Indicator, validate_period


class RSIIndicator(Indicator):
    """Relative Strength Index with neutral fill for undefined positions.

    Parameters
    ----------
    rsi_period : int, default 14
        Number of daily price changes averaged by each rolling window.
    """

    def __init__(self, rsi_period: int = RSI_DEFAULT_PERIOD):
        self.rsi_period = validate_period(rsi_period, "rsi_period")

    @property
    def name(self) -> str:
        """Return the indicator's output column name."""
        return f"RSI_{self.rsi_period}"

    @property
    def min_window_size(self) -> int:
        return self.rsi_period + 1

    def _rsi(self, log_price: TimeSeries) -> TimeSeries:
        # First day has no prior close: treated as no movement.
        delta = (log_price - log_price.shift(1)).fill_missing(0.0)

        up = delta.map_values(lambda v: np.where(v > 0, v, 0.0))
        down = delta.map_values(lambda v: np.where(v < 0, v, 0.0))

        # Windows slide over real price changes only, so the first average
        # lands on position rsi_period (min_window_size observations).
        up_avg = up.slice(1).rolling(self.rsi_period, np.mean)
        down_avg = down.slice(1).rolling(self.rsi_period, np.mean)

        rs = up_avg / down_avg
        return rs.map_values(lambda r: 100.0 - 100.0 / (1.0 + r))

    def get_training(self, log_price: TimeSeries) -> TimeSeries:
        """RSI for every date, leading and 0/0 positions filled with 50.0."""
        return self._rsi(log_price).reindex(log_price.index).fill_missing(RSI_NEUTRAL_VALUE)

    def get_last(self, log_price: TimeSeries) -> float:
        """RSI at the final date, computed over the trailing window only."""
        window = log_price.tail(self.min_window_size)
        return self.get_training(window).last(default=RSI_NEUTRAL_VALUE)
