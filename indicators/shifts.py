"""Look-back return (log-price difference) indicator."""
from ..config import SHIFTS_FILL_VALUE
from ..data.timeseries import TimeSeries
from .base import Indicator, validate_period


class ShiftsIndicator(Indicator):
    """Return over ``period`` days: ``log_price[t] - log_price[t - period]``.

    Positions without a valid look-back are filled with 0.0 (no return).
    """

    def __init__(self, period: int):
        self.period = validate_period(period, "period")

    @property
    def name(self) -> str:
        """Return the indicator's output column name."""
        return f"Shifts_{self.period}"

    @property
    def min_window_size(self) -> int:
        return self.period + 1

    def _returns(self, log_price: TimeSeries) -> TimeSeries:
        return (log_price - log_price.shift(self.period)).fill_missing(SHIFTS_FILL_VALUE)

    def get_training(self, log_price: TimeSeries) -> TimeSeries:
        return self._returns(log_price)

    def get_last(self, log_price: TimeSeries) -> float:
        return self._returns(log_price.tail(self.min_window_size)).last(default=SHIFTS_FILL_VALUE)
