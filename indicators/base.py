"""
Indicator contract shared by every indicator policy.

Indicators are built once (usually through ``indicators.factory``) and then
applied to any number of log-price series.  They hold only their integer
parameters, so instances are stateless, picklable and safe to share across
threads.
"""
from abc import ABC, abstractmethod

import numpy as np

from ..data.timeseries import TimeSeries


class ConfigurationError(Exception):
    """Raised when an indicator name or its parameters are unknown or invalid."""


def validate_period(value, label: str) -> int:
    """Return *value* as a window length, raising ConfigurationError if invalid."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ConfigurationError(f"{label} must be a positive integer, got {value!r}")
    return int(value)


class Indicator(ABC):
    """Base class for all indicators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the indicator's output column name."""
        pass

    @property
    @abstractmethod
    def min_window_size(self) -> int:
        """Number of trailing observations needed for a defined latest value."""
        pass

    @abstractmethod
    def get_training(self, log_price: TimeSeries) -> TimeSeries:
        """Indicator value for every date of *log_price* (same index, no NaN)."""
        pass

    @abstractmethod
    def get_last(self, log_price: TimeSeries) -> float:
        """Indicator value at the most recent date of *log_price*."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(sorted(vars(self).items()))))
