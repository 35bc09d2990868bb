"""
Data subpackage - time-series primitives and observation assembly.
"""
from .timeseries import TimeSeries
from .observations import (
    StockObservation,
    build_log_price_series,
    group_log_prices,
    observations_from_frame,
    observations_to_frame,
)

__all__ = [
    "TimeSeries",
    "StockObservation",
    "build_log_price_series",
    "group_log_prices",
    "observations_from_frame",
    "observations_to_frame",
]
