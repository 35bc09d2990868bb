"""
Indicator engine - technical indicators over log-price time series.

Subpackages:
    data        TimeSeries primitives and observation assembly
    indicators  Indicator contract, RSI / Shifts indicators, factory
    features    IndicatorEngine (runs indicator sets over series)
    utils       Structured logging
"""
from .data.timeseries import TimeSeries
from .features.pipeline import IndicatorEngine
from .indicators import (
    ConfigurationError,
    Indicator,
    RSIIndicator,
    ShiftsIndicator,
    create_indicator,
    indicators_from,
)

__version__ = "0.1.0"

__all__ = [
    "TimeSeries",
    "IndicatorEngine",
    "ConfigurationError",
    "Indicator",
    "RSIIndicator",
    "ShiftsIndicator",
    "create_indicator",
    "indicators_from",
]
