"""
Indicator layer - indicator contract, built-in indicators and factory.

Built-in indicators:
    - RSIIndicator: relative strength index with neutral (50.0) fill.
    - ShiftsIndicator: look-back log return with zero fill.
"""
from .base import ConfigurationError, Indicator
from .rsi import RSIIndicator
from .shifts import ShiftsIndicator
from .factory import create_indicator, get_all_indicators, indicators_from, parse_indicator_arg
from .indicator_config import IndicatorSetConfig

__all__ = [
    "ConfigurationError",
    "Indicator",
    "RSIIndicator",
    "ShiftsIndicator",
    "create_indicator",
    "get_all_indicators",
    "indicators_from",
    "parse_indicator_arg",
    "IndicatorSetConfig",
]
