"""
Feature subpackage - indicator engine over log-price series.
"""
from .pipeline import IndicatorEngine

__all__ = ["IndicatorEngine"]
