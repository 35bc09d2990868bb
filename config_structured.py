"""
Structured configuration for the indicator engine using typed dataclasses.

This is the AUTHORITATIVE source of truth for all configuration values.
``config.py`` imports from here for backward compatibility.

Each subsystem gets its own dataclass.

Usage:
    from indicator_engine.config_structured import get_config
    cfg = get_config()
    cfg.indicators.rsi_period      # 14
    cfg.logging.level              # "INFO"
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class IndicatorConfig:
    """Defaults and fill policy for the built-in indicators."""

    rsi_period: int = 14
    rsi_neutral_value: float = 50.0  # RSI midpoint used for undefined positions
    shifts_fill_value: float = 0.0   # "no return" for positions without look-back
    config_path: Path = Path(__file__).parent / "config_data" / "indicators.yaml"
    default_specs: List[str] = field(default_factory=lambda: ["rsi"])

    def __post_init__(self):
        if isinstance(self.config_path, str):
            self.config_path = Path(self.config_path)
        if isinstance(self.rsi_period, bool) or not isinstance(self.rsi_period, int) or self.rsi_period < 1:
            raise ValueError(f"rsi_period must be a positive integer, got {self.rsi_period}")


@dataclass
class LoggingConfig:
    """Logging configuration for entry points."""

    level: str = "INFO"
    structured: bool = True  # JSON lines via utils.logging.StructuredFormatter

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log level must be one of {', '.join(_VALID_LOG_LEVELS)}, got {self.level}"
            )


@dataclass
class SystemConfig:
    """Top-level configuration aggregating all subsystems."""

    indicators: IndicatorConfig = field(default_factory=IndicatorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ── Module-level singleton ──────────────────────────────────────────

_CONFIG: Optional[SystemConfig] = None


def get_config() -> SystemConfig:
    """Return the singleton SystemConfig instance.

    On first call, instantiates the default SystemConfig. Subsequent
    calls return the same instance so all callers share one source of
    truth.
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = SystemConfig()
    return _CONFIG
