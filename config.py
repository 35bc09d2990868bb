"""
Central configuration for the indicator engine.

Backward-compatible flat-constant interface.  All values are derived from
the structured config singleton in ``config_structured.py`` so there is a
single source of truth.

Config Status Legend
====================
  ACTIVE      - Imported and used by running code.  Changing the value
                affects live behaviour.
  PLACEHOLDER - Defined for future use.

Search for ``# STATUS:`` to locate all annotations.
"""
from pathlib import Path

from .config_structured import get_config as _get_config

_cfg = _get_config()

# ── Paths ──────────────────────────────────────────────────────────────
ROOT_DIR = Path(__file__).parent                  # STATUS: ACTIVE - base path for config_data/
INDICATOR_CONFIG_PATH = _cfg.indicators.config_path  # STATUS: ACTIVE - indicators/indicator_config.py default YAML

# ── Indicators ─────────────────────────────────────────────────────────
RSI_DEFAULT_PERIOD = _cfg.indicators.rsi_period   # STATUS: ACTIVE - indicators/rsi.py, indicators/factory.py
RSI_NEUTRAL_VALUE = _cfg.indicators.rsi_neutral_value  # STATUS: ACTIVE - indicators/rsi.py fill for undefined RSI
SHIFTS_FILL_VALUE = _cfg.indicators.shifts_fill_value  # STATUS: ACTIVE - indicators/shifts.py fill for missing look-back
DEFAULT_INDICATOR_SPECS = list(_cfg.indicators.default_specs)  # STATUS: ACTIVE - run_indicators.py when no --indicators/--config

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = _cfg.logging.level                    # STATUS: ACTIVE - run_indicators.py default --log-level
LOG_STRUCTURED = _cfg.logging.structured          # STATUS: ACTIVE - utils/logging.py JSON formatter toggle


def validate_config() -> list:
    """Check config for common misconfigurations.

    Returns a list of dicts: [{"level": "WARNING"|"ERROR", "message": str}].
    Called by ``run_indicators.py`` on startup.
    """
    import math

    issues = []

    # 1. RSI period sanity
    if isinstance(RSI_DEFAULT_PERIOD, bool) or not isinstance(RSI_DEFAULT_PERIOD, int) or RSI_DEFAULT_PERIOD < 1:
        issues.append({
            "level": "ERROR",
            "message": f"RSI_DEFAULT_PERIOD must be a positive integer, got {RSI_DEFAULT_PERIOD!r}.",
        })
    elif RSI_DEFAULT_PERIOD < 2:
        issues.append({
            "level": "WARNING",
            "message": (
                f"RSI_DEFAULT_PERIOD={RSI_DEFAULT_PERIOD} averages a single price change; "
                "RSI collapses to 0/100/50."
            ),
        })

    # 2. RSI neutral fill must sit on the RSI scale
    if not isinstance(RSI_NEUTRAL_VALUE, (int, float)) or not 0.0 <= RSI_NEUTRAL_VALUE <= 100.0:
        issues.append({
            "level": "ERROR",
            "message": f"RSI_NEUTRAL_VALUE must lie in [0, 100], got {RSI_NEUTRAL_VALUE!r}.",
        })
    elif RSI_NEUTRAL_VALUE != 50.0:
        issues.append({
            "level": "WARNING",
            "message": (
                f"RSI_NEUTRAL_VALUE={RSI_NEUTRAL_VALUE} differs from the RSI midpoint 50.0; "
                "leading RSI values will be biased."
            ),
        })

    # 3. Shifts fill must be finite (output never contains missing/inf fills)
    if not isinstance(SHIFTS_FILL_VALUE, (int, float)) or not math.isfinite(SHIFTS_FILL_VALUE):
        issues.append({
            "level": "ERROR",
            "message": f"SHIFTS_FILL_VALUE must be a finite number, got {SHIFTS_FILL_VALUE!r}.",
        })

    # 4. Indicator YAML present
    if not Path(INDICATOR_CONFIG_PATH).exists():
        issues.append({
            "level": "WARNING",
            "message": (
                f"INDICATOR_CONFIG_PATH ({INDICATOR_CONFIG_PATH}) does not exist. "
                "Pass --indicators or --config explicitly."
            ),
        })

    # 5. Default specs
    if not DEFAULT_INDICATOR_SPECS:
        issues.append({
            "level": "WARNING",
            "message": "DEFAULT_INDICATOR_SPECS is empty; no indicators run without --indicators.",
        })

    return issues
