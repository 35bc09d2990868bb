"""
Indicator factory: resolve indicator names plus parameters to instances.

The set of indicator types is closed.  Adding an indicator means adding a
class and an entry in ``_INDICATOR_TYPES``; parameters always travel through
an explicit mapping so parameterised indicators without defaults (``shifts``)
can be built.

Usage::

    create_indicator("rsi")                       # RSIIndicator(14)
    create_indicator("shifts", {"period": 5})     # ShiftsIndicator(5)
    indicators_from(["rsi", ("shifts", {"period": 1}), {"name": "rsi", "period": 9}])
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .base import ConfigurationError, Indicator
from .rsi import RSIIndicator
from .shifts import ShiftsIndicator

logger = logging.getLogger(__name__)

IndicatorSpec = Union[str, Tuple[str, Mapping[str, Any]], Mapping[str, Any]]

# name -> (class, constructor keyword for "period", period required)
_INDICATOR_TYPES: Dict[str, Tuple[type, str, bool]] = {
    "rsi": (RSIIndicator, "rsi_period", False),
    "shifts": (ShiftsIndicator, "period", True),
}


def get_all_indicators() -> Dict[str, type]:
    """Return dictionary of all indicator classes keyed by factory name."""
    return {name: entry[0] for name, entry in _INDICATOR_TYPES.items()}


def create_indicator(name: str, params: Optional[Mapping[str, Any]] = None) -> Indicator:
    """Build one indicator from its name and parameter map.

    Args:
        name: Indicator name (case-insensitive), e.g. ``"rsi"`` or ``"shifts"``.
        params: Optional mapping; the only recognised key is ``"period"``.

    Returns:
        The constructed indicator.

    Raises:
        ConfigurationError: If the name is unknown, a required parameter is
            missing, an unknown parameter is given, or the period is invalid.
    """
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"Indicator name must be a non-empty string, got {name!r}")
    key = name.strip().lower()
    entry = _INDICATOR_TYPES.get(key)
    if entry is None:
        available = ", ".join(sorted(_INDICATOR_TYPES))
        raise ConfigurationError(f"Unknown indicator '{name}'. Available: {available}")
    cls, period_kw, period_required = entry

    params = dict(params or {})
    unknown = sorted(set(params) - {"period"})
    if unknown:
        raise ConfigurationError(
            f"Unknown parameter(s) for indicator '{key}': {', '.join(unknown)}"
        )

    kwargs: Dict[str, Any] = {}
    if "period" in params and params["period"] is not None:
        kwargs[period_kw] = params["period"]
    elif period_required:
        raise ConfigurationError(
            f"Indicator '{key}' requires an explicit 'period' parameter"
        )

    indicator = cls(**kwargs)
    logger.debug("Created indicator %s from spec %r %r", indicator.name, key, params)
    return indicator


def _split_spec(spec: IndicatorSpec) -> Tuple[str, Mapping[str, Any]]:
    if isinstance(spec, str):
        return spec, {}
    if isinstance(spec, Mapping):
        if "name" not in spec:
            raise ConfigurationError(f"Indicator spec is missing 'name': {dict(spec)!r}")
        params = {k: v for k, v in spec.items() if k != "name"}
        return spec["name"], params
    if isinstance(spec, (tuple, list)) and len(spec) == 2 and isinstance(spec[1], Mapping):
        return spec[0], spec[1]
    raise ConfigurationError(
        f"Indicator spec must be a name, a (name, params) pair or a mapping, got {spec!r}"
    )


def indicators_from(specs: Iterable[IndicatorSpec]) -> List[Indicator]:
    """Build indicators, in order, from a sequence of specs.

    Each spec is a name string, a ``(name, params)`` pair, or a mapping with a
    ``"name"`` key and parameter keys.
    """
    if isinstance(specs, (str, Mapping)):
        specs = [specs]
    return [create_indicator(*_split_spec(spec)) for spec in specs]


def parse_indicator_arg(text: str) -> Tuple[str, Dict[str, Any]]:
    """Parse a command-line spec such as ``rsi``, ``rsi:10`` or ``shifts:5``."""
    name, sep, period = text.partition(":")
    if not sep:
        return name, {}
    try:
        return name, {"period": int(period)}
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid period in indicator spec '{text}': expected an integer"
        ) from e
