"""
Indicator set configuration - named indicator specs loaded from YAML.

Loads ``config_data/indicators.yaml`` (or a given path), validates the
specs and builds the indicators through the factory::

    indicators:
      - name: rsi
      - name: shifts
        period: 5
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..config import INDICATOR_CONFIG_PATH
from .base import ConfigurationError, Indicator
from .factory import indicators_from

logger = logging.getLogger(__name__)


class IndicatorSetConfig:
    """Load, validate, and build an indicator set from YAML config.

    Parameters
    ----------
    path : str or Path, optional
        Path to the YAML file.  Defaults to ``INDICATOR_CONFIG_PATH``
        (``<package>/config_data/indicators.yaml``).

    Raises
    ------
    ConfigurationError
        If the file is missing, unparsable, fails schema validation, or
        names an indicator that cannot be built.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path is not None else Path(INDICATOR_CONFIG_PATH)
        if not self._path.exists():
            raise ConfigurationError(
                f"Indicator config not found at {self._path}. "
                "Create config_data/indicators.yaml or provide a valid path."
            )
        self._raw = self._load_yaml()
        self._specs = self._validate()
        # Build once up front so bad names/periods fail at load time.
        self._indicators = indicators_from(self._specs)
        self._check_unique_names()
        logger.info(
            "Loaded %d indicators from %s", len(self._indicators), self._path,
        )

    # ── Loading and validation ────────────────────────────────────────────

    def _load_yaml(self) -> dict:
        try:
            with open(self._path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {self._path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self._path.name} must be a YAML mapping at the top level."
            )
        return data

    def _validate(self) -> List[Dict[str, Any]]:
        if "indicators" not in self._raw:
            raise ConfigurationError(
                f"{self._path.name} missing required section: 'indicators'"
            )
        entries = self._raw["indicators"]
        if not isinstance(entries, list) or not entries:
            raise ConfigurationError("'indicators' must be a non-empty list of indicator specs")

        specs: List[Dict[str, Any]] = []
        for i, entry in enumerate(entries):
            if isinstance(entry, str):
                entry = {"name": entry}
            if not isinstance(entry, dict):
                raise ConfigurationError(
                    f"Indicator entry {i} must be a name or a mapping, got {type(entry).__name__}"
                )
            if "name" not in entry:
                raise ConfigurationError(f"Indicator entry {i} missing required key: 'name'")
            specs.append(dict(entry))
        return specs

    def _check_unique_names(self) -> None:
        seen = set()
        for indicator in self._indicators:
            if indicator.name in seen:
                raise ConfigurationError(
                    f"Indicator '{indicator.name}' is configured more than once"
                )
            seen.add(indicator.name)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._path

    @property
    def specs(self) -> List[Dict[str, Any]]:
        """Return a copy of the validated indicator specs."""
        return [dict(s) for s in self._specs]

    def build(self) -> List[Indicator]:
        """Return the configured indicators (fresh list, shared stateless instances)."""
        return list(self._indicators)
