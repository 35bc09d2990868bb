#!/usr/bin/env python3
"""
Compute the latest indicator values for every symbol in a price CSV.

The CSV needs ``date``, ``symbol`` and ``close`` columns (one row per
symbol per date).  Closes are log-transformed before the indicators run.

Usage:
    python3 -m indicator_engine.run_indicators --csv prices.csv
    python3 -m indicator_engine.run_indicators --csv prices.csv --indicators rsi shifts:5
    python3 -m indicator_engine.run_indicators --csv prices.csv --config            # config_data/indicators.yaml
    python3 -m indicator_engine.run_indicators --csv prices.csv --config my.yaml --output latest.csv
    python3 -m indicator_engine.run_indicators --csv prices.csv --training AAPL     # full training frame
"""
import argparse
import sys
from typing import List, Optional

import pandas as pd

from indicator_engine.config import (
    DEFAULT_INDICATOR_SPECS, INDICATOR_CONFIG_PATH, LOG_LEVEL, LOG_STRUCTURED,
    validate_config,
)
from indicator_engine.data.observations import group_log_prices, observations_from_frame
from indicator_engine.features.pipeline import IndicatorEngine
from indicator_engine.indicators import (
    ConfigurationError, IndicatorSetConfig, indicators_from, parse_indicator_arg,
)
from indicator_engine.utils.logging import get_logger


def _build_engine(args: argparse.Namespace) -> IndicatorEngine:
    if args.config is not None:
        return IndicatorEngine(IndicatorSetConfig(args.config).build())
    specs = args.indicators or DEFAULT_INDICATOR_SPECS
    return IndicatorEngine(indicators_from([parse_indicator_arg(s) for s in specs]))


def main(argv: Optional[List[str]] = None) -> int:
    """Load observations, run the configured indicators and write the results."""
    parser = argparse.ArgumentParser(
        description="Compute technical indicators from closing prices",
    )
    parser.add_argument("--csv", required=True, help="CSV with date, symbol, close columns")
    spec_group = parser.add_mutually_exclusive_group()
    spec_group.add_argument(
        "--indicators", nargs="+",
        help="Indicator specs such as rsi, rsi:10, shifts:5 (default: config)",
    )
    spec_group.add_argument(
        "--config", nargs="?", const=str(INDICATOR_CONFIG_PATH), default=None,
        help="YAML indicator set (default path when given without a value)",
    )
    parser.add_argument("--symbols", nargs="+", help="Restrict to these symbols")
    parser.add_argument(
        "--training", metavar="SYMBOL",
        help="Write the full training frame for one symbol instead of latest values",
    )
    parser.add_argument("--output", help="Output CSV path (stdout when omitted)")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    args = parser.parse_args(argv)

    logger = get_logger("indicator_engine", level=args.log_level, structured=LOG_STRUCTURED)

    for issue in validate_config():
        if issue["level"] == "ERROR":
            logger.error(issue["message"])
        else:
            logger.warning(issue["message"])

    try:
        engine = _build_engine(args)
    except ConfigurationError as e:
        logger.error("Invalid indicator configuration: %s", e)
        return 2

    try:
        frame = pd.read_csv(args.csv)
        observations = observations_from_frame(frame)
    except (OSError, ValueError) as e:
        logger.error("Failed to load observations from %s: %s", args.csv, e)
        return 1

    series = group_log_prices(observations)
    if args.symbols:
        wanted = {s.upper() for s in args.symbols}
        series = {sym: s for sym, s in series.items() if sym in wanted}

    if args.training:
        symbol = args.training.upper()
        if symbol not in series:
            logger.error("Symbol %s not found in %s", symbol, args.csv)
            return 1
        result = engine.compute_training(series[symbol])
    else:
        result = engine.compute_universe_latest(series)

    logger.info(
        "Indicator run complete",
        extra={"metrics": {
            "symbols": len(series),
            "indicators": engine.names,
            "min_window_size": engine.min_window_size,
        }},
    )

    if args.output:
        result.to_csv(args.output)
    else:
        result.to_csv(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
