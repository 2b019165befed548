#!/usr/bin/env python3
"""CLI entrypoint for the portfolio simulator.

Usage::

    python run_portfolio.py
    python run_portfolio.py --config config/example.yaml
    python run_portfolio.py --data-dir my_portfolio/ --seed 42

Builds a session from the (optional) YAML configuration, restores any state
saved under the data directory, then runs the interactive menu. Choosing
"Save & Exit" (or closing stdin) writes the state back.
"""

from __future__ import annotations

import argparse
import logging
import sys

from models.config import SimulatorConfig
from simulation.menu import MenuLoop
from simulation.session import PortfolioSession


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the interactive portfolio simulator.",
    )
    parser.add_argument(
        "--config",
        default=None,
        type=str,
        help="Path to a YAML configuration file (default: built-in defaults).",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        type=str,
        help="Directory for saved state (overrides persistence.data_dir).",
    )
    parser.add_argument(
        "--seed",
        default=None,
        type=int,
        help="Seed for the price random walk (overrides market.seed).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser.parse_args()


def _setup_logging(level: str) -> None:
    """Configure root logger with a clean format.

    Logs go to stderr so they do not interleave with the menu on stdout.
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _load_config(args: argparse.Namespace) -> SimulatorConfig:
    config = SimulatorConfig.from_yaml(args.config) if args.config else SimulatorConfig()
    if args.data_dir is not None:
        config.persistence.data_dir = args.data_dir
    if args.seed is not None:
        config.market.seed = args.seed
    return config


def main() -> None:
    args = _parse_args()
    _setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    if args.config:
        logger.info("Loading config from '%s'...", args.config)
    config = _load_config(args)

    session = PortfolioSession(config)
    session.start()
    MenuLoop(session).run()


if __name__ == "__main__":
    main()
