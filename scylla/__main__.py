"""Entry point: python -m scylla

Usage:
    python -m scylla                       # Read agents from ./c2.db
    python -m scylla --db path/to/c2.db    # Another agent store
    python -m scylla --demo                # Sample agents, no database
    python -m scylla --tick-ms 100         # Faster tick
"""

import argparse
import locale
import logging
import sys
from functools import partial
from pathlib import Path

from .app import run_dashboard
from .config import DashboardConfig, load_config
from .db import load_agents_or_empty
from .demo import generate_demo_agents
from .exceptions import ConfigError, TerminalError
from .screen import CursesTerminal

logger = logging.getLogger("scylla")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scylla agent dashboard")
    parser.add_argument("--config", type=Path,
                        help="Path to config.yaml (default: .scylla/config.yaml)")
    parser.add_argument("--db", type=Path,
                        help="Path to the SQLite agent store")
    parser.add_argument("--tick-ms", type=int,
                        help="Tick interval in milliseconds")
    parser.add_argument("--demo", action="store_true",
                        help="Run with sample agents instead of the database")
    parser.add_argument("--debug", action="store_true",
                        help="Log at DEBUG level")
    return parser


def resolve_config(args: argparse.Namespace) -> DashboardConfig:
    """Load the config file and apply command-line overrides."""
    config = load_config(args.config)
    if args.db is not None:
        config.db_path = args.db
    if args.tick_ms is not None:
        if args.tick_ms <= 0:
            raise ConfigError(f"--tick-ms must be > 0, got {args.tick_ms}")
        config.tick_ms = args.tick_ms
    if args.debug:
        config.log_level = "DEBUG"
    config.demo_mode = args.demo
    return config


def setup_logging(config: DashboardConfig) -> None:
    # The terminal belongs to the dashboard, so logs only go to a file
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(config.log_file),
        level=config.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(config)
    locale.setlocale(locale.LC_ALL, '')

    if config.demo_mode:
        source = generate_demo_agents
    else:
        source = partial(load_agents_or_empty, config.db_path)

    try:
        run_dashboard(CursesTerminal(), source,
                      tick_interval=config.tick_interval, margin=config.margin)
    except TerminalError as e:
        logger.exception("Terminal failure")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Dashboard crashed")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
