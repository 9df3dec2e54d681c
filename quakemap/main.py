"""Desktop Entry Point.

This module provides the command-line entry point. It's a thin wrapper
that loads configuration, builds the application and opens the window.
"""

import argparse
import logging
import os
import sys

from quakemap.app import EarthquakeCityMap
from quakemap.core.config import validate_config
from quakemap.shell.config_loader import load_config
from quakemap.shell.feature_loader import LoadError


logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Interactive map of recent earthquakes and major cities",
    )
    parser.add_argument(
        "--config",
        help="Path to config file (default: $CONFIG_PATH or config/config.yaml)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use local tiles and the bundled earthquake snapshot",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: $LOG_LEVEL or the config value)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the map until its window is closed.

    Returns:
        Process exit code
    """
    args = _parse_args(argv)

    # Log config loading itself at the requested level
    _configure_logging(args.log_level or os.environ.get("LOG_LEVEL", "INFO"))

    config = load_config(args.config)
    if args.offline:
        config.offline = True
    if args.log_level:
        config.log_level = args.log_level.upper()
    logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("Config %s: %s", error.field, error.message)
        return 1

    app = EarthquakeCityMap(config)
    try:
        app.setup()
    except LoadError as e:
        logger.error("Failed to load map data: %s", e)
        return 1

    # Imported late so headless setups never touch a GUI backend
    from quakemap.shell.window import MapWindow

    MapWindow(app, config.window).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
