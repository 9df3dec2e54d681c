#!/usr/bin/env python3
"""Print the earthquakes nearest to a location without opening the map.

Loads the configured quake feed, ranks every quake by great-circle
distance to the given location and prints the same report the map
prints when a custom location is placed.

Usage:
    # Nearest quakes to Los Angeles from the live feed
    python scripts/nearest_quakes.py --lat 34.05 --lon -118.25

    # Same, from the bundled snapshot, top 10 only
    python scripts/nearest_quakes.py --lat 34.05 --lon -118.25 --offline --limit 10

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
"""

import argparse
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from quakemap.core.config import validate_coordinates
from quakemap.core.geo import Location
from quakemap.core.model import build_marker_model
from quakemap.core.nearest import format_distance_report, rank_by_distance
from quakemap.shell.config_loader import load_config
from quakemap.shell.feature_loader import FeatureLoader, LoadError
from quakemap.shell.polygon_hit_test import ShapelyHitTest

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Rank recent earthquakes by distance to a location",
    )
    parser.add_argument(
        "--lat",
        type=float,
        required=True,
        help="Latitude in degrees",
    )
    parser.add_argument(
        "--lon",
        type=float,
        required=True,
        help="Longitude in degrees",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to config file (default: $CONFIG_PATH or config/config.yaml)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use the bundled earthquake snapshot",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=0,
        help="Print only the nearest N earthquakes (default: all)",
    )
    args = parser.parse_args()

    errors = validate_coordinates(args.lat, args.lon, "location")
    if errors:
        for error in errors:
            logger.error("%s", error.message)
        return 1

    config = load_config(args.config)
    if args.offline:
        config.offline = True

    loader = FeatureLoader(base_dir=config.base_dir)
    try:
        features = loader.load_earthquakes(config.earthquakes_source)
    except LoadError as e:
        logger.error("Failed to load earthquakes: %s", e)
        return 1

    # Countries are not needed to rank by distance
    model = build_marker_model([], [], features, ShapelyHitTest())

    ranking = rank_by_distance(model.quakes, Location(args.lat, args.lon))
    if args.limit > 0:
        ranking = ranking[:args.limit]

    for line in format_distance_report(ranking):
        print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
