"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Feature sources (files and HTTP)
- Basemap tiles (tile server or MBTiles)
- Configuration loading (environment/files)
- The matplotlib window and canvas

Keep this layer thin and simple. All map logic should be in core.
"""

from quakemap.shell.basemap import MercatorBasemap, create_basemap
from quakemap.shell.config_loader import load_config, Config
from quakemap.shell.feature_loader import FeatureLoader, LoadError
from quakemap.shell.polygon_hit_test import ShapelyHitTest

__all__ = [
    "MercatorBasemap",
    "create_basemap",
    "load_config",
    "Config",
    "FeatureLoader",
    "LoadError",
    "ShapelyHitTest",
]
