"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, SourceConfig, ...) are defined in quakemap/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakemap.core.config import (
    BasemapConfig,
    Config,
    OverlayConfig,
    SourceConfig,
    Viewport,
    WindowConfig,
)


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"

_TRUTHY = {"1", "true", "yes", "on"}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_bool(value: Any) -> bool:
    """Parse a YAML or environment boolean."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _parse_viewport(data: dict[str, Any], default: Viewport) -> Viewport:
    """Parse a viewport, falling back to ``default`` per key."""
    return Viewport(
        x=int(data.get("x", default.x)),
        y=int(data.get("y", default.y)),
        width=int(data.get("width", default.width)),
        height=int(data.get("height", default.height)),
    )


def _parse_sources(data: dict[str, Any]) -> SourceConfig:
    """Parse feature sources from config data."""
    defaults = SourceConfig()
    return SourceConfig(
        earthquakes=_resolve_value(data.get("earthquakes", defaults.earthquakes)),
        earthquakes_offline=_resolve_value(
            data.get("earthquakes_offline", defaults.earthquakes_offline)
        ),
        cities=_resolve_value(data.get("cities", defaults.cities)),
        countries=_resolve_value(data.get("countries", defaults.countries)),
    )


def _parse_basemap(data: dict[str, Any]) -> BasemapConfig:
    """Parse basemap settings from config data."""
    defaults = BasemapConfig()
    return BasemapConfig(
        tile_url=_resolve_value(data.get("tile_url", defaults.tile_url)),
        mbtiles_path=_resolve_value(data.get("mbtiles_path", defaults.mbtiles_path)),
        zoom=int(data.get("zoom", defaults.zoom)),
        center_latitude=float(data.get("center_latitude", defaults.center_latitude)),
        center_longitude=float(data.get("center_longitude", defaults.center_longitude)),
        viewport=_parse_viewport(data.get("viewport", {}), defaults.viewport),
        offline_viewport=_parse_viewport(
            data.get("offline_viewport", {}), defaults.offline_viewport
        ),
    )


def _parse_window(data: dict[str, Any]) -> WindowConfig:
    """Parse window settings from config data."""
    defaults = WindowConfig()
    return WindowConfig(
        width=int(data.get("width", defaults.width)),
        height=int(data.get("height", defaults.height)),
        frame_interval_ms=int(data.get("frame_interval_ms", defaults.frame_interval_ms)),
        title=str(data.get("title", defaults.title)),
    )


def _parse_overlay(data: dict[str, Any]) -> OverlayConfig:
    """Parse legend and menu origins from config data."""
    defaults = OverlayConfig()
    legend = data.get("legend", {})
    menu = data.get("menu", {})
    return OverlayConfig(
        legend_x=int(legend.get("x", defaults.legend_x)),
        legend_y=int(legend.get("y", defaults.legend_y)),
        menu_x=int(menu.get("x", defaults.menu_x)),
        menu_y=int(menu.get("y", defaults.menu_y)),
    )


def _apply_env_overrides(config: Config) -> Config:
    """Apply QUAKEMAP_OFFLINE and LOG_LEVEL from the environment."""
    offline = os.environ.get("QUAKEMAP_OFFLINE")
    if offline is not None:
        config.offline = _parse_bool(offline)

    log_level = os.environ.get("LOG_LEVEL")
    if log_level:
        config.log_level = log_level.upper()

    return config


def load_config_from_dict(data: dict[str, Any], base_dir: str | Path = ".") -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary
        base_dir: Directory relative source paths are resolved against

    Returns:
        Parsed Config object
    """
    config = Config(
        offline=_parse_bool(data.get("offline", False)),
        log_level=str(data.get("log_level", "INFO")).upper(),
        largest_quakes_to_print=int(data.get("largest_quakes_to_print", 100)),
        base_dir=str(base_dir),
        sources=_parse_sources(data.get("sources", {})),
        basemap=_parse_basemap(data.get("basemap", {})),
        window=_parse_window(data.get("window", {})),
        overlay=_parse_overlay(data.get("overlay", {})),
    )
    return _apply_env_overrides(config)


def _base_dir_for(path: Path) -> Path:
    """Directory that relative source paths in a config file refer to."""
    config_dir = path.resolve().parent
    if config_dir.name == "config":
        return config_dir.parent
    return config_dir


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O. Relative source paths in the file are
    resolved against the project root when the file lives in a
    ``config/`` directory, otherwise against the file's own directory.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)
    base_dir = _base_dir_for(path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return _apply_env_overrides(Config(base_dir=str(base_dir)))

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return _apply_env_overrides(Config(base_dir=str(base_dir)))

    config = load_config_from_dict(data, base_dir=base_dir)

    logger.info(
        "Loaded config: offline=%s, quakes from %s",
        config.offline,
        config.earthquakes_source,
    )

    return config
