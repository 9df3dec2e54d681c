"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from quakemap.core.overlay import menu_button_rect


USGS_ATOM_FEED = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/2.5_week.atom"
OSM_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
COUNTRIES_GEOJSON = (
    "https://raw.githubusercontent.com/johan/world.geo.json/master/countries.geo.json"
)

# staticmap treats zoom 0 as "auto"
MIN_ZOOM = 1
MAX_ZOOM = 19


@dataclass
class SourceConfig:
    """Where the features come from.

    Each value is a file path (relative to the config's directory) or an
    http(s) URL.

    Attributes:
        earthquakes: Live quake feed (Atom or GeoJSON)
        earthquakes_offline: Bundled feed snapshot used when offline
        cities: GeoJSON of major cities
        countries: GeoJSON of country polygons
    """
    earthquakes: str = USGS_ATOM_FEED
    earthquakes_offline: str = "data/2.5_week.atom"
    cities: str = "data/city-data.json"
    countries: str = COUNTRIES_GEOJSON


@dataclass
class Viewport:
    """Screen rectangle occupied by the map.

    Attributes:
        x: Left edge in pixels
        y: Top edge in pixels
        width: Width in pixels
        height: Height in pixels
    """
    x: int = 178
    y: int = 50
    width: int = 650
    height: int = 600


@dataclass
class BasemapConfig:
    """Basemap tiles and projection.

    Attributes:
        tile_url: Online tile URL template
        mbtiles_path: Local MBTiles store used when offline
        zoom: Tile zoom level
        center_latitude: Latitude at the viewport center
        center_longitude: Longitude at the viewport center
        viewport: Map rectangle when online
        offline_viewport: Map rectangle when offline
    """
    tile_url: str = OSM_TILE_URL
    mbtiles_path: str = "data/blankLight-1-3.mbtiles"
    zoom: int = 2
    center_latitude: float = 20.0
    center_longitude: float = 0.0
    viewport: Viewport = field(default_factory=Viewport)
    offline_viewport: Viewport = field(default_factory=lambda: Viewport(x=100))


@dataclass
class WindowConfig:
    """Host window.

    Attributes:
        width: Window width in pixels
        height: Window height in pixels
        frame_interval_ms: Delay between frames
        title: Window title
    """
    width: int = 900
    height: int = 700
    frame_interval_ms: int = 50
    title: str = "Earthquake City Map"


@dataclass
class OverlayConfig:
    """Top-left corners of the legend and the menu panel."""
    legend_x: int = 25
    legend_y: int = 50
    menu_x: int = 25
    menu_y: int = 300


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        offline: Use local tiles and the bundled quake snapshot
        log_level: Logging level name
        largest_quakes_to_print: Size of the largest-quake report
        base_dir: Directory relative source paths are resolved against
        sources: Feature sources
        basemap: Tiles and projection
        window: Host window
        overlay: Legend and menu placement
    """
    offline: bool = False
    log_level: str = "INFO"
    largest_quakes_to_print: int = 100
    base_dir: str = "."
    sources: SourceConfig = field(default_factory=SourceConfig)
    basemap: BasemapConfig = field(default_factory=BasemapConfig)
    window: WindowConfig = field(default_factory=WindowConfig)
    overlay: OverlayConfig = field(default_factory=OverlayConfig)

    @property
    def earthquakes_source(self) -> str:
        """The quake feed for the current online/offline setting."""
        if self.offline:
            return self.sources.earthquakes_offline
        return self.sources.earthquakes

    @property
    def viewport(self) -> Viewport:
        """The map rectangle for the current online/offline setting."""
        if self.offline:
            return self.basemap.offline_viewport
        return self.basemap.viewport


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_viewport(viewport: Viewport, window: WindowConfig, field_name: str) -> list[ValidationError]:
    """Validate that a map viewport has a size and fits in the window.

    Pure function. An oversized viewport is only a warning.
    """
    errors = []

    if viewport.width <= 0 or viewport.height <= 0:
        errors.append(ValidationError(
            field=field_name,
            message=f"Viewport size must be positive, got {viewport.width}x{viewport.height}",
        ))

    if viewport.x + viewport.width > window.width or viewport.y + viewport.height > window.height:
        errors.append(ValidationError(
            field=field_name,
            message="Viewport extends beyond the window",
            severity="warning",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_coordinates(
        config.basemap.center_latitude,
        config.basemap.center_longitude,
        "basemap.center",
    ))

    if not MIN_ZOOM <= config.basemap.zoom <= MAX_ZOOM:
        errors.append(ValidationError(
            field="basemap.zoom",
            message=f"Zoom {config.basemap.zoom} out of range [{MIN_ZOOM}, {MAX_ZOOM}]",
        ))

    if config.window.width <= 0 or config.window.height <= 0:
        errors.append(ValidationError(
            field="window",
            message=f"Window size must be positive, got {config.window.width}x{config.window.height}",
        ))

    if config.window.frame_interval_ms <= 0:
        errors.append(ValidationError(
            field="window.frame_interval_ms",
            message=f"Frame interval must be positive, got {config.window.frame_interval_ms}",
        ))

    errors.extend(validate_viewport(config.basemap.viewport, config.window, "basemap.viewport"))
    errors.extend(validate_viewport(
        config.basemap.offline_viewport, config.window, "basemap.offline_viewport",
    ))

    button = menu_button_rect(config.overlay.menu_x, config.overlay.menu_y)
    if button.x + button.width > config.window.width or button.y + button.height > config.window.height:
        errors.append(ValidationError(
            field="overlay.menu",
            message="Custom location button lies outside the window",
            severity="warning",
        ))

    for name in ("earthquakes", "earthquakes_offline", "cities", "countries"):
        if not getattr(config.sources, name):
            errors.append(ValidationError(
                field=f"sources.{name}",
                message="Source is empty",
            ))

    if config.largest_quakes_to_print < 0:
        errors.append(ValidationError(
            field="largest_quakes_to_print",
            message=f"Must not be negative, got {config.largest_quakes_to_print}",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
