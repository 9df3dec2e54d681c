"""Marker styling - Pure functions.

Colors and sizes shared by the markers and the legend. The depth bands
and the magnitude radius are fixed parts of the earthquake marker look.
"""

RED = "#ff0000"
ORANGE = "#ff9900"
YELLOW = "#ffff00"
BLUE = "#0000ff"
WHITE = "#ffffff"
BLACK = "#000000"
TITLE_BOX_YELLOW = "#ffe699"
CITY_RED = "#961e1e"
PANEL_WHITE = "#fffaf0"

# Depth bands (km); a tie belongs to the shallower band
SHALLOW_MAX_DEPTH_KM = 70.0
INTERMEDIATE_MAX_DEPTH_KM = 300.0

# Half-size of the city triangle in pixels
TRI_SIZE = 5

# Default hit radius of point markers in pixels
DEFAULT_MARKER_RADIUS = 10.0


def get_depth_color(depth_km: float) -> str:
    """Get the fill color for an earthquake depth.

    Pure function.

    Args:
        depth_km: Depth below the surface in kilometers

    Returns:
        Hex color string: yellow (shallow), blue (intermediate), red (deep)
    """
    if depth_km <= SHALLOW_MAX_DEPTH_KM:
        return YELLOW
    elif depth_km <= INTERMEDIATE_MAX_DEPTH_KM:
        return BLUE
    return RED


def get_marker_radius(magnitude: float) -> float:
    """Determine marker radius based on magnitude.

    Pure function. Twice the magnitude, never smaller than one pixel.
    """
    return max(1.0, 2.0 * magnitude)
