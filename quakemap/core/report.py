"""Startup reports - Pure functions.

Textual summaries printed once the markers are loaded: how many quakes
hit each country, and the largest quakes of the feed.
"""

from quakemap.core.markers import CountryMarker, EarthquakeMarker


def count_quakes_by_country(
    countries: list[CountryMarker],
    quakes: list[EarthquakeMarker],
) -> list[tuple[str, int]]:
    """Count land quakes per country.

    Pure function.

    Args:
        countries: Country markers (defines output order)
        quakes: Earthquake markers

    Returns:
        (country name, count) for countries with at least one quake
    """
    counts: dict[str, int] = {}
    for quake in quakes:
        if quake.is_on_land:
            name = quake.get_property("country")
            counts[name] = counts.get(name, 0) + 1

    return [
        (country.name, counts[country.name])
        for country in countries
        if counts.get(country.name, 0) > 0
    ]


def count_ocean_quakes(quakes: list[EarthquakeMarker]) -> int:
    """Number of quakes outside every country. Pure function."""
    return sum(1 for quake in quakes if not quake.is_on_land)


def format_country_report(
    countries: list[CountryMarker],
    quakes: list[EarthquakeMarker],
) -> list[str]:
    """Format the per-country quake counts followed by the ocean count.

    Pure function.
    """
    lines = [f"{name}: {count}" for name, count in count_quakes_by_country(countries, quakes)]
    lines.append(f"OCEAN QUAKES: {count_ocean_quakes(quakes)}")
    return lines


def largest_quakes(quakes: list[EarthquakeMarker], limit: int) -> list[EarthquakeMarker]:
    """Return up to ``limit`` quakes, largest magnitude first.

    Pure function: the reverse of the natural magnitude ordering.
    """
    ordered = sorted(quakes)
    ordered.reverse()
    return ordered[:max(0, limit)]


def format_largest_report(quakes: list[EarthquakeMarker], limit: int) -> list[str]:
    """Format the titles of the largest quakes, header first.

    Pure function.
    """
    lines = ["The largest earthquakes:"]
    lines.extend(quake.title for quake in largest_quakes(quakes, limit))
    return lines
