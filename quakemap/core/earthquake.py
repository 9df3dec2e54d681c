"""Earthquake feed parsing - Pure functions.

This module turns USGS feed documents (Atom or GeoJSON) into earthquake
point features. All functions are pure with no side effects; fetching
the documents is handled by the shell layer.
"""

import re
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone
from typing import Any

from quakemap.core.features import PointFeature
from quakemap.core.geo import Location


ATOM_NS = "http://www.w3.org/2005/Atom"
GEORSS_NS = "http://www.georss.org/georss"

PAST_HOUR = "Past Hour"
PAST_DAY = "Past Day"
PAST_WEEK = "Past Week"
PAST_MONTH = "Past Month"

# "M 4.5 - 10km SSW of Somewhere"
_TITLE_MAGNITUDE = re.compile(r"^\s*M\s*(-?\d+(?:\.\d+)?)")


def classify_age(event_time: datetime, now: datetime) -> str:
    """Bucket an event time the way the USGS feeds label age.

    Pure function.

    Args:
        event_time: When the earthquake happened (UTC)
        now: Reference time (UTC)

    Returns:
        "Past Hour", "Past Day", "Past Week" or "Past Month"
    """
    elapsed = now - event_time
    if elapsed <= timedelta(hours=1):
        return PAST_HOUR
    elif elapsed <= timedelta(days=1):
        return PAST_DAY
    elif elapsed <= timedelta(days=7):
        return PAST_WEEK
    return PAST_MONTH


def parse_title_magnitude(title: str) -> float | None:
    """Extract the magnitude from a feed title like "M 4.5 - ...".

    Pure function.
    """
    match = _TITLE_MAGNITUDE.match(title)
    if match is None:
        return None
    return float(match.group(1))


def parse_atom_entry(entry: ET.Element) -> PointFeature | None:
    """Parse a single Atom <entry> into an earthquake feature.

    Pure function: returns None if the entry lacks a usable title or point.

    Args:
        entry: Atom entry element

    Returns:
        PointFeature with title, magnitude, depth and age properties
    """
    try:
        title = (entry.findtext(f"{{{ATOM_NS}}}title") or "").strip()
        magnitude = parse_title_magnitude(title)
        if magnitude is None:
            return None

        point = entry.findtext(f"{{{GEORSS_NS}}}point")
        if not point:
            return None
        lat_str, lon_str = point.split()

        # Elevation is in meters and negative below the surface
        elev = entry.findtext(f"{{{GEORSS_NS}}}elev")
        depth = abs(float(elev)) / 1000.0 if elev else 0.0

        age = ""
        for category in entry.findall(f"{{{ATOM_NS}}}category"):
            if category.get("label") == "Age":
                age = category.get("term", "")
                break

        return PointFeature(
            location=Location(latitude=float(lat_str), longitude=float(lon_str)),
            properties={
                "title": title,
                "magnitude": magnitude,
                "depth": depth,
                "age": age,
            },
        )
    except (TypeError, ValueError):
        return None


def parse_atom_feed(xml_text: str) -> list[PointFeature]:
    """Parse a USGS Atom feed into earthquake features.

    Invalid entries are skipped, feed order is preserved.

    Args:
        xml_text: Full Atom document

    Returns:
        List of earthquake features

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not XML
    """
    root = ET.fromstring(xml_text)
    features = []
    for entry in root.iter(f"{{{ATOM_NS}}}entry"):
        feature = parse_atom_entry(entry)
        if feature is not None:
            features.append(feature)
    return features


def parse_earthquake(feature: dict[str, Any], now: datetime) -> PointFeature | None:
    """Parse a single USGS GeoJSON feature into an earthquake feature.

    Pure function: takes raw dict, returns PointFeature or None if invalid.

    Args:
        feature: GeoJSON feature dict from a USGS feed
        now: Reference time used to compute the age bucket

    Returns:
        PointFeature or None if parsing fails
    """
    try:
        props = feature.get("properties", {})
        geometry = feature.get("geometry", {})
        coords = geometry.get("coordinates", [])

        if len(coords) < 3:
            return None

        magnitude = props.get("mag")
        if magnitude is None:
            return None

        # USGS uses milliseconds since epoch
        time_ms = props.get("time")
        age = ""
        if time_ms is not None:
            event_time = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)
            age = classify_age(event_time, now)

        place = props.get("place", "Unknown location")
        title = props.get("title") or f"M {float(magnitude):.1f} - {place}"

        return PointFeature(
            location=Location(latitude=float(coords[1]), longitude=float(coords[0])),
            properties={
                "title": title,
                "magnitude": float(magnitude),
                "depth": abs(float(coords[2])),
                "age": age,
                "place": place,
                "url": props.get("url", ""),
            },
        )
    except (AttributeError, KeyError, TypeError, ValueError):
        return None


def parse_earthquakes(
    geojson: dict[str, Any],
    now: datetime | None = None,
) -> list[PointFeature]:
    """Parse a USGS GeoJSON FeatureCollection into earthquake features.

    Pure function when ``now`` is given: filters out invalid features and
    preserves feed order.

    Args:
        geojson: Full GeoJSON FeatureCollection from USGS
        now: Reference time for age buckets (defaults to current UTC time)

    Returns:
        List of valid earthquake features
    """
    if now is None:
        now = datetime.now(timezone.utc)

    earthquakes = []
    for raw in geojson.get("features", []):
        earthquake = parse_earthquake(raw, now)
        if earthquake is not None:
            earthquakes.append(earthquake)
    return earthquakes
