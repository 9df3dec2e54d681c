"""Interaction state - The per-run selection and mode singletons."""

from dataclasses import dataclass
from enum import Enum

from quakemap.core.markers import CustomLocationMarker, Marker


class Mode(Enum):
    """Global map mode.

    HISTORICAL is reserved and never entered.
    """
    DEFAULT = "default"
    CUSTOM_LOCATION = "custom_location"
    HISTORICAL = "historical"


@dataclass
class InteractionState:
    """Everything the pointer handlers mutate besides marker flags.

    Attributes:
        mode: Current map mode
        last_selected: Marker under the pointer, if any
        last_clicked: Current filter anchor, if any
        custom_marker: User location marker, only in CUSTOM_LOCATION mode
    """
    mode: Mode = Mode.DEFAULT
    last_selected: Marker | None = None
    last_clicked: Marker | None = None
    custom_marker: CustomLocationMarker | None = None
