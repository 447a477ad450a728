"""Fast Sun and Moon ephemerides with rise, set and twilight search."""

from .altitude import GeographicLocation, horizontal_position, sin_altitude
from .body import Body
from .events import EventKind, RiseEvent, RiseThreshold, events, find_roots, rise_set_events
from .moon import Illumination

__all__ = [
    "Body",
    "EventKind",
    "GeographicLocation",
    "Illumination",
    "RiseEvent",
    "RiseThreshold",
    "events",
    "find_roots",
    "horizontal_position",
    "rise_set_events",
    "sin_altitude",
]

__version__ = "1.0.0"
