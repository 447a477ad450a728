"""Named bodies and the position functions that drive them."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

from . import moon, sun
from .vectors import Spherical

__all__ = ["Body", "PositionFunction", "resolve_body"]

# Maps a Julian century to an equatorial position of date.
PositionFunction = Callable[[float], Spherical]


class Body(str, Enum):
    """Bodies with a fast position model."""

    sun = "sun"
    moon = "moon"

    @property
    def equatorial_direction(self) -> PositionFunction:
        """Direction-only equatorial position, used for rise/set searches."""

        return _DIRECTIONS[self]

    @property
    def equatorial_position(self) -> PositionFunction:
        """Equatorial position carrying the model's distance in kilometres."""

        return _POSITIONS[self]


_DIRECTIONS: Dict[Body, PositionFunction] = {
    Body.sun: sun.fast_equatorial_direction,
    Body.moon: moon.fast_equatorial_direction,
}

_POSITIONS: Dict[Body, PositionFunction] = {
    Body.sun: sun.fast_equatorial_position,
    Body.moon: moon.fast_equatorial_position,
}


def resolve_body(body: "Body | str") -> Body:
    try:
        return Body(body)
    except ValueError as exc:
        raise ValueError(f"Unsupported body: {body}") from exc
