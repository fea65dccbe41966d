# gridtrace/grids/topology.py
"""
Axis topology and staggered-location tags.

A grid axis is either ``Bounded`` (walls at both ends) or ``Periodic``.
A field component lives either on cell ``Face``s or at ``Cell`` centres
along each axis.
"""

from __future__ import annotations
from enum import Enum


class Topology(Enum):
    BOUNDED = "bounded"
    PERIODIC = "periodic"

    def __repr__(self) -> str:
        return self.name.capitalize()


class Location(Enum):
    FACE = "face"
    CELL = "cell"

    def __repr__(self) -> str:
        return self.name.capitalize()


Bounded = Topology.BOUNDED
Periodic = Topology.PERIODIC
Face = Location.FACE
Cell = Location.CELL


def as_topology(tag) -> Topology:
    """Accept a Topology or its name ('bounded', 'Periodic', ...)."""
    if isinstance(tag, Topology):
        return tag
    if isinstance(tag, str):
        try:
            return Topology(tag.lower())
        except ValueError:
            pass
    raise TypeError(f"Unknown topology {tag!r}; expected Bounded or Periodic")


def as_location(tag) -> Location:
    """Accept a Location or its name ('face', 'Cell', ...)."""
    if isinstance(tag, Location):
        return tag
    if isinstance(tag, str):
        try:
            return Location(tag.lower())
        except ValueError:
            pass
    raise TypeError(f"Unknown location {tag!r}; expected Face or Cell")
