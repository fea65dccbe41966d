"""
Grids: regular Cartesian meshes and the topology/location tags that
describe boundary behaviour and staggering.
"""

from .topology import (
    Topology,
    Location,
    Bounded,
    Periodic,
    Face,
    Cell,
    as_topology,
    as_location,
)

from .regular_cartesian import (
    RegularCartesianGrid,
    AxisNodes,
)

__all__ = [
    "Topology",
    "Location",
    "Bounded",
    "Periodic",
    "Face",
    "Cell",
    "as_topology",
    "as_location",
    "RegularCartesianGrid",
    "AxisNodes",
]
