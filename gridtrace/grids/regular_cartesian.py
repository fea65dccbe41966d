# gridtrace/grids/regular_cartesian.py
"""
Regular Cartesian grid with per-axis topology.

Face coordinates are stored for every axis with ``N + 1`` entries; the
domain along an axis spans the first to the last face. Cell centres sit
halfway between consecutive faces.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import NamedTuple, Tuple
import numpy as np

from .topology import Topology, Location, Periodic, Bounded, Face, as_topology, as_location

AXES = ("x", "y", "z")


def _axis_index(axis) -> int:
    if isinstance(axis, str):
        return AXES.index(axis)
    return int(axis)


def _read_only(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


class AxisNodes(NamedTuple):
    """
    Node layout of a field component along one axis.

    Hashable so it can be used as a static argument of a jitted kernel.
    """
    location: Location
    topology: Topology
    origin: float    # coordinate of node 0
    spacing: float
    count: int       # number of distinct data nodes


@dataclass(eq=False)
class RegularCartesianGrid:
    """
    Uniformly spaced 3D grid.

    Attributes
    ----------
    size : tuple of int
        Cell counts (Nx, Ny, Nz)
    x, y, z : tuple of float
        Domain extent (left, right) along each axis
    topology : tuple
        (TX, TY, TZ), each Bounded or Periodic
    """
    size: Tuple[int, int, int]
    x: Tuple[float, float] = (0.0, 1.0)
    y: Tuple[float, float] = (0.0, 1.0)
    z: Tuple[float, float] = (0.0, 1.0)
    topology: Tuple[Topology, Topology, Topology] = (Periodic, Periodic, Bounded)

    _faces: Tuple[np.ndarray, ...] = field(init=False, repr=False)
    _centers: Tuple[np.ndarray, ...] = field(init=False, repr=False)

    def __post_init__(self):
        size = tuple(int(n) for n in self.size)
        if len(size) != 3:
            raise ValueError(f"size must have 3 entries, got {self.size}")
        if any(n < 1 for n in size):
            raise ValueError(f"All cell counts must be >= 1, got {size}")
        self.size = size

        if len(self.topology) != 3:
            raise ValueError(f"topology must have 3 entries, got {self.topology}")
        self.topology = tuple(as_topology(t) for t in self.topology)

        extents = []
        for name, extent in zip(AXES, (self.x, self.y, self.z)):
            left, right = (float(v) for v in extent)
            if not left < right:
                raise ValueError(f"Invalid {name} extent: left {left} >= right {right}")
            extents.append((left, right))
        self.x, self.y, self.z = extents

        faces, centers = [], []
        for (left, right), n in zip(extents, size):
            f = np.linspace(left, right, n + 1)
            faces.append(_read_only(f))
            centers.append(_read_only(0.5 * (f[:-1] + f[1:])))
        self._faces = tuple(faces)
        self._centers = tuple(centers)

    # ---------- Sizes and spacings ----------

    @property
    def Nx(self) -> int:
        return self.size[0]

    @property
    def Ny(self) -> int:
        return self.size[1]

    @property
    def Nz(self) -> int:
        return self.size[2]

    @property
    def Lx(self) -> float:
        return self.x[1] - self.x[0]

    @property
    def Ly(self) -> float:
        return self.y[1] - self.y[0]

    @property
    def Lz(self) -> float:
        return self.z[1] - self.z[0]

    @property
    def dx(self) -> float:
        return self.Lx / self.Nx

    @property
    def dy(self) -> float:
        return self.Ly / self.Ny

    @property
    def dz(self) -> float:
        return self.Lz / self.Nz

    # ---------- Coordinates ----------

    @property
    def xF(self) -> np.ndarray:
        return self._faces[0]

    @property
    def yF(self) -> np.ndarray:
        return self._faces[1]

    @property
    def zF(self) -> np.ndarray:
        return self._faces[2]

    @property
    def xC(self) -> np.ndarray:
        return self._centers[0]

    @property
    def yC(self) -> np.ndarray:
        return self._centers[1]

    @property
    def zC(self) -> np.ndarray:
        return self._centers[2]

    def faces(self, axis) -> np.ndarray:
        """Face coordinates along ``axis`` (index or 'x'|'y'|'z'), length N + 1."""
        return self._faces[_axis_index(axis)]

    def centers(self, axis) -> np.ndarray:
        """Cell-centre coordinates along ``axis``, length N."""
        return self._centers[_axis_index(axis)]

    def topology_of(self, axis) -> Topology:
        return self.topology[_axis_index(axis)]

    def bounds(self, axis) -> Tuple[float, float]:
        """Domain bounds (first face, last face) along ``axis``."""
        f = self._faces[_axis_index(axis)]
        return float(f[0]), float(f[-1])

    def spacing(self, axis) -> float:
        i = _axis_index(axis)
        left, right = self.bounds(i)
        return (right - left) / self.size[i]

    # ---------- Staggered node layout ----------

    def node_count(self, location, axis) -> int:
        """
        Number of distinct data nodes of a field at ``location`` along ``axis``.

        Bounded faces include both walls (N + 1); on a Periodic axis the last
        face coincides with the first, so only N are stored.
        """
        i = _axis_index(axis)
        loc = as_location(location)
        n = self.size[i]
        if loc is Face and self.topology[i] is Bounded:
            return n + 1
        return n

    def node_coordinates(self, location, axis) -> np.ndarray:
        """Coordinates of the stored data nodes at ``location`` along ``axis``."""
        i = _axis_index(axis)
        loc = as_location(location)
        if loc is Face:
            return self._faces[i][:self.node_count(loc, i)]
        return self._centers[i]

    def axis_nodes(self, location, axis) -> AxisNodes:
        """Describe the node layout of ``location`` along ``axis``."""
        i = _axis_index(axis)
        loc = as_location(location)
        h = self.spacing(i)
        origin = self.bounds(i)[0] + (0.0 if loc is Face else 0.5 * h)
        return AxisNodes(loc, self.topology[i], origin, h, self.node_count(loc, i))

    def field_shape(self, LX, LY, LZ) -> Tuple[int, int, int]:
        """Data shape of a field living at (LX, LY, LZ)."""
        return (self.node_count(LX, 0), self.node_count(LY, 1), self.node_count(LZ, 2))

    def __repr__(self) -> str:
        topo = ", ".join(repr(t) for t in self.topology)
        return (f"RegularCartesianGrid(size={self.size}, x={self.x}, y={self.y}, "
                f"z={self.z}, topology=({topo}))")
