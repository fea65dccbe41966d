# gridtrace/fields/field.py
"""
Staggered fields on a regular Cartesian grid.

A ``Field`` stores node values at a fixed (LX, LY, LZ) location. A
``ComputedField`` derives its values from an operation that is
re-evaluated by ``compute()``. Velocities are a ``VelocityFields``
triple following the staggered convention: each component lives on
faces along its own axis and at cell centres along the other two.
"""

from __future__ import annotations
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, NamedTuple, Optional, Tuple
import numpy as np

from ..grids.topology import Face, Cell, Location, as_location
from ..grids.regular_cartesian import RegularCartesianGrid
from ..utils.config import get_config
from .interpolation import interpolate


LocationTriple = Tuple[Location, Location, Location]

U_LOCATION = (Face, Cell, Cell)
V_LOCATION = (Cell, Face, Cell)
W_LOCATION = (Cell, Cell, Face)


@dataclass(eq=False)
class Field:
    """
    Node values of a scalar quantity at a staggered location.

    Attributes
    ----------
    location : tuple of Location
        (LX, LY, LZ), each Face or Cell
    grid : RegularCartesianGrid
    data : np.ndarray, optional
        Node values of shape ``grid.field_shape(*location)``; zeros if omitted
    """
    location: LocationTriple
    grid: RegularCartesianGrid
    data: Optional[np.ndarray] = None

    def __post_init__(self):
        self.location = tuple(as_location(loc) for loc in self.location)
        if len(self.location) != 3:
            raise ValueError(f"location must have 3 entries, got {self.location}")

        shape = self.grid.field_shape(*self.location)
        dtype = np.dtype(get_config().dtype)
        if self.data is None:
            self.data = np.zeros(shape, dtype=dtype)
        else:
            data = np.array(self.data, dtype=dtype)
            if data.shape != shape:
                raise ValueError(f"data shape {data.shape} does not match {shape} "
                                 f"for location {self.location}")
            self.data = data

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.data.shape

    def nodes(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Coordinates of the stored nodes along x, y and z."""
        return tuple(self.grid.node_coordinates(loc, axis) for axis, loc in enumerate(self.location))

    def set(self, value: Any) -> "Field":
        """
        Set node values from a scalar, an array, or a callable ``f(x, y, z)``
        evaluated on the node mesh.
        """
        if callable(value):
            X, Y, Z = np.meshgrid(*self.nodes(), indexing="ij")
            value = value(X, Y, Z)
        self.data[...] = value
        return self

    def compute(self) -> None:
        """Plain fields are always up to date."""
        return None

    def at(self, x, y, z):
        """Interpolate this field to (x, y, z)."""
        return interpolate(self, *self.location, self.grid, x, y, z)

    def __repr__(self) -> str:
        loc = ", ".join(repr(loc) for loc in self.location)
        return f"{type(self).__name__}(location=({loc}), shape={self.shape})"


@dataclass(eq=False, repr=False)
class ComputedField(Field):
    """
    Field whose values are produced by ``operation``.

    ``operation(grid)`` must return an array broadcastable to the field's
    data shape. ``compute()`` re-evaluates it; calling it repeatedly
    without changing the inputs leaves the data unchanged.
    """
    operation: Optional[Callable[[RegularCartesianGrid], Any]] = None
    compute_count: int = dc_field(default=0, init=False)

    def __post_init__(self):
        super().__post_init__()
        if not callable(self.operation):
            raise ValueError("ComputedField requires a callable operation")

    def compute(self) -> None:
        self.data[...] = self.operation(self.grid)
        self.compute_count += 1


class VelocityFields(NamedTuple):
    """Velocity components (u, v, w) on the staggered grid."""
    u: Field
    v: Field
    w: Field


def location(field) -> LocationTriple:
    """Staggered location (LX, LY, LZ) of ``field``."""
    return tuple(field.location)


def compute(field) -> None:
    """Bring ``field`` up to date before it is sampled."""
    field.compute()


def velocity_fields(grid: RegularCartesianGrid, u=0.0, v=0.0, w=0.0) -> VelocityFields:
    """
    Build staggered velocity fields on ``grid``.

    Each component accepts anything ``Field.set`` accepts.
    """
    return VelocityFields(
        u=Field(U_LOCATION, grid).set(u),
        v=Field(V_LOCATION, grid).set(v),
        w=Field(W_LOCATION, grid).set(w),
    )


def check_velocity_locations(velocities: VelocityFields) -> None:
    """Raise ValueError unless (u, v, w) follow the staggered convention."""
    for name, expected in zip(("u", "v", "w"), (U_LOCATION, V_LOCATION, W_LOCATION)):
        loc = location(getattr(velocities, name))
        if loc != expected:
            raise ValueError(f"Velocity component {name} must be located at {expected}, got {loc}")
