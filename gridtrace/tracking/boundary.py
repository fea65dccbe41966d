# gridtrace/tracking/boundary.py
"""
Boundary conditions for particle positions.

Each grid axis is Bounded or Periodic. A particle that leaves a Bounded
axis through a wall is reflected back, its overshoot scaled by the
restitution coefficient (1 = elastic mirror, 0 = stop at the wall). A
particle that leaves a Periodic axis re-enters from the opposite side.
Only one reflection or wrap is applied per call.

Functions work on scalars and NumPy arrays alike.
"""

from __future__ import annotations
from typing import Callable, Tuple, Union
import numpy as np

from ..grids.topology import Topology, Bounded, Periodic, as_topology

ArrayOrScalar = Union[float, np.ndarray]
AxisBoundary = Callable[[ArrayOrScalar, float], ArrayOrScalar]


# ---------- Core boundary condition functions ----------

def bounded_boundary(x: ArrayOrScalar, x_left: float, x_right: float,
                     restitution: float) -> ArrayOrScalar:
    """
    Reflect coordinates that crossed a wall.

    Parameters
    ----------
    x : float or np.ndarray
        Coordinates along one axis
    x_left, x_right : float
        Wall positions, ``x_left < x_right``
    restitution : float
        Fraction of the overshoot kept after reflection, in [0, 1]

    Returns
    -------
    float or np.ndarray
        ``x_right - (x - x_right) * r`` beyond the right wall,
        ``x_left + (x_left - x) * r`` beyond the left wall, else ``x``
    """
    if np.ndim(x) == 0:
        if x > x_right:
            return x_right - (x - x_right) * restitution
        if x < x_left:
            return x_left + (x_left - x) * restitution
        return x

    x = np.asarray(x)
    return np.where(x > x_right, x_right - (x - x_right) * restitution,
                    np.where(x < x_left, x_left + (x_left - x) * restitution, x))


def periodic_boundary(x: ArrayOrScalar, x_left: float, x_right: float,
                      restitution: float = 1.0) -> ArrayOrScalar:
    """
    Wrap coordinates that left the domain to the opposite side.

    ``restitution`` is accepted for signature compatibility and ignored.
    """
    if np.ndim(x) == 0:
        if x > x_right:
            return x_left + (x - x_right)
        if x < x_left:
            return x_right - (x_left - x)
        return x

    x = np.asarray(x)
    return np.where(x > x_right, x_left + (x - x_right),
                    np.where(x < x_left, x_right - (x_left - x), x))


_BOUNDARY_CONDITIONS = {
    Topology.BOUNDED: bounded_boundary,
    Topology.PERIODIC: periodic_boundary,
}


def boundary_condition(topology) -> Callable[..., ArrayOrScalar]:
    """Boundary function for a topology tag (Bounded or Periodic)."""
    return _BOUNDARY_CONDITIONS[as_topology(topology)]


def enforce_boundary_conditions(topology, x: ArrayOrScalar, x_left: float,
                                x_right: float, restitution: float) -> ArrayOrScalar:
    """
    Put a coordinate that left ``[x_left, x_right]`` back in the domain.

    Pure and total for ``x_left < x_right``; nothing is validated.
    """
    return boundary_condition(topology)(x, x_left, x_right, restitution)


# ---------- Per-axis appliers ----------

def axis_boundary_condition(topology, x_left: float, x_right: float) -> AxisBoundary:
    """
    Bind the boundary function of ``topology`` to one axis's bounds.

    The returned callable takes ``(x, restitution)``.
    """
    bc = boundary_condition(topology)
    x_left, x_right = float(x_left), float(x_right)

    def apply(x: ArrayOrScalar, restitution: float) -> ArrayOrScalar:
        return bc(x, x_left, x_right, restitution)

    apply.topology = as_topology(topology)
    apply.bounds = (x_left, x_right)
    return apply


def axis_boundary_conditions(grid) -> Tuple[AxisBoundary, AxisBoundary, AxisBoundary]:
    """Resolve the x, y and z boundary appliers of ``grid`` once."""
    return tuple(axis_boundary_condition(grid.topology_of(axis), *grid.bounds(axis))
                 for axis in range(3))


__all__ = [
    "Bounded",
    "Periodic",
    "bounded_boundary",
    "periodic_boundary",
    "boundary_condition",
    "enforce_boundary_conditions",
    "axis_boundary_condition",
    "axis_boundary_conditions",
]
