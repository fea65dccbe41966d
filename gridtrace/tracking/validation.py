# gridtrace/tracking/validation.py
"""
Time step checks for periodic wrapping.

A periodic boundary applies a single wrap per step, so a particle must not
travel more than one domain width along a Periodic axis in one step.
These helpers are for callers; ``advect_particles`` never calls them.
"""

from __future__ import annotations
from typing import Dict
import numpy as np

from ..grids.topology import Periodic
from ..fields.interpolation import field_data

_COMPONENTS = ("u", "v", "w")


def max_periodic_time_step(model) -> float:
    """
    Largest time step that keeps every displacement along Periodic axes
    within one domain width.

    Returns ``inf`` when no axis is Periodic or the relevant velocity
    components are identically zero.
    """
    limits = periodic_time_step_limits(model)
    return min(limits.values(), default=float("inf"))


def periodic_time_step_limits(model) -> Dict[str, float]:
    """Per-axis limit ``L / max|u|`` for every Periodic axis of ``model.grid``."""
    grid = model.grid
    limits = {}
    for axis, name in enumerate("xyz"):
        if grid.topology_of(axis) is not Periodic:
            continue
        left, right = grid.bounds(axis)
        speed = float(np.max(np.abs(field_data(getattr(model.velocities, _COMPONENTS[axis])))))
        limits[name] = (right - left) / speed if speed > 0 else float("inf")
    return limits


def validate_time_step(model, dt: float) -> None:
    """
    Raise ValueError if ``dt`` could move a particle more than one domain
    width along a Periodic axis.
    """
    for name, limit in periodic_time_step_limits(model).items():
        if abs(dt) > limit:
            raise ValueError(f"Time step {dt} exceeds the single-wrap limit {limit:.6g} "
                             f"along periodic axis {name}")
