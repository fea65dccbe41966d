# gridtrace/integrators/euler.py
"""
Forward Euler integration.

Explicit first-order update x_{n+1} = x_n + dt * v(x_n), applied one
coordinate array at a time so it works on struct-of-arrays particle data.
"""

from __future__ import annotations
from typing import Union
import numpy as np

ArrayOrScalar = Union[float, np.ndarray]


def euler_displacement(velocity: ArrayOrScalar, dt: float) -> ArrayOrScalar:
    """Displacement over one step: dt * v."""
    return velocity * dt


def euler_step(position: ArrayOrScalar, velocity: ArrayOrScalar, dt: float) -> ArrayOrScalar:
    """
    Forward Euler integration step: x_{n+1} = x_n + dt * v_n.

    Parameters
    ----------
    position : float or np.ndarray
        Current coordinate(s) along one axis
    velocity : float or np.ndarray
        Velocity component sampled at the current position
    dt : float
        Time step size

    Returns
    -------
    float or np.ndarray
        Updated coordinate(s), same shape as ``position``
    """
    return position + euler_displacement(velocity, dt)
