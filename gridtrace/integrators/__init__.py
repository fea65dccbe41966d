"""
GridTrace Integrators

Explicit time stepping for particle advection. Only forward Euler is
provided:

    new_x = euler_step(x, u, dt)

where ``x`` and ``u`` are one coordinate array and the matching velocity
component sampled at ``x``.
"""

from .euler import euler_step, euler_displacement

__all__ = [
    "euler_step",
    "euler_displacement",
]
