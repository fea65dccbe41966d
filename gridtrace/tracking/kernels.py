# gridtrace/tracking/kernels.py
"""
Particle kernels.

Both kernels take the slice of particle indices of one work-group as
their first argument and touch only those indices, so work-groups can
run concurrently without synchronization.
"""

from __future__ import annotations

from ..grids.topology import Face, Cell
from ..fields.interpolation import interpolate
from ..integrators.euler import euler_step


def advect_particles_kernel(p: slice, particles, restitution, grid, dt, velocities, boundaries):
    """
    Forward Euler advection followed by per-axis boundary enforcement.

    All three velocity components are sampled at the particle's position at
    the start of the step. Boundary conditions act on the fully updated
    position, once per axis.

    Parameters
    ----------
    p : slice
        Particle indices of this work-group
    particles : LagrangianParticles
    restitution : float
    grid : RegularCartesianGrid
    dt : float
    velocities : VelocityFields
    boundaries : tuple
        x, y and z appliers from ``axis_boundary_conditions(grid)``
    """
    x = particles.x[p]
    y = particles.y[p]
    z = particles.z[p]

    u = interpolate(velocities.u, Face, Cell, Cell, grid, x, y, z)
    v = interpolate(velocities.v, Cell, Face, Cell, grid, x, y, z)
    w = interpolate(velocities.w, Cell, Cell, Face, grid, x, y, z)

    x = euler_step(x, u, dt)
    y = euler_step(y, v, dt)
    z = euler_step(z, w, dt)

    bx, by, bz = boundaries
    particles.x[p] = bx(x, restitution)
    particles.y[p] = by(y, restitution)
    particles.z[p] = bz(z, restitution)


def update_field_property_kernel(p: slice, particle_property, particles, grid, field, LX, LY, LZ):
    """Sample ``field`` at the current particle positions into ``particle_property``."""
    particle_property[p] = interpolate(field, LX, LY, LZ, grid,
                                       particles.x[p], particles.y[p], particles.z[p])
