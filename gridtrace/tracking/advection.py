# gridtrace/tracking/advection.py
"""
Advection of Lagrangian particles and sampling of tracked fields.

One call to ``advect_particles`` runs three strictly ordered phases:

1. Advect: the advection kernel moves every particle; the call blocks
   until all work-groups have finished.
2. Prepare and sample: each tracked field is brought up to date with
   ``compute`` and its sampling kernel is launched; launches for
   different fields do not wait on each other.
3. Join: the call blocks until every sampling kernel has finished.

When the call returns, positions and properties are final.
"""

from __future__ import annotations

from ..architectures import launch, wait, MultiEvent
from ..fields.field import location, compute
from ..utils.config import get_config
from ..utils.logging import Timer
from .boundary import axis_boundary_conditions
from .kernels import advect_particles_kernel, update_field_property_kernel


def advect_particles(particles, model, dt: float) -> None:
    """
    Advance ``particles`` by one forward Euler step and refresh tracked
    properties at the new positions.

    Parameters
    ----------
    particles : LagrangianParticles or None
        Mutated in place; ``None`` makes the call a no-op
    model : object
        Supplies ``grid``, ``velocities`` (u, v, w) and ``architecture``
    dt : float
        Time step

    Notes
    -----
    Restitution range, grid extents and the single-wrap time step limit
    are not checked here; see ``validate_time_step``. Exceptions from
    interpolation, ``compute`` or kernel tasks propagate unchanged.
    """
    if particles is None:
        return None

    config = get_config()
    arch = model.architecture
    grid = model.grid
    worksize = len(particles)
    workgroup = min(worksize, config.max_threads_per_block)
    boundaries = axis_boundary_conditions(grid)

    with Timer(f"advect {worksize} particles"):
        advect_event = launch(arch, advect_particles_kernel, worksize, workgroup,
                              particles, particles.restitution, grid, dt,
                              model.velocities, boundaries)
        wait(arch, advect_event)

    with Timer(f"track {len(particles.tracked_fields)} fields"):
        events = []
        for name, tracked_field in particles.tracked_fields.items():
            compute(tracked_field)
            LX, LY, LZ = location(tracked_field)
            event = launch(arch, update_field_property_kernel, worksize, workgroup,
                           particles.properties[name], particles, grid,
                           tracked_field, LX, LY, LZ)
            events.append(event)

        wait(arch, MultiEvent(events))

    return None


def advect_model_particles(model, dt: float) -> None:
    """Advect the particle set attached to ``model`` (``model.particles``)."""
    return advect_particles(getattr(model, "particles", None), model, dt)

