# gridtrace/tracking/__init__.py
"""
Particle tracking module.

Main Components:
- LagrangianParticles: struct-of-arrays particle storage with tracked properties
- Boundary conditions: Bounded reflection with restitution, Periodic wrapping
- Kernels: forward Euler advection and field sampling per work-group
- advect_particles: advect, then sample tracked fields at the new positions
"""

from .particles import (
    LagrangianParticles,
    particles_from_positions,
)

from .boundary import (
    bounded_boundary,
    periodic_boundary,
    boundary_condition,
    enforce_boundary_conditions,
    axis_boundary_condition,
    axis_boundary_conditions,
)

from .kernels import (
    advect_particles_kernel,
    update_field_property_kernel,
)

from .advection import (
    advect_particles,
    advect_model_particles,
)

from .validation import (
    max_periodic_time_step,
    periodic_time_step_limits,
    validate_time_step,
)

__all__ = [
    "LagrangianParticles",
    "particles_from_positions",
    "bounded_boundary",
    "periodic_boundary",
    "boundary_condition",
    "enforce_boundary_conditions",
    "axis_boundary_condition",
    "axis_boundary_conditions",
    "advect_particles_kernel",
    "update_field_property_kernel",
    "advect_particles",
    "advect_model_particles",
    "max_periodic_time_step",
    "periodic_time_step_limits",
    "validate_time_step",
]
