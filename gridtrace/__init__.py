"""
GridTrace: Lagrangian particle advection on staggered Cartesian grids.

Tracer particles are moved through a velocity field stored on a staggered
regular grid and arbitrary scalar fields are sampled at their positions:
- Forward Euler advection with trilinear velocity interpolation
- Per-axis boundaries: Bounded (reflection with restitution) or Periodic
- Work-group parallel kernels on a thread pool with explicit barriers
- Optional JAX JIT for the interpolation gather, NumPy storage throughout

Core workflow:
1. Build a grid → RegularCartesianGrid
2. Set velocities → velocity_fields / Field
3. Seed particles and choose tracked fields → LagrangianParticles
4. Step → advect_particles(particles, model, dt)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "GridTrace Contributors"

from .utils.jax_utils import JAX_AVAILABLE
from .utils.config import configure, get_config, reset_config

from .grids import (
    Bounded,
    Periodic,
    Face,
    Cell,
    RegularCartesianGrid,
)

from .fields import (
    Field,
    ComputedField,
    VelocityFields,
    velocity_fields,
    interpolate,
    location,
    compute,
)

from .architectures import (
    CPU,
    SerialCPU,
    Event,
    MultiEvent,
    launch,
    wait,
)

from .tracking import (
    LagrangianParticles,
    particles_from_positions,
    enforce_boundary_conditions,
    advect_particles,
    advect_model_particles,
    max_periodic_time_step,
    validate_time_step,
)

from .models import ParticleModel

__all__ = [
    "__version__",
    "JAX_AVAILABLE",
    "configure",
    "get_config",
    "reset_config",
    "Bounded",
    "Periodic",
    "Face",
    "Cell",
    "RegularCartesianGrid",
    "Field",
    "ComputedField",
    "VelocityFields",
    "velocity_fields",
    "interpolate",
    "location",
    "compute",
    "CPU",
    "SerialCPU",
    "Event",
    "MultiEvent",
    "launch",
    "wait",
    "LagrangianParticles",
    "particles_from_positions",
    "enforce_boundary_conditions",
    "advect_particles",
    "advect_model_particles",
    "max_periodic_time_step",
    "validate_time_step",
    "ParticleModel",
]
