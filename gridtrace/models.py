# gridtrace/models.py
"""
Model container: the grid, the velocity fields that move particles, the
architecture kernels run on, and optionally the particle set itself.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .architectures import CPU
from .grids.regular_cartesian import RegularCartesianGrid
from .fields.field import VelocityFields, velocity_fields, check_velocity_locations
from .tracking.particles import LagrangianParticles


@dataclass(eq=False)
class ParticleModel:
    """
    Attributes
    ----------
    grid : RegularCartesianGrid
    velocities : VelocityFields, optional
        Zero velocity fields on ``grid`` when omitted
    particles : LagrangianParticles, optional
    architecture : CPU, optional
        ``CPU()`` when omitted
    """
    grid: RegularCartesianGrid
    velocities: Optional[VelocityFields] = None
    particles: Optional[LagrangianParticles] = None
    architecture: Optional[CPU] = None

    def __post_init__(self):
        if self.velocities is None:
            self.velocities = velocity_fields(self.grid)
        else:
            self.velocities = VelocityFields(*self.velocities)
            check_velocity_locations(self.velocities)
            for name, component in zip("uvw", self.velocities):
                expected = self.grid.field_shape(*component.location)
                if component.shape != expected:
                    raise ValueError(f"Velocity component {name} has shape {component.shape}, "
                                     f"expected {expected} on this grid")

        if self.architecture is None:
            self.architecture = CPU()
