# gridtrace/tracking/particles.py
"""
Lagrangian particle storage in struct-of-arrays layout.

Positions are three contiguous 1-D arrays (x, y, z). Every tracked field
gets its own property array of the same length holding the value most
recently sampled at each particle. The particle count is fixed once the
set is built.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
import numpy as np

from ..utils.config import get_config

_RESERVED_NAMES = ("x", "y", "z")


def _as_coordinate_array(values, name: str, dtype) -> np.ndarray:
    """Copy ``values`` into a contiguous 1-D array of ``dtype``."""
    a = np.atleast_1d(np.array(values, dtype=dtype))
    if a.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {a.shape}")
    return np.ascontiguousarray(a)


@dataclass(eq=False)
class LagrangianParticles:
    """
    Tracer particles advected by the velocity field.

    Attributes
    ----------
    x, y, z : np.ndarray
        Particle coordinates, shape (N,)
    restitution : float
        Restitution coefficient in [0, 1] used on every Bounded axis
    tracked_fields : dict
        Field name -> field sampled into ``properties[name]`` after each
        advection step
    properties : dict
        Field name -> np.ndarray (N,) of sampled values; created here,
        zero-filled
    """
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    restitution: float = 1.0
    tracked_fields: Mapping[str, Any] = field(default_factory=dict)
    properties: Dict[str, np.ndarray] = field(init=False, default_factory=dict)

    def __post_init__(self):
        dtype = np.dtype(get_config().dtype)
        self.x = _as_coordinate_array(self.x, "x", dtype)
        self.y = _as_coordinate_array(self.y, "y", dtype)
        self.z = _as_coordinate_array(self.z, "z", dtype)

        n = self.x.shape[0]
        if self.y.shape[0] != n or self.z.shape[0] != n:
            raise ValueError(f"x, y and z must have equal length, got "
                             f"{self.x.shape[0]}, {self.y.shape[0]}, {self.z.shape[0]}")

        self.restitution = float(self.restitution)
        if not 0.0 <= self.restitution <= 1.0:
            raise ValueError(f"restitution must lie in [0, 1], got {self.restitution}")

        self.tracked_fields = dict(self.tracked_fields or {})
        for name, tracked in self.tracked_fields.items():
            if name in _RESERVED_NAMES:
                raise ValueError(f"Tracked field name '{name}' clashes with a particle coordinate")
            if not hasattr(tracked, "location") or not hasattr(tracked, "compute"):
                raise TypeError(f"Tracked field '{name}' must provide 'location' and 'compute'")
            self.properties[name] = np.zeros(n, dtype=dtype)

    # ---------- Core accessors ----------

    def __len__(self) -> int:
        """Number of particles."""
        return self.x.shape[0]

    def __getitem__(self, name: str) -> np.ndarray:
        """Coordinate ('x'|'y'|'z') or tracked property array by name."""
        if name in _RESERVED_NAMES:
            return getattr(self, name)
        return self.properties[name]

    @property
    def positions(self) -> np.ndarray:
        """Copy of the positions as an (N, 3) array."""
        return np.stack([self.x, self.y, self.z], axis=1)

    @property
    def tracked_names(self):
        return tuple(self.tracked_fields)

    def __repr__(self) -> str:
        names = ", ".join(self.tracked_fields) or "none"
        return (f"LagrangianParticles({len(self)} particles, "
                f"restitution={self.restitution}, tracked fields: {names})")


def particles_from_positions(positions, restitution: float = 1.0,
                             tracked_fields: Optional[Mapping[str, Any]] = None) -> LagrangianParticles:
    """
    Build a particle set from an (N, 3) array of positions.

    Parameters
    ----------
    positions : array-like, shape (N, 3) or (3,)
    restitution : float
    tracked_fields : dict, optional

    Returns
    -------
    LagrangianParticles
    """
    pos = np.asarray(positions, dtype=float)
    if pos.ndim == 1:
        pos = pos.reshape(1, -1)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError(f"Positions must have shape (N, 3), got {pos.shape}")
    return LagrangianParticles(pos[:, 0], pos[:, 1], pos[:, 2],
                               restitution=restitution,
                               tracked_fields=tracked_fields or {})
