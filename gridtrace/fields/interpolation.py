# gridtrace/fields/interpolation.py
"""
Trilinear interpolation of staggered grid fields.

``interpolate(field, LX, LY, LZ, grid, x, y, z)`` evaluates a field whose
nodes sit at faces or cell centres along each axis. Positions may be
scalars or arrays (broadcast together). Node indices wrap along Periodic
axes and are clamped to the node range along Bounded axes.

When JAX is available and ``use_jax_jit`` is set, the gather/blend runs as
a jitted ``jax.numpy`` function; results always come back as NumPy.
"""

from __future__ import annotations
from typing import Tuple, Union
import numpy as np

from ..utils.jax_utils import JAX_AVAILABLE, maybe_jit, to_numpy
from ..utils.config import get_config
from ..grids.topology import Periodic
from ..grids.regular_cartesian import AxisNodes

if JAX_AVAILABLE:
    import jax.numpy as jnp


# ------------------------- Internal helpers -------------------------

def _neighbours(xp, coord, nodes: AxisNodes):
    """
    Lower/upper node indices and the weight of the upper node along one axis.
    """
    f = (coord - nodes.origin) / nodes.spacing
    n = nodes.count

    if nodes.topology is Periodic:
        f = xp.mod(f, n)
        i0 = xp.floor(f).astype(xp.int32)
        w = f - i0
        i0 = i0 % n
        i1 = (i0 + 1) % n
        return i0, i1, w

    if n == 1:
        i0 = xp.zeros(coord.shape, dtype=xp.int32)
        return i0, i0, xp.zeros(coord.shape, dtype=f.dtype)

    f = xp.clip(f, 0.0, n - 1)
    i0 = xp.clip(xp.floor(f).astype(xp.int32), 0, n - 2)
    w = f - i0
    return i0, i0 + 1, w


def _trilinear(xp, data, coords, axes: Tuple[AxisNodes, AxisNodes, AxisNodes]):
    x, y, z = coords
    i0, i1, wx = _neighbours(xp, x, axes[0])
    j0, j1, wy = _neighbours(xp, y, axes[1])
    k0, k1, wz = _neighbours(xp, z, axes[2])

    c00 = data[i0, j0, k0] * (1.0 - wx) + data[i1, j0, k0] * wx
    c10 = data[i0, j1, k0] * (1.0 - wx) + data[i1, j1, k0] * wx
    c01 = data[i0, j0, k1] * (1.0 - wx) + data[i1, j0, k1] * wx
    c11 = data[i0, j1, k1] * (1.0 - wx) + data[i1, j1, k1] * wx

    c0 = c00 * (1.0 - wy) + c10 * wy
    c1 = c01 * (1.0 - wy) + c11 * wy

    return c0 * (1.0 - wz) + c1 * wz


def _trilinear_numpy(data, coords, axes):
    return _trilinear(np, data, coords, axes)


def _trilinear_jnp(data, coords, axes):
    return _trilinear(jnp, data, coords, axes)


# Axis descriptors are hashable and select the wrap/clamp branch at trace time
_trilinear_jax = maybe_jit(_trilinear_jnp, static_argnums=(2,)) if JAX_AVAILABLE else None


# ------------------------- Public API -------------------------

def field_data(field) -> np.ndarray:
    """Raw node values of a field object, or ``field`` itself if it is an array."""
    return np.asarray(getattr(field, "data", field))


def interpolate(field, LX, LY, LZ, grid, x, y, z) -> Union[float, np.ndarray]:
    """
    Interpolate ``field`` located at (LX, LY, LZ) to positions (x, y, z).

    Parameters
    ----------
    field : Field or np.ndarray
        Field object (anything with ``.data``) or its node array of shape
        ``grid.field_shape(LX, LY, LZ)``
    LX, LY, LZ : Location
        Face or Cell along each axis
    grid : RegularCartesianGrid
    x, y, z : float or array-like
        Query coordinates; broadcast together

    Returns
    -------
    float or np.ndarray
        Interpolated values; a float for scalar input

    Notes
    -----
    Deterministic and side-effect free. Positions outside the domain
    wrap (Periodic) or take the nearest boundary node's value (Bounded).
    """
    data = field_data(field)
    axes = (grid.axis_nodes(LX, 0), grid.axis_nodes(LY, 1), grid.axis_nodes(LZ, 2))
    expected = tuple(a.count for a in axes)
    if data.shape != expected:
        raise ValueError(f"Field data shape {data.shape} does not match location "
                         f"({LX!r}, {LY!r}, {LZ!r}) on grid, expected {expected}")

    xs, ys, zs = np.broadcast_arrays(np.asarray(x, dtype=float),
                                     np.asarray(y, dtype=float),
                                     np.asarray(z, dtype=float))
    scalar = xs.ndim == 0
    coords = (np.atleast_1d(xs), np.atleast_1d(ys), np.atleast_1d(zs))

    if JAX_AVAILABLE and get_config().use_jax_jit:
        values = to_numpy(_trilinear_jax(jnp.asarray(data), coords, axes))
    else:
        values = _trilinear_numpy(data, coords, axes)

    if scalar:
        return float(values.reshape(-1)[0])
    return values
