"""
GridTrace Fields

Staggered scalar fields on regular Cartesian grids and the trilinear
interpolation primitive used to sample them at particle positions:

    value = interpolate(field, LX, LY, LZ, grid, x, y, z)
"""

from .interpolation import interpolate, field_data
from .field import (
    Field,
    ComputedField,
    VelocityFields,
    velocity_fields,
    check_velocity_locations,
    location,
    compute,
    U_LOCATION,
    V_LOCATION,
    W_LOCATION,
)

__all__ = [
    "interpolate",
    "field_data",
    "Field",
    "ComputedField",
    "VelocityFields",
    "velocity_fields",
    "check_velocity_locations",
    "location",
    "compute",
    "U_LOCATION",
    "V_LOCATION",
    "W_LOCATION",
]
