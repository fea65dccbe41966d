"""
Utilities for GridTrace.

Contains:
- jax_utils: JAX guards and jit helpers
- config: package-wide settings
- logging: timers, memory monitoring and verbose messages
"""

from .jax_utils import (
    JAX_AVAILABLE,
    get_jax_version,
    get_devices,
    to_numpy,
    maybe_jit,
)

from .config import (
    PackageConfig,
    configure,
    get_config,
    reset_config,
)

from .logging import (
    Timer,
    timeit,
    memory_info,
    log,
)

__all__ = [
    "JAX_AVAILABLE",
    "get_jax_version",
    "get_devices",
    "to_numpy",
    "maybe_jit",
    "PackageConfig",
    "configure",
    "get_config",
    "reset_config",
    "Timer",
    "timeit",
    "memory_info",
    "log",
]
