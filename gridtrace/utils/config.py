# gridtrace/utils/config.py
"""
Global package configuration.

Provides centralized settings for particle array precision, kernel
work-group sizing, thread-pool width and JAX acceleration across all
modules. Nothing here is read from the environment.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Dict, Any, Optional
import os
import warnings
import psutil

from .jax_utils import JAX_AVAILABLE, enable_x64, get_devices, get_jax_version


@dataclass
class PackageConfig:
    """
    Global configuration for GridTrace.

    Controls data types, kernel launch sizing and acceleration
    settings used by the particle kernels.
    """
    # Data type settings
    dtype: str = "float64"              # 'float32' | 'float64'

    # Kernel launch settings
    max_threads_per_block: int = 256    # Upper bound of a work-group
    max_workers: Optional[int] = None   # Thread-pool size; None -> physical cores

    # Performance settings
    use_jax_jit: bool = True            # JIT the trilinear gather when JAX is present

    # Progress and monitoring
    verbose: bool = False               # Phase timing reports

    # Environment settings
    _physical_cores: int = field(init=False, default=1)

    def __post_init__(self):
        self._detect_system_resources()
        self._validate_config()
        self._apply_jax_config()

    def _detect_system_resources(self):
        """Detect the number of physical cores for the default thread pool."""
        self._physical_cores = psutil.cpu_count(logical=False) or os.cpu_count() or 1

    def _validate_config(self):
        """Validate configuration settings."""
        if self.dtype not in ["float32", "float64"]:
            raise ValueError(f"dtype must be 'float32' or 'float64', got '{self.dtype}'")

        if int(self.max_threads_per_block) < 1:
            raise ValueError(f"max_threads_per_block must be positive, got {self.max_threads_per_block}")

        if self.max_workers is not None and int(self.max_workers) < 1:
            raise ValueError(f"max_workers must be positive or None, got {self.max_workers}")

    def _apply_jax_config(self):
        """Keep JAX precision in line with the particle array dtype."""
        if not JAX_AVAILABLE:
            return

        try:
            enable_x64(self.dtype == "float64")
        except (AttributeError, RuntimeError) as e:
            warnings.warn(f"JAX configuration failed: {e}")

    # ---------- Utility methods ----------

    @property
    def workers(self) -> int:
        """Thread-pool width used by the CPU architecture."""
        return int(self.max_workers) if self.max_workers is not None else self._physical_cores

    def get_system_info(self) -> Dict[str, Any]:
        """Get system resource information."""
        return {
            "physical_cores": self._physical_cores,
            "jax_available": JAX_AVAILABLE,
            "jax_version": get_jax_version(),
            "jax_devices": [str(d) for d in get_devices()],
            "current_config": {
                "dtype": self.dtype,
                "max_threads_per_block": self.max_threads_per_block,
                "workers": self.workers,
                "use_jax_jit": self.use_jax_jit,
            }
        }


# Global configuration instance
_global_config = PackageConfig()


def get_config() -> PackageConfig:
    """Get global package configuration."""
    return _global_config


def configure(**kwargs) -> None:
    """
    Configure package settings.

    Parameters
    ----------
    **kwargs : dict
        Configuration parameters to update. Unknown names are ignored
        with a warning.
    """
    settable = {f.name for f in fields(PackageConfig) if f.init}
    for key, value in kwargs.items():
        if key in settable:
            setattr(_global_config, key, value)
        else:
            warnings.warn(f"Unknown configuration parameter: {key}")

    # Re-validate and apply
    _global_config._validate_config()
    _global_config._apply_jax_config()


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _global_config
    _global_config = PackageConfig()
