# gridtrace/utils/logging.py
"""
Logging utilities: timers and memory monitoring.

Lightweight phase timing for the particle kernels. Messages go to stdout
only when the package is configured with ``verbose=True``.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
import time
from contextlib import contextmanager

import psutil

from .config import get_config


def log(message: str) -> None:
    """Print ``message`` when verbose output is enabled."""
    if get_config().verbose:
        print(f"[gridtrace] {message}", flush=True)


class Timer:
    """
    Simple timer for performance monitoring.

    Can be used as a context manager or manually started/stopped.
    Tracks wall time and, optionally, resident memory.
    """

    def __init__(self, name: str = "Timer", track_memory: bool = False):
        self.name = name
        self.track_memory = track_memory
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.start_memory: Optional[Dict[str, Any]] = None
        self.end_memory: Optional[Dict[str, Any]] = None

    def start(self) -> None:
        """Start the timer."""
        self.start_time = time.perf_counter()
        if self.track_memory:
            self.start_memory = memory_info()

    def stop(self) -> float:
        """Stop the timer and return elapsed time in seconds."""
        if self.start_time is None:
            raise RuntimeError("Timer not started")
        self.end_time = time.perf_counter()
        if self.track_memory:
            self.end_memory = memory_info()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time

    @property
    def memory_delta(self) -> Optional[Dict[str, Any]]:
        """Get memory usage delta (if tracking enabled)."""
        if not self.track_memory or self.start_memory is None or self.end_memory is None:
            return None
        return {key: self.end_memory[key] - self.start_memory[key]
                for key in self.start_memory if key in self.end_memory}

    def __enter__(self) -> 'Timer':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
        if exc_type is None:
            self.report()

    def report(self) -> None:
        """Log a timing report."""
        log(f"{self.name}: {self.elapsed:.6f}s")
        delta = self.memory_delta
        if delta is not None and "rss_mb" in delta:
            log(f"  Memory delta: {delta['rss_mb']:.1f} MB")


@contextmanager
def timeit(name: str = "Operation", track_memory: bool = False):
    """
    Context manager for timing operations.

    Example
    -------
    >>> with timeit("advect"):
    ...     pass
    """
    timer = Timer(name, track_memory=track_memory)
    with timer:
        yield timer


def memory_info() -> Dict[str, float]:
    """
    Get current memory usage of this process.

    Returns
    -------
    dict
        ``rss_mb``, ``vms_mb``, ``available_mb`` and ``percent_used``
    """
    process = psutil.Process()
    mem = process.memory_info()
    vm = psutil.virtual_memory()
    return {
        "rss_mb": mem.rss / 1024 / 1024,
        "vms_mb": mem.vms / 1024 / 1024,
        "available_mb": vm.available / 1024 / 1024,
        "percent_used": float(vm.percent),
    }
