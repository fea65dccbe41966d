# gridtrace/architectures.py
"""
Kernel launch facility.

An architecture runs a kernel over ``worksize`` particle indices split
into work-groups of at most ``workgroup`` contiguous indices. Each
work-group is one task; the kernel receives a ``slice`` selecting its
indices followed by the launch arguments. ``launch`` returns an ``Event``
that can be waited on; ``MultiEvent`` joins several of them.

- CPU: work-groups run on a ``ThreadPoolExecutor``
- SerialCPU: work-groups run inline at launch time, in order
"""

from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor, wait as _wait_futures
from typing import Callable, Iterable, List, Optional, Sequence, Union
import threading

from .utils.config import get_config

Kernel = Callable[..., None]


# ---------------------------------------------------------------------------
# Completion handles
# ---------------------------------------------------------------------------

class Event:
    """Completion handle of one kernel launch."""

    def __init__(self, futures: Sequence[Future] = ()):
        self.futures: List[Future] = list(futures)

    def done(self) -> bool:
        return all(f.done() for f in self.futures)

    def wait(self) -> None:
        """
        Block until every work-group has finished.

        The first exception raised by a work-group is re-raised here.
        """
        _wait_futures(self.futures)
        for f in self.futures:
            f.result()

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"Event({len(self.futures)} work-groups, {state})"


class MultiEvent:
    """Join of several events."""

    def __init__(self, events: Iterable[Union[Event, "MultiEvent"]] = ()):
        self.events = list(events)

    def done(self) -> bool:
        return all(e.done() for e in self.events)

    def wait(self) -> None:
        for e in self.events:
            e.wait()

    def __len__(self) -> int:
        return len(self.events)


def _completed(fn: Callable[[], None]) -> Future:
    """Run ``fn`` now and wrap its outcome in a finished Future."""
    future: Future = Future()
    try:
        fn()
    except Exception as exc:  # re-raised by Event.wait
        future.set_exception(exc)
    else:
        future.set_result(None)
    return future


def workgroups(worksize: int, workgroup: int) -> List[slice]:
    """Contiguous index ranges covering [0, worksize) in chunks of ``workgroup``."""
    if workgroup < 1:
        raise ValueError(f"workgroup must be >= 1, got {workgroup}")
    return [slice(start, min(start + workgroup, worksize))
            for start in range(0, worksize, workgroup)]


# ---------------------------------------------------------------------------
# Architectures
# ---------------------------------------------------------------------------

class CPU:
    """
    Multi-threaded CPU architecture.

    Parameters
    ----------
    max_workers : int, optional
        Thread-pool size. Defaults to ``get_config().workers`` (physical
        cores unless configured otherwise).
    """

    def __init__(self, max_workers: Optional[int] = None):
        if max_workers is not None and int(max_workers) < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    @property
    def executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                workers = self.max_workers or get_config().workers
                self._executor = ThreadPoolExecutor(max_workers=workers,
                                                    thread_name_prefix="gridtrace")
            return self._executor

    def launch(self, kernel: Kernel, worksize: int, workgroup: int, *args,
               dependencies: Optional[Iterable[Union[Event, MultiEvent]]] = None) -> Event:
        """
        Launch ``kernel`` over ``worksize`` indices without blocking.

        Work-groups start only after every event in ``dependencies`` has
        completed.
        """
        worksize = int(worksize)
        if worksize == 0:
            return Event()
        deps = list(dependencies or ())
        groups = workgroups(worksize, int(workgroup))

        def task(index: slice) -> None:
            for dep in deps:
                dep.wait()
            kernel(index, *args)

        return Event([self.executor.submit(task, g) for g in groups])

    def synchronize(self, event: Union[Event, MultiEvent]) -> None:
        event.wait()

    def shutdown(self) -> None:
        """Release the thread pool; a later launch recreates it."""
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None

    def __enter__(self) -> "CPU":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_workers={self.max_workers})"


class SerialCPU(CPU):
    """Single-threaded architecture: work-groups run inline, in index order."""

    def launch(self, kernel: Kernel, worksize: int, workgroup: int, *args,
               dependencies: Optional[Iterable[Union[Event, MultiEvent]]] = None) -> Event:
        worksize = int(worksize)
        if worksize == 0:
            return Event()
        for dep in dependencies or ():
            dep.wait()
        return Event([_completed(lambda g=g: kernel(g, *args))
                      for g in workgroups(worksize, int(workgroup))])

    def shutdown(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Free-function facade
# ---------------------------------------------------------------------------

def device(arch) -> CPU:
    """Launcher for ``arch``; architectures are their own launchers."""
    if not hasattr(arch, "launch"):
        raise TypeError(f"{arch!r} is not a GridTrace architecture")
    return arch


def launch(arch, kernel: Kernel, worksize: int, workgroup: int, *args,
           dependencies: Optional[Iterable[Union[Event, MultiEvent]]] = None) -> Event:
    """Launch ``kernel`` on ``arch``; see ``CPU.launch``."""
    return device(arch).launch(kernel, worksize, workgroup, *args, dependencies=dependencies)


def wait(arch, event: Union[Event, MultiEvent]) -> None:
    """Block until ``event`` (or every event of a MultiEvent) completes."""
    device(arch).synchronize(event)
