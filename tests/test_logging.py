# tests/test_logging.py
import pytest

import gridtrace as gt
from gridtrace.utils.logging import Timer, timeit, memory_info, log


def test_timer_measures_elapsed_time():
    timer = Timer("work")
    assert timer.elapsed == 0.0
    with pytest.raises(RuntimeError):
        timer.stop()

    with timer:
        sum(range(1000))

    assert timer.elapsed > 0.0
    assert timer.memory_delta is None


def test_memory_tracking():
    with timeit("alloc", track_memory=True) as timer:
        data = [0] * 100000
    assert len(data) == 100000
    assert set(timer.memory_delta) == {"rss_mb", "vms_mb", "available_mb", "percent_used"}
    assert memory_info()["rss_mb"] > 0


def test_output_only_when_verbose(capsys):
    log("quiet")
    with Timer("silent"):
        pass
    assert capsys.readouterr().out == ""

    gt.configure(verbose=True)
    log("loud")
    with Timer("phase"):
        pass
    out = capsys.readouterr().out
    assert "[gridtrace] loud" in out
    assert "[gridtrace] phase:" in out


def test_advection_reports_phase_timings(capsys):
    gt.configure(verbose=True)
    grid = gt.RegularCartesianGrid(size=(2, 2, 2))
    model = gt.ParticleModel(grid, architecture=gt.SerialCPU())
    particles = gt.LagrangianParticles([0.5], [0.5], [0.5])

    gt.advect_particles(particles, model, 0.1)

    out = capsys.readouterr().out
    assert "advect 1 particles" in out
    assert "track 0 fields" in out
