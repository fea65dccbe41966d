# tests/test_advection.py
import time

import numpy as np
import pytest

import gridtrace as gt


def bounded_grid(**kwargs):
    return gt.RegularCartesianGrid(size=(4, 4, 4), topology=(gt.Bounded, gt.Bounded, gt.Bounded), **kwargs)


def make_model(grid, architecture, **velocities):
    return gt.ParticleModel(grid, velocities=gt.velocity_fields(grid, **velocities),
                            architecture=architecture)


@pytest.mark.parametrize("restitution, expected_x", [(1.0, 0.5), (0.0, 1.0), (0.5, 0.75)])
def test_reflection_off_the_right_wall(architecture, restitution, expected_x):
    model = make_model(bounded_grid(), architecture, u=2.0)
    particles = gt.LagrangianParticles([0.5], [0.5], [0.5], restitution=restitution)

    gt.advect_particles(particles, model, 0.5)

    assert particles.x[0] == pytest.approx(expected_x)
    assert particles.y[0] == pytest.approx(0.5)
    assert particles.z[0] == pytest.approx(0.5)


def test_boundaries_act_on_the_updated_position_per_axis(architecture):
    grid = gt.RegularCartesianGrid(size=(4, 4, 4), topology=(gt.Bounded, gt.Periodic, gt.Bounded))
    model = make_model(grid, architecture, u=1.0, v=0.5)
    particles = gt.LagrangianParticles([0.9], [0.95], [0.5], restitution=0.5)

    gt.advect_particles(particles, model, 0.2)

    assert particles.x[0] == pytest.approx(0.95)
    assert particles.y[0] == pytest.approx(0.05)
    assert particles.z[0] == pytest.approx(0.5)


def test_velocity_is_sampled_at_the_start_of_the_step(architecture):
    grid = bounded_grid()
    model = make_model(grid, architecture, u=1.0, v=lambda x, y, z: x)
    particles = gt.LagrangianParticles([0.5], [0.5], [0.5])

    gt.advect_particles(particles, model, 0.1)

    assert particles.x[0] == pytest.approx(0.6)
    assert particles.y[0] == pytest.approx(0.55)


def test_tracked_properties_are_sampled_at_new_positions(architecture, linear_function, rng):
    grid = gt.RegularCartesianGrid(size=(8, 8, 8))
    model = make_model(grid, architecture, u=0.3, v=lambda x, y, z: 0.2 * np.sin(2 * np.pi * x), w=0.0)
    temperature = gt.Field((gt.Cell, gt.Cell, gt.Cell), grid).set(linear_function)
    particles = gt.particles_from_positions(rng.uniform(0.1, 0.9, size=(50, 3)),
                                            tracked_fields={"T": temperature})

    gt.advect_particles(particles, model, 0.05)

    expected = temperature.at(particles.x, particles.y, particles.z)
    np.testing.assert_allclose(particles["T"], expected, rtol=1e-12)


def test_none_particles_is_a_no_op():
    class Untouchable:
        def launch(self, *args, **kwargs):
            raise AssertionError("no kernel may be launched")

        def synchronize(self, event):
            raise AssertionError("nothing to wait for")

    grid = bounded_grid()
    model = gt.ParticleModel(grid, architecture=Untouchable())

    assert gt.advect_particles(None, model, 0.1) is None
    assert gt.advect_model_particles(model, 0.1) is None


def test_tracked_fields_are_sampled_independently(architecture):
    grid = bounded_grid()
    model = make_model(grid, architecture, u=0.3, v=-0.2)

    def slow(g):
        time.sleep(0.02)
        X, Y, Z = np.meshgrid(g.xC, g.yC, g.zC, indexing="ij")
        return X + 2.0 * Y

    def faces(g):
        X, Y, Z = np.meshgrid(g.xF, g.yC, g.zC, indexing="ij")
        return -3.0 * X - Z

    a = gt.ComputedField((gt.Cell, gt.Cell, gt.Cell), grid, operation=slow)
    b = gt.ComputedField((gt.Face, gt.Cell, gt.Cell), grid, operation=faces)
    particles = gt.LagrangianParticles([0.2, 0.5], [0.3, 0.6], [0.5, 0.5],
                                       tracked_fields={"a": a, "b": b})

    gt.advect_particles(particles, model, 0.5)

    np.testing.assert_allclose(particles.x, [0.35, 0.65])
    np.testing.assert_allclose(particles.y, [0.2, 0.5])
    np.testing.assert_allclose(particles["a"], a.at(particles.x, particles.y, particles.z), rtol=1e-12)
    np.testing.assert_allclose(particles["b"], b.at(particles.x, particles.y, particles.z), rtol=1e-12)
    # Linear inside the node range, so these are the exact values at the new positions
    np.testing.assert_allclose(particles["a"], [0.75, 1.65])
    np.testing.assert_allclose(particles["b"], [-1.55, -2.45])


def test_computed_fields_are_refreshed_every_step(architecture):
    grid = bounded_grid()
    model = make_model(grid, architecture)
    counter = gt.ComputedField((gt.Cell, gt.Cell, gt.Cell), grid,
                               operation=lambda g: counter.compute_count + 1)
    particles = gt.LagrangianParticles([0.5], [0.5], [0.5], tracked_fields={"n": counter})

    for _ in range(3):
        gt.advect_particles(particles, model, 0.1)

    assert counter.compute_count == 3
    assert particles["n"][0] == pytest.approx(3.0)


def test_many_work_groups_give_the_single_wrap_result(architecture, rng):
    gt.configure(max_threads_per_block=7)
    grid = gt.RegularCartesianGrid(size=(5, 5, 5), topology=(gt.Periodic, gt.Periodic, gt.Periodic))
    model = make_model(grid, architecture, u=0.3, v=-0.7, w=0.45)
    x0, y0, z0 = rng.uniform(0.0, 1.0, size=(3, 200))
    particles = gt.LagrangianParticles(x0, y0, z0)

    gt.advect_particles(particles, model, 1.0)

    def wrap(x):
        return np.where(x > 1.0, x - 1.0, np.where(x < 0.0, x + 1.0, x))

    np.testing.assert_allclose(particles.x, wrap(x0 + 0.3), atol=1e-12)
    np.testing.assert_allclose(particles.y, wrap(y0 - 0.7), atol=1e-12)
    np.testing.assert_allclose(particles.z, wrap(z0 + 0.45), atol=1e-12)


def test_threaded_and_serial_architectures_agree(rng):
    gt.configure(max_threads_per_block=16)
    grid = gt.RegularCartesianGrid(size=(6, 6, 6), topology=(gt.Periodic, gt.Bounded, gt.Bounded))
    velocities = gt.velocity_fields(grid, u=lambda x, y, z: np.sin(np.pi * y),
                                    v=lambda x, y, z: 0.3 * np.cos(2 * np.pi * x),
                                    w=lambda x, y, z: 0.1 * z)
    height = gt.Field((gt.Cell, gt.Cell, gt.Cell), grid).set(lambda x, y, z: z)
    positions = rng.uniform(0.0, 1.0, size=(300, 3))

    results = []
    for arch in (gt.CPU(max_workers=3), gt.SerialCPU()):
        model = gt.ParticleModel(grid, velocities=velocities, architecture=arch)
        particles = gt.particles_from_positions(positions, restitution=0.8,
                                                tracked_fields={"h": height})
        with arch:
            for _ in range(5):
                gt.advect_particles(particles, model, 0.05)
        results.append((particles.positions, particles["h"].copy()))

    np.testing.assert_allclose(results[0][0], results[1][0], rtol=0, atol=1e-12)
    np.testing.assert_allclose(results[0][1], results[1][1], rtol=0, atol=1e-12)


def test_empty_particle_set_is_handled(architecture):
    grid = bounded_grid()
    model = make_model(grid, architecture, u=1.0)
    field = gt.Field((gt.Cell, gt.Cell, gt.Cell), grid)
    particles = gt.LagrangianParticles([], [], [], tracked_fields={"f": field})

    gt.advect_particles(particles, model, 0.1)

    assert len(particles) == 0
    assert particles["f"].shape == (0,)


def test_compute_failures_propagate(architecture):
    grid = bounded_grid()
    model = make_model(grid, architecture, u=1.0)

    def broken(g):
        raise RuntimeError("cannot compute")

    field = gt.ComputedField((gt.Cell, gt.Cell, gt.Cell), grid, operation=broken)
    particles = gt.LagrangianParticles([0.5], [0.5], [0.5], tracked_fields={"f": field})

    with pytest.raises(RuntimeError, match="cannot compute"):
        gt.advect_particles(particles, model, 0.1)


def test_model_particles_are_advected(architecture):
    grid = bounded_grid()
    particles = gt.LagrangianParticles([0.25], [0.5], [0.5])
    model = gt.ParticleModel(grid, velocities=gt.velocity_fields(grid, w=-1.0),
                             particles=particles, architecture=architecture)

    gt.advect_model_particles(model, 0.25)

    assert model.particles.z[0] == pytest.approx(0.25)
    assert model.particles.x[0] == pytest.approx(0.25)


@pytest.mark.filterwarnings("ignore::RuntimeWarning")
def test_non_finite_positions_stay_non_finite(architecture):
    grid = bounded_grid()
    model = make_model(grid, architecture, u=0.5)
    particles = gt.LagrangianParticles([np.nan, 0.25], [0.5, 0.5], [0.5, 0.5])

    gt.advect_particles(particles, model, 0.5)

    assert np.isnan(particles.x[0])
    assert particles.x[1] == pytest.approx(0.5)
