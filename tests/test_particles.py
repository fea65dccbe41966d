# tests/test_particles.py
import numpy as np
import pytest

import gridtrace as gt


@pytest.fixture
def grid():
    return gt.RegularCartesianGrid(size=(4, 4, 4))


def test_coordinates_are_copied_into_contiguous_arrays():
    x = [0.1, 0.2, 0.3]
    particles = gt.LagrangianParticles(x, [0.5] * 3, np.zeros(3))

    assert len(particles) == 3
    assert particles.x.dtype == np.float64
    assert particles.x.flags["C_CONTIGUOUS"]
    np.testing.assert_array_equal(particles["x"], x)
    np.testing.assert_array_equal(particles.positions,
                                  [[0.1, 0.5, 0.0], [0.2, 0.5, 0.0], [0.3, 0.5, 0.0]])


def test_source_arrays_are_not_aliased():
    x = np.array([0.1, 0.2])
    particles = gt.LagrangianParticles(x, x, x)
    particles.x[0] = 0.9
    assert x[0] == 0.1


def test_unequal_lengths_are_rejected():
    with pytest.raises(ValueError):
        gt.LagrangianParticles([0.1, 0.2], [0.1], [0.1, 0.2])


@pytest.mark.parametrize("restitution", [-0.1, 1.5])
def test_restitution_must_lie_in_unit_interval(restitution):
    with pytest.raises(ValueError):
        gt.LagrangianParticles([0.5], [0.5], [0.5], restitution=restitution)


def test_tracked_fields_get_zeroed_properties(grid):
    temperature = gt.Field((gt.Cell, gt.Cell, gt.Cell), grid).set(4.0)
    particles = gt.LagrangianParticles([0.1, 0.2], [0.1, 0.2], [0.1, 0.2],
                                       tracked_fields={"T": temperature})

    assert particles.tracked_names == ("T",)
    np.testing.assert_array_equal(particles["T"], [0.0, 0.0])
    assert particles.properties["T"].shape == (2,)
    assert "T" in repr(particles)


def test_tracked_field_names_cannot_shadow_coordinates(grid):
    field = gt.Field((gt.Cell, gt.Cell, gt.Cell), grid)
    with pytest.raises(ValueError):
        gt.LagrangianParticles([0.5], [0.5], [0.5], tracked_fields={"z": field})


def test_tracked_fields_must_look_like_fields():
    with pytest.raises(TypeError):
        gt.LagrangianParticles([0.5], [0.5], [0.5], tracked_fields={"bad": np.zeros((4, 4, 4))})


def test_empty_particle_set():
    particles = gt.LagrangianParticles([], [], [])
    assert len(particles) == 0
    assert particles.positions.shape == (0, 3)


def test_particles_from_positions(grid):
    field = gt.Field((gt.Cell, gt.Cell, gt.Cell), grid)
    particles = gt.particles_from_positions([[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]],
                                            restitution=0.5, tracked_fields={"c": field})
    np.testing.assert_array_equal(particles.z, [0.3, 0.6])
    assert particles.restitution == 0.5
    assert particles.tracked_names == ("c",)

    single = gt.particles_from_positions([0.1, 0.2, 0.3])
    assert len(single) == 1

    with pytest.raises(ValueError):
        gt.particles_from_positions(np.zeros((5, 2)))


def test_float32_configuration_sets_particle_dtype():
    gt.configure(dtype="float32")
    particles = gt.LagrangianParticles([0.5], [0.5], [0.5])
    assert particles.x.dtype == np.float32
