"""
Tests for the collision-streaming loop, its state machine and the dumps.
"""

import json
import os

import jax.numpy as jnp
import numpy as np
import pytest

from tflbm.config import InputConstants
from tflbm.errors import ConfigurationError, DimensionMismatchError, NumericalDivergenceError
from tflbm.fields import MacroscopicState, VectorField
from tflbm.operators.pressure import PerSiteContactAngle
from tflbm.run import Run, RunState
from tflbm.simulations import ThinFilmSimulation
from tflbm.utils import visualise


class DumpRecorder:
    def __init__(self):
        self.timesteps = []
        self.states = []

    def __call__(self, state, timestep):
        assert np.all(np.isfinite(state.height))
        self.timesteps.append(timestep)
        self.states.append(state)


@pytest.fixture
def recorder():
    return DumpRecorder()


def flat_film(height=1.0):
    def provider(grid):
        h = jnp.full(grid.shape, height)
        return MacroscopicState.from_height(h)

    return provider


class TestSteadyState:

    def test_flat_film_2d(self, recorder):
        constants = InputConstants(8, 6, 5, 1, 0.0, 0.01, 1.0)
        run = Run(constants, initial_condition=flat_film(1.0), dump_sink=recorder)
        run.initialise()
        before = run.state

        after = run.step()

        np.testing.assert_allclose(after.height, before.height, rtol=1e-12)
        np.testing.assert_allclose(after.velocity.x, 0.0, atol=1e-14)
        np.testing.assert_allclose(after.velocity.y, 0.0, atol=1e-14)

    def test_flat_film_1d(self, recorder):
        constants = InputConstants(lx=16, ly=1, maxruntime=10, dumping=5)
        run = Run(constants, initial_condition=flat_film(0.7), dump_sink=recorder)

        final = run.run(verbose=False)

        np.testing.assert_allclose(final.height, 0.7, rtol=1e-12)
        np.testing.assert_allclose(final.velocity, 0.0, atol=1e-14)


class TestEvolution:

    def test_mass_conservation_1d(self, recorder):
        constants = InputConstants(lx=64, ly=1, maxruntime=200, dumping=50, gamma=0.01)
        run = Run(
            constants,
            init_type="sine",
            init_kwargs=dict(height=1.0, amplitude=0.1),
            dump_sink=recorder,
        )
        initial = run.initialise()

        final = run.run(verbose=False)

        assert np.isclose(jnp.sum(final.height), jnp.sum(initial.height), rtol=1e-12)

    def test_surface_tension_levels_film(self, recorder):
        """Capillarity flattens a thick film with a small perturbation."""
        constants = InputConstants(lx=32, ly=1, maxruntime=1000, dumping=500, gamma=0.01)
        run = Run(
            constants,
            init_type="sine",
            init_kwargs=dict(height=2.0, amplitude=0.05),
            dump_sink=recorder,
        )
        initial = run.initialise()
        amplitude_0 = float(jnp.max(initial.height) - jnp.min(initial.height))

        final = run.run(verbose=False)

        amplitude = float(jnp.max(final.height) - jnp.min(final.height))
        assert amplitude < amplitude_0

    def test_mass_conservation_2d_with_gravity(self, recorder):
        constants = InputConstants(16, 8, 50, 10, 0.001, 0.01, 1.0)
        run = Run(
            constants,
            init_type="sine",
            init_kwargs=dict(height=1.0, amplitude=0.05, wavenumber=2),
            dump_sink=recorder,
        )
        initial = run.initialise()

        final = run.run(verbose=False)

        assert isinstance(final.velocity, VectorField)
        assert np.isclose(jnp.sum(final.height), jnp.sum(initial.height), rtol=1e-12)
        # Perturbation is along x only, so no flow develops along y
        np.testing.assert_allclose(final.velocity.y, 0.0, atol=1e-12)

    @pytest.mark.parametrize("ly", [1, 6])
    def test_chemical_step_on_either_dimension(self, recorder, ly):
        constants = InputConstants(lx=12, ly=ly, maxruntime=6, dumping=3)
        theta = PerSiteContactAngle.chemical_step(constants.shape, theta_left=1 / 18, theta_right=1 / 6)
        run = Run(constants, initial_condition=flat_film(1.0), dump_sink=recorder, theta=theta)
        initial = run.initialise()

        final = run.run(verbose=False)

        assert run.status == RunState.TERMINATED
        assert recorder.timesteps == [3, 6]
        assert final.height.shape == constants.shape
        assert np.isclose(jnp.sum(final.height), jnp.sum(initial.height), rtol=1e-12)


class TestStateMachine:

    def test_lifecycle(self, recorder):
        constants = InputConstants(lx=8, ly=1, maxruntime=3, dumping=1)
        run = Run(constants, initial_condition=flat_film(), dump_sink=recorder)
        assert run.status is RunState.UNINITIALIZED

        run.initialise()
        assert run.status is RunState.RUNNING
        assert run.timestep == 0

        run.run(verbose=False)
        assert run.status is RunState.TERMINATED
        assert run.timestep == 3

        with pytest.raises(RuntimeError):
            run.step()

    def test_dumps_at_multiples_of_interval(self, recorder):
        constants = InputConstants(lx=8, ly=1, maxruntime=10, dumping=3)
        run = Run(constants, initial_condition=flat_film(), dump_sink=recorder)

        run.run(verbose=False)

        assert recorder.timesteps == [3, 6, 9]

    def test_dumping_status_during_sink(self):
        constants = InputConstants(lx=8, ly=1, maxruntime=2, dumping=2)
        seen = []
        run = Run(
            constants,
            initial_condition=flat_film(),
            dump_sink=lambda state, t: seen.append(run.status),
        )

        run.run(verbose=False)

        assert seen == [RunState.DUMPING]
        assert run.status is RunState.TERMINATED

    def test_stop_between_ticks(self, recorder):
        constants = InputConstants(lx=8, ly=1, maxruntime=100, dumping=1)

        def sink(state, t):
            if t == 4:
                run.stop()

        run = Run(constants, initial_condition=flat_film(), dump_sink=sink)
        run.run(verbose=False)

        assert run.timestep == 4
        assert run.status is RunState.RUNNING

    def test_step_initialises(self, recorder):
        constants = InputConstants(lx=8, ly=1, maxruntime=5, dumping=5)
        run = Run(constants, initial_condition=flat_film(), dump_sink=recorder)
        run.step()
        assert run.timestep == 1


class TestErrors:

    def test_ruptured_initial_film(self, recorder):
        constants = InputConstants(lx=8, ly=1, maxruntime=5, dumping=1)
        state = MacroscopicState.from_height(jnp.ones(8).at[2].set(0.0))
        run = Run(constants, initial_condition=state, dump_sink=recorder)

        with pytest.raises(NumericalDivergenceError) as excinfo:
            run.initialise()

        assert excinfo.value.timestep == 0
        assert excinfo.value.field == "pressure"
        assert run.status is RunState.FAILED

    def test_divergence_during_run(self, recorder, monkeypatch):
        constants = InputConstants(lx=8, ly=1, maxruntime=10, dumping=1)
        run = Run(constants, initial_condition=flat_film(), dump_sink=recorder)
        run.initialise()
        step = run.simulation.run_timestep

        def diverging(f, state):
            f, state = step(f, state)
            if run.timestep == 2:
                state = state._replace(velocity=state.velocity.at[0].set(jnp.nan))
            return f, state

        monkeypatch.setattr(run.simulation, "run_timestep", diverging)

        with pytest.raises(NumericalDivergenceError) as excinfo:
            run.run(verbose=False)

        assert excinfo.value.timestep == 3
        assert excinfo.value.field == "velocity"
        assert recorder.timesteps == [1, 2]
        assert run.status is RunState.FAILED

    def test_extent_mismatch(self, recorder):
        constants = InputConstants(8, 6, 5, 1)
        state = MacroscopicState.from_height(jnp.ones((6, 8)))
        run = Run(constants, initial_condition=state, dump_sink=recorder)

        with pytest.raises(DimensionMismatchError):
            run.initialise()

    def test_velocity_kind_mismatch(self, recorder):
        constants = InputConstants(8, 6, 5, 1)
        h = jnp.ones((8, 6))
        state = MacroscopicState(h, jnp.zeros((8, 6)), jnp.zeros((8, 6)), jnp.zeros((8, 6)))
        run = Run(constants, initial_condition=state, dump_sink=recorder)

        with pytest.raises(DimensionMismatchError):
            run.initialise()

    def test_lattice_mismatch(self):
        with pytest.raises(ConfigurationError):
            ThinFilmSimulation(InputConstants(lx=8, ly=1, maxruntime=5, dumping=1), lattice_type="D2Q9")

    def test_unknown_init_type(self, recorder):
        constants = InputConstants(lx=8, ly=1, maxruntime=5, dumping=1)
        run = Run(constants, init_type="droplet", dump_sink=recorder)
        with pytest.raises(ConfigurationError):
            run.initialise()


class TestOutput:

    def test_default_sink_writes_npz(self, tmp_path):
        constants = InputConstants(8, 4, 4, 2, 0.0, 0.01, 1.0)
        run = Run(constants, results_dir=str(tmp_path), simulation_name="flat")

        run.run(verbose=True)

        data_dir = run.io_handler.data_dir
        assert sorted(os.listdir(data_dir)) == ["timestep_2.npz", "timestep_4.npz"]
        data = np.load(os.path.join(data_dir, "timestep_4.npz"))
        assert data["height"].shape == (8, 4)
        assert data["velocity"].shape == (8, 4, 2)
        assert data["pressure"].shape == (8, 4)

        with open(os.path.join(run.io_handler.run_dir, "config.json")) as f:
            config = json.load(f)
        assert config["lx"] == 8
        assert config["lattice_type"] == "D2Q9"
        assert os.path.exists(os.path.join(run.io_handler.run_dir, "simulation.log"))

    def test_restart_from_dump(self, tmp_path, recorder):
        constants = InputConstants(lx=16, ly=1, maxruntime=20, dumping=10)
        first = Run(
            constants,
            init_type="sine",
            init_kwargs=dict(amplitude=0.1),
            results_dir=str(tmp_path),
        )
        final = first.run(verbose=False)
        path = os.path.join(first.io_handler.data_dir, "timestep_20.npz")

        second = Run(constants, init_type="init_from_file", init_dir=path, dump_sink=recorder)
        restarted = second.initialise()

        np.testing.assert_allclose(restarted.height, final.height, rtol=1e-14)
        np.testing.assert_allclose(restarted.velocity, final.velocity, rtol=1e-14)

    def test_visualise(self, tmp_path):
        constants = InputConstants(lx=16, ly=1, maxruntime=4, dumping=2)
        run = Run(
            constants,
            init_type="sine",
            init_kwargs=dict(amplitude=0.1),
            results_dir=str(tmp_path),
        )
        run.run(verbose=False)

        written = visualise(run)

        assert [os.path.basename(p) for p in written] == ["timestep_2.png", "timestep_4.png"]
        assert all(os.path.exists(p) for p in written)
