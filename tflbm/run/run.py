import logging
from enum import Enum

import jax.numpy as jnp

from tflbm.config.input_constants import InputConstants
from tflbm.errors import NumericalDivergenceError
from tflbm.fields.fields import MacroscopicState, VectorField
from tflbm.simulations.thinfilm import ThinFilmSimulation

logger = logging.getLogger(__name__)


class RunState(Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    DUMPING = "dumping"
    TERMINATED = "terminated"
    FAILED = "failed"


class Run:
    """
    Drives a thin film simulation from its initial condition to `maxruntime`.

    The run owns the current macroscopic state and the populations. Each call
    to `step` advances them by one collision-streaming tick, checks that every
    field is still finite and hands the state to the dump sink whenever the
    timestep is a multiple of the dump interval.

    States: UNINITIALIZED -> RUNNING (-> DUMPING -> RUNNING)* -> TERMINATED,
    or FAILED once a field diverges.
    """

    def __init__(
        self,
        constants: InputConstants,
        *,
        initial_condition=None,
        init_type="standard",
        init_dir=None,
        init_kwargs=None,
        dump_sink=None,
        results_dir="results",
        simulation_name=None,
        **kwargs,
    ):
        """
        Args:
            constants (InputConstants): Runtime constants.
            initial_condition: A MacroscopicState, or a callable taking the Grid
                and returning one. Takes precedence over `init_type`.
            init_type (str): "standard", "sine" or "init_from_file".
            init_dir (str): .npz snapshot for "init_from_file".
            init_kwargs (dict): Keyword arguments of the initialisation routine.
            dump_sink: Callable `sink(state, timestep)`. Defaults to writing
                .npz files through SimulationIO into `results_dir`.
            results_dir (str): Base directory of the default dump sink.
            simulation_name (str): Suffix of the results directory.
            **kwargs: Passed to ThinFilmSimulation (tau, theta, hmin, exponents,
                lattice_type).
        """
        self.constants = constants
        self.simulation = ThinFilmSimulation(constants, **kwargs)
        self.initial_condition = initial_condition
        self.init_type = init_type
        self.init_dir = init_dir
        self.init_kwargs = dict(init_kwargs or {})

        self.config = self._build_config(
            init_type=init_type,
            init_dir=init_dir,
            init_kwargs=self.init_kwargs,
            lattice_type=self.simulation.lattice.name,
            tau=self.simulation.tau,
            theta=self.simulation.theta,
            hmin=self.simulation.hmin,
            exponents=self.simulation.exponents,
        )

        self.io_handler = None
        if dump_sink is None:
            from tflbm.utils.io import SimulationIO

            self.io_handler = SimulationIO(
                base_dir=results_dir, config=self.config, simulation_name=simulation_name
            )
            dump_sink = self.io_handler.save_state
        self.dump_sink = dump_sink

        self.status = RunState.UNINITIALIZED
        self.timestep = 0
        self.f = None
        self.state = None
        self._stop_requested = False

    def _build_config(self, **kwargs):
        config = self.constants.to_dict()
        config.update(kwargs)
        return config

    def initialise(self) -> MacroscopicState:
        """Build the initial state and its equilibrium populations."""
        sim = self.simulation
        ic = self.initial_condition
        if ic is None:
            f, state = sim.initialize_fields(
                self.init_type, init_dir=self.init_dir, **self.init_kwargs
            )
        elif isinstance(ic, MacroscopicState):
            f, state = sim.prepare(ic)
        else:
            f, state = sim.prepare(ic(sim.grid))

        self._check_finite(f, state, 0)
        self.f, self.state, self.timestep = f, state, 0
        self.status = RunState.RUNNING
        return state

    def _check_finite(self, f, state: MacroscopicState, timestep: int) -> None:
        fields = [("height", state.height)]
        if isinstance(state.velocity, VectorField):
            fields += [("velocity.x", state.velocity.x), ("velocity.y", state.velocity.y)]
        else:
            fields.append(("velocity", state.velocity))
        fields += [("pressure", state.pressure), ("distribution", f)]

        for name, field in fields:
            if not bool(jnp.all(jnp.isfinite(field))):
                self.status = RunState.FAILED
                logger.error("Non-finite %s at timestep %d, aborting run.", name, timestep)
                raise NumericalDivergenceError(timestep, name)

    def _dump(self) -> None:
        self.status = RunState.DUMPING
        self.dump_sink(self.state, self.timestep)
        self.status = RunState.RUNNING

    def step(self) -> MacroscopicState:
        """Advance the run by one timestep and return the new state."""
        if self.status is RunState.UNINITIALIZED:
            self.initialise()
        if self.status is not RunState.RUNNING:
            raise RuntimeError(f"Cannot step a run in state {self.status.value}")

        f, state = self.simulation.run_timestep(self.f, self.state)
        t = self.timestep + 1
        self._check_finite(f, state, t)
        self.f, self.state, self.timestep = f, state, t

        if t % self.constants.dumping == 0:
            self._dump()
        if t >= self.constants.maxruntime:
            self.status = RunState.TERMINATED
        return state

    def stop(self) -> None:
        """Request the loop in `run` to stop at the next tick boundary."""
        self._stop_requested = True

    def run(self, *, verbose=True) -> MacroscopicState:
        if self.status is RunState.UNINITIALIZED:
            self.initialise()
        nt = self.constants.maxruntime
        if verbose:
            logger.info("Starting thin film LBM simulation with %d time steps...", nt)
            logger.info(
                "Config -> Grid: %s, Lattice: %s, gravity: %g, gamma: %g, delta: %g",
                self.simulation.grid_shape,
                self.simulation.lattice.name,
                self.constants.gravity,
                self.constants.gamma,
                self.constants.delta,
            )

        self._stop_requested = False
        while self.status is RunState.RUNNING and not self._stop_requested:
            state = self.step()
            if verbose and self.timestep % self.constants.dumping == 0:
                if isinstance(state.velocity, VectorField):
                    u_max = jnp.max(jnp.sqrt(state.velocity.x ** 2 + state.velocity.y ** 2))
                else:
                    u_max = jnp.max(jnp.abs(state.velocity))
                logger.info(
                    "Step %d/%d: mean_h=%.6f, min_h=%.6f, max_u=%.6e",
                    self.timestep,
                    nt,
                    float(jnp.mean(state.height)),
                    float(jnp.min(state.height)),
                    float(u_max),
                )

        if verbose:
            if self.status is RunState.TERMINATED:
                logger.info("Simulation completed!")
            else:
                logger.info("Simulation stopped at timestep %d.", self.timestep)
            if self.io_handler is not None:
                logger.info("Results saved in: %s", self.io_handler.run_dir)
        return self.state
