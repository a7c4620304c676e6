import json
import logging
import os
import sys
from datetime import datetime
from typing import Dict

import jax.numpy as jnp
import numpy as np

from tflbm.fields.fields import MacroscopicState

logger = logging.getLogger(__name__)


class CustomJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        # Handle JAX arrays
        if isinstance(obj, jnp.ndarray):
            return obj.tolist()
        # Handle other numpy arrays and scalars
        if hasattr(obj, "tolist"):
            return obj.tolist()
        # Handle operator or model objects
        if hasattr(obj, "__class__") and hasattr(obj, "__dict__"):
            return {
                "__class__": obj.__class__.__name__,
                "__module__": obj.__class__.__module__,
            }
        return super().default(obj)


class SimulationIO:
    """
    Handles all I/O operations for the simulation, including logging and saving results.
    """

    def __init__(self, base_dir: str = "results", config: Dict = None, simulation_name: str = None):
        """
        Initializes the IO handler.

        Args:
            base_dir (str): The base directory to store simulation results.
            config (Dict, optional): A dictionary containing the simulation configuration to save.
            simulation_name (str, optional): Name of the simulation to include in the results directory.
        """
        self.base_dir = base_dir
        self.simulation_name = simulation_name
        self.run_dir = self._create_timestamped_directory()
        self.data_dir = os.path.join(self.run_dir, "data")
        os.makedirs(self.data_dir, exist_ok=True)

        self._setup_logging()

        if config:
            self.save_config(config)

    def _setup_logging(self) -> None:
        """
        Configure the root logger to write to the console and to
        <run_dir>/simulation.log. Handlers installed by a previous
        SimulationIO are replaced to avoid duplicate lines when several
        simulations run in the same interpreter.
        """
        log_file = os.path.join(self.run_dir, "simulation.log")

        fmt = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(fmt)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(fmt)

        root = logging.getLogger()
        for h in root.handlers[:]:
            if getattr(h, "_tflbm_handler", False):
                root.removeHandler(h)
                h.close()
        file_handler._tflbm_handler = True
        console_handler._tflbm_handler = True
        root.setLevel(logging.INFO)
        root.addHandler(file_handler)
        root.addHandler(console_handler)

    def _create_timestamped_directory(self) -> str:
        """Creates a unique, timestamped directory for a single simulation run."""
        timestamp = datetime.now().strftime("%Y-%m-%d/%H-%M-%S")
        if self.simulation_name:
            rundir = os.path.join(self.base_dir, f"{timestamp}_{self.simulation_name}")
        else:
            rundir = os.path.join(self.base_dir, timestamp)
        os.makedirs(rundir, exist_ok=True)
        return rundir

    def save_config(self, config: Dict):
        """Saves the simulation configuration to a JSON file using CustomJSONEncoder."""
        config_path = os.path.join(self.run_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump(config, f, indent=4, cls=CustomJSONEncoder)
        logger.info("Configuration saved to %s", config_path)

    def save_data_step(self, iteration: int, data: Dict[str, np.ndarray]):
        """Saves the data for a single timestep to a .npz file."""
        filename = os.path.join(self.data_dir, f"timestep_{iteration}.npz")
        np.savez(filename, **data)
        return filename

    def save_state(self, state: MacroscopicState, timestep: int):
        """Dump sink: writes height, velocity, pressure and energy of one timestep."""
        return self.save_data_step(timestep, state.to_numpy())
