import logging
import os

import matplotlib.pyplot as plt
import numpy as np

logger = logging.getLogger(__name__)


def _timestep_of(filename):
    return int(filename.split("_")[-1].split(".")[0])


def _plot_1d(axes, data):
    x = np.arange(data["height"].shape[0])
    axes[0].plot(x, data["height"], color="tab:blue")
    axes[0].set_ylabel("h")
    axes[0].set_title("Film height")

    axes[1].plot(x, data["velocity"], color="tab:orange")
    axes[1].set_ylabel("u")
    axes[1].set_title("Velocity")

    axes[2].plot(x, data["pressure"], color="tab:green")
    axes[2].set_ylabel("p")
    axes[2].set_title("Film pressure")
    for ax in axes:
        ax.set_xlabel("x")


def _plot_2d(fig, axes, data):
    height = data["height"]
    velocity = data["velocity"]
    u_mag = np.sqrt(velocity[..., 0] ** 2 + velocity[..., 1] ** 2)

    im0 = axes[0].imshow(height.T, origin="lower", cmap="viridis")
    axes[0].set_title("Film height")
    fig.colorbar(im0, ax=axes[0])

    im1 = axes[1].imshow(u_mag.T, origin="lower", cmap="magma")
    # Thin out the arrows on large lattices
    step = max(1, min(height.shape) // 16)
    x, y = np.meshgrid(np.arange(height.shape[0]), np.arange(height.shape[1]), indexing="ij")
    axes[1].quiver(
        x[::step, ::step],
        y[::step, ::step],
        velocity[::step, ::step, 0],
        velocity[::step, ::step, 1],
        color="white",
    )
    axes[1].set_title("Velocity magnitude")
    fig.colorbar(im1, ax=axes[1])

    im2 = axes[2].imshow(data["pressure"].T, origin="lower", cmap="coolwarm")
    axes[2].set_title("Film pressure")
    fig.colorbar(im2, ax=axes[2])
    for ax in axes:
        ax.set_xlabel("x")
        ax.set_ylabel("y")


def visualise(sim_instance, title="Thin film simulation"):
    """
    Plots every dumped timestep of a finished run into <run_dir>/plots.

    Args:
        sim_instance: The completed Run instance (needs an io_handler).
        title (str): The base title for the plots.

    Returns:
        list: Paths of the written figures.
    """
    io_handler = sim_instance.io_handler
    if io_handler is None:
        raise ValueError("visualise needs a run that dumps through SimulationIO")

    data_dir = io_handler.data_dir
    plot_dir = os.path.join(io_handler.run_dir, "plots")
    os.makedirs(plot_dir, exist_ok=True)

    files = [f for f in os.listdir(data_dir) if f.endswith(".npz")]
    if not files:
        logger.info("No data files found to visualise.")
        return []
    files.sort(key=_timestep_of)

    written = []
    for filename in files:
        timestep = _timestep_of(filename)
        data = np.load(os.path.join(data_dir, filename))

        fig, axes = plt.subplots(1, 3, figsize=(18, 5))
        if data["height"].ndim == 1:
            _plot_1d(axes, data)
        else:
            _plot_2d(fig, axes, data)
        fig.suptitle(f"{title} (timestep {timestep})")
        fig.tight_layout()

        path = os.path.join(plot_dir, f"timestep_{timestep}.png")
        fig.savefig(path)
        plt.close(fig)
        written.append(path)

    logger.info("Saved %d plots to %s", len(written), plot_dir)
    return written
