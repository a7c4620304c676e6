import jax

from tflbm import InputConstants, PerSiteContactAngle, Run, read_input, visualise

jax.config.update("jax_enable_x64", True)


def dewetting_chemical_step(input_file=None):
    """A flat film dewets from the less wettable half of a patterned substrate."""
    print("\n=== 2D Dewetting on a Chemical Step ===")

    if input_file is not None:
        constants = read_input(input_file)
    else:
        constants = InputConstants(128, 128, 50000, 5000, 0.0, 0.01, 1.0)

    grid_shape = constants.shape
    theta = PerSiteContactAngle.chemical_step(grid_shape, theta_left=1 / 18, theta_right=1 / 6)

    sim = Run(
        constants,
        init_type="sine",
        init_kwargs=dict(height=1.0, amplitude=0.01, wavenumber=4),
        theta=theta,
        simulation_name="dewetting_chemical_step",
    )
    sim.run(verbose=True)
    return sim


if __name__ == "__main__":
    sim_dewetting = dewetting_chemical_step()
    visualise(sim_dewetting, "Dewetting on a chemical step")
