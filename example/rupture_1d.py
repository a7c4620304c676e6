import jax

from tflbm import InputConstants, Run, visualise

# this line is added for debugging
# jax.config.update("jax_disable_jit", True)
jax.config.update("jax_enable_x64", True)


def film_rupture_1d():
    """A perturbed film on a partially wetting substrate thins until it ruptures."""
    print("\n=== 1D Thin Film Rupture ===")

    constants = InputConstants(
        lx=512,
        ly=1,
        maxruntime=100000,
        dumping=10000,
        gravity=0.0,
        gamma=0.01,
        delta=1.0,
    )

    sim = Run(
        constants,
        init_type="sine",
        init_kwargs=dict(height=1.0, amplitude=0.1, wavenumber=2),
        theta=1 / 9,
        hmin=0.1,
        exponents=(9, 3),
        simulation_name="film_rupture_1d",
    )
    sim.run(verbose=True)
    return sim


if __name__ == "__main__":
    sim_rupture = film_rupture_1d()
    visualise(sim_rupture, "1D film rupture")
