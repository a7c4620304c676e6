import jax
import matplotlib

# Moment identities are checked to 1e-12, which needs double precision.
jax.config.update("jax_enable_x64", True)
matplotlib.use("Agg")

import numpy as np
import pytest

from tflbm.grid import Grid
from tflbm.lattice import Lattice


@pytest.fixture
def d1q3():
    return Lattice("D1Q3")


@pytest.fixture
def d2q9():
    return Lattice("D2Q9")


@pytest.fixture
def grid_1d():
    return Grid((16,))


@pytest.fixture
def grid_2d():
    return Grid((8, 6))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
