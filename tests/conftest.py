import os

import numpy as np
import pytest

from pySHOC.testing import BaselineAction


def pytest_addoption(parser):
    parser.addoption("--backend", action="store", default="numpy")
    parser.addoption(
        "--baseline-action",
        action="store",
        default="none",
        choices=[action.value for action in BaselineAction],
        help="compare against or generate the w3 baseline trace",
    )
    parser.addoption(
        "--baseline-dir",
        action="store",
        default=None,
        help="directory holding the baseline traces",
    )


@pytest.fixture
def backend(pytestconfig):
    return pytestconfig.getoption("backend")


@pytest.fixture
def baseline_action(pytestconfig):
    return BaselineAction(pytestconfig.getoption("baseline_action"))


@pytest.fixture
def baseline_dir(pytestconfig, tmp_path):
    baseline_dir = pytestconfig.getoption("baseline_dir")
    if baseline_dir is None:
        return str(tmp_path)
    return os.path.abspath(baseline_dir)


@pytest.fixture
def convective_profile():
    """
    Interface profiles representative of a convective boundary layer,
    ordered from the model top down to the surface.
    """
    return {
        # vertical velocity second moment [m2/s2]
        "w_sec_zi": np.array([0.2, 0.3, 0.5, 0.4, 0.3, 0.1]),
        # potential temperature second moment [K2]
        "thl_sec": np.array([0.5, 0.9, 1.2, 0.8, 0.4, 0.3]),
        # vertical flux of temperature [K m/s]
        "wthl_sec": np.array([0.003, -0.03, -0.04, -0.01, 0.01, 0.03]),
        # interface heights [m]
        "zi_grid": np.array([9000.0, 5000.0, 1500.0, 900.0, 500.0, 0.0]),
        # return to isotropy timescale [s]
        "isotropy_zi": np.array([2000.0, 3000.0, 5000.0, 2000.0, 1000.0, 500.0]),
        # Brunt Vaisala frequency [s-1]
        "brunt_zi": np.array([4e-5, 3e-5, 3e-5, 2e-5, 2e-5, -1e-5]),
        # potential temperature [K]
        "thetal_zi": np.array([330.0, 325.0, 320.0, 310.0, 300.0, 301.0]),
    }
