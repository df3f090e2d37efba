import numpy as np
import pytest

from pySHOC import (
    ThirdMomentData,
    compute_diag_third_shoc_moment,
    compute_shoc_vertical_grid,
)
from pySHOC.constants import third_moment_coefficients


def make_convective_data(profile, shcol, backend, shoc_1p5tke=False):
    """
    Same profile in every column, with the temperature variance of
    column s scaled by s + 1.
    """
    nlevi = profile["zi_grid"].size
    data = ThirdMomentData(shcol=shcol, nlev=nlevi - 1, shoc_1p5tke=shoc_1p5tke)
    grid = compute_shoc_vertical_grid(
        np.tile(profile["zi_grid"], (shcol, 1)),
        np.tile(profile["w_sec_zi"], (shcol, 1)),
        backend=backend,
    )
    data.columns("w_sec")[:] = grid.w_sec
    data.columns("tke")[:] = grid.tke
    data.columns("dz_zt")[:] = grid.dz_zt
    data.columns("dz_zi")[:] = grid.dz_zi
    for name in ("wthl_sec", "w_sec_zi", "isotropy_zi", "brunt_zi", "thetal_zi"):
        data.columns(name)[:] = profile[name]
    for s in range(shcol):
        data.columns("thl_sec")[s] = (s + 1) * profile["thl_sec"]
    return data


@pytest.mark.parametrize("shcol", [2, 4])
def test_third_moment_convective_profile(backend, convective_profile, shcol):
    data = make_convective_data(convective_profile, shcol, backend)
    w3 = compute_diag_third_shoc_moment(data, backend=backend)

    assert w3 is data.w3
    columns = data.columns("w3")
    assert np.all(np.isfinite(columns))
    # no skewness at the model top and the surface
    np.testing.assert_array_equal(columns[:, 0], 0.0)
    np.testing.assert_array_equal(columns[:, -1], 0.0)
    assert np.all(np.abs(columns) < 10.0)
    for s in range(shcol):
        assert np.any(columns[s, 1:-1] > 0.0)
    # larger temperature variance gives larger skewness
    interior = np.abs(columns[:, 1:-1])
    for s in range(1, shcol):
        assert np.all(interior[s] > interior[s - 1])


def test_third_moment_reduced_tke_closure(backend, convective_profile):
    data = make_convective_data(
        convective_profile, shcol=2, backend=backend, shoc_1p5tke=True
    )
    data.w3[:] = 123.0
    compute_diag_third_shoc_moment(data, backend=backend)
    np.testing.assert_array_equal(data.w3, 0.0)


def test_third_moment_column_independence(backend, convective_profile):
    data = make_convective_data(convective_profile, shcol=3, backend=backend)
    compute_diag_third_shoc_moment(data, backend=backend)
    for icol in range(data.shcol):
        single = data.column_slice(icol)
        single.w3[:] = 0.0
        compute_diag_third_shoc_moment(single, backend=backend)
        np.testing.assert_array_equal(
            single.w3.view(np.uint64), data.columns("w3")[icol].view(np.uint64)
        )


def test_third_moment_zero_fluxes_give_no_skewness(backend, convective_profile):
    data = make_convective_data(convective_profile, shcol=1, backend=backend)
    data.wthl_sec[:] = 0.0
    data.thl_sec[:] = 0.0
    data.w_sec[:] = 0.3
    data.tke[:] = 0.45
    compute_diag_third_shoc_moment(data, backend=backend)
    np.testing.assert_allclose(data.w3, 0.0, atol=1e-15)


def test_third_moment_closure_constant(backend, convective_profile):
    default = make_convective_data(convective_profile, shcol=1, backend=backend)
    stiffer = default.copy()
    compute_diag_third_shoc_moment(default, backend=backend)
    compute_diag_third_shoc_moment(stiffer, backend=backend, c_diag_3rd_mom=9.0)
    np.testing.assert_array_equal(stiffer.w3[[0, -1]], 0.0)
    assert not np.array_equal(default.w3, stiffer.w3)


def test_third_moment_coefficients():
    coefficients = third_moment_coefficients(7.0)
    assert coefficients["c_diag_3rd_mom"] == 7.0
    assert coefficients["a0"] == pytest.approx(
        (0.52 * 7.0 ** -2) / (7.0 - 2.0), rel=1e-14
    )
    assert coefficients["a3"] == pytest.approx(0.6 / (7.0 * (7.0 - 2.0)), rel=1e-14)
    assert coefficients["a5"] == pytest.approx(0.6 / (7.0 * 38.0), rel=1e-14)


def test_third_moment_data_validation():
    with pytest.raises(ValueError):
        ThirdMomentData(shcol=0, nlev=5)
    with pytest.raises(ValueError):
        ThirdMomentData(shcol=2, nlev=1)
    with pytest.raises(ValueError):
        ThirdMomentData(shcol=2, nlev=5, w_sec=np.zeros(9))
    data = ThirdMomentData(shcol=2, nlev=5)
    assert data.w_sec.shape == (10,)
    assert data.w3.shape == (12,)
    assert data.columns("dz_zi").shape == (2, 6)
