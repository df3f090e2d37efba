from gt4py.cartesian import gtscript

from pySHOC.constants import GGR


@gtscript.function
def fterms_input_for_diag_third_shoc_moment(
    dz_zi, dz_zt, dz_zt_kc, isotropy_zi, brunt_zi, thetal_zi
):
    """
    Grid and stability inputs of the f0-f5 terms at one interface.

    Args:
        dz_zi: interface thickness [m]
        dz_zt: thickness of the cell below the interface [m]
        dz_zt_kc: thickness of the cell above the interface [m]
        isotropy_zi: return to isotropy timescale [s]
        brunt_zi: Brunt Vaisala frequency [s-1]
        thetal_zi: liquid water potential temperature [K]
    """
    thedz = 1.0 / dz_zi
    thedz2 = 1.0 / (dz_zt + dz_zt_kc)
    iso = isotropy_zi
    isosqrd = iso ** 2
    buoy_sgs2 = isosqrd * brunt_zi
    bet2 = GGR / thetal_zi

    return thedz, thedz2, iso, isosqrd, buoy_sgs2, bet2


@gtscript.function
def f0_to_f5_diag_third_shoc_moment(
    thedz,
    thedz2,
    bet2,
    iso,
    isosqrd,
    wthl_sec,
    wthl_sec_kc,
    wthl_sec_kb,
    thl_sec_kc,
    thl_sec_kb,
    w_sec,
    w_sec_kc,
    w_sec_zi,
    tke,
    tke_kc,
):
    # _kc is the level above, _kb the level below
    thl_sec_diff = thl_sec_kc - thl_sec_kb
    wthl_sec_diff = wthl_sec_kc - wthl_sec_kb
    w_sec_diff = w_sec_kc - w_sec
    tke_diff = tke_kc - tke

    f0 = thedz2 * bet2 ** 3 * isosqrd ** 2 * wthl_sec * thl_sec_diff

    f1 = (
        thedz2
        * bet2 ** 2
        * iso ** 3
        * (wthl_sec * wthl_sec_diff + 0.5 * w_sec_zi * thl_sec_diff)
    )

    f2 = (
        thedz * bet2 * isosqrd * wthl_sec * w_sec_diff
        + 2.0 * thedz2 * bet2 * isosqrd * w_sec_zi * wthl_sec_diff
    )

    f3 = (
        thedz2 * bet2 * isosqrd * w_sec_zi * wthl_sec_diff
        + thedz * bet2 * isosqrd * (wthl_sec * tke_diff)
    )

    f4 = thedz * iso * w_sec_zi * (w_sec_diff + tke_diff)

    f5 = thedz * iso * w_sec_zi * w_sec_diff

    return f0, f1, f2, f3, f4, f5


@gtscript.function
def omega_terms_diag_third_shoc_moment(buoy_sgs2, f3, f4, c_diag_3rd_mom, a4, a5):
    omega0 = a4 / (1.0 - a5 * buoy_sgs2)
    omega1 = omega0 / (2.0 * c_diag_3rd_mom)
    omega2 = omega1 * f3 + (5.0 / 4.0) * omega0 * f4

    return omega0, omega1, omega2


@gtscript.function
def x_y_terms_diag_third_shoc_moment(buoy_sgs2, f0, f1, f2, a0, a1, a2, a3):
    x0 = (a2 * buoy_sgs2 * (1.0 - a3 * buoy_sgs2)) / (
        1.0 - (a1 + a3) * buoy_sgs2
    )
    y0 = (2.0 * a2 * buoy_sgs2 * x0) / (1.0 - a3 * buoy_sgs2)
    x1 = (a0 * f0 + a1 * f1 + a2 * (1.0 - a3 * buoy_sgs2) * f2) / (
        1.0 - (a1 + a3) * buoy_sgs2
    )
    y1 = (2.0 * a2 * (buoy_sgs2 * x1 + (a0 / a1) * f0 + f1)) / (
        1.0 - a3 * buoy_sgs2
    )

    return x0, y0, x1, y1


@gtscript.function
def aa_terms_diag_third_shoc_moment(omega0, omega1, omega2, x0, x1, y0, y1):
    aa0 = omega0 * x0 + omega1 * y0
    aa1 = omega0 * x1 + omega1 * y1 + omega2

    return aa0, aa1


@gtscript.function
def w3_diag_third_shoc_moment(aa0, aa1, x0, x1, f5, c_diag_3rd_mom):
    w3 = (aa1 - 1.2 * x1 - 1.5 * f5) / (c_diag_3rd_mom - 1.2 * x0 + aa0)

    return w3
