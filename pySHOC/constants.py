import ndsl.constants as constants


GGR = constants.GRAV  # gravity used by the buoyancy parameter g / thetal

# SHOC tunable for the diagnostic third moment
C_DIAG_3RD_MOM = 7.0

MINTKE = 0.0004  # minimum TKE [m2/s2]
LARGENEG = -99999999.99  # lower bound that effectively disables a threshold
W3CLIP = 1.2  # w3 is limited to W3CLIP * sqrt(2 * w_sec**3)


def third_moment_coefficients(c_diag_3rd_mom: float = C_DIAG_3RD_MOM):
    """
    Closure coefficients a0-a5 of the diagnostic third moment of w,
    as a dict suitable for stencil externals.
    """
    c = c_diag_3rd_mom
    return {
        "c_diag_3rd_mom": c,
        "a0": (0.52 * c ** (-2)) / (c - 2.0),
        "a1": 0.87 / (c ** 2),
        "a2": 0.5 / c,
        "a3": 0.6 / (c * (c - 2.0)),
        "a4": 2.4 / (3.0 * c + 5.0),
        "a5": 0.6 / (c * (3.0 + 5.0 * c)),
    }
