import logging

from gt4py.cartesian.gtscript import PARALLEL, computation, interval, sqrt

from ndsl.dsl.stencil import StencilFactory
from ndsl.dsl.typing import FloatField
from pySHOC._config import ClosureMode
from pySHOC.constants import C_DIAG_3RD_MOM, W3CLIP, third_moment_coefficients
from pySHOC.functions.third_moment_functions import (
    aa_terms_diag_third_shoc_moment,
    f0_to_f5_diag_third_shoc_moment,
    fterms_input_for_diag_third_shoc_moment,
    omega_terms_diag_third_shoc_moment,
    w3_diag_third_shoc_moment,
    x_y_terms_diag_third_shoc_moment,
)


logger = logging.getLogger(__name__)


def diag_third_shoc_moment(
    w_sec: FloatField,
    thl_sec: FloatField,
    wthl_sec: FloatField,
    tke: FloatField,
    dz_zt: FloatField,
    dz_zi: FloatField,
    isotropy_zi: FloatField,
    brunt_zi: FloatField,
    w_sec_zi: FloatField,
    thetal_zi: FloatField,
    w3: FloatField,
):
    from __externals__ import a0, a1, a2, a3, a4, a5, c_diag_3rd_mom

    with computation(PARALLEL):
        with interval(0, 1):
            w3 = 0.0
        with interval(1, -1):
            (
                thedz,
                thedz2,
                iso,
                isosqrd,
                buoy_sgs2,
                bet2,
            ) = fterms_input_for_diag_third_shoc_moment(
                dz_zi[0, 0, 0],
                dz_zt[0, 0, 0],
                dz_zt[0, 0, -1],
                isotropy_zi[0, 0, 0],
                brunt_zi[0, 0, 0],
                thetal_zi[0, 0, 0],
            )

            f0, f1, f2, f3, f4, f5 = f0_to_f5_diag_third_shoc_moment(
                thedz,
                thedz2,
                bet2,
                iso,
                isosqrd,
                wthl_sec[0, 0, 0],
                wthl_sec[0, 0, -1],
                wthl_sec[0, 0, 1],
                thl_sec[0, 0, -1],
                thl_sec[0, 0, 1],
                w_sec[0, 0, 0],
                w_sec[0, 0, -1],
                w_sec_zi[0, 0, 0],
                tke[0, 0, 0],
                tke[0, 0, -1],
            )

            omega0, omega1, omega2 = omega_terms_diag_third_shoc_moment(
                buoy_sgs2, f3, f4, c_diag_3rd_mom, a4, a5
            )

            x0, y0, x1, y1 = x_y_terms_diag_third_shoc_moment(
                buoy_sgs2, f0, f1, f2, a0, a1, a2, a3
            )

            aa0, aa1 = aa_terms_diag_third_shoc_moment(
                omega0, omega1, omega2, x0, x1, y0, y1
            )

            w3 = w3_diag_third_shoc_moment(aa0, aa1, x0, x1, f5, c_diag_3rd_mom)
        with interval(-1, None):
            w3 = 0.0


def zero_third_shoc_moment(w3: FloatField):
    with computation(PARALLEL), interval(...):
        w3 = 0.0


def clip_third_shoc_moment(w_sec_zi: FloatField, w3: FloatField):
    from __externals__ import w3clip

    with computation(PARALLEL), interval(...):
        cond = w3clip * sqrt(2.0 * w_sec_zi ** 3)
        tsign = 1.0
        if w3 < 0.0:
            tsign = -1.0
        if tsign * w3 > cond:
            w3 = tsign * cond


class ComputeDiagThirdShocMoment:
    """
    Diagnoses the third moment of vertical velocity on interfaces
    from second moment statistics.

    Fortran name is compute_diag_third_shoc_moment

    The closure is fixed at construction: ClosureMode.GENERAL evaluates
    the diagnostic, ClosureMode.REDUCED_TKE (1.5 TKE closure) only
    zeroes w3. Top and bottom interfaces are always zero.
    """

    def __init__(
        self,
        stencil_factory: StencilFactory,
        closure_mode: ClosureMode = ClosureMode.GENERAL,
        c_diag_3rd_mom: float = C_DIAG_3RD_MOM,
    ):
        idx = stencil_factory.grid_indexing
        self._closure_mode = closure_mode
        logger.debug(
            "building %s third moment closure on domain %s",
            closure_mode.value,
            idx.domain,
        )

        if closure_mode == ClosureMode.REDUCED_TKE:
            self._zero_w3 = stencil_factory.from_origin_domain(
                zero_third_shoc_moment,
                origin=idx.origin_compute(),
                domain=idx.domain_compute(add=(0, 0, 1)),
            )
        else:
            self._diag_third_shoc_moment = stencil_factory.from_origin_domain(
                diag_third_shoc_moment,
                externals=third_moment_coefficients(c_diag_3rd_mom),
                origin=idx.origin_compute(),
                domain=idx.domain_compute(add=(0, 0, 1)),
            )

    @property
    def closure_mode(self) -> ClosureMode:
        return self._closure_mode

    def __call__(
        self,
        w_sec: FloatField,
        thl_sec: FloatField,
        wthl_sec: FloatField,
        tke: FloatField,
        dz_zt: FloatField,
        dz_zi: FloatField,
        isotropy_zi: FloatField,
        brunt_zi: FloatField,
        w_sec_zi: FloatField,
        thetal_zi: FloatField,
        w3: FloatField,
    ):
        """
        Args:
            w_sec (in): vertical velocity variance [m2/s2]
            thl_sec (in): temperature variance on interfaces [K2]
            wthl_sec (in): vertical heat flux on interfaces [K m/s]
            tke (in): turbulent kinetic energy [m2/s2]
            dz_zt (in): midpoint layer thickness [m]
            dz_zi (in): interface layer thickness [m]
            isotropy_zi (in): return to isotropy timescale [s]
            brunt_zi (in): Brunt Vaisala frequency [s-1]
            w_sec_zi (in): vertical velocity variance on interfaces [m2/s2]
            thetal_zi (in): liquid potential temperature on interfaces [K]
            w3 (out): third moment of vertical velocity [m3/s3]
        """
        if self._closure_mode == ClosureMode.REDUCED_TKE:
            self._zero_w3(w3)
        else:
            self._diag_third_shoc_moment(
                w_sec,
                thl_sec,
                wthl_sec,
                tke,
                dz_zt,
                dz_zi,
                isotropy_zi,
                brunt_zi,
                w_sec_zi,
                thetal_zi,
                w3,
            )


class ClipThirdShocMoment:
    """
    Limits the magnitude of w3 to w3clip * sqrt(2 * w_sec_zi**3),
    keeping its sign.

    Fortran name is clipping_diag_third_shoc_moments
    """

    def __init__(self, stencil_factory: StencilFactory, w3clip: float = W3CLIP):
        idx = stencil_factory.grid_indexing
        self._clip_third_shoc_moment = stencil_factory.from_origin_domain(
            clip_third_shoc_moment,
            externals={"w3clip": w3clip},
            origin=idx.origin_compute(),
            domain=idx.domain_compute(add=(0, 0, 1)),
        )

    def __call__(self, w_sec_zi: FloatField, w3: FloatField):
        self._clip_third_shoc_moment(w_sec_zi, w3)
