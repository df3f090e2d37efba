import logging

from ndsl.constants import X_DIM, Y_DIM, Z_INTERFACE_DIM
from ndsl.dsl.stencil import StencilFactory
from ndsl.dsl.typing import Float, FloatField
from ndsl.initialization.allocator import QuantityFactory
from ndsl.performance.timer import NullTimer, Timer
from pySHOC._config import ClosureMode, ShocConfig
from pySHOC.constants import LARGENEG, MINTKE
from pySHOC.stencils.shoc.interpolation import InterpolateToInterfaces
from pySHOC.stencils.shoc.third_moment import (
    ClipThirdShocMoment,
    ComputeDiagThirdShocMoment,
)


logger = logging.getLogger(__name__)


class DiagThirdShocMoments:
    """
    Third moment of vertical velocity from midpoint second moments:
    interpolates the midpoint statistics onto interfaces, diagnoses w3
    and clips it against the interface vertical velocity variance.

    Fortran name is diag_third_shoc_moments
    """

    def __init__(
        self,
        stencil_factory: StencilFactory,
        quantity_factory: QuantityFactory,
        config: ShocConfig,
    ):
        def make_quantity_zi():
            return quantity_factory.zeros(
                [X_DIM, Y_DIM, Z_INTERFACE_DIM],
                units="unknown",
                dtype=Float,
            )

        self._isotropy_zi = make_quantity_zi()
        self._brunt_zi = make_quantity_zi()
        self._w_sec_zi = make_quantity_zi()
        self._thetal_zi = make_quantity_zi()

        self._do_w3_clipping = config.do_w3_clipping
        # clipping is a no-op on a zero w3
        if config.closure_mode == ClosureMode.REDUCED_TKE:
            self._do_w3_clipping = False

        self._interpolate = InterpolateToInterfaces(stencil_factory)
        self._compute_w3 = ComputeDiagThirdShocMoment(
            stencil_factory,
            closure_mode=config.closure_mode,
            c_diag_3rd_mom=config.c_diag_3rd_mom,
        )
        if self._do_w3_clipping:
            self._clip_w3 = ClipThirdShocMoment(
                stencil_factory, w3clip=config.w3clip
            )
        logger.info(
            "third moment diagnosis: closure=%s clipping=%s",
            config.closure_mode.value,
            self._do_w3_clipping,
        )

    @property
    def w_sec_zi(self):
        return self._w_sec_zi

    def __call__(
        self,
        w_sec: FloatField,
        thl_sec: FloatField,
        wthl_sec: FloatField,
        isotropy: FloatField,
        brunt: FloatField,
        thetal: FloatField,
        tke: FloatField,
        dz_zt: FloatField,
        dz_zi: FloatField,
        zt_grid: FloatField,
        zi_grid: FloatField,
        w3: FloatField,
        timer: Timer = NullTimer(),
    ):
        with timer.clock("shoc_interp_to_zi"):
            self._interpolate(
                zt_grid, zi_grid, isotropy, self._isotropy_zi.data, 0.0
            )
            self._interpolate(zt_grid, zi_grid, brunt, self._brunt_zi.data, LARGENEG)
            self._interpolate(
                zt_grid, zi_grid, w_sec, self._w_sec_zi.data, (2.0 / 3.0) * MINTKE
            )
            self._interpolate(zt_grid, zi_grid, thetal, self._thetal_zi.data, 0.0)

        with timer.clock("shoc_compute_w3"):
            self._compute_w3(
                w_sec,
                thl_sec,
                wthl_sec,
                tke,
                dz_zt,
                dz_zi,
                self._isotropy_zi.data,
                self._brunt_zi.data,
                self._w_sec_zi.data,
                self._thetal_zi.data,
                w3,
            )

        if self._do_w3_clipping:
            with timer.clock("shoc_clip_w3"):
                self._clip_w3(self._w_sec_zi.data, w3)
