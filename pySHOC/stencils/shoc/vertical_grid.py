import logging

from gt4py.cartesian.gtscript import PARALLEL, computation, interval

from ndsl.dsl.stencil import StencilFactory
from ndsl.dsl.typing import FloatField


logger = logging.getLogger(__name__)


def shoc_vertical_grid(
    zi_grid: FloatField,
    w_sec_zi: FloatField,
    zt_grid: FloatField,
    w_sec: FloatField,
    tke: FloatField,
    dz_zt: FloatField,
    dz_zi: FloatField,
):
    """
    Runs over the interface levels, the last level of the midpoint
    fields is padding and is left untouched.
    """
    with computation(PARALLEL), interval(0, -1):
        zt_grid = 0.5 * (zi_grid[0, 0, 0] + zi_grid[0, 0, 1])
        w_sec = 0.5 * (w_sec_zi[0, 0, 0] + w_sec_zi[0, 0, 1])
        tke = 1.5 * w_sec[0, 0, 0]
        dz_zt = zi_grid[0, 0, 0] - zi_grid[0, 0, 1]

    with computation(PARALLEL):
        with interval(0, 1):
            dz_zi = 0.0
        with interval(1, -1):
            dz_zi = zt_grid[0, 0, -1] - zt_grid[0, 0, 0]
        with interval(-1, None):
            # extrapolated down to the surface
            dz_zi = zt_grid[0, 0, -1]


class ShocVerticalGrid:
    """
    Derives the midpoint grid, layer thicknesses on both grids and TKE
    from interface heights and interface vertical velocity variance.

    Heights must decrease with level index, no checking is done.
    """

    def __init__(self, stencil_factory: StencilFactory):
        grid_indexing = stencil_factory.grid_indexing
        logger.debug(
            "building shoc_vertical_grid on domain %s", grid_indexing.domain
        )

        self._shoc_vertical_grid = stencil_factory.from_origin_domain(
            shoc_vertical_grid,
            origin=grid_indexing.origin_compute(),
            domain=grid_indexing.domain_compute(add=(0, 0, 1)),
        )

    def __call__(
        self,
        zi_grid: FloatField,
        w_sec_zi: FloatField,
        zt_grid: FloatField,
        w_sec: FloatField,
        tke: FloatField,
        dz_zt: FloatField,
        dz_zi: FloatField,
    ):
        """
        Args:
            zi_grid (in): interface heights [m]
            w_sec_zi (in): vertical velocity variance on interfaces [m2/s2]
            zt_grid (out): midpoint heights [m]
            w_sec (out): vertical velocity variance on midpoints [m2/s2]
            tke (out): turbulent kinetic energy [m2/s2]
            dz_zt (out): midpoint layer thickness [m]
            dz_zi (out): interface layer thickness [m]
        """
        self._shoc_vertical_grid(
            zi_grid,
            w_sec_zi,
            zt_grid,
            w_sec,
            tke,
            dz_zt,
            dz_zi,
        )
