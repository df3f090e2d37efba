from gt4py.cartesian.gtscript import PARALLEL, computation, interval

from ndsl.dsl.stencil import StencilFactory
from ndsl.dsl.typing import Float, FloatField


def midpoint_to_interface(
    zt_grid: FloatField,
    zi_grid: FloatField,
    var_zt: FloatField,
    var_zi: FloatField,
    minthresh: Float,
):
    with computation(PARALLEL):
        with interval(0, 1):
            var_zi = var_zt[0, 0, 0] + (var_zt[0, 0, 1] - var_zt[0, 0, 0]) * (
                zi_grid[0, 0, 0] - zt_grid[0, 0, 0]
            ) / (zt_grid[0, 0, 1] - zt_grid[0, 0, 0])
        with interval(1, -1):
            var_zi = var_zt[0, 0, -1] + (var_zt[0, 0, 0] - var_zt[0, 0, -1]) * (
                zi_grid[0, 0, 0] - zt_grid[0, 0, -1]
            ) / (zt_grid[0, 0, 0] - zt_grid[0, 0, -1])
        with interval(-1, None):
            # extrapolate from the two lowest midpoints
            var_zi = var_zt[0, 0, -1] + (var_zt[0, 0, -1] - var_zt[0, 0, -2]) * (
                zi_grid[0, 0, 0] - zt_grid[0, 0, -1]
            ) / (zt_grid[0, 0, -1] - zt_grid[0, 0, -2])

    with computation(PARALLEL), interval(...):
        if var_zi < minthresh:
            var_zi = minthresh


class InterpolateToInterfaces:
    """
    Linear interpolation of a midpoint field onto the interface grid,
    extrapolating at the top and bottom, with a lower bound.

    Fortran name is linear_interp
    """

    def __init__(self, stencil_factory: StencilFactory):
        idx = stencil_factory.grid_indexing
        if idx.domain[2] < 2:
            raise ValueError(
                f"interpolation needs at least 2 levels, got {idx.domain[2]}"
            )
        self._midpoint_to_interface = stencil_factory.from_origin_domain(
            midpoint_to_interface,
            origin=idx.origin_compute(),
            domain=idx.domain_compute(add=(0, 0, 1)),
        )

    def __call__(
        self,
        zt_grid: FloatField,
        zi_grid: FloatField,
        var_zt: FloatField,
        var_zi: FloatField,
        minthresh: Float,
    ):
        self._midpoint_to_interface(
            zt_grid, zi_grid, var_zt, var_zi, Float(minthresh)
        )
