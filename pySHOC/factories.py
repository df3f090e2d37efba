import functools
import logging
from typing import Tuple

from ndsl.dsl.stencil import GridIndexing, StencilFactory
from ndsl.dsl.stencil_config import CompilationConfig, StencilConfig
from ndsl.initialization.allocator import QuantityFactory
from ndsl.initialization.sizer import SubtileGridSizer


logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "numpy"
N_HALO = 3


@functools.lru_cache(maxsize=None)
def get_column_factories(
    ncol: int,
    nlev: int,
    backend: str = DEFAULT_BACKEND,
    n_halo: int = N_HALO,
) -> Tuple[StencilFactory, QuantityFactory]:
    """
    Stencil and quantity factories for ncol independent columns of nlev
    midpoint levels, laid out along x on a single tile with one y row.
    """
    if ncol < 1 or nlev < 1:
        raise ValueError(f"need at least one column and level, got {ncol}, {nlev}")
    logger.debug(
        "creating factories for %d columns, %d levels, backend %s",
        ncol,
        nlev,
        backend,
    )
    sizer = SubtileGridSizer.from_tile_params(
        nx_tile=ncol,
        ny_tile=1,
        nz=nlev,
        n_halo=n_halo,
        extra_dim_lengths={},
        layout=(1, 1),
    )
    grid_indexing = GridIndexing(
        domain=(ncol, 1, nlev),
        n_halo=n_halo,
        south_edge=True,
        north_edge=True,
        west_edge=True,
        east_edge=True,
    )
    stencil_config = StencilConfig(
        compilation_config=CompilationConfig(
            backend=backend,
            rebuild=False,
            validate_args=True,
        ),
    )
    stencil_factory = StencilFactory(
        config=stencil_config,
        grid_indexing=grid_indexing,
    )
    quantity_factory = QuantityFactory.from_backend(sizer=sizer, backend=backend)
    return stencil_factory, quantity_factory
