import functools
import logging
from typing import Optional

import numpy as np

from ndsl.dsl.typing import Float
from ndsl.performance.timer import NullTimer, Timer
from pySHOC._config import ClosureMode, ShocConfig
from pySHOC.column_data import ThirdMomentData, VerticalGridData
from pySHOC.constants import C_DIAG_3RD_MOM
from pySHOC.factories import DEFAULT_BACKEND, get_column_factories
from pySHOC.stencils.shoc.diag_third_moments import DiagThirdShocMoments
from pySHOC.stencils.shoc.shoc_state import (
    DiagThirdMomentsState,
    ThirdMomentState,
    VerticalGridState,
)
from pySHOC.stencils.shoc.third_moment import ComputeDiagThirdShocMoment
from pySHOC.stencils.shoc.vertical_grid import ShocVerticalGrid


logger = logging.getLogger(__name__)


def _as_columns(name: str, values) -> np.ndarray:
    values = np.asarray(values, dtype=Float)
    if values.ndim == 1:
        values = values[np.newaxis, :]
    if values.ndim != 2:
        raise ValueError(f"{name} must be (ncol, nlev), got shape {values.shape}")
    return values


@functools.lru_cache(maxsize=None)
def _vertical_grid(ncol: int, nlev: int, backend: str) -> ShocVerticalGrid:
    stencil_factory, _ = get_column_factories(ncol, nlev, backend)
    return ShocVerticalGrid(stencil_factory)


@functools.lru_cache(maxsize=None)
def _third_moment_kernel(
    ncol: int,
    nlev: int,
    backend: str,
    closure_mode: ClosureMode,
    c_diag_3rd_mom: float,
) -> ComputeDiagThirdShocMoment:
    stencil_factory, _ = get_column_factories(ncol, nlev, backend)
    return ComputeDiagThirdShocMoment(
        stencil_factory,
        closure_mode=closure_mode,
        c_diag_3rd_mom=c_diag_3rd_mom,
    )


def compute_shoc_vertical_grid(
    zi_grid,
    w_sec_zi,
    backend: str = DEFAULT_BACKEND,
) -> VerticalGridData:
    """
    Midpoint heights, layer thicknesses and TKE for columns of interface
    heights (top to bottom) and interface vertical velocity variance.

    Args:
        zi_grid: interface heights, (ncol, nlevi) or (nlevi,) [m]
        w_sec_zi: vertical velocity variance on interfaces [m2/s2]
        backend: gt4py backend
    """
    zi_grid = _as_columns("zi_grid", zi_grid)
    w_sec_zi = _as_columns("w_sec_zi", w_sec_zi)
    if zi_grid.shape != w_sec_zi.shape:
        raise ValueError(
            f"zi_grid {zi_grid.shape} and w_sec_zi {w_sec_zi.shape} differ in shape"
        )
    ncol, nlevi = zi_grid.shape
    nlev = nlevi - 1

    _, quantity_factory = get_column_factories(ncol, nlev, backend)
    state = VerticalGridState.init_from_columns(
        {"zi_grid": zi_grid, "w_sec_zi": w_sec_zi}, quantity_factory
    )
    _vertical_grid(ncol, nlev, backend)(
        state.zi_grid.data,
        state.w_sec_zi.data,
        state.zt_grid.data,
        state.w_sec.data,
        state.tke.data,
        state.dz_zt.data,
        state.dz_zi.data,
    )
    return VerticalGridData(
        zt_grid=state.get_columns("zt_grid"),
        w_sec=state.get_columns("w_sec"),
        tke=state.get_columns("tke"),
        dz_zt=state.get_columns("dz_zt"),
        dz_zi=state.get_columns("dz_zi"),
    )


def compute_diag_third_shoc_moment(
    data: ThirdMomentData,
    backend: str = DEFAULT_BACKEND,
    c_diag_3rd_mom: float = C_DIAG_3RD_MOM,
    timer: Timer = NullTimer(),
) -> np.ndarray:
    """
    Diagnoses w3 for every column of data and writes it into data.w3.
    The closure is selected by data.shoc_1p5tke.

    Returns:
        data.w3, the flat interface buffer that was written
    """
    closure_mode = ClosureMode.from_flag(data.shoc_1p5tke)
    _, quantity_factory = get_column_factories(data.shcol, data.nlev, backend)

    state = ThirdMomentState.init_zeros(quantity_factory)
    for name in state.input_names:
        state.set_columns(name, data.columns(name))

    kernel = _third_moment_kernel(
        data.shcol, data.nlev, backend, closure_mode, float(c_diag_3rd_mom)
    )
    with timer.clock("compute_diag_third_shoc_moment"):
        kernel(
            state.w_sec.data,
            state.thl_sec.data,
            state.wthl_sec.data,
            state.tke.data,
            state.dz_zt.data,
            state.dz_zi.data,
            state.isotropy_zi.data,
            state.brunt_zi.data,
            state.w_sec_zi.data,
            state.thetal_zi.data,
            state.w3.data,
        )
    data.columns("w3")[:] = state.get_columns("w3")
    return data.w3


def diag_third_shoc_moments(
    w_sec,
    thl_sec,
    wthl_sec,
    isotropy,
    brunt,
    thetal,
    tke,
    dz_zt,
    dz_zi,
    zt_grid,
    zi_grid,
    config: Optional[ShocConfig] = None,
    backend: str = DEFAULT_BACKEND,
    timer: Timer = NullTimer(),
) -> np.ndarray:
    """
    Full third moment diagnosis from midpoint statistics: interpolation
    to interfaces, w3 closure and clipping.

    Midpoint arguments are (ncol, nlev), interface arguments (ncol, nlevi).

    Returns:
        w3 on interfaces, (ncol, nlevi)
    """
    if config is None:
        config = ShocConfig()
    columns = {
        "w_sec": _as_columns("w_sec", w_sec),
        "isotropy": _as_columns("isotropy", isotropy),
        "brunt": _as_columns("brunt", brunt),
        "thetal": _as_columns("thetal", thetal),
        "tke": _as_columns("tke", tke),
        "dz_zt": _as_columns("dz_zt", dz_zt),
        "zt_grid": _as_columns("zt_grid", zt_grid),
        "thl_sec": _as_columns("thl_sec", thl_sec),
        "wthl_sec": _as_columns("wthl_sec", wthl_sec),
        "dz_zi": _as_columns("dz_zi", dz_zi),
        "zi_grid": _as_columns("zi_grid", zi_grid),
    }
    ncol, nlev = columns["w_sec"].shape
    stencil_factory, quantity_factory = get_column_factories(ncol, nlev, backend)
    state = DiagThirdMomentsState.init_from_columns(columns, quantity_factory)

    diagnose = DiagThirdShocMoments(stencil_factory, quantity_factory, config)
    diagnose(
        state.w_sec.data,
        state.thl_sec.data,
        state.wthl_sec.data,
        state.isotropy.data,
        state.brunt.data,
        state.thetal.data,
        state.tke.data,
        state.dz_zt.data,
        state.dz_zi.data,
        state.zt_grid.data,
        state.zi_grid.data,
        state.w3.data,
        timer=timer,
    )
    return state.get_columns("w3")
