from ._config import ClosureMode, ShocConfig
from .column_data import ThirdMomentData, VerticalGridData
from .driver import (
    compute_diag_third_shoc_moment,
    compute_shoc_vertical_grid,
    diag_third_shoc_moments,
)


__version__ = "0.1.0"
