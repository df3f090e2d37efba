"""
Flat column buffers exchanged with callers.

Every field is a one dimensional float64 array indexed
level + column * num_levels, where num_levels is nlev for midpoint
fields and nlevi = nlev + 1 for interface fields.
"""
import copy
import dataclasses
from typing import Tuple

import numpy as np

from ndsl.dsl.typing import Float


ZT_FIELDS = ("w_sec", "dz_zt", "tke")
ZI_FIELDS = (
    "dz_zi",
    "thl_sec",
    "wthl_sec",
    "w_sec_zi",
    "isotropy_zi",
    "brunt_zi",
    "thetal_zi",
)
OUTPUT_FIELDS = ("w3",)
ALL_FIELDS = ZT_FIELDS + ZI_FIELDS + OUTPUT_FIELDS


def _check_buffer(name: str, values, size: int) -> np.ndarray:
    values = np.ascontiguousarray(values, dtype=Float).reshape(-1)
    if values.size != size:
        raise ValueError(f"{name} has {values.size} values, expected {size}")
    return values


@dataclasses.dataclass
class ThirdMomentData:
    """
    Inputs and output of one third moment diagnosis over shcol columns.
    Fields left as None are zero initialized.
    """

    shcol: int
    nlev: int
    shoc_1p5tke: bool = False
    w_sec: np.ndarray = None
    dz_zt: np.ndarray = None
    tke: np.ndarray = None
    dz_zi: np.ndarray = None
    thl_sec: np.ndarray = None
    wthl_sec: np.ndarray = None
    w_sec_zi: np.ndarray = None
    isotropy_zi: np.ndarray = None
    brunt_zi: np.ndarray = None
    thetal_zi: np.ndarray = None
    w3: np.ndarray = None

    def __post_init__(self):
        if self.shcol < 1:
            raise ValueError(f"shcol must be positive, got {self.shcol}")
        if self.nlev < 2:
            raise ValueError(f"nlev must be at least 2, got {self.nlev}")
        for name in ALL_FIELDS:
            size = self.total(name)
            values = getattr(self, name)
            if values is None:
                setattr(self, name, np.zeros(size, dtype=Float))
            else:
                setattr(self, name, _check_buffer(name, values, size))

    @property
    def nlevi(self) -> int:
        return self.nlev + 1

    def levels(self, name: str) -> int:
        if name in ZT_FIELDS:
            return self.nlev
        elif name in ZI_FIELDS or name in OUTPUT_FIELDS:
            return self.nlevi
        raise KeyError(f"{name} is not a third moment field")

    def total(self, name: str) -> int:
        return self.shcol * self.levels(name)

    def shape(self, name: str) -> Tuple[int, int]:
        return (self.shcol, self.levels(name))

    def columns(self, name: str) -> np.ndarray:
        """(shcol, levels) view of a flat field, writes go through"""
        return getattr(self, name).reshape(self.shape(name))

    def column_slice(self, icol: int) -> "ThirdMomentData":
        """A single column copy, used to check column independence"""
        return ThirdMomentData(
            shcol=1,
            nlev=self.nlev,
            shoc_1p5tke=self.shoc_1p5tke,
            **{name: self.columns(name)[icol].copy() for name in ALL_FIELDS},
        )

    def copy(self) -> "ThirdMomentData":
        return copy.deepcopy(self)


@dataclasses.dataclass
class VerticalGridData:
    """
    Column grid quantities derived from interface heights, each shaped
    (ncol, nlev) on midpoints or (ncol, nlevi) on interfaces.
    """

    zt_grid: np.ndarray
    w_sec: np.ndarray
    tke: np.ndarray
    dz_zt: np.ndarray
    dz_zi: np.ndarray
