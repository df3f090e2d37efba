from typing import Mapping, Optional, Tuple

import numpy as np

from pySHOC.column_data import ThirdMomentData, ZI_FIELDS, ZT_FIELDS


# (low, high) of the uniform draw for every input field
DEFAULT_RANDOM_RANGES = {
    "w_sec": (0.0, 1.0),
    "dz_zt": (50.0, 500.0),
    "tke": (0.01, 1.5),
    "dz_zi": (50.0, 500.0),
    "thl_sec": (0.0, 2.0),
    "wthl_sec": (-0.1, 0.1),
    "w_sec_zi": (0.0, 1.0),
    "isotropy_zi": (0.0, 2000.0),
    "brunt_zi": (-1.0e-4, 1.0e-4),
    "thetal_zi": (270.0, 330.0),
}


def randomize(
    data: ThirdMomentData,
    rng: np.random.Generator,
    ranges: Optional[Mapping[str, Tuple[float, float]]] = None,
) -> ThirdMomentData:
    """
    Fill every input field of data with uniform draws from rng.
    Fields missing from ranges use DEFAULT_RANDOM_RANGES, w3 is not touched.
    """
    limits = dict(DEFAULT_RANDOM_RANGES)
    if ranges is not None:
        limits.update(ranges)
    for name in ZT_FIELDS + ZI_FIELDS:
        low, high = limits[name]
        if low > high:
            raise ValueError(f"empty range ({low}, {high}) for {name}")
        data.columns(name)[:] = rng.uniform(low, high, size=data.shape(name))
    return data
