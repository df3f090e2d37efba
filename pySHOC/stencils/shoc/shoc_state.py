from dataclasses import InitVar, dataclass, field, fields
from typing import Any, Mapping

import numpy as np
import xarray as xr

import ndsl.dsl.gt4py_utils as gt_utils
from ndsl.constants import X_DIM, Y_DIM, Z_DIM, Z_INTERFACE_DIM
from ndsl.dsl.typing import Float
from ndsl.initialization.allocator import QuantityFactory
from ndsl.quantity import Quantity


ZT_DIMS = [X_DIM, Y_DIM, Z_DIM]
ZI_DIMS = [X_DIM, Y_DIM, Z_INTERFACE_DIM]


class _ColumnState:
    """
    Shared behaviour of the SHOC states: allocation, loading from and
    unloading to (ncol, nlev) column arrays, and an xarray view.

    Columns run along the x dimension of a single tile with one y row.
    """

    @classmethod
    def init_zeros(cls, quantity_factory: QuantityFactory):
        initial_arrays = {}
        for _field in fields(cls):
            if "dims" in _field.metadata.keys():
                initial_arrays[_field.name] = quantity_factory.zeros(
                    _field.metadata["dims"],
                    _field.metadata["units"],
                    dtype=Float,
                )
        return cls(**initial_arrays, quantity_factory=quantity_factory)

    @classmethod
    def init_from_columns(
        cls,
        columns: Mapping[str, Any],
        quantity_factory: QuantityFactory,
    ):
        """
        Allocate the state and fill every field named in columns from
        an array shaped (ncol, nlev) or (ncol, nlevi).
        """
        state = cls.init_zeros(quantity_factory)
        for name, values in columns.items():
            state.set_columns(name, values)
        return state

    def set_columns(self, name: str, values: np.ndarray):
        quantity: Quantity = getattr(self, name)
        expected = (quantity.extent[0], quantity.extent[2])
        values = np.asarray(values, dtype=Float)
        if values.shape != expected:
            raise ValueError(
                f"{name} has shape {values.shape}, expected {expected}"
            )
        quantity.view[:][:, 0, :] = values

    def get_columns(self, name: str) -> np.ndarray:
        quantity: Quantity = getattr(self, name)
        return np.array(gt_utils.asarray(quantity.view[:][:, 0, :]))

    @property
    def xr_dataset(self):
        data_vars = {}
        for _field in fields(self):
            if "dims" in _field.metadata.keys():
                level_dim = (
                    "zi" if _field.metadata["dims"][2] == Z_INTERFACE_DIM else "zt"
                )
                data_vars[_field.name] = xr.DataArray(
                    self.get_columns(_field.name),
                    dims=["column", level_dim],
                    attrs={
                        "long_name": _field.metadata["name"],
                        "units": _field.metadata.get("units", "unknown"),
                    },
                )
        return xr.Dataset(data_vars=data_vars)


@dataclass()
class VerticalGridState(_ColumnState):
    zi_grid: Quantity = field(
        metadata={
            "name": "interface_height",
            "dims": ZI_DIMS,
            "units": "m",
            "intent": "in",
        }
    )
    w_sec_zi: Quantity = field(
        metadata={
            "name": "vertical_velocity_variance_on_interfaces",
            "dims": ZI_DIMS,
            "units": "m2/s2",
            "intent": "in",
        }
    )
    zt_grid: Quantity = field(
        metadata={
            "name": "midpoint_height",
            "dims": ZT_DIMS,
            "units": "m",
            "intent": "out",
        }
    )
    w_sec: Quantity = field(
        metadata={
            "name": "vertical_velocity_variance",
            "dims": ZT_DIMS,
            "units": "m2/s2",
            "intent": "out",
        }
    )
    tke: Quantity = field(
        metadata={
            "name": "turbulent_kinetic_energy",
            "dims": ZT_DIMS,
            "units": "m2/s2",
            "intent": "out",
        }
    )
    dz_zt: Quantity = field(
        metadata={
            "name": "midpoint_layer_thickness",
            "dims": ZT_DIMS,
            "units": "m",
            "intent": "out",
        }
    )
    dz_zi: Quantity = field(
        metadata={
            "name": "interface_layer_thickness",
            "dims": ZI_DIMS,
            "units": "m",
            "intent": "out",
        }
    )
    quantity_factory: InitVar[QuantityFactory]


@dataclass()
class ThirdMomentState(_ColumnState):
    w_sec: Quantity = field(
        metadata={
            "name": "vertical_velocity_variance",
            "dims": ZT_DIMS,
            "units": "m2/s2",
            "intent": "in",
        }
    )
    dz_zt: Quantity = field(
        metadata={
            "name": "midpoint_layer_thickness",
            "dims": ZT_DIMS,
            "units": "m",
            "intent": "in",
        }
    )
    tke: Quantity = field(
        metadata={
            "name": "turbulent_kinetic_energy",
            "dims": ZT_DIMS,
            "units": "m2/s2",
            "intent": "in",
        }
    )
    dz_zi: Quantity = field(
        metadata={
            "name": "interface_layer_thickness",
            "dims": ZI_DIMS,
            "units": "m",
            "intent": "in",
        }
    )
    thl_sec: Quantity = field(
        metadata={
            "name": "liquid_potential_temperature_variance",
            "dims": ZI_DIMS,
            "units": "K2",
            "intent": "in",
        }
    )
    wthl_sec: Quantity = field(
        metadata={
            "name": "vertical_heat_flux",
            "dims": ZI_DIMS,
            "units": "K m/s",
            "intent": "in",
        }
    )
    w_sec_zi: Quantity = field(
        metadata={
            "name": "vertical_velocity_variance_on_interfaces",
            "dims": ZI_DIMS,
            "units": "m2/s2",
            "intent": "in",
        }
    )
    isotropy_zi: Quantity = field(
        metadata={
            "name": "return_to_isotropy_timescale",
            "dims": ZI_DIMS,
            "units": "s",
            "intent": "in",
        }
    )
    brunt_zi: Quantity = field(
        metadata={
            "name": "brunt_vaisala_frequency",
            "dims": ZI_DIMS,
            "units": "s-1",
            "intent": "in",
        }
    )
    thetal_zi: Quantity = field(
        metadata={
            "name": "liquid_potential_temperature",
            "dims": ZI_DIMS,
            "units": "K",
            "intent": "in",
        }
    )
    w3: Quantity = field(
        metadata={
            "name": "third_moment_of_vertical_velocity",
            "dims": ZI_DIMS,
            "units": "m3/s3",
            "intent": "out",
        }
    )
    quantity_factory: InitVar[QuantityFactory]

    @property
    def input_names(self):
        return [
            _field.name
            for _field in fields(self)
            if _field.metadata.get("intent") == "in"
        ]


@dataclass()
class DiagThirdMomentsState(_ColumnState):
    w_sec: Quantity = field(
        metadata={
            "name": "vertical_velocity_variance",
            "dims": ZT_DIMS,
            "units": "m2/s2",
            "intent": "in",
        }
    )
    isotropy: Quantity = field(
        metadata={
            "name": "return_to_isotropy_timescale",
            "dims": ZT_DIMS,
            "units": "s",
            "intent": "in",
        }
    )
    brunt: Quantity = field(
        metadata={
            "name": "brunt_vaisala_frequency",
            "dims": ZT_DIMS,
            "units": "s-1",
            "intent": "in",
        }
    )
    thetal: Quantity = field(
        metadata={
            "name": "liquid_potential_temperature",
            "dims": ZT_DIMS,
            "units": "K",
            "intent": "in",
        }
    )
    tke: Quantity = field(
        metadata={
            "name": "turbulent_kinetic_energy",
            "dims": ZT_DIMS,
            "units": "m2/s2",
            "intent": "in",
        }
    )
    dz_zt: Quantity = field(
        metadata={
            "name": "midpoint_layer_thickness",
            "dims": ZT_DIMS,
            "units": "m",
            "intent": "in",
        }
    )
    zt_grid: Quantity = field(
        metadata={
            "name": "midpoint_height",
            "dims": ZT_DIMS,
            "units": "m",
            "intent": "in",
        }
    )
    thl_sec: Quantity = field(
        metadata={
            "name": "liquid_potential_temperature_variance",
            "dims": ZI_DIMS,
            "units": "K2",
            "intent": "in",
        }
    )
    wthl_sec: Quantity = field(
        metadata={
            "name": "vertical_heat_flux",
            "dims": ZI_DIMS,
            "units": "K m/s",
            "intent": "in",
        }
    )
    dz_zi: Quantity = field(
        metadata={
            "name": "interface_layer_thickness",
            "dims": ZI_DIMS,
            "units": "m",
            "intent": "in",
        }
    )
    zi_grid: Quantity = field(
        metadata={
            "name": "interface_height",
            "dims": ZI_DIMS,
            "units": "m",
            "intent": "in",
        }
    )
    w3: Quantity = field(
        metadata={
            "name": "third_moment_of_vertical_velocity",
            "dims": ZI_DIMS,
            "units": "m3/s3",
            "intent": "out",
        }
    )
    quantity_factory: InitVar[QuantityFactory]
