import dataclasses
from enum import Enum, unique
from typing import Optional

import f90nml

from ndsl import MetaEnumStr
from ndsl.dsl.typing import Float
from pySHOC.constants import C_DIAG_3RD_MOM, W3CLIP


DEFAULT_BOOL = False
NAMELIST_GROUP = "shoc_nl"


@unique
class ClosureMode(Enum, metaclass=MetaEnumStr):
    """
    GENERAL diagnoses w3 from the second moments,
    REDUCED_TKE is the 1.5 TKE closure which carries no skewness (w3 = 0)
    """

    GENERAL = "general"
    REDUCED_TKE = "1p5tke"

    @classmethod
    def from_name(cls, name: str) -> "ClosureMode":
        for mode in cls:
            if name.lower() == mode.value or name.upper() == mode.name:
                return mode
        raise NotImplementedError(f"{name} closure not implemented")

    @classmethod
    def from_flag(cls, shoc_1p5tke: bool) -> "ClosureMode":
        return cls.REDUCED_TKE if shoc_1p5tke else cls.GENERAL


@dataclasses.dataclass
class ShocConfig:
    shoc_1p5tke: bool = DEFAULT_BOOL
    c_diag_3rd_mom: Float = C_DIAG_3RD_MOM
    w3clip: Float = W3CLIP
    do_w3_clipping: bool = True
    namelist_override: Optional[str] = None

    def __post_init__(self):
        if self.namelist_override is not None:
            f90_nml = f90nml.read(self.namelist_override)
            shoc_config = self.from_f90nml(f90_nml)
            for var in shoc_config.__dict__.keys():
                if var != "namelist_override":
                    setattr(self, var, shoc_config.__dict__[var])
        if self.c_diag_3rd_mom <= 0.0:
            raise ValueError(
                f"c_diag_3rd_mom must be positive, got {self.c_diag_3rd_mom}"
            )

    @property
    def closure_mode(self) -> ClosureMode:
        return ClosureMode.from_flag(self.shoc_1p5tke)

    @classmethod
    def from_f90nml(cls, f90_namelist: f90nml.Namelist) -> "ShocConfig":
        shoc_nl = f90_namelist.get(NAMELIST_GROUP, {})
        shoc_1p5tke = bool(shoc_nl.get("shoc_1p5tke", DEFAULT_BOOL))
        # a named closure takes precedence over the boolean switch
        closure = shoc_nl.get("shoc_closure")
        if closure is not None:
            shoc_1p5tke = ClosureMode.from_name(closure) == ClosureMode.REDUCED_TKE
        return cls(
            shoc_1p5tke=shoc_1p5tke,
            c_diag_3rd_mom=shoc_nl.get("c_diag_3rd_mom", C_DIAG_3RD_MOM),
            w3clip=shoc_nl.get("w3clip", W3CLIP),
            do_w3_clipping=bool(shoc_nl.get("do_w3_clipping", True)),
        )

    @classmethod
    def from_namelist_file(cls, filename: str) -> "ShocConfig":
        return cls.from_f90nml(f90nml.read(filename))
