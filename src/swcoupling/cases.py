from __future__ import annotations

import warnings
from dataclasses import dataclass, field

import numpy as np

from .constants import C_FREE_WEIR, C_ORIFICE, C_SUB_WEIR, UNIT_GRAVITY

ALLOWED_UNITS = set(UNIT_GRAVITY)
ALLOWED_OVERLAND = {"profile", "reservoir"}


@dataclass(frozen=True)
class CouplingConfig:
    units: str = "SI"
    gravity: float | None = None

    def __post_init__(self):
        if self.units not in ALLOWED_UNITS:
            raise ValueError(f"units must be one of {sorted(ALLOWED_UNITS)}")
        if self.gravity is not None:
            if not (self.gravity > 0.0):
                raise ValueError(f"gravity must be > 0, got {self.gravity}")
            ref = UNIT_GRAVITY[self.units]
            if abs(self.gravity - ref) / ref > 0.05:
                warnings.warn(
                    f"gravity {self.gravity:g} is far from the {self.units} value "
                    f"{ref:g}; check that depths and areas use matching units",
                    stacklevel=2,
                )

    @property
    def g(self) -> float:
        return float(self.gravity if self.gravity is not None else UNIT_GRAVITY[self.units])


@dataclass(frozen=True)
class CaseConfig:
    duration: float
    dt: float
    coupling: CouplingConfig = field(default_factory=CouplingConfig)
    overland_model: str = "profile"  # profile|reservoir

    def __post_init__(self):
        for name in ("duration", "dt"):
            if not (getattr(self, name) > 0.0):
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        if self.overland_model not in ALLOWED_OVERLAND:
            raise ValueError(f"overland_model must be one of {sorted(ALLOWED_OVERLAND)}")

    @property
    def n_steps(self) -> int:
        return max(int(round(self.duration / self.dt)), 1)


@dataclass(frozen=True)
class NodeConfig:
    name: str
    invert_elev: float
    full_depth: float
    coupling_area: float


@dataclass(frozen=True)
class OpeningConfig:
    id: int
    area: float
    width: float
    kind: int = 0
    orifice_coeff: float = C_ORIFICE
    free_weir_coeff: float = C_FREE_WEIR
    sub_weir_coeff: float = C_SUB_WEIR


@dataclass
class RunResult:
    t: np.ndarray
    depth: np.ndarray
    overland_depth: np.ndarray
    inflow: np.ndarray
    raw_inflow: np.ndarray
    clamp_factor: np.ndarray
    opening_ids: list[int]
    opening_flow: np.ndarray
    opening_type: np.ndarray
    guard_trips: np.ndarray
    meta: dict
