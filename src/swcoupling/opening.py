from __future__ import annotations

from dataclasses import dataclass

from .constants import C_FREE_WEIR, C_ORIFICE, C_SUB_WEIR, CouplingType
from .geometry import weir_ratio


@dataclass
class Opening:
    id: int
    kind: int
    area: float
    width: float
    orifice_coeff: float = C_ORIFICE
    free_weir_coeff: float = C_FREE_WEIR
    sub_weir_coeff: float = C_SUB_WEIR
    coupling_type: CouplingType = CouplingType.NO_COUPLING_FLOW
    old_inflow: float = 0.0
    new_inflow: float = 0.0

    @property
    def is_closed(self) -> bool:
        return self.coupling_type == CouplingType.NO_COUPLING

    @property
    def weir_ratio(self) -> float:
        return weir_ratio(self.area, self.width)

    def reset_state(self) -> None:
        self.coupling_type = CouplingType.NO_COUPLING_FLOW
        self.old_inflow = 0.0
        self.new_inflow = 0.0
