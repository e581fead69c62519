from __future__ import annotations

from .constants import CouplingType
from .opening import Opening


def flow_reversed(old_inflow: float, new_inflow: float) -> bool:
    """True when the flow flips between net inflow and net outflow."""
    inflow2outflow = old_inflow > 0.0 and new_inflow < 0.0
    outflow2inflow = old_inflow < 0.0 and new_inflow > 0.0
    return inflow2outflow or outflow2inflow


def apply_oscillation_guard(opening: Opening) -> bool:
    """Force a dead step on a direction flip. Returns True if the guard tripped."""
    if not flow_reversed(opening.old_inflow, opening.new_inflow):
        return False
    opening.coupling_type = CouplingType.NO_COUPLING_FLOW
    opening.new_inflow = 0.0
    return True
