from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .cases import CouplingConfig
from .flux import find_coupling_inflow
from .inflow import NodeInflow, clamp_node_inflow
from .network import CouplingNetwork, CouplingNode
from .regime import find_coupling_type
from .stability import apply_oscillation_guard

log = logging.getLogger(__name__)


@dataclass
class StepReport:
    inflows: dict[int, NodeInflow] = field(default_factory=dict)
    guard_trips: dict[int, list[int]] = field(default_factory=dict)

    @property
    def clamped_nodes(self) -> list[int]:
        return [j for j, q in self.inflows.items() if q.clamped]


def find_node_inflow(
    node: CouplingNode, t_step: float, config: CouplingConfig
) -> tuple[NodeInflow, list[int]]:
    """Classify, compute and guard every open opening, then clamp the total.

    Returns the node totals and the ids of openings whose guard tripped.
    """
    state = node.snapshot()
    crest_elev = state.crest_elev
    node_head = state.node_head
    overland_head = state.overland_head
    g = config.g

    active = [o for o in node.openings if not o.is_closed]
    tripped = []
    for o in active:
        o.coupling_type = find_coupling_type(
            crest_elev, node_head, overland_head, o.area, o.width
        )
        o.new_inflow = find_coupling_inflow(
            o.coupling_type,
            crest_elev,
            node_head,
            overland_head,
            o.orifice_coeff,
            o.free_weir_coeff,
            o.sub_weir_coeff,
            o.area,
            o.width,
            gravity=g,
        )
        if apply_oscillation_guard(o):
            tripped.append(o.id)

    result = clamp_node_inflow(
        active, state.overland_depth, state.coupling_area, t_step
    )
    return result, tripped


def execute(network: CouplingNetwork, t_step: float, config: CouplingConfig) -> StepReport:
    """Compute the coupling inflow of every node for one step."""
    if not (t_step > 0.0):
        raise ValueError(f"t_step must be > 0, got {t_step}")
    report = StepReport()
    for j, node in enumerate(network):
        if not node.openings.is_coupled():
            node.coupling_inflow = 0.0
            continue
        result, tripped = find_node_inflow(node, t_step, config)
        node.coupling_inflow = result.total
        report.inflows[j] = result
        if tripped:
            report.guard_trips[j] = tripped
            log.debug("node %s: oscillation guard on openings %s", node.name, tripped)
        if result.clamped:
            log.debug(
                "node %s: inflow %.6g capped to %.6g (factor %.6g)",
                node.name,
                result.raw,
                result.total,
                result.factor,
            )
    return report


def set_old_state(network: CouplingNetwork) -> None:
    """Commit current opening flows as the previous-step history."""
    for node in network:
        node.openings.commit_step()
