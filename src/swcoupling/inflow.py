from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .opening import Opening


@dataclass(frozen=True)
class NodeInflow:
    raw: float
    total: float
    factor: float = 1.0

    @property
    def clamped(self) -> bool:
        return self.factor < 1.0


def total_inflow(openings: Iterable[Opening]) -> float:
    return sum(o.new_inflow for o in openings if not o.is_closed)


def max_inflow(overland_depth: float, coupling_area: float, t_step: float) -> float:
    """Largest inflow the overland cell can surrender over one step."""
    return (overland_depth * coupling_area) / t_step


def adjust_inflows(openings: Iterable[Opening], factor: float) -> None:
    for o in openings:
        o.new_inflow = o.new_inflow * factor


def clamp_node_inflow(
    openings: list[Opening],
    overland_depth: float,
    coupling_area: float,
    t_step: float,
) -> NodeInflow:
    """Sum opening flows and cap net inflow at the surface volume available.

    Net outflow (total <= 0) is returned unchanged.
    """
    raw = total_inflow(openings)
    if raw <= 0.0:
        return NodeInflow(raw, raw)

    max_allowed = min(max_inflow(overland_depth, coupling_area, t_step), raw)
    if max_allowed >= raw:
        return NodeInflow(raw, raw)

    factor = max_allowed / raw
    adjust_inflows(openings, factor)
    return NodeInflow(raw, total_inflow(openings), factor)
