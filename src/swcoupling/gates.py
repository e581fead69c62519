from __future__ import annotations

import math
from dataclasses import dataclass

from .cases import CaseConfig, CouplingConfig, NodeConfig, OpeningConfig
from .constants import GRAVITY_SI, CouplingType
from .engine import execute
from .flux import find_coupling_inflow
from .network import CouplingNetwork, build_node
from .profiles import make_series_constant
from .regime import find_coupling_type
from .run import simulate

CO, CFW, CSW = 0.167, 0.54, 0.056


@dataclass(frozen=True)
class GateMetrics:
    regime_ok: bool
    q: float
    q_ref: float
    errQ: float


def gate_orifice() -> GateMetrics:
    """Surcharged node pushing water out through a 25 m2 opening."""
    crest, node_head, overland_head, area, width = 2.0, 3.0, 2.0, 25.0, 1.0
    ct = find_coupling_type(crest, node_head, overland_head, area, width)
    q = find_coupling_inflow(
        ct, crest, node_head, overland_head, CO, CFW, CSW, area, width, GRAVITY_SI
    )
    q_ref = -CO * area * math.sqrt(2.0 * GRAVITY_SI * (node_head - overland_head))
    return GateMetrics(
        regime_ok=ct == CouplingType.ORIFICE,
        q=q,
        q_ref=q_ref,
        errQ=abs(q - q_ref) / abs(q_ref),
    )


def gate_free_weir() -> GateMetrics:
    """Surface water spilling over the rim of an unsurcharged node."""
    crest, node_head, overland_head, area, width = 2.0, 1.0, 3.0, 10.0, 5.0
    ct = find_coupling_type(crest, node_head, overland_head, area, width)
    q = find_coupling_inflow(
        ct, crest, node_head, overland_head, CO, CFW, CSW, area, width, GRAVITY_SI
    )
    depth = overland_head - crest
    q_ref = (2.0 / 3.0) * CFW * width * depth**1.5 * math.sqrt(2.0 * GRAVITY_SI)
    return GateMetrics(
        regime_ok=ct == CouplingType.FREE_WEIR,
        q=q,
        q_ref=q_ref,
        errQ=abs(q - q_ref) / abs(q_ref),
    )


@dataclass(frozen=True)
class ClampMetrics:
    raw_total: float
    max_inflow: float
    total: float
    factors: tuple[float, ...]
    errTotal: float
    errFactor: float


def gate_clamp() -> ClampMetrics:
    """Two free-weir openings asking for more than the surface cell holds."""
    node_cfg = NodeConfig("J1", invert_elev=0.0, full_depth=2.0, coupling_area=1.0)
    openings = [OpeningConfig(0, 10.0, 5.0), OpeningConfig(1, 10.0, 5.0)]
    node = build_node(node_cfg, openings)
    node.depth = 1.0
    node.overland_depth = 1.0
    t_step = 1.0
    config = CouplingConfig()

    report = execute(CouplingNetwork([node]), t_step, config)
    totals = report.inflows[0]
    q_max = node.overland_depth * node.coupling_area / t_step

    raw = []
    for o in openings:
        q = find_coupling_inflow(
            CouplingType.FREE_WEIR,
            2.0,
            1.0,
            3.0,
            o.orifice_coeff,
            o.free_weir_coeff,
            o.sub_weir_coeff,
            o.area,
            o.width,
            config.g,
        )
        raw.append(q)
    factors = tuple(node.openings.get(o.id).new_inflow / r for o, r in zip(openings, raw))
    expected = q_max / totals.raw
    return ClampMetrics(
        raw_total=totals.raw,
        max_inflow=q_max,
        total=node.coupling_inflow,
        factors=factors,
        errTotal=abs(node.coupling_inflow - q_max) / q_max,
        errFactor=max(abs(f - expected) / expected for f in factors),
    )


def gate_steady_drainage() -> GateMetrics:
    """A constant free-weir state held for many steps must not drift."""
    node_cfg = NodeConfig("J1", invert_elev=0.0, full_depth=2.0, coupling_area=100.0)
    case = CaseConfig(duration=60.0, dt=1.0)
    res = simulate(
        node_cfg,
        [OpeningConfig(0, 10.0, 5.0)],
        make_series_constant(1.0),
        make_series_constant(1.0),
        case,
    )
    q_ref = (2.0 / 3.0) * CFW * 5.0 * math.sqrt(2.0 * GRAVITY_SI)
    q = float(res.inflow[-1])
    return GateMetrics(
        regime_ok=bool((res.opening_type == CouplingType.FREE_WEIR).all()),
        q=q,
        q_ref=q_ref,
        errQ=float(abs(res.inflow - q_ref).max()) / q_ref,
    )
