from __future__ import annotations

import numpy as np

from .cases import RunResult
from .constants import CouplingType


def regime_occupancy(types: np.ndarray) -> dict[str, float]:
    n = max(types.size, 1)
    return {ct.name: float(np.count_nonzero(types == ct)) / n for ct in CouplingType}


def summarize_run(res: RunResult, dt: float) -> dict:
    q = res.inflow
    openings = {}
    for i, oid in enumerate(res.opening_ids):
        flow = res.opening_flow[i]
        openings[str(oid)] = {
            "volume_in": float(np.sum(np.maximum(flow, 0.0)) * dt),
            "volume_out": float(np.sum(np.maximum(-flow, 0.0)) * dt),
            "peak_abs_flow": float(np.max(np.abs(flow))) if flow.size else 0.0,
            "guard_trips": int(np.count_nonzero(res.guard_trips[i])),
            "regimes": regime_occupancy(res.opening_type[i]),
        }
    return {
        "volume_in": float(np.sum(np.maximum(q, 0.0)) * dt),
        "volume_out": float(np.sum(np.maximum(-q, 0.0)) * dt),
        "peak_inflow": float(max(np.max(q), 0.0)) if q.size else 0.0,
        "peak_outflow": float(max(-np.min(q), 0.0)) if q.size else 0.0,
        "clamp_steps": int(np.count_nonzero(res.clamp_factor < 1.0)),
        "guard_trips": int(np.count_nonzero(res.guard_trips)),
        "openings": openings,
    }
