from __future__ import annotations

import numpy as np

from .cases import CaseConfig, RunResult
from .constants import CLAMP_RTOL, UNIT_GRAVITY


def _state_flag(res: RunResult) -> dict:
    arrays = (res.inflow, res.opening_flow, res.depth, res.overland_depth)
    if any(np.any(~np.isfinite(a)) for a in arrays):
        return {"status": "fail", "message": "NaN/Inf detected in coupling arrays"}
    min_over = float(np.min(res.overland_depth)) if res.overland_depth.size else 0.0
    if min_over < 0.0:
        return {
            "status": "fail",
            "min_overland_depth": min_over,
            "message": "Negative overland depth",
        }
    return {"status": "ok", "min_overland_depth": min_over}


def _balance_flag(res: RunResult) -> dict:
    if res.opening_flow.size == 0:
        return {"status": "ok", "max_rel_err": 0.0, "message": "No openings"}
    total = np.sum(res.opening_flow, axis=0)
    scale = np.maximum(np.abs(res.inflow), 1e-12)
    rel = np.abs(total - res.inflow) / scale
    rel = np.where(np.abs(res.inflow) > 0.0, rel, np.abs(total))
    err = float(np.max(rel))
    return {
        "status": "ok" if err <= 1e-6 else "fail",
        "max_rel_err": err,
        "message": "Node inflow must equal the sum of opening flows",
    }


def _chatter_flag(res: RunResult) -> dict:
    n = max(res.t.size, 1)
    trips = np.count_nonzero(res.guard_trips, axis=1) if res.guard_trips.size else np.zeros(1)
    frac = float(np.max(trips)) / n
    return {
        "status": "ok" if frac <= 0.1 else "warning",
        "max_trip_fraction": frac,
        "message": "Frequent direction flips suggest heads hovering near equality",
    }


def _clamp_flag(res: RunResult) -> dict:
    n = max(res.t.size, 1)
    clamped = res.clamp_factor < 1.0 - CLAMP_RTOL
    frac = float(np.count_nonzero(clamped)) / n
    min_factor = float(np.min(res.clamp_factor)) if res.clamp_factor.size else 1.0
    return {
        "status": "ok" if frac <= 0.25 else "warning",
        "clamped_fraction": frac,
        "min_factor": min_factor,
        "message": "Inflow often capped by surface volume; consider a shorter timestep",
    }


def _units_flag(case: CaseConfig) -> dict:
    g = case.coupling.g
    ref = UNIT_GRAVITY[case.coupling.units]
    rel = abs(g - ref) / ref
    return {
        "status": "ok" if rel <= 0.05 else "warning",
        "gravity": g,
        "units": case.coupling.units,
        "message": "Gravity should match the unit system of depths and areas",
    }


def evaluate_validity_flags(res: RunResult, case: CaseConfig) -> dict:
    return {
        "state_integrity": _state_flag(res),
        "inflow_balance": _balance_flag(res),
        "oscillation_chatter": _chatter_flag(res),
        "clamp_activity": _clamp_flag(res),
        "gravity_units": _units_flag(case),
    }
