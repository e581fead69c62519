from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import numpy as np

from .api import CouplingProject
from .cases import CaseConfig, NodeConfig, OpeningConfig, RunResult
from .diagnostics import summarize_run
from .io import (
    dump_meta_json,
    make_results_dir,
    print_validity_summary,
    write_run_json,
    write_summary_csv,
    write_validity_json,
)
from .network import CouplingNetwork, build_node
from .plotting import plot_basic
from .profiles import Series
from .validity import evaluate_validity_flags


def simulate(
    node_cfg: NodeConfig,
    openings: list[OpeningConfig],
    depth: Series,
    overland: Series,
    case: CaseConfig,
    surface_inflow: Series | None = None,
) -> RunResult:
    """Step a single coupled node through prescribed network/overland depths.

    With ``overland_model="reservoir"`` the overland series only gives the
    initial depth; afterwards the surface cell loses the coupling volume and
    gains ``surface_inflow`` (volume rate) each step.
    """
    if case.overland_model == "reservoir" and not (node_cfg.coupling_area > 0.0):
        raise ValueError("reservoir overland model needs coupling_area > 0")

    node = build_node(node_cfg, openings)
    project = CouplingProject(case.coupling)
    project.open(CouplingNetwork([node]))
    project.start()

    n = case.n_steps
    dt = case.dt
    t = np.arange(n, dtype=float) * dt
    ids = node.openings.ids()
    m = len(ids)

    depth_arr = np.zeros(n)
    overland_arr = np.zeros(n)
    inflow = np.zeros(n)
    raw_inflow = np.zeros(n)
    clamp_factor = np.ones(n)
    opening_flow = np.zeros((m, n))
    opening_type = np.zeros((m, n), dtype=int)
    guard_trips = np.zeros((m, n), dtype=bool)

    h_over = float(overland(0.0))
    for k, tk in enumerate(t):
        node.depth = depth(float(tk))
        if case.overland_model == "profile":
            node.overland_depth = overland(float(tk))
        else:
            node.overland_depth = h_over
        depth_arr[k] = node.depth
        overland_arr[k] = node.overland_depth

        report = project.step(dt)

        inflow[k] = node.coupling_inflow
        totals = report.inflows.get(0)
        if totals is not None:
            raw_inflow[k] = totals.raw
            clamp_factor[k] = totals.factor
        tripped = set(report.guard_trips.get(0, ()))
        for i, oid in enumerate(ids):
            o = node.openings.get(oid)
            opening_flow[i, k] = o.new_inflow
            opening_type[i, k] = int(o.coupling_type)
            guard_trips[i, k] = oid in tripped

        if case.overland_model == "reservoir":
            q_in = surface_inflow(float(tk)) if surface_inflow is not None else 0.0
            h_over = max(
                h_over + (q_in - node.coupling_inflow) * dt / node_cfg.coupling_area,
                0.0,
            )

    project.end()

    res = RunResult(
        t=t,
        depth=depth_arr,
        overland_depth=overland_arr,
        inflow=inflow,
        raw_inflow=raw_inflow,
        clamp_factor=clamp_factor,
        opening_ids=ids,
        opening_flow=opening_flow,
        opening_type=opening_type,
        guard_trips=guard_trips,
        meta={
            "case": asdict(case),
            "node": asdict(node_cfg),
            "openings": [asdict(o) for o in openings],
            "depth_series": depth.name,
            "overland_series": overland.name,
        },
    )
    res.meta["validity_flags"] = evaluate_validity_flags(res, case)
    res.meta["summary"] = summarize_run(res, dt)
    return res


def export_case_artifacts(
    outdir: Path,
    stem: str,
    res: RunResult,
    run_params: dict,
    do_plots: bool = False,
) -> None:
    np.savez_compressed(
        outdir / f"{stem}.npz",
        t=res.t,
        depth=res.depth,
        overland_depth=res.overland_depth,
        inflow=res.inflow,
        raw_inflow=res.raw_inflow,
        clamp_factor=res.clamp_factor,
        opening_ids=np.asarray(res.opening_ids, dtype=int),
        opening_flow=res.opening_flow,
        opening_type=res.opening_type,
        guard_trips=res.guard_trips,
    )
    dump_meta_json(outdir, f"{stem}_meta.json", res.meta)
    write_validity_json(outdir, stem, res.meta.get("validity_flags", {}))
    print_validity_summary(res.meta.get("validity_flags", {}))
    write_summary_csv(outdir, res)
    write_run_json(outdir, params=run_params)
    if do_plots:
        plot_basic(outdir, stem, res)


def make_case_output_dir(case_name: str) -> Path:
    return make_results_dir(case_name)
