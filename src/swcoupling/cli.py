from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import asdict
from pathlib import Path

import numpy as np

from .cases import CouplingConfig, OpeningConfig
from .config import CaseFile
from .constants import CouplingType
from .gates import gate_clamp, gate_free_weir, gate_orifice, gate_steady_drainage
from .presets import OPENING_PRESETS, get_opening_preset
from .rating import rating_curve
from .run import export_case_artifacts, make_case_output_dir, simulate


def _run(args) -> None:
    case_path = Path(args.case)
    cfg = CaseFile.load_json(case_path)
    case = cfg.to_case_config()
    base = case_path.parent
    surface = cfg.surface_inflow.build("surface_inflow", base) if cfg.surface_inflow else None
    res = simulate(
        cfg.to_node_config(),
        cfg.to_opening_configs(),
        cfg.depth.build("depth", base),
        cfg.overland.build("overland", base),
        case,
        surface_inflow=surface,
    )
    out = make_case_output_dir(cfg.output_case_name)
    export_case_artifacts(
        out,
        cfg.output_case_name,
        res,
        run_params={"command": "run", "case_file": str(case_path), **asdict(cfg)},
        do_plots=args.do_plots,
    )
    s = res.meta["summary"]
    print(
        f"{cfg.node_name}: V_in={s['volume_in']:.6g} V_out={s['volume_out']:.6g} "
        f"Q_peak_in={s['peak_inflow']:.6g} Q_peak_out={s['peak_outflow']:.6g} "
        f"clamped_steps={s['clamp_steps']} guard_trips={s['guard_trips']}"
    )
    print(f"results: {out}")


def _rating(args) -> None:
    if args.preset:
        opening = get_opening_preset(args.preset).to_opening(0)
    else:
        opening = OpeningConfig(
            0,
            args.area,
            args.width,
            orifice_coeff=args.co,
            free_weir_coeff=args.cfw,
            sub_weir_coeff=args.csw,
        )
    depths = np.linspace(0.0, args.h_max, args.n)
    g = CouplingConfig(units=args.units).g
    curve = rating_curve(opening, args.crest, args.node_below_crest, depths, gravity=g)

    fh = open(args.out, "w", newline="", encoding="utf-8") if args.out else sys.stdout
    try:
        writer = csv.writer(fh)
        writer.writerow(["overland_depth", "regime", "flow"])
        for h, ct, q in zip(curve.overland_depth, curve.coupling_type, curve.flow):
            writer.writerow([f"{h:.6g}", CouplingType(int(ct)).name, f"{q:.6g}"])
    finally:
        if fh is not sys.stdout:
            fh.close()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="swcoupling")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gate")
    g.add_argument("--orifice", action="store_true")
    g.add_argument("--free-weir", action="store_true")
    g.add_argument("--clamp", action="store_true")
    g.add_argument("--steady", action="store_true")

    r = sub.add_parser("run")
    r.add_argument("--case", required=True)
    r.add_argument("--do-plots", action="store_true")

    c = sub.add_parser("rating")
    c.add_argument("--preset", choices=sorted(OPENING_PRESETS), default=None)
    c.add_argument("--area", type=float, default=1.0)
    c.add_argument("--width", type=float, default=4.0)
    c.add_argument("--co", type=float, default=0.167)
    c.add_argument("--cfw", type=float, default=0.54)
    c.add_argument("--csw", type=float, default=0.056)
    c.add_argument("--crest", type=float, default=0.0)
    c.add_argument("--node-below-crest", type=float, default=1.0)
    c.add_argument("--h-max", type=float, default=0.5)
    c.add_argument("--n", type=int, default=11)
    c.add_argument("--units", default="SI", choices=["SI", "US"])
    c.add_argument("--out", default="")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.cmd == "gate":
        selected = [args.orifice, args.free_weir, args.clamp, args.steady]
        run_all = not any(selected)
        gates = [gate_orifice, gate_free_weir, gate_clamp, gate_steady_drainage]
        for flag, gate in zip(selected, gates):
            if flag or run_all:
                print(f"{gate.__name__}: {gate()}")
        return
    if args.cmd == "run":
        _run(args)
        return
    _rating(args)


if __name__ == "__main__":
    main()
