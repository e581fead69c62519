from __future__ import annotations

import csv
import json
import platform
import subprocess
import sys
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def make_results_dir(case_name: str, root: Path = Path("results")) -> Path:
    out = root / f"{utc_timestamp()}_{case_name}"
    out.mkdir(parents=True, exist_ok=True)
    return out


def current_git_commit() -> str:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def package_version() -> str:
    try:
        return version("swcoupling")
    except PackageNotFoundError:
        return "0.1.0"


def write_run_json(outdir: Path, params: dict) -> None:
    payload = {
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "git_commit": current_git_commit(),
        "python_version": sys.version,
        "package_version": package_version(),
        "platform": platform.platform(),
        "parameters": params,
    }
    (outdir / "run.json").write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


SUMMARY_FIELDS = [
    "opening",
    "volume_in",
    "volume_out",
    "peak_abs_flow",
    "guard_trips",
    "orifice_frac",
    "free_weir_frac",
    "sub_weir_frac",
]


def write_summary_csv(outdir: Path, res) -> None:
    rows = []
    for oid, s in res.meta.get("summary", {}).get("openings", {}).items():
        regimes = s.get("regimes", {})
        rows.append(
            {
                "opening": oid,
                "volume_in": s["volume_in"],
                "volume_out": s["volume_out"],
                "peak_abs_flow": s["peak_abs_flow"],
                "guard_trips": s["guard_trips"],
                "orifice_frac": regimes.get("ORIFICE", 0.0),
                "free_weir_frac": regimes.get("FREE_WEIR", 0.0),
                "sub_weir_frac": regimes.get("SUBMERGED_WEIR", 0.0),
            }
        )
    with (outdir / "summary.csv").open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=SUMMARY_FIELDS)
        writer.writeheader()
        writer.writerows(rows)


def dump_meta_json(outdir: Path, filename: str, meta: dict) -> None:
    (outdir / filename).write_text(
        json.dumps(meta, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def write_validity_json(outdir: Path, stem: str, validity_flags: dict) -> Path:
    path = outdir / f"{stem}_validity.json"
    path.write_text(
        json.dumps(validity_flags, ensure_ascii=False, indent=2), encoding="utf-8"
    )
    return path


def print_validity_summary(validity_flags: dict) -> None:
    print("Validity flags:")
    for key, payload in validity_flags.items():
        status = payload.get("status", "n/a")
        msg = payload.get("message", "")
        print(f"  - {key}: {status} {msg}".rstrip())
