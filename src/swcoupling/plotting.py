from pathlib import Path

HAS_MPL = False
try:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MPL = True
except ImportError:
    HAS_MPL = False


def plot_basic(outdir: Path, name: str, res) -> None:
    if not HAS_MPL:
        return
    outdir.mkdir(parents=True, exist_ok=True)

    fig, (ax_q, ax_r) = plt.subplots(2, 1, figsize=(11, 7), sharex=True)
    ax_q.plot(res.t, res.inflow, lw=2, label="node coupling inflow")
    ax_q.plot(res.t, res.raw_inflow, lw=1, ls="--", label="uncapped inflow")
    ax_q.axhline(0.0, color="k", lw=0.5)
    ax_q.set(ylabel="Q (surface→node +)", title=f"{name}: coupling flow")
    ax_q.grid(True, alpha=0.3)
    ax_q.legend()

    for i, oid in enumerate(res.opening_ids):
        ax_r.step(res.t, res.opening_type[i], where="post", label=f"opening {oid}")
    ax_r.set(xlabel="t, s", ylabel="regime")
    ax_r.set_yticks([0, 1, 2, 3, 4], ["closed", "no flow", "orifice", "free weir", "sub. weir"])
    ax_r.grid(True, alpha=0.3)
    ax_r.legend()
    fig.tight_layout()
    fig.savefig(outdir / f"{name}_coupling.png", dpi=200)
    plt.close(fig)
