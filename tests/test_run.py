import json
from pathlib import Path

import numpy as np
import pytest

from swcoupling.cases import CaseConfig, NodeConfig, OpeningConfig
from swcoupling.constants import CouplingType
from swcoupling.profiles import make_series_constant, make_series_linear
from swcoupling.run import export_case_artifacts, simulate


def _node(area=50.0):
    return NodeConfig("J1", invert_elev=0.0, full_depth=2.0, coupling_area=area)


def test_profile_run_shapes_and_flags():
    res = simulate(
        _node(),
        [OpeningConfig(0, 1.0, 4.0), OpeningConfig(3, 0.5, 2.0)],
        make_series_constant(1.0),
        make_series_constant(0.1),
        CaseConfig(duration=20.0, dt=2.0),
    )
    assert res.t.shape == (10,)
    assert res.opening_flow.shape == (2, 10)
    assert res.opening_ids == [0, 3]
    assert (res.opening_type == CouplingType.FREE_WEIR).all()
    np.testing.assert_allclose(res.inflow, res.opening_flow.sum(axis=0), rtol=1e-12)
    flags = res.meta["validity_flags"]
    assert flags["state_integrity"]["status"] == "ok"
    assert flags["inflow_balance"]["status"] == "ok"
    assert flags["gravity_units"]["status"] == "ok"
    s = res.meta["summary"]
    assert s["volume_in"] == pytest.approx(float(np.sum(res.inflow)) * 2.0)
    assert s["volume_out"] == 0.0
    assert s["openings"]["3"]["regimes"]["FREE_WEIR"] == 1.0


def test_reservoir_never_drains_below_zero():
    res = simulate(
        _node(area=1.0),
        [OpeningConfig(0, 1.0, 4.0)],
        make_series_constant(0.5),
        make_series_constant(0.3),
        CaseConfig(duration=30.0, dt=1.0, overland_model="reservoir"),
    )
    assert res.overland_depth[0] == pytest.approx(0.3)
    assert np.all(res.overland_depth >= 0.0)
    # the cell cannot give more than it held
    assert float(np.sum(res.inflow)) * 1.0 <= 0.3 * 1.0 + 1e-9
    assert res.meta["summary"]["clamp_steps"] >= 1


def test_rising_node_reverses_flow_through_a_dead_step():
    res = simulate(
        _node(),
        [OpeningConfig(0, 1.0, 4.0)],
        make_series_linear(1.5, 0.25),
        make_series_constant(0.1),
        CaseConfig(duration=10.0, dt=1.0),
    )
    q = res.inflow
    assert q[0] > 0.0 and q[-1] < 0.0
    k = int(np.argmax(res.guard_trips[0]))
    assert res.guard_trips[0, k]
    assert q[k] == 0.0
    assert res.opening_type[0, k] == CouplingType.NO_COUPLING_FLOW


def test_reservoir_requires_coupling_area():
    with pytest.raises(ValueError):
        simulate(
            _node(area=0.0),
            [OpeningConfig(0, 1.0, 4.0)],
            make_series_constant(0.5),
            make_series_constant(0.3),
            CaseConfig(duration=1.0, dt=1.0, overland_model="reservoir"),
        )


def test_export_artifacts(tmp_path: Path, capsys):
    res = simulate(
        _node(),
        [OpeningConfig(0, 1.0, 4.0)],
        make_series_constant(1.0),
        make_series_constant(0.1),
        CaseConfig(duration=5.0, dt=1.0),
    )
    export_case_artifacts(tmp_path, "case", res, run_params={"x": 1})
    assert (tmp_path / "case.npz").exists()
    assert (tmp_path / "summary.csv").exists()
    meta = json.loads((tmp_path / "case_meta.json").read_text(encoding="utf-8"))
    assert meta["node"]["name"] == "J1"
    run = json.loads((tmp_path / "run.json").read_text(encoding="utf-8"))
    assert run["parameters"] == {"x": 1}
    assert "Validity flags" in capsys.readouterr().out
