import warnings

import pytest

from swcoupling.cases import CaseConfig, CouplingConfig
from swcoupling.config import CaseFile, SeriesSpec
from swcoupling.constants import GRAVITY_SI, GRAVITY_US, OpeningKind


def _case_file(**kw):
    base = dict(
        openings=[{"id": 0, "area": 1.0, "width": 4.0}, {"id": 1, "preset": "grate"}],
        depth=SeriesSpec(kind="linear", value=0.5, rate=0.01),
        overland=SeriesSpec(kind="step", value=0.0, value_after=0.2, step_time_s=5.0),
    )
    base.update(kw)
    return CaseFile(**base)


def test_case_file_roundtrip_json():
    cfg = _case_file(units="US", duration_s=30.0)
    loaded = CaseFile.from_json(cfg.to_json())
    assert loaded.units == "US"
    assert loaded.duration_s == 30.0
    assert loaded.depth.kind == "linear"
    assert loaded.overland.step_time_s == 5.0
    assert loaded.to_case_config().coupling.g == GRAVITY_US


def test_case_file_save_load(tmp_path):
    cfg = _case_file()
    path = tmp_path / "case.json"
    cfg.save_json(path)
    assert CaseFile.load_json(path).openings == cfg.openings
    with pytest.raises(FileNotFoundError):
        CaseFile.load_json(tmp_path / "missing.json")


def test_presets_expand_into_openings():
    ops = _case_file().to_opening_configs()
    assert [o.id for o in ops] == [0, 1]
    assert ops[1].kind == OpeningKind.GRATE
    assert ops[1].area == pytest.approx(0.24)
    assert ops[1].width == pytest.approx(2.0)


def test_validation_rejects_bad_values():
    for kw in [
        {"units": "furlongs"},
        {"overland_model": "bad"},
        {"dt_s": 0.0},
        {"openings": []},
        {"openings": [{"id": 0, "area": 1.0, "width": 1.0}] * 2},
        {"depth": SeriesSpec(kind="table")},
    ]:
        with pytest.raises(ValueError):
            _case_file(**kw).validate()


def test_coupling_config_gravity():
    assert CouplingConfig().g == GRAVITY_SI
    assert CouplingConfig(units="US").g == GRAVITY_US
    with pytest.raises(ValueError):
        CouplingConfig(units="cgs")
    with pytest.raises(ValueError):
        CouplingConfig(gravity=0.0)
    with pytest.warns(UserWarning, match="far from"):
        CouplingConfig(units="SI", gravity=GRAVITY_US)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert CouplingConfig(gravity=9.80665).g == 9.80665


def test_case_config_rejects_bad_timing():
    assert CaseConfig(duration=10.0, dt=0.5).n_steps == 20
    with pytest.raises(ValueError, match="dt"):
        CaseConfig(duration=10.0, dt=0.0)
    with pytest.raises(ValueError, match="duration"):
        CaseConfig(duration=-1.0, dt=1.0)
    with pytest.raises(ValueError, match="overland_model"):
        CaseConfig(duration=10.0, dt=1.0, overland_model="tank")
