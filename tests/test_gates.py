import pytest

from swcoupling.gates import gate_clamp, gate_free_weir, gate_orifice, gate_steady_drainage


def test_orifice_gate():
    m = gate_orifice()
    assert m.regime_ok
    assert m.q < 0.0
    assert abs(m.q) == pytest.approx(18.49, abs=0.01)
    assert m.errQ < 1e-12


def test_free_weir_gate():
    m = gate_free_weir()
    assert m.regime_ok
    assert m.q == pytest.approx(7.97, abs=0.01)
    assert m.errQ < 1e-12


def test_clamp_gate():
    m = gate_clamp()
    assert m.raw_total > m.max_inflow
    assert m.total == pytest.approx(m.max_inflow, rel=1e-9)
    assert m.errTotal < 1e-9
    assert m.errFactor < 1e-9
    assert len(m.factors) == 2


def test_steady_drainage_gate():
    m = gate_steady_drainage()
    assert m.regime_ok
    assert m.errQ < 1e-12
