import math

import numpy as np
import pytest

from swcoupling.constants import GRAVITY_SI, GRAVITY_US, CouplingType
from swcoupling.flux import find_coupling_inflow, find_coupling_inflows
from swcoupling.regime import find_coupling_type

CO, CFW, CSW = 0.167, 0.54, 0.056


def _q(ct, crest, node_head, overland_head, area, width, g=GRAVITY_SI):
    return find_coupling_inflow(
        ct, crest, node_head, overland_head, CO, CFW, CSW, area, width, gravity=g
    )


def test_no_flow_regimes_are_zero():
    for ct in (CouplingType.NO_COUPLING, CouplingType.NO_COUPLING_FLOW):
        assert _q(ct, 2.0, 1.0, 3.0, 10.0, 5.0) == 0.0
        assert _q(ct, 2.0, 5.0, 3.0, 10.0, 5.0) == 0.0


def test_orifice_outflow_scenario():
    q = _q(CouplingType.ORIFICE, 2.0, 3.0, 2.0, 25.0, 1.0)
    assert q < 0.0
    assert abs(q) == pytest.approx(18.49, abs=0.01)


def test_free_weir_inflow_scenario():
    q = _q(CouplingType.FREE_WEIR, 2.0, 1.0, 3.0, 10.0, 5.0)
    assert q == pytest.approx(7.97, abs=0.01)


def test_submerged_weir_uses_head_difference():
    q = _q(CouplingType.SUBMERGED_WEIR, 2.0, 2.5, 3.0, 10.0, 5.0)
    expected = CSW * 5.0 * 1.0 * math.sqrt(2.0 * GRAVITY_SI * 0.5)
    assert q == pytest.approx(expected, rel=1e-12)


def test_sign_follows_head_difference():
    crest = 2.0
    for node_head in np.linspace(0.5, 4.0, 15):
        for overland_head in np.linspace(2.0, 4.0, 9):
            ct = find_coupling_type(crest, node_head, overland_head, 1.0, 2.0)
            q = _q(ct, crest, node_head, overland_head, 1.0, 2.0)
            if q != 0.0:
                assert np.sign(q) == np.sign(overland_head - node_head)


def test_gravity_is_configurable():
    q_si = _q(CouplingType.ORIFICE, 2.0, 3.0, 2.0, 1.0, 1.0, g=GRAVITY_SI)
    q_us = _q(CouplingType.ORIFICE, 2.0, 3.0, 2.0, 1.0, 1.0, g=GRAVITY_US)
    assert q_us / q_si == pytest.approx(math.sqrt(GRAVITY_US / GRAVITY_SI))


def test_array_form_matches_scalar():
    types = np.array(
        [
            CouplingType.ORIFICE,
            CouplingType.FREE_WEIR,
            CouplingType.SUBMERGED_WEIR,
            CouplingType.NO_COUPLING_FLOW,
        ]
    )
    node_head = np.array([3.0, 1.0, 2.5, 2.5])
    overland_head = np.array([2.0, 3.0, 3.0, 2.5])
    got = find_coupling_inflows(
        types, 2.0, node_head, overland_head, CO, CFW, CSW, 10.0, 5.0
    )
    expected = [
        _q(ct, 2.0, nh, oh, 10.0, 5.0)
        for ct, nh, oh in zip(types, node_head, overland_head)
    ]
    np.testing.assert_allclose(got, expected, rtol=1e-12)
    assert got[-1] == 0.0
