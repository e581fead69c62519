import numpy as np

from swcoupling.constants import CouplingType
from swcoupling.regime import find_coupling_type, find_coupling_types

CREST = 2.0

# (node_head, overland_head, area, width) -> regime
DECISION_TABLE = [
    ((3.0, 2.0, 25.0, 1.0), CouplingType.ORIFICE),  # surcharged overflow
    ((2.5, 3.0, 0.5, 1.0), CouplingType.ORIFICE),  # deep drainage into surcharged node
    ((2.5, 3.0, 10.0, 5.0), CouplingType.SUBMERGED_WEIR),
    ((1.0, 3.0, 10.0, 5.0), CouplingType.FREE_WEIR),
    ((2.0, 3.0, 10.0, 5.0), CouplingType.FREE_WEIR),  # node level exactly at the rim
    ((2.5, 2.5, 10.0, 5.0), CouplingType.NO_COUPLING_FLOW),  # equal heads
    ((1.5, 1.0, 10.0, 5.0), CouplingType.NO_COUPLING_FLOW),  # overflow below the rim
    ((1.0, 2.0, 10.0, 5.0), CouplingType.NO_COUPLING_FLOW),  # surface not above the rim
]


def test_decision_table():
    for (node_head, overland_head, area, width), expected in DECISION_TABLE:
        got = find_coupling_type(CREST, node_head, overland_head, area, width)
        assert got == expected, (node_head, overland_head, area, width)


def test_equal_heads_never_flow():
    for head in (0.0, 1.0, 2.0, 5.0):
        assert (
            find_coupling_type(CREST, head, head, 1.0, 1.0)
            == CouplingType.NO_COUPLING_FLOW
        )


def test_weir_ratio_boundary_is_orifice():
    # surface depth 1.0 equals area/width 1.0
    assert find_coupling_type(CREST, 2.5, 3.0, 4.0, 4.0) == CouplingType.ORIFICE
    assert find_coupling_type(CREST, 2.5, 3.0, 4.1, 4.0) == CouplingType.SUBMERGED_WEIR


def test_array_form_matches_scalar():
    rows = [row for row, _ in DECISION_TABLE]
    node_head = np.array([r[0] for r in rows])
    overland_head = np.array([r[1] for r in rows])
    area = np.array([r[2] for r in rows])
    width = np.array([r[3] for r in rows])
    got = find_coupling_types(CREST, node_head, overland_head, area, width)
    assert got.tolist() == [int(expected) for _, expected in DECISION_TABLE]
