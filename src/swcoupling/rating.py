from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .cases import OpeningConfig
from .constants import GRAVITY_SI
from .flux import find_coupling_inflows
from .geometry import assert_pos
from .regime import find_coupling_types


@dataclass
class RatingCurve:
    overland_depth: np.ndarray
    coupling_type: np.ndarray
    flow: np.ndarray


def rating_curve(
    opening: OpeningConfig,
    crest_elev: float,
    node_depth_below_crest: float,
    overland_depths,
    gravity: float = GRAVITY_SI,
) -> RatingCurve:
    """Opening flow against overland depth for a fixed node water level.

    ``node_depth_below_crest`` is positive when the node water surface is
    below the rim and negative when the node is surcharged.
    """
    assert_pos("area", opening.area)
    assert_pos("width", opening.width)
    h = np.asarray(overland_depths, dtype=float)
    node_head = np.full_like(h, crest_elev - node_depth_below_crest)
    overland_head = crest_elev + h
    types = find_coupling_types(
        crest_elev, node_head, overland_head, opening.area, opening.width
    )
    flow = find_coupling_inflows(
        types,
        crest_elev,
        node_head,
        overland_head,
        opening.orifice_coeff,
        opening.free_weir_coeff,
        opening.sub_weir_coeff,
        opening.area,
        opening.width,
        gravity=gravity,
    )
    return RatingCurve(overland_depth=h, coupling_type=types, flow=flow)
