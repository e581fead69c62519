from __future__ import annotations

import math

import numpy as np

from .constants import FREE_WEIR_EXPONENT, GRAVITY_SI, CouplingType


def find_coupling_inflow(
    coupling_type: int,
    crest_elev: float,
    node_head: float,
    overland_head: float,
    orifice_coeff: float,
    free_weir_coeff: float,
    sub_weir_coeff: float,
    area: float,
    width: float,
    gravity: float = GRAVITY_SI,
) -> float:
    """Flow through one opening, positive from the surface into the node."""
    head_up = max(overland_head, node_head)
    head_down = min(overland_head, node_head)
    head_diff = head_up - head_down
    depth_up = max(head_up - crest_elev, 0.0)

    if coupling_type == CouplingType.ORIFICE:
        magnitude = orifice_coeff * area * math.sqrt(2.0 * gravity * head_diff)
    elif coupling_type == CouplingType.FREE_WEIR:
        magnitude = (
            (2.0 / 3.0)
            * free_weir_coeff
            * width
            * depth_up**FREE_WEIR_EXPONENT
            * math.sqrt(2.0 * gravity)
        )
    elif coupling_type == CouplingType.SUBMERGED_WEIR:
        magnitude = (
            sub_weir_coeff * width * depth_up * math.sqrt(2.0 * gravity * head_diff)
        )
    else:
        magnitude = 0.0

    magnitude = abs(magnitude)
    if magnitude == 0.0:
        return 0.0
    return magnitude if overland_head > node_head else -magnitude


def find_coupling_inflows(
    coupling_type,
    crest_elev,
    node_head,
    overland_head,
    orifice_coeff,
    free_weir_coeff,
    sub_weir_coeff,
    area,
    width,
    gravity: float = GRAVITY_SI,
) -> np.ndarray:
    """Array form of :func:`find_coupling_inflow`; inputs broadcast."""
    coupling_type = np.asarray(coupling_type)
    node_head = np.asarray(node_head, dtype=float)
    overland_head = np.asarray(overland_head, dtype=float)

    head_up = np.maximum(overland_head, node_head)
    head_diff = head_up - np.minimum(overland_head, node_head)
    depth_up = np.maximum(head_up - np.asarray(crest_elev, dtype=float), 0.0)

    magnitude = np.select(
        [
            coupling_type == CouplingType.ORIFICE,
            coupling_type == CouplingType.FREE_WEIR,
            coupling_type == CouplingType.SUBMERGED_WEIR,
        ],
        [
            orifice_coeff * np.asarray(area) * np.sqrt(2.0 * gravity * head_diff),
            (2.0 / 3.0)
            * free_weir_coeff
            * np.asarray(width)
            * depth_up**FREE_WEIR_EXPONENT
            * math.sqrt(2.0 * gravity),
            sub_weir_coeff
            * np.asarray(width)
            * depth_up
            * np.sqrt(2.0 * gravity * head_diff),
        ],
        default=0.0,
    )
    magnitude = np.abs(magnitude)
    q = np.where(overland_head > node_head, magnitude, -magnitude)
    return np.where(magnitude == 0.0, 0.0, q)
