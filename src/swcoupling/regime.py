"""Coupling regime of an opening from the relative water elevations.

See Rubinato et al. (2017), DOI 10.1016/j.jhydrol.2017.06.024.
"""

from __future__ import annotations

import numpy as np

from .constants import CouplingType
from .geometry import weir_ratio


def find_coupling_type(
    crest_elev: float,
    node_head: float,
    overland_head: float,
    area: float,
    width: float,
) -> CouplingType:
    """Classify one opening.

    Width must be > 0; this is enforced when the opening is registered.
    """
    surface_depth = overland_head - crest_elev
    ratio = weir_ratio(area, width)

    overflow = node_head > overland_head
    drainage = node_head < overland_head
    surcharged = node_head > crest_elev

    if not overflow and not drainage:
        return CouplingType.NO_COUPLING_FLOW
    if (overflow and surcharged) or (drainage and surcharged and surface_depth >= ratio):
        return CouplingType.ORIFICE
    if drainage and surcharged and surface_depth < ratio:
        return CouplingType.SUBMERGED_WEIR
    if drainage and not surcharged and overland_head > crest_elev:
        return CouplingType.FREE_WEIR
    return CouplingType.NO_COUPLING_FLOW


def find_coupling_types(crest_elev, node_head, overland_head, area, width) -> np.ndarray:
    """Array form of :func:`find_coupling_type`; inputs broadcast."""
    crest_elev = np.asarray(crest_elev, dtype=float)
    node_head = np.asarray(node_head, dtype=float)
    overland_head = np.asarray(overland_head, dtype=float)
    ratio = np.asarray(area, dtype=float) / np.asarray(width, dtype=float)

    surface_depth = overland_head - crest_elev
    overflow = node_head > overland_head
    drainage = node_head < overland_head
    surcharged = node_head > crest_elev

    orifice = (overflow & surcharged) | (drainage & surcharged & (surface_depth >= ratio))
    sub_weir = drainage & surcharged & (surface_depth < ratio)
    free_weir = drainage & ~surcharged & (overland_head > crest_elev)

    return np.select(
        [orifice, sub_weir, free_weir],
        [
            int(CouplingType.ORIFICE),
            int(CouplingType.SUBMERGED_WEIR),
            int(CouplingType.FREE_WEIR),
        ],
        default=int(CouplingType.NO_COUPLING_FLOW),
    )
