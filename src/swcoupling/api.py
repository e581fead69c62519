"""Administrative surface over the coupling core.

Every call is keyed by node index and, where relevant, opening id. Calls made
before :meth:`CouplingProject.open` raise :class:`LifecycleViolation` with
``ERR_API_INPUTNOTOPEN``; opening mutations made while the simulation is
stepping raise it with ``ERR_API_SIM_NRUNNING``. Read-only queries stay legal
during a run so the overland model can read flows between steps.
"""

from __future__ import annotations

import logging

from . import engine
from .cases import CouplingConfig
from .constants import CouplingType, NodeParam, OpeningParam
from .errors import (
    ERR_API_INPUTNOTOPEN,
    ERR_API_SIM_NRUNNING,
    InvalidIndex,
    LifecycleViolation,
)
from .network import CouplingNetwork, CouplingNode
from .opening import Opening

log = logging.getLogger(__name__)

STATE_CLOSED = "closed"
STATE_OPEN = "open"
STATE_RUNNING = "running"

_OPENING_PARAM_ATTR = {
    OpeningParam.AREA: "area",
    OpeningParam.WIDTH: "width",
    OpeningParam.ORIFICE_COEFF: "orifice_coeff",
    OpeningParam.FREE_WEIR_COEFF: "free_weir_coeff",
    OpeningParam.SUB_WEIR_COEFF: "sub_weir_coeff",
}

_NODE_PARAM_ATTR = {
    NodeParam.INVERT_ELEV: "invert_elev",
    NodeParam.FULL_DEPTH: "full_depth",
    NodeParam.DEPTH: "depth",
    NodeParam.OVERLAND_DEPTH: "overland_depth",
    NodeParam.COUPLING_AREA: "coupling_area",
}


class CouplingProject:
    def __init__(self, config: CouplingConfig | None = None) -> None:
        self.config = config or CouplingConfig()
        self.network: CouplingNetwork | None = None
        self.state = STATE_CLOSED
        self.elapsed = 0.0
        self.n_steps = 0

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def open(self, network: CouplingNetwork) -> None:
        if self.state == STATE_RUNNING:
            raise LifecycleViolation(
                "cannot open a network while the simulation is running",
                code=ERR_API_SIM_NRUNNING,
            )
        if self.state == STATE_OPEN:
            log.info("project re-opened; previous network released")
        self.network = network
        self.state = STATE_OPEN
        log.info("project opened with %d nodes (g=%g)", len(network), self.config.g)

    def start(self) -> None:
        self._require_idle()
        self.state = STATE_RUNNING
        self.elapsed = 0.0
        self.n_steps = 0
        log.info("simulation started")

    def step(self, t_step: float) -> engine.StepReport:
        if self.state != STATE_RUNNING:
            raise LifecycleViolation("simulation not started", code=ERR_API_INPUTNOTOPEN)
        report = engine.execute(self.network, t_step, self.config)
        engine.set_old_state(self.network)
        self.elapsed += t_step
        self.n_steps += 1
        return report

    def end(self) -> None:
        if self.state != STATE_RUNNING:
            raise LifecycleViolation("simulation not started", code=ERR_API_INPUTNOTOPEN)
        self.state = STATE_OPEN
        log.info("simulation ended after %d steps (%.6g s)", self.n_steps, self.elapsed)

    def close(self) -> None:
        if self.network is not None:
            for node in self.network:
                node.openings.remove_all()
        self.network = None
        self.state = STATE_CLOSED
        log.info("project closed")

    def _require_open(self) -> CouplingNetwork:
        if self.state == STATE_CLOSED or self.network is None:
            raise LifecycleViolation("project not opened", code=ERR_API_INPUTNOTOPEN)
        return self.network

    def _require_idle(self) -> CouplingNetwork:
        network = self._require_open()
        if self.state == STATE_RUNNING:
            raise LifecycleViolation(
                "cannot change openings while the simulation is running",
                code=ERR_API_SIM_NRUNNING,
            )
        return network

    def _node(self, j: int) -> CouplingNode:
        return self._require_open().node(j)

    def _opening(self, j: int, opening_id: int) -> Opening:
        return self._node(j).openings.get(opening_id)

    # ------------------------------------------------------------------
    # openings
    # ------------------------------------------------------------------
    def set_opening(
        self,
        j: int,
        opening_id: int,
        kind: int,
        area: float,
        width: float,
        orifice_coeff: float,
        free_weir_coeff: float,
        sub_weir_coeff: float,
    ) -> None:
        node = self._require_idle().node(j)
        node.openings.upsert(
            opening_id, kind, area, width, orifice_coeff, free_weir_coeff, sub_weir_coeff
        )

    def delete_opening(self, j: int, opening_id: int) -> None:
        self._require_idle().node(j).openings.remove(opening_id)

    def delete_all_openings(self, j: int) -> None:
        self._require_idle().node(j).openings.remove_all()

    def open_opening(self, j: int, opening_id: int) -> None:
        self._require_idle().node(j).openings.open(opening_id)

    def close_opening(self, j: int, opening_id: int) -> None:
        self._require_idle().node(j).openings.close(opening_id)

    def count_openings(self, j: int) -> int:
        return self._node(j).openings.count()

    def get_opening_ids(self, j: int) -> list[int]:
        return self._node(j).openings.ids()

    def get_opening_type(self, j: int, opening_id: int) -> int:
        return self._opening(j, opening_id).kind

    def get_opening_coupling_type(self, j: int, opening_id: int) -> CouplingType:
        return self._opening(j, opening_id).coupling_type

    def get_opening_flow(self, j: int, opening_id: int) -> float:
        return self._opening(j, opening_id).new_inflow

    def get_opening_param(self, j: int, opening_id: int, param: int) -> float:
        opening = self._opening(j, opening_id)
        try:
            attr = _OPENING_PARAM_ATTR[OpeningParam(param)]
        except ValueError:
            raise InvalidIndex(f"unknown opening parameter {param}") from None
        return float(getattr(opening, attr))

    def is_node_coupled(self, j: int) -> bool:
        return self._node(j).openings.is_coupled()

    # ------------------------------------------------------------------
    # node exchange values
    # ------------------------------------------------------------------
    def get_node_param(self, j: int, param: int) -> float:
        return float(getattr(self._node(j), _node_attr(param)))

    def set_node_param(self, j: int, param: int, value: float) -> None:
        node = self._node(j)
        attr = _node_attr(param)
        if attr in ("invert_elev", "full_depth"):
            self._require_idle()
        setattr(node, attr, float(value))

    def get_node_result(self, j: int) -> float:
        return self._node(j).coupling_inflow


def _node_attr(param: int) -> str:
    try:
        return _NODE_PARAM_ATTR[NodeParam(param)]
    except ValueError:
        raise InvalidIndex(f"unknown node parameter {param}") from None
