from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .cases import NodeConfig, OpeningConfig
from .errors import InvalidIndex
from .registry import OpeningRegistry


@dataclass(frozen=True)
class NodeSnapshot:
    invert_elev: float
    full_depth: float
    depth: float
    overland_depth: float
    coupling_area: float

    @property
    def crest_elev(self) -> float:
        return self.invert_elev + self.full_depth

    @property
    def node_head(self) -> float:
        return self.invert_elev + self.depth

    @property
    def overland_head(self) -> float:
        return self.crest_elev + self.overland_depth


@dataclass
class CouplingNode:
    name: str
    invert_elev: float
    full_depth: float
    depth: float = 0.0
    overland_depth: float = 0.0
    coupling_area: float = 0.0
    coupling_inflow: float = 0.0
    openings: OpeningRegistry = field(default_factory=OpeningRegistry, repr=False)

    @property
    def crest_elev(self) -> float:
        return self.invert_elev + self.full_depth

    def snapshot(self) -> NodeSnapshot:
        return NodeSnapshot(
            invert_elev=float(self.invert_elev),
            full_depth=float(self.full_depth),
            depth=float(self.depth),
            overland_depth=float(self.overland_depth),
            coupling_area=float(self.coupling_area),
        )


class CouplingNetwork:
    def __init__(self, nodes: list[CouplingNode] | None = None) -> None:
        self.nodes: list[CouplingNode] = []
        self._by_name: dict[str, int] = {}
        for n in nodes or []:
            self.add_node(n)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[CouplingNode]:
        return iter(self.nodes)

    def add_node(self, node: CouplingNode) -> int:
        if node.name in self._by_name:
            raise ValueError(f"duplicate node name: {node.name}")
        self.nodes.append(node)
        self._by_name[node.name] = len(self.nodes) - 1
        return len(self.nodes) - 1

    def node(self, j: int) -> CouplingNode:
        if not (0 <= j < len(self.nodes)):
            raise InvalidIndex(f"no node with index {j}")
        return self.nodes[j]

    def index_of(self, name: str) -> int:
        try:
            return self._by_name[name]
        except KeyError:
            raise InvalidIndex(f"no node named {name!r}") from None


def build_node(cfg: NodeConfig, openings: list[OpeningConfig]) -> CouplingNode:
    node = CouplingNode(
        name=cfg.name,
        invert_elev=cfg.invert_elev,
        full_depth=cfg.full_depth,
        coupling_area=cfg.coupling_area,
    )
    for o in openings:
        node.openings.upsert(
            o.id,
            o.kind,
            o.area,
            o.width,
            o.orifice_coeff,
            o.free_weir_coeff,
            o.sub_weir_coeff,
        )
    return node
