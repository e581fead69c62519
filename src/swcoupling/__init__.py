"""Surface/sewer coupling flows at node openings."""

from .api import CouplingProject
from .cases import CaseConfig, CouplingConfig, NodeConfig, OpeningConfig
from .constants import CouplingType, NodeParam, OpeningKind, OpeningParam
from .engine import execute, set_old_state
from .errors import (
    CouplingError,
    InvalidGeometry,
    InvalidIndex,
    LifecycleViolation,
    OutOfMemory,
)
from .flux import find_coupling_inflow
from .network import CouplingNetwork, CouplingNode
from .regime import find_coupling_type

__version__ = "0.1.0"

__all__ = [
    "CaseConfig",
    "CouplingConfig",
    "CouplingError",
    "CouplingNetwork",
    "CouplingNode",
    "CouplingProject",
    "CouplingType",
    "InvalidGeometry",
    "InvalidIndex",
    "LifecycleViolation",
    "NodeConfig",
    "NodeParam",
    "OpeningConfig",
    "OpeningKind",
    "OpeningParam",
    "OutOfMemory",
    "execute",
    "find_coupling_inflow",
    "find_coupling_type",
    "set_old_state",
    "__version__",
]
