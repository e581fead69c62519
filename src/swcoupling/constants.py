from enum import IntEnum

GRAVITY_SI = 9.81
GRAVITY_US = 32.2
UNIT_GRAVITY = {"SI": GRAVITY_SI, "US": GRAVITY_US}

FREE_WEIR_EXPONENT = 1.5
CLAMP_RTOL = 1e-9

# Default discharge coefficients (orifice, free weir, submerged weir)
C_ORIFICE = 0.167
C_FREE_WEIR = 0.54
C_SUB_WEIR = 0.056


class CouplingType(IntEnum):
    NO_COUPLING = 0  # closed opening
    NO_COUPLING_FLOW = 1
    ORIFICE = 2
    FREE_WEIR = 3
    SUBMERGED_WEIR = 4


class OpeningKind(IntEnum):
    GENERIC = 0
    GRATE = 1
    CURB_INLET = 2
    MANHOLE = 3


class OpeningParam(IntEnum):
    AREA = 0
    WIDTH = 1
    ORIFICE_COEFF = 2
    FREE_WEIR_COEFF = 3
    SUB_WEIR_COEFF = 4


class NodeParam(IntEnum):
    INVERT_ELEV = 0
    FULL_DEPTH = 1
    DEPTH = 2
    OVERLAND_DEPTH = 3
    COUPLING_AREA = 4
