from __future__ import annotations

from dataclasses import asdict, dataclass

from .cases import OpeningConfig
from .constants import C_FREE_WEIR, C_ORIFICE, C_SUB_WEIR, OpeningKind
from .geometry import circle_area, circle_perimeter, rect_area, rect_perimeter


@dataclass(frozen=True)
class OpeningPreset:
    kind: int
    area: float
    width: float
    orifice_coeff: float = C_ORIFICE
    free_weir_coeff: float = C_FREE_WEIR
    sub_weir_coeff: float = C_SUB_WEIR

    def to_dict(self) -> dict:
        return asdict(self)

    def to_opening(self, opening_id: int) -> OpeningConfig:
        return OpeningConfig(opening_id, **asdict(self))


def _grate() -> OpeningPreset:
    # 0.6 m x 0.4 m street grate, perimeter acts as the weir length
    return OpeningPreset(
        OpeningKind.GRATE, rect_area(0.6, 0.4), rect_perimeter(0.6, 0.4)
    )


def _curb_inlet() -> OpeningPreset:
    # only the 1.0 m throat faces the gutter flow
    return OpeningPreset(OpeningKind.CURB_INLET, rect_area(1.0, 0.15), 1.0)


def _manhole() -> OpeningPreset:
    return OpeningPreset(OpeningKind.MANHOLE, circle_area(0.6), circle_perimeter(0.6))


OPENING_PRESETS = {
    "grate": _grate,
    "curb_inlet": _curb_inlet,
    "manhole": _manhole,
}


def get_opening_preset(name: str) -> OpeningPreset:
    """Return a metric opening preset with the default coefficients."""
    try:
        return OPENING_PRESETS[name]()
    except KeyError:
        raise ValueError(
            f"unknown opening preset {name!r}; choose from {sorted(OPENING_PRESETS)}"
        ) from None
