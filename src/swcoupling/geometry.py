import math

from .errors import InvalidGeometry


def circle_area(d: float) -> float:
    return math.pi * (d / 2.0) ** 2


def circle_perimeter(d: float) -> float:
    return math.pi * d


def rect_area(w: float, h: float) -> float:
    return w * h


def rect_perimeter(w: float, h: float) -> float:
    return 2.0 * (w + h)


def assert_pos(name: str, val: float) -> None:
    if not (val > 0.0):
        raise InvalidGeometry(f"{name} must be > 0, got {val}")


def weir_ratio(area: float, width: float) -> float:
    """Depth threshold separating weir-like from orifice-like drainage."""
    return area / width
