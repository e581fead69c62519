import warnings
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import numpy as np


@dataclass(frozen=True)
class Series:
    name: str
    f: Callable[[float], float]
    events: tuple[tuple[float, str], ...] = ()

    def __call__(self, t: float) -> float:
        return self.f(t)

    def array(self, t: np.ndarray) -> np.ndarray:
        return np.array([self.f(float(tt)) for tt in t], dtype=float)


def make_series_constant(value: float) -> Series:
    return Series("constant", lambda t: float(value))


def make_series_linear(v0: float, rate: float, v_min: float = 0.0) -> Series:
    def fn(t: float) -> float:
        return max(v0 + rate * t, v_min)

    events = ()
    if rate < 0.0 and v0 > v_min:
        events = (((v0 - v_min) / -rate, "floor"),)
    return Series("linear", fn, events=events)


def make_series_step(v0: float, v1: float, step_time_s: float) -> Series:
    def fn(t: float) -> float:
        return v1 if t >= step_time_s else v0

    return Series("step", fn, events=((step_time_s, "step"),))


def make_series_from_table(name: str, table_path: Path) -> Series:
    """Load a depth table with CSV columns: t_s,value.

    Values are held constant outside the tabulated range.
    """
    arr = np.loadtxt(str(table_path), delimiter=",", ndmin=2)
    if arr.shape[1] < 2:
        raise ValueError("Series table must be CSV with columns: t_s, value")
    t_tab = np.array(arr[:, 0], dtype=float)
    v_tab = np.array(arr[:, 1], dtype=float)
    if t_tab.size > 1 and not np.all(np.diff(t_tab) > 0):
        raise ValueError("Series table time must be strictly increasing")

    if np.any(v_tab < 0.0):
        warnings.warn(
            f"Series table {table_path} has negative depths; they are clipped to 0.",
            stacklevel=2,
        )
        v_tab = np.maximum(v_tab, 0.0)

    def fn(t: float) -> float:
        return float(np.interp(t, t_tab, v_tab))

    events = tuple((float(tt), f"bp{i}") for i, tt in enumerate(t_tab))
    return Series(name, fn, events=events)
