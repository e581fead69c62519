from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .cases import (
    ALLOWED_OVERLAND,
    ALLOWED_UNITS,
    CaseConfig,
    CouplingConfig,
    NodeConfig,
    OpeningConfig,
)
from .presets import get_opening_preset
from .profiles import (
    Series,
    make_series_constant,
    make_series_from_table,
    make_series_linear,
    make_series_step,
)

ALLOWED_SERIES = {"constant", "linear", "step", "table"}


@dataclass
class SeriesSpec:
    kind: str = "constant"
    value: float = 0.0
    rate: float = 0.0
    value_after: float = 0.0
    step_time_s: float = 0.0
    file: str = ""

    def validate(self, name: str) -> None:
        if self.kind not in ALLOWED_SERIES:
            raise ValueError(f"{name}.kind is invalid")
        if self.kind == "table" and not self.file:
            raise ValueError(f"{name}.file is required for table series")

    def build(self, name: str, base_dir: Path | None = None) -> Series:
        self.validate(name)
        if self.kind == "constant":
            return make_series_constant(self.value)
        if self.kind == "linear":
            return make_series_linear(self.value, self.rate)
        if self.kind == "step":
            return make_series_step(self.value, self.value_after, self.step_time_s)
        path = Path(self.file)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        if not path.exists():
            raise FileNotFoundError(f"Series table not found: {path}")
        return make_series_from_table(name, path)


@dataclass
class CaseFile:
    # node (units follow `units`)
    node_name: str = "J1"
    invert_elev: float = 0.0
    full_depth: float = 2.0
    coupling_area: float = 1.0

    # openings: dicts with OpeningConfig fields, or {"id": .., "preset": name}
    openings: list[dict] = field(default_factory=list)

    depth: SeriesSpec = field(default_factory=SeriesSpec)
    overland: SeriesSpec = field(default_factory=SeriesSpec)
    surface_inflow: SeriesSpec | None = None

    # case
    units: str = "SI"
    gravity: float | None = None
    duration_s: float = 60.0
    dt_s: float = 1.0
    overland_model: str = "profile"

    # output
    output_case_name: str = "coupling"

    def validate(self) -> None:
        if self.units not in ALLOWED_UNITS:
            raise ValueError("units is invalid")
        if self.overland_model not in ALLOWED_OVERLAND:
            raise ValueError("overland_model is invalid")
        for name in ["full_depth", "duration_s", "dt_s"]:
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be > 0")
        if self.coupling_area < 0.0:
            raise ValueError("coupling_area must be >= 0")
        if not self.openings:
            raise ValueError("at least one opening is required")
        ids = [o.get("id") for o in self.openings]
        if any(i is None for i in ids) or len(set(ids)) != len(ids):
            raise ValueError("opening ids must be given and unique")
        self.depth.validate("depth")
        self.overland.validate("overland")
        if self.surface_inflow is not None:
            self.surface_inflow.validate("surface_inflow")

    def to_node_config(self) -> NodeConfig:
        self.validate()
        return NodeConfig(
            name=self.node_name,
            invert_elev=self.invert_elev,
            full_depth=self.full_depth,
            coupling_area=self.coupling_area,
        )

    def to_opening_configs(self) -> list[OpeningConfig]:
        self.validate()
        out = []
        for spec in self.openings:
            spec = dict(spec)
            preset = spec.pop("preset", None)
            if preset is not None:
                base = get_opening_preset(preset).to_opening(int(spec.pop("id")))
                out.append(OpeningConfig(**{**asdict(base), **spec}))
            else:
                out.append(OpeningConfig(**spec))
        return out

    def to_case_config(self) -> CaseConfig:
        self.validate()
        return CaseConfig(
            duration=self.duration_s,
            dt=self.dt_s,
            coupling=CouplingConfig(units=self.units, gravity=self.gravity),
            overland_model=self.overland_model,
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2)

    @classmethod
    def from_json(cls, payload: str) -> CaseFile:
        data = json.loads(payload)
        for key in ("depth", "overland", "surface_inflow"):
            if isinstance(data.get(key), dict):
                data[key] = SeriesSpec(**data[key])
        return cls(**data)

    def save_json(self, path: str | Path) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load_json(cls, path: str | Path) -> CaseFile:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Case file not found: {path}")
        return cls.from_json(path.read_text(encoding="utf-8"))
