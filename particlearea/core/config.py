# particlearea/core/config.py
# Immutable pipeline configuration - one instance is passed through every stage

from __future__ import annotations
import json
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class MeasurementConfig:
    # padding
    border_width: int = 10            # px added on every side before extraction
    pad_value: int = 255              # background gray level of the padding

    # calibration
    px_per_um: float = 120.0 / 50.0   # 120 px = 50 um

    # frame detection: "largest" outline or "boundary" (touches the padded edge)
    frame_strategy: str = "largest"

    # binarization
    gaussian_k: int = 3               # smoothing kernel (odd)
    adaptive_block: int = 3           # neighborhood for the local threshold (odd, >= 3)
    adaptive_c: int = 1               # offset subtracted from the local mean
    median_k: int = 3                 # speckle removal after thresholding (odd)

    # visualization (BGR)
    outline_color: Tuple[int, int, int] = (0, 255, 0)
    outline_thickness: int = 1

    # fixed artifact locations
    clean_image_path: str = "clearImg.jpg"
    contour_image_path: str = "img.png"
    result_path: str = "result.json"
    annotated_path: str = "contours_image_original.jpg"
    unit_label: str = "µm"

    def __post_init__(self):
        # JSON may hand us "10" or 10.0; store real numbers
        for name, kind in (("border_width", int), ("pad_value", int), ("px_per_um", float),
                           ("gaussian_k", int), ("adaptive_block", int), ("adaptive_c", int),
                           ("median_k", int), ("outline_thickness", int)):
            value = getattr(self, name)
            if isinstance(value, bool):
                raise ValueError(f"{name} must be a number, got {value!r}")
            try:
                object.__setattr__(self, name, kind(value))
            except (TypeError, ValueError) as e:
                raise ValueError(f"{name} must be a number, got {value!r}") from e
        if int(self.border_width) < 0:
            raise ValueError(f"border_width must be >= 0, got {self.border_width}")
        if not float(self.px_per_um) > 0:
            raise ValueError(f"px_per_um must be > 0, got {self.px_per_um}")
        for name in ("gaussian_k", "adaptive_block", "median_k"):
            if int(getattr(self, name)) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if not 0 <= int(self.pad_value) <= 255:
            raise ValueError(f"pad_value must be in 0..255, got {self.pad_value}")
        if self.frame_strategy not in ("largest", "boundary"):
            raise ValueError(f"frame_strategy must be 'largest' or 'boundary', got {self.frame_strategy!r}")
        try:
            color = tuple(int(c) for c in self.outline_color)
        except (TypeError, ValueError) as e:
            raise ValueError(f"outline_color must be a (B, G, R) triple, got {self.outline_color!r}") from e
        if len(color) != 3:
            raise ValueError("outline_color must be a (B, G, R) triple")
        # JSON hands us lists; keep the dataclass hashable
        object.__setattr__(self, "outline_color", color)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "MeasurementConfig":
        """Build a config from a plain mapping. Unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(values))

    def with_overrides(self, **changes: Any) -> "MeasurementConfig":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULTS = MeasurementConfig()


def load_config(path: str) -> MeasurementConfig:
    """Read a JSON object of overrides and apply it on top of DEFAULTS."""
    with open(path, "r", encoding="utf-8") as f:
        values = json.load(f)
    if not isinstance(values, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    merged = DEFAULTS.as_dict()
    merged.update(values)
    return MeasurementConfig.from_dict(merged)
