# particlearea/core/measurement.py
# Particle count + area summation and unit conversion

from __future__ import annotations
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Sequence

from .config import DEFAULTS, MeasurementConfig
from .outlines import Outline, outlineArea

logger = logging.getLogger(__name__)


# ---------- Data Model ----------

@dataclass(frozen=True)
class MeasurementResult:
    point_count: int        # outlines retained after frame filtering
    area: float             # converted area, see convert_area()
    raw_pixel_area: float   # sum of outline areas before conversion (px²)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


# ---------- Public API ----------

def raw_pixel_area(outlines: Sequence[Outline]) -> float:
    return float(sum(outlineArea(o) for o in outlines))


def convert_area(raw_area: float, px_per_um: float) -> float:
    """
    Convert a pixel-area sum to the reported area.

    Reproduces the calibrated formula as-is:
        um   = raw_area / px_per_um
        area = raw_area / (um * um)
    which reduces to px_per_um**2 / raw_area, i.e. the reported value falls as
    the particles grow. A linear conversion would be raw_area / px_per_um**2.
    Kept unchanged until the intended unit is confirmed.

    raw_area == 0 returns 0.0 instead of dividing by zero.
    """
    if px_per_um <= 0:
        raise ValueError(f"px_per_um must be > 0, got {px_per_um}")
    if raw_area <= 0:
        return 0.0
    um = raw_area / px_per_um
    return raw_area / (um * um)


def measure(outlines: Sequence[Outline], config: MeasurementConfig = DEFAULTS) -> MeasurementResult:
    """
    Count the retained outlines and convert their summed area.
    An empty set is a valid input and yields a zero result.
    """
    raw = raw_pixel_area(outlines)
    if len(outlines) == 0:
        logger.warning("No particles retained; reporting zero area")
    result = MeasurementResult(
        point_count=len(outlines),
        area=convert_area(raw, float(config.px_per_um)),
        raw_pixel_area=raw,
    )
    logger.debug("Measured %d outlines: raw=%.1f px², area=%g", result.point_count, raw, result.area)
    return result
