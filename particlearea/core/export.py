# particlearea/core/export.py
# Result record (JSON) and annotated-image output

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional, Sequence

import cv2
import numpy as np

from .config import DEFAULTS, MeasurementConfig
from .errors import WriteFailure
from .measurement import MeasurementResult
from .outlines import Outline, shiftOutlines
from .preprocessing import ImageArray, addBorder, saveImage, stripBorder

logger = logging.getLogger(__name__)


# ---------- Result record ----------

def result_record(result: MeasurementResult, unit_label: str = "µm") -> Dict[str, Any]:
    """Flat record: integer point count and the area as '<value> <unit>'."""
    return {
        "point_count": int(result.point_count),
        "area": f"{result.area} {unit_label}",
    }


def save_result_json(path: str, result: MeasurementResult, unit_label: str = "µm") -> None:
    """
    Write the result record as UTF-8 JSON.
    Raises WriteFailure (carrying the result) when the file cannot be written.
    """
    record = result_record(result, unit_label)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise WriteFailure(path, e.strerror or str(e), result=result) from e
    logger.info("Result written to %s", path)


# ---------- Visualization ----------

def drawOutlines(
    image: ImageArray,
    outlines: Sequence[Outline],
    config: MeasurementConfig = DEFAULTS,
    padded: bool = True
) -> ImageArray:
    """
    Draw outlines found in the padded frame onto an unpadded image.

    padded=True pads the canvas, draws, then strips the padding again.
    padded=False shifts the outlines back into image coordinates instead;
    both give the same picture.
    Returns a new BGR uint8 image; the input is not modified.
    """
    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    if image.ndim == 2:
        canvas = cv2.cvtColor(np.ascontiguousarray(image), cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        canvas = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    else:
        canvas = image.copy()

    bw = int(config.border_width)
    color = tuple(int(c) for c in config.outline_color)
    thickness = int(config.outline_thickness)
    cnts = [np.asarray(o, dtype=np.int32) for o in outlines]

    if padded:
        canvas = addBorder(canvas, bw, value=config.pad_value)
        if cnts:
            cv2.drawContours(canvas, cnts, -1, color, thickness)
        return stripBorder(canvas, bw)

    if cnts:
        cv2.drawContours(canvas, shiftOutlines(cnts, -bw, -bw), -1, color, thickness)
    return canvas


def save_annotated(
    path: str,
    image: ImageArray,
    outlines: Sequence[Outline],
    config: MeasurementConfig = DEFAULTS,
    result: Optional[MeasurementResult] = None
) -> ImageArray:
    """Render outlines onto image and write it to path. Returns the rendered image."""
    annotated = drawOutlines(image, outlines, config)
    try:
        saveImage(path, annotated)
    except WriteFailure as e:
        e.result = result
        raise
    logger.info("Annotated image written to %s", path)
    return annotated
