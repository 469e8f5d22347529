# particlearea/core/pipeline.py
# End-to-end measurement: preprocess -> extract -> filter frame -> measure -> outputs

from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from .config import DEFAULTS, MeasurementConfig
from .errors import WriteFailure
from .export import save_annotated, save_result_json
from .measurement import MeasurementResult, measure
from .outlines import (
    ExcludePredicate,
    Outline,
    extractOutlines,
    filterFrame,
    touchesPaddedBoundary,
)
from .preprocessing import ImageArray, loadImage, preprocess

logger = logging.getLogger(__name__)


def measureImage(
    image: ImageArray,
    config: MeasurementConfig = DEFAULTS,
    shouldExclude: Optional[ExcludePredicate] = None
) -> Tuple[MeasurementResult, List[Outline]]:
    """
    Run the in-memory pipeline on one image.
    Returns (result, retained_outlines); outlines are in padded coordinates.
    The frame predicate defaults to config.frame_strategy.
    """
    binary = preprocess(image, config)
    if shouldExclude is None and config.frame_strategy == "boundary":
        shouldExclude = touchesPaddedBoundary(binary.shape)
    outlines = extractOutlines(binary)
    particles = filterFrame(outlines, shouldExclude)
    result = measure(particles, config)
    logger.info("%d particles, raw area %.1f px²", result.point_count, result.raw_pixel_area)
    return result, particles


def run_pipeline(
    clean_image_path: Optional[str] = None,
    contour_image_path: Optional[str] = None,
    config: MeasurementConfig = DEFAULTS
) -> MeasurementResult:
    """
    Measure the clean image, then write the result record and the outlines
    drawn over the contour-source image to the configured locations.

    InvalidImage / EmptyOutlineSet abort before anything is written.
    A WriteFailure is raised after both writes were attempted; it carries the
    computed result in `.result`.
    """
    clean_path = clean_image_path or config.clean_image_path
    canvas_path = contour_image_path or config.contour_image_path

    image = loadImage(clean_path, asGray=False)
    canvas = loadImage(canvas_path, asGray=False)
    result, particles = measureImage(image, config)

    failures: List[WriteFailure] = []
    try:
        save_result_json(config.result_path, result, config.unit_label)
    except WriteFailure as e:
        logger.error("%s", e)
        failures.append(e)
    try:
        save_annotated(config.annotated_path, canvas, particles, config, result=result)
    except WriteFailure as e:
        logger.error("%s", e)
        failures.append(e)

    if failures:
        first = failures[0]
        if len(failures) > 1:
            paths = ", ".join(f.path for f in failures)
            raise WriteFailure(paths, "; ".join(f.reason for f in failures), result=result) from first
        first.result = result
        raise first
    return result

