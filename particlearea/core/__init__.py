# particlearea/core/__init__.py
# Core algorithms package - pure callables with no GUI dependencies
# Safe for headless testing

from .config import (
    DEFAULTS,
    MeasurementConfig,
    load_config,
)
from .errors import (
    EmptyOutlineSet,
    InvalidImage,
    ParticleAreaError,
    WriteFailure,
)
from .export import (
    drawOutlines,
    result_record,
    save_annotated,
    save_result_json,
)
from .measurement import (
    MeasurementResult,
    convert_area,
    measure,
    raw_pixel_area,
)
from .outlines import (
    extractOutlines,
    filterFrame,
    largestOutlineIsFrame,
    outlineArea,
    shiftOutlines,
    touchesPaddedBoundary,
)
from .pipeline import (
    measureImage,
    run_pipeline,
)
from .preprocessing import (
    addBorder,
    loadImage,
    preprocess,
    saveImage,
    stripBorder,
)

__all__ = [
    # config
    "DEFAULTS",
    "MeasurementConfig",
    "load_config",
    # errors
    "ParticleAreaError",
    "InvalidImage",
    "EmptyOutlineSet",
    "WriteFailure",
    # preprocessing
    "loadImage",
    "saveImage",
    "addBorder",
    "stripBorder",
    "preprocess",
    # outlines
    "extractOutlines",
    "outlineArea",
    "shiftOutlines",
    "largestOutlineIsFrame",
    "touchesPaddedBoundary",
    "filterFrame",
    # measurement
    "MeasurementResult",
    "raw_pixel_area",
    "convert_area",
    "measure",
    # export
    "result_record",
    "save_result_json",
    "drawOutlines",
    "save_annotated",
    # pipeline
    "measureImage",
    "run_pipeline",
]
