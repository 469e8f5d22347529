# particlearea/__init__.py
# particlearea package root
"""
particlearea - particle count and area from a single micrograph

Subpackages:
    core - Pure algorithms (binarization, outline extraction, measurement, output)

Quick start:
    python -m particlearea clearImg.jpg img.png

    # Or use the core directly:
    from particlearea.core import loadImage, measureImage
"""

__version__ = "0.1.0"

# Re-export commonly used items from core for convenience
from .core import (
    DEFAULTS,
    EmptyOutlineSet,
    InvalidImage,
    MeasurementConfig,
    MeasurementResult,
    WriteFailure,
    drawOutlines,
    extractOutlines,
    filterFrame,
    loadImage,
    measure,
    measureImage,
    preprocess,
    run_pipeline,
)

__all__ = [
    "DEFAULTS",
    "MeasurementConfig",
    "MeasurementResult",
    "InvalidImage",
    "EmptyOutlineSet",
    "WriteFailure",
    "loadImage",
    "preprocess",
    "extractOutlines",
    "filterFrame",
    "measure",
    "measureImage",
    "drawOutlines",
    "run_pipeline",
]
