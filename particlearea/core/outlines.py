# particlearea/core/outlines.py
# Outline extraction, area and frame filtering
# Pure callables with no GUI dependencies - safe for headless testing

from __future__ import annotations
import logging
import cv2
import numpy as np
from typing import Callable, List, Optional, Sequence

from .errors import EmptyOutlineSet, InvalidImage
from .preprocessing import ShapeHW

logger = logging.getLogger(__name__)

Outline = np.ndarray  # np.int32, shape (N,1,2) as returned by cv2.findContours
ExcludePredicate = Callable[[Outline, Sequence[Outline]], bool]


# ---------- Geometry ----------

def outlineArea(outline: Outline) -> float:
    """Unsigned shoelace area of a closed point sequence (pixels²)."""
    pts = np.asarray(outline)
    if pts.size == 0:
        return 0.0
    pts = pts.reshape(-1, 2)
    if pts.dtype not in (np.int32, np.float32):
        pts = pts.astype(np.float32)
    return float(abs(cv2.contourArea(pts, oriented=False)))


def shiftOutlines(outlines: Sequence[Outline], dx: int, dy: int) -> List[Outline]:
    """Translate every outline by (dx, dy). Returns new arrays."""
    offset = np.array([dx, dy], dtype=np.int32)
    return [(np.asarray(o, dtype=np.int32) + offset).astype(np.int32) for o in outlines]


# ---------- Extraction ----------

def extractOutlines(binary: np.ndarray) -> List[Outline]:
    """
    Trace region boundaries in a binary (0/255) image.
    Uses a two-level hierarchy (outer boundaries + holes) with straight-run
    compression; the hierarchy itself is not returned.
    No foreground -> empty list.
    """
    if binary is None or binary.size == 0:
        raise InvalidImage("No binary image to extract outlines from")
    if binary.ndim != 2:
        raise InvalidImage(f"Outline extraction needs a single-channel image, got shape {binary.shape}")
    img = binary if binary.dtype == np.uint8 else (binary > 0).astype(np.uint8) * 255
    cnts, _ = cv2.findContours(img, cv2.RETR_CCOMP, cv2.CHAIN_APPROX_SIMPLE)
    outlines = list(cnts)
    logger.debug("Extracted %d outlines from %s", len(outlines), binary.shape)
    return outlines


# ---------- Frame predicates ----------

def _largestIndex(outlines: Sequence[Outline]) -> int:
    maxArea = -1.0
    idx = -1
    for i, o in enumerate(outlines):
        a = outlineArea(o)
        if a > maxArea:  # strict: first occurrence wins on ties
            maxArea = a
            idx = i
    return idx


def largestOutlineIsFrame(outline: Outline, allOutlines: Sequence[Outline]) -> bool:
    """Default frame predicate: the (first) outline with the largest area."""
    idx = _largestIndex(allOutlines)
    return idx >= 0 and allOutlines[idx] is outline


def touchesPaddedBoundary(shape: ShapeHW) -> ExcludePredicate:
    """
    Alternative frame predicate for a padded image of the given (H, W):
    an outline is the frame when its bounding box reaches the outer image edge.
    Real particles never do, because the padding separates them from it.
    """
    h, w = shape[:2]

    def _predicate(outline: Outline, allOutlines: Sequence[Outline]) -> bool:
        x, y, bw, bh = cv2.boundingRect(np.asarray(outline, dtype=np.int32))
        return x <= 0 or y <= 0 or x + bw >= w or y + bh >= h

    return _predicate


# ---------- Filtering ----------

def filterFrame(
    outlines: Sequence[Outline],
    shouldExclude: Optional[ExcludePredicate] = None
) -> List[Outline]:
    """
    Drop the frame outline(s) introduced by padding and return the rest in order.
    With the default predicate exactly one outline (the largest) is removed.
    Raises EmptyOutlineSet when there is nothing to filter.
    """
    if len(outlines) == 0:
        raise EmptyOutlineSet("No outlines found; the padded frame is missing")

    if shouldExclude is None:
        # one scan instead of re-running the predicate's max-scan per outline
        idx = _largestIndex(outlines)
        if logger.isEnabledFor(logging.DEBUG):
            areas = sorted((outlineArea(o) for o in outlines), reverse=True)
            logger.debug("Outline areas (desc): %s", areas)
            logger.debug("Excluding frame outline #%d (area %.1f)", idx, outlineArea(outlines[idx]))
        return [o for i, o in enumerate(outlines) if i != idx]

    kept = [o for o in outlines if not shouldExclude(o, outlines)]
    logger.debug("Frame predicate excluded %d of %d outlines", len(outlines) - len(kept), len(outlines))
    return kept
