# particlearea/core/preprocessing.py
# Image I/O, border padding and binarization - pure callables, no global state

from __future__ import annotations
import logging
import os
import cv2
import numpy as np
from typing import Optional, Tuple

from .config import DEFAULTS, MeasurementConfig
from .errors import InvalidImage, WriteFailure

logger = logging.getLogger(__name__)

# Type aliases for clarity
ImageArray = np.ndarray  # np.uint8, shape (H,W) grayscale or (H,W,3) BGR
BinaryImage = np.ndarray  # np.uint8, shape (H,W), values in {0, 255}
ShapeHW = Tuple[int, int]  # (height, width)


# --------------------- Internal helpers ---------------------------

def _forceOdd(k: int) -> int:
    k = int(max(1, k))
    return k if k % 2 == 1 else k + 1


def _checkImage(img: Optional[np.ndarray], what: str = "image") -> np.ndarray:
    if img is None:
        raise InvalidImage(f"No {what} data")
    img = np.asarray(img)
    if img.ndim not in (2, 3) or img.size == 0 or min(img.shape[:2]) == 0:
        raise InvalidImage(f"Unusable {what} shape: {img.shape}")
    if img.ndim == 3 and img.shape[2] not in (1, 3, 4):
        raise InvalidImage(f"Unsupported channel count: {img.shape[2]}")
    return img


def _prepGray(src: np.ndarray) -> np.ndarray:
    img = src
    if img.ndim == 3:
        if img.shape[2] == 4:
            img = cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
        elif img.shape[2] == 3:
            img = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
        else:
            img = img[:, :, 0]
    if img.dtype != np.uint8:
        img = cv2.normalize(img.astype(np.float32), None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
    return np.ascontiguousarray(img)


# --------------------- I/O ----------------------------------------

def loadImage(path: str, asGray: bool = False) -> ImageArray:
    """Load an image with OpenCV. Returns np.uint8.
    If asGray=True, loads grayscale; else returns BGR color."""
    flag = cv2.IMREAD_GRAYSCALE if asGray else cv2.IMREAD_COLOR
    img = cv2.imread(path, flag)
    if img is None:
        raise InvalidImage(f"Could not read image: {path}")
    img = _checkImage(img, path)
    if img.dtype != np.uint8:
        img = cv2.normalize(img.astype(np.float32), None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
    logger.debug("Loaded %s with shape %s", path, img.shape)
    return img


def saveImage(path: str, img: ImageArray) -> None:
    """Encode and write an image; the format follows the file extension."""
    try:
        ok = cv2.imwrite(path, img)
    except cv2.error as e:
        raise WriteFailure(path, str(e).strip()) from e
    if not ok:
        reason = "no such directory" if not os.path.isdir(os.path.dirname(os.path.abspath(path))) \
            else "encoder refused the image"
        raise WriteFailure(path, reason)
    logger.debug("Wrote %s", path)


# --------------------- Padding ------------------------------------

def addBorder(img: ImageArray, width: int, value: int = 255) -> ImageArray:
    """Return a copy of img grown by `width` constant-valued pixels on every side."""
    if width < 0:
        raise ValueError(f"Border width must be >= 0, got {width}")
    img = _checkImage(img)
    w = int(width)
    fill = value if img.ndim == 2 else (value,) * img.shape[2]
    out = cv2.copyMakeBorder(img, w, w, w, w, cv2.BORDER_CONSTANT, value=fill)
    if img.ndim == 3 and out.ndim == 2:
        # single-channel 3D input comes back flattened
        out = out[:, :, None]
    return out


def stripBorder(img: ImageArray, width: int) -> ImageArray:
    """Inverse of addBorder: crop `width` pixels from every side (copy)."""
    if width < 0:
        raise ValueError(f"Border width must be >= 0, got {width}")
    h, w = img.shape[:2]
    if 2 * width > h or 2 * width > w:
        raise InvalidImage(f"Border {width} is wider than image {w}x{h} allows")
    return img[width:h - width, width:w - width].copy()


# --------------------- Binarization -------------------------------

def preprocess(image: ImageArray, config: MeasurementConfig = DEFAULTS) -> BinaryImage:
    """
    Turn a micrograph into a padded binary image ready for outline extraction.

    The steps run in a fixed order, each one feeding the next:
    grayscale -> Gaussian smoothing -> adaptive Gaussian threshold ->
    median despeckle -> constant border of background (pad_value).

    Particles end up as 0 holes inside the 255 background, and the padding
    makes the whole background one region whose outer boundary is the
    padded frame.
    """
    src = _checkImage(image)
    img = _prepGray(src)

    gk = _forceOdd(config.gaussian_k)
    if gk >= 3:
        img = cv2.GaussianBlur(img, (gk, gk), 0)

    blk = max(3, _forceOdd(config.adaptive_block))
    img = cv2.adaptiveThreshold(img, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
                                cv2.THRESH_BINARY, blk, int(config.adaptive_c))

    mk = _forceOdd(config.median_k)
    if mk >= 3:
        img = cv2.medianBlur(img, mk)

    binary = addBorder(img, config.border_width, value=config.pad_value)
    logger.debug("Binarized %s -> %s (block=%d, C=%d, border=%d)",
                 src.shape[:2], binary.shape, blk, int(config.adaptive_c), config.border_width)
    return binary
