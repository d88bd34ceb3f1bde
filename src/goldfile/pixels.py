"""Default pixel-level matcher used to decide whether a candidate matches its golden.

Matching semantics:
- byte-identical images always match, without decoding;
- images are decoded as RGBA and compared pixel by pixel;
- ``diff_percent`` is the fraction of pixels whose RGBA value differs;
- undecodable images and size mismatches never match, whatever the tolerance.
"""

from __future__ import annotations

import io
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ToleranceError
from .types import PixelComparison

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def validate_tolerance(tolerance: float) -> float:
    try:
        value = float(tolerance)
    except (TypeError, ValueError) as exc:
        raise ToleranceError(tolerance) from exc
    if not 0.0 <= value <= 1.0:
        raise ToleranceError(tolerance)
    return value


def _decode(data: bytes) -> np.ndarray:
    with Image.open(io.BytesIO(data)) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)


def _failed(reason: str, candidate=None, golden=None) -> PixelComparison:
    return PixelComparison(
        passed=False,
        diff_pixels=0,
        total_pixels=0,
        diff_percent=1.0,
        reason=reason,
        candidate=candidate,
        golden=golden,
    )


def compare_image_bytes(candidate: bytes, golden: bytes) -> PixelComparison:
    """Decode both images and diff them pixel-by-pixel.

    Never raises for bad image data; such comparisons come back with
    ``reason`` set and ``passed`` false.
    """
    if bytes(candidate) == bytes(golden):
        return PixelComparison(passed=True, diff_pixels=0, total_pixels=0, diff_percent=0.0)

    try:
        arr_candidate = _decode(candidate)
    except _DECODE_ERRORS as exc:
        logger.warning("goldfile: candidate image could not be decoded: %s", exc)
        return _failed("candidate image could not be decoded")
    try:
        arr_golden = _decode(golden)
    except _DECODE_ERRORS as exc:
        logger.warning("goldfile: golden image could not be decoded: %s", exc)
        return _failed("golden image could not be decoded", candidate=arr_candidate)

    if arr_candidate.shape != arr_golden.shape:
        h_c, w_c = arr_candidate.shape[:2]
        h_g, w_g = arr_golden.shape[:2]
        return _failed(
            f"size mismatch: candidate {w_c}x{h_c} vs golden {w_g}x{h_g}",
            candidate=arr_candidate,
            golden=arr_golden,
        )

    mask = np.any(arr_candidate != arr_golden, axis=2)
    diff_pixels = int(np.count_nonzero(mask))
    total_pixels = int(mask.size)
    diff_percent = diff_pixels / total_pixels if total_pixels else 0.0

    return PixelComparison(
        passed=diff_pixels == 0,
        diff_pixels=diff_pixels,
        total_pixels=total_pixels,
        diff_percent=diff_percent,
        candidate=arr_candidate,
        golden=arr_golden,
        mask=mask,
    )


def images_match(candidate: bytes, golden: bytes, tolerance: float = 0.0) -> bool:
    """Return True when ``candidate`` matches ``golden`` within ``tolerance``."""
    tolerance = validate_tolerance(tolerance)
    result = compare_image_bytes(candidate, golden)
    if not result.comparable:
        return False
    return result.passed or result.diff_percent <= tolerance
