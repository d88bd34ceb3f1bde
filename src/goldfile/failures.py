"""Diff artifacts written next to the goldens when a comparison fails."""

from __future__ import annotations

import logging
import os
from typing import Dict

import numpy as np
from PIL import Image

from .paths import basedir_to_path
from .types import BaseDir, GoldenId, PixelComparison

logger = logging.getLogger(__name__)

_DIFF_COLOR = np.array([255, 0, 255, 255], dtype=np.uint8)


def _stem(golden: GoldenId) -> str:
    name = os.fspath(golden).replace("\\", "/").rstrip("/").split("/")[-1]
    return os.path.splitext(name)[0] or "golden"


def _isolated_diff(result: PixelComparison) -> np.ndarray:
    diff = np.zeros_like(result.golden)
    diff[result.mask] = _DIFF_COLOR
    return diff


def _masked_diff(result: PixelComparison) -> np.ndarray:
    masked = result.candidate.copy()
    masked[result.mask] = _DIFF_COLOR
    return masked


def write_failure_output(
    result: PixelComparison,
    golden: GoldenId,
    basedir: BaseDir,
    failures_dir: str = "failures",
) -> str:
    """Save the images behind a failed comparison and describe the failure.

    Writes ``<stem>_masterImage.png`` and ``<stem>_testImage.png`` whenever the
    side decoded, and the isolated/masked diff images when both sides were
    comparable. Returns the human-readable failure message.
    """
    target_dir = os.path.join(basedir_to_path(basedir), failures_dir)
    os.makedirs(target_dir, exist_ok=True)
    stem = _stem(golden)

    images: Dict[str, np.ndarray] = {}
    if result.golden is not None:
        images["masterImage"] = result.golden
    if result.candidate is not None:
        images["testImage"] = result.candidate
    if result.comparable and result.mask is not None:
        images["isolatedDiff"] = _isolated_diff(result)
        images["maskedDiff"] = _masked_diff(result)

    for suffix, array in images.items():
        output = os.path.join(target_dir, f"{stem}_{suffix}.png")
        Image.fromarray(array).save(output)
        logger.debug("goldfile: wrote failure artifact %s", output)

    golden_name = os.fspath(golden)
    if result.comparable:
        pct = result.diff_percent * 100
        message = f'Golden "{golden_name}": Pixel test failed, {pct:.2f}% diff detected.'
    else:
        message = f'Golden "{golden_name}": Pixel test failed, {result.reason}.'
    return f"{message}\nFailure feedback can be found at {target_dir}"
