"""Update-or-compare decision a screenshot test makes against its golden."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .comparator import GoldenFileComparator
from .config import get_config
from .errors import GoldenMismatchError
from .failures import write_failure_output
from .pixels import compare_image_bytes
from .types import GoldenId

logger = logging.getLogger(__name__)


async def expect_matches_golden(
    comparator: GoldenFileComparator,
    image_bytes: bytes,
    golden: GoldenId,
    update: Optional[bool] = None,
    write_failures: Optional[bool] = None,
) -> None:
    """Assert ``image_bytes`` matches ``golden``, or rewrite it in update mode.

    Raises:
        MissingGoldenFileError: the golden does not exist and update mode is off.
        GoldenMismatchError: the golden exists but the images differ.
    """
    config = get_config()
    if update if update is not None else config.update_goldens:
        await comparator.update(golden, image_bytes)
        logger.info("goldfile: updated golden %s", comparator.resolve(golden))
        return

    if await comparator.compare(image_bytes, golden):
        return

    golden_name = os.fspath(golden)
    if not (config.write_failures if write_failures is None else write_failures):
        raise GoldenMismatchError(golden_name, f'Golden "{golden_name}": Pixel test failed.')

    golden_bytes = await comparator.get_golden_bytes(golden)
    result = compare_image_bytes(image_bytes, golden_bytes)
    if result.passed:
        # pixel-identical; only the comparator's matcher disagrees
        raise GoldenMismatchError(golden_name, f'Golden "{golden_name}": rejected by the configured matcher.')
    message = write_failure_output(result, golden, comparator.basedir, config.failures_dir)
    raise GoldenMismatchError(golden_name, message)
