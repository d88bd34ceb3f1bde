"""Golden-file comparator: resolves, reads, compares and rewrites golden images.

Guarantees:
- construction never touches the file system;
- a missing golden file is always a loud ``MissingGoldenFileError``, never a
  mismatch and never an empty payload;
- pixel mismatches are a ``False`` return, not an exception;
- ``update`` fully replaces the golden file and creates missing parents.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

from .errors import MissingGoldenFileError
from .paths import basedir_to_path, golden_segments
from .pixels import images_match
from .types import BaseDir, BasedirProvider, ComparisonOutcome, GoldenId, Matcher

logger = logging.getLogger(__name__)

__all__ = ["GoldenFileComparator"]


class GoldenFileComparator:
    """Compare candidate image bytes against golden files under ``basedir``."""

    def __init__(self, basedir: BaseDir, tolerance: float, *, matcher: Optional[Matcher] = None):
        self.basedir = basedir
        self.tolerance = tolerance
        self.path = os.path
        self._matcher = matcher or images_match

    @classmethod
    def from_local_file_comparator(
        cls, comparator: BasedirProvider, *, tolerance: float, matcher: Optional[Matcher] = None
    ) -> "GoldenFileComparator":
        """Build a comparator sharing another comparator's ``basedir``."""
        return cls(comparator.basedir, tolerance, matcher=matcher)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(basedir={self.basedir!r}, tolerance={self.tolerance!r})"

    def resolve(self, golden: GoldenId) -> str:
        """Absolute file-system path of ``golden`` under the base directory."""
        base = basedir_to_path(self.basedir)
        return self.path.abspath(self.path.join(base, *golden_segments(golden)))

    def _read_golden(self, golden: GoldenId) -> bytes:
        path = self.resolve(golden)
        if not self.path.isfile(path):
            raise MissingGoldenFileError(os.fspath(golden), path)
        with open(path, "rb") as handle:
            data = handle.read()
        logger.debug("goldfile: read %s bytes from %s", len(data), path)
        return data

    def _write_golden(self, golden: GoldenId, image_bytes: bytes) -> None:
        path = self.resolve(golden)
        os.makedirs(self.path.dirname(path), exist_ok=True)
        with open(path, "wb") as handle:
            handle.write(image_bytes)
            handle.flush()
        logger.debug("goldfile: wrote %s bytes to %s", len(image_bytes), path)

    async def get_golden_bytes(self, golden: GoldenId) -> bytes:
        return await asyncio.to_thread(self._read_golden, golden)

    async def compare(self, image_bytes: bytes, golden: GoldenId) -> bool:
        golden_bytes = await self.get_golden_bytes(golden)
        matched = bool(self._matcher(image_bytes, golden_bytes, self.tolerance))
        if not matched:
            logger.info("goldfile: candidate does not match golden %s", self.resolve(golden))
        return matched

    async def compare_outcome(self, image_bytes: bytes, golden: GoldenId) -> ComparisonOutcome:
        try:
            return ComparisonOutcome(matched=await self.compare(image_bytes, golden))
        except MissingGoldenFileError as exc:
            return ComparisonOutcome(error=exc)

    async def update(self, golden: GoldenId, image_bytes: bytes) -> None:
        await asyncio.to_thread(self._write_golden, golden, bytes(image_bytes))
