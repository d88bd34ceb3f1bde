"""Base-directory and golden-identifier path handling."""

from __future__ import annotations

import os
from urllib.parse import urlparse
from urllib.request import url2pathname

from .types import BaseDir, GoldenId


def _as_str(value) -> str:
    raw = os.fspath(value)
    if isinstance(raw, bytes):
        raw = os.fsdecode(raw)
    return raw


def basedir_to_path(basedir: BaseDir) -> str:
    """File-system path for a basedir given as a path or a ``file:`` URI."""
    raw = _as_str(basedir)
    if raw.startswith("file:"):
        return url2pathname(urlparse(raw).path)
    return raw


def golden_segments(golden: GoldenId) -> list[str]:
    """Split a golden identifier into path segments relative to the base directory.

    Empty and ``.`` segments are dropped, so a leading ``/`` stays relative.

    Raises:
        ValueError: a ``..`` segment would leave the base directory.
    """
    raw = _as_str(golden)
    segments = [segment for segment in raw.replace(os.sep, "/").split("/") if segment not in ("", ".")]
    if ".." in segments:
        raise ValueError(f"Golden identifier must stay within the base directory: {raw!r}")
    return segments
