"""Typed contracts shared by the comparator, pixel matcher and failure output."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Union, runtime_checkable

from .errors import MissingGoldenFileError

BaseDir = Union[str, "os.PathLike[str]"]
GoldenId = Union[str, "os.PathLike[str]"]
Matcher = Callable[[bytes, bytes, float], bool]


@runtime_checkable
class BasedirProvider(Protocol):
    """Anything exposing the directory its goldens live under."""

    @property
    def basedir(self) -> Any: ...


@dataclass(frozen=True)
class ComparisonOutcome:
    """Tagged result of a golden comparison.

    Invariant:
    - exactly one of ``matched`` and ``error`` is set.
    """

    matched: Optional[bool] = None
    error: Optional[MissingGoldenFileError] = None

    def __post_init__(self) -> None:
        if (self.matched is None) == (self.error is None):
            raise ValueError("ComparisonOutcome needs exactly one of matched or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> bool:
        if self.error is not None:
            raise self.error
        return bool(self.matched)


@dataclass(frozen=True)
class PixelComparison:
    """Result of decoding and diffing two images pixel-by-pixel.

    ``diff_percent`` is the fraction (0..1) of pixels that differ. Arrays are
    RGBA ``numpy`` images, or ``None`` when a side could not be decoded.
    """

    passed: bool
    diff_pixels: int
    total_pixels: int
    diff_percent: float
    reason: Optional[str] = None
    candidate: Any = None
    golden: Any = None
    mask: Any = None

    @property
    def comparable(self) -> bool:
        return self.reason is None
