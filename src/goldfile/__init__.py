"""goldfile: golden-image file comparison for screenshot tests."""

__version__ = "0.3.0"

from .comparator import GoldenFileComparator  # noqa: E402
from .errors import GoldenMismatchError, GoldenTestFailure, MissingGoldenFileError  # noqa: E402

__all__ = [
    "GoldenFileComparator",
    "GoldenMismatchError",
    "GoldenTestFailure",
    "MissingGoldenFileError",
    "__version__",
]
