"""Structured goldfile error taxonomy used for loud, auditable test failures."""

from __future__ import annotations

MISSING_GOLDEN_MESSAGE = "Could not be compared against non-existent file"


class GoldfileError(Exception):
    """Base class for all goldfile domain exceptions."""

    def __init__(self, error_code: str, category: str, explanation: str, actionable: bool = True):
        self.error_code = error_code
        self.category = category
        self.explanation = explanation
        self.actionable = actionable
        super().__init__(f"[{self.category}:{self.error_code}] {self.explanation}")


class GoldenTestFailure(AssertionError, GoldfileError):
    """Test-failure class signal; test runners report it as a failed assertion."""

    def __init__(self, error_code: str, explanation: str):
        GoldfileError.__init__(self, error_code, "GOLDEN", explanation, True)

    @property
    def message(self) -> str:
        return self.explanation

    def __str__(self) -> str:
        return self.explanation


class MissingGoldenFileError(GoldenTestFailure):
    """Raised when a read operation targets a golden file that does not exist."""

    def __init__(self, golden: str, path: str):
        self.golden = golden
        self.path = path
        super().__init__("GOLDEN_MISSING", f'{MISSING_GOLDEN_MESSAGE}: "{golden}" ({path})')


class GoldenMismatchError(GoldenTestFailure):
    def __init__(self, golden: str, explanation: str):
        self.golden = golden
        super().__init__("GOLDEN_MISMATCH", explanation)


class ToleranceError(ValueError, GoldfileError):
    def __init__(self, tolerance):
        self.tolerance = tolerance
        GoldfileError.__init__(
            self, "INVALID_TOLERANCE", "CONFIG", f"Tolerance must be within [0, 1], got {tolerance!r}"
        )
