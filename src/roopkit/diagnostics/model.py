"""
Diagnostic value types.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

from roopkit.core.types import Range

DIAGNOSTIC_SOURCE = "roop"


class DiagnosticSeverity(IntEnum):
    """Severity levels, numbered as editors expect them."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4

    @classmethod
    def from_lint_level(cls, level: str) -> "DiagnosticSeverity | None":
        """Map a settings lint level to a severity; None means the check is off."""
        return {
            "error": cls.ERROR,
            "warning": cls.WARNING,
            "information": cls.INFORMATION,
            "hint": cls.HINT,
        }.get(level)


class DiagnosticCode(Enum):
    """Stable identifiers hosts can filter or suppress by."""

    MISSING_COLON = "missing-colon"
    UNBALANCED_TASK = "unbalanced-task"
    UNRECOGNIZED_LEADING_TOKEN = "unrecognized-leading-token"


@dataclass(frozen=True)
class Diagnostic:
    """A structural finding anchored at a range of the document."""

    range: Range
    severity: DiagnosticSeverity
    code: DiagnosticCode
    message: str
    source: str = DIAGNOSTIC_SOURCE
