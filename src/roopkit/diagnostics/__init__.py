"""
ROOP diagnostics.

This package provides the diagnostic value types, the three structural checks
and the quick fixes for the mechanically repairable ones.
"""

from roopkit.diagnostics.engine import (
    compute_diagnostics,
    missing_colon_diagnostics,
    unbalanced_task_diagnostics,
    unrecognized_token_diagnostics,
)
from roopkit.diagnostics.fixes import CodeAction, quick_fixes
from roopkit.diagnostics.model import (
    DIAGNOSTIC_SOURCE,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSeverity,
)

__all__ = [
    "CodeAction",
    "DIAGNOSTIC_SOURCE",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "compute_diagnostics",
    "missing_colon_diagnostics",
    "quick_fixes",
    "unbalanced_task_diagnostics",
    "unrecognized_token_diagnostics",
]
