"""
roopkit exception classes.

This package provides the exception types raised by the analysis engine for
internal invariant violations and unusable host configuration.
"""

from roopkit.exceptions.core import (
    ErrorContext,
    RoopAnalysisError,
    SettingsError,
    StackInvariantError,
)

__all__ = [
    "ErrorContext",
    "RoopAnalysisError",
    "SettingsError",
    "StackInvariantError",
]
