"""
Exception classes for ROOP structural analysis.

The analysis engine never raises for malformed documents: document defects are
reported as diagnostics. The exceptions here signal engine bugs (a violated
stack invariant) or host configuration that cannot be coerced into settings.
"""

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Location information attached to engine errors.

    Params:
        line: 0-based line index in the analysed document
        line_text: Raw text of that line
        uri: Identity of the document snapshot, if the host supplied one
        version: Snapshot version the pass was running against
    """

    line: int | None = None
    line_text: str | None = None
    uri: str | None = None
    version: int | None = None

    def format_location(self) -> str:
        """
        Format location information for an error message.

        Returns:
            Indented multi-line location description (empty if nothing is known)
        """
        lines = []

        if self.uri:
            if self.version is not None:
                lines.append(f"  in {self.uri} (version {self.version})")
            else:
                lines.append(f"  in {self.uri}")

        # Users count lines from 1
        if self.line is not None:
            lines.append(f"  at line {self.line + 1}")

        if self.line_text is not None:
            lines.append(f"  text: {self.line_text.strip()}")

        return "\n".join(lines)


class RoopAnalysisError(Exception):
    """Base exception for all roopkit errors."""

    pass


class StackInvariantError(RoopAnalysisError):
    """Raised when the block stack reaches a state the algorithm forbids."""

    def __init__(self, reason: str, context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            reason: Which invariant was violated
            context: Where in the document the violation was observed
        """
        self.reason = reason
        self.context = context

        message = f"Block stack invariant violated: {reason}"
        if context:
            location_info = context.format_location()
            if location_info:
                message = f"{message}\n{location_info}"

        super().__init__(message)


class SettingsError(RoopAnalysisError):
    """Raised when host configuration cannot be turned into analysis settings."""

    def __init__(self, key: str, reason: str):
        """
        Initialize the exception.

        Params:
            key: Settings key (dotted path) that was rejected
            reason: Why the value could not be used
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid setting '{key}': {reason}")
