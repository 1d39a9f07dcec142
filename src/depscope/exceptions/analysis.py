"""Analysis-related exceptions: unparseable sources and trace files."""

from pathlib import Path
from typing import Optional

from .base import DepscopeError


class AnalysisError(DepscopeError):
    """Base class for analysis-related errors."""
    pass


class SourceSyntaxError(AnalysisError):
    """A source file could not be parsed.

    The static analyzer returns this inside an ``AnalysisResult`` instead of
    raising it, so the dispatcher can turn it into a diagnostic.
    """

    def __init__(self, filepath: Path, reason: str, lineno: Optional[int] = None):
        location = f"{filepath}:{lineno}" if lineno is not None else str(filepath)
        super().__init__(f"Syntax error in {location}: {reason}")
        self.filepath = filepath
        self.reason = reason
        self.lineno = lineno


class TraceFileError(AnalysisError):
    """Raised when a dynamic trace file cannot be read or decoded."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot analyse trace file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason
