"""Exception hierarchy for depscope."""

from .analysis import AnalysisError, SourceSyntaxError, TraceFileError
from .base import DepscopeError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError
from .rendering import ExternalToolError, RenderingError

__all__ = [
    "DepscopeError",
    "AnalysisError",
    "SourceSyntaxError",
    "TraceFileError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
    "RenderingError",
    "ExternalToolError",
]
