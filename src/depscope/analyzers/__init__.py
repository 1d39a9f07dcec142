"""Producers of dependency facts: source locator, static and dynamic analyzers."""

from .locator import find_source_files
from .static import AnalysisResult, StaticAnalyzer, module_name_for
from .trace import TraceAnalyzer

__all__ = [
    "AnalysisResult",
    "StaticAnalyzer",
    "TraceAnalyzer",
    "find_source_files",
    "module_name_for",
]
