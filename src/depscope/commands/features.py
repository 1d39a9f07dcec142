"""Diagnostic command listing which Python features the analyzer detects."""

from typing import Any, Mapping

from ..analyzers.features import check_features
from ..analyzers.static import StaticAnalyzer
from ..graph.models import DependencyGraph
from .base import Command, CommandOutcome


class TestFeaturesCommand(Command):
    name = "test-features"
    help = "Show which Python features produce dependencies"

    # Not a pytest test class
    __test__ = False

    def __init__(self, analyzer: StaticAnalyzer):
        super().__init__(DependencyGraph.empty())
        self.analyzer = analyzer

    def execute(self, options: Mapping[str, Any]) -> CommandOutcome:
        lines = []
        for feature, detected in check_features(self.analyzer):
            mark = "✓" if detected else "✗"
            lines.append(f"{mark} {feature.description}")
        return CommandOutcome(output="\n".join(lines) + "\n")
