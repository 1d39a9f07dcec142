"""Command variants, keyed by the CLI command name."""

from .base import Command, CommandOutcome
from .diagram import TOOL_FAILURE_EXIT_CODE, DiagramCommand, DotCommand, UmlCommand
from .features import TestFeaturesCommand
from .report import DsmCommand, MetricsCommand, TextCommand

ANALYSIS_COMMANDS: dict[str, type[Command]] = {
    cls.name: cls for cls in (UmlCommand, DotCommand, DsmCommand, TextCommand, MetricsCommand)
}

__all__ = [
    "ANALYSIS_COMMANDS",
    "TOOL_FAILURE_EXIT_CODE",
    "Command",
    "CommandOutcome",
    "DiagramCommand",
    "DotCommand",
    "DsmCommand",
    "MetricsCommand",
    "TestFeaturesCommand",
    "TextCommand",
    "UmlCommand",
]
