"""Command resolution.

The option set differs per command and building a command needs the
analysed graph, while the graph itself depends on the options. Resolution
therefore happens in phases:

1. ``scan`` classifies the raw argument tokens without any parser: it turns
   ``-h``/``--help`` anywhere into ``help <command>`` and decides whether the
   requested command needs dependency analysis at all. Options typed before
   the command name are moved after it.
2. The CLI parses the effective arguments against the option schema
   registered for that command; ``parsed_arguments`` captures the result.
3. Only then does the dispatcher analyse sources and build the command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from .commands import ANALYSIS_COMMANDS
from .graph.filters import FilterKind

PROGRAM_NAME = "depscope"
HELP_COMMAND = "help"
HELP_FLAGS = frozenset({"--help", "-h"})
NO_ANALYSIS_COMMANDS = frozenset({HELP_COMMAND, "list", "test-features"})


def is_flag(token: str) -> bool:
    return token.startswith("-")


@dataclass(frozen=True)
class RawInvocation:
    """The process arguments, captured once at start-up."""

    program: str
    tokens: tuple[str, ...] = ()

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> "RawInvocation":
        program = Path(argv[0]).name if argv and argv[0] else PROGRAM_NAME
        return cls(program=program, tokens=tuple(argv[1:]))

    def first_non_flag(self) -> Optional[str]:
        names = self.non_flags()
        return names[0] if names else None

    def non_flags(self) -> list[str]:
        return [token for token in self.tokens if not is_flag(token)]

    @property
    def help_requested(self) -> bool:
        return any(token in HELP_FLAGS for token in self.tokens)


@dataclass(frozen=True)
class Route:
    """Phase-1 decision: which command runs and with which arguments."""

    command: Optional[str]
    arguments: tuple[str, ...]
    requires_analysis: bool = False
    help_requested: bool = False


def _command_first(tokens: tuple[str, ...], command: str) -> tuple[str, ...]:
    # Options given before the command name belong to the command
    index = tokens.index(command)
    return (command,) + tokens[:index] + tokens[index + 1 :]


def scan(invocation: RawInvocation) -> Route:
    """Classify the raw tokens. Never runs the parser, never analyses."""
    if invocation.help_requested:
        names = invocation.non_flags()
        if names[:1] == [HELP_COMMAND]:
            names = names[1:]
        arguments = (HELP_COMMAND, names[0]) if names else (HELP_COMMAND,)
        return Route(command=HELP_COMMAND, arguments=arguments, help_requested=True)

    command = invocation.first_non_flag()
    if command in NO_ANALYSIS_COMMANDS:
        return Route(command=command, arguments=_command_first(invocation.tokens, command))
    if command in ANALYSIS_COMMANDS:
        return Route(
            command=command,
            arguments=_command_first(invocation.tokens, command),
            requires_analysis=True,
        )
    # Unknown commands, option values and bare options go to the parser
    # untouched so its usage machinery reports them.
    return Route(command=None, arguments=invocation.tokens)


@dataclass(frozen=True)
class ParsedArguments:
    """Validated command name, positional sources and option values."""

    command: str
    positionals: tuple[str, ...] = ()
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def filter_options(self) -> dict[str, Any]:
        """Project the options onto the keys understood by the filter pipeline."""
        options = {key: self.options[key] for key in FilterKind.option_keys() if key in self.options}
        if "internals" in self.options:
            options["no_internals"] = not self.options["internals"]
        return options


def parsed_arguments(ctx: Any) -> ParsedArguments:
    """Build ``ParsedArguments`` from a parsed click/typer context."""
    params = dict(ctx.params)
    sources = params.pop("source", None) or ()
    options = {
        name: value.value if isinstance(value, Enum) else value for name, value in params.items()
    }
    return ParsedArguments(
        command=ctx.info_name or ctx.command.name,
        positionals=tuple(str(s) for s in sources),
        options=MappingProxyType(options),
    )
