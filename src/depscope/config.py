"""Configuration loading and management for depscope.

Configuration sources are merged in priority order:
    1. Defaults (defined in DepscopeConfig)
    2. Global config (~/.depscope.toml)
    3. Project config (./depscope.toml)
    4. Explicit config file (--config)
    5. Environment variables (DEPSCOPE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(merge_policy="deduplicate")
    >>> config.merge_policy
    'deduplicate'
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, Union, get_origin, get_type_hints

from .exceptions import DepscopeError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

MERGE_POLICIES = ("sum", "deduplicate")


@dataclass(frozen=True)
class DepscopeConfig:
    """Configuration for an analysis run.

    Attributes:
        Graph construction:
            merge_policy: How weights combine when static and dynamic
                analysis report the same edge ("sum" or "deduplicate")

        Source discovery:
            exclude_patterns: Glob patterns skipped while walking directories
            allow_hidden_files: Include files and directories starting with "."
            follow_symlinks: Follow symbolic links during directory walks
            max_files: Maximum number of source files to analyse

        External tools:
            plantuml_binary: Executable used by the uml command
            dot_binary: Executable used by the dot command
            tool_timeout_seconds: Timeout for a single tool invocation

        Output control:
            verbosity: Logging verbosity level
    """

    merge_policy: str = "sum"

    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "venv/*",
            ".venv/*",
            "__pycache__/*",
            ".tox/*",
            ".mypy_cache/*",
            ".pytest_cache/*",
            "build/*",
            "dist/*",
            "*.egg-info/*",
            "node_modules/*",
        ]
    )
    allow_hidden_files: bool = False
    follow_symlinks: bool = False
    max_files: int = 10000

    plantuml_binary: str = "plantuml"
    dot_binary: str = "dot"
    tool_timeout_seconds: int = 120

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.merge_policy not in MERGE_POLICIES:
            raise InvalidConfigError(
                "merge_policy", self.merge_policy, f"expected one of {', '.join(MERGE_POLICIES)}"
            )
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        if self.tool_timeout_seconds < 1:
            raise InvalidConfigError(
                "tool_timeout_seconds", self.tool_timeout_seconds, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")


def load_config(config_file: Optional[Union[str, Path]] = None, **overrides) -> DepscopeConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated DepscopeConfig instance

    Raises:
        DepscopeError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".depscope.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / "depscope.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise DepscopeError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    try:
        return DepscopeConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise DepscopeError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise DepscopeError(f"Invalid {label} '{path}': {e}")
    # Allow a [depscope] table as well as top-level keys
    section = data.get("depscope")
    return dict(section) if isinstance(section, dict) else data


ENV_PREFIX = "DEPSCOPE_"

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def _load_env_vars() -> dict[str, Any]:
    """Read ``DEPSCOPE_<FIELD>`` variables for every config field.

    Booleans accept true/false/1/0/yes/no/on/off, lists are comma separated
    (``DEPSCOPE_EXCLUDE_PATTERNS="build/*,docs/*"``).

    Raises:
        DepscopeError: If a variable cannot be converted to the field's type
    """
    hints = get_type_hints(DepscopeConfig)
    values: dict[str, Any] = {}
    for name in DepscopeConfig.__dataclass_fields__:
        key = f"{ENV_PREFIX}{name.upper()}"
        raw = os.environ.get(key)
        if raw is None:
            continue
        try:
            values[name] = _parse_env_value(raw, hints[name])
        except ValueError as e:
            raise DepscopeError(f"Invalid {key}: {e}")
    return values


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Convert an environment string to ``type_hint``.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    if type_hint is bool:
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"expected true/false, got '{value}'")
    if type_hint is int:
        return int(value)
    if get_origin(type_hint) is list:
        return [item.strip() for item in value.split(",") if item.strip()]
    # str and Literal fields are validated by DepscopeConfig itself
    return value


default_config = DepscopeConfig()
