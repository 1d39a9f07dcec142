"""Resolve user-supplied sources (files, directories, globs) to Python files."""

import glob
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence

from ..config import DepscopeConfig, default_config
from ..exceptions import InvalidPathError
from ..logging_config import get_logger

logger = get_logger(__name__)

SOURCE_SUFFIX = ".py"


def find_source_files(
    sources: Sequence[str], config: Optional[DepscopeConfig] = None
) -> list[Path]:
    """Return the Python files named by ``sources``, deduplicated and sorted.

    Raises:
        InvalidPathError: If a source matches no Python file at all.
    """
    config = config or default_config
    found: dict[Path, None] = {}

    for source in sources:
        matches = list(_expand(source, config))
        if not matches:
            raise InvalidPathError(Path(source), "no Python source files found")
        for path in matches:
            if len(found) >= config.max_files:
                logger.warning(f"Reached max files limit ({config.max_files})")
                return sorted(found)
            found.setdefault(path)

    logger.info(f"Located {len(found)} source files")
    return sorted(found)


def _expand(source: str, config: DepscopeConfig) -> Iterator[Path]:
    path = Path(source)
    if path.is_file():
        if path.suffix == SOURCE_SUFFIX:
            yield path
        return
    if path.is_dir():
        yield from _walk(path, config)
        return
    for match in sorted(glob.glob(source, recursive=True)):
        candidate = Path(match)
        if candidate.is_dir():
            yield from _walk(candidate, config)
        elif candidate.suffix == SOURCE_SUFFIX:
            yield candidate


def _walk(root: Path, config: DepscopeConfig) -> Iterator[Path]:
    visited: set[tuple[int, int]] = set()
    for filepath in sorted(root.rglob(f"*{SOURCE_SUFFIX}")):
        if not filepath.is_file():
            continue
        relative = filepath.relative_to(root)
        if not config.allow_hidden_files and _is_hidden(relative.parts):
            logger.debug(f"Skipped (hidden): {filepath}")
            continue
        if _crosses_symlink(root, relative):
            if not config.follow_symlinks:
                logger.debug(f"Skipped (symlink): {filepath}")
                continue
            stat = filepath.stat()
            if (stat.st_dev, stat.st_ino) in visited:
                continue
            visited.add((stat.st_dev, stat.st_ino))
        if _matches_any(relative.as_posix(), config.exclude_patterns):
            logger.debug(f"Skipped (pattern): {filepath}")
            continue
        yield filepath


def _crosses_symlink(root: Path, relative: Path) -> bool:
    current = root
    for part in relative.parts:
        current = current / part
        if current.is_symlink():
            return True
    return False


def _is_hidden(parts: Iterable[str]) -> bool:
    return any(part.startswith(".") for part in parts)


def _matches_any(relative: str, patterns: Iterable[str]) -> bool:
    for pattern in patterns:
        if fnmatch(relative, pattern):
            return True
        # "venv/*" should also skip "sub/venv/x.py"
        if fnmatch(relative, f"*/{pattern}"):
            return True
    return False
