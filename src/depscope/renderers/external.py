"""Run external diagram tools (plantuml, dot) via subprocess."""

import subprocess
from pathlib import Path
from typing import Sequence

from ..exceptions import ExternalToolError
from ..logging_config import get_logger
from .base import RenderedOutput

logger = get_logger(__name__)


class ToolRunner:
    """Blocking, single-shot invocation of an external binary."""

    def __init__(self, timeout: int = 120):
        self.timeout = timeout

    def run(self, binary: str, arguments: Sequence[str]) -> str:
        """Run ``binary`` and return its stdout.

        Raises:
            ExternalToolError: If the binary is missing, times out or fails.
        """
        command = [binary, *arguments]
        logger.debug(f"Running {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ExternalToolError(binary, "executable not found (is it installed and on PATH?)")
        except subprocess.TimeoutExpired:
            raise ExternalToolError(binary, f"timed out after {self.timeout}s")
        if result.returncode != 0:
            raise ExternalToolError(
                binary,
                "exited with a non-zero status",
                returncode=result.returncode,
                output=(result.stderr or result.stdout).strip(),
            )
        return result.stdout


def image_format(destination: Path) -> str:
    suffix = destination.suffix.lstrip(".").lower()
    return suffix or "png"


class DiagramWriter:
    """Turn rendered diagram markup into the file the user asked for.

    If ``destination`` carries the markup's own suffix the markup is written
    as is. Otherwise it is written next to the destination and handed to the
    tool; the markup file is removed afterwards unless ``keep_source``.
    """

    def __init__(self, runner: ToolRunner, binaries: dict[str, str]):
        self.runner = runner
        self.binaries = binaries

    def write(self, rendered: RenderedOutput, destination: Path, keep_source: bool = False) -> Path:
        if rendered.tool is None or destination.suffix == rendered.suffix:
            destination.write_text(rendered.content, encoding="utf-8")
            return destination

        source_file = destination.with_suffix(rendered.suffix)
        source_file.write_text(rendered.content, encoding="utf-8")
        try:
            self.runner.run(
                self.binaries.get(rendered.tool, rendered.tool),
                self._arguments(rendered.tool, source_file, destination),
            )
        finally:
            if not keep_source:
                source_file.unlink(missing_ok=True)
        return self._produced(rendered.tool, destination)

    @staticmethod
    def _produced(tool: str, destination: Path) -> Path:
        if tool == "plantuml":
            # plantuml names its output after the input file
            return destination.with_suffix(f".{image_format(destination)}")
        return destination

    @staticmethod
    def _arguments(tool: str, source_file: Path, destination: Path) -> list[str]:
        fmt = image_format(destination)
        if tool == "dot":
            return [f"-T{fmt}", "-o", str(destination), str(source_file)]
        if tool == "plantuml":
            return [f"-t{fmt}", str(source_file)]
        raise ExternalToolError(tool, "no invocation known for this tool")
