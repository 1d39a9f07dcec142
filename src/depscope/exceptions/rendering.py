"""Rendering exceptions: external diagram tools."""

from typing import Optional

from .base import DepscopeError


class RenderingError(DepscopeError):
    """Base class for rendering-related errors."""

    pass


class ExternalToolError(RenderingError):
    """Raised when an external binary (plantuml, dot) is missing or fails."""

    def __init__(self, tool: str, reason: str, returncode: Optional[int] = None, output: str = ""):
        details = {"tool": tool, "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        super().__init__(f"External tool '{tool}' failed", details=details)
        self.tool = tool
        self.reason = reason
        self.returncode = returncode
        self.output = output
