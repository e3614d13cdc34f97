from __future__ import annotations

from typing import Any


class NexusToolkitError(Exception):
    pass


class BridgeLoadError(NexusToolkitError):
    """The live bridge module could not be loaded or produced no caller."""

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"Failed to load live bridge {self.target!r}: {self.message}"


class ToolCallError(NexusToolkitError):
    def __init__(self, tool: str, message: str, *, response_body: Any | None = None) -> None:
        self.tool = tool
        self.message = message
        self.response_body = response_body
        super().__init__(str(self))

    def __str__(self) -> str:
        return self.message
