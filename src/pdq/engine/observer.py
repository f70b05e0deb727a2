"""
Tool execution observers.

Tracking is an injected collaborator: tools receive an observer and report
to it, so tests can swap in a recorder and nothing depends on global state.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)


class ToolObserver(Protocol):
    """Receives tool lifecycle events."""

    def on_tool_start(self, tool_name: str, arguments: dict[str, Any]) -> None: ...

    def on_remote_call(self, tool_name: str, shape: str, variables: dict[str, Any]) -> None: ...

    def on_tool_end(
        self,
        tool_name: str,
        ok: bool,
        error_code: str | None = None,
    ) -> None: ...


class NullObserver:
    """Observer that ignores every event."""

    def on_tool_start(self, tool_name: str, arguments: dict[str, Any]) -> None:
        pass

    def on_remote_call(self, tool_name: str, shape: str, variables: dict[str, Any]) -> None:
        pass

    def on_tool_end(
        self,
        tool_name: str,
        ok: bool,
        error_code: str | None = None,
    ) -> None:
        pass


class LoggingObserver:
    """Observer that emits structured log events."""

    def on_tool_start(self, tool_name: str, arguments: dict[str, Any]) -> None:
        logger.info("tool_start", tool=tool_name, arguments=sorted(arguments))

    def on_remote_call(self, tool_name: str, shape: str, variables: dict[str, Any]) -> None:
        # id lists can hold hundreds of entries; log their sizes only
        summary = {
            key: len(value) if isinstance(value, (list, tuple)) else value
            for key, value in variables.items()
        }
        logger.info("remote_call", tool=tool_name, shape=shape, variables=summary)

    def on_tool_end(
        self,
        tool_name: str,
        ok: bool,
        error_code: str | None = None,
    ) -> None:
        logger.info("tool_end", tool=tool_name, ok=ok, error_code=error_code)
