"""
Shared plumbing for the directory tools.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from pdq.api.client import RemoteFetchAdapter
from pdq.api.queries import document_for
from pdq.config import LimitsConfig
from pdq.core import PDQError
from pdq.engine.guard import SafetyGuard
from pdq.engine.observer import NullObserver, ToolObserver
from pdq.engine.selector import QueryShape


class DirectoryTool:
    """
    Base class for tools backed by the platform API.

    Holds the remote adapter, the safety guard and the observer. Each tool
    call is request-scoped; nothing fetched is kept on the instance.
    """

    def __init__(
        self,
        client: RemoteFetchAdapter,
        limits: LimitsConfig | None = None,
        observer: ToolObserver | None = None,
    ) -> None:
        """
        Initialize the tool.

        Args:
            client: Adapter that runs GraphQL requests
            limits: Safety ceilings and page sizes
            observer: Receives tool lifecycle events
        """
        self.client = client
        self.limits = limits or LimitsConfig()
        self.guard = SafetyGuard(self.limits)
        self.observer: ToolObserver = observer or NullObserver()

    async def _fetch(
        self,
        tool_name: str,
        shape: QueryShape,
        variables: dict[str, Any],
    ) -> dict[str, Any]:
        """Issue exactly one remote request for a query shape."""
        self.observer.on_remote_call(tool_name, shape.value, variables)
        return await self.client.request(document_for(shape), variables)

    @contextmanager
    def _tracked(self, tool_name: str, arguments: dict[str, Any]) -> Iterator[None]:
        """Report start and end of a tool call to the observer."""
        self.observer.on_tool_start(tool_name, arguments)
        try:
            yield
        except PDQError as e:
            self.observer.on_tool_end(tool_name, ok=False, error_code=e.code)
            raise
        except Exception:
            self.observer.on_tool_end(tool_name, ok=False, error_code="INTERNAL_ERROR")
            raise
        else:
            self.observer.on_tool_end(tool_name, ok=True)


def present(entities: list[dict[str, Any] | None] | None) -> list[dict[str, Any]]:
    """Drop null entries the API may return inside a list."""
    return [e for e in entities or [] if e is not None]
