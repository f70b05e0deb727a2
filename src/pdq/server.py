"""
MCP server for the PDQ directory tools.

Exposes list_users_and_teams, list_workspaces and search as
`pdq__<tool>` over JSON-RPC. Tool failures (bad input, parameter
conflicts, ceilings, remote errors) are returned as error envelopes inside
a normal tools/call result; only protocol problems become JSON-RPC errors.
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from uuid import UUID, uuid4

from pydantic import BaseModel

from pdq import __version__
from pdq.api.client import GraphQLClient, RemoteFetchAdapter
from pdq.config import Config
from pdq.core import PDQError
from pdq.engine.observer import LoggingObserver, ToolObserver
from pdq.schemas.inputs import ListUsersAndTeamsInput, ListWorkspacesInput, SearchInput
from pdq.schemas.outputs import DirectoryToolOutput, ErrorEnvelope, ErrorInfo
from pdq.schemas.validation import get_json_schema, validate_input
from pdq.tools.search import SearchTools
from pdq.tools.users import UsersAndTeamsTools
from pdq.tools.workspaces import WorkspaceTools

logger = logging.getLogger(__name__)

SERVER_NAME = "pdq"
SERVER_VERSION = __version__
PROTOCOL_VERSION = "2024-11-05"

# JSON-RPC error codes
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

ToolHandler = Callable[[Any, UUID], Awaitable[DirectoryToolOutput]]


@dataclass(frozen=True)
class ToolSpec:
    """A registered tool: schema, handler and the text shown to clients."""

    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler

    @property
    def exposed_name(self) -> str:
        return f"{SERVER_NAME}__{self.name}"

    def describe(self) -> dict[str, Any]:
        """MCP tools/list entry."""
        return {
            "name": self.exposed_name,
            "description": self.description,
            "inputSchema": get_json_schema(self.input_model),
            "annotations": {
                "readOnlyHint": True,
                "destructiveHint": False,
                "idempotentHint": True,
            },
        }


def _rpc_result(msg_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": msg_id, "result": result}


def _rpc_error(msg_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": msg_id, "error": {"code": code, "message": message}}


def _text_result(text: str, is_error: bool, **extra: Any) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": is_error, **extra}


def _error_result(request_id: UUID, code: str, message: str, **fields: Any) -> dict[str, Any]:
    envelope = ErrorEnvelope(
        request_id=request_id,
        error=ErrorInfo(code=code, message=message, **fields),
    )
    return _text_result(json.dumps(envelope.model_dump(mode="json"), indent=2), is_error=True)


class DirectoryMCPServer:
    """
    JSON-RPC dispatcher over the three directory tools.

    The remote client and observer are injected so tests can run the whole
    dispatch path against a fake adapter.
    """

    def __init__(
        self,
        config: Config,
        client: RemoteFetchAdapter | None = None,
        observer: ToolObserver | None = None,
    ) -> None:
        """
        Args:
            config: Loaded configuration
            client: Remote adapter; a GraphQLClient is built from config if None
            observer: Tool observer; structured logging if None
        """
        self.config = config
        self.client = client if client is not None else GraphQLClient(config.api)
        self.observer = observer or LoggingObserver()
        self.initialized = False

        users = UsersAndTeamsTools(self.client, config.limits, self.observer)
        workspaces = WorkspaceTools(self.client, config.limits, self.observer)
        search = SearchTools(self.client, config.limits, self.observer)

        self.tools: dict[str, ToolSpec] = {
            spec.name: spec
            for spec in (
                ToolSpec(
                    name="list_users_and_teams",
                    description=_users_description(config),
                    input_model=ListUsersAndTeamsInput,
                    handler=users.list_users_and_teams,
                ),
                ToolSpec(
                    name="list_workspaces",
                    description=(
                        "List workspaces available to the user with their ID, name and "
                        "description. Workspaces the user is a member of are listed first; "
                        "all workspaces are searched when needed."
                    ),
                    input_model=ListWorkspacesInput,
                    handler=workspaces.list_workspaces,
                ),
                ToolSpec(
                    name="search",
                    description=(
                        "Search boards, documents and folders by name.\n"
                        "For users and teams, use list_users_and_teams. For workspaces, "
                        "use list_workspaces.\n"
                        "IMPORTANT: ids returned by this tool are prefixed with the type of "
                        "the object (e.g doc-123, board-456, folder-789). Remove the prefix "
                        "before passing ids to other tools."
                    ),
                    input_model=SearchInput,
                    handler=search.search,
                ),
            )
        }

        self._methods: dict[str, Callable[[Any, dict[str, Any]], Awaitable[dict | None]]] = {
            "initialize": self._on_initialize,
            "initialized": self._on_initialized,
            "notifications/initialized": self._on_initialized,
            "tools/list": self._on_tools_list,
            "tools/call": self._on_tools_call,
            "ping": self._on_empty,
            "shutdown": self._on_empty,
        }

        logger.debug(f"Registered tools: {', '.join(s.exposed_name for s in self.tools.values())}")

    def get_tool_list(self) -> list[dict[str, Any]]:
        return [spec.describe() for spec in self.tools.values()]

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """
        Dispatch one JSON-RPC message.

        Returns:
            The response, or None for notifications.
        """
        method = message.get("method", "")
        msg_id = message.get("id")

        handler = self._methods.get(method)
        if handler is None:
            return _rpc_error(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        logger.debug(f"{method} (id={msg_id})")

        try:
            return await handler(msg_id, message.get("params") or {})
        except Exception as e:
            logger.exception(f"Failed to handle {method}: {e}")
            return _rpc_error(msg_id, INTERNAL_ERROR, f"Internal error: {e}")

    async def _on_initialize(self, msg_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        client = params.get("clientInfo", {})
        logger.info(f"Client connected: {client.get('name', 'unknown')} {client.get('version', '')}")

        return _rpc_result(
            msg_id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            },
        )

    async def _on_initialized(self, msg_id: Any, params: dict[str, Any]) -> None:
        self.initialized = True
        return None

    async def _on_tools_list(self, msg_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        return _rpc_result(msg_id, {"tools": self.get_tool_list()})

    async def _on_empty(self, msg_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        return _rpc_result(msg_id, {})

    async def _on_tools_call(self, msg_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name", "")
        try:
            result = await self.call_tool(name, params.get("arguments") or {})
        except KeyError:
            return _rpc_error(msg_id, INVALID_PARAMS, f"Unknown tool: {name}")
        return _rpc_result(msg_id, result)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Validate arguments, run a tool and build the MCP tool result.

        Accepts the tool name with or without the `pdq__` prefix.

        Raises:
            KeyError: If no such tool is registered.
        """
        spec = self.tools[name.removeprefix(f"{SERVER_NAME}__")]
        request_id = uuid4()

        try:
            output = await spec.handler(validate_input(spec.input_model, arguments), request_id)
        except PDQError as e:
            logger.info(f"{spec.name} rejected: {e.code}")
            return _error_result(
                request_id,
                e.code,
                f"{e.code}: {e.message}",
                retryable=e.retryable,
                details=json.loads(json.dumps(e.details, default=str)),
            )
        except ValueError as e:
            return _error_result(request_id, "VALIDATION_ERROR", str(e), retryable=False)
        except Exception as e:
            logger.exception(f"{spec.name} failed: {e}")
            return _error_result(request_id, "INTERNAL_ERROR", str(e), retryable=True)

        return _text_result(
            output.content,
            is_error=False,
            structuredContent=output.model_dump(mode="json", exclude={"content"}),
        )

    async def aclose(self) -> None:
        """Close the remote client if it owns a connection pool."""
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()


def _users_description(config: Config) -> str:
    limits = config.limits
    return (
        "Retrieve users and teams. Prioritize specific IDs over broad searches.\n"
        "Parameter priority: get_me (standalone), name (standalone), user_ids, "
        "team_ids, no parameters (all users, last resort).\n"
        "get_me and name cannot combine with other parameters. Use teams_only "
        "for team-only queries and include_team_members for member details. "
        f"At most {limits.max_user_ids} user IDs and {limits.max_team_ids} "
        "team IDs per call."
    )


def create_server(
    config: Config | None = None,
    client: RemoteFetchAdapter | None = None,
    observer: ToolObserver | None = None,
) -> DirectoryMCPServer:
    """Build a server; configuration defaults to the environment."""
    return DirectoryMCPServer(config or Config(), client=client, observer=observer)


async def run_server(server: DirectoryMCPServer) -> None:
    """Serve over stdio until EOF, then close the remote client."""
    from pdq.transport.stdio import run_stdio_server

    try:
        await run_stdio_server(server)
    finally:
        await server.aclose()


def serve(config: Config) -> None:
    """Entry point for `pdq serve`."""
    logger.info(f"PDQ {SERVER_VERSION} (MCP {PROTOCOL_VERSION}) on stdio")

    try:
        asyncio.run(run_server(create_server(config)))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        logger.exception(f"Server stopped: {e}")
        sys.exit(1)
