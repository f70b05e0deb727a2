"""
Platform GraphQL client.

The engine treats the API as an opaque request/response call: a document
plus variables in, the `data` object out. Transient failures are not
retried here or in the engine; they surface as RemoteFailureError.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog

from pdq.config import ApiConfig
from pdq.core import ConfigurationError, RemoteFailureError

logger = structlog.get_logger(__name__)


class RemoteFetchAdapter(Protocol):
    """Anything that can run one GraphQL request."""

    async def request(
        self,
        document: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...


class GraphQLClient:
    """
    Async GraphQL client over httpx.

    Features:
    - Token and API-Version headers from configuration
    - GraphQL `errors` mapped to RemoteFailureError with upstream detail
    - Optional injected transport for tests
    """

    def __init__(
        self,
        config: ApiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: API endpoint, token and timeout.
            transport: Optional httpx transport (e.g. httpx.MockTransport).

        Raises:
            ConfigurationError: If no API token is configured.
        """
        if config.token is None or not config.token.get_secret_value():
            raise ConfigurationError(
                "API token is not configured. Set PDQ_API__TOKEN or api.token in pdq.toml."
            )

        headers = {
            "Authorization": config.token.get_secret_value(),
            "Content-Type": "application/json",
        }
        if config.api_version:
            headers["API-Version"] = config.api_version

        self.url = config.url
        self._client = httpx.AsyncClient(
            timeout=config.timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def request(
        self,
        document: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Run one GraphQL request.

        Returns:
            The response's `data` object.

        Raises:
            RemoteFailureError: On network errors, non-2xx responses,
                unparseable bodies, or GraphQL errors.
        """
        payload = {"query": document, "variables": variables or {}}

        try:
            response = await self._client.post(self.url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("graphql_http_error", status_code=e.response.status_code)
            raise RemoteFailureError(
                f"Platform API HTTP error: {e.response.status_code}",
                status_code=e.response.status_code,
                errors=_extract_errors(e.response),
            ) from e
        except httpx.HTTPError as e:
            logger.warning("graphql_transport_error", error=str(e))
            raise RemoteFailureError(f"Platform API request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteFailureError(
                "Platform API returned a non-JSON response",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise RemoteFailureError(
                "Platform API returned an unexpected response",
                status_code=response.status_code,
            )

        errors = body.get("errors") or []
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = "; ".join(
                str(err.get("message", err) if isinstance(err, dict) else err) for err in errors
            )
            logger.warning("graphql_errors", count=len(errors))
            raise RemoteFailureError(
                f"Platform API returned errors: {messages}",
                status_code=response.status_code,
                errors=errors,
            )

        data = body.get("data")
        if data is not None and not isinstance(data, dict):
            raise RemoteFailureError(
                "Platform API returned an unexpected response",
                status_code=response.status_code,
            )
        return data or {}

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _extract_errors(response: httpx.Response) -> list[dict[str, Any]]:
    try:
        body = response.json()
    except ValueError:
        return []
    if isinstance(body, dict):
        return list(body.get("errors") or [])
    return []
