"""
PDQ Core Errors

Exception hierarchy shared by the engine, the API client and the tools.
Every error carries a stable code that the MCP server puts into the error
envelope so callers can branch on it.
"""

from typing import Any


class PDQError(Exception):
    """Base exception for PDQ errors."""

    code = "PDQ_ERROR"
    retryable = False

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(PDQError):
    """Raised when there's a configuration problem."""

    code = "CONFIGURATION_ERROR"


class ParameterConflictError(PDQError):
    """Raised when mutually exclusive request modes are combined."""

    code = "PARAMETER_CONFLICT"


class CeilingExceededError(PDQError):
    """Raised when an id list is larger than the per-kind ceiling."""

    code = "LIMIT_EXCEEDED"

    def __init__(self, field: str, count: int, ceiling: int) -> None:
        super().__init__(
            f"{field} array too large ({count}/{ceiling}). "
            f"Split into batches of max {ceiling} IDs and make multiple calls.",
            field=field,
            count=count,
            ceiling=ceiling,
        )
        self.field = field
        self.count = count
        self.ceiling = ceiling


class EmptySearchTermError(PDQError):
    """Raised when a search term has no letters or digits left after normalization."""

    code = "INVALID_SEARCH_TERM"

    def __init__(self, raw: str) -> None:
        super().__init__(
            "Search term did not include any alphanumeric characters. "
            "Please provide a valid search term.",
            search_term=raw,
        )


class RemoteFailureError(PDQError):
    """Raised when the platform API call fails (network, HTTP or GraphQL errors)."""

    code = "REMOTE_FAILURE"
    retryable = True

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, errors=errors or [])
        self.status_code = status_code
        self.errors = errors or []
