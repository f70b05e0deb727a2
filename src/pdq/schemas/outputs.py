"""
Tool result models.

Successful calls return `DirectoryToolOutput`: the caller-facing text plus
`ResolutionInfo` describing how the answer was produced. Failures are
reported by the server as an `ErrorEnvelope`.
"""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field


class ErrorInfo(BaseModel):
    """Why a tool call failed."""

    code: str = Field(..., description="Stable error code, e.g. LIMIT_EXCEEDED")
    message: str = Field(..., description="Message for the caller, prefixed with the code")
    retryable: bool = Field(default=False, description="True if repeating the call may succeed")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Structured context such as count and ceiling"
    )


class ResolutionInfo(BaseModel):
    """How the listing was resolved."""

    query_shape: str = Field(..., description="Remote query variant that was issued")
    remote_calls: int = Field(..., ge=0, le=2, description="Remote calls made")
    was_filtered: bool | None = Field(
        default=None,
        description="Whether the search term and paging were applied in memory",
    )
    scope: Literal["member", "all"] | None = Field(
        default=None, description="Workspace membership scope that produced the answer"
    )
    has_more: bool = Field(
        default=False,
        description="Heuristic: the page was full, so more results may exist",
    )
    result_count: int = Field(default=0, ge=0, description="Entities in this response")


class SuccessEnvelope(BaseModel):
    ok: Literal[True] = True
    request_id: UUID = Field(..., description="Per-call id, also used in logs")


class ErrorEnvelope(BaseModel):
    ok: Literal[False] = False
    error: ErrorInfo
    request_id: UUID = Field(..., description="Per-call id, also used in logs")


class DirectoryToolOutput(SuccessEnvelope):
    """Result of list_users_and_teams, list_workspaces or search."""

    content: str = Field(..., description="Caller-facing text")
    resolution: ResolutionInfo = Field(..., description="Resolution metadata")
