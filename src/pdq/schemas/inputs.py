"""
Pydantic models for all tool inputs.

Id-list ceilings are not schema bounds: oversized lists reach
the safety guard, which rejects them with the actual count and the ceiling
so the caller knows how to batch.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ListUsersAndTeamsInput(BaseModel):
    """Input schema for list_users_and_teams tool."""

    user_ids: list[str] | None = Field(
        default=None,
        description=(
            "Specific user IDs to fetch (max 500). Most efficient parameter when "
            "user IDs are available."
        ),
    )
    team_ids: list[str] | None = Field(
        default=None,
        description=(
            "Specific team IDs to fetch (max 500). Use with teams_only: true for "
            "teams-only queries."
        ),
    )
    name: str | None = Field(
        default=None,
        max_length=256,
        description="Name-based user search. Cannot be combined with other parameters.",
    )
    get_me: bool = Field(
        default=False,
        description=(
            "Current authenticated user lookup. Cannot be combined with other "
            "parameters. Returns basic profile."
        ),
    )
    include_teams: bool = Field(
        default=False,
        description="Include teams data alongside users. Adds query overhead.",
    )
    teams_only: bool = Field(
        default=False,
        description="Fetch only teams, no users returned. More efficient than include_teams.",
    )
    include_team_members: bool = Field(
        default=False,
        description="Include detailed team member data. Only when member analysis is needed.",
    )

    @field_validator("user_ids", "team_ids", mode="before")
    @classmethod
    def stringify_ids(cls, v: object) -> object:
        """Accept numeric ids and pass them on as strings."""
        if isinstance(v, list):
            return [str(item) for item in v]
        return v


class ListWorkspacesInput(BaseModel):
    """Input schema for list_workspaces tool."""

    search_term: str | None = Field(
        default=None,
        max_length=256,
        description=(
            "Optional search term used to filter workspaces. "
            "[IMPORTANT] Only alphanumeric characters are compared."
        ),
    )
    limit: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Number of workspaces to return (1-100). Lower for a smaller response.",
    )
    page: int = Field(
        default=1,
        ge=1,
        description="Page number to return. Default is 1.",
    )


class SearchInput(BaseModel):
    """Input schema for search tool."""

    search_type: Literal["BOARD", "DOCUMENTS", "FOLDERS"] = Field(
        ...,
        description="The type of search to perform.",
    )
    search_term: str | None = Field(
        default=None,
        max_length=256,
        description="The search term to use for the search.",
    )
    limit: int = Field(
        default=100,
        ge=1,
        le=100,
        description="The number of items to get. The max and default value is 100.",
    )
    page: int = Field(
        default=1,
        ge=1,
        description="The page number to get. The default value is 1.",
    )
    workspace_ids: list[int] | None = Field(
        default=None,
        max_length=1000,
        description="Workspace ids to search in. Pass to search only in specific workspaces.",
    )
