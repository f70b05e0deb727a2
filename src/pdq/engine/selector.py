"""
Remote query shape selection.

Every extra field or nested collection in the remote query costs latency
and payload, so the selector picks the lightest shape from a fixed catalog
that still satisfies the request's flags.
"""

from __future__ import annotations

from enum import Enum

from pdq.engine.requests import (
    CurrentUserLookup,
    DirectoryQuery,
    GlobalSearch,
    ListingRequest,
    SearchType,
    UserNameSearch,
    WorkspaceListing,
)


class QueryShape(str, Enum):
    """Fixed catalog of remote query variants."""

    CURRENT_USER = "current_user"
    USERS_BY_NAME = "users_by_name"
    USERS_ONLY = "users_only"
    USERS_WITH_TEAMS = "users_with_teams"
    USERS_AND_TEAMS = "users_and_teams"
    TEAMS_ONLY = "teams_only"
    TEAMS_WITH_MEMBERS = "teams_with_members"
    WORKSPACES = "workspaces"
    BOARDS = "boards"
    DOCS = "docs"
    FOLDERS = "folders"


_SEARCH_SHAPES = {
    SearchType.BOARD: QueryShape.BOARDS,
    SearchType.DOCUMENTS: QueryShape.DOCS,
    SearchType.FOLDERS: QueryShape.FOLDERS,
}


def select(request: ListingRequest) -> QueryShape:
    """
    Pick the query shape for a request.

    Standalone modes map directly. For directory queries:
    - teams only (explicit, or team ids alone) -> teams, with member
      records only when include_team_members is set
    - users without include_teams -> users with their team summary when
      ids are given, bare users otherwise
    - include_teams -> users and teams in one query
    """
    if isinstance(request, CurrentUserLookup):
        return QueryShape.CURRENT_USER

    if isinstance(request, UserNameSearch):
        return QueryShape.USERS_BY_NAME

    if isinstance(request, WorkspaceListing):
        return QueryShape.WORKSPACES

    if isinstance(request, GlobalSearch):
        return _SEARCH_SHAPES[request.search_type]

    if isinstance(request, DirectoryQuery):
        return _select_directory_shape(request)

    raise TypeError(f"Unsupported request type: {type(request).__name__}")


def _select_directory_shape(request: DirectoryQuery) -> QueryShape:
    teams_requested_alone = (
        not request.has_user_ids and request.has_team_ids and not request.include_teams
    )

    if request.teams_only or teams_requested_alone:
        if request.include_team_members:
            return QueryShape.TEAMS_WITH_MEMBERS
        return QueryShape.TEAMS_ONLY

    if not request.include_teams:
        if request.has_user_ids:
            return QueryShape.USERS_WITH_TEAMS
        return QueryShape.USERS_ONLY

    return QueryShape.USERS_AND_TEAMS
