"""
Listing request modes.

Each distinct way of asking for directory data is its own frozen record, so
a request is exactly one mode. Mutually exclusive parameters are rejected
when the record is built from flat tool arguments, before anything else
runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pdq.core import ParameterConflictError


class SearchType(str, Enum):
    """Object kinds supported by global search."""

    BOARD = "BOARD"
    DOCUMENTS = "DOCUMENTS"
    FOLDERS = "FOLDERS"


@dataclass(frozen=True)
class CurrentUserLookup:
    """Fetch the authenticated caller."""


@dataclass(frozen=True)
class UserNameSearch:
    """Server-side user search by name."""

    name: str


@dataclass(frozen=True)
class DirectoryQuery:
    """Users and/or teams, by id or enumerate-all."""

    user_ids: tuple[str, ...] = ()
    team_ids: tuple[str, ...] = ()
    include_teams: bool = False
    teams_only: bool = False
    include_team_members: bool = False

    def __post_init__(self) -> None:
        if self.teams_only and self.include_teams:
            raise ParameterConflictError(
                "Cannot use teamsOnly: true with includeTeams: true. Use teamsOnly "
                "for teams-only queries or includeTeams for combined data.",
                conflict=["teams_only", "include_teams"],
            )

    @property
    def has_user_ids(self) -> bool:
        return bool(self.user_ids)

    @property
    def has_team_ids(self) -> bool:
        return bool(self.team_ids)


@dataclass(frozen=True)
class WorkspaceListing:
    """Workspaces, optionally filtered by name."""

    search_term: str | None = None
    page: int = 1
    limit: int = 100

    def __post_init__(self) -> None:
        _check_window(self.page, self.limit)


@dataclass(frozen=True)
class GlobalSearch:
    """Boards, docs or folders, optionally filtered by name."""

    search_type: SearchType
    search_term: str | None = None
    page: int = 1
    limit: int = 100
    workspace_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _check_window(self.page, self.limit)


UsersAndTeamsRequest = Union[CurrentUserLookup, UserNameSearch, DirectoryQuery]
ListingRequest = Union[UsersAndTeamsRequest, WorkspaceListing, GlobalSearch]


def _check_window(page: int, limit: int) -> None:
    if page < 1:
        raise ValueError("page must be >= 1")
    if limit < 1:
        raise ValueError("limit must be >= 1")


def build_users_and_teams_request(
    user_ids: list[str] | None = None,
    team_ids: list[str] | None = None,
    name: str | None = None,
    get_me: bool = False,
    include_teams: bool = False,
    teams_only: bool = False,
    include_team_members: bool = False,
) -> UsersAndTeamsRequest:
    """
    Build the request mode from flat tool arguments.

    get_me and name are standalone: combined with anything else they raise
    ParameterConflictError naming the offending parameters.
    """
    others = {
        "userIds": bool(user_ids),
        "teamIds": bool(team_ids),
        "includeTeams": include_teams,
        "teamsOnly": teams_only,
        "includeTeamMembers": include_team_members,
    }

    if get_me:
        offending = [k for k, v in {**others, "name": bool(name)}.items() if v]
        if offending:
            raise ParameterConflictError(
                "getMe is STANDALONE only. Remove all other parameters when using "
                "getMe: true for current user lookup.",
                conflict=["getMe", *offending],
            )
        return CurrentUserLookup()

    if name:
        offending = [k for k, v in others.items() if v]
        if offending:
            raise ParameterConflictError(
                "name is STANDALONE only. Remove userIds, teamIds, includeTeams, "
                "teamsOnly, and includeTeamMembers when using name search.",
                conflict=["name", *offending],
            )
        return UserNameSearch(name=name)

    return DirectoryQuery(
        user_ids=tuple(user_ids or ()),
        team_ids=tuple(team_ids or ()),
        include_teams=include_teams,
        teams_only=teams_only,
        include_team_members=include_team_members,
    )
