"""
Caller-facing text for the directory tools.

Whenever a search term was supplied but the list was returned unfiltered,
the text says so explicitly; otherwise a consumer could take the full list
for a filtered one.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

Entity = dict[str, Any]

NO_USERS_OR_TEAMS = "No users or teams found with the specified filters."
NO_WORKSPACES = "No workspaces found."
NO_MATCHING_WORKSPACES = (
    "No workspaces found matching the search term. Try using the tool without a search term"
)
WORKSPACE_DISCLAIMER = (
    "IMPORTANT: Search term not applied - returning all workspaces. "
    "Perform the filtering manually."
)
MEMBER_ONLY_NOTE = "Showing workspaces you are a member of. "
SEARCH_DISCLAIMER = "[IMPORTANT]Items were not filtered. Please perform the filtering."

SEARCH_ID_PREFIXES = {
    "BOARD": "board-",
    "DOCUMENTS": "doc-",
    "FOLDERS": "folder-",
}


def _value(value: Any) -> str:
    if value is None or value == "":
        return "N/A"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _present(entities: Sequence[Entity | None] | None) -> list[Entity]:
    return [e for e in entities or () if e is not None]


# =============================================================================
# Users and teams
# =============================================================================

_USER_FIELDS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Email", "email"),
    ("Title", "title"),
    ("Enabled", "enabled"),
    ("Admin", "is_admin"),
    ("Guest", "is_guest"),
    ("Pending", "is_pending"),
    ("Verified", "is_verified"),
    ("View Only", "is_view_only"),
    ("Join Date", "join_date"),
    ("Last Activity", "last_activity"),
    ("Location", "location"),
    ("Mobile Phone", "mobile_phone"),
    ("Phone", "phone"),
    ("Timezone", "time_zone_identifier"),
    ("UTC Hours Diff", "utc_hours_diff"),
]


def _format_user(user: Entity) -> list[str]:
    lines = [f"  {label}: {_value(user.get(key))}" for label, key in _USER_FIELDS]

    teams = _present(user.get("teams"))
    if teams:
        lines.append("  Teams:")
        for team in teams:
            lines.append(
                f"    - ID: {_value(team.get('id'))}, Name: {_value(team.get('name'))}, "
                f"Guest Team: {_value(team.get('is_guest'))}"
            )
    return lines


def _format_team(team: Entity) -> list[str]:
    lines = [
        f"  ID: {_value(team.get('id'))}",
        f"  Name: {_value(team.get('name'))}",
        f"  Guest Team: {_value(team.get('is_guest'))}",
        f"  Picture URL: {_value(team.get('picture_url'))}",
    ]

    owners = _present(team.get("owners"))
    if owners:
        lines.append("  Owners:")
        for owner in owners:
            lines.append(
                f"    - ID: {_value(owner.get('id'))}, Name: {_value(owner.get('name'))}, "
                f"Email: {_value(owner.get('email'))}"
            )

    members = _present(team.get("users"))
    if members:
        lines.append("  Members:")
        for member in members:
            lines.append(
                f"    - ID: {_value(member.get('id'))}, Name: {_value(member.get('name'))}, "
                f"Email: {_value(member.get('email'))}, Title: {_value(member.get('title'))}, "
                f"Admin: {_value(member.get('is_admin'))}, Guest: {_value(member.get('is_guest'))}"
            )
    return lines


def format_users_and_teams(
    users: Sequence[Entity | None] | None = None,
    teams: Sequence[Entity | None] | None = None,
) -> str:
    """Format users and teams as labelled sections."""
    users = _present(users)
    teams = _present(teams)

    if not users and not teams:
        return NO_USERS_OR_TEAMS

    sections: list[str] = []

    if users:
        lines = ["Users:"]
        for user in users:
            lines.extend(_format_user(user))
            lines.append("")
        sections.append("\n".join(lines).rstrip())

    if teams:
        lines = ["Teams:"]
        for team in teams:
            lines.extend(_format_team(team))
            lines.append("")
        sections.append("\n".join(lines).rstrip())

    return "\n\n".join(sections)


def format_user_name_search(name: str, users: Sequence[Entity | None]) -> str:
    """Format the result of a server-side user name search."""
    found = _present(users)
    if not found:
        return (
            f'NAME_SEARCH_EMPTY: No users found matching "{name}". '
            "Try broader search terms or verify user exists in account."
        )

    user_list = "\n".join(
        f"• **{user.get('name')}** (ID: {user.get('id')})"
        + (f" - {user['title']}" if user.get("title") else "")
        for user in found
    )
    return f'Found {len(found)} user(s) matching "{name}":\n\n{user_list}'


# =============================================================================
# Workspaces
# =============================================================================


def format_workspaces_list(workspaces: Sequence[Entity]) -> str:
    lines = []
    for workspace in workspaces:
        description = f" - {workspace['description']}" if workspace.get("description") else ""
        lines.append(f"• **{workspace.get('name')}** (ID: {workspace.get('id')}){description}")
    return "\n".join(lines)


def format_workspaces(
    workspaces: Sequence[Entity],
    searched: bool,
    was_filtered: bool,
    member_only: bool,
    has_more: bool,
    page: int,
) -> str:
    """
    Format a resolved workspace page.

    Args:
        workspaces: Items of the page.
        searched: Whether the caller supplied a search term.
        was_filtered: Whether the term was applied in memory.
        member_only: Whether the member scope produced the answer.
        has_more: Heuristic "more pages" signal.
        page: Current page number.
    """
    lines: list[str] = []

    if searched and not was_filtered:
        lines.append(WORKSPACE_DISCLAIMER)

    note = MEMBER_ONLY_NOTE if member_only else ""
    lines.append(f"{note}{format_workspaces_list(workspaces)}")

    if has_more:
        lines.append(
            f"PAGINATION INFO: More results available - call the tool again with page: {page + 1}"
        )

    return "\n".join(lines)


# =============================================================================
# Global search
# =============================================================================


def to_search_result(search_type: str, entity: Entity) -> dict[str, Any]:
    """Map a board/doc/folder to a prefixed search result."""
    result = {
        "id": f"{SEARCH_ID_PREFIXES[search_type]}{entity.get('id')}",
        "title": entity.get("name"),
    }
    if entity.get("url"):
        result["url"] = entity["url"]
    return result


def format_search_results(
    results: Sequence[dict[str, Any]],
    searched: bool,
    was_filtered: bool,
) -> str:
    """Serialize search results, adding the disclaimer for unfiltered searches."""
    payload: dict[str, Any] = {}
    if searched and not was_filtered:
        payload["disclaimer"] = SEARCH_DISCLAIMER
    payload["results"] = list(results)
    return json.dumps(payload, indent=2, ensure_ascii=False)
