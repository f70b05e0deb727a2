"""
Directory tools for the PDQ MCP server.

- users: list_users_and_teams
- workspaces: list_workspaces
- search: search (boards, docs, folders)
"""

from pdq.tools.search import SearchTools
from pdq.tools.users import UsersAndTeamsTools
from pdq.tools.workspaces import WorkspaceTools

__all__ = [
    "UsersAndTeamsTools",
    "WorkspaceTools",
    "SearchTools",
]
