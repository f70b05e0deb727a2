"""
Users and teams listing tool.

Parameter priority, most specific first:
1. get_me (current user only - standalone)
2. name (user search by name - standalone)
3. user_ids / team_ids
4. no parameters (all users, bounded by the default user limit)
"""

import logging
from uuid import UUID

from pdq.engine.formatter import format_user_name_search, format_users_and_teams
from pdq.engine.requests import (
    CurrentUserLookup,
    DirectoryQuery,
    UserNameSearch,
    build_users_and_teams_request,
)
from pdq.engine.selector import QueryShape, select
from pdq.schemas.inputs import ListUsersAndTeamsInput
from pdq.schemas.outputs import DirectoryToolOutput, ResolutionInfo
from pdq.tools.base import DirectoryTool, present

logger = logging.getLogger(__name__)

TOOL_NAME = "list_users_and_teams"

AUTHENTICATION_ERROR = (
    "AUTHENTICATION_ERROR: Current user fetch failed. "
    "Verify API token and user permissions."
)


class UsersAndTeamsTools(DirectoryTool):
    """Users and teams directory tool."""

    async def list_users_and_teams(
        self,
        input_data: ListUsersAndTeamsInput,
        request_id: UUID,
    ) -> DirectoryToolOutput:
        """
        List users and/or teams with the lightest sufficient query.

        Args:
            input_data: Validated input parameters
            request_id: Unique request identifier

        Returns:
            DirectoryToolOutput with formatted users and teams

        Raises:
            ParameterConflictError: Standalone modes combined with other params
            CeilingExceededError: Too many user or team ids
            RemoteFailureError: The platform API call failed
        """
        with self._tracked(TOOL_NAME, input_data.model_dump(exclude_defaults=True)):
            request = build_users_and_teams_request(
                user_ids=input_data.user_ids,
                team_ids=input_data.team_ids,
                name=input_data.name,
                get_me=input_data.get_me,
                include_teams=input_data.include_teams,
                teams_only=input_data.teams_only,
                include_team_members=input_data.include_team_members,
            )
            self.guard.check(request)
            shape = select(request)

            logger.info(f"{TOOL_NAME}: shape={shape.value}")

            if isinstance(request, CurrentUserLookup):
                data = await self._fetch(TOOL_NAME, shape, {})
                me = data.get("me")
                if not me:
                    content = AUTHENTICATION_ERROR
                    count = 0
                else:
                    content = format_users_and_teams(users=[me])
                    count = 1

            elif isinstance(request, UserNameSearch):
                data = await self._fetch(TOOL_NAME, shape, {"name": request.name})
                users = present(data.get("users"))
                content = format_user_name_search(request.name, users)
                count = len(users)

            else:
                data = await self._fetch(TOOL_NAME, shape, self._variables(shape, request))
                users = present(data.get("users"))
                teams = present(data.get("teams"))
                content = format_users_and_teams(users=users, teams=teams)
                count = len(users) + len(teams)

        return DirectoryToolOutput(
            request_id=request_id,
            content=content,
            resolution=ResolutionInfo(
                query_shape=shape.value,
                remote_calls=1,
                result_count=count,
            ),
        )

    def _variables(self, shape: QueryShape, request: DirectoryQuery) -> dict:
        user_ids = list(request.user_ids) or None
        team_ids = list(request.team_ids) or None

        if shape in (QueryShape.TEAMS_ONLY, QueryShape.TEAMS_WITH_MEMBERS):
            return {"teamIds": team_ids}

        if shape is QueryShape.USERS_AND_TEAMS:
            return {
                "userIds": user_ids,
                "teamIds": team_ids,
                "limit": self.guard.user_fetch_limit,
            }

        return {"userIds": user_ids, "limit": self.guard.user_fetch_limit}
