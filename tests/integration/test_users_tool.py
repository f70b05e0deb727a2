"""
Integration tests for list_users_and_teams against a fake adapter.
"""

from __future__ import annotations

from uuid import UUID

import pytest

from pdq.config import LimitsConfig
from pdq.core import CeilingExceededError, ParameterConflictError
from pdq.engine.formatter import NO_USERS_OR_TEAMS
from pdq.engine.selector import QueryShape
from pdq.schemas.inputs import ListUsersAndTeamsInput
from pdq.tools.users import AUTHENTICATION_ERROR, UsersAndTeamsTools
from tests.conftest import FakeAdapter, RecordingObserver, make_team, make_user


class TestListUsersAndTeams:
    """Tests for the users and teams tool."""

    def _tools(
        self,
        adapter: FakeAdapter,
        limits: LimitsConfig,
        observer: RecordingObserver | None = None,
    ) -> UsersAndTeamsTools:
        return UsersAndTeamsTools(adapter, limits, observer)

    @pytest.mark.asyncio
    async def test_get_me(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter({QueryShape.CURRENT_USER: {"me": make_user(1, "Ada")}})

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(get_me=True), request_id
        )

        assert result.request_id == request_id
        assert adapter.shapes == [QueryShape.CURRENT_USER]
        assert adapter.calls[0].variables == {}
        assert "Name: Ada" in result.content
        assert result.resolution.query_shape == "current_user"
        assert result.resolution.result_count == 1

    @pytest.mark.asyncio
    async def test_get_me_without_user(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter({QueryShape.CURRENT_USER: {"me": None}})

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(get_me=True), request_id
        )

        assert result.content == AUTHENTICATION_ERROR

    @pytest.mark.asyncio
    async def test_name_search(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter(
            {QueryShape.USERS_BY_NAME: {"users": [make_user(1, "Ada Lovelace"), None]}}
        )

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(name="Ada"), request_id
        )

        assert adapter.calls[0].variables == {"name": "Ada"}
        assert result.content.startswith('Found 1 user(s) matching "Ada":')

    @pytest.mark.asyncio
    async def test_user_ids_fetch_users_with_team_summary(
        self, limits: LimitsConfig, request_id: UUID
    ):
        adapter = FakeAdapter(
            {
                QueryShape.USERS_WITH_TEAMS: {
                    "users": [make_user(1, "Ada", teams=[make_team(9, "Core")])]
                }
            }
        )

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(user_ids=["1"]), request_id
        )

        assert adapter.shapes == [QueryShape.USERS_WITH_TEAMS]
        assert adapter.calls[0].variables == {"userIds": ["1"], "limit": 1000}
        assert "    - ID: 9, Name: Core, Guest Team: false" in result.content

    @pytest.mark.asyncio
    async def test_team_ids_alone_fetch_teams_only(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter({QueryShape.TEAMS_ONLY: {"teams": [make_team(9, "Core")]}})

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(team_ids=["9"]), request_id
        )

        assert adapter.shapes == [QueryShape.TEAMS_ONLY]
        assert adapter.calls[0].variables == {"teamIds": ["9"]}
        assert result.content.startswith("Teams:")
        assert "Users:" not in result.content

    @pytest.mark.asyncio
    async def test_teams_with_members(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter(
            {
                QueryShape.TEAMS_WITH_MEMBERS: {
                    "teams": [make_team(9, "Core", users=[make_user(2, "Bob")])]
                }
            }
        )

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(teams_only=True, include_team_members=True), request_id
        )

        assert adapter.calls[0].variables == {"teamIds": None}
        assert "  Members:" in result.content

    @pytest.mark.asyncio
    async def test_include_teams(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter(
            {
                QueryShape.USERS_AND_TEAMS: {
                    "users": [make_user(1, "Ada")],
                    "teams": [make_team(9, "Core")],
                }
            }
        )

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(include_teams=True), request_id
        )

        assert adapter.calls[0].variables == {"userIds": None, "teamIds": None, "limit": 1000}
        assert result.resolution.result_count == 2
        assert "Users:" in result.content and "Teams:" in result.content

    @pytest.mark.asyncio
    async def test_enumerate_all_uses_default_limit(self, request_id: UUID):
        adapter = FakeAdapter({QueryShape.USERS_ONLY: {"users": []}})
        limits = LimitsConfig(default_user_limit=250)

        result = await self._tools(adapter, limits).list_users_and_teams(
            ListUsersAndTeamsInput(), request_id
        )

        assert adapter.calls[0].variables == {"userIds": None, "limit": 250}
        assert result.content == NO_USERS_OR_TEAMS

    @pytest.mark.asyncio
    async def test_conflict_makes_no_remote_call(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter()
        observer = RecordingObserver()

        with pytest.raises(ParameterConflictError):
            await self._tools(adapter, limits, observer).list_users_and_teams(
                ListUsersAndTeamsInput(get_me=True, user_ids=["1"]), request_id
            )

        assert adapter.calls == []
        assert observer.events[-1] == ("end", "list_users_and_teams", False, "PARAMETER_CONFLICT")

    @pytest.mark.asyncio
    async def test_ceiling_boundary(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter({QueryShape.USERS_WITH_TEAMS: {"users": []}})
        tools = self._tools(adapter, limits)

        await tools.list_users_and_teams(
            ListUsersAndTeamsInput(user_ids=[str(i) for i in range(500)]), request_id
        )
        assert len(adapter.calls) == 1

        with pytest.raises(CeilingExceededError) as exc_info:
            await tools.list_users_and_teams(
                ListUsersAndTeamsInput(user_ids=[str(i) for i in range(501)]), request_id
            )

        assert exc_info.value.count == 501
        assert len(adapter.calls) == 1

    @pytest.mark.asyncio
    async def test_observer_sees_remote_call(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter({QueryShape.USERS_ONLY: {"users": [make_user(1, "Ada")]}})
        observer = RecordingObserver()

        await self._tools(adapter, limits, observer).list_users_and_teams(
            ListUsersAndTeamsInput(), request_id
        )

        assert observer.events == [
            ("start", "list_users_and_teams"),
            ("remote", "list_users_and_teams", "users_only"),
            ("end", "list_users_and_teams", True, None),
        ]
