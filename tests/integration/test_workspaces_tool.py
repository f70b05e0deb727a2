"""
Integration tests for list_workspaces: in-memory search, virtual paging
and the membership fallback.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

import pytest

from pdq.config import LimitsConfig
from pdq.core import EmptySearchTermError, RemoteFailureError
from pdq.engine.formatter import (
    MEMBER_ONLY_NOTE,
    NO_MATCHING_WORKSPACES,
    NO_WORKSPACES,
    WORKSPACE_DISCLAIMER,
)
from pdq.engine.selector import QueryShape
from pdq.schemas.inputs import ListWorkspacesInput
from pdq.tools.workspaces import WorkspaceTools
from tests.conftest import FakeAdapter, RecordingObserver, make_workspaces


def by_scope(member: list[dict[str, Any]], everything: list[dict[str, Any]]):
    """Responder answering by membership kind."""

    def respond(shape: QueryShape, variables: dict[str, Any]) -> dict[str, Any]:
        assert shape is QueryShape.WORKSPACES
        batch = member if variables["membershipKind"] == "member" else everything
        return {"workspaces": batch}

    return respond


class TestListWorkspaces:
    """Tests for the workspace listing tool."""

    @pytest.mark.asyncio
    async def test_search_within_member_workspaces(
        self, limits: LimitsConfig, request_id: UUID
    ):
        """150 member workspaces, two match: one call, filtered, member note."""
        member = make_workspaces(150, named={10: "Marketing", 90: "Market Research"})
        adapter = FakeAdapter(by_scope(member, []))

        result = await WorkspaceTools(adapter, limits).list_workspaces(
            ListWorkspacesInput(search_term="Market"), request_id
        )

        assert len(adapter.calls) == 1
        assert adapter.calls[0].variables == {
            "limit": 10000,
            "page": 1,
            "membershipKind": "member",
        }
        assert result.content.startswith(MEMBER_ONLY_NOTE)
        assert "• **Marketing** (ID: 1010)" in result.content
        assert "• **Market Research** (ID: 1090)" in result.content
        assert "Workspace 11" not in result.content
        assert WORKSPACE_DISCLAIMER not in result.content

        resolution = result.resolution
        assert resolution.remote_calls == 1
        assert resolution.scope == "member"
        assert resolution.was_filtered is True
        assert resolution.result_count == 2
        assert resolution.has_more is False

    @pytest.mark.asyncio
    async def test_symbol_only_term_rejected_before_remote_call(
        self, limits: LimitsConfig, request_id: UUID
    ):
        adapter = FakeAdapter(by_scope(make_workspaces(3), []))
        observer = RecordingObserver()

        with pytest.raises(EmptySearchTermError):
            await WorkspaceTools(adapter, limits, observer).list_workspaces(
                ListWorkspacesInput(search_term="&&&"), request_id
            )

        assert adapter.calls == []
        assert observer.events[-1] == ("end", "list_workspaces", False, "INVALID_SEARCH_TERM")

    @pytest.mark.asyncio
    async def test_empty_member_scope_falls_back_to_all(
        self, limits: LimitsConfig, request_id: UUID
    ):
        adapter = FakeAdapter(by_scope([], make_workspaces(3)))

        result = await WorkspaceTools(adapter, limits).list_workspaces(
            ListWorkspacesInput(), request_id
        )

        assert [c.variables["membershipKind"] for c in adapter.calls] == ["member", "all"]
        assert MEMBER_ONLY_NOTE not in result.content
        assert "• **Workspace 2** (ID: 1002)" in result.content
        assert result.resolution.remote_calls == 2
        assert result.resolution.scope == "all"

    @pytest.mark.asyncio
    async def test_term_missing_from_member_scope_falls_back_to_all(
        self, limits: LimitsConfig, request_id: UUID
    ):
        member = make_workspaces(5)
        everything = make_workspaces(200, named={150: "Finance Ops"})
        adapter = FakeAdapter(by_scope(member, everything))

        result = await WorkspaceTools(adapter, limits).list_workspaces(
            ListWorkspacesInput(search_term="finance"), request_id
        )

        assert len(adapter.calls) == 2
        assert result.resolution.scope == "all"
        assert result.resolution.was_filtered is True
        assert "• **Finance Ops** (ID: 1150)" in result.content
        assert MEMBER_ONLY_NOTE not in result.content

    @pytest.mark.asyncio
    async def test_matching_member_scope_skips_second_call(
        self, limits: LimitsConfig, request_id: UUID
    ):
        member = make_workspaces(3, named={1: "Engineering"})
        adapter = FakeAdapter(by_scope(member, make_workspaces(500)))

        result = await WorkspaceTools(adapter, limits).list_workspaces(
            ListWorkspacesInput(search_term="eng"), request_id
        )

        assert len(adapter.calls) == 1
        # small batch: returned whole, with the unfiltered disclaimer
        assert result.resolution.was_filtered is False
        assert result.content.splitlines()[0] == WORKSPACE_DISCLAIMER
        assert MEMBER_ONLY_NOTE in result.content
        assert result.resolution.result_count == 3

    @pytest.mark.asyncio
    async def test_without_term_passes_window_to_server(
        self, limits: LimitsConfig, request_id: UUID
    ):
        adapter = FakeAdapter(by_scope(make_workspaces(10), []))

        result = await WorkspaceTools(adapter, limits).list_workspaces(
            ListWorkspacesInput(page=3, limit=10), request_id
        )

        assert adapter.calls[0].variables == {"limit": 10, "page": 3, "membershipKind": "member"}
        assert result.resolution.was_filtered is False
        assert result.resolution.has_more is True
        assert result.content.splitlines()[-1].endswith("page: 4")
        assert WORKSPACE_DISCLAIMER not in result.content

    @pytest.mark.asyncio
    async def test_filtered_pages(self, limits: LimitsConfig, request_id: UUID):
        named = {i: f"Sales {i}" for i in range(0, 300, 10)}
        adapter = FakeAdapter(by_scope(make_workspaces(300, named=named), []))
        tools = WorkspaceTools(adapter, limits)

        first = await tools.list_workspaces(
            ListWorkspacesInput(search_term="sales", limit=20, page=1), request_id
        )
        second = await tools.list_workspaces(
            ListWorkspacesInput(search_term="sales", limit=20, page=2), request_id
        )

        assert first.resolution.result_count == 20
        assert first.resolution.has_more is True
        assert second.resolution.result_count == 10
        assert second.resolution.has_more is False
        assert "• **Sales 200** (ID: 1200)" in second.content

    @pytest.mark.asyncio
    async def test_no_workspaces(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter(by_scope([], []))

        result = await WorkspaceTools(adapter, limits).list_workspaces(
            ListWorkspacesInput(), request_id
        )

        assert result.content == NO_WORKSPACES
        assert result.resolution.result_count == 0

    @pytest.mark.asyncio
    async def test_no_matching_workspaces(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter(by_scope(make_workspaces(150), make_workspaces(150)))

        result = await WorkspaceTools(adapter, limits).list_workspaces(
            ListWorkspacesInput(search_term="nothing"), request_id
        )

        assert len(adapter.calls) == 2
        assert result.content == NO_MATCHING_WORKSPACES

    @pytest.mark.asyncio
    async def test_remote_failure_propagates(self, limits: LimitsConfig, request_id: UUID):
        adapter = FakeAdapter(error=RemoteFailureError("HTTP 500", status_code=500))
        observer = RecordingObserver()

        with pytest.raises(RemoteFailureError):
            await WorkspaceTools(adapter, limits, observer).list_workspaces(
                ListWorkspacesInput(), request_id
            )

        assert observer.events[-1] == ("end", "list_workspaces", False, "REMOTE_FAILURE")
