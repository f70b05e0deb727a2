"""
Shared fixtures for the PDQ test suite.

Provides:
- A scripted fake GraphQL adapter that records every request
- A recording tool observer
- Entity factories for users, teams, workspaces and boards
- Configuration overrides
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable
from uuid import uuid4

import pytest

from pdq.api.queries import document_for
from pdq.config import ApiConfig, Config, LimitsConfig
from pdq.engine.selector import QueryShape


# ==============================================================================
# Fake remote adapter
# ==============================================================================

Responder = Callable[[QueryShape, dict[str, Any]], dict[str, Any]]


@dataclass
class RecordedCall:
    """One request seen by the fake adapter."""

    shape: QueryShape
    variables: dict[str, Any]


class FakeAdapter:
    """
    In-memory stand-in for the GraphQL client.

    Responses are either a dict keyed by query shape, or a callable that
    receives the shape and variables (for scope-dependent answers).
    """

    def __init__(
        self,
        responses: dict[QueryShape, dict[str, Any]] | Responder | None = None,
        error: Exception | None = None,
    ) -> None:
        self.responses = responses or {}
        self.error = error
        self.calls: list[RecordedCall] = []
        self._shapes = {document_for(shape): shape for shape in QueryShape}

    async def request(
        self,
        document: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        shape = self._shapes[document]
        variables = dict(variables or {})
        self.calls.append(RecordedCall(shape=shape, variables=variables))

        if self.error is not None:
            raise self.error

        if callable(self.responses):
            return self.responses(shape, variables)
        return self.responses.get(shape, {})

    @property
    def shapes(self) -> list[QueryShape]:
        return [call.shape for call in self.calls]


@dataclass
class RecordingObserver:
    """Observer that keeps every event for assertions."""

    events: list[tuple[str, ...]] = field(default_factory=list)

    def on_tool_start(self, tool_name: str, arguments: dict[str, Any]) -> None:
        self.events.append(("start", tool_name))

    def on_remote_call(self, tool_name: str, shape: str, variables: dict[str, Any]) -> None:
        self.events.append(("remote", tool_name, shape))

    def on_tool_end(self, tool_name: str, ok: bool, error_code: str | None = None) -> None:
        self.events.append(("end", tool_name, ok, error_code))


# ==============================================================================
# Entity factories
# ==============================================================================


def make_user(user_id: int, name: str, **extra: Any) -> dict[str, Any]:
    return {"id": str(user_id), "name": name, "email": f"user{user_id}@example.com", **extra}


def make_team(team_id: int, name: str, **extra: Any) -> dict[str, Any]:
    return {"id": str(team_id), "name": name, "is_guest": False, **extra}


def make_workspaces(count: int, named: dict[int, str] | None = None) -> list[dict[str, Any]]:
    """Build `count` workspaces; `named` overrides the name at given indexes."""
    named = named or {}
    return [
        {
            "id": str(1000 + i),
            "name": named.get(i, f"Workspace {i}"),
            "description": None,
        }
        for i in range(count)
    ]


def make_boards(names: list[str]) -> list[dict[str, Any]]:
    return [
        {"id": str(500 + i), "name": name, "url": f"https://example.monday.com/boards/{500 + i}"}
        for i, name in enumerate(names)
    ]


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def request_id():
    """Generate a unique request ID for tests."""
    return uuid4()


@pytest.fixture
def limits() -> LimitsConfig:
    """Default limits."""
    return LimitsConfig()


@pytest.fixture
def config(limits: LimitsConfig) -> Config:
    """Configuration with a dummy token."""
    return Config(api=ApiConfig(token="test-token"), limits=limits)


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
