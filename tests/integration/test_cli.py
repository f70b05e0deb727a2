"""
Integration tests for the click CLI.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

import pytest
from click.testing import CliRunner
from structlog.testing import capture_logs

from pdq import main as cli_module
from pdq import server as server_module
from pdq.config import Config
from pdq.engine.observer import NullObserver
from pdq.engine.selector import QueryShape
from tests.conftest import FakeAdapter, make_boards, make_workspaces


@pytest.fixture
def adapter(monkeypatch: pytest.MonkeyPatch) -> Iterator[FakeAdapter]:
    """Route CLI tool calls to a fake adapter, keeping stdout free of log lines."""
    fake = FakeAdapter(
        {
            QueryShape.WORKSPACES: {"workspaces": make_workspaces(2)},
            QueryShape.BOARDS: {"boards": make_boards(["Sales"])},
        }
    )

    def fake_create_server(config: Config, client=None, observer=None):
        return server_module.DirectoryMCPServer(config, client=fake, observer=NullObserver())

    monkeypatch.setattr(server_module, "create_server", fake_create_server)
    monkeypatch.setattr(cli_module, "configure_logging", lambda **kwargs: None)
    with capture_logs():
        yield fake


class TestCli:
    def test_workspaces(self, adapter: FakeAdapter, tmp_path: Path):
        result = CliRunner().invoke(
            cli_module.cli, ["--project", str(tmp_path), "workspaces"], obj={}
        )

        assert result.exit_code == 0, result.output
        assert "• **Workspace 0** (ID: 1000)" in result.output
        assert adapter.calls[0].variables["membershipKind"] == "member"

    def test_search(self, adapter: FakeAdapter, tmp_path: Path):
        result = CliRunner().invoke(
            cli_module.cli,
            ["--project", str(tmp_path), "search", "BOARD", "--workspace-id", "7"],
            obj={},
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["results"][0]["id"] == "board-500"
        assert adapter.calls[0].variables["workspace_ids"] == ["7"]

    def test_error_exit_code(self, adapter: FakeAdapter, tmp_path: Path):
        result = CliRunner().invoke(
            cli_module.cli, ["--project", str(tmp_path), "users", "--me", "--name", "Ada"], obj={}
        )

        assert result.exit_code == 1
        assert "PARAMETER_CONFLICT" in result.output
        assert adapter.calls == []

    def test_zero_limit_is_validated(self, adapter: FakeAdapter, tmp_path: Path):
        result = CliRunner().invoke(
            cli_module.cli, ["--project", str(tmp_path), "workspaces", "--limit", "0"], obj={}
        )

        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.output
        assert adapter.calls == []
