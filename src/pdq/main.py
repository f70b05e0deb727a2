"""
PDQ command line interface.

`pdq serve` runs the MCP server over stdio. The other commands run a single
tool call against the platform API and print the formatted result, which is
handy for checking credentials and query behaviour by hand.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any

import click
import structlog

from pdq.config import Config, load_config
from pdq.logging import configure_logging

logger = structlog.get_logger(__name__)


async def _call_once(config: Config, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    from pdq.server import create_server

    server = create_server(config)
    try:
        return await server.call_tool(tool_name, arguments)
    finally:
        await server.aclose()


def _run_tool(ctx: click.Context, tool_name: str, arguments: dict[str, Any]) -> None:
    config: Config = ctx.obj["config"]
    # unset options and flags off; 0 is a real value
    arguments = {
        k: v for k, v in arguments.items() if v is not None and v is not False and v != ()
    }

    logger.debug("cli_tool_call", tool=tool_name, arguments=arguments)
    result = asyncio.run(_call_once(config, tool_name, arguments))

    for block in result.get("content", []):
        click.echo(block.get("text", ""))

    if result.get("isError"):
        sys.exit(1)


# CLI Implementation
@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Directory searched for pdq.toml / pdq.yaml",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, project: Path | None, verbose: bool) -> None:
    """PDQ - platform directory queries."""
    ctx.ensure_object(dict)

    loaded = load_config(config_path=config, project_root=project)
    configure_logging(
        level="DEBUG" if verbose else loaded.log_level,
        fmt=loaded.log_format,
    )

    ctx.obj["config"] = loaded


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Run the MCP server over stdio."""
    from pdq.server import serve as serve_stdio

    serve_stdio(ctx.obj["config"])


@cli.command()
@click.option("--user-id", "user_ids", multiple=True, help="User ID (repeatable)")
@click.option("--team-id", "team_ids", multiple=True, help="Team ID (repeatable)")
@click.option("--name", help="Search users by name (standalone)")
@click.option("--me", "get_me", is_flag=True, help="Current user only (standalone)")
@click.option("--include-teams", is_flag=True, help="Also fetch teams")
@click.option("--teams-only", is_flag=True, help="Fetch teams only")
@click.option("--include-team-members", is_flag=True, help="Include team member details")
@click.pass_context
def users(
    ctx: click.Context,
    user_ids: tuple[str, ...],
    team_ids: tuple[str, ...],
    name: str | None,
    get_me: bool,
    include_teams: bool,
    teams_only: bool,
    include_team_members: bool,
) -> None:
    """List users and teams."""
    _run_tool(
        ctx,
        "list_users_and_teams",
        {
            "user_ids": list(user_ids) or None,
            "team_ids": list(team_ids) or None,
            "name": name,
            "get_me": get_me,
            "include_teams": include_teams,
            "teams_only": teams_only,
            "include_team_members": include_team_members,
        },
    )


@cli.command()
@click.argument("search_term", required=False)
@click.option("--limit", "-n", type=int, default=100, help="Page size")
@click.option("--page", type=int, default=1, help="Page number (1-based)")
@click.pass_context
def workspaces(ctx: click.Context, search_term: str | None, limit: int, page: int) -> None:
    """List workspaces, optionally filtered by name."""
    _run_tool(
        ctx,
        "list_workspaces",
        {"search_term": search_term, "limit": limit, "page": page},
    )


@cli.command()
@click.argument("search_type", type=click.Choice(["BOARD", "DOCUMENTS", "FOLDERS"]))
@click.argument("search_term", required=False)
@click.option("--limit", "-n", type=int, default=100, help="Page size")
@click.option("--page", type=int, default=1, help="Page number (1-based)")
@click.option("--workspace-id", "workspace_ids", type=int, multiple=True, help="Workspace ID (repeatable)")
@click.pass_context
def search(
    ctx: click.Context,
    search_type: str,
    search_term: str | None,
    limit: int,
    page: int,
    workspace_ids: tuple[int, ...],
) -> None:
    """Search boards, documents or folders."""
    _run_tool(
        ctx,
        "search",
        {
            "search_type": search_type,
            "search_term": search_term,
            "limit": limit,
            "page": page,
            "workspace_ids": list(workspace_ids) or None,
        },
    )


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
