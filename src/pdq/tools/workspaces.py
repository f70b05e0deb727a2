"""
Workspace listing tool.

The API has no name filter for workspaces, so a search term loads one
large page and filters in memory. Member workspaces are tried first; all
workspaces are fetched only when the member scope is empty or does not
contain the searched term.
"""

import logging
from typing import Any
from uuid import UUID

from pdq.engine.fallback import MembershipFallbackResolver, MembershipScope
from pdq.engine.formatter import NO_MATCHING_WORKSPACES, NO_WORKSPACES, format_workspaces
from pdq.engine.normalize import normalize_search_term
from pdq.engine.paginate import ResolutionOutcome, has_more_pages, resolve
from pdq.engine.requests import WorkspaceListing
from pdq.engine.selector import select
from pdq.schemas.inputs import ListWorkspacesInput
from pdq.schemas.outputs import DirectoryToolOutput, ResolutionInfo
from pdq.tools.base import DirectoryTool, present

logger = logging.getLogger(__name__)

TOOL_NAME = "list_workspaces"


class WorkspaceTools(DirectoryTool):
    """Workspace directory tool."""

    async def list_workspaces(
        self,
        input_data: ListWorkspacesInput,
        request_id: UUID,
    ) -> DirectoryToolOutput:
        """
        List workspaces, optionally filtered by name.

        Args:
            input_data: Validated input parameters
            request_id: Unique request identifier

        Returns:
            DirectoryToolOutput with the formatted page

        Raises:
            EmptySearchTermError: The term has no letters or digits
            RemoteFailureError: The platform API call failed
        """
        with self._tracked(TOOL_NAME, input_data.model_dump(exclude_defaults=True)):
            request = WorkspaceListing(
                search_term=input_data.search_term,
                page=input_data.page,
                limit=input_data.limit,
            )
            term = normalize_search_term(request.search_term)
            shape = select(request)
            window = self.guard.remote_window(term is not None, request.page, request.limit)

            async def fetch(scope: MembershipScope) -> list[dict[str, Any]]:
                data = await self._fetch(
                    TOOL_NAME,
                    shape,
                    {
                        "limit": window.limit,
                        "page": window.page,
                        "membershipKind": scope.value,
                    },
                )
                return present(data.get("workspaces"))

            fallback = await MembershipFallbackResolver(fetch).resolve(term)

            logger.info(
                f"{TOOL_NAME}: scope={fallback.scope.value}, "
                f"fetched={len(fallback.batch)}, calls={fallback.remote_calls}"
            )

            if term is None:
                # server already applied page/limit
                outcome = ResolutionOutcome(items=fallback.batch, was_filtered=False)
            else:
                outcome = resolve(
                    fallback.batch,
                    term,
                    request.page,
                    request.limit,
                    single_page_size=self.limits.default_workspace_limit,
                )

            has_more = has_more_pages(outcome.items, request.limit)

            if not fallback.batch:
                content = NO_WORKSPACES
            elif not outcome.items:
                content = NO_MATCHING_WORKSPACES
            else:
                content = format_workspaces(
                    outcome.items,
                    searched=term is not None,
                    was_filtered=outcome.was_filtered,
                    member_only=fallback.member_only,
                    has_more=has_more,
                    page=request.page,
                )

        return DirectoryToolOutput(
            request_id=request_id,
            content=content,
            resolution=ResolutionInfo(
                query_shape=shape.value,
                remote_calls=fallback.remote_calls,
                was_filtered=outcome.was_filtered,
                scope=fallback.scope.value,
                has_more=has_more,
                result_count=len(outcome.items),
            ),
        )
