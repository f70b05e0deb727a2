"""
Global search over boards, docs and folders.

Ids in the results are prefixed with the object type (board-123, doc-456,
folder-789); other tools expect the bare number.
"""

import logging
from uuid import UUID

from pdq.engine.formatter import format_search_results, to_search_result
from pdq.engine.normalize import normalize_search_term
from pdq.engine.paginate import ResolutionOutcome, has_more_pages, resolve
from pdq.engine.requests import GlobalSearch, SearchType
from pdq.engine.selector import QueryShape, select
from pdq.schemas.inputs import SearchInput
from pdq.schemas.outputs import DirectoryToolOutput, ResolutionInfo
from pdq.tools.base import DirectoryTool, present

logger = logging.getLogger(__name__)

TOOL_NAME = "search"

_RESPONSE_KEYS = {
    QueryShape.BOARDS: "boards",
    QueryShape.DOCS: "docs",
    QueryShape.FOLDERS: "folders",
}


class SearchTools(DirectoryTool):
    """Global search tool."""

    async def search(
        self,
        input_data: SearchInput,
        request_id: UUID,
    ) -> DirectoryToolOutput:
        """
        Search boards, docs or folders by name.

        Args:
            input_data: Validated input parameters
            request_id: Unique request identifier

        Returns:
            DirectoryToolOutput whose content is a JSON document with
            `results` and, for unfiltered searches, a `disclaimer`

        Raises:
            EmptySearchTermError: The term has no letters or digits
            RemoteFailureError: The platform API call failed
        """
        with self._tracked(TOOL_NAME, input_data.model_dump(exclude_defaults=True)):
            request = GlobalSearch(
                search_type=SearchType(input_data.search_type),
                search_term=input_data.search_term,
                page=input_data.page,
                limit=input_data.limit,
                workspace_ids=tuple(str(w) for w in input_data.workspace_ids or ()),
            )
            term = normalize_search_term(request.search_term)
            shape = select(request)
            window = self.guard.remote_window(term is not None, request.page, request.limit)

            data = await self._fetch(
                TOOL_NAME,
                shape,
                {
                    "page": window.page,
                    "limit": window.limit,
                    "workspace_ids": list(request.workspace_ids) or None,
                },
            )
            batch = present(data.get(_RESPONSE_KEYS[shape]))

            if term is None:
                outcome = ResolutionOutcome(items=tuple(batch), was_filtered=False)
            else:
                outcome = resolve(
                    batch,
                    term,
                    request.page,
                    request.limit,
                    single_page_size=self.limits.search_limit,
                )

            logger.info(
                f"{TOOL_NAME}: type={request.search_type.value}, fetched={len(batch)}, "
                f"returned={len(outcome.items)}, filtered={outcome.was_filtered}"
            )

            results = [to_search_result(request.search_type.value, e) for e in outcome.items]
            content = format_search_results(
                results,
                searched=term is not None,
                was_filtered=outcome.was_filtered,
            )

        return DirectoryToolOutput(
            request_id=request_id,
            content=content,
            resolution=ResolutionInfo(
                query_shape=shape.value,
                remote_calls=1,
                was_filtered=outcome.was_filtered,
                has_more=has_more_pages(outcome.items, request.limit),
                result_count=len(results),
            ),
        )
