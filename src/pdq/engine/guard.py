"""
Safety ceilings checked before any remote call.

The guard never truncates: an oversized id list is rejected with the real
count so the caller can decide how to batch. Enumerate-all and in-memory
search paths get a fixed result count that bounds what a single call can
materialize.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pdq.config import LimitsConfig
from pdq.core import CeilingExceededError
from pdq.engine.requests import DirectoryQuery, ListingRequest

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RemoteWindow:
    """Page and limit actually sent to the platform API."""

    page: int
    limit: int


class SafetyGuard:
    """
    Enforce id-list and result-count ceilings.

    Features:
    - Per-entity-kind id ceilings (users, teams)
    - Bounded default fetch size when no ids are given
    - Bounded in-memory load size for name search
    """

    def __init__(self, limits: LimitsConfig | None = None) -> None:
        self.limits = limits or LimitsConfig()

    def check(self, request: ListingRequest) -> None:
        """
        Validate a request against the ceilings.

        Raises:
            CeilingExceededError: If an id list is above its ceiling.
        """
        if not isinstance(request, DirectoryQuery):
            return

        if len(request.user_ids) > self.limits.max_user_ids:
            logger.info(
                "ceiling_exceeded",
                field="userIds",
                count=len(request.user_ids),
                ceiling=self.limits.max_user_ids,
            )
            raise CeilingExceededError(
                "userIds", len(request.user_ids), self.limits.max_user_ids
            )

        if len(request.team_ids) > self.limits.max_team_ids:
            logger.info(
                "ceiling_exceeded",
                field="teamIds",
                count=len(request.team_ids),
                ceiling=self.limits.max_team_ids,
            )
            raise CeilingExceededError(
                "teamIds", len(request.team_ids), self.limits.max_team_ids
            )

    @property
    def user_fetch_limit(self) -> int:
        """Maximum users requested in one call."""
        return self.limits.default_user_limit

    def remote_window(self, has_search_term: bool, page: int, limit: int) -> RemoteWindow:
        """
        Decide the page/limit sent to the server.

        Without a search term the caller's window goes straight to the
        server. With one, the server has no name filter, so page 1 is
        loaded with the in-memory limit and paging happens locally.
        """
        if has_search_term:
            return RemoteWindow(page=1, limit=self.limits.load_into_memory_limit)
        return RemoteWindow(page=page, limit=limit)
