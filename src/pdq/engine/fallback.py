"""
Membership scope fallback for workspace listing.

Two-state machine:

    NARROW --(empty batch, or term matches no name)--> BROAD
    NARROW --(otherwise)--> terminal
    BROAD  --> terminal

NARROW lists the workspaces the caller is a member of; BROAD lists all
workspaces visible to the caller. The common case, searching within one's
own workspaces, costs one round trip; a term that only exists outside the
caller's memberships costs a second.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Sequence

import structlog

from pdq.engine.normalize import name_matches

logger = structlog.get_logger(__name__)

Entity = dict[str, Any]


class MembershipScope(str, Enum):
    """Workspace membership scopes, valued as the API's membership_kind."""

    NARROW = "member"
    BROAD = "all"


@dataclass(frozen=True)
class FallbackResult:
    """Batch produced by the terminal state."""

    batch: tuple[Entity, ...]
    scope: MembershipScope
    remote_calls: int

    @property
    def member_only(self) -> bool:
        """True when the narrow scope answered the request."""
        return self.scope is MembershipScope.NARROW


FetchScope = Callable[[MembershipScope], Awaitable[Sequence[Entity]]]


def next_scope(
    scope: MembershipScope,
    batch: Sequence[Entity],
    normalized_term: str | None,
) -> MembershipScope | None:
    """
    Transition function. Returns the next scope, or None when terminal.
    """
    if scope is MembershipScope.BROAD:
        return None

    if not batch:
        return MembershipScope.BROAD

    if normalized_term and not any(
        name_matches(normalized_term, entity.get("name")) for entity in batch
    ):
        return MembershipScope.BROAD

    return None


class MembershipFallbackResolver:
    """
    Run the NARROW/BROAD machine against a scope-aware fetch function.

    Calls are sequential: whether the second call happens depends on the
    first call's result.
    """

    def __init__(self, fetch: FetchScope) -> None:
        self._fetch = fetch

    async def resolve(self, normalized_term: str | None) -> FallbackResult:
        scope: MembershipScope | None = MembershipScope.NARROW
        batch: Sequence[Entity] = ()
        calls = 0
        terminal = MembershipScope.NARROW

        while scope is not None:
            terminal = scope
            batch = await self._fetch(scope)
            calls += 1
            scope = next_scope(scope, batch, normalized_term)

            if scope is not None:
                logger.info(
                    "membership_fallback",
                    from_scope=terminal.value,
                    to_scope=scope.value,
                    narrow_size=len(batch),
                    searched=bool(normalized_term),
                )

        return FallbackResult(batch=tuple(batch), scope=terminal, remote_calls=calls)
