"""
In-memory search and virtual pagination.

The platform API cannot filter some entities by name, so a name search
loads one large batch and filters and pages it locally. Small batches are
returned whole and unfiltered: a downstream consumer capable of semantic
matching is better at picking from a short list than a substring match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

import structlog

from pdq.engine.normalize import normalize

logger = structlog.get_logger(__name__)

Entity = dict[str, Any]


def _entity_name(entity: Entity) -> str:
    return entity.get("name") or ""


@dataclass(frozen=True)
class PageWindow:
    """Half-open index range [start, end) of one virtual page."""

    start: int
    end: int

    @classmethod
    def for_page(cls, page: int, limit: int) -> "PageWindow":
        """Compute the window for a 1-indexed page."""
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        start = (page - 1) * limit
        return cls(start=start, end=start + limit)

    def apply(self, items: Sequence[Entity]) -> tuple[Entity, ...]:
        return tuple(items[self.start:self.end])


@dataclass(frozen=True)
class ResolutionOutcome:
    """Items to show and whether filtering/paging was applied here."""

    items: tuple[Entity, ...]
    was_filtered: bool


def resolve(
    batch: Sequence[Entity],
    term: str | None,
    page: int,
    limit: int,
    name_of: Callable[[Entity], str] = _entity_name,
    single_page_size: int | None = None,
) -> ResolutionOutcome:
    """
    Filter a fetched batch by name and slice out one page.

    Args:
        batch: Entities in the order the server returned them.
        term: Raw or normalized search term; None or "" matches everything.
        page: 1-indexed page number.
        limit: Page size.
        name_of: Extracts the comparable name from an entity.
        single_page_size: Batches up to this size are returned whole and
            unfiltered. Defaults to limit.

    Returns:
        ResolutionOutcome. was_filtered is False only for the whole-batch
        short-circuit. The filter is stable, so the same arguments always
        give the same page.
    """
    threshold = limit if single_page_size is None else single_page_size

    if len(batch) <= threshold:
        return ResolutionOutcome(items=tuple(batch), was_filtered=False)

    normalized_term = normalize(term or "")
    window = PageWindow.for_page(page, limit)

    matches = [item for item in batch if normalized_term in normalize(name_of(item) or "")]

    logger.debug(
        "virtual_page_resolved",
        batch_size=len(batch),
        matches=len(matches),
        window_start=window.start,
        window_end=window.end,
    )

    return ResolutionOutcome(items=window.apply(matches), was_filtered=True)


def has_more_pages(items: Sequence[Entity], limit: int) -> bool:
    """
    Guess whether another page exists.

    Heuristic, not an exact count: a full page is taken to mean more may
    follow. An exactly full last page reports True.
    """
    return len(items) == limit
