"""
Query resolution engine for the directory tools.

- normalize: search term canonicalization
- requests: one record per request mode
- guard: id-list and result-count ceilings
- selector: cheapest sufficient remote query shape
- fallback: member-then-all workspace scope machine
- paginate: in-memory search and virtual pagination
- formatter: caller-facing text
- observer: injected tool tracking
"""

from pdq.engine.fallback import (
    FallbackResult,
    MembershipFallbackResolver,
    MembershipScope,
    next_scope,
)
from pdq.engine.guard import RemoteWindow, SafetyGuard
from pdq.engine.normalize import name_matches, normalize, normalize_search_term
from pdq.engine.observer import LoggingObserver, NullObserver, ToolObserver
from pdq.engine.paginate import PageWindow, ResolutionOutcome, has_more_pages, resolve
from pdq.engine.requests import (
    CurrentUserLookup,
    DirectoryQuery,
    GlobalSearch,
    ListingRequest,
    SearchType,
    UserNameSearch,
    WorkspaceListing,
    build_users_and_teams_request,
)
from pdq.engine.selector import QueryShape, select

__all__ = [
    "normalize",
    "normalize_search_term",
    "name_matches",
    "CurrentUserLookup",
    "UserNameSearch",
    "DirectoryQuery",
    "WorkspaceListing",
    "GlobalSearch",
    "SearchType",
    "ListingRequest",
    "build_users_and_teams_request",
    "SafetyGuard",
    "RemoteWindow",
    "QueryShape",
    "select",
    "MembershipScope",
    "MembershipFallbackResolver",
    "FallbackResult",
    "next_scope",
    "PageWindow",
    "ResolutionOutcome",
    "resolve",
    "has_more_pages",
    "ToolObserver",
    "NullObserver",
    "LoggingObserver",
]
