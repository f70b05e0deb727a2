"""
Search term normalization.

Names and search terms are compared on a canonical key: lower-cased, with
everything except Unicode letters and digits removed. "Sales & Marketing!"
and "SalesMarketing" share the key "salesmarketing"; accents, CJK and RTL
scripts survive.
"""

from __future__ import annotations

import re

from pdq.core import EmptySearchTermError

# \w is letters, digits and underscore; underscore goes too
_NON_ALNUM = re.compile(r"[\W_]+")


def normalize(raw: str) -> str:
    """Return the comparison key for a name or search term."""
    return _NON_ALNUM.sub("", raw.lower())


def normalize_search_term(raw: str | None) -> str | None:
    """
    Normalize a caller-supplied search term.

    Returns None when no term was supplied. A term that was supplied but
    has no comparable content (e.g. "!!!") is rejected instead of being
    treated as "no filter".

    Raises:
        EmptySearchTermError: If a non-empty term normalizes to "".
    """
    if not raw:
        return None

    normalized = normalize(raw)
    if not normalized:
        raise EmptySearchTermError(raw)
    return normalized


def name_matches(normalized_term: str, name: str | None) -> bool:
    """Check whether a normalized term is contained in an entity name."""
    return normalized_term in normalize(name or "")
