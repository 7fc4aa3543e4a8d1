"""Translate a PropertyFilter into a parameterised SQL predicate."""

from __future__ import annotations

from typing import Any, Final

from realestate_api.models import PropertyFilter, RecordStatus
from realestate_api.utils.money import to_cents

LIKE_ESCAPE: Final = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def build_filter_clauses(filters: PropertyFilter) -> tuple[str, list[Any]]:
    """Build WHERE clause and params for property filtering.

    Each criterion that is set contributes one fragment; fragments are
    ANDed together. Name and address are matched as substrings of the
    casefolded column, using the ``casefold`` SQL function the storage
    registers on its connection, so case is ignored beyond ASCII.

    Args:
        filters: Validated filter parameters.

    Returns:
        Tuple of (where_sql, params).
    """
    where_clauses: list[str] = []
    params: list[Any] = []

    if filters.enabled is not None:
        where_clauses.append("p.status = ?")
        params.append(RecordStatus.from_enabled(filters.enabled).value)
    if filters.name:
        where_clauses.append("casefold(p.name) LIKE ? ESCAPE '\\'")
        params.append(f"%{escape_like(filters.name.casefold())}%")
    if filters.address:
        where_clauses.append("casefold(p.address) LIKE ? ESCAPE '\\'")
        params.append(f"%{escape_like(filters.address.casefold())}%")
    if filters.price_min is not None:
        where_clauses.append("p.price_cents >= ?")
        params.append(to_cents(filters.price_min))
    if filters.price_max is not None:
        where_clauses.append("p.price_cents <= ?")
        params.append(to_cents(filters.price_max))
    if filters.owner_id:
        where_clauses.append("p.owner_id = ?")
        params.append(filters.owner_id.lower())
    if filters.year is not None:
        where_clauses.append("p.year = ?")
        params.append(filters.year)

    where_sql = " AND ".join(where_clauses) if where_clauses else "1=1"
    return where_sql, params
