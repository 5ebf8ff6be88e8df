"""Per-vendor pagination cursor normalization.

Every CRM pages differently (opaque tokens, numeric offsets, full next-page
URLs). These functions translate the vendor response into the
``(next, previous)`` cursor pair returned to callers, and translate an
incoming cursor back into vendor request parameters. Cursors handed to
callers are always strings or None.
"""

from __future__ import annotations

from typing import Any

import httpx

Cursors = tuple[str | None, str | None]


def parse_offset(cursor: str | None) -> int:
    """Numeric offset encoded in a cursor; absent or invalid cursors mean 0."""
    if not cursor:
        return 0
    try:
        return max(int(cursor), 0)
    except ValueError:
        return 0


def _nested(payload: dict[str, Any] | None, *path: str) -> Any:
    current: Any = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _as_cursor(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def hubspot_cursors(payload: dict[str, Any]) -> Cursors:
    return _as_cursor(_nested(payload, "paging", "next", "after")), None


def zoho_cursors(payload: dict[str, Any]) -> Cursors:
    return (
        _as_cursor(_nested(payload, "info", "next_page_token")),
        _as_cursor(_nested(payload, "info", "previous_page_token")),
    )


def salesforce_paging_clause(page_size: int | None, cursor: str | None, default_limit: int) -> str:
    """SOQL ordering/limit/offset suffix for a list query."""
    offset = parse_offset(cursor)
    if not page_size and not offset:
        return f"LIMIT {default_limit}"

    parts: list[str] = []
    if page_size:
        parts.append(f"ORDER BY Id DESC LIMIT {page_size}")
    if offset:
        parts.append(f"OFFSET {offset}")
    return " ".join(parts)


def salesforce_cursors(payload: dict[str, Any], page_size: int | None, cursor: str | None) -> Cursors:
    """Offset cursors for SOQL paging.

    A next cursor is only produced when a page size was requested and the
    page came back full; ``totalSize`` of a LIMIT query is the number of
    records returned.
    """
    offset = parse_offset(cursor)
    total_size = int(payload.get("totalSize") or 0)

    next_cursor = None
    if page_size and total_size >= page_size:
        next_cursor = str(offset + total_size)

    previous_cursor = None
    if offset > 0:
        step = page_size or total_size
        previous_cursor = str(max(offset - step, 0))

    return next_cursor, previous_cursor


def pipedrive_cursors(payload: dict[str, Any]) -> Cursors:
    next_start = _nested(payload, "additional_data", "pagination", "next_start")
    return _as_cursor(next_start), None


def close_cursors(
    payload: dict[str, Any],
    page_size: int | None,
    cursor: str | None,
    returned: int,
) -> Cursors:
    offset = parse_offset(cursor)
    step = page_size or returned

    next_cursor = None
    if payload.get("has_more") and step:
        next_cursor = str(offset + step)

    previous_cursor = str(max(offset - step, 0)) if offset > 0 else None
    return next_cursor, previous_cursor


def ms_dynamics_cursors(payload: dict[str, Any]) -> Cursors:
    return _as_cursor(payload.get("@odata.nextLink")), None


def ms_dynamics_cursor_params(cursor: str | None) -> dict[str, str]:
    """Query parameters carried by an ``@odata.nextLink`` cursor."""
    if not cursor:
        return {}
    return dict(httpx.URL(cursor).params.multi_items())
