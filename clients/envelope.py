"""Normalization of the paginated list envelopes returned by the CRUD API.

The backend has answered list endpoints with four different shapes across
versions:

    [record, ...]
    {"items": [record, ...]}
    {"items": [{"<wrapper_key>": record, "links": [...]}, ...]}
    {"data": [record, ...]}

``normalize_envelope`` flattens all of them into a plain list of records.
"""

from typing import Any, List, Optional


def normalize_envelope(raw: Any, wrapper_key: str) -> List[Any]:
    """Return the flat, ordered record list carried by ``raw``.

    Unrecognized shapes yield ``[]`` instead of raising; callers render an
    empty list as "no data".
    """
    if isinstance(raw, list):
        return raw

    if not isinstance(raw, dict):
        return []

    items = raw.get("items")
    if isinstance(items, list):
        # The first element decides whether items are wrapped
        first = items[0] if items else None
        if isinstance(first, dict) and wrapper_key in first:
            return [
                item[wrapper_key]
                for item in items
                if isinstance(item, dict) and item.get(wrapper_key) is not None
            ]
        return items

    data = raw.get("data")
    if isinstance(data, list):
        return data

    return []


def envelope_total(raw: Any) -> Optional[int]:
    """Total record count advertised by an envelope, if any."""
    if isinstance(raw, list):
        return len(raw)
    if not isinstance(raw, dict):
        return None
    for key in ("total", "totalItems"):
        value = raw.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None
