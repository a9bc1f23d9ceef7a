"""
Relation list flattening.

Both upstream APIs describe related entities (brands, sizes, colours
and so on) as lists of small objects.  The canonical schema stores
each list as two parallel strings: the human labels and the ids,
joined by `JOIN_DELIMITER`.
"""

from __future__ import annotations

from typing import Any, Mapping

JOIN_DELIMITER = " | "


def join_labels(items: Any, key: str) -> str:
    """Join ``item[key]`` for every usable item of a relation list.

    Args:
        items: The raw relation list.  Anything that is not a list
            (``None``, a dict, a string) yields an empty string.
        key: Name of the field holding the value to join.

    Returns:
        The values converted to text and joined by `JOIN_DELIMITER`.
        Null items and items with a null or missing value are skipped.
    """
    if not isinstance(items, list) or not items:
        return ""
    return JOIN_DELIMITER.join(
        str(item[key])
        for item in items
        if isinstance(item, Mapping) and item.get(key) is not None
    )


def join_ids(items: Any) -> str:
    """Join the ``id`` field of every usable item of a relation list."""
    return join_labels(items, "id")
