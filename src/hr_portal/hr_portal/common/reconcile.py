"""Post-write reconciliation of cached collections.

Pure functions of (old collection, server response) -> new collection. They
never mutate their input.
"""

from __future__ import annotations

from typing import Any, Sequence

from ..api.shapes import record_id


def append_record(items: Sequence[Any], record: Any) -> list:
    """Append ``record``; if its id is already held, replace that entry instead."""
    rid = record_id(record)
    if rid is not None and any(_same_id(r, rid) for r in items):
        return replace_record(items, rid, record)
    return [*items, record]


def prepend_record(items: Sequence[Any], record: Any) -> list:
    rid = record_id(record)
    rest = [r for r in items if rid is None or not _same_id(r, rid)]
    return [record, *rest]


def replace_record(items: Sequence[Any], rid: Any, record: Any) -> list:
    return [record if _same_id(r, rid) else r for r in items]


def remove_record(items: Sequence[Any], rid: Any) -> list:
    return [r for r in items if not _same_id(r, rid)]


def _same_id(record: Any, rid: Any) -> bool:
    current = record_id(record)
    return current is not None and str(current) == str(rid)
