from __future__ import annotations

from typing import Any, Hashable, List, Sequence

from table_engine.models import Row, field_value


def toggle_key(selected: Sequence[Any], key: Any) -> List[Any]:
    if key in selected:
        return [k for k in selected if k != key]
    return list(selected) + [key]


def all_selected(selected: Sequence[Any], keys: Sequence[Any]) -> bool:
    if not keys:
        return False
    chosen = set(_hashable(k) for k in selected)
    return all(_hashable(k) in chosen for k in keys)


def toggle_select_all(selected: Sequence[Any], filtered_keys: Sequence[Any]) -> List[Any]:
    """Select-all scoped to the filtered set.

    Clears everything when the filtered keys are already all selected,
    otherwise replaces the selection with exactly those keys.
    """
    if all_selected(selected, filtered_keys):
        return []
    return dedupe_keys(filtered_keys)


def resolve_selected_rows(selected: Sequence[Any], rows: Sequence[Row], key_field: str) -> List[Row]:
    """Rows for the selected keys, in selection order; unknown keys are skipped."""
    by_key = {}
    for row in rows:
        by_key.setdefault(_hashable(field_value(row, key_field)), row)
    return [by_key[_hashable(k)] for k in selected if _hashable(k) in by_key]


def dedupe_keys(keys: Sequence[Any]) -> List[Any]:
    seen = set()
    out = []
    for k in keys:
        h = _hashable(k)
        if h in seen:
            continue
        seen.add(h)
        out.append(k)
    return out


def _hashable(key: Any) -> Hashable:
    try:
        hash(key)
    except TypeError:
        return repr(key)
    return key
