from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from table_engine.models import Row, field_value


def clean_filters(filters: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Drop empty entries; what remains are the active column filters."""
    if not filters:
        return {}
    return {str(key): str(value) for key, value in filters.items() if value not in (None, "")}


def cell_text(value: Any) -> Optional[str]:
    """Lower-cased display text of a cell, or None when the cell is missing."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).lower()


def row_matches(row: Optional[Row], filters: Mapping[str, str]) -> bool:
    if row is None:
        return False
    for column_key, needle in filters.items():
        if not needle:
            continue
        text = cell_text(field_value(row, column_key))
        if text is None or needle.lower() not in text:
            return False
    return True


def apply_filters(rows: Iterable[Optional[Row]], filters: Optional[Mapping[str, Any]]) -> List[Row]:
    active = clean_filters(filters)
    return [row for row in rows if row is not None and row_matches(row, active)]
