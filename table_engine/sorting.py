"""Multi-column sort stage and the header-click toggle state machines.

Rows are ordered by an explicit comparator rather than by chained key
functions: nulls must land last whatever the direction, which a plain
`reverse=True` pass cannot express.
"""

from __future__ import annotations

import datetime as dt
import locale
from decimal import Decimal
from functools import cmp_to_key
from numbers import Real
from typing import Any, Iterable, List, Optional, Sequence

import pandas as pd

from table_engine.models import Column, Row, SortCriterion, SortDirection, field_value


def _cmp(a: Any, b: Any) -> int:
    return -1 if a < b else 1 if a > b else 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (Real, Decimal)) and not isinstance(value, bool)


def _is_temporal(value: Any) -> bool:
    return isinstance(value, (dt.date, pd.Timestamp))


def _kind_rank(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if _is_number(value):
        return 1
    if _is_temporal(value):
        return 2
    if isinstance(value, str):
        return 3
    return 4


def compare_strings(a: str, b: str) -> int:
    """Locale-aware ordering; case only breaks ties."""
    primary = locale.strcoll(a.casefold(), b.casefold())
    if primary:
        return -1 if primary < 0 else 1
    secondary = locale.strcoll(a, b)
    return -1 if secondary < 0 else 1 if secondary > 0 else 0


def compare_values(a: Any, b: Any) -> int:
    """Compare two non-null cell values; never raises."""
    if isinstance(a, str) and isinstance(b, str):
        return compare_strings(a, b)
    if _is_number(a) and _is_number(b):
        try:
            return _cmp(a, b)
        except TypeError:
            return _cmp(float(a), float(b))
    if _is_temporal(a) and _is_temporal(b):
        try:
            return _cmp(pd.Timestamp(a), pd.Timestamp(b))
        except (TypeError, ValueError):
            pass
    elif _kind_rank(a) == _kind_rank(b):
        try:
            return _cmp(a, b)
        except TypeError:
            pass
    rank = _cmp(_kind_rank(a), _kind_rank(b))
    return rank or _cmp(str(a), str(b))


def compare_rows(a: Row, b: Row, criteria: Sequence[SortCriterion]) -> int:
    for criterion in criteria:
        a_val = field_value(a, criterion.key)
        b_val = field_value(b, criterion.key)
        if a_val is None and b_val is None:
            continue
        # nulls go last in both directions
        if a_val is None:
            return 1
        if b_val is None:
            return -1
        result = compare_values(a_val, b_val)
        if result:
            return result if criterion.direction is SortDirection.ASCENDING else -result
    return 0


def sort_rows(rows: Iterable[Row], criteria: Sequence[SortCriterion]) -> List[Row]:
    result = list(rows)
    if not criteria:
        return result
    return sorted(result, key=cmp_to_key(lambda a, b: compare_rows(a, b, criteria)))


def sort_direction_for(criteria: Sequence[SortCriterion], key: str) -> str:
    """Header sort state for `key`: "asc", "desc" or "none"."""
    for criterion in criteria:
        if criterion.key == key:
            return criterion.direction.value
    return "none"


def toggle_sort(criteria: Sequence[SortCriterion], column: Optional[Column], multi_sort: bool = False) -> List[SortCriterion]:
    """Next criteria after a click on `column`'s header.

    Single-sort cycles asc -> desc -> unsorted. Multi-sort appends a new
    column as asc, flips asc to desc in place, and removes a desc column
    while leaving the others in order.
    """
    current = list(criteria)
    if column is None or not column.sortable:
        return current

    index = next((i for i, c in enumerate(current) if c.key == column.key), None)
    if multi_sort:
        if index is None:
            return current + [SortCriterion(column.key, SortDirection.ASCENDING)]
        if current[index].direction is SortDirection.ASCENDING:
            current[index] = SortCriterion(column.key, SortDirection.DESCENDING)
        else:
            del current[index]
        return current

    existing = current[index].direction if index is not None else None
    if existing is None:
        return [SortCriterion(column.key, SortDirection.ASCENDING)]
    if existing is SortDirection.ASCENDING:
        return [SortCriterion(column.key, SortDirection.DESCENDING)]
    return []
