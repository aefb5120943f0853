from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

Row = Mapping[str, Any]


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def label(self) -> str:
        return "ascending" if self is SortDirection.ASCENDING else "descending"


class ConfigError(str, Enum):
    COLUMNS = "columns"
    KEY_FIELD = "key_field"

    @property
    def message(self) -> str:
        if self is ConfigError.COLUMNS:
            return "Column configuration error"
        return "Table configuration error"


@dataclass(frozen=True)
class Column:
    key: str
    label: str = ""
    sortable: bool = False
    filterable: bool = False

    @property
    def display_label(self) -> str:
        return self.label or self.key


@dataclass(frozen=True)
class SortCriterion:
    key: str
    direction: SortDirection = SortDirection.ASCENDING


@dataclass(frozen=True)
class BulkAction:
    key: str
    label: str
    action: Callable[[str, List[Row]], None]


def is_missing(value: Any) -> bool:
    """True for None and pandas/numpy missing markers (NA, NaN, NaT)."""
    if value is None:
        return True
    try:
        return bool(pd.api.types.is_scalar(value) and pd.isna(value))
    except (TypeError, ValueError):
        return False


def field_value(row: Optional[Row], key: str) -> Any:
    """Read `key` from a row; absent fields and missing markers read as None."""
    if row is None:
        return None
    value = row.get(key)
    return None if is_missing(value) else value


def normalize_columns(raw: Iterable[Any]) -> List[Column]:
    columns: List[Column] = []
    for item in raw or []:
        if isinstance(item, Column):
            columns.append(item)
            continue
        if not isinstance(item, Mapping):
            continue
        key = str(item.get("key") or "").strip()
        columns.append(
            Column(
                key=key,
                label=str(item.get("label") or key),
                sortable=bool(item.get("sortable", False)),
                filterable=bool(item.get("filterable", False)),
            )
        )
    return columns


def parse_criteria(raw: Iterable[Any]) -> List[SortCriterion]:
    """Build sort criteria from `{"key", "direction"}` dicts; unusable entries are dropped."""
    out: List[SortCriterion] = []
    seen = set()
    for item in raw or []:
        if isinstance(item, SortCriterion):
            criterion = item
        elif isinstance(item, Mapping) and item.get("key"):
            direction = str(item.get("direction", "asc")).lower()
            if direction not in ("asc", "desc"):
                continue
            criterion = SortCriterion(key=str(item["key"]), direction=SortDirection(direction))
        else:
            continue
        if criterion.key in seen:
            continue
        seen.add(criterion.key)
        out.append(criterion)
    return out


def find_column(columns: Sequence[Column], key: str) -> Optional[Column]:
    for column in columns:
        if column.key == key:
            return column
    return None
