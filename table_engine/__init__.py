"""Core (UI-agnostic) table data engine.

This package contains:
- row/column/sort models
- the filter -> sort -> paginate pipeline stages
- selection tracking and screen-reader announcement text
- the stateful `TableEngine` that owns one table's state slices
- pandas helpers (DataFrame <-> row records)
"""

from __future__ import annotations

from table_engine.engine import TableEngine, TableView
from table_engine.models import BulkAction, Column, ConfigError, SortCriterion, SortDirection
from table_engine.settings import TableSettings, normalize_settings

__all__ = [
    "BulkAction",
    "Column",
    "ConfigError",
    "SortCriterion",
    "SortDirection",
    "TableEngine",
    "TableSettings",
    "TableView",
    "normalize_settings",
]
