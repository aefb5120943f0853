"""Stateful table engine: one instance per mounted table.

The engine owns four state slices (sort criteria, column filters, selected
keys, page/page size) and recomputes the filter -> sort -> paginate pipeline
from scratch whenever a view is requested. Input rows are never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from table_engine.announcements import filter_announcement, page_summary, selection_summary, sort_announcement
from table_engine.filters import apply_filters, clean_filters
from table_engine.models import (
    BulkAction,
    Column,
    ConfigError,
    Row,
    SortCriterion,
    field_value,
    find_column,
    normalize_columns,
    parse_criteria,
)
from table_engine.pagination import clamp_page, page_range, page_window, paginate, total_pages
from table_engine.selection import all_selected, dedupe_keys, resolve_selected_rows, toggle_key, toggle_select_all
from table_engine.settings import TableSettings
from table_engine.sorting import sort_direction_for, sort_rows, toggle_sort

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[List[Any]], None]


@dataclass(frozen=True)
class TableView:
    visible_rows: List[Row]
    current_page: int
    total_pages: int
    page_size: int
    filtered_count: int
    total_count: int
    start_item: int
    end_item: int
    page_window: List[Optional[int]]
    page_summary: str
    sort: List[SortCriterion]
    sort_announcement: str
    filter_announcement: str
    selected_keys: List[Any]
    all_selected: bool
    selection_summary: str
    empty_message: str
    config_error: Optional[ConfigError] = None
    header_sort: Dict[str, str] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return not self.visible_rows

    @property
    def config_message(self) -> str:
        return self.config_error.message if self.config_error else ""


def validate_config(rows: Sequence[Optional[Row]], columns: Sequence[Column], key_field: str) -> Optional[ConfigError]:
    if not columns or any(not c.key for c in columns):
        return ConfigError.COLUMNS
    if rows and (not key_field or any(row is None or key_field not in row for row in rows)):
        return ConfigError.KEY_FIELD
    return None


class TableEngine:
    def __init__(
        self,
        rows: Iterable[Optional[Row]],
        columns: Iterable[Any],
        key_field: str,
        *,
        settings: Optional[TableSettings] = None,
        on_selection_change: Optional[SelectionCallback] = None,
        bulk_actions: Iterable[BulkAction] = (),
    ):
        self.settings = settings or TableSettings()
        self.columns: List[Column] = normalize_columns(columns)
        self.key_field = key_field
        self.on_selection_change = on_selection_change
        self.bulk_actions: List[BulkAction] = list(bulk_actions)
        self._rows: List[Optional[Row]] = []
        self.reset()
        self.set_rows(rows)

    # ---------- state ----------
    def reset(self) -> None:
        self._sort: List[SortCriterion] = []
        self._filters: Dict[str, str] = {}
        self._selected: List[Any] = []
        self._page = 1
        self._page_size = self.settings.page_size
        self._sort_announcement = ""

    def restore(
        self,
        *,
        sort: Iterable[Any] = (),
        filters: Optional[Dict[str, Any]] = None,
        selected: Iterable[Any] = (),
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> None:
        """Load previously snapshotted state; criteria on unknown or unsortable columns are dropped."""
        sortable = {c.key for c in self.columns if c.sortable}
        criteria = [c for c in parse_criteria(sort) if c.key in sortable]
        if not self.settings.multi_sort:
            criteria = criteria[:1]
        self._sort = criteria
        self._filters = clean_filters(filters)
        self._selected = dedupe_keys(list(selected))
        if page_size is not None:
            self.set_page_size(page_size)
        self._page = clamp_page(page, self.total_pages())

    def snapshot(self) -> Dict[str, Any]:
        return {
            "sort": [{"key": c.key, "direction": c.direction.value} for c in self._sort],
            "filters": dict(self._filters),
            "selected": list(self._selected),
            "page": self._page,
            "page_size": self._page_size,
        }

    @property
    def sort_criteria(self) -> List[SortCriterion]:
        return list(self._sort)

    @property
    def filters(self) -> Dict[str, str]:
        return dict(self._filters)

    @property
    def selected_keys(self) -> List[Any]:
        return list(self._selected)

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def config_error(self) -> Optional[ConfigError]:
        return validate_config(self._rows, self.columns, self.key_field)

    # ---------- pipeline ----------
    def filtered_rows(self) -> List[Row]:
        """Rows surviving the active filters, in sorted order."""
        if self.config_error:
            return []
        return sort_rows(apply_filters(self._rows, self._filters), self._sort)

    def total_pages(self, filtered_count: Optional[int] = None) -> int:
        if not self.settings.paginate:
            return 1
        if filtered_count is None:
            filtered_count = len(self.filtered_rows())
        return total_pages(filtered_count, self._page_size)

    def _clamp(self) -> None:
        self._page = clamp_page(self._page, self.total_pages())

    def view(self) -> TableView:
        error = self.config_error
        processed = self.filtered_rows()
        count = len(processed)
        pages = self.total_pages(count)
        page = clamp_page(self._page, pages)
        if self.settings.paginate:
            visible = paginate(processed, page, self._page_size)
            start, end = page_range(page, self._page_size, count)
        else:
            visible = processed
            start, end = (1, count) if count else (0, 0)
        keys = [field_value(row, self.key_field) for row in processed]
        return TableView(
            visible_rows=visible,
            current_page=page,
            total_pages=pages,
            page_size=self._page_size,
            filtered_count=count,
            total_count=len(self._rows),
            start_item=start,
            end_item=end,
            page_window=page_window(page, pages, self.settings.max_visible_pages),
            page_summary=page_summary(page, pages, count),
            sort=list(self._sort),
            sort_announcement=self._sort_announcement,
            filter_announcement=filter_announcement(self._filters, count, len(self._rows)) if not error else "",
            selected_keys=list(self._selected),
            all_selected=all_selected(self._selected, keys),
            selection_summary=selection_summary(len(self._selected)),
            empty_message=error.message if error else self.settings.empty_message,
            config_error=error,
            header_sort={c.key: sort_direction_for(self._sort, c.key) for c in self.columns if c.sortable},
        )

    # ---------- data ----------
    def set_rows(self, rows: Iterable[Optional[Row]]) -> None:
        self._rows = list(rows) if rows is not None else []
        error = self.config_error
        if error:
            logger.error("table config invalid (%s): key_field=%r columns=%d rows=%d",
                         error.value, self.key_field, len(self.columns), len(self._rows))
        self._clamp()

    # ---------- sorting ----------
    def toggle_sort(self, column_key: str) -> str:
        """Apply a header click; returns the announcement ("" for a no-op)."""
        column = find_column(self.columns, column_key)
        if column is None or not column.sortable:
            return ""
        self._sort = toggle_sort(self._sort, column, self.settings.multi_sort)
        self._sort_announcement = sort_announcement(column.display_label, sort_direction_for(self._sort, column.key))
        logger.debug("sort toggled on %s -> %s", column.key, self._sort)
        self._clamp()
        return self._sort_announcement

    # ---------- filtering ----------
    def set_filter(self, column_key: str, value: Optional[str]) -> None:
        self._filters = clean_filters({**self._filters, column_key: value or ""})
        self._page = 1
        logger.debug("filter %s=%r active=%s", column_key, value, self._filters)

    def clear_filters(self) -> None:
        self._filters = {}
        self._page = 1

    # ---------- pagination ----------
    def go_to_page(self, page: int) -> int:
        self._page = clamp_page(page, self.total_pages())
        return self._page

    def next_page(self) -> int:
        return self.go_to_page(self._page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self._page - 1)

    def first_page(self) -> int:
        return self.go_to_page(1)

    def last_page(self) -> int:
        return self.go_to_page(self.total_pages())

    def set_page_size(self, page_size: int) -> None:
        if int(page_size) <= 0:
            raise ValueError("page_size must be greater than 0")
        self._page_size = int(page_size)
        self._clamp()

    # ---------- selection ----------
    def _emit_selection(self) -> None:
        if self.on_selection_change is not None:
            self.on_selection_change(list(self._selected))

    def toggle_row(self, key: Any) -> List[Any]:
        self._selected = toggle_key(self._selected, key)
        self._emit_selection()
        return self.selected_keys

    def toggle_select_all(self) -> List[Any]:
        keys = [field_value(row, self.key_field) for row in self.filtered_rows()]
        self._selected = toggle_select_all(self._selected, keys)
        self._emit_selection()
        return self.selected_keys

    def clear_selection(self) -> None:
        self._selected = []
        self._emit_selection()

    def selected_rows(self) -> List[Row]:
        return resolve_selected_rows(self._selected, self.filtered_rows(), self.key_field)

    def run_bulk_action(self, action_key: str) -> bool:
        action = next((a for a in self.bulk_actions if a.key == action_key), None)
        if action is None:
            logger.debug("unknown bulk action %r", action_key)
            return False
        action.action(action_key, self.selected_rows())
        return True
