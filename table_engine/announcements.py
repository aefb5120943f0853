"""Status text for assistive technology (rendered in polite live regions)."""

from __future__ import annotations

from typing import Mapping

from table_engine.filters import clean_filters
from table_engine.models import SortDirection


def sort_announcement(label: str, direction: str) -> str:
    try:
        word = SortDirection(direction).label
    except ValueError:
        word = "none"
    return f"Sorted by {label} {word}"


def filter_announcement(filters: Mapping[str, str], filtered_count: int, total_count: int) -> str:
    if not clean_filters(filters):
        return ""
    return f"Showing {filtered_count} of {total_count} results"


def selection_summary(count: int) -> str:
    if count <= 0:
        return ""
    return f"{count} row{'' if count == 1 else 's'} selected"


def page_summary(page: int, pages: int, filtered_count: int) -> str:
    return f"Page {page} of {pages} ({filtered_count} total results)"
