from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def total_pages(count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be greater than 0")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(int(page), max(1, pages)))


def paginate(rows: Sequence[T], page: int, page_size: int) -> List[T]:
    start = (page - 1) * page_size
    return list(rows[start : start + page_size])


def page_range(page: int, page_size: int, count: int) -> Tuple[int, int]:
    """1-based (first, last) item numbers shown on `page`; (0, 0) when empty."""
    if count <= 0:
        return 0, 0
    start = (page - 1) * page_size + 1
    return min(start, count), min(page * page_size, count)


def page_window(current: int, pages: int, max_visible: int = 5) -> List[Optional[int]]:
    """Page numbers for a pager control, `None` marking an ellipsis.

    The first and last page are always present once the window has to scroll.
    """
    if pages <= max_visible:
        return list(range(1, pages + 1))

    start = max(1, current - max_visible // 2)
    end = min(pages, start + max_visible - 1)
    if end == pages:
        start = max(1, end - max_visible + 1)

    out: List[Optional[int]] = []
    if start > 1:
        out.append(1)
        if start > 2:
            out.append(None)
    out.extend(range(start, end + 1))
    if end < pages:
        if end < pages - 1:
            out.append(None)
        out.append(pages)
    return out
