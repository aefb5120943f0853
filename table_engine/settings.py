from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 500
DEFAULT_PAGE_SIZE_OPTIONS: Tuple[int, ...] = (10, 25, 50, 100)


@dataclass(frozen=True)
class TableSettings:
    page_size: int = DEFAULT_PAGE_SIZE
    page_size_options: Tuple[int, ...] = field(default=DEFAULT_PAGE_SIZE_OPTIONS)
    max_visible_pages: int = 5
    multi_sort: bool = False
    paginate: bool = True
    empty_message: str = "No data available"

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be greater than 0")
        if self.max_visible_pages <= 0:
            raise ValueError("max_visible_pages must be greater than 0")


def _as_int(value: object, default: int, *, lo: int, hi: int) -> int:
    try:
        out = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return max(lo, min(hi, out))


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_size_options(values: Optional[Iterable[object]]) -> Tuple[int, ...]:
    if not values:
        return DEFAULT_PAGE_SIZE_OPTIONS
    out = []
    for v in values:
        try:
            size = int(v)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
        if 0 < size <= MAX_PAGE_SIZE and size not in out:
            out.append(size)
    return tuple(sorted(out)) or DEFAULT_PAGE_SIZE_OPTIONS


def normalize_settings(raw: Optional[dict]) -> TableSettings:
    """Coerce a loosely-typed settings payload into `TableSettings`.

    Unparseable values fall back to defaults; sizes are clamped rather than rejected.
    """
    raw = raw or {}
    page_size = _as_int(raw.get("page_size"), DEFAULT_PAGE_SIZE, lo=1, hi=MAX_PAGE_SIZE)
    max_visible_pages = _as_int(raw.get("max_visible_pages"), 5, lo=1, hi=50)
    empty_message = str(raw.get("empty_message") or "").strip() or "No data available"
    return TableSettings(
        page_size=page_size,
        page_size_options=_as_size_options(raw.get("page_size_options")),
        max_visible_pages=max_visible_pages,
        multi_sort=_as_bool(raw.get("multi_sort"), False),
        paginate=_as_bool(raw.get("paginate"), True),
        empty_message=empty_message,
    )
