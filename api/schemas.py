from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ColumnModel(BaseModel):
    key: str
    label: str = ""
    sortable: bool = False
    filterable: bool = False


class SortCriterionModel(BaseModel):
    key: str
    direction: Literal["asc", "desc"] = "asc"


class TableSettingsModel(BaseModel):
    page_size: int = 10
    page_size_options: List[int] = Field(default_factory=lambda: [10, 25, 50, 100])
    max_visible_pages: int = 5
    multi_sort: bool = False
    paginate: bool = True
    empty_message: str = "No data available"


class TableStateModel(BaseModel):
    sort: List[SortCriterionModel] = Field(default_factory=list)
    filters: Dict[str, str] = Field(default_factory=dict)
    selected: List[Any] = Field(default_factory=list)
    page: int = 1
    page_size: Optional[int] = Field(default=None, gt=0)


class TableRequest(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    columns: List[ColumnModel] = Field(default_factory=list)
    key_field: str = "id"
    state: TableStateModel = Field(default_factory=TableStateModel)
    settings: TableSettingsModel = Field(default_factory=TableSettingsModel)


class SortToggleRequest(TableRequest):
    column: str


class PageWindowRequest(BaseModel):
    current_page: int = 1
    total_items: int = 0
    max_visible_pages: int = Field(default=5, gt=0)
    page_size: int = Field(default=10, gt=0)


class PageWindowResponse(BaseModel):
    current_page: int
    total_pages: int
    start_item: int
    end_item: int
    pages: List[Optional[int]]
