from __future__ import annotations

from dataclasses import asdict
import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from api.schemas import PageWindowRequest, PageWindowResponse, SortToggleRequest, TableRequest
from table_engine.engine import TableEngine, TableView
from table_engine.pagination import clamp_page, page_range, page_window, total_pages
from table_engine.settings import normalize_settings


app = FastAPI(title="Admin Table API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _engine_from_request(req: TableRequest) -> TableEngine:
    settings = normalize_settings(req.settings.model_dump())
    engine = TableEngine(
        req.rows,
        [c.model_dump() for c in req.columns],
        req.key_field,
        settings=settings,
    )
    state = req.state
    engine.restore(
        sort=[s.model_dump() for s in state.sort],
        filters=state.filters,
        selected=state.selected,
        page=state.page,
        page_size=state.page_size,
    )
    return engine


def _view_payload(engine: TableEngine, view: TableView) -> dict:
    return {
        "rows": view.visible_rows,
        "pagination": {
            "current_page": view.current_page,
            "total_pages": view.total_pages,
            "page_size": view.page_size,
            "filtered_count": view.filtered_count,
            "total_count": view.total_count,
            "start_item": view.start_item,
            "end_item": view.end_item,
            "pages": view.page_window,
            "summary": view.page_summary,
        },
        "sort": [asdict(c) for c in view.sort],
        "header_sort": view.header_sort,
        "announcements": {
            "sort": view.sort_announcement,
            "filter": view.filter_announcement,
            "selection": view.selection_summary,
        },
        "selected": view.selected_keys,
        "all_selected": view.all_selected,
        "empty": view.empty,
        "empty_message": view.empty_message,
        "config_error": view.config_error.value if view.config_error else None,
        "state": engine.snapshot(),
    }


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/table/view")
def table_view(req: TableRequest):
    try:
        engine = _engine_from_request(req)
        return _json(_view_payload(engine, engine.view()))
    except Exception as exc:
        logger.exception("table_view failed")
        return _error(exc)


@app.post("/table/sort")
def table_sort(req: SortToggleRequest):
    try:
        engine = _engine_from_request(req)
        engine.toggle_sort(req.column)
        payload = _view_payload(engine, engine.view())
        return _json(payload)
    except Exception as exc:
        logger.exception("table_sort failed")
        return _error(exc)


@app.post("/table/select-all")
def table_select_all(req: TableRequest):
    try:
        engine = _engine_from_request(req)
        engine.toggle_select_all()
        return _json(_view_payload(engine, engine.view()))
    except Exception as exc:
        logger.exception("table_select_all failed")
        return _error(exc)


@app.post("/table/pages", response_model=PageWindowResponse)
def table_pages(req: PageWindowRequest):
    try:
        pages = total_pages(max(0, req.total_items), req.page_size)
        current = clamp_page(req.current_page, pages)
        start, end = page_range(current, req.page_size, req.total_items)
        return PageWindowResponse(
            current_page=current,
            total_pages=pages,
            start_item=start,
            end_item=end,
            pages=page_window(current, pages, req.max_visible_pages),
        )
    except Exception as exc:
        logger.exception("table_pages failed")
        return _error(exc)
