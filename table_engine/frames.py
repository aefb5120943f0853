from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from table_engine.models import Column, Row, is_missing


def _plain(value: Any) -> Any:
    if is_missing(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def rows_from_frame(df: Optional[pd.DataFrame]) -> List[Dict[str, Any]]:
    """DataFrame -> row dicts with missing cells as None and numpy scalars unwrapped."""
    if df is None or df.empty:
        return []
    records = df.to_dict(orient="records")
    return [{str(k): _plain(v) for k, v in rec.items()} for rec in records]


def columns_from_frame(df: pd.DataFrame, *, sortable: bool = True, filterable: bool = True) -> List[Column]:
    return [
        Column(key=str(col), label=str(col).replace("_", " ").title(), sortable=sortable, filterable=filterable)
        for col in df.columns
    ]


def frame_from_rows(rows: Iterable[Row], columns: Optional[Sequence[Column]] = None) -> pd.DataFrame:
    """Rows -> DataFrame for display, restricted to `columns` (in column order) when given."""
    df = pd.DataFrame([dict(r) for r in rows])
    if not columns:
        return df
    keys = [c.key for c in columns]
    df = df.reindex(columns=keys)
    return df.rename(columns={c.key: c.display_label for c in columns})
