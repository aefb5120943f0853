from typing import List, Optional

import numpy as np
import pandas as pd
import streamlit as st

from table_engine import Column, TableEngine, TableSettings, normalize_settings
from table_engine.frames import frame_from_rows, rows_from_frame

USER_COLUMNS = [
    Column("id", "ID", sortable=True),
    Column("name", "Name", sortable=True, filterable=True),
    Column("email", "Email", sortable=True, filterable=True),
    Column("role", "Role", sortable=True, filterable=True),
    Column("status", "Status", sortable=True, filterable=True),
    Column("last_login", "Last Login", sortable=True),
]

DEFAULT_SETTINGS = TableSettings()
SORT_ICONS = {"asc": "▲", "desc": "▼", "none": "↕"}


# ---------- data ----------
@st.cache_data
def load_users(n: int = 137, seed: int = 7) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    first = ["John", "Jane", "Alex", "Maria", "Chen", "Priya", "Omar", "Lena"]
    last = ["Doe", "Smith", "Garcia", "Nguyen", "Kumar", "Rossi"]
    names = [f"{rng.choice(first)} {rng.choice(last)}" for _ in range(n)]
    df = pd.DataFrame(
        {
            "id": np.arange(1, n + 1),
            "name": names,
            "email": [f"{name.lower().replace(' ', '.')}{i}@example.com" for i, name in enumerate(names, 1)],
            "role": rng.choice(["admin", "moderator", "user"], size=n, p=[0.1, 0.2, 0.7]),
            "status": rng.choice(["active", "inactive", "banned"], size=n, p=[0.7, 0.25, 0.05]),
            "last_login": pd.Timestamp("2024-01-01") + pd.to_timedelta(rng.integers(0, 365, size=n), unit="D"),
        }
    )
    # some users never logged in
    df.loc[rng.choice(n, size=n // 10, replace=False), "last_login"] = pd.NaT
    return df


def get_engine(multi_sort: bool, page_size: int) -> TableEngine:
    cached: Optional[TableEngine] = st.session_state.get("users_table")
    if cached is not None and cached.settings.multi_sort == multi_sort:
        return cached
    settings = normalize_settings({"page_size": page_size, "multi_sort": multi_sort})
    engine = TableEngine(
        rows_from_frame(load_users()),
        USER_COLUMNS,
        "id",
        settings=settings,
        on_selection_change=lambda keys: st.session_state.__setitem__("selected_users", keys),
    )
    st.session_state["users_table"] = engine
    return engine


# ---------- UI setup ----------
st.set_page_config(page_title="Admin · Users", layout="wide")
st.title("Users")
st.caption("Filter, sort and select users. State is kept per browser session.")

with st.sidebar:
    st.markdown("### Table")
    multi_sort = st.checkbox("Multi-column sort", value=False)
    page_size_choice = st.selectbox("Rows per page", options=list(DEFAULT_SETTINGS.page_size_options), index=0)

engine = get_engine(multi_sort, page_size_choice)
if engine.page_size != page_size_choice:
    engine.set_page_size(page_size_choice)

with st.sidebar:
    st.markdown("---")
    st.markdown("### Filters")
    for column in [c for c in engine.columns if c.filterable]:
        current = engine.filters.get(column.key, "")
        value = st.text_input(f"Filter by {column.display_label.lower()}", value=current, key=f"filter_{column.key}")
        if value != current:
            engine.set_filter(column.key, value)
    if engine.filters and st.button("Clear filters"):
        engine.clear_filters()
        for column in engine.columns:
            st.session_state.pop(f"filter_{column.key}", None)
        st.rerun()

view = engine.view()
if view.config_error:
    st.error(view.config_message)
    st.stop()

# ----- sort headers -----
header_cols = st.columns(len([c for c in engine.columns if c.sortable]))
for slot, column in zip(header_cols, [c for c in engine.columns if c.sortable]):
    direction = view.header_sort.get(column.key, "none")
    if slot.button(f"{column.display_label} {SORT_ICONS[direction]}", key=f"sort_{column.key}", use_container_width=True):
        engine.toggle_sort(column.key)
        st.rerun()

# ----- toolbar -----
tool_cols = st.columns([2, 6])
select_label = "Clear selection" if view.all_selected else "Select all (filtered)"
if tool_cols[0].button(select_label, disabled=view.filtered_count == 0):
    engine.toggle_select_all()
    st.rerun()
if view.selection_summary:
    tool_cols[1].info(view.selection_summary)

# ----- rows -----
if view.empty:
    st.info(view.empty_message)
else:
    selected = set(view.selected_keys)
    display = frame_from_rows(view.visible_rows, engine.columns)
    display.insert(0, "Selected", [row["id"] in selected for row in view.visible_rows])
    edited = st.data_editor(
        display,
        hide_index=True,
        use_container_width=True,
        disabled=[c.display_label for c in engine.columns],
        key=f"grid_{view.current_page}_{len(selected)}",
    )
    changed: List[int] = [
        row["id"]
        for row, was, now in zip(view.visible_rows, display["Selected"], edited["Selected"])
        if bool(was) != bool(now)
    ]
    for key in changed:
        engine.toggle_row(key)
    if changed:
        st.rerun()

# ----- pagination -----
nav = st.columns([1, 1, 4, 1, 1])
if nav[0].button("« First", disabled=view.current_page == 1):
    engine.first_page()
    st.rerun()
if nav[1].button("‹ Prev", disabled=view.current_page == 1):
    engine.previous_page()
    st.rerun()
pages_label = " ".join("…" if p is None else (f"[{p}]" if p == view.current_page else str(p)) for p in view.page_window)
nav[2].markdown(f"{view.page_summary} &nbsp; {pages_label}")
if nav[3].button("Next ›", disabled=view.current_page == view.total_pages):
    engine.next_page()
    st.rerun()
if nav[4].button("Last »", disabled=view.current_page == view.total_pages):
    engine.last_page()
    st.rerun()

for text in (view.sort_announcement, view.filter_announcement):
    if text:
        st.caption(text)
