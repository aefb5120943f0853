import datetime as dt
from decimal import Decimal

import pandas as pd

from table_engine.models import Column, SortCriterion, SortDirection
from table_engine.sorting import compare_values, sort_direction_for, sort_rows, toggle_sort

ASC = SortDirection.ASCENDING
DESC = SortDirection.DESCENDING


def test_empty_criteria_keeps_input_order(users) -> None:
    assert sort_rows(users, []) == users


def test_multi_sort_tie_break() -> None:
    rows = [{"a": 1, "b": 2}, {"a": 1, "b": 1}]

    out = sort_rows(rows, [SortCriterion("a", ASC), SortCriterion("b", ASC)])

    assert out == [{"a": 1, "b": 1}, {"a": 1, "b": 2}]


def test_nulls_sort_last_in_both_directions() -> None:
    rows = [{"a": None}, {"a": 1}, {"a": 2}]

    assert sort_rows(rows, [SortCriterion("a", ASC)]) == [{"a": 1}, {"a": 2}, {"a": None}]
    assert sort_rows(rows, [SortCriterion("a", DESC)]) == [{"a": 2}, {"a": 1}, {"a": None}]


def test_missing_field_and_nan_behave_as_null() -> None:
    rows = [{"id": 1}, {"id": 2, "a": float("nan")}, {"id": 3, "a": 5}, {"id": 4, "a": pd.NA}]

    out = sort_rows(rows, [SortCriterion("a", DESC)])

    assert [r["id"] for r in out] == [3, 1, 2, 4]


def test_both_null_falls_through_to_next_criterion() -> None:
    rows = [{"a": None, "b": 2}, {"a": None, "b": 1}, {"a": 0, "b": 9}]

    out = sort_rows(rows, [SortCriterion("a", ASC), SortCriterion("b", ASC)])

    assert out == [{"a": 0, "b": 9}, {"a": None, "b": 1}, {"a": None, "b": 2}]


def test_sort_is_stable_for_equal_rows(users) -> None:
    out = sort_rows(users, [SortCriterion("age", ASC)])

    # ids 2 and 4 share age 28 and keep their input order
    assert [r["id"] for r in out] == [2, 4, 1, 5, 3]


def test_descending_keeps_ties_in_input_order(users) -> None:
    out = sort_rows(users, [SortCriterion("age", DESC)])

    assert [r["id"] for r in out] == [5, 1, 2, 4, 3]


def test_strings_compare_case_insensitively_first() -> None:
    rows = [{"n": "carol"}, {"n": "Bob"}, {"n": "alice"}]

    out = sort_rows(rows, [SortCriterion("n", ASC)])

    assert [r["n"] for r in out] == ["alice", "Bob", "carol"]


def test_compare_values_by_kind() -> None:
    assert compare_values(1, 2.5) == -1
    assert compare_values(Decimal("3"), 2) == 1
    assert compare_values(dt.date(2024, 1, 2), dt.datetime(2024, 1, 1, 12)) == 1
    assert compare_values(pd.Timestamp("2024-01-01"), dt.date(2024, 1, 1)) == 0
    assert compare_values("a", "a") == 0


def test_mixed_kinds_never_raise() -> None:
    rows = [{"v": "x"}, {"v": 3}, {"v": dt.date(2024, 1, 1)}, {"v": 1}]

    out = sort_rows(rows, [SortCriterion("v", ASC)])

    assert [r["v"] for r in out] == [1, 3, dt.date(2024, 1, 1), "x"]


def test_sort_does_not_mutate_input() -> None:
    rows = [{"a": 2}, {"a": 1}]
    sort_rows(rows, [SortCriterion("a", ASC)])
    assert rows == [{"a": 2}, {"a": 1}]


def test_single_sort_cycle() -> None:
    name = Column("name", "Name", sortable=True)
    age = Column("age", "Age", sortable=True)

    step1 = toggle_sort([], name)
    step2 = toggle_sort(step1, name)
    step3 = toggle_sort(step2, name)

    assert step1 == [SortCriterion("name", ASC)]
    assert step2 == [SortCriterion("name", DESC)]
    assert step3 == []
    assert toggle_sort(step2, age) == [SortCriterion("age", ASC)]


def test_multi_sort_cycle_preserves_other_criteria() -> None:
    a = Column("a", sortable=True)
    b = Column("b", sortable=True)
    c = Column("c", sortable=True)

    criteria = toggle_sort([], a, multi_sort=True)
    criteria = toggle_sort(criteria, b, multi_sort=True)
    criteria = toggle_sort(criteria, c, multi_sort=True)
    assert [x.key for x in criteria] == ["a", "b", "c"]

    criteria = toggle_sort(criteria, b, multi_sort=True)
    assert criteria[1] == SortCriterion("b", DESC)

    criteria = toggle_sort(criteria, b, multi_sort=True)
    assert criteria == [SortCriterion("a", ASC), SortCriterion("c", ASC)]


def test_unsortable_column_is_noop() -> None:
    criteria = [SortCriterion("a", ASC)]

    assert toggle_sort(criteria, Column("notes"), multi_sort=False) == criteria
    assert toggle_sort(criteria, None) == criteria


def test_sort_direction_for() -> None:
    criteria = [SortCriterion("a", ASC), SortCriterion("b", DESC)]

    assert sort_direction_for(criteria, "a") == "asc"
    assert sort_direction_for(criteria, "b") == "desc"
    assert sort_direction_for(criteria, "c") == "none"


def test_complex_values_fall_back_to_text_order() -> None:
    assert compare_values(complex(2, 1), complex(1, 5)) == 1
    rows = [{"v": complex(3, 0)}, {"v": 2}, {"v": complex(1, 0)}]

    out = sort_rows(rows, [SortCriterion("v", ASC)])

    assert [r["v"] for r in out] == [2, complex(1, 0), complex(3, 0)]
