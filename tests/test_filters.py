from table_engine.filters import apply_filters, cell_text, clean_filters, row_matches


def test_clean_filters_drops_empty_entries() -> None:
    assert clean_filters({"name": "jo", "status": "", "age": None}) == {"name": "jo"}
    assert clean_filters(None) == {}


def test_filter_is_case_insensitive_substring(users) -> None:
    out = apply_filters(users, {"name": "JOHN"})

    assert [r["id"] for r in out] == [1, 3, 4]


def test_filters_combine_with_and(users) -> None:
    names = apply_filters(users, {"name": "john"})
    both = apply_filters(users, {"name": "john", "status": "active"})

    assert [r["id"] for r in names] == [1, 3, 4]
    # "inactive" contains "active" as a substring
    assert [r["id"] for r in both] == [1, 3, 4]
    assert [r["id"] for r in apply_filters(users, {"name": "john", "status": "inactive"})] == [3]


def test_missing_or_null_field_fails_active_filter(users) -> None:
    rows = users + [{"id": 6, "name": "No Status"}]

    out = apply_filters(rows, {"status": "a"})

    assert 5 not in [r["id"] for r in out]
    assert 6 not in [r["id"] for r in out]


def test_empty_filter_preserves_input_order(users) -> None:
    assert apply_filters(users, {"name": ""}) == users
    assert apply_filters(users, {}) == users


def test_filter_does_not_mutate_input(users) -> None:
    before = [dict(r) for r in users]
    apply_filters(users, {"name": "doe"})
    assert users == before


def test_none_rows_are_skipped() -> None:
    assert apply_filters([None, {"id": 1}], {}) == [{"id": 1}]
    assert row_matches(None, {}) is False


def test_cell_text_renders_numbers_and_booleans() -> None:
    assert cell_text(3.0) == "3"
    assert cell_text(2.5) == "2.5"
    assert cell_text(True) == "true"
    assert cell_text(None) is None
    assert cell_text("MiXeD") == "mixed"


def test_numeric_cells_match_on_text(users) -> None:
    assert [r["id"] for r in apply_filters(users, {"age": "28"})] == [2, 4]
