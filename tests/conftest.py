import pytest

from table_engine.models import Column


@pytest.fixture
def user_columns():
    return [
        Column("id", "ID", sortable=True),
        Column("name", "Name", sortable=True, filterable=True),
        Column("status", "Status", sortable=True, filterable=True),
        Column("age", "Age", sortable=True),
        Column("notes", "Notes"),
    ]


@pytest.fixture
def users():
    return [
        {"id": 1, "name": "John Doe", "status": "active", "age": 34},
        {"id": 2, "name": "Jane Doe", "status": "inactive", "age": 28},
        {"id": 3, "name": "John Smith", "status": "inactive", "age": None},
        {"id": 4, "name": "alice Johnson", "status": "active", "age": 28},
        {"id": 5, "name": "Bob", "status": None, "age": 51},
    ]


@pytest.fixture
def many_rows():
    return [{"id": i, "name": f"item {i:02d}"} for i in range(1, 26)]
