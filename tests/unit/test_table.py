"""Unit tests for Table implementation."""

import pytest

from minitable.components.index import ColumnIndex
from minitable.core.errors import ColumnNotFoundError, IndexMismatchError, StaleIndexError
from minitable.core.table import Column, Table


@pytest.fixture
def users():
    """Two-row users table."""
    return Table(
        "users",
        [Column("id", "int"), Column("name", "string")],
        [["1", "Alice"], ["2", "Bob"]],
    )


@pytest.fixture
def empty_users():
    """Users table without rows."""
    return Table("users", [Column("id", "int"), Column("name", "string")])


def test_insert(empty_users):
    """Test that insert appends and returns the row position."""
    pos = empty_users.insert(["1", "Alice"])

    assert pos == 0
    assert len(empty_users) == 1
    assert empty_users.rows[0] == ["1", "Alice"]
    assert empty_users.insert(["2", "Bob"]) == 1


def test_insert_does_not_validate_fields(empty_users):
    """Test that rows are stored without field-count checks."""
    empty_users.insert(["only-one"])
    empty_users.insert(["a", "b", "c"])

    assert empty_users.rows == [["only-one"], ["a", "b", "c"]]


def test_select(users):
    """Test linear equality scan."""
    assert users.select("name", "Alice") == [["1", "Alice"]]
    assert users.select("id", "2") == [["2", "Bob"]]


def test_select_returns_references(users):
    """Test that select returns the stored row objects."""
    result = users.select("name", "Bob")

    assert result[0] is users.rows[1]


def test_select_preserves_row_order(users):
    """Test that multiple matches come back in row order."""
    users.insert(["3", "Alice"])
    users.insert(["4", "Carol"])
    users.insert(["5", "Alice"])

    assert users.select("name", "Alice") == [["1", "Alice"], ["3", "Alice"], ["5", "Alice"]]


def test_select_is_exact_match(users):
    """Test that comparison is exact string equality."""
    assert users.select("name", "alice") == []
    assert users.select("name", "Alice ") == []


def test_select_missing_value_returns_empty(users):
    """Test that absent values yield an empty result."""
    assert users.select("name", "Nobody") == []


def test_select_unknown_column(users):
    """Test that an unknown column is a lookup error."""
    with pytest.raises(ColumnNotFoundError, match="Column 'email' not found"):
        users.select("email", "x")

    # Also catchable as the builtin lookup error
    with pytest.raises(LookupError):
        users.select("email", "x")


def test_column_position(users):
    """Test column name resolution."""
    assert users.column_position("id") == 0
    assert users.column_position("name") == 1

    with pytest.raises(ColumnNotFoundError) as exc_info:
        users.column_position("Name")
    assert exc_info.value.available == ["id", "name"]


def test_create_index(users):
    """Test index construction from the current rows."""
    index = users.create_index("name")

    assert index.column_name == "name"
    assert dict(index.index) == {"Alice": [0], "Bob": [1]}
    assert index.row_count == 2


def test_create_index_groups_duplicates(users):
    """Test that repeated values collect all positions in ascending order."""
    users.insert(["3", "Alice"])
    users.insert(["4", "Bob"])
    users.insert(["5", "Alice"])

    index = users.create_index("name")

    assert index.lookup("Alice") == [0, 2, 4]
    assert index.lookup("Bob") == [1, 3]


def test_create_index_empty_table(empty_users):
    """Test that an empty table gives an empty index."""
    index = empty_users.create_index("name")

    assert len(index) == 0
    assert index.row_count == 0


def test_create_index_unknown_column(users):
    """Test that indexing an unknown column fails."""
    with pytest.raises(ColumnNotFoundError):
        users.create_index("email")


def test_create_index_is_a_snapshot(users):
    """Test that later inserts do not change an existing index."""
    index = users.create_index("name")
    users.insert(["3", "Carol"])

    assert "Carol" not in index
    assert len(index) == 2


def test_select_with_index(users):
    """Test lookup through an index."""
    index = users.create_index("name")

    result = users.select_with_index(index, "Alice")

    assert result == [["1", "Alice"]]
    assert result[0] is users.rows[0]


def test_select_with_index_missing_value(users):
    """Test that an absent value yields an empty result."""
    index = users.create_index("name")

    assert users.select_with_index(index, "Nobody") == []


def test_select_with_index_does_not_check_column_by_default(users):
    """Test that an index for another column is used as given."""
    id_index = users.create_index("id")

    # "1" is an id value, the index resolves it to row 0
    assert users.select_with_index(id_index, "1") == [["1", "Alice"]]
    assert users.select_with_index(id_index, "Alice") == []


def test_select_with_index_column_check(users):
    """Test the optional column consistency check."""
    id_index = users.create_index("id")

    with pytest.raises(IndexMismatchError):
        users.select_with_index(id_index, "Alice", column_name="name")

    assert users.select_with_index(id_index, "2", column_name="id") == [["2", "Bob"]]


def test_select_with_index_stale_row_count(users):
    """Test that an index built over fewer rows is rejected."""
    index = users.create_index("name")
    users.insert(["3", "Alice"])

    with pytest.raises(StaleIndexError, match="built over 2 rows"):
        users.select_with_index(index, "Alice")


def test_select_with_index_position_out_of_range(users):
    """Test that positions past the end of the table are rejected."""
    index = ColumnIndex("name")
    index.add_entry("Ghost", 7)

    with pytest.raises(StaleIndexError, match="outside"):
        users.select_with_index(index, "Ghost")


def test_select_with_index_negative_position(users):
    """Test that a negative position is rejected rather than wrapping to the last row."""
    index = ColumnIndex("name")
    index.add_entry("Ghost", -1)

    with pytest.raises(StaleIndexError, match="row -1 outside"):
        users.select_with_index(index, "Ghost")


def test_select_with_index_without_row_count(users):
    """Test that a hand-built index without a row count is trusted."""
    index = ColumnIndex("name")
    index.add_entry("Bob", 1)

    assert users.select_with_index(index, "Bob") == [["2", "Bob"]]


@pytest.mark.parametrize("column", ["id", "name"])
@pytest.mark.parametrize("value", ["1", "2", "Alice", "Bob", "Carol", ""])
def test_index_lookup_matches_scan(column, value):
    """Test that index lookup and scan agree, including order."""
    table = Table("t", [Column("id", "int"), Column("name", "string")])
    for row in [["1", "Alice"], ["2", "Bob"], ["1", "Bob"], ["3", ""], ["2", "Alice"]]:
        table.insert(row)

    index = table.create_index(column)

    assert table.select_with_index(index, value) == table.select(column, value)


def test_create_index_keys_are_distinct_values():
    """Test that index keys are exactly the distinct column values."""
    table = Table("t", [Column("k", "string")])
    values = ["b", "a", "c", "a", "b", "b"]
    for v in values:
        table.insert([v])

    index = table.create_index("k")

    assert list(index.keys()) == sorted(set(values))
    for v in set(values):
        assert index.lookup(v) == [i for i, x in enumerate(values) if x == v]
