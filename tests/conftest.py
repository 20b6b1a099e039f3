"""Shared test fixtures for tablegen."""

import pytest

from tablegen.models.table import TableField, TableInfo


@pytest.fixture
def user_table():
    """A small two-column table with a primary key."""
    return TableInfo(
        name="t_user",
        comment="Users",
        entity_name="User",
        fields=(
            TableField(name="id", column_type="bigint", key_flag=True),
            TableField(name="user_name", column_type="varchar(64)", comment="Login name"),
        ),
    )
