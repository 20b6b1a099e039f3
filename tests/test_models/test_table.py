"""Tests for table metadata models."""

import pytest

from tablegen.models.table import (
    TableField,
    TableInfo,
    build_table,
    camel_case,
    pascal_case,
    property_type_for,
)


class TestNaming:
    def test_camel_case(self):
        assert camel_case("user_name") == "userName"
        assert camel_case("ID") == "id"
        assert camel_case("") == ""

    def test_pascal_case(self):
        assert pascal_case("user_role") == "UserRole"
        assert pascal_case("order-item") == "OrderItem"


class TestPropertyType:
    @pytest.mark.parametrize("column_type,expected", [
        ("bigint", "int"),
        ("INT(11)", "int"),
        ("varchar(64)", "str"),
        ("decimal(10,2)", "Decimal"),
        ("double", "float"),
        ("datetime", "datetime"),
        ("timestamp", "datetime"),
        ("date", "date"),
        ("boolean", "bool"),
        ("text", "str"),
        ("", "str"),
    ])
    def test_mapping(self, column_type, expected):
        assert property_type_for(column_type) == expected


class TestTableField:
    def test_derived_names(self):
        f = TableField(name="created_at", column_type="datetime")
        assert f.property_name == "createdAt"
        assert f.property_type == "datetime"

    def test_explicit_names_kept(self):
        f = TableField(name="uid", column_type="bigint", property_name="userId", property_type="str")
        assert f.property_name == "userId"
        assert f.property_type == "str"

    def test_frozen(self):
        f = TableField(name="id")
        with pytest.raises(AttributeError):
            f.name = "other"


class TestTableInfo:
    def test_entity_name_derived(self):
        assert TableInfo(name="order_item").entity_name == "OrderItem"

    def test_key_field(self, user_table):
        assert user_table.key_field.name == "id"

    def test_no_key_field(self):
        table = TableInfo(name="log", fields=(TableField(name="msg"),))
        assert table.key_field is None

    def test_name_lists(self, user_table):
        assert user_table.column_names == ["id", "user_name"]
        assert user_table.field_names == ["id", "userName"]


class TestBuildTable:
    def test_from_config_section(self):
        table = build_table({
            "name": "t_user",
            "comment": "Users",
            "fields": [
                {"name": "id", "type": "bigint", "key": True},
                {"name": "user_name", "type": "varchar(64)", "comment": "Login"},
            ],
        })
        assert table.name == "t_user"
        assert table.entity_name == "TUser"
        assert table.comment == "Users"
        assert table.fields[0].key_flag
        assert table.fields[1].property_name == "userName"
        assert table.fields[1].comment == "Login"

    def test_prefix_stripped_from_entity(self):
        table = build_table({"name": "t_user"}, ["sys_", "t_"])
        assert table.name == "t_user"
        assert table.entity_name == "User"

    def test_explicit_entity_wins(self):
        table = build_table({"name": "t_user", "entity": "Account"}, ["t_"])
        assert table.entity_name == "Account"

    def test_prefix_equal_to_name_not_stripped(self):
        table = build_table({"name": "t_"}, ["t_"])
        assert table.entity_name == "T"
