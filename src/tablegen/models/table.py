"""Table models: columns, tables, and construction from config data."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

# Column type keyword → Python property type. Checked in order, first
# substring match wins (so 'bigint' maps via 'int', 'datetime' before 'date').
_TYPE_MAP: tuple[tuple[str, str], ...] = (
    ("bool", "bool"),
    ("bit", "bool"),
    ("int", "int"),
    ("decimal", "Decimal"),
    ("numeric", "Decimal"),
    ("float", "float"),
    ("double", "float"),
    ("real", "float"),
    ("datetime", "datetime"),
    ("timestamp", "datetime"),
    ("date", "date"),
)


def _words(name: str) -> list[str]:
    return [w for w in re.split(r"[_\-\s]+", name) if w]


def camel_case(name: str) -> str:
    """'user_name' → 'userName'."""
    words = _words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def pascal_case(name: str) -> str:
    """'t_user_role' → 'TUserRole'."""
    return "".join(w.capitalize() for w in _words(name))


def property_type_for(column_type: str) -> str:
    """Map a SQL column type (e.g. 'varchar(64)', 'BIGINT') to a Python type name."""
    lowered = column_type.lower()
    for keyword, py_type in _TYPE_MAP:
        if keyword in lowered:
            return py_type
    return "str"


@dataclass(frozen=True)
class TableField:
    """A single column of a table.

    Attributes:
        name: Column name as it appears in the database (e.g. 'user_name')
        column_type: SQL column type (e.g. 'varchar(64)')
        property_name: Attribute name on the generated entity; derived
            from the column name when empty
        property_type: Python type of the attribute; derived from
            column_type when empty
        key_flag: True for the primary key column
        comment: Column comment
    """

    name: str
    column_type: str = ""
    property_name: str = ""
    property_type: str = ""
    key_flag: bool = False
    comment: str = ""

    def __post_init__(self) -> None:
        if not self.property_name:
            object.__setattr__(self, "property_name", camel_case(self.name))
        if not self.property_type:
            object.__setattr__(self, "property_type", property_type_for(self.column_type))


@dataclass(frozen=True)
class TableInfo:
    """Metadata for one table, the unit the generator emits files for.

    Attributes:
        name: Table name (e.g. 't_user')
        comment: Table comment
        entity_name: Name of the generated entity class; derived from
            the table name when empty
        fields: Columns in declaration order
    """

    name: str
    comment: str = ""
    entity_name: str = ""
    fields: tuple[TableField, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.entity_name:
            object.__setattr__(self, "entity_name", pascal_case(self.name))

    @property
    def key_field(self) -> TableField | None:
        """The first primary key column, if any."""
        for f in self.fields:
            if f.key_flag:
                return f
        return None

    @property
    def field_names(self) -> list[str]:
        return [f.property_name for f in self.fields]

    @property
    def column_names(self) -> list[str]:
        return [f.name for f in self.fields]


def _strip_prefix(name: str, table_prefix: Iterable[str]) -> str:
    for prefix in table_prefix:
        if prefix and name.startswith(prefix) and len(name) > len(prefix):
            return name[len(prefix):]
    return name


def build_table(data: dict, table_prefix: Iterable[str] = ()) -> TableInfo:
    """Build a TableInfo from a parsed [[tables.table]] section.

    The first matching prefix in table_prefix is removed before the
    entity name is derived; the table name itself is kept as-is.
    An explicit 'entity' key wins over the derived name.
    """
    name = data["name"]
    fields = tuple(
        TableField(
            name=f["name"],
            column_type=f.get("type", ""),
            property_name=f.get("property", ""),
            property_type=f.get("property_type", ""),
            key_flag=bool(f.get("key", False)),
            comment=f.get("comment", ""),
        )
        for f in data.get("fields", [])
    )
    entity_name = data.get("entity") or pascal_case(_strip_prefix(name, table_prefix))
    return TableInfo(
        name=name,
        comment=data.get("comment", ""),
        entity_name=entity_name,
        fields=fields,
    )
