"""Data models for table metadata."""

from tablegen.models.table import TableField, TableInfo

__all__ = [
    "TableField",
    "TableInfo",
]
