"""Drizzle schema IR and its builder."""

from .builder import SchemaBuilder
from .ir import (
    EnumIR, FieldIR, ForeignKeyIR, IndexIR, RelationIR, SchemaIR, TableIR
)
from .naming import NamingStyle

__all__ = [
    "SchemaBuilder",
    "SchemaIR",
    "TableIR",
    "FieldIR",
    "IndexIR",
    "ForeignKeyIR",
    "RelationIR",
    "EnumIR",
    "NamingStyle",
]
