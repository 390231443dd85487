"""Drizzle schema Intermediate Representation (IR)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union


class ScalarType(str, Enum):
    """Prisma scalar types with a Drizzle column mapping."""
    INT = "Int"
    BIG_INT = "BigInt"
    STRING = "String"
    BOOLEAN = "Boolean"
    DATE_TIME = "DateTime"
    FLOAT = "Float"
    JSON = "Json"


class SortOrder(str, Enum):
    ASC = "Asc"
    DESC = "Desc"


class IndexKind(Enum):
    PRIMARY = "primary"
    UNIQUE = "unique"
    INDEX = "index"


class RelationKind(Enum):
    FOREIGN = "foreign"
    ONE = "one"
    MANY = "many"


class ReferentialAction(str, Enum):
    CASCADE = "Cascade"
    RESTRICT = "Restrict"
    NO_ACTION = "NoAction"
    SET_NULL = "SetNull"
    SET_DEFAULT = "SetDefault"


@dataclass(frozen=True)
class EnumRef:
    """Field type referring to an enum declaration by its Prisma name."""
    name: str

    def __str__(self) -> str:
        return self.name


FieldType = Union[ScalarType, EnumRef]


@dataclass(frozen=True)
class DbTypeHint:
    """Native type refinement such as ``@db.VarChar(1024)``."""
    type: str
    arg: Optional[int] = None


@dataclass(frozen=True)
class DefaultValue:
    """Literal default (string, number, boolean, null or enum member)."""
    value: Any


@dataclass(frozen=True)
class DefaultFunction:
    """Generated default such as ``now()`` or ``autoincrement()``."""
    fn: str
    args: Tuple[Any, ...] = ()


Default = Union[DefaultValue, DefaultFunction]


@dataclass(frozen=True)
class UniqueMarker:
    name: Optional[str] = None
    sort: SortOrder = SortOrder.ASC


@dataclass(frozen=True)
class FieldIR:
    """Column of a table."""
    name: str
    db_name: str
    type: FieldType
    nullable: bool = False
    array: bool = False
    primary: bool = False
    db_type_hint: Optional[DbTypeHint] = None
    default: Optional[Default] = None
    update: Optional[DefaultFunction] = None
    unique: Optional[UniqueMarker] = None


@dataclass(frozen=True)
class IndexColumn:
    name: str
    sort: SortOrder = SortOrder.ASC


@dataclass(frozen=True)
class IndexIR:
    """Table-level primary key, unique constraint or index."""
    kind: IndexKind
    name: str
    fields: Tuple[IndexColumn, ...]
    db_name: Optional[str] = None


@dataclass(frozen=True)
class ForeignKeyIR:
    name: str
    to: str
    from_fields: Tuple[str, ...]
    to_fields: Tuple[str, ...]
    db_name: Optional[str] = None
    on_delete: Optional[ReferentialAction] = None
    on_update: Optional[ReferentialAction] = None

    @property
    def is_composite(self) -> bool:
        return len(self.from_fields) > 1


@dataclass(frozen=True)
class RelationIR:
    """
    Relation declaration.

    ``foreign`` relations pair with a foreign key and carry its column lists;
    ``one``/``many`` relations only name the target table.
    """
    name: str
    kind: RelationKind
    to: str
    alias: Optional[str] = None
    fields: Tuple[str, ...] = ()
    references: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EnumIR:
    name: str
    db_name: str
    values: Tuple[str, ...] = ()


@dataclass
class TableIR:
    """Table with its columns and table-level declarations."""
    name: str
    db_name: str
    fields: List[FieldIR] = field(default_factory=list)
    indexes: List[IndexIR] = field(default_factory=list)
    foreign_keys: List[ForeignKeyIR] = field(default_factory=list)
    relations: List[RelationIR] = field(default_factory=list)

    def get_field(self, name: str) -> Optional[FieldIR]:
        for item in self.fields:
            if item.name == name:
                return item
        return None

    def primary_field(self) -> Optional[FieldIR]:
        for item in self.fields:
            if item.primary:
                return item
        return None


@dataclass
class SchemaIR:
    """Whole conversion result: tables, enums and the datasource provider."""
    tables: List[TableIR] = field(default_factory=list)
    enums: List[EnumIR] = field(default_factory=list)
    provider: Optional[str] = None

    def table(self, name: str) -> Optional[TableIR]:
        for item in self.tables:
            if item.name == name:
                return item
        return None
