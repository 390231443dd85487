"""Drizzle dialects - column constructor tables per database provider."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Type

from ..errors import DialectError, DialectNotSupportedYetError, UnknownFieldTypeError, UnsupportedDialectError
from ..schema.ir import EnumIR, EnumRef, FieldIR, ScalarType


@dataclass(frozen=True)
class ColumnType:
    """Column constructor name and the arguments following the column name."""
    fn: str
    args: Tuple[str, ...] = ()


class Dialect(ABC):
    """Abstract Drizzle dialect."""

    table_constructor: str = ""
    enum_constructor: str = ""

    @abstractmethod
    def get_target(self) -> str:
        """
        Get the dialect name.

        Returns:
            Dialect identifier used in the core module path (e.g. "mysql")
        """
        pass

    @abstractmethod
    def column_type(self, field: FieldIR, enums: Sequence[EnumIR]) -> ColumnType:
        """
        Resolve the column constructor for a field.

        Raises:
            UnknownFieldTypeError: If the type and hint combination has no mapping
        """
        pass

    @property
    def core_module(self) -> str:
        return f"drizzle-orm/{self.get_target()}-core"

    def enum_column(self, field: FieldIR, enums: Sequence[EnumIR]) -> ColumnType:
        for enumeration in enums:
            if enumeration.name == field.type.name:
                return ColumnType(self.enum_constructor, (json.dumps(list(enumeration.values)),))
        raise UnknownFieldTypeError(f"Unknown field type {describe_type(field)}")


def describe_type(field: FieldIR) -> str:
    """Prisma spelling of a field type, e.g. ``String @db.VarChar``."""
    name = field.type.name if isinstance(field.type, EnumRef) else field.type.value
    if field.db_type_hint:
        return f"{name} @db.{field.db_type_hint.type}"
    return name


class MySqlDialect(Dialect):
    """MySQL dialect (``drizzle-orm/mysql-core``)."""

    table_constructor = "mysqlTable"
    enum_constructor = "mysqlEnum"

    COLUMN_TYPES: Dict[Tuple[ScalarType, Optional[str]], ColumnType] = {
        (ScalarType.INT, None): ColumnType("int"),
        (ScalarType.INT, "Int"): ColumnType("int"),
        (ScalarType.INT, "TinyInt"): ColumnType("tinyint"),
        (ScalarType.INT, "SmallInt"): ColumnType("smallint"),
        (ScalarType.INT, "MediumInt"): ColumnType("mediumint"),
        (ScalarType.INT, "UnsignedInt"): ColumnType("int", ("{ unsigned: true }",)),
        (ScalarType.INT, "UnsignedTinyInt"): ColumnType("tinyint", ("{ unsigned: true }",)),
        (ScalarType.INT, "UnsignedSmallInt"): ColumnType("smallint", ("{ unsigned: true }",)),
        (ScalarType.INT, "UnsignedMediumInt"): ColumnType("mediumint", ("{ unsigned: true }",)),
        (ScalarType.BIG_INT, None): ColumnType("bigint", ('{ mode: "bigint", unsigned: false }',)),
        (ScalarType.BIG_INT, "BigInt"): ColumnType("bigint", ('{ mode: "bigint", unsigned: false }',)),
        (ScalarType.BIG_INT, "UnsignedBigInt"): ColumnType("bigint", ('{ mode: "bigint", unsigned: true }',)),
        (ScalarType.STRING, "Text"): ColumnType("text"),
        (ScalarType.STRING, "TinyText"): ColumnType("tinytext"),
        (ScalarType.STRING, "MediumText"): ColumnType("mediumtext"),
        (ScalarType.STRING, "LongText"): ColumnType("longtext"),
        (ScalarType.BOOLEAN, None): ColumnType("boolean"),
        (ScalarType.BOOLEAN, "TinyInt"): ColumnType("boolean"),
        (ScalarType.DATE_TIME, None): ColumnType("datetime"),
        (ScalarType.DATE_TIME, "DateTime"): ColumnType("datetime"),
        (ScalarType.DATE_TIME, "Timestamp"): ColumnType("timestamp"),
        (ScalarType.DATE_TIME, "Time"): ColumnType("time"),
        (ScalarType.DATE_TIME, "Date"): ColumnType("date"),
        (ScalarType.DATE_TIME, "Year"): ColumnType("year"),
        (ScalarType.FLOAT, None): ColumnType("float"),
        (ScalarType.FLOAT, "Float"): ColumnType("float"),
        (ScalarType.FLOAT, "Real"): ColumnType("real"),
        (ScalarType.JSON, None): ColumnType("json"),
        (ScalarType.JSON, "Json"): ColumnType("json"),
    }

    # String columns whose constructor takes a length
    SIZED_TYPES: Dict[Optional[str], str] = {
        None: "varchar",
        "VarChar": "varchar",
        "Char": "char",
    }

    def __init__(self, default_varchar_length: int = 255):
        """
        Initialize MySQL dialect.

        Args:
            default_varchar_length: Length used for String columns without an explicit one
        """
        self.default_varchar_length = default_varchar_length

    def get_target(self) -> str:
        return "mysql"

    def column_type(self, field: FieldIR, enums: Sequence[EnumIR]) -> ColumnType:
        if isinstance(field.type, EnumRef):
            return self.enum_column(field, enums)

        hint = field.db_type_hint
        hint_type = hint.type if hint else None
        hint_arg = hint.arg if hint else None

        if field.type == ScalarType.STRING and hint_type in self.SIZED_TYPES:
            length = hint_arg if hint_arg is not None else self.default_varchar_length
            return ColumnType(self.SIZED_TYPES[hint_type], (f"{{ length: {length} }}",))

        if field.type == ScalarType.BOOLEAN and hint_type == "Bit":
            if hint_arg != 1:
                raise DialectError(f"Expected 1 as bit length to use it as boolean in field {field.name}")
            return ColumnType("binary", ("{ length: 1 }",))

        column = self.COLUMN_TYPES.get((field.type, hint_type))
        if column is None:
            raise UnknownFieldTypeError(f"Unknown field type {describe_type(field)}")
        return column


DIALECTS: Dict[str, Type[Dialect]] = {
    "mysql": MySqlDialect,
}

# Providers Drizzle supports but this generator does not cover yet
PENDING_DIALECTS: Dict[str, str] = {
    "postgresql": "Postgres",
    "postgres": "Postgres",
    "sqlite": "SQLite",
}


def resolve_dialect(provider: Optional[str], **options: Any) -> Dialect:
    """
    Create the dialect for a datasource provider.

    Args:
        provider: Datasource provider name
        **options: Dialect constructor options

    Raises:
        DialectError: If provider is missing
        DialectNotSupportedYetError: If the provider is known but not implemented
        UnsupportedDialectError: If the provider is unknown
    """
    if not provider:
        raise DialectError("Provider is required")

    if provider in DIALECTS:
        return DIALECTS[provider](**options)

    if provider in PENDING_DIALECTS:
        raise DialectNotSupportedYetError(
            f"{PENDING_DIALECTS[provider]} is not supported yet. "
            "Please open an issue on GitHub if you need it."
        )

    raise UnsupportedDialectError(f"Unsupported dialect {provider}")
