"""Unit tests for dialect column mappings."""

import pytest

from prizzle.drizzle.dialect import ColumnType, MySqlDialect, describe_type, resolve_dialect
from prizzle.errors import (
    DialectError, DialectNotSupportedYetError, UnknownFieldTypeError, UnsupportedDialectError
)
from prizzle.schema.ir import DbTypeHint, EnumIR, EnumRef, FieldIR, ScalarType


def column(field_type, hint=None, arg=None):
    return FieldIR(
        name="value",
        db_name="value",
        type=field_type,
        db_type_hint=DbTypeHint(hint, arg) if hint else None,
    )


class TestResolveDialect:
    """Tests for provider resolution."""

    def test_mysql(self):
        dialect = resolve_dialect("mysql", default_varchar_length=100)

        assert isinstance(dialect, MySqlDialect)
        assert dialect.default_varchar_length == 100
        assert dialect.core_module == "drizzle-orm/mysql-core"

    def test_missing_provider(self):
        with pytest.raises(DialectError, match="Provider is required"):
            resolve_dialect(None)

    @pytest.mark.parametrize("provider", ["postgresql", "postgres", "sqlite"])
    def test_pending_dialects(self, provider):
        """Test known dialects without a generator fail explicitly."""
        with pytest.raises(DialectNotSupportedYetError, match="is not supported yet"):
            resolve_dialect(provider)

    def test_unknown_dialect(self):
        with pytest.raises(UnsupportedDialectError, match="Unsupported dialect mongodb"):
            resolve_dialect("mongodb")


class TestMySqlDialect:
    """Tests for the MySQL column table."""

    @pytest.fixture
    def dialect(self):
        return MySqlDialect()

    def test_default_string_length(self, dialect):
        assert dialect.column_type(column(ScalarType.STRING), []) == ColumnType("varchar", ("{ length: 255 }",))

    def test_configured_string_length(self):
        dialect = MySqlDialect(default_varchar_length=64)

        assert dialect.column_type(column(ScalarType.STRING), []).args == ("{ length: 64 }",)

    def test_sized_strings(self, dialect):
        assert dialect.column_type(column(ScalarType.STRING, "VarChar", 1024), []) == ColumnType(
            "varchar", ("{ length: 1024 }",)
        )
        assert dialect.column_type(column(ScalarType.STRING, "Char", 2), []) == ColumnType("char", ("{ length: 2 }",))

    @pytest.mark.parametrize("field_type, hint, expected", [
        (ScalarType.INT, None, "int"),
        (ScalarType.INT, "TinyInt", "tinyint"),
        (ScalarType.INT, "UnsignedSmallInt", "smallint"),
        (ScalarType.BIG_INT, None, "bigint"),
        (ScalarType.STRING, "Text", "text"),
        (ScalarType.STRING, "LongText", "longtext"),
        (ScalarType.BOOLEAN, None, "boolean"),
        (ScalarType.DATE_TIME, None, "datetime"),
        (ScalarType.DATE_TIME, "Timestamp", "timestamp"),
        (ScalarType.DATE_TIME, "Date", "date"),
        (ScalarType.FLOAT, "Real", "real"),
        (ScalarType.JSON, None, "json"),
    ])
    def test_constructors(self, dialect, field_type, hint, expected):
        """Test type and hint pairs map to constructors."""
        assert dialect.column_type(column(field_type, hint), []).fn == expected

    def test_unsigned_options(self, dialect):
        assert dialect.column_type(column(ScalarType.INT, "UnsignedInt"), []).args == ("{ unsigned: true }",)
        assert dialect.column_type(column(ScalarType.BIG_INT, "UnsignedBigInt"), []).args == (
            '{ mode: "bigint", unsigned: true }',
        )

    def test_bit_boolean(self, dialect):
        """Test Bit(1) maps to a one byte binary column."""
        assert dialect.column_type(column(ScalarType.BOOLEAN, "Bit", 1), []) == ColumnType("binary", ("{ length: 1 }",))

    def test_wide_bit_boolean_fails(self, dialect):
        """Test a wider bit hint is not a boolean."""
        with pytest.raises(DialectError, match="Expected 1 as bit length"):
            dialect.column_type(column(ScalarType.BOOLEAN, "Bit", 8), [])

    def test_unknown_combination(self, dialect):
        with pytest.raises(UnknownFieldTypeError, match="Unknown field type Int @db.VarChar"):
            dialect.column_type(column(ScalarType.INT, "VarChar", 10), [])

    def test_enum(self, dialect):
        """Test enum fields list their values."""
        enums = [EnumIR(name="Role", db_name="Role", values=("USER", "ADMIN"))]

        assert dialect.column_type(column(EnumRef("Role")), enums) == ColumnType("mysqlEnum", ('["USER", "ADMIN"]',))

    def test_enum_picked_by_name(self, dialect):
        """Test the enum is looked up by name among all schema enums."""
        enums = [
            EnumIR(name="Role", db_name="Role", values=("USER", "ADMIN")),
            EnumIR(name="Status", db_name="status", values=("DRAFT", "LIVE")),
        ]

        assert dialect.column_type(column(EnumRef("Status")), enums) == ColumnType("mysqlEnum", ('["DRAFT", "LIVE"]',))

    def test_unknown_enum(self, dialect):
        with pytest.raises(UnknownFieldTypeError, match="Unknown field type Status"):
            dialect.column_type(column(EnumRef("Status")), [])


def test_describe_type():
    assert describe_type(column(ScalarType.STRING, "VarChar", 10)) == "String @db.VarChar"
    assert describe_type(column(EnumRef("Role"))) == "Role"
