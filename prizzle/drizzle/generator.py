"""Drizzle generator - renders the schema IR as a TypeScript module."""

import json
import re
from typing import Any, Dict, Optional, Sequence

from loguru import logger

from ..errors import DialectError
from ..schema.ir import (
    DefaultFunction, DefaultValue, EnumIR, FieldIR, ForeignKeyIR, IndexIR, IndexKind,
    ReferentialAction, RelationIR, RelationKind, ScalarType, SchemaIR, SortOrder, TableIR
)
from ..schema.naming import snake_name
from .dialect import Dialect, resolve_dialect
from .imports import ImportsCollector

REFERENTIAL_ACTIONS = {
    ReferentialAction.CASCADE: "cascade",
    ReferentialAction.RESTRICT: "restrict",
    ReferentialAction.NO_ACTION: "no action",
    ReferentialAction.SET_NULL: "set null",
    ReferentialAction.SET_DEFAULT: "set default",
}

UUID_FUNCTIONS = ("uuid", "guid")

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class DrizzleGenerator:
    """Generates Drizzle schema source from the schema IR."""

    def __init__(self, default_varchar_length: int = 255, provider_override: Optional[str] = None):
        """
        Initialize generator.

        Args:
            default_varchar_length: Length of String columns without a @db.VarChar length
            provider_override: Dialect to use instead of the datasource provider
        """
        self.default_varchar_length = default_varchar_length
        self.provider_override = provider_override

    def generate(self, schema: SchemaIR) -> str:
        """
        Generate the TypeScript module for a schema.

        Args:
            schema: Schema IR

        Returns:
            Unformatted TypeScript source: imports, then one block per table

        Raises:
            DialectError: If the provider is missing, unsupported, or a field cannot be mapped
        """
        provider = self.provider_override or schema.provider
        dialect = resolve_dialect(provider, default_varchar_length=self.default_varchar_length)

        logger.info(f"Generating Drizzle schema for {dialect.get_target()}: {len(schema.tables)} tables")

        imports = ImportsCollector(dialect.core_module)
        tables = [self.generate_table(table, schema.enums, dialect, imports) for table in schema.tables]

        return "\n\n".join(part for part in [imports.render(), *tables] if part)

    def generate_table(
        self,
        table: TableIR,
        enums: Sequence[EnumIR],
        dialect: Dialect,
        imports: Optional[ImportsCollector] = None,
    ) -> str:
        """Render the table declaration, its model types and its relations."""
        if imports is None:
            imports = ImportsCollector(dialect.core_module)

        imports.core(dialect.table_constructor)
        imports.basic("type InferSelectModel")
        imports.basic("type InferInsertModel")

        extras: Dict[str, str] = {}
        for index in table.indexes:
            extras[index.name] = self._index(index, imports)
        for fk in table.foreign_keys:
            if fk.is_composite:
                extras[fk.name] = self._foreign_key(fk, imports)

        columns = [
            f"{_key(field.name)}: {self._field(field, table, enums, dialect, imports)}"
            for field in table.fields
        ]

        args = [_literal(table.db_name), "{ " + ", ".join(columns) + " }"]
        if extras:
            args.append(f"(table) => ({_object(extras)})")

        exports = [
            f"export const {table.name} = {dialect.table_constructor}({', '.join(args)});",
            f"export type {table.name}SelectModel = InferSelectModel<typeof {table.name}>;",
            f"export type {table.name}InsertModel = InferInsertModel<typeof {table.name}>;",
        ]

        if table.relations:
            imports.basic("relations")

            relations = {relation.name: self._relation(relation, table) for relation in table.relations}
            kinds: Dict[str, None] = {}
            for relation in table.relations:
                kinds.setdefault("many" if relation.kind == RelationKind.MANY else "one", None)

            exports.append(
                f"export const {table.name}Relations = relations({table.name}, "
                f"({{ {', '.join(kinds)} }}) => ({_object(relations)}));"
            )

        return "\n\n".join(exports)

    def _field(
        self,
        field: FieldIR,
        table: TableIR,
        enums: Sequence[EnumIR],
        dialect: Dialect,
        imports: ImportsCollector,
    ) -> str:
        column = dialect.column_type(field, enums)
        imports.core(column.fn)

        args = [_literal(field.db_name), *column.args]
        modifiers = []

        default = self._default(field, table, dialect, imports)
        if default:
            modifiers.append(default)

        if field.update:
            if field.update.fn != "now":
                raise DialectError(
                    f"Update function {field.update.fn}() is not supported in field {table.name}.{field.name}"
                )
            modifiers.append(".onUpdateNow()")

        if isinstance(field.default, DefaultFunction) and field.default.fn == "autoincrement":
            modifiers.append(".autoincrement()")

        if field.primary:
            modifiers.append(".primaryKey()")
        elif field.unique:
            modifiers.append(f".unique({_literal(field.unique.name) if field.unique.name else ''})")

        if not field.nullable:
            modifiers.append(".notNull()")

        if field.array:
            modifiers.append(".array()")

        fk = next(
            (fk for fk in table.foreign_keys if not fk.is_composite and fk.from_fields[0] == field.name),
            None,
        )
        if fk:
            actions = _object({
                "onDelete": _action(fk.on_delete),
                "onUpdate": _action(fk.on_update),
            })
            extra = f", {actions}" if fk.on_delete or fk.on_update else ""
            modifiers.append(f".references(() => {fk.to}.{fk.to_fields[0]}{extra})")

        return f"{column.fn}({', '.join(args)}){''.join(modifiers)}"

    def _default(self, field: FieldIR, table: TableIR, dialect: Dialect, imports: ImportsCollector) -> str:
        default = field.default

        if default is None:
            return ""

        if isinstance(default, DefaultValue):
            value = default.value
            if field.type == ScalarType.BIG_INT and isinstance(value, int) and not isinstance(value, bool):
                return f".default({value}n)"
            return f".default({_literal(value)})"

        if default.fn == "autoincrement":
            return ""
        if default.fn == "now":
            return ".defaultNow()"
        if default.fn in UUID_FUNCTIONS:
            return ".$defaultFn(() => crypto.randomUUID())"
        if default.fn == "dbgenerated" and default.args:
            imports.basic("sql")
            expression = _template(str(default.args[0]))
            return f".default(sql`{expression}`)"

        raise DialectError(
            f"Default function {default.fn}() is not supported by {dialect.get_target()} "
            f"in field {table.name}.{field.name}"
        )

    def _index(self, index: IndexIR, imports: ImportsCollector) -> str:
        columns = []
        for column in index.fields:
            ref = f"table.{column.name}"
            if column.sort == SortOrder.DESC:
                imports.basic("sql")
                columns.append("sql`${" + ref + "} DESC`")
            else:
                columns.append(ref)

        if index.kind == IndexKind.PRIMARY:
            imports.core("primaryKey")
            return "primaryKey(" + _object({
                "name": _literal(index.db_name) if index.db_name else None,
                "columns": _array(columns),
            }) + ")"

        fn = "uniqueIndex" if index.kind == IndexKind.UNIQUE else "index"
        imports.core(fn)

        return f"{fn}({_literal(index.db_name or snake_name(index.name))}).on({', '.join(columns)})"

    def _foreign_key(self, fk: ForeignKeyIR, imports: ImportsCollector) -> str:
        imports.core("foreignKey")

        code = "foreignKey(" + _object({
            "name": _literal(fk.db_name) if fk.db_name else None,
            "columns": _array(f"table.{name}" for name in fk.from_fields),
            "foreignColumns": _array(f"{fk.to}.{name}" for name in fk.to_fields),
        }) + ")"

        if fk.on_delete:
            code += f".onDelete({_action(fk.on_delete)})"
        if fk.on_update:
            code += f".onUpdate({_action(fk.on_update)})"

        return code

    def _relation(self, relation: RelationIR, table: TableIR) -> str:
        relation_name = _literal(relation.alias) if relation.alias else None

        if relation.kind == RelationKind.FOREIGN:
            return f"one({relation.to}, " + _object({
                "relationName": relation_name,
                "fields": _array(f"{table.name}.{name}" for name in relation.fields),
                "references": _array(f"{relation.to}.{name}" for name in relation.references),
            }) + ")"

        fn = "many" if relation.kind == RelationKind.MANY else "one"

        if relation_name:
            return f"{fn}({relation.to}, {_object({'relationName': relation_name})})"
        return f"{fn}({relation.to})"


def _literal(value: Any) -> str:
    return json.dumps(value)


def _template(text: str) -> str:
    # Backslashes first, so the escapes added for ` and ${ stay intact
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def _action(action: Optional[ReferentialAction]) -> Optional[str]:
    return _literal(REFERENTIAL_ACTIONS[action]) if action else None


def _key(name: str) -> str:
    return name if _IDENTIFIER.match(name) else _literal(name)


def _object(record: Dict[str, Optional[str]]) -> str:
    entries = [f"{_key(key)}: {value}" for key, value in record.items() if value is not None]
    if not entries:
        return "{}"
    return "{ " + ", ".join(entries) + " }"


def _array(values) -> str:
    return "[" + ", ".join(values) + "]"
