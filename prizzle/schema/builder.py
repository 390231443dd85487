"""Schema builder - converts a Prisma syntax tree to the Drizzle schema IR."""

from typing import Callable, Dict, Optional, Set

from loguru import logger

from ..errors import ParamsError, SchemaError
from ..prisma.ast import (
    Assignment, Attribute, Datasource, EnumBlock, Enumerator, Model, ModelField, Schema
)
from . import params as t
from .attributes import (
    compound_index_attribute, db_type_attribute, dbgenerated_function, default_attribute,
    foreign_attribute, index_attribute, index_field_attribute, map_attribute, relation_attribute
)
from .ir import (
    DbTypeHint, DefaultFunction, DefaultValue, EnumIR, FieldIR, ForeignKeyIR, IndexColumn,
    IndexIR, IndexKind, ReferentialAction, RelationIR, RelationKind, ScalarType, SchemaIR,
    SortOrder, TableIR, UniqueMarker, EnumRef
)
from .naming import NamingStyle, export_name, index_name
from .pivots import PivotKey, PivotRecord, collect_pivot_tables, find_attribute, synthesize_pivot_tables

# Prisma default generators, whether or not a dialect can render them
DEFAULT_FUNCTIONS = (
    "autoincrement", "now", "uuid", "guid", "cuid", "cuid2", "nanoid", "ulid",
    "dbgenerated", "sequence", "auto",
)

SCALAR_TYPES = {item.value for item in ScalarType}

BLOCK_INDEX_KINDS = {
    "id": IndexKind.PRIMARY,
    "unique": IndexKind.UNIQUE,
    "index": IndexKind.INDEX,
}


class SchemaBuilder:
    """Builds the Drizzle schema IR from a Prisma syntax tree."""

    def __init__(self, naming_style: NamingStyle = NamingStyle.DRIZZLE):
        """
        Initialize schema builder.

        Args:
            naming_style: How model names become exported table names
        """
        self.naming_style = NamingStyle(naming_style)

    def build(self, tree: Schema) -> SchemaIR:
        """
        Build the IR for a whole schema.

        Args:
            tree: Prisma syntax tree

        Returns:
            Schema IR with tables in declaration order followed by join tables

        Raises:
            SchemaError: If the tree is not a valid Prisma schema
        """
        logger.info("Building Drizzle schema from Prisma tree")

        models = {model.name: model for model in tree.models()}
        enum_names = {block.name for block in tree.enums()}
        pivots = collect_pivot_tables(models, self.naming_style)

        result = SchemaIR(provider=get_provider(tree))

        for block in tree.blocks:
            if isinstance(block, Model):
                if _is_ignored(block):
                    logger.debug(f"Skipping ignored model {block.name}")
                    continue
                walker = TableBuilder(block, models, enum_names, pivots, self.naming_style)
                result.tables.append(walker.build())
            elif isinstance(block, EnumBlock):
                result.enums.append(build_enum(block))

        joins = synthesize_pivot_tables(pivots.values(), result.tables, self.naming_style)
        result.tables.extend(joins)

        logger.info(
            f"Built schema: {len(result.tables) - len(joins)} tables, {len(joins)} join tables, "
            f"{len(result.enums)} enums (provider: {result.provider})"
        )

        return result


class TableBuilder:
    """Walks the properties of one model."""

    def __init__(
        self,
        model: Model,
        models: Dict[str, Model],
        enum_names: Set[str],
        pivots: Dict[PivotKey, PivotRecord],
        naming_style: NamingStyle = NamingStyle.DRIZZLE,
    ):
        self.model = model
        self.models = models
        self.enum_names = enum_names
        self.pivots = pivots
        self.naming_style = naming_style
        self.table = TableIR(name=export_name(model.name, naming_style), db_name=model.name)
        self._handlers: Dict[str, Callable] = {
            "attribute": self._block_attribute,
            "field": self._field,
            "comment": self._skip,
            "break": self._skip,
        }

    def build(self) -> TableIR:
        for prop in self.model.properties:
            kind = getattr(prop, "type", None)
            handler = self._handlers.get(kind)
            if handler is None:
                raise self._error(f"Unknown property type {kind or '<null>'}")
            handler(prop)

        self._check_foreign_keys()
        return self.table

    def _error(self, message: str, attribute: Optional[str] = None) -> SchemaError:
        return SchemaError(f"{message} in table {self.model.name}", table=self.model.name, attribute=attribute)

    def _skip(self, prop) -> None:
        pass

    def _block_attribute(self, attribute: Attribute) -> None:
        if attribute.name == "map":
            try:
                self.table.db_name = map_attribute(attribute.args)["name"]
            except ParamsError as e:
                raise self._error(f"Parse @@map property failed: {e}", "map") from e
        elif attribute.name in BLOCK_INDEX_KINDS:
            try:
                self.table.indexes.append(self._index(BLOCK_INDEX_KINDS[attribute.name], attribute))
            except ParamsError as e:
                raise self._error(f"Parse @@{attribute.name} property failed: {e}", attribute.name) from e
        elif attribute.name == "ignore":
            pass
        else:
            raise self._error(f"Unknown attribute {attribute.name}", attribute.name)

    def _index(self, kind: IndexKind, attribute: Attribute) -> IndexIR:
        params = compound_index_attribute(attribute.args)

        columns = []
        for item in params["fields"]:
            if item.tag == "fn":
                sort = index_field_attribute(item.value.params)["sort"]
                columns.append(IndexColumn(item.value.name, SortOrder(sort or "Asc")))
            else:
                columns.append(IndexColumn(item.value))

        return IndexIR(
            kind=kind,
            name=params["name"] or index_name([column.name for column in columns], kind.value),
            fields=tuple(columns),
            db_name=params["map"],
        )

    def _field(self, field: ModelField) -> None:
        if find_attribute(field, "ignore"):
            return

        relation = find_attribute(field, "relation")

        if relation and not field.array and _has_argument(relation, "fields"):
            self._foreign_key(field, relation)
            return

        pivot = self.pivots.get((self.model.name, field.name))
        if pivot:
            self.table.relations.append(RelationIR(
                name=field.name,
                kind=RelationKind.MANY,
                to=export_name(pivot.joint, self.naming_style),
                alias=pivot.side_alias(pivot.side_key),
            ))
            return

        if isinstance(field.field_type, str) and field.field_type in self.models:
            alias = None
            if relation:
                try:
                    params = relation_attribute(relation.args)
                except ParamsError as e:
                    raise self._error(f"Parse @relation property failed: {e}", "relation") from e
                alias = params["map"] or params["name"]

            self.table.relations.append(RelationIR(
                name=field.name,
                kind=RelationKind.MANY if field.array else RelationKind.ONE,
                to=export_name(field.field_type, self.naming_style),
                alias=alias,
            ))
            return

        column = self._column(field)
        if self.table.get_field(column.name):
            raise self._error(f"Duplicate field {column.name}")
        self.table.fields.append(column)

    def _foreign_key(self, field: ModelField, relation: Attribute) -> None:
        if not isinstance(field.field_type, str):
            raise self._error(f"Expected string, got {field.field_type.name} function")

        try:
            params = foreign_attribute(relation.args)
        except ParamsError as e:
            raise self._error(f"Parse @relation property failed: {e}", "relation") from e

        if not params["fields"]:
            raise self._error("Relation fields must not be empty", "relation")

        if len(params["fields"]) != len(params["references"]):
            raise self._error("Relation fields and references count mismatch", "relation")

        to = export_name(field.field_type, self.naming_style)
        from_fields = tuple(params["fields"])
        to_fields = tuple(params["references"])

        self.table.foreign_keys.append(ForeignKeyIR(
            name=params["name"] or field.name,
            to=to,
            from_fields=from_fields,
            to_fields=to_fields,
            db_name=params["map"],
            on_delete=_action(params["onDelete"]),
            on_update=_action(params["onUpdate"]),
        ))
        self.table.relations.append(RelationIR(
            name=field.name,
            kind=RelationKind.FOREIGN,
            to=to,
            alias=params["name"],
            fields=from_fields,
            references=to_fields,
        ))

    def _column(self, field: ModelField) -> FieldIR:
        if not isinstance(field.field_type, str):
            raise self._error(f"Expected string, got {field.field_type.name} function")

        if field.field_type in SCALAR_TYPES:
            field_type = ScalarType(field.field_type)
        elif field.field_type in self.enum_names:
            field_type = EnumRef(field.field_type)
        else:
            raise self._error(f"Unknown field type {field.field_type}")

        values = {
            "db_name": field.name,
            "db_type_hint": None,
            "default": None,
            "update": None,
            "unique": None,
            "primary": False,
        }

        for attribute in field.attributes:
            if attribute.group == "db":
                try:
                    length = db_type_attribute(attribute.args)["length"]
                except ParamsError as e:
                    raise self._error(f"Parse @db.{attribute.name} property failed: {e}", attribute.name) from e
                values["db_type_hint"] = DbTypeHint(type=attribute.name, arg=length)
                continue

            if attribute.group is not None:
                raise self._error(f"Unknown attribute {attribute.group}.{attribute.name}", attribute.name)

            if attribute.name == "map":
                try:
                    values["db_name"] = map_attribute(attribute.args)["name"]
                except ParamsError as e:
                    raise self._error(f"Parse @map property failed: {e}", "map") from e
            elif attribute.name == "default":
                values["default"] = self._default(attribute)
            elif attribute.name == "unique":
                params = self._index_params(attribute)
                values["unique"] = UniqueMarker(name=params["map"], sort=SortOrder(params["sort"] or "Asc"))
            elif attribute.name == "id":
                self._index_params(attribute)
                values["primary"] = True
            elif attribute.name == "updatedAt":
                values["update"] = DefaultFunction("now")
                values["default"] = DefaultFunction("now")
            elif attribute.name == "createdAt":
                values["default"] = DefaultFunction("now")
            else:
                raise self._error(f"Unknown attribute {attribute.name}", attribute.name)

        # primary implies unique
        if values["primary"]:
            values["unique"] = None

        return FieldIR(
            name=field.name,
            type=field_type,
            nullable=field.optional,
            array=field.array,
            **values,
        )

    def _index_params(self, attribute: Attribute):
        try:
            return index_attribute(attribute.args)
        except ParamsError as e:
            raise self._error(f"Parse @{attribute.name} property failed: {e}", attribute.name) from e

    def _default(self, attribute: Attribute):
        try:
            param = default_attribute(attribute.args)["value"]
            if param is None:
                return None
            if param.tag != "fn":
                return DefaultValue(param.value)

            call = param.value
            if call.name not in DEFAULT_FUNCTIONS:
                raise self._error(f"Unknown default function {call.name}()", "default")

            args = ()
            if call.name == "dbgenerated":
                expression = dbgenerated_function(call.params)["expression"]
                args = (expression,) if expression is not None else ()
            return DefaultFunction(call.name, args)
        except ParamsError as e:
            raise self._error(f"Parse {self.model.name} @default property failed: {e}", "default") from e

    def _check_foreign_keys(self) -> None:
        names = {field.name for field in self.table.fields}
        for fk in self.table.foreign_keys:
            for name in fk.from_fields:
                if name not in names:
                    raise self._error(f"Foreign key {fk.name} references unknown field {name}", "relation")


def build_enum(enumeration: EnumBlock) -> EnumIR:
    """
    Build an enum declaration.

    Raises:
        SchemaError: If an individual value is mapped or an attribute is unknown
    """
    db_name = enumeration.name
    values = []

    for item in enumeration.enumerators:
        if isinstance(item, Enumerator):
            if item.attributes:
                raise SchemaError("Enumeration mapping is not supported", table=enumeration.name)
            values.append(item.name)
        elif isinstance(item, Attribute):
            if item.name != "map":
                raise SchemaError(
                    f"Unknown attribute {item.name} in enum {enumeration.name}",
                    table=enumeration.name,
                    attribute=item.name,
                )
            if item.kind == "field":
                raise SchemaError("Enumeration mapping is not supported", table=enumeration.name)
            try:
                db_name = map_attribute(item.args)["name"] or db_name
            except ParamsError as e:
                raise SchemaError(
                    f"Parse @@map property failed: {e} in enum {enumeration.name}",
                    table=enumeration.name,
                    attribute="map",
                ) from e

    return EnumIR(name=enumeration.name, db_name=db_name, values=tuple(values))


def get_provider(tree: Schema) -> Optional[str]:
    """Provider of the first datasource declaring one, None when absent."""
    for block in tree.blocks:
        if not isinstance(block, Datasource):
            continue

        for assignment in block.assignments:
            if isinstance(assignment, Assignment) and assignment.key == "provider":
                try:
                    return t.string.parse(assignment.value)
                except ParamsError as e:
                    raise SchemaError(f"Parse datasource {block.name} provider failed: {e}") from e

    return None


def _is_ignored(model: Model) -> bool:
    return any(
        isinstance(prop, Attribute) and prop.name == "ignore" and prop.group is None
        for prop in model.properties
    )


def _has_argument(attribute: Attribute, key: str) -> bool:
    return any(getattr(arg.value, "key", None) == key for arg in attribute.args)


def _action(value: Optional[str]) -> Optional[ReferentialAction]:
    return ReferentialAction(value) if value else None
