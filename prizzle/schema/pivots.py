"""Implicit many-to-many relations.

Prisma declares a many-to-many relation as a pair of list fields
(``tags Tag[]`` on ``Post`` and ``posts Post[]`` on ``Tag``) and keeps the
join table implicit. Drizzle needs that table spelled out, so the pairs are
collected before the model walk and one join table is synthesized for each of
them afterwards.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from ..errors import ParamsError, SchemaError
from ..prisma.ast import Model, ModelField
from .attributes import relation_attribute
from .ir import (
    ForeignKeyIR, FieldIR, IndexColumn, IndexIR, IndexKind, RelationIR, RelationKind, TableIR
)
from .naming import NamingStyle, export_name, lower_first

PivotKey = Tuple[str, str]


@dataclass(frozen=True)
class PivotRecord:
    """Join table needed by one side of a many-to-many relation."""
    joint: str
    from_table: str
    to_table: str
    from_key: str
    to_key: str
    side_key: str
    alias: Optional[str] = None

    def side_alias(self, key: str) -> Optional[str]:
        return f"{self.alias}_{key}" if self.alias else None


def find_attribute(field: ModelField, name: str):
    for attribute in field.attributes:
        if attribute.name == name and attribute.group is None:
            return attribute
    return None


def canonical_pair(first: str, second: str) -> Tuple[str, str]:
    """Order two model names shorter first, then lexicographically."""
    ordered = sorted((first, second), key=lambda name: (len(name), name))
    return ordered[0], ordered[1]


def collect_pivot_tables(
    models: Dict[str, Model],
    style: NamingStyle = NamingStyle.DRIZZLE,
) -> Dict[PivotKey, PivotRecord]:
    """
    Find list fields that form a many-to-many relation.

    Args:
        models: Models by Prisma name
        style: Naming style of exported tables

    Returns:
        Pivot records keyed by ``(model name, field name)``
    """
    pivots: Dict[PivotKey, PivotRecord] = {}

    for model in models.values():
        for field in model.properties:
            if not isinstance(field, ModelField) or not field.array:
                continue
            if not isinstance(field.field_type, str):
                continue

            ref_model = models.get(field.field_type)
            if ref_model is None:
                continue

            back_references = [
                prop for prop in ref_model.properties
                if isinstance(prop, ModelField) and prop.array and prop.field_type == model.name
                and prop is not field
            ]
            if not back_references:
                continue

            if ref_model.name == model.name:
                raise SchemaError(
                    f"Self-referencing many-to-many relation {field.name} is not supported",
                    table=model.name,
                )

            rel = find_attribute(field, "relation")
            try:
                name = relation_attribute(rel.args if rel else [])["name"]
            except ParamsError as e:
                raise SchemaError(
                    f"Parse @relation property failed: {e} in table {model.name}",
                    table=model.name,
                    attribute="relation",
                ) from e

            first, second = canonical_pair(model.name, ref_model.name)
            from_key = lower_first(first) + "Id"
            to_key = lower_first(second) + "Id"

            pivots[(model.name, field.name)] = PivotRecord(
                joint=name or f"{first}To{second}",
                from_table=export_name(first, style),
                to_table=export_name(second, style),
                from_key=from_key,
                to_key=to_key,
                side_key=from_key if model.name == first else to_key,
                alias=name,
            )

    if pivots:
        logger.debug(f"Found {len(pivots)} many-to-many relation side(s)")

    return pivots


def synthesize_pivot_tables(
    pivots: Iterable[PivotRecord],
    tables: List[TableIR],
    style: NamingStyle = NamingStyle.DRIZZLE,
) -> List[TableIR]:
    """
    Build one join table per distinct joint name.

    Raises:
        SchemaError: If a participant table has no primary key field
    """
    by_joint: Dict[str, PivotRecord] = {}
    for pivot in pivots:
        by_joint.setdefault(pivot.joint, pivot)

    by_name = {table.name: table for table in tables}
    result = []

    for pivot in by_joint.values():
        source = _primary_key(by_name, pivot.from_table)
        target = _primary_key(by_name, pivot.to_table)

        result.append(TableIR(
            name=export_name(pivot.joint, style),
            db_name="_" + pivot.joint,
            fields=[
                FieldIR(
                    name=pivot.from_key,
                    db_name="A",
                    type=source.type,
                    db_type_hint=source.db_type_hint,
                    nullable=source.nullable,
                ),
                FieldIR(
                    name=pivot.to_key,
                    db_name="B",
                    type=target.type,
                    db_type_hint=target.db_type_hint,
                    nullable=target.nullable,
                ),
            ],
            indexes=[
                IndexIR(
                    kind=IndexKind.PRIMARY,
                    name="pk",
                    fields=(IndexColumn(pivot.from_key), IndexColumn(pivot.to_key)),
                ),
            ],
            foreign_keys=[
                ForeignKeyIR(
                    name="A",
                    to=pivot.from_table,
                    from_fields=(pivot.from_key,),
                    to_fields=(source.name,),
                ),
                ForeignKeyIR(
                    name="B",
                    to=pivot.to_table,
                    from_fields=(pivot.to_key,),
                    to_fields=(target.name,),
                ),
            ],
            relations=[
                RelationIR(
                    name=pivot.from_table,
                    kind=RelationKind.FOREIGN,
                    to=pivot.from_table,
                    alias=pivot.side_alias(pivot.from_key),
                    fields=(pivot.from_key,),
                    references=(source.name,),
                ),
                RelationIR(
                    name=pivot.to_table,
                    kind=RelationKind.FOREIGN,
                    to=pivot.to_table,
                    alias=pivot.side_alias(pivot.to_key),
                    fields=(pivot.to_key,),
                    references=(target.name,),
                ),
            ],
        ))

    return result


def _primary_key(tables: Dict[str, TableIR], name: str) -> FieldIR:
    table = tables.get(name)
    primary = table.primary_field() if table else None
    if primary is None:
        raise SchemaError(f"Table {name} primaryKey not found", table=name)
    return primary
