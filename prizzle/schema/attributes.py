"""Signatures of the Prisma attributes the builder understands."""

from . import params as t
from .params import Param, ParamsParser

SORT_ORDERS = ("Asc", "Desc")
REFERENTIAL_ACTIONS = ("Cascade", "Restrict", "NoAction", "SetNull", "SetDefault")

# @map("name") and @@map("name")
map_attribute = ParamsParser({
    "name": Param(t.string, required=True),
})

# @db.VarChar(255)
db_type_attribute = ParamsParser({
    "length": Param(t.number),
})

# @id(...) and @unique(...) on a single field
index_attribute = ParamsParser({
    "map": Param(t.string),
    "sort": Param(t.either(*SORT_ORDERS)),
    "clustered": Param(t.boolean),
    "length": Param(t.number),
})

default_attribute = ParamsParser({
    "value": Param(t.one_of(scalar=t.scalar, fn=t.fn, literal=t.literal)),
    "map": Param(t.string),
})

# column(sort: Desc) inside @@index([...])
index_field_attribute = ParamsParser({
    "sort": Param(t.either(*SORT_ORDERS)),
    "length": Param(t.number),
})

# @@id, @@unique and @@index
compound_index_attribute = ParamsParser({
    "fields": Param(t.array_of(t.one_of(literal=t.literal, fn=t.fn)), required=True),
    "name": Param(t.string),
    "map": Param(t.string),
    "clustered": Param(t.boolean),
    "type": Param(t.literal),
})

# @relation("name") without foreign key columns
relation_attribute = ParamsParser({
    "name": Param(t.string),
    "map": Param(t.string),
})

# @relation(fields: [...], references: [...])
foreign_attribute = ParamsParser({
    "fields": Param(t.array_of(t.literal), required=True),
    "references": Param(t.array_of(t.literal), required=True),
    "name": Param(t.string),
    "map": Param(t.string),
    "onDelete": Param(t.either(*REFERENTIAL_ACTIONS)),
    "onUpdate": Param(t.either(*REFERENTIAL_ACTIONS)),
})

# dbgenerated("expr")
dbgenerated_function = ParamsParser({
    "expression": Param(t.string),
})
