"""Identifier conventions for generated Drizzle code."""

from enum import Enum
from typing import Iterable

import inflection


class NamingStyle(str, Enum):
    PRISMA = "prisma"    # keep model names as declared
    DRIZZLE = "drizzle"  # lower-first plural, e.g. BlogPost -> blogPosts


INDEX_SUFFIXES = {
    "primary": "_pKey",
    "unique": "_unq",
    "index": "_idx",
}


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def export_name(prisma_name: str, style: NamingStyle = NamingStyle.DRIZZLE) -> str:
    """Name of the exported table constant for a Prisma model."""
    if NamingStyle(style) is NamingStyle.DRIZZLE:
        return inflection.pluralize(lower_first(prisma_name))
    return prisma_name


def index_name(columns: Iterable[str], kind: str) -> str:
    """Derive an index name from its columns, e.g. ``["name", "email"]`` -> ``nameEmailIdx``."""
    return inflection.camelize("_".join(columns) + INDEX_SUFFIXES[kind], False)


def snake_name(name: str) -> str:
    return inflection.underscore(name)
