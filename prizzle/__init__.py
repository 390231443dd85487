"""Prisma schema to Drizzle ORM schema converter."""

from .core import Config, Prizzle
from .errors import (
    DialectError,
    DialectNotSupportedYetError,
    ParamsError,
    PrizzleError,
    SchemaError,
    TreeLoadError,
    UnknownFieldTypeError,
    UnsupportedDialectError,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "Prizzle",
    "PrizzleError",
    "TreeLoadError",
    "SchemaError",
    "ParamsError",
    "DialectError",
    "DialectNotSupportedYetError",
    "UnsupportedDialectError",
    "UnknownFieldTypeError",
]
