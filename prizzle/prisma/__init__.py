"""Prisma syntax tree model and loader."""

from .ast import Schema
from .loader import SchemaLoader

__all__ = ["Schema", "SchemaLoader"]
