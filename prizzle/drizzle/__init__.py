"""Drizzle code generation module."""

from .dialect import ColumnType, Dialect, MySqlDialect, resolve_dialect
from .generator import DrizzleGenerator
from .imports import ImportsCollector

__all__ = [
    "ColumnType",
    "Dialect",
    "MySqlDialect",
    "resolve_dialect",
    "DrizzleGenerator",
    "ImportsCollector",
]
