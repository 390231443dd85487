"""Exceptions raised by the Prisma to Drizzle conversion pipeline."""

from typing import Optional


class PrizzleError(Exception):
    """Base class for every conversion failure."""


class TreeLoadError(PrizzleError):
    """The serialized syntax tree does not match the Prisma AST grammar."""


class SchemaError(PrizzleError):
    """Schema error with the offending table and attribute attached."""

    def __init__(self, message: str, table: Optional[str] = None, attribute: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.table = table
        self.attribute = attribute

    def __str__(self) -> str:
        msg = self.message
        if self.attribute and self.attribute not in msg:
            msg += f" (attribute: {self.attribute})"
        if self.table and self.table not in msg:
            msg += f" in table {self.table}"
        return msg


class ParamsError(PrizzleError):
    """Attribute argument list does not match its signature."""

    def __init__(self, message: str, param: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.param = param


class DialectError(PrizzleError):
    """The schema cannot be rendered for the requested dialect."""


class DialectNotSupportedYetError(DialectError):
    """Known Drizzle dialect without a generator."""


class UnsupportedDialectError(DialectError):
    """Provider that Drizzle has no dialect for."""


class UnknownFieldTypeError(DialectError):
    """Field type and database hint combination with no column constructor."""
