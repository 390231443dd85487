"""Typed parser for attribute argument lists.

Every attribute argument list goes through a :class:`ParamsParser` built from a
signature of named :class:`Param` entries. Named arguments are matched by key,
the remaining entries are filled by positional arguments in declaration order.

Type parsers report mismatches through :class:`Checked` results instead of
raising, so alternatives can be tried in order by :func:`one_of` and the
reason of each failure stays attached to the final error.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import ParamsError
from ..prisma.ast import AttributeArgument, Func, KeyValue, RelationArray

_UNDECODABLE = object()


@dataclass(frozen=True)
class Checked:
    """Outcome of a type check: a parsed value or the reason it was rejected."""
    ok: bool
    value: Any = None
    reason: str = ""


@dataclass(frozen=True)
class Tagged:
    """Result of :func:`one_of`, the matching alternative name and its value."""
    tag: str
    value: Any


@dataclass(frozen=True)
class FunctionCall:
    name: str
    params: List[Any] = field(default_factory=list)


def accept(value: Any) -> Checked:
    return Checked(ok=True, value=value)


def reject(reason: str) -> Checked:
    return Checked(ok=False, reason=reason)


def _decode(value: Any) -> Any:
    """Decode a raw token (``'"text"'``, ``1024``, ``false``) into a Python value."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return _UNDECODABLE


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class TypeParser(ABC):
    """Validator for a single argument value."""

    name: str = "value"

    @abstractmethod
    def check(self, value: Any) -> Checked:
        """Check a raw value without raising."""

    def parse(self, value: Any) -> Any:
        """
        Parse a raw value.

        Raises:
            ParamsError: If the value does not match this type
        """
        checked = self.check(value)
        if not checked.ok:
            raise ParamsError(checked.reason)
        return checked.value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class StringParser(TypeParser):
    name = "string"

    def check(self, value: Any) -> Checked:
        decoded = _decode(value)
        if isinstance(decoded, str):
            return accept(decoded)
        return reject("Expected string")


class NumberParser(TypeParser):
    name = "number"

    def check(self, value: Any) -> Checked:
        decoded = _decode(value)
        if _is_number(decoded):
            return accept(decoded)
        return reject("Expected number")


class BooleanParser(TypeParser):
    name = "boolean"

    def check(self, value: Any) -> Checked:
        decoded = _decode(value)
        if isinstance(decoded, bool):
            return accept(decoded)
        return reject("Expected boolean")


class ScalarParser(TypeParser):
    """String, number, boolean or null."""

    name = "scalar"

    def check(self, value: Any) -> Checked:
        decoded = _decode(value)
        if decoded is None or isinstance(decoded, (str, bool)) or _is_number(decoded):
            return accept(decoded)
        return reject("Expected scalar")


class LiteralParser(TypeParser):
    """Raw token kept as written, e.g. an identifier or enum member."""

    name = "literal"

    def check(self, value: Any) -> Checked:
        if isinstance(value, str):
            return accept(value)
        return reject("Expected literal")


class EitherParser(TypeParser):
    """Identifier restricted to a fixed set of names."""

    def __init__(self, variants: Sequence[str]):
        self.variants = tuple(variants)
        self.name = "either(" + ", ".join(self.variants) + ")"

    def check(self, value: Any) -> Checked:
        if isinstance(value, str) and value in self.variants:
            return accept(value)
        return reject(f"Expected one of {', '.join(self.variants)}")


class FunctionParser(TypeParser):
    name = "fn"

    def check(self, value: Any) -> Checked:
        if isinstance(value, Func):
            return accept(FunctionCall(name=value.name, params=list(value.params)))
        return reject("Expected function")


class ArrayParser(TypeParser):
    def __init__(self, item: TypeParser):
        self.item = item
        self.name = f"array({item.name})"

    def check(self, value: Any) -> Checked:
        if isinstance(value, RelationArray):
            items = value.args
        elif isinstance(value, list):
            items = value
        else:
            return reject("Expected array")

        parsed = []
        for position, item in enumerate(items):
            checked = self.item.check(item)
            if not checked.ok:
                return reject(f"Item {position}: {checked.reason}")
            parsed.append(checked.value)
        return accept(parsed)


class OneOfParser(TypeParser):
    """Ordered alternatives; the first one that accepts the value wins."""

    def __init__(self, alternatives: Sequence[Tuple[str, TypeParser]]):
        self.alternatives = tuple(alternatives)
        self.name = "one_of(" + ", ".join(tag for tag, _ in self.alternatives) + ")"

    def check(self, value: Any) -> Checked:
        reasons = []
        for tag, parser in self.alternatives:
            checked = parser.check(value)
            if checked.ok:
                return accept(Tagged(tag=tag, value=checked.value))
            reasons.append(f"{tag}: {checked.reason}")
        return reject(
            f"Expected one of {', '.join(tag for tag, _ in self.alternatives)} ({'; '.join(reasons)})"
        )


string = StringParser()
number = NumberParser()
boolean = BooleanParser()
scalar = ScalarParser()
literal = LiteralParser()
fn = FunctionParser()


def either(*variants: str) -> EitherParser:
    return EitherParser(variants)


def array_of(item: TypeParser) -> ArrayParser:
    return ArrayParser(item)


def one_of(**alternatives: TypeParser) -> OneOfParser:
    """Alternatives are tried in keyword order."""
    return OneOfParser(list(alternatives.items()))


@dataclass(frozen=True)
class Param:
    type: TypeParser
    required: bool = False


Argument = Union[AttributeArgument, KeyValue, Any]


class ParamsParser:
    """
    Parser for one attribute signature.

    Calling the parser with an argument list returns a dict with an entry for
    every signature key; optional parameters that were not given map to None.
    """

    def __init__(self, signature: Dict[str, Param]):
        self.signature = dict(signature)

    def __call__(self, args: Optional[Iterable[Argument]] = None) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        positional = []

        for arg in args or []:
            value = arg.value if isinstance(arg, AttributeArgument) else arg

            if isinstance(value, KeyValue):
                param = self.signature.get(value.key)
                if param is None:
                    raise ParamsError(f"Unknown argument: {value.key}", param=value.key)
                result[value.key] = self._parse(value.key, param, value.value)
            else:
                positional.append(value)

        following = [name for name in self.signature if name not in result]

        for value in positional:
            if not following:
                raise ParamsError("Too many arguments")
            name = following.pop(0)
            result[name] = self._parse(name, self.signature[name], value)

        missing = [name for name in following if self.signature[name].required]
        if missing:
            raise ParamsError(f"Missing required params: {', '.join(missing)}")

        return {name: result.get(name) for name in self.signature}

    @staticmethod
    def _parse(name: str, param: Param, value: Any) -> Any:
        try:
            return param.type.parse(value)
        except ParamsError as e:
            raise ParamsError(f"Parse {name} argument error: {e.message}", param=name) from e
