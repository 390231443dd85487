"""Builders for serialized Prisma syntax trees used across the tests."""

from prizzle.prisma.ast import Schema


def arg(value):
    return {"type": "attributeArgument", "value": value}


def kv(key, value):
    return {"type": "keyValue", "key": key, "value": value}


def func(name, *params):
    return {"type": "function", "name": name, "params": list(params)}


def arr(*items):
    return {"type": "array", "args": list(items)}


def attr(name, *args, group=None, kind="field"):
    return {"type": "attribute", "kind": kind, "name": name, "group": group, "args": [arg(a) for a in args]}


def block_attr(name, *args):
    return attr(name, *args, kind="object")


def field(name, field_type, *attributes, optional=False, array=False):
    return {
        "type": "field",
        "name": name,
        "fieldType": field_type,
        "optional": optional,
        "array": array,
        "attributes": list(attributes),
    }


def model(name, *properties):
    return {"type": "model", "name": name, "properties": list(properties)}


def enum(name, *values, attributes=()):
    return {
        "type": "enum",
        "name": name,
        "enumerators": [{"type": "enumerator", "name": value} for value in values] + list(attributes),
    }


def datasource(provider="mysql"):
    return {
        "type": "datasource",
        "name": "db",
        "assignments": [
            {"type": "assignment", "key": "provider", "value": f'"{provider}"'},
            {"type": "assignment", "key": "url", "value": func("env", '"DATABASE_URL"')},
        ],
    }


def tree(*blocks):
    """Validated schema tree."""
    return Schema.model_validate({"type": "schema", "list": list(blocks)})


def id_field(name="id", field_type="Int"):
    return field(name, field_type, attr("id"), attr("default", func("autoincrement")))


