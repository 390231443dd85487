"""Prisma schema syntax tree.

Mirrors the node grammar emitted by the ``@mrleebo/prisma-ast`` parser so a
serialized tree (``JSON.stringify(getSchema(source))``) can be validated and
walked from Python. Scalar values keep their raw token form: a quoted string
literal arrives as ``'"text"'`` while bare identifiers such as ``Asc`` or enum
members arrive unquoted.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr


class Node(BaseModel):
    """Base syntax tree node."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class KeyValue(Node):
    """Named argument ``key: value``."""
    type: Literal["keyValue"] = "keyValue"
    key: str
    value: "Value"


class Func(Node):
    """Function call such as ``now()`` or ``name(sort: Desc)``."""
    type: Literal["function"] = "function"
    name: str
    params: List[Union[KeyValue, "Value"]] = Field(default_factory=list)


class RelationArray(Node):
    """Bracketed list such as ``[authorId, slug]``."""
    type: Literal["array"] = "array"
    args: List["Value"] = Field(default_factory=list)


Value = Union[Func, RelationArray, StrictBool, StrictInt, StrictFloat, StrictStr, None]


class AttributeArgument(Node):
    type: Literal["attributeArgument"] = "attributeArgument"
    value: Union[KeyValue, Value]


class Attribute(Node):
    """``@name(...)`` on a field (kind ``field``) or ``@@name(...)`` on a block (kind ``object``)."""
    type: Literal["attribute"] = "attribute"
    kind: str = "field"
    name: str
    group: Optional[str] = None
    args: List[AttributeArgument] = Field(default_factory=list)


class Comment(Node):
    type: Literal["comment"] = "comment"
    text: str = ""


class Break(Node):
    type: Literal["break"] = "break"


class ModelField(Node):
    type: Literal["field"] = "field"
    name: str
    field_type: Union[StrictStr, Func] = Field(alias="fieldType")
    array: bool = False
    optional: bool = False
    attributes: List[Attribute] = Field(default_factory=list)
    comment: Optional[str] = None


Property = Annotated[Union[ModelField, Attribute, Comment, Break], Field(discriminator="type")]


class Model(Node):
    type: Literal["model"] = "model"
    name: str
    properties: List[Property] = Field(default_factory=list)


class Enumerator(Node):
    type: Literal["enumerator"] = "enumerator"
    name: str
    attributes: List[Attribute] = Field(default_factory=list)
    comment: Optional[str] = None


EnumItem = Annotated[Union[Enumerator, Attribute, Comment, Break], Field(discriminator="type")]


class EnumBlock(Node):
    type: Literal["enum"] = "enum"
    name: str
    enumerators: List[EnumItem] = Field(default_factory=list)


class Assignment(Node):
    type: Literal["assignment"] = "assignment"
    key: str
    value: Value


AssignmentItem = Annotated[Union[Assignment, Comment, Break], Field(discriminator="type")]


class Datasource(Node):
    type: Literal["datasource"] = "datasource"
    name: str
    assignments: List[AssignmentItem] = Field(default_factory=list)


class Generator(Node):
    type: Literal["generator"] = "generator"
    name: str
    assignments: List[AssignmentItem] = Field(default_factory=list)


Block = Annotated[
    Union[Datasource, Generator, Model, EnumBlock, Comment, Break],
    Field(discriminator="type"),
]


class Schema(Node):
    """Root of the tree, an ordered list of top-level blocks."""
    type: Literal["schema"] = "schema"
    blocks: List[Block] = Field(default_factory=list, alias="list")

    def models(self) -> List[Model]:
        return [block for block in self.blocks if isinstance(block, Model)]

    def enums(self) -> List[EnumBlock]:
        return [block for block in self.blocks if isinstance(block, EnumBlock)]


KeyValue.model_rebuild()
Func.model_rebuild()
RelationArray.model_rebuild()
AttributeArgument.model_rebuild()
