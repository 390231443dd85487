"""Shared fixtures."""

import pytest
from loguru import logger

from trees import arr, attr, block_attr, datasource, enum, field, func, id_field, kv, model, tree


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks bound to streams that only live for one test."""
    yield
    logger.remove()


@pytest.fixture
def blog_tree():
    """User/Post/Tag schema with a many-to-many relation between posts and tags."""
    return tree(
        datasource(),
        model(
            "User",
            id_field(),
            field("email", "String", attr("unique")),
            field("role", "Role", attr("default", "USER")),
            field("posts", "Post", attr("relation", '"author"'), array=True),
            field("reviews", "Post", attr("relation", '"reviewer"'), array=True),
        ),
        model(
            "Post",
            id_field(),
            field("title", "String", attr("VarChar", "191", group="db")),
            field("authorId", "Int"),
            field("reviewerId", "Int", optional=True),
            field(
                "author", "User",
                attr("relation", '"author"', kv("fields", arr("authorId")), kv("references", arr("id"))),
            ),
            field(
                "reviewer", "User",
                attr("relation", '"reviewer"', kv("fields", arr("reviewerId")), kv("references", arr("id"))),
                optional=True,
            ),
            field("tags", "Tag", array=True),
            field("createdAt", "DateTime", attr("default", func("now"))),
            block_attr("index", arr(func("title", kv("sort", "Desc")), "authorId")),
        ),
        model(
            "Tag",
            id_field(),
            field("name", "String", attr("unique")),
            field("posts", "Post", array=True),
        ),
        enum("Role", "USER", "ADMIN"),
    )
