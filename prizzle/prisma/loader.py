"""Prisma syntax tree loader."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from ..errors import TreeLoadError
from .ast import Schema


class SchemaLoader:
    """Loads serialized Prisma syntax trees (JSON or YAML)."""

    @staticmethod
    def load(file_path: Union[str, Path]) -> Schema:
        """
        Load a syntax tree file.

        Args:
            file_path: Path to a ``.json``, ``.yaml`` or ``.yml`` tree dump

        Returns:
            Validated schema tree

        Raises:
            FileNotFoundError: If file doesn't exist
            TreeLoadError: If the file content is not a valid tree
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Schema tree file not found: {file_path}")

        logger.info(f"Loading schema tree: {file_path}")

        fmt = "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"
        schema = SchemaLoader.load_from_string(path.read_text(encoding="utf-8"), fmt=fmt)

        logger.info(f"Loaded schema tree with {len(schema.blocks)} top-level blocks")

        return schema

    @staticmethod
    def load_from_string(text: str, fmt: str = "json") -> Schema:
        """
        Load a syntax tree from a JSON or YAML string.

        Raises:
            TreeLoadError: If the text cannot be decoded or is not a valid tree
        """
        try:
            if fmt == "yaml":
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise TreeLoadError(f"Cannot decode {fmt} schema tree: {e}") from e

        return SchemaLoader.load_from_dict(data)

    @staticmethod
    def load_from_dict(data: Dict[str, Any]) -> Schema:
        """Validate an already decoded tree."""
        if not isinstance(data, dict):
            raise TreeLoadError(f"Schema tree must be an object, got {type(data).__name__}")

        try:
            return Schema.model_validate(data)
        except ValidationError as e:
            raise TreeLoadError(
                f"Invalid schema tree ({e.error_count()} error(s)): {e.errors()[0]['msg']} "
                f"at {'.'.join(str(part) for part in e.errors()[0]['loc'])}"
            ) from e
