"""Main prizzle orchestration class"""

import sys
from pathlib import Path
from typing import Any, Dict

from loguru import logger

from .config import Config
from ..drizzle.generator import DrizzleGenerator
from ..prisma.ast import Schema
from ..prisma.loader import SchemaLoader
from ..schema.builder import SchemaBuilder
from ..schema.ir import SchemaIR


class Prizzle:
    """Converts Prisma schema trees to Drizzle schema source"""

    def __init__(self, config_path: str | Path | None = None, config: Config | None = None):
        """
        Initialize converter

        Args:
            config_path: Path to configuration YAML file
            config: Optional Config object (overrides config_path)
        """
        if config:
            self.config = config
        elif config_path:
            self.config = Config.from_yaml(config_path)
        else:
            self.config = Config()

        self._setup_logging()

        self.loader = SchemaLoader()
        self.builder = SchemaBuilder(naming_style=self.config.builder.naming_style)
        self.generator = DrizzleGenerator(
            default_varchar_length=self.config.generator.default_varchar_length,
            provider_override=self.config.generator.provider_override,
        )

    def _setup_logging(self) -> None:
        """Setup logging configuration"""
        log_level = self.config.system.log_level
        log_file = self.config.system.log_file

        logger.remove()
        logger.add(
            sys.stderr,
            level=log_level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
        )

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                log_file,
                level=log_level,
                rotation="10 MB",
                retention="7 days",
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"
            )

    def build(self, tree: Schema) -> SchemaIR:
        """Build the schema IR without generating code"""
        return self.builder.build(tree)

    def convert(self, tree: Schema) -> str:
        """
        Convert a Prisma syntax tree to Drizzle source

        Args:
            tree: Prisma syntax tree

        Returns:
            Generated TypeScript source
        """
        return self.generator.generate(self.builder.build(tree))

    def convert_file(self, file_path: str | Path) -> str:
        """Load a serialized tree from disk and convert it"""
        return self.convert(self.loader.load(file_path))

    def convert_string(self, text: str, fmt: str = "json") -> str:
        """Convert a serialized tree given as JSON or YAML text"""
        return self.convert(self.loader.load_from_string(text, fmt=fmt))

    def convert_dict(self, data: Dict[str, Any]) -> str:
        """Convert an already decoded tree"""
        return self.convert(self.loader.load_from_dict(data))
