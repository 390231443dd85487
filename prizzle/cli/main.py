"""Main CLI entry point for prizzle."""

from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from .. import __version__
from ..core.config import Config
from ..core.converter import Prizzle
from ..errors import PrizzleError

DEFAULT_SCHEMA_FILES = ("schema.json", "prisma/schema.json", "schema.yaml")


def _fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise click.Abort()


def find_schema_file(schema: Optional[str]) -> Optional[Path]:
    """Resolve the schema tree file, looking at the usual locations when none is given."""
    if schema:
        path = Path(schema)
        return path if path.exists() else None

    for candidate in DEFAULT_SCHEMA_FILES:
        path = Path(candidate)
        if path.exists():
            return path

    return None


@click.command()
@click.version_option(version=__version__)
@click.option("--schema", "-s", help="Prisma schema tree file (JSON or YAML)")
@click.option("--out", "-o", default="schema.ts", show_default=True, help="Drizzle schema file to generate")
@click.option("--config", "-c", help="Path to configuration file")
@click.option("--provider", help="Override the datasource provider (e.g. mysql)")
def cli(schema: Optional[str], out: str, config: Optional[str], provider: Optional[str]):
    """prizzle - generate a Drizzle ORM schema from a Prisma schema tree."""
    schema_file = find_schema_file(schema)
    if schema_file is None:
        if schema:
            _fail(f"Schema file {schema} not exists")
        _fail(
            "No schema file found. Please specify a schema tree with --schema "
            f"or place one of {', '.join(DEFAULT_SCHEMA_FILES)} in the current directory."
        )

    if config and not Path(config).exists():
        _fail(f"Configuration file {config} not exists")

    try:
        settings = Config.from_yaml(config) if config else Config()
    except (ValidationError, yaml.YAMLError) as e:
        _fail(f"Invalid configuration file {config}: {e}")

    if provider:
        settings.generator.provider_override = provider

    try:
        result = Prizzle(config=settings).convert_file(schema_file)
    except PrizzleError as e:
        _fail(str(e))

    output = Path(out)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result + "\n", encoding="utf-8")

    click.echo(f"Generated {output}")


if __name__ == "__main__":
    cli()
