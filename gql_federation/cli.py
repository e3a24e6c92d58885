"""Command-line interface for gql-federation."""

import logging
from pathlib import Path
from typing import Optional

import click
from graphql import GraphQLError
from pydantic import ValidationError

from . import __version__
from .core.config import FederationConfig, load_config
from .core.errors import FederationError
from .core.loader import load_schema
from .core.printer import print_schema_ast, validate_output_file
from .core.report import build_report


def resolve_config(config_file: Optional[str], **overrides) -> FederationConfig:
    """Load the config file, if any, and apply options given on the command line."""
    try:
        config = load_config(config_file) if config_file else FederationConfig()
    except ValidationError as e:
        raise click.ClickException(f"Invalid config file {config_file}:\n{e}")
    updates = {key: value for key, value in overrides.items() if value is not None}
    return config.model_copy(update=updates)


def configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file or directory.",
)
config_option = click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with generation settings.",
)
federation_option = click.option(
    "--federation/--no-federation",
    default=None,
    help="Apply Apollo Federation rules (overrides the config file).",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option(version=__version__)
def main():
    """Apollo Federation analysis for GraphQL code generators.

    Decides which types and fields a generator should emit for a federated
    schema, and the parent type each reference resolver receives.
    """
    pass


@main.command()
@schema_option
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="File to write the JSON report to (default: stdout).",
)
@config_option
@federation_option
@verbose_option
def analyze(
    schema: str,
    output: Optional[str],
    config_file: Optional[str],
    federation: Optional[bool],
    verbose: bool,
):
    """Analyze a schema and print per-type generation decisions as JSON.

    Examples:

        gql-federation analyze --schema ./schema --federation

        gql-federation analyze -s ./schema.graphql -c codegen.json -o report.json
    """
    configure_logging(verbose)
    config = resolve_config(config_file, federation=federation)

    try:
        graphql_schema = load_schema(str(Path(schema).resolve()), federation=config.federation)
        report = build_report(graphql_schema, config)
    except (FederationError, GraphQLError) as e:
        raise click.ClickException(str(e))

    if verbose:
        federated = [t.name for t in report.types if t.federated]
        click.echo(f"  Types: {len(report.types)}", err=True)
        click.echo(f"  Federated types: {len(federated)}", err=True)

    content = report.model_dump_json(indent=2)
    if output:
        output_path = Path(output).resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content + "\n")
        click.echo(f"Done! Report written to {output_path}", err=True)
    else:
        click.echo(content)


@main.command("print-schema")
@schema_option
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output .graphql file.",
)
@config_option
@federation_option
@click.option(
    "--include-directives/--no-include-directives",
    default=None,
    help="Keep directive usages in the printed schema.",
)
@verbose_option
def print_schema_command(
    schema: str,
    output: str,
    config_file: Optional[str],
    federation: Optional[bool],
    include_directives: Optional[bool],
    verbose: bool,
):
    """Print the schema as SDL, removing federation constructs with --federation.

    Examples:

        gql-federation print-schema -s ./schema -o schema.graphql --federation
    """
    configure_logging(verbose)
    config = resolve_config(
        config_file, federation=federation, include_directives=include_directives
    )

    try:
        validate_output_file(output)
        graphql_schema = load_schema(str(Path(schema).resolve()), federation=config.federation)
        content = print_schema_ast(graphql_schema, config)
    except (FederationError, GraphQLError) as e:
        raise click.ClickException(str(e))

    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content + "\n")
    click.echo(f"Done! Schema written to {output_path}")


if __name__ == "__main__":
    main()
