"""Command-line interface for gql-freeze."""

import asyncio
import sys

import click

from .config import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_PROFILE,
    EndpointProfile,
    FileProfile,
    ProcessMethod,
    load_config,
)
from .core.errors import GqlFreezeError, SchemaParseError, UnknownTypeReference
from .core.fetch import read_endpoint, read_file, read_pipe
from .core.generator import CodeGenerator
from .core.introspection import from_introspection_response
from .core.ir import GqlDocument
from .core.parser import from_sdl_string


@click.group()
@click.version_option(package_name="gql-freeze")
def main():
    """Frozen GraphQL client code generator.

    Generate TypeScript schema and codec modules from a GraphQL schema.
    """
    pass


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Path to the JSON configuration file.",
)
@click.option(
    "--profile",
    "-p",
    default=DEFAULT_PROFILE,
    show_default=True,
    help="Profile from the configuration file.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with a custom index.ts.j2 bootstrap template.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject unrecognized keys in introspection responses.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(config_path: str, profile: str, template_dir: str | None, strict: bool, verbose: bool):
    """Generate schema.ts, codec.ts and index.ts from a GraphQL schema.

    Examples:

        gql-freeze generate

        gql-freeze generate --config ./graphql-freeze.json --profile local

        curl ... | gql-freeze generate -p piped
    """
    try:
        asyncio.run(_generate(config_path, profile, template_dir, strict, verbose))
    except GqlFreezeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


async def _generate(
    config_path: str,
    profile_name: str,
    template_dir: str | None,
    strict: bool,
    verbose: bool,
):
    config = load_config(config_path)
    profile = config.get_profile(profile_name)

    if verbose:
        click.echo(f"Config: {config_path} (profile: {profile_name})")
        click.echo(f"Output: {config.output_directory}")

    # Fetch
    if isinstance(profile, EndpointProfile):
        click.echo(f"Fetching schema from {profile.url}...")
        raw_content = await read_endpoint(profile.url, profile.headers)
    elif isinstance(profile, FileProfile):
        schema_path = config.resolve_path(profile.path)
        click.echo(f"Reading schema from {schema_path}...")
        raw_content = read_file(schema_path)
    else:
        click.echo("Reading schema from stdin...", err=True)
        raw_content = read_pipe()

    # Parse schema
    click.echo("Parsing schema...")
    try:
        document = _parse(raw_content, profile.process, strict)
    except (SchemaParseError, UnknownTypeReference):
        if verbose:
            click.echo("Unparseable schema input:", err=True)
            click.echo(raw_content, err=True)
        raise

    if verbose:
        click.echo(f"  Scalars: {len(document.scalars)}")
        click.echo(f"  Enums: {len(document.enums)}")
        click.echo(f"  Outputs: {len(document.outputs)}")
        click.echo(f"  Inputs: {len(document.inputs)}")

    # Generate code
    click.echo("Generating code...")
    generator = CodeGenerator(
        document,
        config.output_directory,
        options=config.code_file_options,
        runtime=config.runtime,
        template_dir=template_dir,
    )
    results = await generator.generate()
    for file_name, result in results.items():
        click.echo(f"{file_name} - {result.value}")

    click.echo(f"Done! Generated code in {config.output_directory}")


def _parse(raw_content: str, process: ProcessMethod, strict: bool) -> GqlDocument:
    if process is ProcessMethod.INTROSPECTION:
        return from_introspection_response(raw_content, strict=strict)
    return from_sdl_string(raw_content)


if __name__ == "__main__":
    main()
