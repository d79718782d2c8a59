import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .pipeline import (
    CodeGeneratorConfig,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    XsdToGoError,
)


@click.command()
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="Output file (stdout if omitted)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True), help="JSON generation config")
@click.option("--package", "-p", default=None, type=str, help="Go package name")
@click.option("--prefix", default=None, type=str, help="Prefix for exported struct names")
@click.option("--exported", "-e", is_flag=True, default=False, help="Capitalize and prefix struct names")
@click.option("--format", "format_code", is_flag=True, default=False, help="Run gofmt on the generated code")
@click.option("--simplify", is_flag=True, default=False, help="Run gofmt -s (implies --format)")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing output file")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("schemas", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def xsd_to_go(output, config, package, prefix, exported, format_code, simplify, force, verbose, schemas):
    """Generate Go structs from XML Schema files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            try:
                config = CodeGeneratorConfig.from_dict(json.load(f))
            except json.JSONDecodeError as e:
                raise click.BadParameter(f"invalid JSON: {e}", param_hint="--config") from e
    else:
        config = CodeGeneratorConfig()

    # Command line flags override the config file
    if package is not None:
        config.package = package
    if prefix is not None:
        config.prefix = prefix
    if exported:
        config.exported = True

    command = reconstruct_command_line(xsd_to_go)
    try:
        codegen = PipelineGenerator.from_files(
            schemas,
            config,
            formatter_config=FormatterConfig(enabled=format_code or simplify, simplify=simplify),
            command=command,
        )
        if output is None:
            click.echo(codegen.generate(), nl=False)
        else:
            mode = OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS
            codegen.write(output, OutputConfig(mode=mode))
    except XsdToGoError as e:
        raise click.ClickException(str(e)) from e
