"""Command-line interface for buildmatrix using Typer."""

import json
import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from buildmatrix import __version__
from buildmatrix.config import BuildMatrixSettings, create_settings
from buildmatrix.core.errors import BuildMatrixError
from buildmatrix.core.logging import get_logger, setup_logging
from buildmatrix.factory import ConfigurationFactory
from buildmatrix.resolver import create_matrix_resolver


logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)


class AppContext:
    """Application context for storing shared state."""

    def __init__(self, settings: BuildMatrixSettings, verbose: int = 0):
        self.settings = settings
        self.verbose = verbose

    def load_factory(self, definition: Path | None) -> ConfigurationFactory:
        """Resolve the matrix definition given on the command line or in settings."""
        definition = definition or self.settings.definition_file
        if definition is None:
            raise typer.BadParameter(
                "no matrix definition given (use --definition or "
                "BUILDMATRIX_DEFINITION_FILE)",
                param_hint="--definition",
            )
        return create_matrix_resolver().resolve_from_yaml(definition)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Report library errors and exit with a non-zero status code."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BuildMatrixError as e:
            logger.error("command_failed", error=str(e), error_type=type(e).__name__)
            err_console.print(f"[red]Error:[/red] {e}", highlight=False)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-v", "-vv", "--verbose", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)


DefinitionOption = Annotated[
    Path | None,
    typer.Option(
        "--definition",
        "-d",
        help="Matrix definition YAML file",
        exists=True,
        dir_okay=False,
    ),
]
SignificantOption = Annotated[
    bool,
    typer.Option("--significant", help="Leave out insignificant properties"),
]


app = typer.Typer(
    name="buildmatrix",
    help=f"""buildmatrix v{__version__}

Render build matrix configurations into identifier strings.

Common workflows:
  • Show properties:  buildmatrix properties -d matrix.yaml
  • List the matrix:  buildmatrix list -d matrix.yaml
  • All spellings:    buildmatrix strings x64-Release -d matrix.yaml
  • Build properties: buildmatrix resolve x64-Release -d matrix.yaml --json""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """buildmatrix configuration tool."""
    if version:
        print(f"buildmatrix v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    settings = create_settings()
    ctx.obj = AppContext(settings=settings, verbose=verbose)

    # Set log level based on verbosity, debug flag, or settings
    if debug or verbose >= 2:
        log_level = logging.DEBUG
    elif verbose == 1:
        log_level = logging.INFO
    else:
        log_level = settings.get_log_level_int()

    setup_logging(
        json_logs=settings.json_logs,
        log_level_name=logging.getLevelName(log_level),
        log_file=log_file or settings.log_file,
    )


@app.command()
@handle_errors
def properties(ctx: typer.Context, definition: DefinitionOption = None) -> None:
    """Show the properties of the matrix in rendering order."""
    factory = ctx.obj.load_factory(definition)

    table = Table(title="Matrix Properties", show_header=True, header_style="bold")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Default", style="green")
    table.add_column("Flags", style="dim")
    table.add_column("Values")

    for prop in factory.properties:
        flags = [
            flag
            for flag, enabled in (
                ("independent", prop.independent),
                ("insignificant", prop.insignificant),
            )
            if enabled
        ]
        values = ", ".join(
            "/".join(value.all_values) for value in factory.get_values(prop.name)
        )
        table.add_row(prop.name, prop.default_value, ", ".join(flags), values)

    console.print(table)


@app.command("list")
@handle_errors
def list_configurations(
    ctx: typer.Context,
    definition: DefinitionOption = None,
    significant: SignificantOption = False,
) -> None:
    """List the default configuration string of every matrix point."""
    factory = ctx.obj.load_factory(definition)

    seen = set()
    for configuration in factory.get_all_configurations():
        if significant:
            key = configuration.compatible_comparer.key(configuration)
            if key in seen:
                continue
            seen.add(key)
            text = configuration.get_configuration_string(
                omit_defaults=True, include_insignificant=False
            )
        else:
            text = configuration.get_default_configuration_string()
        typer.echo(text)


@app.command()
@handle_errors
def strings(
    ctx: typer.Context,
    configuration: Annotated[str, typer.Argument(help="Configuration string")],
    definition: DefinitionOption = None,
    significant: SignificantOption = False,
) -> None:
    """Print every configuration string of a configuration, aliases included."""
    factory = ctx.obj.load_factory(definition)
    parsed = factory.parse_configuration(configuration)

    results = (
        parsed.get_significant_configuration_strings()
        if significant
        else parsed.get_configuration_strings()
    )
    for text in results:
        typer.echo(text)


@app.command()
@handle_errors
def resolve(
    ctx: typer.Context,
    configuration: Annotated[str, typer.Argument(help="Configuration string")],
    definition: DefinitionOption = None,
    output_json: Annotated[
        bool, typer.Option("--json", help="Print the properties as JSON")
    ] = False,
) -> None:
    """Print the build properties of a configuration."""
    factory = ctx.obj.load_factory(definition)
    build_properties = factory.parse_configuration(configuration).get_properties()

    if output_json:
        typer.echo(json.dumps(build_properties, indent=2))
        return

    table = Table(title=configuration, show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in build_properties.items():
        table.add_row(name, value)
    console.print(table)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
