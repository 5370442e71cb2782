"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from modsweep import __version__
from modsweep.cli.commands import config, remove, scan
from modsweep.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="modsweep",
    help="Remove a project's declared dependency folders from node_modules.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"modsweep version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show progress for every target.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """modsweep - remove declared dependency folders from node_modules.

    Reads package.json, selects dependency sections and removes each
    dependency's folder concurrently, files first and directories
    deepest-first.
    """
    configure_logging(verbose=verbose, quiet=quiet)


# Register commands
app.command(name="remove")(remove.remove)
app.command(name="scan")(scan.scan)
app.command(name="config")(config.config)


if __name__ == "__main__":
    app()
