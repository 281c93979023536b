"""Main CLI application using Typer."""

import typer
from rich.console import Console

from pluginfo import __version__

app = typer.Typer(
    name="pluginfo",
    help="pluginfo - inspect and check stored plugin records",
    no_args_is_help=True,
)

console = Console()


@app.command()
def version():
    """Show pluginfo version."""
    console.print(f"pluginfo version {__version__}")


@app.command()
def show(
    record_file: str = typer.Argument(..., help="File holding one serialized plugin record"),
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/.pluginfo/pluginfo.yaml)",
    ),
):
    """Show the fields of a stored plugin record and its pending chain."""
    from pluginfo.cli.record_cmd import show_record

    if not show_record(record_file, config_path=config_path):
        raise typer.Exit(code=1)


@app.command()
def validate(
    record_file: str = typer.Argument(..., help="File holding one serialized plugin record"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Check that a stored plugin record can be loaded."""
    from pluginfo.cli.record_cmd import validate_record

    if not validate_record(record_file, config_path=config_path):
        raise typer.Exit(code=1)


@app.command()
def name(
    package_name: str = typer.Argument(..., help="Package name of the plugin"),
    alias: str = typer.Option("", "--alias", "-a", help="Alias declared by the plugin"),
):
    """Print the lookup name a plugin gets from its package name and alias."""
    from pluginfo.model.types import make_name

    console.print(make_name(package_name, alias))


if __name__ == "__main__":
    app()
