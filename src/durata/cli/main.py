import typer

from .._version import __version__
from .annotate import app as annotate_app
from .config import app as config_app


__all__ = ["app", "run"]


app = typer.Typer(help="Duration phrase extraction utilities", add_completion=False)


@app.callback(invoke_without_command=True)
def version_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show durata version and exit", is_eager=True),
) -> None:
    """Handle global options before any sub-command executes."""

    if version:
        typer.echo(f"durata {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.add_typer(annotate_app, name="annotate")
app.add_typer(config_app, name="config")


def run() -> None:
    """Entry point compatible with ``python -m durata.cli.main`` and console scripts."""

    from typer.main import get_command

    cli = get_command(app)
    cli()


if __name__ == "__main__":
    run()
