"""CLI interface for commandtree using Typer."""

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from commandtree.cli.loader import TargetError, load_application
from commandtree.core.application import COMMAND_NOT_FOUND, Application
from commandtree.core.exceptions import ConfigurationError, InvalidInputError
from commandtree.utils.config import Config
from commandtree.utils.logging import setup_logging

app = typer.Typer(
    name="commandtree",
    help="commandtree: run applications built from namespaced commands",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()


def load_config_callback(ctx: typer.Context, workspace: str):
    """Load configuration and store it in the context."""
    try:
        cfg = Config.load(Path(workspace))
    except Exception as e:
        console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    return workspace


def report_not_found(application: Application, input: Any) -> None:
    """Print the address that matched no command."""
    if isinstance(input, (list, tuple)):
        input = " ".join(input)
    if input:
        console.print(f"[red]Command not found: {escape(str(input))}[/red]")
    else:
        console.print("[yellow]No command given.[/yellow]")


@app.callback()
def main(
    ctx: typer.Context,
    workspace: str = typer.Option(
        ".",
        "--workspace",
        "-w",
        help="Directory holding commandtree.yaml",
        callback=load_config_callback,
    ),
) -> None:
    """
    commandtree: run applications built from namespaced commands.

    Configuration is read from commandtree.yaml in the workspace directory.
    """
    pass


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True}
)
def run(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Application as module:attribute")],
    args: Annotated[
        list[str] | None, typer.Argument(help="Command address tokens")
    ] = None,
) -> None:
    """Run a command of an application."""
    config: Config = ctx.obj["config"]
    setup_logging(config)

    try:
        application = load_application(target, config)
    except TargetError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    application.on(COMMAND_NOT_FOUND, report_not_found)

    try:
        result = application.run(list(args or []))
    except (ConfigurationError, InvalidInputError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if result is not None:
        console.print(result, markup=False)


if __name__ == "__main__":
    app()
