"""Main entry point for the taskman CLI."""

import typer

from taskman_cli import __version__
from taskman_cli.api.client import get_client
from taskman_cli.commands import config, tasks
from taskman_cli.config import get_config_manager
from taskman_cli.utils.console import get_console
from taskman_cli.utils.logger import close_logger, get_logger, log_file_path
from taskman_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="taskman",
    cls=SuggestingGroup,
    help="Terminal client for the Task Manager API",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]taskman[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]API: {get_config_manager().tasks_url}[/dim]")
    console.print(f"[dim]Log: {log_file_path()}[/dim]")


@app.command()
def ui() -> None:
    """Open the full-screen task page."""
    from taskman_cli.ui.app import TaskManagerApp

    client = get_client()
    get_logger().info("opening task page")
    try:
        TaskManagerApp(client, discard_stale=client.config.ui.discard_stale).run()
    finally:
        close_logger()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
