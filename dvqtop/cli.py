import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from .config import DEFAULTS, MonitorConfig, check_environment, resolve_repo_root
from .dvc import DvcQueueClient
from .errors import EnvironmentCheckError, QueryError
from .monitor import Monitor
from .notify import DEFAULT_SERVER, NtfyNotifier
from .storage import NotificationLock

app = typer.Typer(help="dvqtop - live monitor for the DVC experiment queue with ntfy notifications.")

console = Console()
err_console = Console(stderr=True)

USAGE_ERROR = 2  # exit code typer uses for bad or unknown options


def _fail(message: str) -> NoReturn:
    err_console.print(f"Error: {message}", style="red", markup=False, soft_wrap=True)
    raise typer.Exit(1)


def _usage(ctx: typer.Context, value: bool) -> None:
    if value:
        typer.echo(ctx.get_help())
        raise typer.Exit(1)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.command(add_help_option=False)
def monitor(
    interval: int = typer.Option(
        DEFAULTS["interval"], "--interval", "-n", min=1, envvar="DVQTOP_INTERVAL",
        help="Polling interval in seconds",
    ),
    topic: Optional[str] = typer.Option(
        None, "--topic", "-t", envvar="DVQTOP_TOPIC",
        help="ntfy topic for completion notifications (optional)",
    ),
    width: int = typer.Option(
        DEFAULTS["log_width"], "--width", "-w", min=1, envvar="DVQTOP_LOG_WIDTH",
        help="Characters of log output shown per running experiment",
    ),
    server: str = typer.Option(DEFAULT_SERVER, "--server", envvar="DVQTOP_NTFY_SERVER", help="ntfy server URL"),
    empty_sentinel: str = typer.Option(
        DEFAULTS["empty_sentinel"], "--empty-sentinel", envvar="DVQTOP_EMPTY_SENTINEL",
        help="Text `dvc queue status` prints for an empty queue",
    ),
    progress_pattern: str = typer.Option(
        DEFAULTS["progress_pattern"], "--progress-pattern", envvar="DVQTOP_PROGRESS_PATTERN",
        help="Regex marking progress-bar lines in experiment logs",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
    help_: bool = typer.Option(
        False, "--help", "-h", is_eager=True, callback=_usage,
        help="Show this message and exit.",
    ),
):
    """Watch `dvc queue status`, tail running experiments and notify when the queue drains."""
    _setup_logging(verbose)
    cwd = Path.cwd()
    try:
        check_environment(cwd)
        config = MonitorConfig(
            interval=interval,
            topic=topic,
            log_width=width,
            ntfy_server=server,
            empty_sentinel=empty_sentinel,
            progress_pattern=progress_pattern,
        )
        if config.notifications_enabled:
            config = config.model_copy(update={"repo_root": resolve_repo_root(cwd)})
    except EnvironmentCheckError as e:
        _fail(str(e))
    except ValidationError as e:
        _fail("; ".join(err["msg"] for err in e.errors()))

    notifier = lock = None
    if config.notifications_enabled:
        notifier = NtfyNotifier(topic=config.topic, server=config.ntfy_server)
        lock = NotificationLock(config.lock_path)

    mon = Monitor(config, DvcQueueClient(cwd=cwd), console, notifier=notifier, lock=lock)
    mon.reset()
    try:
        mon.run()
    except QueryError as e:
        _fail(str(e))
    except KeyboardInterrupt:
        raise typer.Exit(130)


def main() -> None:
    """Console entry point. Usage errors exit 1 instead of 2; Ctrl+C exits 130."""
    try:
        app()
    except SystemExit as e:
        if e.code == USAGE_ERROR:
            sys.exit(1)
        raise


if __name__ == "__main__":
    main()
