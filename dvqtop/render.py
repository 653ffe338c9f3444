from datetime import datetime
from typing import List

from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from .models import JobStatus, LogTail, QueueSnapshot

TITLE = "DVC Queue Status Monitor"
EMPTY_MESSAGE = "No experiments in the DVC queue."

# status -> (style, label, static log text)
STATUS_STYLE = {
    JobStatus.SUCCESS: ("green", "✓ Success", "Completed"),
    JobStatus.FAILED: ("red", "✗ Failed", "Failed"),
    JobStatus.QUEUED: ("blue", "⋯ Queued", "Waiting to start"),
    JobStatus.RUNNING: ("magenta", "⟳ Running", ""),
}


def render_header(console: Console, now: datetime) -> None:
    console.clear()
    console.print(f"[bold cyan]{TITLE}[/bold cyan]")
    console.print(f"[dim]Last Update: {now:%Y-%m-%d %H:%M:%S}[/dim]")
    console.print(Rule(style="cyan"))


def render_empty(console: Console) -> None:
    console.print(f"[blue]{EMPTY_MESSAGE}[/blue]")


def summary_line(snapshot: QueueSnapshot) -> str:
    c = snapshot.counts
    return (
        f"Total: [bold]{snapshot.total}[/bold] | "
        f"[green]✓ Success: {c[JobStatus.SUCCESS]}[/green] | "
        f"[red]✗ Failed: {c[JobStatus.FAILED]}[/red] | "
        f"[blue]⋯ Queued: {c[JobStatus.QUEUED]}[/blue] | "
        f"[magenta]⟳ Running: {c[JobStatus.RUNNING]}[/magenta]"
    )


def build_table(snapshot: QueueSnapshot, tails: List[LogTail]) -> Table:
    t = Table(show_edge=False, header_style="bold")
    t.add_column("Experiment", min_width=10)
    t.add_column("Status", min_width=10)
    t.add_column("Log", min_width=20, overflow="fold")
    for status in (JobStatus.SUCCESS, JobStatus.FAILED, JobStatus.QUEUED):
        style, label, text = STATUS_STYLE[status]
        for job in snapshot.jobs_with(status):
            t.add_row(Text(job.name), label, text, style=style)
    style, label, _ = STATUS_STYLE[JobStatus.RUNNING]
    for tail in tails:
        if tail.line is None:
            continue
        # log text is shown verbatim, never parsed as markup
        t.add_row(Text(tail.name, style=style), Text(label, style=style), Text(tail.line))
    return t


def render_snapshot(console: Console, snapshot: QueueSnapshot, tails: List[LogTail]) -> None:
    console.print(summary_line(snapshot))
    console.print(Rule(style="cyan"))
    console.print(build_table(snapshot, tails))
    for tail in tails:
        if tail.error:
            console.print(Text(tail.error, style="red"))
        elif tail.warning:
            console.print(Text(tail.warning, style="yellow"))
    console.print(Rule(style="cyan"))
