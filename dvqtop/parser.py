"""
Pure parsing of `dvc queue` output.

Status output grammar:

    status-output := "<empty sentinel>" | line*
    record        := a line with at least two whitespace-delimited fields
                     whose last field is Success, Failed, Queued or Running

The job name is the second field of a record. Everything else (the table
header, the trailing "Worker status" summary, blank lines) is ignored.
"""
import re
from typing import Optional

from .models import Job, JobStatus, QueueSnapshot

_STATUS_TOKENS = {s.value: s for s in JobStatus}

ELLIPSIS = "..."


def parse_line(line: str) -> Optional[Job]:
    fields = line.split()
    if len(fields) < 2:
        return None
    status = _STATUS_TOKENS.get(fields[-1])
    if status is None:
        return None
    return Job(name=fields[1], status=status)


def parse_status(text: str, empty_sentinel: str) -> QueueSnapshot:
    if empty_sentinel and empty_sentinel in text:
        return QueueSnapshot(empty=True)
    jobs = []
    for line in text.splitlines():
        job = parse_line(line)
        if job is not None:
            jobs.append(job)
    return QueueSnapshot(jobs=jobs)


def select_log_line(text: str, progress_pattern: str) -> Optional[str]:
    """
    Pick the line to show for a running experiment: the last one that looks
    like progress-bar output, else the last non-blank line.
    """
    # splitlines() also breaks on the carriage returns progress bars redraw with
    lines = [ln.rstrip() for ln in text.splitlines() if ln.strip()]
    if not lines:
        return None
    rx = re.compile(progress_pattern)
    for ln in reversed(lines):
        if rx.search(ln):
            return ln
    return lines[-1]


def truncate(line: str, width: int, marker: str = ELLIPSIS) -> str:
    if len(line) > width:
        return line[:width] + marker
    return line
