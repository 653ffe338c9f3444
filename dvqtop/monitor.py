import logging
import time
from datetime import datetime
from typing import Callable, List, Optional, Protocol

from rich.console import Console
from rich.text import Text

from .config import MonitorConfig
from .errors import LogQueryError
from .models import JobStatus, LogTail, QueueSnapshot
from .parser import parse_status, select_log_line, truncate
from .render import render_empty, render_header, render_snapshot
from .storage import NotificationLock

logger = logging.getLogger(__name__)


class QueueSource(Protocol):
    def status(self) -> str: ...

    def logs(self, name: str) -> str: ...


class Notifier(Protocol):
    def send(self, title: str, message: str) -> None: ...


def completion_message(snapshot: QueueSnapshot) -> str:
    return (
        f"Success: {snapshot.count(JobStatus.SUCCESS)}, "
        f"Failed: {snapshot.count(JobStatus.FAILED)}"
    )


class Monitor:
    """
    Poll/render/notify loop:
      - one `dvc queue status` per cycle; a failure there propagates
      - one `dvc queue logs` per running experiment; a failure skips that row
      - at most one notification per contiguous drained period, tracked by the lock file
    """

    def __init__(
        self,
        config: MonitorConfig,
        queue: QueueSource,
        console: Console,
        notifier: Optional[Notifier] = None,
        lock: Optional[NotificationLock] = None,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.queue = queue
        self.console = console
        self.notifier = notifier
        self.lock = lock
        self._sleep = sleep or time.sleep
        self._clock = clock or datetime.now

    @property
    def notifications_enabled(self) -> bool:
        return self.notifier is not None and self.lock is not None

    def reset(self) -> None:
        """Start from the Unset state: forget notifications from earlier runs."""
        if self.lock is not None:
            self.lock.release()

    def tail(self, name: str) -> LogTail:
        try:
            text = self.queue.logs(name)
        except LogQueryError as e:
            logger.debug("log query failed for %s", name)
            return LogTail(name=name, error=str(e))
        line = select_log_line(text, self.config.progress_pattern)
        if line is None:
            return LogTail(name=name, warning=f"No logs found for experiment: {name}")
        return LogTail(name=name, line=truncate(line, self.config.log_width))

    def poll_once(self) -> QueueSnapshot:
        render_header(self.console, self._clock())
        snapshot = parse_status(self.queue.status(), self.config.empty_sentinel)

        if snapshot.is_empty:
            render_empty(self.console)
            if self.lock is not None:
                self.lock.release()
            return snapshot

        tails: List[LogTail] = [self.tail(j.name) for j in snapshot.jobs_with(JobStatus.RUNNING)]
        render_snapshot(self.console, snapshot, tails)

        if self.notifications_enabled:
            self._update_notification(snapshot)
        return snapshot

    def _update_notification(self, snapshot: QueueSnapshot) -> None:
        if snapshot.is_drained:
            if not self.lock.exists():
                self._notify(snapshot)
        elif self.lock.release():
            self.console.print("Queue updated or empty; lock reset for new notifications.")

    def _notify(self, snapshot: QueueSnapshot) -> None:
        emoji = "⚠️" if snapshot.count(JobStatus.FAILED) else "✅"
        title = f"{emoji} {self.config.repo_name} experiments completed"
        self.notifier.send(title, completion_message(snapshot))
        self.lock.acquire()
        self.console.print(Text(f"Notification sent: {title}"))

    def run(self, cycles: Optional[int] = None) -> None:
        """Poll forever, or `cycles` times. Only a failing status query ends the loop."""
        done = 0
        while cycles is None or done < cycles:
            self.poll_once()
            done += 1
            self._sleep(self.config.interval)
