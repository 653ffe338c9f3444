"""Shared fixtures for the monitor loop."""

from __future__ import annotations

from datetime import datetime

import pytest
from rich.console import Console

from dvqtop.config import MonitorConfig
from dvqtop.monitor import Monitor
from dvqtop.storage import NotificationLock, lock_path_for
from fakes import FakeNotifier, FakeQueue


@pytest.fixture()
def console() -> Console:
    return Console(record=True, width=200, color_system=None)


@pytest.fixture()
def repo_root(tmp_path):
    root = tmp_path / "my-project"
    (root / ".dvc").mkdir(parents=True)
    return root


@pytest.fixture()
def make_monitor(console, repo_root):
    """Build a Monitor around a FakeQueue; returns (monitor, notifier, lock)."""

    def _make(queue: FakeQueue, *, notify: bool = True, **overrides):
        config = MonitorConfig(topic="runs" if notify else None, repo_root=repo_root, **overrides)
        notifier = FakeNotifier()
        lock = NotificationLock(lock_path_for(repo_root))
        monitor = Monitor(
            config,
            queue,
            console,
            notifier=notifier if notify else None,
            lock=lock if notify else None,
            sleep=lambda _: None,
            clock=lambda: datetime(2024, 5, 1, 12, 30, 0),
        )
        return monitor, notifier, lock

    return _make
