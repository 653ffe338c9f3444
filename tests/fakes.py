"""In-memory stand-ins for `dvc queue` and the ntfy notifier."""

from __future__ import annotations


class FakeQueue:
    def __init__(self, statuses: list[str], logs: dict[str, str | Exception] | None = None) -> None:
        self.statuses = list(statuses)
        self.log_map = logs or {}
        self.log_calls: list[str] = []

    def status(self) -> str:
        # the last status repeats once the script runs out
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]

    def logs(self, name: str) -> str:
        self.log_calls.append(name)
        value = self.log_map.get(name, "")
        if isinstance(value, Exception):
            raise value
        return value


class FakeNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send(self, title: str, message: str) -> None:
        self.sent.append((title, message))
