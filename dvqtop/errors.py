class MonitorError(Exception):
    """Base class for errors raised by dvqtop."""


class EnvironmentCheckError(MonitorError):
    """Missing dependency, uninitialized workspace or not inside a repository."""


class QueryError(MonitorError):
    """`dvc queue status` failed. Fatal."""


class LogQueryError(MonitorError):
    """`dvc queue logs` failed for one experiment. The job is skipped this cycle."""

    def __init__(self, name: str, message: str = ""):
        super().__init__(message or f"Failed to retrieve logs for experiment: {name}")
        self.name = name
