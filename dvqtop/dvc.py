from pathlib import Path
from typing import Optional

from .errors import LogQueryError, QueryError
from .executor import run_command

DVC = "dvc"


class DvcQueueClient:
    """Reads queue state and experiment logs through the `dvc` CLI."""

    def __init__(self, executable: str = DVC, cwd: Optional[Path] = None):
        self.executable = executable
        self.cwd = cwd

    def status(self) -> str:
        r = run_command([self.executable, "queue", "status"], cwd=self.cwd)
        if not r.ok:
            raise QueryError("Failed to retrieve DVC queue status.")
        return r.stdout

    def logs(self, name: str) -> str:
        r = run_command([self.executable, "queue", "logs", name], cwd=self.cwd)
        if not r.ok:
            raise LogQueryError(name)
        return r.stdout
