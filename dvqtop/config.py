import re
import shutil
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .dvc import DVC
from .errors import EnvironmentCheckError
from .executor import run_command
from .notify import DEFAULT_SERVER
from .storage import LOCK_DIR, lock_path_for

DEFAULTS = {
    "interval": 30,
    "log_width": 50,
    "empty_sentinel": "No tasks in the queue",
    "progress_pattern": r"s/it|it/s",
}


class MonitorConfig(BaseModel):
    interval: int = Field(default=DEFAULTS["interval"], gt=0)
    topic: Optional[str] = None
    log_width: int = Field(default=DEFAULTS["log_width"], gt=0)
    ntfy_server: str = DEFAULT_SERVER
    empty_sentinel: str = DEFAULTS["empty_sentinel"]
    progress_pattern: str = DEFAULTS["progress_pattern"]
    repo_root: Optional[Path] = None

    @field_validator("topic")
    @classmethod
    def _blank_topic_disables(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("progress_pattern")
    @classmethod
    def _compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid progress pattern {v!r}: {e}") from e
        return v

    @property
    def notifications_enabled(self) -> bool:
        return self.topic is not None

    @property
    def lock_path(self) -> Optional[Path]:
        return lock_path_for(self.repo_root) if self.repo_root is not None else None

    @property
    def repo_name(self) -> str:
        return self.repo_root.name if self.repo_root is not None else Path.cwd().name


def check_environment(cwd: Path, executable: str = DVC) -> None:
    """Startup preconditions: dvc on PATH and an initialized .dvc workspace."""
    if shutil.which(executable) is None:
        raise EnvironmentCheckError("DVC is not installed. Please install DVC to use this script.")
    if not (Path(cwd) / LOCK_DIR).is_dir():
        raise EnvironmentCheckError(
            "DVC is not initialized in this repository. Please initialize DVC to use this script."
        )


def resolve_repo_root(cwd: Path) -> Path:
    r = run_command(["git", "rev-parse", "--show-toplevel"], cwd=cwd)
    if not r.ok or not r.stdout.strip():
        raise EnvironmentCheckError("Not inside a Git repository")
    return Path(r.stdout.strip())
