import logging
from pathlib import Path

logger = logging.getLogger(__name__)

LOCK_DIR = ".dvc"
LOCK_NAME = "ntfy.lock"


def lock_path_for(repo_root: Path) -> Path:
    return repo_root / LOCK_DIR / LOCK_NAME


class NotificationLock:
    """
    File-backed flag: the file exists once a completion notification has been
    sent for the current drained state.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def acquire(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch()
        logger.debug("lock set at %s", self.path)

    def release(self) -> bool:
        """Remove the lock. Returns True if a lock file was actually removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        logger.debug("lock cleared at %s", self.path)
        return True
