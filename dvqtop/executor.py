import logging
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)


class CommandResult(NamedTuple):
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
    """
    Executes a command without a shell. Returns (returncode, stdout, stderr).
    A command that cannot be started is reported as a failed result.
    """
    logger.debug("running %s", " ".join(args))
    try:
        r = subprocess.run(list(args), cwd=cwd, capture_output=True, text=True)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("%s could not run: %s", args[0], e)
        return CommandResult(127, "", f"exception: {e}")
    logger.debug("%s exited with %d", args[0], r.returncode)
    return CommandResult(r.returncode, r.stdout or "", (r.stderr or "").strip())
