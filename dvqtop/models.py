from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    # values are the literal tokens printed by `dvc queue status`
    QUEUED = "Queued"
    RUNNING = "Running"
    SUCCESS = "Success"
    FAILED = "Failed"


class Job(BaseModel):
    name: str
    status: JobStatus


class QueueSnapshot(BaseModel):
    """Jobs seen by a single poll, in the order the queue listed them."""

    jobs: List[Job] = Field(default_factory=list)
    empty: bool = False  # queue reported itself empty

    def count(self, status: JobStatus) -> int:
        return sum(1 for j in self.jobs if j.status == status)

    def jobs_with(self, status: JobStatus) -> List[Job]:
        return [j for j in self.jobs if j.status == status]

    @property
    def counts(self) -> Dict[JobStatus, int]:
        return {s: self.count(s) for s in JobStatus}

    @property
    def total(self) -> int:
        return len(self.jobs)

    @property
    def completed(self) -> int:
        return self.count(JobStatus.SUCCESS) + self.count(JobStatus.FAILED)

    @property
    def is_empty(self) -> bool:
        return self.empty or not self.jobs

    @property
    def is_drained(self) -> bool:
        """Nothing queued or running, and at least one experiment finished."""
        return (
            self.count(JobStatus.QUEUED) == 0
            and self.count(JobStatus.RUNNING) == 0
            and self.completed > 0
        )


class LogTail(BaseModel):
    name: str
    line: Optional[str] = None     # selected log line, already truncated
    error: Optional[str] = None    # log query failed
    warning: Optional[str] = None  # log query returned nothing
