"""Step run diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class StepStatus(Enum):
    """Individual step execution status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class StepResult:
    """Record of one step dispatch."""

    name: str
    status: StepStatus = StepStatus.PENDING
    error: Optional[BaseException] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    duration: Optional[float] = None
    cleaned_up: bool = False
    cleanup_error: Optional[BaseException] = None

    def complete(self, error: Optional[BaseException] = None) -> None:
        """Mark step as complete."""
        self.end_time = datetime.now()
        self.duration = (self.end_time - self.start_time).total_seconds()
        if error is not None:
            self.status = StepStatus.FAILED
            self.error = error
        else:
            self.status = StepStatus.COMPLETED

    def mark_cleaned_up(self, error: Optional[BaseException] = None) -> None:
        self.cleaned_up = True
        self.cleanup_error = error
