from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import BaseGolfModel


class RoundStatus(str, Enum):
    """Lifecycle state of a round."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class Round(BaseGolfModel):
    """A round being played by a user on a course."""
    id: str
    user_id: str
    course_id: str
    status: RoundStatus = RoundStatus.IN_PROGRESS
    current_hole: Optional[int] = Field(None, ge=1, le=18)
    started_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status in (RoundStatus.NOT_STARTED, RoundStatus.IN_PROGRESS, RoundStatus.PAUSED)
