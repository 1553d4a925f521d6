from datetime import datetime
from enum import Enum
from pydantic import Field, field_validator, model_validator
from typing import List, Optional

from .base import BaseGolfModel, unique_ids


class SeasonStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class Season(BaseGolfModel):
    """A named run of rounds among a fixed set of players."""
    id: str
    name: str = Field(min_length=1)
    player_ids: List[str] = Field(default_factory=list)
    status: SeasonStatus = SeasonStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @field_validator('player_ids')
    @classmethod
    def dedupe_players(cls, v):
        return unique_ids(v)

    @model_validator(mode='after')
    def validate_completion(self):
        if self.completed_at is not None and self.status != SeasonStatus.COMPLETED:
            raise ValueError("Only a completed season can have a completion time")
        return self

    @property
    def is_active(self) -> bool:
        return self.status == SeasonStatus.ACTIVE
