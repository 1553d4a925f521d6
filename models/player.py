from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Player(BaseGolfModel):
    """A golfer on the roster."""
    id: str
    name: str = Field(min_length=1)
    avatar: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
