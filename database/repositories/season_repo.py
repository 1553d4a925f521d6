"""CRUD for seasons. At most one season is active at a time."""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from models import Season, SeasonStatus
from database.repositories.base import KeyedRepository

logger = logging.getLogger(__name__)


class SeasonRepository(KeyedRepository[Season]):
    entity = "Season"

    def get_active_season(self) -> Optional[Season]:
        for season in self._records.values():
            if season.is_active:
                return season
        return None

    def create_season(self, name: str, player_ids: List[str]) -> Season:
        """Start a new active season, completing whichever one was active."""
        current = self.get_active_season()
        if current is not None:
            self.complete_season(current.id)
            logger.info("Season %s replaced by a new season", current.id)

        season = self.add(Season(id=str(uuid4()), name=name, player_ids=player_ids))
        logger.info("Created season %s with %d players", season.name, len(season.player_ids))
        return season

    def complete_season(self, season_id: str) -> Season:
        season = self.require(season_id)
        if not season.is_active:
            return season
        return self.update(
            season_id,
            status=SeasonStatus.COMPLETED,
            completed_at=datetime.now(),
        )
