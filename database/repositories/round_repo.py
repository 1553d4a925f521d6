"""CRUD for rounds and their hole results."""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from models import HoleResult, Round
from database.exceptions import IntegrityError
from database.repositories.base import KeyedRepository

logger = logging.getLogger(__name__)


class RoundRepository(KeyedRepository[Round]):
    entity = "Round"

    def get_rounds_for_season(self, season_id: str) -> List[Round]:
        return [r for r in self._records.values() if r.season_id == season_id]

    def get_round_in_progress(self, season_id: str) -> Optional[Round]:
        for round_obj in self._records.values():
            if round_obj.season_id == season_id and not round_obj.is_complete:
                return round_obj
        return None

    def create_round(self, season_id: str, course_id: str, player_ids: List[str]) -> Round:
        round_obj = self.add(
            Round(id=str(uuid4()), season_id=season_id, course_id=course_id, player_ids=player_ids)
        )
        logger.info("Started round %s in season %s", round_obj.id, season_id)
        return round_obj

    def record_hole(
        self,
        round_id: str,
        hole_number: int,
        winner_ids: List[str],
        hole_in_one_player_ids: Optional[List[str]] = None,
    ) -> Round:
        """Save one hole's winners and aces, overwriting any earlier entry for that hole."""
        round_obj = self.require(round_id)
        if round_obj.is_complete:
            raise IntegrityError(f"Round {round_id} is already complete")
        outsiders = [
            pid for pid in [*winner_ids, *(hole_in_one_player_ids or [])]
            if pid not in round_obj.player_ids
        ]
        if outsiders:
            raise IntegrityError(
                f"Players {', '.join(outsiders)} are not playing round {round_id}"
            )
        result = HoleResult(
            hole_number=hole_number,
            winner_ids=winner_ids,
            hole_in_one_player_ids=hole_in_one_player_ids or [],
        )
        return self.replace(round_obj.record_hole(result))

    def complete_round(self, round_id: str) -> Round:
        round_obj = self.require(round_id)
        if round_obj.is_complete:
            return round_obj
        logger.info("Completed round %s (%d holes recorded)", round_id, len(round_obj.hole_results))
        return self.replace(round_obj.model_copy(update={"completed_at": datetime.now()}))

    def delete_rounds_for_season(self, season_id: str) -> int:
        doomed = [r.id for r in self._records.values() if r.season_id == season_id]
        for round_id in doomed:
            del self._records[round_id]
        if doomed:
            self._changed()
        return len(doomed)
