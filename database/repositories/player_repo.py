"""CRUD for the player roster."""

import logging
from typing import Optional
from uuid import uuid4

from models import Player
from database.repositories.base import KeyedRepository

logger = logging.getLogger(__name__)


class PlayerRepository(KeyedRepository[Player]):
    entity = "Player"

    def add_player(self, name: str, avatar: Optional[str] = None) -> Player:
        player = self.add(Player(id=str(uuid4()), name=name, avatar=avatar))
        logger.info("Added player %s (%s)", player.name, player.id)
        return player

    def update_player(self, player_id: str, **fields) -> Player:
        """Update name and/or avatar."""
        allowed = {"name", "avatar"}
        updates = {k: v for k, v in fields.items() if k in allowed}
        if not updates:
            return self.require(player_id)
        return self.update(player_id, **updates)

    def remove_player(self, player_id: str) -> bool:
        """Drop a player from the roster. Rounds keep their references."""
        removed = self.delete(player_id)
        if removed:
            logger.info("Removed player %s", player_id)
        return removed
