from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import ValidationError

from models import Course, Player, Round, Season, Snapshot
from database.exceptions import DatabaseError, IntegrityError
from database.repositories import (
    CourseRepository,
    PlayerRepository,
    RoundRepository,
    SeasonRepository,
)

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Record store for players, seasons, courses and rounds.

    Notes:
    - Each record type is a flat collection keyed by id; nothing checks
      references on delete, so rounds may point at removed players or courses.
    - Every mutation bumps `version`. `snapshot()` returns an immutable view
      for the stats engine.
    - With a `data_path`, the store is written to that JSON file after every
      change (or once at the end of a `batch()`).
    """

    def __init__(self, data_path: Optional[Union[str, Path]] = None) -> None:
        self.data_path = Path(data_path).resolve() if data_path else None
        self.version = 0
        self._batch_depth = 0
        self._dirty = False

        self.players = PlayerRepository(on_change=self._on_change)
        self.seasons = SeasonRepository(on_change=self._on_change)
        self.courses = CourseRepository(on_change=self._on_change)
        self.rounds = RoundRepository(on_change=self._on_change)

    # ================================================================
    # Change tracking
    # ================================================================

    def _on_change(self) -> None:
        self.version += 1
        if self._batch_depth:
            self._dirty = True
        else:
            self.save()

    @contextmanager
    def batch(self) -> Iterator[None]:
        """
        Group several mutations into one write to disk.

        The file is written once when the outermost batch exits, including
        when it exits with an error, so it always matches memory.
        """
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self._dirty = False
                self.save()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            version=self.version,
            players=self.players.as_dict(),
            seasons=self.seasons.as_dict(),
            courses=self.courses.as_dict(),
            rounds=self.rounds.as_dict(),
        )

    # ================================================================
    # Operations spanning record types
    # ================================================================

    def start_round(self, season_id: str, course_id: str, player_ids: List[str]) -> Round:
        """Create a round after checking that its season and course exist."""
        if season_id not in self.seasons:
            raise IntegrityError(f"Season {season_id} does not exist")
        if course_id not in self.courses:
            raise IntegrityError(f"Course {course_id} does not exist")
        return self.rounds.create_round(season_id, course_id, player_ids)

    def delete_season(self, season_id: str) -> bool:
        """Delete a season together with all of its rounds."""
        with self.batch():
            removed = self.seasons.delete(season_id)
            if removed:
                count = self.rounds.delete_rounds_for_season(season_id)
                logger.info("Deleted season %s and %d rounds", season_id, count)
        return removed

    # ================================================================
    # Persistence
    # ================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [p.model_dump(mode="json") for p in self.players.list()],
            "seasons": [s.model_dump(mode="json") for s in self.seasons.list()],
            "courses": [c.model_dump(mode="json") for c in self.courses.list()],
            "rounds": [r.model_dump(mode="json") for r in self.rounds.list()],
        }

    def save(self) -> None:
        if self.data_path is None:
            return
        self.data_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.data_path.with_suffix(self.data_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        tmp_path.replace(self.data_path)
        logger.debug("Saved store v%d to %s", self.version, self.data_path)

    def load(self) -> None:
        """Read the data file if it exists. Missing file means an empty store."""
        if self.data_path is None or not self.data_path.exists():
            return
        try:
            data = json.loads(self.data_path.read_text(encoding="utf-8"))
            players = [Player.model_validate(p) for p in data.get("players", [])]
            seasons = [Season.model_validate(s) for s in data.get("seasons", [])]
            courses = [Course.model_validate(c) for c in data.get("courses", [])]
            rounds = [Round.model_validate(r) for r in data.get("rounds", [])]
        except (json.JSONDecodeError, ValidationError, AttributeError) as e:
            raise IntegrityError(f"Could not read {self.data_path}: {e}") from e

        self.players.load(players)
        self.seasons.load(seasons)
        self.courses.load(courses)
        self.rounds.load(rounds)
        self.version += 1
        logger.info(
            "Loaded %d players, %d seasons, %d courses, %d rounds from %s",
            len(players), len(seasons), len(courses), len(rounds), self.data_path,
        )

    @classmethod
    def open(cls, data_path: Optional[Union[str, Path]] = None) -> "DatabaseManager":
        manager = cls(data_path)
        try:
            manager.load()
        except OSError as e:
            raise DatabaseError(f"Could not open data file {data_path}: {e}") from e
        return manager
