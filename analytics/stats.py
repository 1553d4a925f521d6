from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field

from models.course import Course
from models.season import Season
from models.snapshot import Snapshot

from .ranking import rank_by, top_scorers

logger = logging.getLogger(__name__)


# ================================================================
# Derived views
# ================================================================

class RoundHistoryEntry(BaseModel):
    """One completed round from a player's point of view."""
    round_id: str
    course_id: str
    course_name: str
    score: int
    date: datetime
    hole_in_ones: int = 0


class PlayerStats(BaseModel):
    player_id: str
    name: str
    avatar: Optional[str] = None
    total_wins: int = 0
    holes_won: int = 0
    hole_in_ones: int = 0
    rounds_played: int = 0
    history: List[RoundHistoryEntry] = Field(default_factory=list)


class CourseRanking(BaseModel):
    player_id: str
    player_name: str
    score: int
    date: datetime


class CourseStats(BaseModel):
    course: Course
    rounds_played: int = 0
    rankings: List[CourseRanking] = Field(default_factory=list)


class LeaderboardEntry(BaseModel):
    player_id: str
    player_name: str
    score: int = 0
    hole_in_ones: int = 0


class SeasonStats(BaseModel):
    season: Season
    rounds_played: int = 0
    player_count: int = 0
    leaderboard: List[LeaderboardEntry] = Field(default_factory=list)

    @computed_field
    @property
    def leaders(self) -> List[LeaderboardEntry]:
        """Every entry tied for the top score; empty while nobody has scored."""
        _, leader_ids = top_scorers({e.player_id: e.score for e in self.leaderboard})
        return [e for e in self.leaderboard if e.player_id in leader_ids]


class RoundSummary(BaseModel):
    round_id: str
    is_complete: bool
    scores: Dict[str, int] = Field(default_factory=dict)
    winner_ids: List[str] = Field(default_factory=list)


class StatsReport(BaseModel):
    version: int
    season_id: Optional[str] = None
    players: List[PlayerStats] = Field(default_factory=list)
    courses: List[CourseStats] = Field(default_factory=list)
    seasons: List[SeasonStats] = Field(default_factory=list)


# ================================================================
# Players
# ================================================================

def player_stats(snapshot: Snapshot, season_id: Optional[str] = None) -> List[PlayerStats]:
    """
    Rank every roster player by holes won.

    - rounds_played: one per round participated in
    - holes_won / hole_in_ones: every recorded hole counts, finished or not
    - total_wins: one per completed round where the player tied for the most holes
    - history: one entry per completed round played

    Ties on holes won keep roster order.
    """
    stats: Dict[str, PlayerStats] = {
        player.id: PlayerStats(player_id=player.id, name=player.name, avatar=player.avatar)
        for player in snapshot.players.values()
    }

    for round_obj in snapshot.rounds_for_season(season_id):
        for player_id in round_obj.player_ids:
            if player_id in stats:
                stats[player_id].rounds_played += 1

        round_scores = round_obj.holes_won_by_player()
        round_aces = round_obj.hole_in_ones_by_player()

        for player_id, won in round_scores.items():
            if player_id in stats:
                stats[player_id].holes_won += won
        for player_id, aces in round_aces.items():
            if player_id in stats:
                stats[player_id].hole_in_ones += aces

        if not round_obj.is_complete:
            continue

        course_name = snapshot.course_name(round_obj.course_id)
        for player_id in round_obj.player_ids:
            if player_id not in stats:
                continue
            stats[player_id].history.append(
                RoundHistoryEntry(
                    round_id=round_obj.id,
                    course_id=round_obj.course_id,
                    course_name=course_name,
                    score=round_scores.get(player_id, 0),
                    date=round_obj.started_at,
                    hole_in_ones=round_aces.get(player_id, 0),
                )
            )

        # players removed from the roster do not compete for the round win
        roster_scores = {pid: score for pid, score in round_scores.items() if pid in stats}
        _, winner_ids = top_scorers(roster_scores)
        for player_id in winner_ids:
            stats[player_id].total_wins += 1

    return rank_by(stats.values(), key=lambda s: s.holes_won)


# ================================================================
# Courses
# ================================================================

def course_stats(snapshot: Snapshot, season_id: Optional[str] = None) -> List[CourseStats]:
    """
    Best single-round score per player at each course.

    Only completed rounds count. When a player matches their best score
    again, the earlier round's date is kept. Courses are ordered by the
    number of completed rounds played there.
    """
    rounds = [r for r in snapshot.rounds_for_season(season_id) if r.is_complete]
    results: List[CourseStats] = []

    for course in snapshot.courses.values():
        course_rounds = [r for r in rounds if r.course_id == course.id]
        best: Dict[str, CourseRanking] = {}

        for round_obj in course_rounds:
            for player_id, score in round_obj.holes_won_by_player().items():
                name = snapshot.player_name(player_id)
                if name is None:
                    continue
                current = best.get(player_id)
                if (
                    current is None
                    or score > current.score
                    or (score == current.score and round_obj.started_at < current.date)
                ):
                    best[player_id] = CourseRanking(
                        player_id=player_id,
                        player_name=name,
                        score=score,
                        date=round_obj.started_at,
                    )

        results.append(
            CourseStats(
                course=course,
                rounds_played=len(course_rounds),
                rankings=rank_by(best.values(), key=lambda r: r.score),
            )
        )

    return rank_by(results, key=lambda c: c.rounds_played)


# ================================================================
# Seasons
# ================================================================

def season_leaderboard(snapshot: Snapshot, season_id: str) -> List[LeaderboardEntry]:
    """Holes won and hole-in-ones across all of a season's rounds, finished or not."""
    board: Dict[str, LeaderboardEntry] = {}

    def entry_for(player_id: str) -> Optional[LeaderboardEntry]:
        if player_id not in board:
            name = snapshot.player_name(player_id)
            if name is None:
                return None
            board[player_id] = LeaderboardEntry(player_id=player_id, player_name=name)
        return board[player_id]

    for round_obj in snapshot.rounds_for_season(season_id):
        for hole in round_obj.hole_results:
            for winner_id in hole.winner_ids:
                entry = entry_for(winner_id)
                if entry is not None:
                    entry.score += 1
            for player_id in hole.hole_in_one_player_ids:
                entry = entry_for(player_id)
                if entry is not None:
                    entry.hole_in_ones += 1

    return rank_by(board.values(), key=lambda e: e.score)


def season_stats(snapshot: Snapshot) -> List[SeasonStats]:
    """Standings for every season. Not affected by a season filter."""
    results: List[SeasonStats] = []
    for season in snapshot.seasons.values():
        season_rounds = snapshot.rounds_for_season(season.id)
        results.append(
            SeasonStats(
                season=season,
                rounds_played=sum(1 for r in season_rounds if r.is_complete),
                player_count=sum(1 for pid in season.player_ids if pid in snapshot.players),
                leaderboard=season_leaderboard(snapshot, season.id),
            )
        )
    return results


# ================================================================
# Rounds
# ================================================================

def round_summary(snapshot: Snapshot, round_id: str) -> Optional[RoundSummary]:
    """Live scoreboard for one round: holes won per player and current leaders."""
    round_obj = snapshot.get_round(round_id)
    if round_obj is None:
        return None

    scores = {player_id: 0 for player_id in round_obj.player_ids}
    for player_id, won in round_obj.holes_won_by_player().items():
        scores[player_id] = won

    _, winner_ids = top_scorers(scores)
    return RoundSummary(
        round_id=round_obj.id,
        is_complete=round_obj.is_complete,
        scores=scores,
        winner_ids=winner_ids,
    )


def compute_stats(snapshot: Snapshot, season_id: Optional[str] = None) -> StatsReport:
    """Recompute all three ranking views from one snapshot."""
    report = StatsReport(
        version=snapshot.version,
        season_id=season_id,
        players=player_stats(snapshot, season_id),
        courses=course_stats(snapshot, season_id),
        seasons=season_stats(snapshot),
    )
    logger.debug(
        "Computed stats for snapshot v%d (%d players, %d courses, %d seasons)",
        snapshot.version, len(report.players), len(report.courses), len(report.seasons),
    )
    return report
