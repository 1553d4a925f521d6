from .export import (
    build_workbook,
    export_filename,
    guard_formula,
    players_to_csv,
    quote_delimited,
    sanitize_csv_value,
    workbook_to_xlsx,
)
from .ranking import rank_by, top_scorers
from .stats import (
    compute_stats,
    course_stats,
    player_stats,
    round_summary,
    season_leaderboard,
    season_stats,
)

__all__ = [
    "compute_stats",
    "player_stats",
    "course_stats",
    "season_stats",
    "season_leaderboard",
    "round_summary",
    "top_scorers",
    "rank_by",
    "guard_formula",
    "quote_delimited",
    "sanitize_csv_value",
    "players_to_csv",
    "build_workbook",
    "export_filename",
    "workbook_to_xlsx",
]
