from __future__ import annotations

import csv
import io
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from .stats import PlayerStats, StatsReport

logger = logging.getLogger(__name__)

PLAYER_EXPORT_HEADERS = [
    "Rank",
    "Player",
    "Holes Won",
    "Rounds Won",
    "Hole-in-Ones",
    "Rounds Played",
]

PLAYER_SHEET = "Player Statistics"
COURSE_SHEET = "Course Rankings"
SEASON_SHEET = "Season Standings"

SHEET_COLUMNS = {
    PLAYER_SHEET: PLAYER_EXPORT_HEADERS,
    COURSE_SHEET: ["Course", "Rank", "Player", "Score", "Date"],
    SEASON_SHEET: ["Season", "Rank", "Player", "Score", "Hole-in-Ones"],
}

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Leading characters that spreadsheet software treats as the start of a formula.
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t")

Workbook = Dict[str, List[Dict[str, Any]]]


# ================================================================
# Value sanitization
# ================================================================

def guard_formula(value: Any) -> str:
    """Prefix a single quote onto text that would be read as a formula."""
    text = str(value)
    if text.startswith(FORMULA_PREFIXES):
        return "'" + text
    return text


def _write_csv(rows: Iterable[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def quote_delimited(value: Any) -> str:
    """Delimited-text quoting for one cell, as csv.writer emits it inside a row."""
    text = str(value)
    if not text:
        return text
    return _write_csv([[text]])[:-1]


def sanitize_csv_value(value: Any) -> str:
    """A single cell as it appears in the CSV: formula guard, then CSV quoting."""
    return quote_delimited(guard_formula(value))


# ================================================================
# Delimited text
# ================================================================

def player_rows(players: Iterable[PlayerStats]) -> List[List[Any]]:
    """Player ranking rows in export field order, rank starting at 1."""
    return [
        [index, stat.name, stat.holes_won, stat.total_wins, stat.hole_in_ones, stat.rounds_played]
        for index, stat in enumerate(players, start=1)
    ]


def players_to_csv(players: Iterable[PlayerStats]) -> str:
    """
    Player rankings as comma-separated text.

    Every cell gets the formula guard exactly once; csv.writer adds the
    quoting. No players gives just the header line.
    """
    rows = player_rows(players)
    content = _write_csv(
        [guard_formula(cell) for cell in row] for row in [PLAYER_EXPORT_HEADERS, *rows]
    )
    logger.info("Exported %d player rows as CSV", len(rows))
    return content


# ================================================================
# Workbook
# ================================================================

def build_workbook(report: StatsReport) -> Workbook:
    """
    Sheet name -> rows for a spreadsheet export.

    The player sheet is always present; course and season sheets only
    when they have rows. Name cells get the formula guard but no
    delimited-text quoting.
    """
    workbook: Workbook = {}

    workbook[PLAYER_SHEET] = [
        dict(zip(PLAYER_EXPORT_HEADERS, [rank, guard_formula(name), *counts]))
        for rank, name, *counts in player_rows(report.players)
    ]

    course_rows = [
        {
            "Course": guard_formula(course_stat.course.name),
            "Rank": rank,
            "Player": guard_formula(ranking.player_name),
            "Score": ranking.score,
            "Date": ranking.date.strftime("%Y-%m-%d"),
        }
        for course_stat in report.courses
        for rank, ranking in enumerate(course_stat.rankings, start=1)
    ]
    if course_rows:
        workbook[COURSE_SHEET] = course_rows

    season_rows = [
        {
            "Season": guard_formula(season_stat.season.name),
            "Rank": rank,
            "Player": guard_formula(entry.player_name),
            "Score": entry.score,
            "Hole-in-Ones": entry.hole_in_ones,
        }
        for season_stat in report.seasons
        for rank, entry in enumerate(season_stat.leaderboard, start=1)
    ]
    if season_rows:
        workbook[SEASON_SHEET] = season_rows

    logger.info(
        "Built workbook with sheets: %s",
        ", ".join(f"{name} ({len(rows)})" for name, rows in workbook.items()),
    )
    return workbook


def export_filename(extension: str, today: date) -> str:
    """Dated download name, e.g. golf-stats-2026-03-01.csv."""
    return f"golf-stats-{today.strftime('%Y-%m-%d')}.{extension.lstrip('.')}"


def workbook_to_xlsx(workbook: Workbook) -> bytes:
    """Write each sheet's rows to an .xlsx file in memory, one named sheet per section."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet_name, rows in workbook.items():
            df = pd.DataFrame(rows, columns=SHEET_COLUMNS[sheet_name])
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    return buffer.getvalue()
