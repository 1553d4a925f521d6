import io
from datetime import date, datetime

import openpyxl
import pytest

from analytics.export import (
    COURSE_SHEET,
    PLAYER_EXPORT_HEADERS,
    PLAYER_SHEET,
    SEASON_SHEET,
    build_workbook,
    export_filename,
    guard_formula,
    players_to_csv,
    quote_delimited,
    sanitize_csv_value,
    workbook_to_xlsx,
)
from analytics.stats import compute_stats, player_stats
from models import Course, HoleResult, Player, Round, Season, Snapshot


def _build_snapshot(names=("Alice", "Bob"), completed=True):
    players = [Player(id=f"p{i}", name=name) for i, name in enumerate(names)]
    ids = [p.id for p in players]
    started = datetime(2026, 3, 14, 10)
    holes = [
        HoleResult(hole_number=n, winner_ids=[ids[n % len(ids)]]) for n in range(1, 4)
    ]
    return Snapshot.from_records(
        players=players,
        seasons=[Season(id="s1", name="Spring", player_ids=ids)],
        courses=[Course(id="c1", name="Links")],
        rounds=[
            Round(
                id="r1",
                season_id="s1",
                course_id="c1",
                player_ids=ids,
                hole_results=holes,
                started_at=started,
                completed_at=started if completed else None,
            )
        ],
    )


# ================================================================
# Sanitization
# ================================================================

@pytest.mark.parametrize("name", ["=SUM(A1:A9)", "+1", "-5", "@cmd", "\tTabbed"])
def test_formula_prefixes_are_neutralized(name):
    assert guard_formula(name) == "'" + name


@pytest.mark.parametrize("name", ["Alice", "Mary-Jane", "O'Brien", "42", "a=b"])
def test_plain_names_pass_through(name):
    assert guard_formula(name) == name
    assert sanitize_csv_value(name) == name


def test_delimited_quoting():
    assert quote_delimited("Smith, John") == '"Smith, John"'
    assert quote_delimited('The "Shark"') == '"The ""Shark"""'
    assert quote_delimited("two\nlines") == '"two\nlines"'
    assert quote_delimited("Plain") == "Plain"
    assert quote_delimited("") == ""


def test_guard_and_quoting_both_apply():
    assert sanitize_csv_value("=HYPERLINK(\"x\",\"y\")") == "\"'=HYPERLINK(\"\"x\"\",\"\"y\"\")\""
    assert sanitize_csv_value("-1,5") == "\"'-1,5\""


def test_numbers_are_stringified():
    assert sanitize_csv_value(7) == "7"
    assert sanitize_csv_value(-3) == "'-3"


# ================================================================
# CSV
# ================================================================

def test_players_csv_layout():
    stats = player_stats(_build_snapshot())
    lines = players_to_csv(stats).split("\n")

    assert lines[0] == ",".join(PLAYER_EXPORT_HEADERS)
    # p1 (Bob) wins holes 1 and 3, p0 (Alice) wins hole 2
    assert lines[1] == "1,Bob,2,1,0,1"
    assert lines[2] == "2,Alice,1,0,0,1"


def test_players_csv_empty_is_header_only():
    assert players_to_csv([]) == "Rank,Player,Holes Won,Rounds Won,Hole-in-Ones,Rounds Played\n"


def test_players_csv_quotes_names_with_newlines():
    stats = player_stats(_build_snapshot(names=("two\nlines", 'Tom "The Shark"')))
    content = players_to_csv(stats)

    assert '"two\nlines"' in content
    assert '"Tom ""The Shark"""' in content
    assert content.endswith("\n")


def test_players_csv_sanitizes_names():
    stats = player_stats(_build_snapshot(names=("=SUM(A1:A9)", "Smith, Jo")))
    lines = players_to_csv(stats).split("\n")

    assert "'=SUM(A1:A9)" in lines[2]
    assert '"Smith, Jo"' in lines[1]
    # guard applied once
    assert "''=" not in players_to_csv(stats)


# ================================================================
# Workbook
# ================================================================

def test_workbook_sheets():
    workbook = build_workbook(compute_stats(_build_snapshot()))

    assert list(workbook) == [PLAYER_SHEET, COURSE_SHEET, SEASON_SHEET]
    assert workbook[PLAYER_SHEET][0] == {
        "Rank": 1,
        "Player": "Bob",
        "Holes Won": 2,
        "Rounds Won": 1,
        "Hole-in-Ones": 0,
        "Rounds Played": 1,
    }
    assert workbook[COURSE_SHEET][0] == {
        "Course": "Links",
        "Rank": 1,
        "Player": "Bob",
        "Score": 2,
        "Date": "2026-03-14",
    }
    assert workbook[SEASON_SHEET][1] == {
        "Season": "Spring",
        "Rank": 2,
        "Player": "Alice",
        "Score": 1,
        "Hole-in-Ones": 0,
    }


def test_workbook_formula_name_sanitized_everywhere():
    workbook = build_workbook(compute_stats(_build_snapshot(names=("=SUM(A1:A9)", "Bob"))))

    for sheet in (PLAYER_SHEET, COURSE_SHEET, SEASON_SHEET):
        names = [row["Player"] for row in workbook[sheet]]
        assert "'=SUM(A1:A9)" in names
        assert "=SUM(A1:A9)" not in names


def test_workbook_does_not_quote_commas():
    workbook = build_workbook(compute_stats(_build_snapshot(names=("Smith, Jo", "Bob"))))
    assert "Smith, Jo" in [row["Player"] for row in workbook[PLAYER_SHEET]]


def test_workbook_skips_empty_sheets():
    assert build_workbook(compute_stats(Snapshot())) == {PLAYER_SHEET: []}

    in_progress = build_workbook(compute_stats(_build_snapshot(completed=False)))
    assert COURSE_SHEET not in in_progress
    assert SEASON_SHEET in in_progress


def test_xlsx_has_named_sheets_with_headers():
    content = workbook_to_xlsx(build_workbook(compute_stats(_build_snapshot())))
    book = openpyxl.load_workbook(io.BytesIO(content))

    assert content[:2] == b"PK"
    assert book.sheetnames == [PLAYER_SHEET, COURSE_SHEET, SEASON_SHEET]
    rows = list(book[PLAYER_SHEET].values)
    assert list(rows[0]) == PLAYER_EXPORT_HEADERS
    assert list(rows[1]) == [1, "Bob", 2, 1, 0, 1]
    assert list(book[COURSE_SHEET].values)[1][4] == "2026-03-14"


def test_xlsx_keeps_guarded_names_as_text():
    report = compute_stats(_build_snapshot(names=("=SUM(A1:A9)", "Bob")))
    book = openpyxl.load_workbook(io.BytesIO(workbook_to_xlsx(build_workbook(report))))

    # Player is column B on the player sheet, column C on the others
    for sheet, column in ((PLAYER_SHEET, 1), (COURSE_SHEET, 2), (SEASON_SHEET, 2)):
        names = [row[column] for row in book[sheet].values]
        assert "'=SUM(A1:A9)" in names
        assert "=SUM(A1:A9)" not in names


def test_xlsx_empty_player_sheet_keeps_header():
    book = openpyxl.load_workbook(io.BytesIO(workbook_to_xlsx(build_workbook(compute_stats(Snapshot())))))

    assert book.sheetnames == [PLAYER_SHEET]
    assert list(book[PLAYER_SHEET].values) == [tuple(PLAYER_EXPORT_HEADERS)]


def test_export_filename():
    assert export_filename("csv", date(2026, 3, 1)) == "golf-stats-2026-03-01.csv"
    assert export_filename(".xlsx", date(2026, 12, 25)) == "golf-stats-2026-12-25.xlsx"
