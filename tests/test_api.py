import io
import json

import openpyxl
import pytest
from fastapi.testclient import TestClient

from api.main import create_app


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "golf.json"


@pytest.fixture
def client(monkeypatch, data_path):
    monkeypatch.setenv("GOLF_DATA_PATH", str(data_path))
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def league(client):
    """Two players, an active season, a course and one started round."""
    alice = client.post("/api/players", json={"name": "Alice"}).json()
    bob = client.post("/api/players", json={"name": "Bob"}).json()
    season = client.post(
        "/api/seasons", json={"name": "Spring", "player_ids": [alice["id"], bob["id"]]}
    ).json()
    course = client.post("/api/courses", json={"name": "Links", "holes_per_course": 9}).json()
    round_ = client.post(
        "/api/rounds",
        json={
            "season_id": season["id"],
            "course_id": course["id"],
            "player_ids": [alice["id"], bob["id"]],
        },
    ).json()
    return {"alice": alice, "bob": bob, "season": season, "course": course, "round": round_}


def _play(client, round_id, holes):
    for number, winners in holes.items():
        resp = client.put(f"/api/rounds/{round_id}/holes/{number}", json={"winner_ids": winners})
        assert resp.status_code == 200


# ================================================================
# Records
# ================================================================

def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_player_crud(client):
    created = client.post("/api/players", json={"name": "Alice", "avatar": "a.png"})
    assert created.status_code == 201
    player_id = created.json()["id"]

    renamed = client.patch(f"/api/players/{player_id}", json={"name": "Alicia"})
    assert renamed.json()["name"] == "Alicia"
    assert renamed.json()["avatar"] == "a.png"

    assert client.patch("/api/players/missing", json={"name": "X"}).status_code == 404
    assert client.delete(f"/api/players/{player_id}").status_code == 204
    assert client.get(f"/api/players/{player_id}").status_code == 404


def test_season_needs_two_known_players(client):
    alice = client.post("/api/players", json={"name": "Alice"}).json()
    assert client.post(
        "/api/seasons", json={"name": "Solo", "player_ids": [alice["id"]]}
    ).status_code == 422
    assert client.post(
        "/api/seasons", json={"name": "Ghosts", "player_ids": [alice["id"], "ghost"]}
    ).status_code == 422


def test_repeated_player_does_not_count_twice(client):
    alice = client.post("/api/players", json={"name": "Alice"}).json()
    resp = client.post(
        "/api/seasons", json={"name": "Solo", "player_ids": [alice["id"], alice["id"]]}
    )
    assert resp.status_code == 422



def test_new_season_replaces_active(client, league):
    ids = [league["alice"]["id"], league["bob"]["id"]]
    summer = client.post("/api/seasons", json={"name": "Summer", "player_ids": ids}).json()

    assert client.get("/api/seasons/active").json()["id"] == summer["id"]
    spring = client.get(f"/api/seasons/{league['season']['id']}").json()
    assert spring["status"] == "completed"


def test_round_requires_existing_course(client, league):
    resp = client.post(
        "/api/rounds",
        json={
            "season_id": league["season"]["id"],
            "course_id": "missing",
            "player_ids": [league["alice"]["id"], league["bob"]["id"]],
        },
    )
    assert resp.status_code == 422


def test_record_holes_and_complete_round(client, league):
    round_id = league["round"]["id"]
    alice, bob = league["alice"]["id"], league["bob"]["id"]
    _play(client, round_id, {1: [alice], 2: [alice, bob], 3: []})

    summary = client.get(f"/api/stats/rounds/{round_id}").json()
    assert summary["scores"] == {alice: 2, bob: 1}
    assert summary["winner_ids"] == [alice]
    assert summary["is_complete"] is False

    done = client.post(f"/api/rounds/{round_id}/complete")
    assert done.json()["completed_at"] is not None
    assert client.put(
        f"/api/rounds/{round_id}/holes/4", json={"winner_ids": [bob]}
    ).status_code == 422

    listed = client.get("/api/rounds", params={"season_id": league["season"]["id"]}).json()
    assert listed[0]["course_name"] == "Links"
    assert listed[0]["holes_recorded"] == 3


def test_hole_winners_must_be_playing_the_round(client, league):
    cara = client.post("/api/players", json={"name": "Cara"}).json()
    round_id = league["round"]["id"]

    resp = client.put(f"/api/rounds/{round_id}/holes/1", json={"winner_ids": [cara["id"]]})
    assert resp.status_code == 422
    resp = client.put(
        f"/api/rounds/{round_id}/holes/1",
        json={"winner_ids": [], "hole_in_one_player_ids": ["nobody"]},
    )
    assert resp.status_code == 422
    assert client.get(f"/api/rounds/{round_id}").json()["hole_results"] == []


def test_round_with_repeated_player_is_rejected(client, league):
    alice = league["alice"]["id"]
    resp = client.post(
        "/api/rounds",
        json={
            "season_id": league["season"]["id"],
            "course_id": league["course"]["id"],
            "player_ids": [alice, alice],
        },
    )
    assert resp.status_code == 422


def test_resume_round_in_progress(client, league):
    season_id = league["season"]["id"]
    round_id = league["round"]["id"]

    resumed = client.get("/api/rounds/in-progress", params={"season_id": season_id})
    assert resumed.status_code == 200
    assert resumed.json()["id"] == round_id

    client.post(f"/api/rounds/{round_id}/complete")
    resp = client.get("/api/rounds/in-progress", params={"season_id": season_id})
    assert resp.status_code == 404



def test_hole_number_must_be_on_the_course(client, league):
    resp = client.put(f"/api/rounds/{league['round']['id']}/holes/0", json={"winner_ids": []})
    assert resp.status_code == 422

    # Links only has nine holes
    resp = client.put(f"/api/rounds/{league['round']['id']}/holes/10", json={"winner_ids": []})
    assert resp.status_code == 422


def test_delete_season_removes_rounds(client, league):
    assert client.delete(f"/api/seasons/{league['season']['id']}").status_code == 204
    assert client.get("/api/rounds").json() == []
    assert client.get("/api/seasons/active").status_code == 404


# ================================================================
# Stats and export
# ================================================================

def test_stats_report(client, league):
    round_id = league["round"]["id"]
    alice, bob = league["alice"]["id"], league["bob"]["id"]
    _play(client, round_id, {1: [alice], 2: [alice, bob]})
    client.post(f"/api/rounds/{round_id}/complete")

    report = client.get("/api/stats").json()
    assert report["season_id"] == "all"
    assert [(p["name"], p["holes_won"], p["total_wins"]) for p in report["players"]] == [
        ("Alice", 2, 1),
        ("Bob", 1, 0),
    ]
    assert report["courses"][0]["rounds_played"] == 1
    assert report["seasons"][0]["leaderboard"][0]["player_name"] == "Alice"
    assert [e["player_id"] for e in report["seasons"][0]["leaders"]] == [alice]

    other = client.get("/api/stats", params={"season_id": "no-such-season"}).json()
    assert all(p["holes_won"] == 0 for p in other["players"])


def test_export_csv(client, league):
    evil = client.post("/api/players", json={"name": "=SUM(A1:A9)"}).json()
    resp = client.get("/api/export/players.csv")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "golf-stats-" in resp.headers["content-disposition"]
    lines = resp.text.split("\n")
    assert lines[0] == "Rank,Player,Holes Won,Rounds Won,Hole-in-Ones,Rounds Played"
    assert any("'=SUM(A1:A9)" in line for line in lines)
    assert evil["name"] == "=SUM(A1:A9)"


def test_export_workbook(client, league):
    round_id = league["round"]["id"]
    _play(client, round_id, {1: [league["alice"]["id"]]})
    client.post(f"/api/rounds/{round_id}/complete")

    client.post("/api/players", json={"name": "=SUM(A1:A9)"})

    resp = client.get("/api/export/workbook")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert resp.headers["content-disposition"].endswith(".xlsx")
    assert resp.content[:2] == b"PK"

    book = openpyxl.load_workbook(io.BytesIO(resp.content))
    assert book.sheetnames == ["Player Statistics", "Course Rankings", "Season Standings"]
    names = [row[1] for row in book["Player Statistics"].values]
    assert "'=SUM(A1:A9)" in names


# ================================================================
# Persistence
# ================================================================

def test_changes_are_written_to_data_file(client, league, data_path):
    data = json.loads(data_path.read_text(encoding="utf-8"))
    assert [p["name"] for p in data["players"]] == ["Alice", "Bob"]
    assert len(data["rounds"]) == 1
