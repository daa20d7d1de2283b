from concurrent.futures import ThreadPoolExecutor

from fastapi.testclient import TestClient

from server.score_service import app

client = TestClient(app)


def start(**payload):
    resp = client.post("/session/start", json=payload)
    assert resp.status_code == 200
    return resp.json()["session_id"]


def test_values_reference():
    resp = client.get("/values")
    assert resp.status_code == 200
    assert resp.json()["contracts"]["Capot"] == 500


def test_validate_without_session():
    resp = client.post(
        "/validate",
        json={"team_a": {"contract": "100", "announcement": "Quadruple Belote"}, "team_b": {"announcement": "Belote"}},
    )
    data = resp.json()
    assert data["valid"] is False
    assert data["message"] == "The sum of Belote announcements cannot exceed 80 points."
    assert data["ready"] is False


def test_validate_accepts_announcements_totalling_80():
    resp = client.post(
        "/validate",
        json={"team_a": {"contract": "100", "realized": "110", "announcement": "Triple Belote"}, "team_b": {"announcement": "Belote"}},
    )
    data = resp.json()
    assert data["valid"] is True
    assert data["message"] is None
    assert data["ready"] is True


def test_round_lifecycle():
    session_id = start(team_names=["Alice/Bob", "Carol/Dan"], victory_threshold=250)

    resp = client.post(
        f"/session/{session_id}/rounds",
        json={"team_a": {"contract": "100", "realized": "110"}, "team_b": {"realized": "50"}},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["round"]["team_a"]["points"] == 210
    assert data["round"]["team_b"]["total"] == 50
    assert data["gameOver"] is False

    resp = client.post(
        f"/session/{session_id}/rounds",
        json={"team_a": {"contract": "Capot", "realized": "Capot"}, "team_b": {}},
    )
    data = resp.json()
    assert data["gameOver"] is True
    assert data["state"]["winner"] == "Alice/Bob"

    resp = client.post(f"/session/{session_id}/undo")
    state = resp.json()["state"]
    assert state["rounds_played"] == 1
    assert [team["total"] for team in state["teams"]] == [210, 50]

    resp = client.get(f"/session/{session_id}/statistics")
    assert resp.json()["statistics"]["total_rounds"] == 1

    resp = client.post(f"/session/{session_id}/reset", json={})
    assert resp.json()["state"]["rounds_played"] == 0


def test_rejected_round_returns_400():
    session_id = start()
    resp = client.post(
        f"/session/{session_id}/rounds",
        json={"team_a": {"contract": "100"}, "team_b": {"contract": "90"}},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Only one team can declare a contract per round."
    assert client.get(f"/session/{session_id}").json()["state"]["rounds_played"] == 0


def test_layout_and_rename():
    session_id = start()
    client.post(f"/session/{session_id}/teams", json={"team": 0, "name": "Alice/Bob"})
    client.post(f"/session/{session_id}/teams", json={"team": 1, "name": "Carol/Dan"})

    resp = client.post(
        f"/session/{session_id}/layout",
        json={"seats": ["Alice", "Carol", "Bob", "Dan"], "dealer": "Dan"},
    )
    assert resp.status_code == 200
    assert resp.json()["state"]["dealer"] == "Dan"

    resp = client.post(
        f"/session/{session_id}/layout",
        json={"seats": ["Alice", "Bob", "Carol", "Dan"], "dealer": "Dan"},
    )
    assert resp.status_code == 400

    resp = client.post(f"/session/{session_id}/teams", json={"team": 5, "name": "Eve/Frank"})
    assert resp.status_code == 400


def test_bad_start_and_unknown_session():
    assert client.post("/session/start", json={"victory_threshold": 0}).status_code == 400
    assert client.get("/session/missing").status_code == 404
    assert client.post("/session/missing/undo").status_code == 404


def test_concurrent_round_posts_each_get_their_own_row():
    session_id = start()
    payload = {"team_a": {"contract": "100", "realized": "110"}, "team_b": {"realized": "50"}}

    def post_round(_):
        resp = client.post(f"/session/{session_id}/rounds", json=payload)
        assert resp.status_code == 200
        return resp.json()["round"]["team_a"]["mene"]

    with ThreadPoolExecutor(max_workers=8) as pool:
        numbers = list(pool.map(post_round, range(40)))

    assert sorted(numbers) == list(range(1, 41))
    state = client.get(f"/session/{session_id}").json()["state"]
    assert [row["total"] for row in state["teams"][0]["rows"]] == [210 * n for n in range(1, 41)]


def test_rename_to_other_team_name_returns_400():
    session_id = start(team_names=["Alice/Bob", "Carol/Dan"])
    resp = client.post(f"/session/{session_id}/teams", json={"team": 1, "name": "Alice/Bob"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Both teams cannot share the same name."
