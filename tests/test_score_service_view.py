import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

from belote.exceptions import RoundRejected
from belote.rules_schema import GameConfig
from belote.service import ScoreService


def test_initial_view():
    view = ScoreService().get_session_view()

    assert view.rounds_played == 0
    assert [team.name for team in view.teams] == ["Équipe 1", "Équipe 2"]
    assert view.teams[0].players == []
    assert view.victory_threshold == 2000
    assert view.winner is None
    assert view.dealer is None
    assert not view.can_undo
    assert view.options["remarks"] == ["N/A", "Coinche", "Sur Coinche"]


def test_add_round_from_labels():
    service = ScoreService()
    view = service.add_round(
        {"contract": "100", "realized": "110"},
        {"realized": "50", "announcement": "Belote"},
    )

    row = view.teams[0].rows[0]
    assert row.mene == 1
    assert row.contrat == "100"
    assert row.chute == "Non"
    assert row.ecart == 10
    assert row.points == 210
    assert view.teams[1].rows[0].belote == "Belote"
    assert view.teams[1].rows[0].remarques == ""
    assert [team.total for team in view.teams] == [210, 70]
    assert view.can_undo


def test_rejected_round_surfaces_message():
    service = ScoreService()

    with pytest.raises(RoundRejected, match="Only one team"):
        service.add_round({"contract": "100"}, {"contract": "Capot"})
    assert service.get_session_view().rounds_played == 0


def test_check_round_and_readiness():
    service = ScoreService()

    assert not service.check_round({"remark": "Coinche"}, {"remark": "Coinche"}).valid
    assert service.check_round({"contract": "80", "realized": "90"}, {}).valid
    assert service.is_round_ready({"contract": "80", "realized": "90"}, {})
    assert not service.is_round_ready({"contract": "80"}, {"realized": "90"})


def test_restart_can_change_victory_threshold():
    service = ScoreService.from_config(GameConfig(victory_threshold=200))
    view = service.add_round({"contract": "100", "realized": "110"}, {"realized": "50"})
    assert view.winner == "Équipe 1"

    view = service.restart(victory_threshold=1000)
    assert view.rounds_played == 0
    assert view.victory_threshold == 1000
    assert view.winner is None


def test_layout_and_undo_through_service():
    service = ScoreService()
    service.rename_team(0, "Alice/Bob")
    service.rename_team(1, "Carol/Dan")
    view = service.set_layout(["Alice", "Carol", "Bob", "Dan"], "Carol")
    assert view.dealer == "Carol"
    assert view.teams[1].players == ["Carol", "Dan"]

    view = service.add_round({"contract": "90", "realized": "100"}, {"realized": "60"})
    assert view.dealer == "Bob"
    team_a, _ = service.last_round()
    assert team_a.points_awarded == 190

    view = service.undo_round()
    assert view.dealer == "Carol"
    with pytest.raises(RuntimeError):
        service.last_round()


def test_statistics_payload():
    service = ScoreService()
    assert service.get_statistics_payload() is None

    service.add_round({"contract": "100", "realized": "110"}, {"realized": "50"})
    payload = service.get_statistics_payload()
    assert payload["total_rounds"] == 1
    assert payload["teams"][0]["contracts_played"] == 1


def test_concurrent_adds_and_undos_keep_running_totals_consistent():
    service = ScoreService()
    team_a = {"contract": "100", "realized": "110"}
    team_b = {"realized": "50"}
    previous = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        def work(index):
            pair, _ = service.record_round(team_a, team_b)
            if index % 4 == 3:
                service.undo_round()
            return pair[0].round_number

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(200)))
    finally:
        sys.setswitchinterval(previous)

    rows = service.session.ledger.team_rows(0)
    assert len(rows) == 150
    assert [row.round_number for row in rows] == list(range(1, 151))
    running = 0
    for row in rows:
        running += row.points_awarded
        assert row.cumulative_total == running
    assert service.session.totals[0] == 210 * 150


def test_record_round_returns_the_rows_it_added():
    service = ScoreService()
    (team_a, team_b), view = service.record_round({"contract": "90", "realized": "100"}, {"realized": "60"})

    assert (team_a.points_awarded, team_b.points_awarded) == (190, 60)
    assert view.rounds_played == team_a.round_number == 1
