from belote.ledger import GameLedger
from belote.scoring import RoundDeclaration
from belote.statistics import compute_statistics, count_lead_changes


def decl(contract="0", realized="0", announcement="N/A", remark="N/A"):
    return RoundDeclaration.from_labels(contract, realized, announcement, remark)


def test_empty_ledger_has_no_statistics():
    assert compute_statistics(GameLedger()) is None


def test_statistics_per_team():
    ledger = GameLedger()
    ledger.add_round(decl("100", "110"), decl("0", "50", "Belote"))
    ledger.add_round(decl("100", "60"), decl("0", "100", remark="Coinche"))

    stats = compute_statistics(ledger)
    assert stats is not None
    team_a, team_b = stats.teams

    assert stats.total_rounds == 2
    assert team_a.contracts_played == 2
    assert team_a.contract_percentage == 100.0
    assert team_a.success_rate == 50.0
    assert team_a.average_points == 105.0
    assert team_a.contract_distribution == {"100": 2}

    assert team_b.contracts_played == 0
    assert team_b.success_rate == 0.0
    assert team_b.belote_count == 1
    assert team_b.coinche_count == 1
    assert team_b.contract_distribution == {}

    assert stats.score_progression == [(1, 210, 70), (2, 210, 430)]
    assert stats.lead_changes == 1


def test_ties_do_not_count_as_lead_changes():
    assert count_lead_changes([(10, 0), (10, 10), (5, 20), (30, 20)]) == 2
    assert count_lead_changes([(0, 0), (10, 10)]) == 0
    assert count_lead_changes([(10, 0), (10, 10), (20, 10)]) == 0
