from collections import Counter

from swisspairing.models import EngineConfig
from swisspairing.testing import ResultPattern, SimulatorConfig, TournamentSimulator


def _bye_counts(snapshot):
    return Counter(m.player1_id for m in snapshot.matches if m.is_bye)


def test_simulated_tournament_is_clean():
    config = SimulatorConfig(num_players=16, seed=123)

    report = TournamentSimulator(config).run()

    assert report.is_clean, report.violations
    assert len(report.rounds) == 4
    assert len(report.leaderboard) == 16
    assert all(len(r.byes) == 0 for r in report.rounds)


def test_odd_field_respects_bye_cap():
    config = SimulatorConfig(
        num_players=11,
        num_rounds=6,
        seed=321,
        result_pattern=ResultPattern.PREDICTABLE,
    )

    report = TournamentSimulator(config).run()

    assert report.is_clean, report.violations
    assert all(len(r.byes) == 1 for r in report.rounds)
    assert max(_bye_counts(report.snapshot).values()) <= 2


def test_static_seating_field():
    config = SimulatorConfig(num_players=16, num_rounds=4, static_players=4, seed=5)

    report = TournamentSimulator(config).run()

    assert report.is_clean, report.violations
    static_ids = {p.id for p in report.snapshot.players if p.static_seating}
    for match in report.snapshot.matches:
        assert not {match.player1_id, match.player2_id} <= static_ids


def test_late_entries_and_drops():
    config = SimulatorConfig(
        num_players=20,
        num_rounds=5,
        late_entrants=3,
        drop_rate=0.1,
        seed=77,
        result_pattern=ResultPattern.UPSET_FRIENDLY,
    )

    report = TournamentSimulator(config).run()

    assert report.is_clean, report.violations
    late_ids = {p.id for p in report.snapshot.players if p.started_round == 2}
    assert len(late_ids) == 3
    round_one_ids = {
        pid
        for m in report.snapshot.matches
        if m.round_number == 1
        for pid in (m.player1_id, m.player2_id)
    }
    assert not late_ids & round_one_ids
    dropped = {p.id for p in report.snapshot.players if p.dropped}
    assert {e.player_id for e in report.leaderboard}.isdisjoint(dropped)


def test_same_seed_same_tournament():
    config = SimulatorConfig(
        num_players=9, num_rounds=4, seed=42, engine=EngineConfig(seed=42)
    )

    first = TournamentSimulator(config).run()
    second = TournamentSimulator(config).run()

    assert first.snapshot.to_dict() == second.snapshot.to_dict()
