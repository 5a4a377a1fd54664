import random
import threading

import pytest

from swisspairing.controllers import RoundManager, TournamentLockRegistry
from swisspairing.exceptions import (
    DuplicatePairingRiskError,
    InvalidResultException,
    MatchNotFoundException,
    PlayerNotFoundException,
    RoundStateException,
)
from swisspairing.models import Match, MatchOutcome, Player, RoundStatus


def _players(count):
    return [Player(id=f"p{i}", name=f"Player {i}") for i in range(count)]


def _manager(count=6, **kwargs):
    kwargs.setdefault("lock_registry", TournamentLockRegistry())
    kwargs.setdefault("rng", random.Random(11))
    return RoundManager("t1", _players(count), **kwargs)


def _play_round(manager, round_number):
    manager.start_round(round_number)
    for match in manager.get_round(round_number):
        if not match.is_bye:
            manager.record_result(
                round_number, match.player1_id, match.player2_id, "WIN_P1"
            )
    manager.complete_round(round_number)


def test_create_pairings_adds_pending_matches_with_tables():
    manager = _manager(5)

    result = manager.create_pairings()

    rows = manager.get_round(1)
    assert len(rows) == 3
    assert all(m.round_status is RoundStatus.PENDING for m in rows)
    assert all(m.result is None for m in rows)
    assert sorted(p.table_number for p in result.pairings) == [1, 2, 3]
    assert manager.current_round_number == 1


def test_pairing_a_round_twice_is_refused():
    manager = _manager()
    manager.create_pairings(1)

    with pytest.raises(DuplicatePairingRiskError) as excinfo:
        manager.create_pairings(1)

    assert excinfo.value.round_number == 1
    assert len(excinfo.value.player_ids) == 6
    assert len(manager.get_round(1)) == 3


def test_pair_remaining_after_manual_placement():
    manager = _manager()
    manager.matches.append(
        Match(tournament_id="t1", round_number=1, player1_id="p0", player2_id="p1")
    )

    result = manager.create_pairings(1, pair_remaining=True)

    assert sorted(result.player_ids) == ["p2", "p3", "p4", "p5"]
    assert len(manager.get_round(1)) == 3
    assert sorted(p.table_number for p in result.pairings) == [2, 3]
    assert manager.get_round(1)[0].match_number == 1


def test_pair_remaining_keeps_reserved_tables():
    players = _players(5) + [Player(id="s", name="Seated", static_seat=1)]
    manager = RoundManager(
        "t1", players, lock_registry=TournamentLockRegistry(), rng=random.Random(3)
    )
    manual = Match(tournament_id="t1", round_number=1, player1_id="p0", player2_id="p1")
    manager.matches.append(manual)

    result = manager.create_pairings(1, pair_remaining=True)

    seated = next(p for p in result.pairings if "s" in p.player_ids)
    other = next(p for p in result.pairings if "s" not in p.player_ids)
    assert seated.table_number == 1
    assert manual.match_number == 2
    assert other.table_number == 3


def test_pair_remaining_skips_tables_already_numbered():
    manager = _manager()
    manager.matches.append(
        Match(
            tournament_id="t1",
            round_number=1,
            player1_id="p0",
            player2_id="p1",
            match_number=2,
        )
    )

    result = manager.create_pairings(1, pair_remaining=True)

    assert sorted(p.table_number for p in result.pairings) == [1, 3]
    assert sorted(m.match_number for m in manager.get_round(1)) == [1, 2, 3]


def test_table_numbers_are_stored_on_matches():
    manager = _manager(5)

    result = manager.create_pairings(1)

    tables = {
        frozenset(p.player_ids): p.table_number for p in result.pairings
    }
    for match in manager.get_round(1):
        players = [pid for pid in (match.player1_id, match.player2_id) if pid]
        assert match.match_number == tables[frozenset(players)]
        assert Match.from_dict(match.to_dict()).match_number == match.match_number


def test_pair_remaining_refused_once_round_started():
    manager = _manager()
    manager.matches.append(
        Match(tournament_id="t1", round_number=1, player1_id="p0", player2_id="p1")
    )
    manager.start_round(1)

    with pytest.raises(RoundStateException):
        manager.create_pairings(1, pair_remaining=True)


def test_tournament_flow_without_rematches():
    manager = _manager(6)
    seen = set()

    for round_number in (1, 2, 3):
        result = manager.create_pairings()
        for pairing in result.pairings:
            if not pairing.is_bye:
                key = frozenset(pairing.player_ids)
                assert key not in seen
                seen.add(key)
        _play_round(manager, round_number)

    leaderboard = manager.leaderboard()
    assert len(leaderboard) == 6
    assert sum(e.points for e in leaderboard) == pytest.approx(9.0)
    assert manager.round_status(3) is RoundStatus.COMPLETED


def test_record_result_from_either_side():
    manager = _manager(2)
    manager.create_pairings(1)
    match = manager.get_round(1)[0]

    manager.record_result(1, match.player2_id, match.player1_id, "WIN_P1")

    assert match.result is MatchOutcome.WIN_P2
    assert match.winner_id == match.player2_id

    manager.record_result(1, match.player1_id, match.player2_id, "draw")

    assert match.result is MatchOutcome.DRAW
    assert match.winner_id is None


def test_record_result_rejects_mismatched_results():
    manager = _manager(3)
    manager.create_pairings(1)
    manager.start_round(1)
    bye = next(m for m in manager.get_round(1) if m.is_bye)
    game = next(m for m in manager.get_round(1) if not m.is_bye)

    with pytest.raises(InvalidResultException):
        manager.record_result(1, bye.player1_id, None, "DRAW")
    with pytest.raises(InvalidResultException):
        manager.record_result(1, game.player1_id, game.player2_id, "BYE")
    with pytest.raises(InvalidResultException):
        manager.record_result(1, game.player1_id, game.player2_id, "LOSS")
    with pytest.raises(MatchNotFoundException):
        manager.record_result(1, game.player1_id, bye.player1_id, "DRAW")
    with pytest.raises(PlayerNotFoundException):
        manager.record_result(1, game.player1_id, "nobody", "DRAW")

    assert bye.result is MatchOutcome.BYE
    assert game.result is None


def test_standings_skip_other_tournaments():
    manager = _manager(2)
    manager.matches.append(
        Match(
            tournament_id="other",
            round_number=1,
            player1_id="p0",
            player2_id="p1",
            result=MatchOutcome.WIN_P1,
        )
    )

    assert all(e.points == 0 for e in manager.standings())


def test_lock_registry_shares_locks_per_tournament():
    registry = TournamentLockRegistry()

    assert registry.lock_for("t1") is registry.lock_for("t1")
    assert registry.lock_for("t1") is not registry.lock_for("t2")
    assert "t1" in registry
    assert len(registry) == 2


def test_lock_registry_discards_idle_locks():
    registry = TournamentLockRegistry()
    lock = registry.lock_for("t1")

    with lock:
        assert not registry.discard("t1")
    assert registry.discard("t1")
    assert "t1" not in registry
    assert not registry.discard("t1")
    assert registry.lock_for("t1") is not lock


def test_concurrent_pairing_runs_create_one_round():
    registry = TournamentLockRegistry()
    players = _players(8)
    shared_matches = []
    managers = [
        RoundManager("t1", players, shared_matches, lock_registry=registry)
        for _ in range(4)
    ]
    barrier = threading.Barrier(len(managers))
    outcomes = []

    def run(manager):
        barrier.wait()
        try:
            manager.create_pairings(1)
            outcomes.append("paired")
        except DuplicatePairingRiskError:
            outcomes.append("refused")

    threads = [threading.Thread(target=run, args=(m,)) for m in managers]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes) == ["paired", "refused", "refused", "refused"]
    assert len(shared_matches) == 4
