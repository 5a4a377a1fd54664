import random

import pytest

from swisspairing.exceptions import (
    InsufficientPlayersError,
    RoundNumberValidationException,
)
from swisspairing.models import EngineConfig, Match, Player
from swisspairing.pairing import eligible_players, generate_pairings


def _players(count, static=0, prefix="p"):
    return [
        Player(
            id=f"{prefix}{i}",
            name=f"{prefix.upper()} {i:02d}",
            static_seating=i < static,
        )
        for i in range(count)
    ]


def _static_ids(players):
    return {p.id for p in players if p.static_seating}


def test_eight_players_four_pairings_no_bye():
    players = _players(8)

    result = generate_pairings(players, [], 1, rng=random.Random(1))

    assert len(result.pairings) == 4
    assert result.byes == []
    assert sorted(result.player_ids) == sorted(p.id for p in players)
    assert result.warnings == []
    assert not result.fallback_used


def test_static_players_seated_against_dynamic_players():
    players = _players(3, static=3, prefix="s") + _players(4, prefix="d")
    static_ids = _static_ids(players)

    result = generate_pairings(players, [], 1, rng=random.Random(7))

    games = [p for p in result.pairings if not p.is_bye]
    assert len(games) == 3
    for game in games:
        assert len(static_ids.intersection(game.player_ids)) == 1
    assert len(result.byes) == 1
    assert result.byes[0].player1_id not in static_ids
    assert result.pairings[-1].is_bye


def test_static_surplus_pairs_static_players_with_warning():
    players = _players(4, static=4, prefix="s") + _players(1, prefix="d")
    static_ids = _static_ids(players)

    result = generate_pairings(players, [], 1, rng=random.Random(3))

    games = [p for p in result.pairings if not p.is_bye]
    static_games = [g for g in games if set(g.player_ids) <= static_ids]
    assert len(games) == 2
    assert len(static_games) == 1
    assert len(result.byes) == 1
    assert len(result.warnings) == 1
    assert "static-seating" in result.warnings[0]


def test_same_seed_same_pairings():
    players = _players(10, static=2)

    first = generate_pairings(players, [], 1, rng=random.Random(99))
    second = generate_pairings(players, [], 1, rng=random.Random(99))
    from_config = generate_pairings(players, [], 1, config=EngineConfig(seed=99))

    assert first.pairing_ids == second.pairing_ids
    assert first.pairing_ids == from_config.pairing_ids


def test_dropped_and_late_players_are_not_paired():
    players = _players(4) + [
        Player(id="gone", name="Gone", dropped=True),
        Player(id="late", name="Late", started_round=2),
    ]

    result = generate_pairings(players, [], 1, rng=random.Random(0))

    assert "gone" not in result.player_ids
    assert "late" not in result.player_ids
    assert len(result.player_ids) == 4


def test_players_already_placed_in_the_round_are_skipped():
    players = _players(6)
    history = [Match(tournament_id="t1", round_number=1, player1_id="p0", player2_id="p1")]

    assert [p.id for p in eligible_players(players, history, 1)] == [
        "p2",
        "p3",
        "p4",
        "p5",
    ]
    result = generate_pairings(players, history, 1, rng=random.Random(0))

    assert sorted(result.player_ids) == ["p2", "p3", "p4", "p5"]


def test_fewer_than_two_eligible_players():
    players = _players(1) + [Player(id="gone", name="Gone", dropped=True)]

    with pytest.raises(InsufficientPlayersError) as excinfo:
        generate_pairings(players, [], 1)

    assert excinfo.value.eligible_count == 1


def test_round_number_must_be_positive():
    with pytest.raises(RoundNumberValidationException):
        generate_pairings(_players(4), [], 0)
