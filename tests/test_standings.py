import random

import pytest

from swisspairing.exceptions import DuplicatePlayerException
from swisspairing.models import Match, MatchOutcome, Player
from swisspairing.tournament import StandingsCalculator, calculate_standings


def _match(round_number, player1, player2, result):
    return Match(
        tournament_id="t1",
        round_number=round_number,
        player1_id=player1,
        player2_id=player2,
        result=MatchOutcome.parse(result),
    )


def _by_id(entries):
    return {e.player_id: e for e in entries}


def test_points_and_tallies_per_result():
    players = [Player(id=pid, name=pid.upper()) for pid in "abcde"]
    matches = [
        _match(1, "a", "b", "WIN_P1"),
        _match(1, "c", "d", "DRAW"),
        _match(1, "e", None, "BYE"),
        _match(2, "b", "a", "WIN_P1"),
    ]

    standings = _by_id(calculate_standings(players, matches))

    assert standings["a"].points == 1.0
    assert (standings["a"].wins, standings["a"].losses) == (1, 1)
    assert standings["b"].points == 1.0
    assert standings["c"].points == standings["d"].points == 0.5
    assert standings["c"].draws == 1
    assert standings["e"].points == 1.0
    assert standings["e"].byes == 1
    assert standings["e"].wins == 0
    assert standings["e"].matches_played == 1
    assert standings["e"].opponents == []


def test_pending_matches_do_not_count():
    players = [Player(id="a", name="A"), Player(id="b", name="B")]
    matches = [_match(1, "a", "b", None), _match(2, "b", None, None)]

    standings = _by_id(calculate_standings(players, matches))

    assert standings["a"].matches_played == 0
    assert standings["b"].points == 0.0
    assert standings["b"].byes == 0


def test_standings_do_not_depend_on_input_order():
    players = [Player(id=f"p{i}", name=f"Player {i}") for i in range(6)]
    matches = [
        _match(1, "p0", "p1", "WIN_P1"),
        _match(1, "p2", "p3", "DRAW"),
        _match(1, "p4", "p5", "WIN_P2"),
        _match(2, "p0", "p5", "DRAW"),
        _match(2, "p1", "p2", "WIN_P2"),
        _match(2, "p3", "p4", "WIN_P1"),
    ]
    expected = [e.to_dict() for e in calculate_standings(players, matches)]

    rng = random.Random(5)
    for _ in range(5):
        shuffled_players = players[:]
        shuffled_matches = matches[:]
        rng.shuffle(shuffled_players)
        rng.shuffle(shuffled_matches)
        result = calculate_standings(shuffled_players, shuffled_matches)
        assert [e.to_dict() for e in result] == expected


def test_dropped_player_hidden_but_still_counts_for_opponents():
    players = [
        Player(id="a", name="A"),
        Player(id="d", name="D", dropped=True),
    ]
    matches = [_match(1, "d", "a", "WIN_P1")]

    standings = calculate_standings(players, matches)

    assert [e.player_id for e in standings] == ["a"]
    # The dropped winner scored 1/1, so a's opponent resistance is 1.0
    assert standings[0].opponent_resistance == pytest.approx(1.0)


def test_up_to_round_ignores_later_rounds():
    players = [Player(id="a", name="A"), Player(id="b", name="B")]
    matches = [_match(1, "a", "b", "WIN_P1"), _match(2, "a", "b", "WIN_P2")]

    standings = _by_id(calculate_standings(players, matches, up_to_round=1))

    assert standings["a"].points == 1.0
    assert standings["b"].points == 0.0


def test_output_ordered_by_name_then_id():
    players = [
        Player(id="z", name="Sam"),
        Player(id="b", name="Alex"),
        Player(id="a", name="Sam"),
    ]

    standings = calculate_standings(players, [])

    assert [e.player_id for e in standings] == ["b", "a", "z"]


def test_history_only_ids_get_a_record():
    players = [Player(id="a", name="A")]
    matches = [_match(1, "a", "ghost", "WIN_P1")]

    records = StandingsCalculator().calculate_records(players, matches)

    assert records["ghost"].losses == 1
    assert records["ghost"].name == "ghost"


def test_duplicate_roster_ids_rejected():
    players = [Player(id="a", name="A"), Player(id="a", name="Again")]

    with pytest.raises(DuplicatePlayerException):
        calculate_standings(players, [])
