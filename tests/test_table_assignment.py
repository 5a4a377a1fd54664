from swisspairing.models import Pairing, Player
from swisspairing.pairing import assign_match_numbers, static_seats_from_players


def _pairing(player1, player2=None):
    return Pairing(
        player1_id=player1,
        player1_name=player1.upper(),
        player2_id=player2,
        player2_name=player2.upper() if player2 else None,
        round_number=1,
    )


def _numbers(assignments):
    return [a.match_number for a in assignments]


def test_sequential_numbers_without_static_seats():
    pairings = [_pairing("a", "b"), _pairing("c", "d"), _pairing("e")]

    assignments = assign_match_numbers(pairings, {})

    assert _numbers(assignments) == [1, 2, 3]
    assert all(a.warning is None for a in assignments)


def test_static_seat_reserved_and_skipped_by_sequence():
    pairings = [_pairing("a", "b"), _pairing("x", "c"), _pairing("d", "e")]

    assignments = assign_match_numbers(pairings, {"x": 2})

    assert _numbers(assignments) == [1, 2, 3]

    assignments = assign_match_numbers(pairings, {"c": 1})

    assert _numbers(assignments) == [2, 1, 3]


def test_both_players_seated_lower_table_wins():
    pairings = [_pairing("x", "y")]

    assignments = assign_match_numbers(pairings, {"x": 5, "y": 2})

    assert _numbers(assignments) == [2]
    assert "Seat conflict" in assignments[0].warning


def test_claimed_seat_defers_later_pairing():
    pairings = [_pairing("x", "a"), _pairing("y", "b")]

    assignments = assign_match_numbers(pairings, {"x": 1, "y": 1})

    assert _numbers(assignments) == [1, 2]
    assert assignments[0].warning is None
    assert "Table 1 already taken" in assignments[1].warning


def test_byes_get_numbers_and_seats():
    players = [
        Player(id="a", name="A"),
        Player(id="z", name="Z", static_seat=4),
    ]
    pairings = [_pairing("a", "b"), _pairing("z")]

    assignments = assign_match_numbers(pairings, static_seats_from_players(players))

    assert _numbers(assignments) == [1, 4]


def test_tables_in_use_are_skipped():
    pairings = [_pairing("a", "b"), _pairing("x", "c"), _pairing("d")]

    assignments = assign_match_numbers(pairings, {"x": 2}, taken_tables={1, 3})

    assert _numbers(assignments) == [4, 2, 5]
    assert assignments[1].warning is None

    assignments = assign_match_numbers(pairings, {"x": 1}, taken_tables={1})

    assert _numbers(assignments) == [2, 3, 4]
    assert "Table 1 already taken" in assignments[1].warning
