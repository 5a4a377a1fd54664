from swisspairing.models import Match
from swisspairing.pairing import duplicate_matches_to_remove, find_duplicate_pairings


def _match(match_id, round_number, player1, player2=None, tournament_id="t1"):
    return Match(
        id=match_id,
        tournament_id=tournament_id,
        round_number=round_number,
        player1_id=player1,
        player2_id=player2,
    )


def test_repeated_pairs_grouped_in_round_order():
    matches = [
        _match("9", 3, "a", "b"),
        _match("1", 1, "a", "b"),
        _match("2", 1, "c", "d"),
        _match("7", 2, "b", "a"),
        _match("3", 1, "e"),
        _match("8", 2, "e"),
    ]

    duplicates = find_duplicate_pairings(matches)

    assert len(duplicates) == 1
    dup = duplicates[0]
    assert dup.player_ids == ("a", "b")
    assert [m.id for m in dup.matches] == ["1", "7", "9"]
    assert dup.kept.id == "1"
    assert [m.id for m in duplicate_matches_to_remove(matches)] == ["7", "9"]


def test_tournaments_are_kept_apart():
    matches = [
        _match("1", 1, "a", "b", tournament_id="t1"),
        _match("2", 1, "a", "b", tournament_id="t2"),
    ]

    assert find_duplicate_pairings(matches) == []
    assert duplicate_matches_to_remove(matches) == []


def test_same_round_duplicates_keep_first_id():
    matches = [_match("5", 1, "a", "b"), _match("4", 1, "b", "a")]

    assert [m.id for m in duplicate_matches_to_remove(matches)] == ["5"]
