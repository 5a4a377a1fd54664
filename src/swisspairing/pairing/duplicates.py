"""Detection of player pairs that met more than once."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from swisspairing.models.tournament import Match
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class DuplicatePairing:
    """All matches between the same two players of one tournament.

    Attributes
    ----------
    tournament_id : str
        Tournament the matches belong to.
    player_ids : tuple of str
        The two players, in sorted order.
    matches : list of Match
        Matches between them, earliest round first.
    """

    tournament_id: str
    player_ids: Tuple[str, str]
    matches: List[Match] = field(default_factory=list)

    @property
    def kept(self) -> Match:
        return self.matches[0]

    @property
    def extras(self) -> List[Match]:
        """Every match after the first."""
        return self.matches[1:]


def _match_order(indexed: Tuple[int, Match]) -> Tuple:
    position, match = indexed
    # Rows without an id sort after rows with one, then keep input order
    return (match.round_number, match.id is None, match.id or "", position)


def find_duplicate_pairings(matches: Iterable[Match]) -> List[DuplicatePairing]:
    """Group non-bye matches by tournament and unordered player pair.

    Returns:
        Every group holding more than one match, ordered by the round of the
        first repeat
    """
    groups: Dict[Tuple[str, frozenset], List[Tuple[int, Match]]] = {}
    for position, match in enumerate(matches):
        key = match.pair_key
        if key is None:
            continue
        groups.setdefault((match.tournament_id, key), []).append((position, match))

    duplicates = []
    for (tournament_id, pair), indexed in groups.items():
        if len(indexed) < 2:
            continue
        ordered = [m for _, m in sorted(indexed, key=_match_order)]
        player1, player2 = sorted(pair)
        duplicates.append(
            DuplicatePairing(
                tournament_id=tournament_id,
                player_ids=(player1, player2),
                matches=ordered,
            )
        )
        logger.warning(
            f"Tournament {tournament_id}: {player1} and {player2} paired "
            f"{len(ordered)} times (rounds "
            f"{', '.join(str(m.round_number) for m in ordered)})"
        )

    duplicates.sort(key=lambda d: (d.tournament_id, d.matches[1].round_number))
    return duplicates


def duplicate_matches_to_remove(matches: Iterable[Match]) -> List[Match]:
    """The later matches of every duplicated pair; the earliest one is kept."""
    return [m for dup in find_duplicate_pairings(matches) for m in dup.extras]
