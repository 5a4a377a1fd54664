"""Standings calculation for tournaments.

This module derives points and result tallies for every player from the
match history of a tournament.
"""

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

from typing import Dict, Iterable, List, Optional, Sequence

from swisspairing.constants import DRAW_SCORE, WIN_SCORE
from swisspairing.models.enums import MatchOutcome
from swisspairing.models.player import Player
from swisspairing.models.tournament import Match, StandingEntry
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import ensure_unique_ids

logger = setup_logger(__name__)


class StandingsCalculator:
    """Derives per-player standings from match history.

    Points:
    - Win: 1 point to the winning side, a loss for the other side
    - Draw: 0.5 to both sides
    - Bye: 1 point to player1, counted separately from wins

    Only matches with a result count. The calculation is a single pass over
    the history and does not depend on the order of the roster or the
    matches.
    """

    def calculate_records(
        self,
        players: Sequence[Player],
        matches: Iterable[Match],
        up_to_round: Optional[int] = None,
    ) -> Dict[str, StandingEntry]:
        """Build a record for every player known to the roster or history.

        Dropped players and ids that only appear in the history keep a
        record so that tiebreaks can still look up their results.

        Args:
            players: Tournament roster
            matches: Match history of the tournament
            up_to_round: Ignore matches from later rounds

        Returns:
            Dictionary of player id -> StandingEntry (tiebreaks not yet set)
        """
        ensure_unique_ids(p.id for p in players)
        records: Dict[str, StandingEntry] = {
            p.id: StandingEntry(player_id=p.id, name=p.name) for p in players
        }

        def record_for(player_id: str) -> StandingEntry:
            if player_id not in records:
                logger.debug(f"Player {player_id} appears in history but not roster")
                records[player_id] = StandingEntry(player_id=player_id, name=player_id)
            return records[player_id]

        for match in matches:
            if up_to_round is not None and match.round_number > up_to_round:
                continue
            if match.result is None:
                continue

            p1 = record_for(match.player1_id)
            p2 = record_for(match.player2_id) if match.player2_id else None

            if match.result is MatchOutcome.BYE:
                p1.matches_played += 1
                p1.byes += 1
                p1.points += WIN_SCORE
                if p2 is not None:
                    logger.warning(
                        f"Round {match.round_number}: BYE recorded on a match with "
                        f"two players ({match.player1_id} vs {match.player2_id}); "
                        "crediting player1 only"
                    )
                continue

            if p2 is None:
                logger.warning(
                    f"Round {match.round_number}: {match.result.value} recorded for "
                    f"bye of {match.player1_id}; ignoring"
                )
                continue

            p1.matches_played += 1
            p2.matches_played += 1
            _add_opponent(p1, p2.player_id)
            _add_opponent(p2, p1.player_id)

            if match.result is MatchOutcome.DRAW:
                p1.draws += 1
                p2.draws += 1
                p1.points += DRAW_SCORE
                p2.points += DRAW_SCORE
            elif match.result is MatchOutcome.WIN_P1:
                p1.wins += 1
                p2.losses += 1
                p1.points += WIN_SCORE
            else:
                p2.wins += 1
                p1.losses += 1
                p2.points += WIN_SCORE

        return records

    def calculate_standings(
        self,
        players: Sequence[Player],
        matches: Iterable[Match],
        up_to_round: Optional[int] = None,
    ) -> List[StandingEntry]:
        """Standings of the non-dropped roster players, ordered by name then id."""
        records = self.calculate_records(players, matches, up_to_round)
        return active_entries(players, records)


def active_entries(
    players: Sequence[Player], records: Dict[str, StandingEntry]
) -> List[StandingEntry]:
    """Pick the records of non-dropped roster players, ordered by name then id."""
    entries = [records[p.id] for p in players if not p.dropped]
    return sorted(entries, key=lambda e: (e.name, e.player_id))


def _add_opponent(entry: StandingEntry, opponent_id: str) -> None:
    if opponent_id not in entry.opponents:
        entry.opponents.append(opponent_id)
