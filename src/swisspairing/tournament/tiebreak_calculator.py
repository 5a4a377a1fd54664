"""Tiebreak calculation for tournaments.

This module handles the resistance tiebreakers used to rank players with
equal points, and the leaderboard ordering built on top of them.
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

from typing import Dict, List, Tuple

from swisspairing.constants import RESISTANCE_FLOOR
from swisspairing.models.tournament import StandingEntry
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

# Digits kept when comparing tiebreak values, so values that differ only by
# float summation order compare equal
_COMPARE_PRECISION = 9


class TiebreakCalculator:
    """Calculates resistance tiebreaks for tournament standings.

    - Resistance of a player: points per match played, never below the floor
      (players without a completed match count as the floor)
    - Opponent Resistance: mean resistance of a player's distinct opponents
    - Opponent's Opponent Resistance: mean, over the player's opponents, of
      the mean resistance of that opponent's other opponents (the floor when
      the opponent has no other opponents)

    Both values come from one pre-pass that caches every player's resistance
    and the sum of resistances of each player's opponents, so the two-hop
    value is a lookup per opponent rather than a nested recomputation.
    """

    def __init__(self, resistance_floor: float = RESISTANCE_FLOOR):
        self.resistance_floor = resistance_floor

    def resistance(self, entry: StandingEntry) -> float:
        """Resistance contributed by ``entry`` to its opponents' averages."""
        if entry.matches_played <= 0:
            return self.resistance_floor
        return max(self.resistance_floor, entry.points / entry.matches_played)

    def calculate_all_tiebreaks(self, records: Dict[str, StandingEntry]) -> None:
        """Fill in both resistance values on every record.

        Args:
            records: Dictionary of all records (id -> StandingEntry), including
                dropped players so their results still count for opponents
        """
        cache = {pid: self.resistance(entry) for pid, entry in records.items()}

        def resistance_of(player_id: str) -> float:
            return cache.get(player_id, self.resistance_floor)

        # Sum of opponent resistances per player, reused for both hops
        opponent_sums = {
            pid: sum(resistance_of(o) for o in entry.opponents)
            for pid, entry in records.items()
        }

        for pid, entry in records.items():
            opponents = entry.opponents
            if not opponents:
                entry.opponent_resistance = 0.0
                entry.opponent_opponent_resistance = 0.0
                continue

            entry.opponent_resistance = opponent_sums[pid] / len(opponents)

            two_hop_total = 0.0
            for opponent_id in opponents:
                opponent = records.get(opponent_id)
                if opponent is None:
                    two_hop_total += self.resistance_floor
                    continue
                others = len(opponent.opponents)
                total = opponent_sums[opponent_id]
                if pid in opponent.opponents:
                    others -= 1
                    total -= cache[pid]
                if others > 0:
                    two_hop_total += total / others
                else:
                    two_hop_total += self.resistance_floor
            entry.opponent_opponent_resistance = two_hop_total / len(opponents)

        logger.debug(f"Calculated resistance tiebreaks for {len(records)} players")

    @staticmethod
    def sort_key(entry: StandingEntry) -> Tuple:
        """Leaderboard key: points, resistances (all descending), name, id."""
        return (
            -entry.points,
            -round(entry.opponent_resistance, _COMPARE_PRECISION),
            -round(entry.opponent_opponent_resistance, _COMPARE_PRECISION),
            entry.name,
            entry.player_id,
        )

    def sort_leaderboard(self, entries: List[StandingEntry]) -> List[StandingEntry]:
        """Return ``entries`` in leaderboard order (a total order)."""
        return sorted(entries, key=self.sort_key)
