"""Standings and leaderboard entry points.

These combine the standings and tiebreak calculators into the two read-only
queries callers need. Both are pure functions of the roster and history and
take no locks.
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

from typing import Iterable, List, Optional, Sequence

from swisspairing.constants import SUGGESTED_ROUNDS_MAX, SUGGESTED_ROUNDS_TABLE
from swisspairing.models.player import Player
from swisspairing.models.tournament import EngineConfig, Match, StandingEntry
from swisspairing.tournament.standings_calculator import (
    StandingsCalculator,
    active_entries,
)
from swisspairing.tournament.tiebreak_calculator import TiebreakCalculator


def calculate_standings(
    players: Sequence[Player],
    matches: Iterable[Match],
    config: Optional[EngineConfig] = None,
    up_to_round: Optional[int] = None,
) -> List[StandingEntry]:
    """Standings with tiebreaks for every non-dropped player.

    Args:
        players: Tournament roster
        matches: Match history of the tournament
        config: Engine settings (resistance floor)
        up_to_round: Ignore matches from later rounds

    Returns:
        One StandingEntry per non-dropped player, ordered by name then id
    """
    config = config or EngineConfig()
    records = StandingsCalculator().calculate_records(players, matches, up_to_round)
    TiebreakCalculator(config.resistance_floor).calculate_all_tiebreaks(records)
    return active_entries(players, records)


def build_leaderboard(
    players: Sequence[Player],
    matches: Iterable[Match],
    config: Optional[EngineConfig] = None,
    up_to_round: Optional[int] = None,
) -> List[StandingEntry]:
    """Standings sorted by points, both resistances, then name."""
    config = config or EngineConfig()
    standings = calculate_standings(players, matches, config, up_to_round)
    return TiebreakCalculator(config.resistance_floor).sort_leaderboard(standings)


def calculate_suggested_rounds(player_count: int) -> int:
    """Suggested number of Swiss rounds for ``player_count`` players."""
    if player_count < 2:
        return 0
    for max_players, rounds in SUGGESTED_ROUNDS_TABLE:
        if player_count <= max_players:
            return rounds
    return SUGGESTED_ROUNDS_MAX
