"""Tournament standings for Swiss Pairing.

This package derives standings from match history and ranks players with
resistance tiebreakers.
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

from swisspairing.tournament.leaderboard import (
    build_leaderboard,
    calculate_standings,
    calculate_suggested_rounds,
)
from swisspairing.tournament.round_lifecycle import (
    complete_round,
    round_matches,
    round_status,
    start_round,
)
from swisspairing.tournament.standings_calculator import StandingsCalculator
from swisspairing.tournament.tiebreak_calculator import TiebreakCalculator

__all__ = [
    "StandingsCalculator",
    "TiebreakCalculator",
    "build_leaderboard",
    "calculate_standings",
    "calculate_suggested_rounds",
    "complete_round",
    "round_matches",
    "round_status",
    "start_round",
]
