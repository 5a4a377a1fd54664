"""Swiss Pairing: Swiss-system pairing and standings engine."""

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

__version__ = "0.1.0"

from swisspairing.controllers import RoundManager, TournamentLockRegistry
from swisspairing.exceptions import SwissPairingException
from swisspairing.models import (
    EngineConfig,
    Match,
    MatchOutcome,
    Pairing,
    PairingResult,
    Player,
    RoundStatus,
    StandingEntry,
)
from swisspairing.pairing import (
    assign_match_numbers,
    find_duplicate_pairings,
    generate_pairings,
)
from swisspairing.tournament import (
    build_leaderboard,
    calculate_standings,
    calculate_suggested_rounds,
    complete_round,
    start_round,
)

__all__ = [
    "EngineConfig",
    "Match",
    "MatchOutcome",
    "Pairing",
    "PairingResult",
    "Player",
    "RoundManager",
    "RoundStatus",
    "StandingEntry",
    "SwissPairingException",
    "TournamentLockRegistry",
    "__version__",
    "assign_match_numbers",
    "build_leaderboard",
    "calculate_standings",
    "calculate_suggested_rounds",
    "complete_round",
    "find_duplicate_pairings",
    "generate_pairings",
    "start_round",
]
