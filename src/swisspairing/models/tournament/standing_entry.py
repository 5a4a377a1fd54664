"""StandingEntry data class."""

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
from typing import Any, Dict, List


@dataclass
class StandingEntry:
    """Standing of one player, derived from match history.

    Attributes
    ----------
    player_id : str
        Player identifier.
    name : str
        Player name, used as the last tie-breaker.
    points : float
        1 per win or bye, 0.5 per draw, 0 per loss.
    matches_played : int
        Matches with a result, byes included.
    wins, draws, losses, byes : int
        Result tallies. Byes are not counted as wins.
    opponent_resistance : float
        Mean resistance of the player's opponents.
    opponent_opponent_resistance : float
        Mean, over opponents, of their own opponents' resistance.
    opponents : list of str
        Distinct opponents met in matches with a definite, non-bye result.
    """

    player_id: str
    name: str
    points: float = 0.0
    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    byes: int = 0
    opponent_resistance: float = 0.0
    opponent_opponent_resistance: float = 0.0
    opponents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary (leaderboard row format)."""
        return {
            "player_id": self.player_id,
            "name": self.name,
            "points": self.points,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "byes": self.byes,
            "matches_played": self.matches_played,
            "opponent_resistance": self.opponent_resistance,
            "opponent_opponent_resistance": self.opponent_opponent_resistance,
        }
