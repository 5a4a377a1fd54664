"""Pairing and PairingResult data classes."""

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
from typing import Any, Dict, List, Optional

from swisspairing.type_hints import PairingIDs


@dataclass
class Pairing:
    """One board of a generated round. ``player2_id`` is None for a bye."""

    player1_id: str
    player1_name: str
    player2_id: Optional[str]
    player2_name: Optional[str]
    round_number: int
    table_number: Optional[int] = None

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    @property
    def player_ids(self) -> List[str]:
        if self.player2_id is None:
            return [self.player1_id]
        return [self.player1_id, self.player2_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player1_id": self.player1_id,
            "player1_name": self.player1_name,
            "player2_id": self.player2_id,
            "player2_name": self.player2_name,
            "round_number": self.round_number,
            "table_number": self.table_number,
        }


@dataclass
class PairingResult:
    """Result of a pairing computation for a single round.

    Attributes
    ----------
    round_number : int
        Round the pairings are for.
    pairings : list of Pairing
        Every eligible player appears exactly once. Byes are listed last.
    warnings : list of str
        Constraint relaxations the engine had to make, plus table seating
        conflicts once tables are assigned.
    fallback_used : bool
        Whether the completion search replaced the greedy result.
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    fallback_used: bool = False

    @property
    def byes(self) -> List[Pairing]:
        return [p for p in self.pairings if p.is_bye]

    @property
    def bye_player_ids(self) -> List[str]:
        return [p.player1_id for p in self.pairings if p.is_bye]

    @property
    def pairing_ids(self) -> List[PairingIDs]:
        return [(p.player1_id, p.player2_id) for p in self.pairings]

    @property
    def player_ids(self) -> List[str]:
        return [pid for p in self.pairings for pid in p.player_ids]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "pairings": [p.to_dict() for p in self.pairings],
            "warnings": list(self.warnings),
            "fallback_used": self.fallback_used,
        }


#  LocalWords:  PairingResult
