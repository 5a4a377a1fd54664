"""Match data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from swisspairing.exceptions import InvalidResultException, ValidationException
from swisspairing.models.enums import MatchOutcome, RoundStatus
from swisspairing.type_hints import PlayerPair
from swisspairing.utils.validation import validate_round_number_strict


@dataclass
class Match:
    """One row of match history.

    Attributes
    ----------
    tournament_id : str
        Tournament the match belongs to.
    round_number : int
        Round number (1-indexed).
    player1_id : str
        First player. For a bye this is the player receiving it.
    player2_id : str or None
        Second player, or None for a bye.
    result : MatchOutcome or None
        Stored result, None while the match is pending.
    winner_id : str or None
        Winning player, derived from ``result``.
    round_status : RoundStatus
        Status of the whole round, repeated on every row of that round.
    id : str or None
        Caller's identifier for the row, if it has one.
    match_number : int or None
        Table the match is played at, None until tables are assigned.
    """

    tournament_id: str
    round_number: int
    player1_id: str
    player2_id: Optional[str] = None
    result: Optional[MatchOutcome] = None
    winner_id: Optional[str] = None
    round_status: RoundStatus = RoundStatus.PENDING
    id: Optional[str] = None
    match_number: Optional[int] = None

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    @property
    def pair_key(self) -> Optional[PlayerPair]:
        """Unordered player pair, or None for a bye."""
        if self.player2_id is None:
            return None
        return frozenset({self.player1_id, self.player2_id})

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "round_number": self.round_number,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "result": self.result.value if self.result else None,
            "winner_id": self.winner_id,
            "round_status": self.round_status.value,
            "match_number": self.match_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], tournament_id: str = "") -> "Match":
        """Deserialize a match row.

        Raises:
            InvalidResultException: If the result, round number, match
                number or player ids are malformed
        """
        player1 = data.get("player1_id")
        if player1 is None:
            raise InvalidResultException(f"Match row has no player1_id: {data!r}")
        player2 = data.get("player2_id")
        winner = data.get("winner_id")
        try:
            round_number = validate_round_number_strict(data.get("round_number"))
        except ValidationException as e:
            raise InvalidResultException(str(e)) from e
        match_number = data.get("match_number")
        if match_number is not None:
            try:
                match_number = validate_round_number_strict(
                    match_number, "match number"
                )
            except ValidationException as e:
                raise InvalidResultException(str(e)) from e

        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            tournament_id=str(data.get("tournament_id", tournament_id)),
            round_number=round_number,
            player1_id=str(player1),
            player2_id=str(player2) if player2 is not None else None,
            result=MatchOutcome.parse(data.get("result")),
            winner_id=str(winner) if winner is not None else None,
            round_status=RoundStatus.parse(data.get("round_status")),
            match_number=match_number,
        )
