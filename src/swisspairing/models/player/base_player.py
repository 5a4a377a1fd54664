"""A player registered in a Swiss tournament."""

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

from swisspairing.exceptions import InvalidPlayerDataException, ValidationException
from swisspairing.utils.validation import (
    validate_player_name,
    validate_round_number_strict,
)


@dataclass(frozen=True)
class Player:
    """
    Read-only view of a tournament player, as supplied by the caller.

    The engine never mutates players; drop flags and entry rounds are owned
    by whatever persists the roster.

    Attributes
    ----------
    id : str
        Unique identifier for the player.
    name : str
        Player's display name. Also the final tie-breaker in every ordering.
    static_seating : bool
        Player keeps a fixed seat and must not face another static-seating
        player.
    dropped : bool
        Player has left the tournament and is excluded from standings and
        pairing.
    started_round : int
        First round the player may be paired in.
    static_seat : int or None
        Reserved table number, if any.

    Examples
    --------
    Creating a late entrant::

        player = Player(id="p-17", name="Ash", started_round=3)
        player.is_eligible_for(2)  # False
    """

    id: str
    name: str
    static_seating: bool = False
    dropped: bool = False
    started_round: int = 1
    static_seat: Optional[int] = None

    def is_eligible_for(self, round_number: int) -> bool:
        """Whether the player may be paired in ``round_number``."""
        return not self.dropped and self.started_round <= round_number

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "player_id": self.id,
            "name": self.name,
            "static_seating": self.static_seating,
            "dropped": self.dropped,
            "started_round": self.started_round,
            "static_seat": self.static_seat,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize a player, accepting either ``player_id`` or ``id``.

        Raises:
            InvalidPlayerDataException: If the id or name is missing, or a
                number field is malformed
        """
        raw_id = data.get("player_id", data.get("id"))
        if raw_id is None or str(raw_id).strip() == "":
            raise InvalidPlayerDataException(f"Player entry has no id: {data!r}")

        name = validate_player_name(data.get("name"))
        if not name:
            raise InvalidPlayerDataException(f"Player {raw_id}: {name.error_message}")

        try:
            started_round = validate_round_number_strict(
                data.get("started_round", 1), "started round"
            )
            seat = data.get("static_seat")
            static_seat = int(seat) if seat is not None else None
        except (ValidationException, TypeError, ValueError) as e:
            raise InvalidPlayerDataException(f"Player {raw_id}: {e}") from e

        return cls(
            id=str(raw_id),
            name=name.sanitized_value,
            static_seating=bool(data.get("static_seating", False)),
            dropped=bool(data.get("dropped", False)),
            started_round=started_round,
            static_seat=static_seat,
        )
