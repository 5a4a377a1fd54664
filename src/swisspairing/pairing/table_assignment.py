"""Table number assignment for generated pairings."""

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
from typing import Dict, Iterable, List, Optional, Sequence, Set

from swisspairing.models.pairing import Pairing
from swisspairing.models.player import Player
from swisspairing.type_hints import StaticSeats
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class SeatAssignment:
    """Table number for one pairing, with a note when a seat had to give way."""

    match_number: int
    warning: Optional[str] = None


def static_seats_from_players(players: Iterable[Player]) -> StaticSeats:
    """Reserved table numbers of the players that have one."""
    return {p.id: p.static_seat for p in players if p.static_seat is not None}


def assign_match_numbers(
    pairings: Sequence[Pairing],
    static_seats: StaticSeats,
    taken_tables: Iterable[int] = (),
) -> List[SeatAssignment]:
    """Number the tables of a round.

    A pairing with a statically seated player is played at that player's
    table. When both players hold a seat the lower number is used. A table
    already claimed by an earlier pairing sends the later one to the
    sequential pool, which fills the lowest free numbers in pairing order.
    Byes are numbered like any other pairing. Tables in ``taken_tables``
    are never handed out.

    Args:
        pairings: Pairings of one round, in output order
        static_seats: player id -> reserved table number
        taken_tables: Tables already in use in the round

    Returns:
        One SeatAssignment per pairing, in the same order
    """
    result: List[Optional[SeatAssignment]] = [None] * len(pairings)
    taken: Set[int] = set(taken_tables)
    deferred: List[int] = []
    notes: Dict[int, str] = {}

    for i, pairing in enumerate(pairings):
        seat1 = static_seats.get(pairing.player1_id)
        seat2 = (
            static_seats.get(pairing.player2_id)
            if pairing.player2_id is not None
            else None
        )
        if seat1 is None and seat2 is None:
            deferred.append(i)
            continue

        warning = None
        if seat1 is not None and seat2 is not None:
            target = min(seat1, seat2)
            warning = (
                f"Seat conflict: {pairing.player1_name} (table {seat1}) vs "
                f"{pairing.player2_name} (table {seat2}), using table {target}"
            )
        else:
            target = seat1 if seat1 is not None else seat2

        if target in taken:
            notes[i] = f"Table {target} already taken, {pairing.player1_name} moved"
            deferred.append(i)
            continue

        taken.add(target)
        result[i] = SeatAssignment(match_number=target, warning=warning)

    next_number = 1
    for i in deferred:
        while next_number in taken:
            next_number += 1
        taken.add(next_number)
        result[i] = SeatAssignment(match_number=next_number, warning=notes.get(i))
        next_number += 1

    for assignment in result:
        if assignment.warning:
            logger.warning(assignment.warning)
    return result
