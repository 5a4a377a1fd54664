"""Round lifecycle: pending -> started -> completed.

Starting a round resolves its pending byes. Transitions only move forward;
repeating the current status changes nothing.
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

from typing import Iterable, List

from swisspairing.exceptions import RoundNotFoundException, RoundStateException
from swisspairing.models.enums import MatchOutcome, RoundStatus
from swisspairing.models.tournament import Match
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import validate_round_number_strict

logger = setup_logger(__name__)


def round_matches(
    matches: Iterable[Match], tournament_id: str, round_number: int
) -> List[Match]:
    """Rows of one round of one tournament, in history order."""
    return [
        m
        for m in matches
        if m.tournament_id == tournament_id and m.round_number == round_number
    ]


def round_status(
    matches: Iterable[Match], tournament_id: str, round_number: int
) -> RoundStatus:
    """Status of a round; the least advanced row wins, no rows means pending."""
    rows = round_matches(matches, tournament_id, round_number)
    if not rows:
        return RoundStatus.PENDING
    return min((m.round_status for m in rows), key=lambda s: s.rank)


def start_round(
    matches: Iterable[Match], tournament_id: str, round_number: int
) -> List[Match]:
    """Mark a round as started and resolve its byes.

    Every pending row of the round gets status ``started``; rows that are
    already further along keep theirs. A row without a second
    player and without a result becomes a ``BYE`` won by player1.

    Args:
        matches: Match history holding the round
        tournament_id: Tournament the round belongs to
        round_number: Round to start

    Returns:
        The rows of the round

    Raises:
        RoundNotFoundException: If the round has no matches
        RoundStateException: If the round is already completed
    """
    round_number = validate_round_number_strict(round_number)
    rows = round_matches(matches, tournament_id, round_number)
    if not rows:
        raise RoundNotFoundException(
            f"Tournament {tournament_id} has no matches in round {round_number}"
        )

    current = round_status(rows, tournament_id, round_number)
    if current is RoundStatus.STARTED:
        logger.debug(f"Round {round_number} of {tournament_id} already started")
        return rows
    _check_transition(current, RoundStatus.STARTED, tournament_id, round_number)

    resolved = 0
    for match in rows:
        # Rows already completed keep their status
        if match.round_status.rank < RoundStatus.STARTED.rank:
            match.round_status = RoundStatus.STARTED
        if match.is_bye and match.result is None:
            match.result = MatchOutcome.BYE
            match.winner_id = match.player1_id
            resolved += 1

    logger.info(
        f"Started round {round_number} of {tournament_id} "
        f"({len(rows)} matches, {resolved} bye(s) resolved)"
    )
    return rows


def complete_round(
    matches: Iterable[Match], tournament_id: str, round_number: int
) -> List[Match]:
    """Mark a started round as completed.

    Raises:
        RoundNotFoundException: If the round has no matches
        RoundStateException: If the round has not been started
    """
    round_number = validate_round_number_strict(round_number)
    rows = round_matches(matches, tournament_id, round_number)
    if not rows:
        raise RoundNotFoundException(
            f"Tournament {tournament_id} has no matches in round {round_number}"
        )

    current = round_status(rows, tournament_id, round_number)
    if current is RoundStatus.COMPLETED:
        logger.debug(f"Round {round_number} of {tournament_id} already completed")
        return rows
    _check_transition(current, RoundStatus.COMPLETED, tournament_id, round_number)

    pending = [m for m in rows if m.result is None]
    if pending:
        logger.warning(
            f"Completing round {round_number} of {tournament_id} with "
            f"{len(pending)} match(es) still without a result"
        )
    for match in rows:
        match.round_status = RoundStatus.COMPLETED

    logger.info(f"Completed round {round_number} of {tournament_id}")
    return rows


def _check_transition(
    current: RoundStatus, target: RoundStatus, tournament_id: str, round_number: int
) -> None:
    if target.rank != current.rank + 1:
        raise RoundStateException(
            f"Round {round_number} of {tournament_id} cannot go from "
            f"{current.value} to {target.value}"
        )
