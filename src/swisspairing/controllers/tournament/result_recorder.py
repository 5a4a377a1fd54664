"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and error checking.
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

from typing import Iterable, List, Optional, Tuple

from swisspairing.exceptions import InvalidResultException, MatchNotFoundException
from swisspairing.models.enums import MatchOutcome, RoundStatus
from swisspairing.models.tournament import Match
from swisspairing.tournament.round_lifecycle import round_matches
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

_SWAPPED = {
    MatchOutcome.WIN_P1: MatchOutcome.WIN_P2,
    MatchOutcome.WIN_P2: MatchOutcome.WIN_P1,
}


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Checking a result against the kind of match (bye or game)
    - Deriving the winner from the result
    - Locating the match of a player pair within a round
    - Recording a batch of results all-or-nothing
    """

    def record_result(self, match: Match, result: Optional[str]) -> Match:
        """Store ``result`` on ``match`` and derive its winner.

        Args:
            match: The row to update
            result: One of WIN_P1, WIN_P2, DRAW, BYE, or None to clear it

        Returns:
            The updated match

        Raises:
            InvalidResultException: If the result is unknown or does not fit
                the match
        """
        outcome = MatchOutcome.parse(result)
        self._validate_outcome(match, outcome)

        if match.round_status is RoundStatus.COMPLETED:
            logger.warning(
                f"Round {match.round_number} is already completed, "
                "results may be overwritten"
            )
        if match.result is not None and match.result is not outcome:
            logger.info(
                f"Round {match.round_number}: result of {self._describe(match)} "
                f"changed from {match.result.value} to "
                f"{outcome.value if outcome else 'pending'}"
            )

        match.result = outcome
        match.winner_id = self.winner_for(match, outcome)
        logger.debug(
            f"Recorded: {self._describe(match)} -> "
            f"{outcome.value if outcome else 'pending'}"
        )
        return match

    def find_match(
        self,
        matches: Iterable[Match],
        tournament_id: str,
        round_number: int,
        player1_id: str,
        player2_id: Optional[str] = None,
    ) -> Match:
        """Find the match of two players (or the bye of one) in a round.

        Raises:
            MatchNotFoundException: If the round has no such match
        """
        for match in round_matches(matches, tournament_id, round_number):
            if player2_id is None:
                if match.is_bye and match.player1_id == player1_id:
                    return match
            elif match.pair_key == frozenset({player1_id, player2_id}):
                return match

        players = player1_id if player2_id is None else f"{player1_id} vs {player2_id}"
        raise MatchNotFoundException(
            f"No match {players} in round {round_number} of {tournament_id}"
        )

    def record_pair_result(
        self,
        matches: Iterable[Match],
        tournament_id: str,
        round_number: int,
        player1_id: str,
        player2_id: Optional[str],
        result: Optional[str],
    ) -> Match:
        """Record a result given from the point of view of ``player1_id``.

        ``WIN_P1`` always means ``player1_id`` won, whichever side of the
        stored row that player is on.
        """
        match = self.find_match(
            matches, tournament_id, round_number, player1_id, player2_id
        )
        return self.record_result(match, self._orient(match, player1_id, result))

    def record_round_results(
        self,
        matches: Iterable[Match],
        tournament_id: str,
        round_number: int,
        results: Iterable[Tuple[str, Optional[str], Optional[str]]],
    ) -> List[Match]:
        """Record several results of one round.

        Every entry is validated before any row changes, so an invalid entry
        leaves the whole round untouched.

        Args:
            results: (player1_id, player2_id or None, result) entries

        Returns:
            The updated matches, in entry order
        """
        matches = list(matches)
        planned = []
        seen = set()
        for player1_id, player2_id, result in results:
            match = self.find_match(
                matches, tournament_id, round_number, player1_id, player2_id
            )
            if id(match) in seen:
                raise InvalidResultException(
                    f"Result for {self._describe(match)} listed twice"
                )
            seen.add(id(match))
            outcome = MatchOutcome.parse(self._orient(match, player1_id, result))
            self._validate_outcome(match, outcome)
            planned.append((match, outcome))

        return [self.record_result(match, outcome) for match, outcome in planned]

    @staticmethod
    def winner_for(match: Match, outcome: Optional[MatchOutcome]) -> Optional[str]:
        """Winner implied by an outcome; None for draws and pending games."""
        if outcome in (MatchOutcome.WIN_P1, MatchOutcome.BYE):
            return match.player1_id
        if outcome is MatchOutcome.WIN_P2:
            return match.player2_id
        return None

    def _validate_outcome(self, match: Match, outcome: Optional[MatchOutcome]) -> None:
        if outcome is None:
            return
        if match.is_bye and outcome is not MatchOutcome.BYE:
            raise InvalidResultException(
                f"Bye of {match.player1_id} in round {match.round_number} "
                f"can only hold BYE, got {outcome.value}"
            )
        if not match.is_bye and outcome is MatchOutcome.BYE:
            raise InvalidResultException(
                f"BYE is not a valid result for {self._describe(match)}"
            )

    @staticmethod
    def _orient(match: Match, player1_id: str, result: Optional[str]) -> Optional[str]:
        outcome = MatchOutcome.parse(result)
        if outcome is not None and match.player1_id != player1_id:
            outcome = _SWAPPED.get(outcome, outcome)
        return outcome.value if outcome is not None else None

    @staticmethod
    def _describe(match: Match) -> str:
        if match.is_bye:
            return f"bye of {match.player1_id}"
        return f"{match.player1_id} vs {match.player2_id}"
