"""Round management for tournaments.

This module handles round progression and pairing generation for one
tournament snapshot.
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

import random
import threading
from typing import List, Optional, Sequence

from swisspairing.controllers.tournament.locking import (
    TournamentLockRegistry,
    default_lock_registry,
)
from swisspairing.controllers.tournament.result_recorder import ResultRecorder
from swisspairing.exceptions import (
    DuplicatePairingRiskError,
    PlayerNotFoundException,
    RoundStateException,
)
from swisspairing.models.enums import RoundStatus
from swisspairing.models.pairing import Pairing, PairingResult
from swisspairing.models.player import Player
from swisspairing.models.tournament import EngineConfig, Match, StandingEntry
from swisspairing.pairing import (
    assign_match_numbers,
    generate_pairings,
    static_seats_from_players,
)
from swisspairing.tournament import (
    build_leaderboard,
    calculate_standings,
    round_lifecycle,
)
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import (
    ensure_unique_ids,
    validate_round_number_strict,
)

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for a tournament.

    This class is responsible for:
    - Generating pairings for a round, one run per tournament at a time
    - Turning pairings into pending match rows with table numbers
    - Managing round state transitions
    - Recording results and answering standings queries

    Every mutation runs under the tournament's lock from the registry.
    Standings and leaderboard queries do not lock.
    """

    def __init__(
        self,
        tournament_id: str,
        players: Sequence[Player],
        matches: Optional[List[Match]] = None,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        lock_registry: Optional[TournamentLockRegistry] = None,
    ):
        """Initialize the round manager.

        Args:
            tournament_id: Identifier of the tournament
            players: Tournament roster
            matches: Match history, updated in place as rounds progress
            config: Engine settings
            rng: Random source for first-round seating, seeded from the
                config when omitted
            lock_registry: Registry providing the tournament lock
        """
        ensure_unique_ids(p.id for p in players)
        self.tournament_id = tournament_id
        self.players: List[Player] = list(players)
        self.matches: List[Match] = matches if matches is not None else []
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.recorder = ResultRecorder()
        registry = lock_registry or default_lock_registry
        self.lock: threading.Lock = registry.lock_for(tournament_id)

    @property
    def current_round_number(self) -> int:
        """Highest round with matches, or 0 before the first pairing."""
        rounds = [
            m.round_number for m in self.matches if m.tournament_id == self.tournament_id
        ]
        return max(rounds, default=0)

    def get_round(self, round_number: int) -> List[Match]:
        """Match rows of a round (empty if it has none)."""
        return round_lifecycle.round_matches(
            self.matches, self.tournament_id, round_number
        )

    def round_status(self, round_number: int) -> RoundStatus:
        return round_lifecycle.round_status(
            self.matches, self.tournament_id, round_number
        )

    def create_pairings(
        self, round_number: Optional[int] = None, pair_remaining: bool = False
    ) -> PairingResult:
        """Generate pairings for a round and add them as pending matches.

        Args:
            round_number: Round to pair, the next round by default
            pair_remaining: Pair only the players not yet placed in a round
                that already holds some matches

        Returns:
            PairingResult with table numbers filled in

        Raises:
            DuplicatePairingRiskError: If the round already has matches and
                ``pair_remaining`` is not set
            RoundStateException: If the round has already been started
        """
        with self.lock:
            if round_number is None:
                round_number = self.current_round_number + 1
            round_number = validate_round_number_strict(round_number)

            existing = self.get_round(round_number)
            placed = {
                pid
                for m in existing
                for pid in (m.player1_id, m.player2_id)
                if pid is not None
            }
            if existing and not pair_remaining:
                logger.error(
                    f"Round {round_number} of {self.tournament_id} already has "
                    f"{len(existing)} match(es); refusing to pair it again"
                )
                raise DuplicatePairingRiskError(
                    self.tournament_id, round_number, placed
                )
            if existing and self.round_status(round_number) is not RoundStatus.PENDING:
                raise RoundStateException(
                    f"Round {round_number} of {self.tournament_id} has already started"
                )

            result = generate_pairings(
                self.players,
                self._own_matches(),
                round_number,
                rng=self.rng,
                config=self.config,
            )

            overlap = placed.intersection(result.player_ids)
            if overlap:
                raise DuplicatePairingRiskError(
                    self.tournament_id, round_number, overlap
                )

            self._assign_tables(result, existing)
            self.matches.extend(
                Match(
                    tournament_id=self.tournament_id,
                    round_number=round_number,
                    player1_id=p.player1_id,
                    player2_id=p.player2_id,
                    match_number=p.table_number,
                )
                for p in result.pairings
            )

        logger.info(
            f"Created {len(result.pairings)} match(es) for round {round_number} "
            f"of {self.tournament_id}"
        )
        return result

    def _assign_tables(self, result: PairingResult, existing: List[Match]) -> None:
        # Rows that already carry a table keep it
        taken = {m.match_number for m in existing if m.match_number is not None}
        unnumbered = [m for m in existing if m.match_number is None]
        names = {p.id: p.name for p in self.players}
        boards = [
            Pairing(
                player1_id=m.player1_id,
                player1_name=names.get(m.player1_id, m.player1_id),
                player2_id=m.player2_id,
                player2_name=(
                    names.get(m.player2_id, m.player2_id)
                    if m.player2_id is not None
                    else None
                ),
                round_number=m.round_number,
            )
            for m in unnumbered
        ]
        boards.extend(result.pairings)

        seats = static_seats_from_players(self.players)
        assignments = assign_match_numbers(boards, seats, taken)
        for match, seat in zip(unnumbered, assignments):
            match.match_number = seat.match_number
        for pairing, seat in zip(result.pairings, assignments[len(unnumbered) :]):
            pairing.table_number = seat.match_number
            if seat.warning:
                result.warnings.append(seat.warning)

    def start_round(self, round_number: int) -> List[Match]:
        """Start a round, resolving its byes."""
        with self.lock:
            return round_lifecycle.start_round(
                self.matches, self.tournament_id, round_number
            )

    def complete_round(self, round_number: int) -> List[Match]:
        with self.lock:
            return round_lifecycle.complete_round(
                self.matches, self.tournament_id, round_number
            )

    def record_result(
        self,
        round_number: int,
        player1_id: str,
        player2_id: Optional[str],
        result: Optional[str],
    ) -> Match:
        """Record the result of ``player1_id`` against ``player2_id``.

        Args:
            round_number: Round of the match
            player1_id: Player the result is expressed for (WIN_P1 = this
                player won)
            player2_id: Opponent, or None for a bye
            result: WIN_P1, WIN_P2, DRAW, BYE, or None to clear

        Returns:
            The updated match

        Raises:
            PlayerNotFoundException: If either player is not on the roster
        """
        roster = {p.id for p in self.players}
        for player_id in (player1_id, player2_id):
            if player_id is not None and player_id not in roster:
                raise PlayerNotFoundException(
                    f"Player {player_id} is not on the roster of {self.tournament_id}"
                )
        with self.lock:
            return self.recorder.record_pair_result(
                self.matches,
                self.tournament_id,
                round_number,
                player1_id,
                player2_id,
                result,
            )

    def standings(self, up_to_round: Optional[int] = None) -> List[StandingEntry]:
        return calculate_standings(
            self.players, self._own_matches(), self.config, up_to_round
        )

    def leaderboard(self, up_to_round: Optional[int] = None) -> List[StandingEntry]:
        """Standings in ranking order."""
        return build_leaderboard(
            self.players, self._own_matches(), self.config, up_to_round
        )

    def _own_matches(self) -> List[Match]:
        return [m for m in self.matches if m.tournament_id == self.tournament_id]
