"""Seeded tournament simulator for exercising the pairing engine end to end.

Generates a roster (optionally with static-seating players, late entrants and
drop-outs), plays every round through the RoundManager with simulated results,
and checks each generated round against the pairing rules.
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
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence

from swisspairing.constants import RESULT_DRAW, RESULT_WIN_P1, RESULT_WIN_P2
from swisspairing.controllers.tournament import RoundManager, TournamentLockRegistry
from swisspairing.models.pairing import PairingResult
from swisspairing.models.player import Player
from swisspairing.models.tournament import (
    EngineConfig,
    Match,
    PairingHistory,
    StandingEntry,
)
from swisspairing.pairing import eligible_players
from swisspairing.tournament import calculate_suggested_rounds
from swisspairing.utils import setup_logger
from swisspairing.utils.snapshot import TournamentSnapshot

logger = setup_logger(__name__)


class ResultPattern(Enum):
    """Result generation patterns for simulated games."""

    RANDOM = "random"
    PREDICTABLE = "predictable"
    UPSET_FRIENDLY = "upset_friendly"


@dataclass
class SimulatorConfig:
    """Configuration for the tournament simulator."""

    num_players: int
    num_rounds: Optional[int] = None
    static_players: int = 0
    late_entrants: int = 0
    drop_rate: float = 0.0
    draw_percentage: int = 20
    result_pattern: ResultPattern = ResultPattern.RANDOM
    seed: Optional[int] = None
    tournament_id: str = "simulated"
    engine: EngineConfig = field(default_factory=EngineConfig)

    @property
    def rounds(self) -> int:
        """Rounds to play; the suggested count when none is configured."""
        if self.num_rounds is not None:
            return self.num_rounds
        return calculate_suggested_rounds(self.num_players)


@dataclass
class SimulationReport:
    """Outcome of one simulated tournament."""

    snapshot: TournamentSnapshot
    rounds: List[PairingResult] = field(default_factory=list)
    leaderboard: List[StandingEntry] = field(default_factory=list)
    violations: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.violations


class PlayerFactory:
    """Creates simulated players with a hidden playing strength."""

    def __init__(self, config: SimulatorConfig, rng: random.Random):
        self.config = config
        self.random = rng
        self.strength: Dict[str, float] = {}

    def create_players(self) -> List[Player]:
        players = []
        late_start = self.config.num_players - self.config.late_entrants
        for i in range(self.config.num_players):
            player_id = f"p{i + 1:03d}"
            players.append(
                Player(
                    id=player_id,
                    name=f"Player {i + 1:03d}",
                    static_seating=i < self.config.static_players,
                    started_round=2 if i >= late_start else 1,
                )
            )
            self.strength[player_id] = self.random.uniform(0.0, 1.0)

        logger.info(
            "Created %s players (%s static, %s late)",
            len(players),
            self.config.static_players,
            self.config.late_entrants,
        )
        return players


class ResultSimulator:
    """Simulates game results from hidden strengths."""

    def __init__(
        self, config: SimulatorConfig, strength: Dict[str, float], rng: random.Random
    ):
        self.config = config
        self.strength = strength
        self.random = rng

    def simulate_result(self, player1_id: str, player2_id: str) -> str:
        """Return WIN_P1, WIN_P2 or DRAW."""
        if self.random.randrange(100) < self.config.draw_percentage:
            return RESULT_DRAW

        if self.config.result_pattern == ResultPattern.RANDOM:
            return self.random.choice([RESULT_WIN_P1, RESULT_WIN_P2])

        s1 = self.strength.get(player1_id, 0.5)
        s2 = self.strength.get(player2_id, 0.5)
        if self.config.result_pattern == ResultPattern.PREDICTABLE:
            return RESULT_WIN_P1 if s1 >= s2 else RESULT_WIN_P2

        # Favourite wins two games out of three
        favourite_wins = self.random.random() < 2 / 3
        if (s1 >= s2) == favourite_wins:
            return RESULT_WIN_P1
        return RESULT_WIN_P2


class TournamentSimulator:
    """Plays a whole tournament through the RoundManager."""

    def __init__(self, config: SimulatorConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.player_factory = PlayerFactory(config, self.random)

    def run(self) -> SimulationReport:
        """Simulate every round and collect the rounds, leaderboard and violations."""
        players = self.player_factory.create_players()
        results = ResultSimulator(
            self.config, self.player_factory.strength, self.random
        )
        manager = RoundManager(
            self.config.tournament_id,
            players,
            config=self.config.engine,
            rng=random.Random(self.random.random()),
            lock_registry=TournamentLockRegistry(),
        )
        report = SimulationReport(
            snapshot=TournamentSnapshot(self.config.tournament_id)
        )

        logger.info(
            "Simulating tournament: %s players, %s rounds",
            self.config.num_players,
            self.config.rounds,
        )
        for round_number in range(1, self.config.rounds + 1):
            history_before = list(manager.matches)
            eligible = eligible_players(manager.players, history_before, round_number)
            if len(eligible) < 2:
                logger.info("Stopping before round %s: too few players", round_number)
                break

            pairing_result = manager.create_pairings(round_number)
            report.rounds.append(pairing_result)
            report.violations.extend(
                verify_round(
                    pairing_result,
                    eligible,
                    history_before,
                    max_byes=self.config.engine.max_byes,
                )
            )

            manager.start_round(round_number)
            for match in manager.get_round(round_number):
                if match.is_bye:
                    continue
                outcome = results.simulate_result(match.player1_id, match.player2_id)
                manager.record_result(
                    round_number, match.player1_id, match.player2_id, outcome
                )
            manager.complete_round(round_number)
            self._apply_drops(manager, round_number)

        report.leaderboard = manager.leaderboard()
        report.snapshot = TournamentSnapshot(
            tournament_id=self.config.tournament_id,
            players=list(manager.players),
            matches=list(manager.matches),
        )
        if report.violations:
            logger.warning("Simulation found %s violation(s)", len(report.violations))
        logger.info("Simulation complete")
        return report

    def _apply_drops(self, manager: RoundManager, round_number: int) -> None:
        if self.config.drop_rate <= 0:
            return
        for i, player in enumerate(manager.players):
            if player.dropped or not player.is_eligible_for(round_number):
                continue
            if self.random.random() < self.config.drop_rate:
                manager.players[i] = replace(player, dropped=True)
                logger.debug("%s dropped after round %s", player.id, round_number)


def verify_round(
    result: PairingResult,
    eligible: Sequence[Player],
    history: Sequence[Match],
    max_byes: Optional[int] = None,
) -> List[str]:
    """List every pairing rule a generated round breaks.

    Args:
        result: The generated round
        eligible: Players that had to be placed
        history: Matches before the round
        max_byes: Bye limit to check, skipped when None

    Returns:
        Human-readable violations (empty when the round is sound)
    """
    problems = []
    round_number = result.round_number
    placed = result.player_ids
    expected = {p.id for p in eligible}

    if sorted(placed) != sorted(expected):
        problems.append(f"Round {round_number}: players not placed exactly once")
    if len(result.byes) > 1:
        problems.append(f"Round {round_number}: {len(result.byes)} byes")

    first_round = not any(m.round_number < round_number for m in history)
    pair_history = PairingHistory.from_matches(history, before_round=round_number)
    by_id = {p.id: p for p in eligible}
    static_count = sum(1 for p in eligible if p.static_seating)
    static_surplus = static_count - (len(eligible) - static_count)

    for pairing in result.pairings:
        if pairing.is_bye:
            player_id = pairing.player1_id
            if (
                max_byes is not None
                and pair_history.bye_count(player_id) + 1 > max_byes
            ):
                problems.append(
                    f"Round {round_number}: {player_id} exceeds {max_byes} byes"
                )
            continue
        if not first_round and pair_history.have_played(
            pairing.player1_id, pairing.player2_id
        ):
            problems.append(
                f"Round {round_number}: rematch {pairing.player1_id} vs "
                f"{pairing.player2_id}"
            )
        player1 = by_id.get(pairing.player1_id)
        player2 = by_id.get(pairing.player2_id)
        if player1 and player2 and player1.static_seating and player2.static_seating:
            if not (first_round and static_surplus >= 2):
                problems.append(
                    f"Round {round_number}: static players {player1.id} and "
                    f"{player2.id} paired"
                )
    return problems
