"""Swiss pairing engine.

Generates the pairings of one round from a roster and the match history:
a seeded static/dynamic split for the first round and greedy closest-score
matching afterwards, backed by a bounded search when the greedy pass cannot
place everybody.
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
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from swisspairing.constants import BYE_POLICY_RAISE
from swisspairing.exceptions import (
    InsufficientPlayersError,
    InvalidPairingException,
    NoPairingAvailableException,
    UnresolvedByeQuotaError,
)
from swisspairing.models.pairing import Pairing, PairingResult
from swisspairing.models.player import Player
from swisspairing.models.tournament import (
    EngineConfig,
    Match,
    PairingHistory,
    StandingEntry,
)
from swisspairing.tournament.standings_calculator import StandingsCalculator
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import (
    ensure_unique_ids,
    validate_round_number_strict,
)

logger = setup_logger(__name__)

# (player1, player2); player2 is None for a bye
Board = Tuple[Player, Optional[Player]]


class _SearchBudgetExceeded(Exception):
    """Internal signal: the completion search ran out of nodes."""


def generate_pairings(
    players: Sequence[Player],
    match_history: Iterable[Match],
    round_number: int,
    standings: Optional[Iterable[StandingEntry]] = None,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> PairingResult:
    """
    Create the pairings of one round.

    - players: tournament roster, dropped and late players included
    - match_history: every match row of the tournament so far
    - round_number: the 1-based round being paired
    - standings: precomputed standings; derived from the history when omitted
    - rng: random source for first-round seating, ``Random(config.seed)`` by default
    - config: engine settings (bye cap, bye quota policy, search budget)

    Every eligible player appears exactly once in the result and at most one
    of them has a bye. The history is never modified.

    Raises:
        InsufficientPlayersError: If fewer than two players can be paired
        UnresolvedByeQuotaError: If only an extra bye could complete the round
        NoPairingAvailableException: If no complete legal round exists
    """
    config = config or EngineConfig()
    round_number = validate_round_number_strict(round_number)
    matches = list(match_history)

    eligible = eligible_players(players, matches, round_number)
    if len(eligible) < 2:
        raise InsufficientPlayersError(round_number, len(eligible))

    is_first_round = not any(m.round_number < round_number for m in matches)
    logger.info(
        f"Pairing round {round_number} with {len(eligible)} eligible players"
        f"{' (first round)' if is_first_round else ''}"
    )

    if is_first_round:
        rng = rng or random.Random(config.seed)
        boards, byes, warnings = _pair_first_round(eligible, rng, round_number)
        fallback_used = False
    else:
        history = PairingHistory.from_matches(matches, before_round=round_number)
        points = _points_by_player(players, matches, round_number, standings)
        boards, byes, warnings, fallback_used = _pair_subsequent_round(
            eligible, points, history, round_number, config
        )

    result = PairingResult(
        round_number=round_number,
        pairings=[_to_pairing(board, round_number) for board in boards]
        + [_to_pairing((player, None), round_number) for player in byes],
        warnings=warnings,
        fallback_used=fallback_used,
    )
    _check_round(result, eligible)

    logger.info(
        f"Round {round_number}: {len(boards)} pairings, {len(byes)} bye(s)"
        f"{', completion search used' if fallback_used else ''}"
    )
    return result


def eligible_players(
    players: Sequence[Player], match_history: Iterable[Match], round_number: int
) -> List[Player]:
    """Players who may still be paired in ``round_number``.

    A player is eligible when not dropped, already entered by that round, and
    not yet placed in any match of the round. Roster order is kept.
    """
    ensure_unique_ids(p.id for p in players)
    placed: Set[str] = set()
    for match in match_history:
        if match.round_number != round_number:
            continue
        placed.add(match.player1_id)
        if match.player2_id is not None:
            placed.add(match.player2_id)
    return [
        p for p in players if p.is_eligible_for(round_number) and p.id not in placed
    ]


def _points_by_player(
    players: Sequence[Player],
    matches: List[Match],
    round_number: int,
    standings: Optional[Iterable[StandingEntry]],
) -> Dict[str, float]:
    if standings is not None:
        return {entry.player_id: entry.points for entry in standings}
    records = StandingsCalculator().calculate_records(
        players, matches, up_to_round=round_number - 1
    )
    return {pid: entry.points for pid, entry in records.items()}


# ========== First Round ==========


def _pair_first_round(
    eligible: List[Player], rng: random.Random, round_number: int
) -> Tuple[List[Board], List[Player], List[str]]:
    """Seat static players against dynamic ones, both sides shuffled."""
    static = [p for p in eligible if p.static_seating]
    dynamic = [p for p in eligible if not p.static_seating]
    rng.shuffle(static)
    rng.shuffle(dynamic)

    boards: List[Board] = []
    warnings: List[str] = []

    cross = min(len(static), len(dynamic))
    for i in range(cross):
        boards.append((static[i], dynamic[i]))

    # At most one side has leftovers
    leftovers = static[cross:] + dynamic[cross:]
    while len(leftovers) >= 2:
        player1, player2 = leftovers.pop(0), leftovers.pop(0)
        if player1.static_seating and player2.static_seating:
            message = (
                f"Round {round_number}: static-seating players {player1.id} and "
                f"{player2.id} paired together (not enough dynamic players)"
            )
            logger.warning(message)
            warnings.append(message)
        boards.append((player1, player2))

    byes = leftovers
    for player in byes:
        logger.debug(f"Round {round_number}: bye for {player.id}")
    return boards, byes, warnings


# ========== Subsequent Rounds ==========


def _can_pair(player1: Player, player2: Player, history: PairingHistory) -> bool:
    """Absolute constraints: no rematch, no static-vs-static."""
    if player1.static_seating and player2.static_seating:
        return False
    return not history.have_played(player1.id, player2.id)


def _swiss_order(eligible: List[Player], points: Dict[str, float]) -> List[Player]:
    return sorted(eligible, key=lambda p: (points.get(p.id, 0.0), p.name, p.id))


def _pair_subsequent_round(
    eligible: List[Player],
    points: Dict[str, float],
    history: PairingHistory,
    round_number: int,
    config: EngineConfig,
) -> Tuple[List[Board], List[Player], List[str], bool]:
    """Greedy matching, falling back to the completion search when needed."""
    boards, byes, unplaced = _pair_greedy_swiss(
        _swiss_order(eligible, points), points, history, config.max_byes, round_number
    )
    expected_byes = len(eligible) % 2
    if not unplaced and len(byes) == expected_byes:
        return boards, byes, [], False

    logger.info(
        f"Round {round_number}: greedy matching left {len(unplaced)} player(s) "
        f"unplaced with {len(byes)} bye(s); running completion search"
    )
    ordered = _swiss_order(eligible, points)
    stuck = [p.id for p in unplaced] or [p.id for p in ordered]
    outcome, capped_exhausted = _run_search(
        ordered, points, history, config.max_byes, config.backtrack_limit, round_number
    )
    if outcome is not None:
        return outcome[0], outcome[1], [], True
    if capped_exhausted and config.bye_quota_policy == BYE_POLICY_RAISE:
        raise _budget_exhausted(round_number, config.backtrack_limit, stuck)

    relaxed, relaxed_exhausted = _run_search(
        ordered, points, history, None, config.backtrack_limit, round_number
    )
    if relaxed is None:
        if capped_exhausted or relaxed_exhausted:
            raise _budget_exhausted(round_number, config.backtrack_limit, stuck)
        logger.error(
            f"Round {round_number}: no complete pairing without rematches or "
            f"static-vs-static games (stuck: {', '.join(stuck)})"
        )
        raise NoPairingAvailableException(
            f"No complete pairing exists for round {round_number} without "
            "repeat or static-vs-static pairings",
            player_ids=stuck,
        )

    over_quota = [
        p.id for p in relaxed[1] if history.bye_count(p.id) >= config.max_byes
    ]
    if not over_quota:
        # Found without the cap once the capped search ran out of budget
        return relaxed[0], relaxed[1], [], True
    if config.bye_quota_policy == BYE_POLICY_RAISE:
        logger.error(
            f"Round {round_number}: only an extra bye for {', '.join(over_quota)} "
            "would complete the round"
        )
        raise UnresolvedByeQuotaError(
            f"Round {round_number} needs a bye beyond the limit of "
            f"{config.max_byes} for: {', '.join(over_quota)}",
            player_ids=over_quota,
        )

    message = (
        f"Round {round_number}: extra bye granted to {', '.join(over_quota)} "
        f"beyond the limit of {config.max_byes}"
    )
    logger.warning(message)
    return relaxed[0], relaxed[1], [message], True


def _budget_exhausted(
    round_number: int, node_limit: int, player_ids: List[str]
) -> NoPairingAvailableException:
    logger.error(
        f"Round {round_number}: completion search stopped after {node_limit} "
        "nodes without a complete pairing"
    )
    return NoPairingAvailableException(
        f"Completion search for round {round_number} stopped after "
        f"{node_limit} nodes before finding a complete pairing; one may "
        "still exist with a larger backtrack_limit",
        player_ids=player_ids,
        search_exhausted=True,
    )


def _find_best_opponent(
    current: Player,
    candidates: Iterable[Player],
    used: Set[str],
    points: Dict[str, float],
    history: PairingHistory,
) -> Optional[Player]:
    """Closest score wins; the first candidate seen wins ties."""
    best: Optional[Player] = None
    best_score = float("-inf")
    current_points = points.get(current.id, 0.0)
    for candidate in candidates:
        if candidate.id in used or candidate.id == current.id:
            continue
        if not _can_pair(current, candidate, history):
            continue
        score = -abs(current_points - points.get(candidate.id, 0.0))
        if score > best_score:
            best, best_score = candidate, score
    return best


def _pair_greedy_swiss(
    ordered: List[Player],
    points: Dict[str, float],
    history: PairingHistory,
    max_byes: int,
    round_number: int,
) -> Tuple[List[Board], List[Player], List[Player]]:
    """
    Pair players in ascending score order.

    Returns: (boards, bye players, unplaced players)
    """
    queue: Deque[Player] = deque(ordered)
    used: Set[str] = set()
    boards: List[Board] = []
    byes: List[Player] = []
    deferred = 0

    while len(queue) > 1:
        current = queue.popleft()
        if current.id in used:
            continue

        opponent = _find_best_opponent(current, queue, used, points, history)
        if opponent is not None:
            queue.remove(opponent)
            used.update((current.id, opponent.id))
            boards.append((current, opponent))
            deferred = 0
        elif history.bye_count(current.id) < max_byes:
            logger.debug(f"Round {round_number}: no opponent for {current.id}, bye")
            used.add(current.id)
            byes.append(current)
            deferred = 0
        else:
            logger.debug(
                f"Round {round_number}: {current.id} has no opponent and no byes "
                "left, requeued"
            )
            queue.append(current)
            deferred += 1
            if deferred >= len(queue):
                logger.info(
                    f"Round {round_number}: {len(queue)} player(s) cannot be "
                    "placed by greedy matching"
                )
                break

    if len(queue) == 1 and history.bye_count(queue[0].id) < max_byes:
        byes.append(queue.popleft())
    return boards, byes, list(queue)


# ========== Completion Search ==========


def _run_search(
    ordered: List[Player],
    points: Dict[str, float],
    history: PairingHistory,
    bye_cap: Optional[int],
    node_limit: int,
    round_number: int,
) -> Tuple[Optional[Tuple[List[Board], List[Player]]], bool]:
    """Run the completion search; the flag tells whether it hit the budget."""
    try:
        found = _search_complete_round(ordered, points, history, bye_cap, node_limit)
    except _SearchBudgetExceeded:
        logger.warning(
            f"Round {round_number}: completion search gave up after {node_limit} "
            f"nodes (bye cap {'none' if bye_cap is None else bye_cap})"
        )
        return None, True
    return found, False


def _search_complete_round(
    ordered: List[Player],
    points: Dict[str, float],
    history: PairingHistory,
    bye_cap: Optional[int],
    node_limit: int,
) -> Optional[Tuple[List[Board], List[Player]]]:
    """
    Depth-first search for a complete round.

    Places exactly ``len(ordered) % 2`` byes, trying the closest scores
    first. ``bye_cap`` of None lifts the per-player bye limit.

    Raises:
        _SearchBudgetExceeded: After ``node_limit`` visited nodes
    """
    needs_bye = len(ordered) % 2 == 1
    nodes = 0

    def may_take_bye(player: Player) -> bool:
        return bye_cap is None or history.bye_count(player.id) < bye_cap

    def solve(
        remaining: List[Player], bye_taken: bool
    ) -> Optional[Tuple[List[Board], List[Player]]]:
        nonlocal nodes
        if not remaining:
            return [], []
        nodes += 1
        if nodes > node_limit:
            raise _SearchBudgetExceeded()

        current, rest = remaining[0], remaining[1:]
        current_points = points.get(current.id, 0.0)
        candidates = sorted(
            (p for p in rest if _can_pair(current, p, history)),
            key=lambda p: abs(current_points - points.get(p.id, 0.0)),
        )
        for opponent in candidates:
            found = solve([p for p in rest if p is not opponent], bye_taken)
            if found is not None:
                return [(current, opponent)] + found[0], found[1]

        if needs_bye and not bye_taken and may_take_bye(current):
            found = solve(rest, True)
            if found is not None:
                return found[0], [current] + found[1]
        return None

    return solve(list(ordered), False)


# ========== Output ==========


def _to_pairing(board: Board, round_number: int) -> Pairing:
    player1, player2 = board
    return Pairing(
        player1_id=player1.id,
        player1_name=player1.name,
        player2_id=player2.id if player2 else None,
        player2_name=player2.name if player2 else None,
        round_number=round_number,
    )


def _check_round(result: PairingResult, eligible: List[Player]) -> None:
    """Every eligible player exactly once, byes only where parity needs one."""
    placed = result.player_ids
    expected = sorted(p.id for p in eligible)
    if sorted(placed) != expected:
        raise InvalidPairingException(
            f"Round {result.round_number}: pairings do not cover every eligible "
            "player exactly once"
        )
    if len(result.byes) > len(eligible) % 2:
        raise InvalidPairingException(
            f"Round {result.round_number}: {len(result.byes)} byes for "
            f"{len(eligible)} players"
        )
