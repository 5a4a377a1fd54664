"""Pairing history used to prevent repeat matches and track byes."""

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
from typing import Any, Dict, Iterable, Optional, Set

from swisspairing.models.enums import MatchOutcome
from swisspairing.models.tournament.match import Match


@dataclass
class PairingHistory:
    """
    Tracks historical pairings and byes for one tournament.

    Attributes
    ----------
    previous_matches : set of frozenset of str
        Unordered player id pairs that have already met.
    bye_counts : dict of str to int
        Number of byes each player has received.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)
    bye_counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_matches(
        cls, matches: Iterable[Match], before_round: Optional[int] = None
    ) -> "PairingHistory":
        """Build history from match rows.

        A row with no second player counts as a bye whether or not its result
        has been resolved yet.

        Args:
            matches: Match rows of a single tournament
            before_round: Only consider rounds strictly earlier than this one
        """
        history = cls()
        for match in matches:
            if before_round is not None and match.round_number >= before_round:
                continue
            if match.is_bye or match.result is MatchOutcome.BYE:
                history.record_bye(match.player1_id)
            if not match.is_bye:
                history.add_pairing(match.player1_id, match.player2_id)
        return history

    def add_pairing(self, player1_id: str, player2_id: str) -> None:
        """Record that two players have been paired."""
        self.previous_matches.add(frozenset({player1_id, player2_id}))

    def have_played(self, player1_id: str, player2_id: str) -> bool:
        """Check if two players have previously played each other."""
        return frozenset({player1_id, player2_id}) in self.previous_matches

    def record_bye(self, player_id: str) -> None:
        self.bye_counts[player_id] = self.bye_counts.get(player_id, 0) + 1

    def bye_count(self, player_id: str) -> int:
        return self.bye_counts.get(player_id, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "previous_matches": sorted(sorted(pair) for pair in self.previous_matches),
            "bye_counts": dict(self.bye_counts),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            previous_matches=set(
                frozenset(map(str, pair)) for pair in data.get("previous_matches", [])
            ),
            bye_counts={str(k): int(v) for k, v in data.get("bye_counts", {}).items()},
        )
