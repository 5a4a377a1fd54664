"""JSON snapshot of a tournament: roster plus match history."""

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

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from swisspairing.exceptions import (
    FileLoadException,
    FileSaveException,
    SwissPairingException,
)
from swisspairing.models.player import Player
from swisspairing.models.tournament import Match
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import ensure_unique_ids

logger = setup_logger(__name__)


@dataclass
class TournamentSnapshot:
    """
    In-memory state of one tournament.

    Attributes
    ----------
    tournament_id : str
        Tournament identifier; match rows without one inherit it.
    players : list of Player
        Roster, dropped players included.
    matches : list of Match
        Every match row so far.
    """

    tournament_id: str
    players: List[Player] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tournament_id": self.tournament_id,
            "players": [p.to_dict() for p in self.players],
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSnapshot":
        """Deserialize a snapshot.

        Raises:
            InvalidPlayerDataException: On a malformed player entry
            InvalidResultException: On a malformed match entry
            DuplicatePlayerException: If a player id is listed twice
        """
        tournament_id = str(data.get("tournament_id", ""))
        players = [Player.from_dict(p) for p in data.get("players", [])]
        ensure_unique_ids(p.id for p in players)
        matches = [
            Match.from_dict(m, tournament_id=tournament_id)
            for m in data.get("matches", [])
        ]
        return cls(tournament_id=tournament_id, players=players, matches=matches)


def load_snapshot(path: Union[str, Path]) -> TournamentSnapshot:
    """Read a snapshot file.

    Raises:
        FileLoadException: If the file is missing, unreadable, or not a valid
            snapshot
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        raise FileLoadException(f"Snapshot file not found: {path}")

    try:
        with open(snapshot_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileLoadException(f"Failed to read snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise FileLoadException(f"Snapshot {path} must hold a JSON object")

    try:
        snapshot = TournamentSnapshot.from_dict(data)
    except SwissPairingException as e:
        raise FileLoadException(f"Invalid snapshot {path}: {e}") from e

    logger.info(
        f"Loaded snapshot {path}: {len(snapshot.players)} players, "
        f"{len(snapshot.matches)} matches"
    )
    return snapshot


def save_snapshot(snapshot: TournamentSnapshot, path: Union[str, Path]) -> None:
    """Write a snapshot file, replacing any existing one.

    Raises:
        FileSaveException: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_dict(), f, indent=4)
    except OSError as e:
        raise FileSaveException(f"Could not save snapshot to {path}: {e}") from e
    logger.info(f"Snapshot saved to {path}")
