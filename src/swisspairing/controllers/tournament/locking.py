"""Per-tournament locks serialising pairing generation and round updates."""

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

import threading
from typing import Dict


class TournamentLockRegistry:
    """Hands out one lock per tournament id, shared by every caller."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def lock_for(self, tournament_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(tournament_id)
            if lock is None:
                lock = self._locks[tournament_id] = threading.Lock()
            return lock

    def discard(self, tournament_id: str) -> bool:
        """Forget the lock of a finished tournament.

        A lock that is currently held is kept. Returns whether the lock was
        removed.
        """
        with self._guard:
            lock = self._locks.get(tournament_id)
            if lock is None or lock.locked():
                return False
            del self._locks[tournament_id]
            return True

    def __contains__(self, tournament_id: str) -> bool:
        with self._guard:
            return tournament_id in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Process-wide default registry
default_lock_registry = TournamentLockRegistry()
