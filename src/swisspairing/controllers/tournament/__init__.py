"""Controllers coordinating rounds of a tournament."""

from swisspairing.controllers.tournament.locking import (
    TournamentLockRegistry,
    default_lock_registry,
)
from swisspairing.controllers.tournament.result_recorder import ResultRecorder
from swisspairing.controllers.tournament.round_manager import RoundManager

__all__ = [
    "ResultRecorder",
    "RoundManager",
    "TournamentLockRegistry",
    "default_lock_registry",
]
