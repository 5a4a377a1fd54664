"""Controllers for Swiss Pairing."""

from swisspairing.controllers.tournament import (
    ResultRecorder,
    RoundManager,
    TournamentLockRegistry,
    default_lock_registry,
)

__all__ = [
    "ResultRecorder",
    "RoundManager",
    "TournamentLockRegistry",
    "default_lock_registry",
]
