"""Data models for Swiss Pairing."""

from swisspairing.models.enums import MatchOutcome, RoundStatus
from swisspairing.models.pairing import Pairing, PairingResult
from swisspairing.models.player import Player
from swisspairing.models.tournament import (
    EngineConfig,
    Match,
    PairingHistory,
    StandingEntry,
    load_engine_config,
)

__all__ = [
    "EngineConfig",
    "Match",
    "MatchOutcome",
    "Pairing",
    "PairingHistory",
    "PairingResult",
    "Player",
    "RoundStatus",
    "StandingEntry",
    "load_engine_config",
]
