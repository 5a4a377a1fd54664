from swisspairing.models.tournament.match import Match
from swisspairing.models.tournament.pairing_history import PairingHistory
from swisspairing.models.tournament.standing_entry import StandingEntry
from swisspairing.models.tournament.tournament_config import (
    EngineConfig,
    load_engine_config,
)

__all__ = [
    "EngineConfig",
    "Match",
    "PairingHistory",
    "StandingEntry",
    "load_engine_config",
]
