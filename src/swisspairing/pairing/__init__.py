"""Pairing algorithms for Swiss Pairing."""

from swisspairing.pairing.duplicates import (
    DuplicatePairing,
    duplicate_matches_to_remove,
    find_duplicate_pairings,
)
from swisspairing.pairing.swiss import eligible_players, generate_pairings
from swisspairing.pairing.table_assignment import (
    SeatAssignment,
    assign_match_numbers,
    static_seats_from_players,
)

__all__ = [
    "DuplicatePairing",
    "SeatAssignment",
    "assign_match_numbers",
    "duplicate_matches_to_remove",
    "eligible_players",
    "find_duplicate_pairings",
    "generate_pairings",
    "static_seats_from_players",
]
