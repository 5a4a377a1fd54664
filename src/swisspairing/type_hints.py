"""Type hints used in Swiss Pairing."""

from typing import Dict, FrozenSet, Literal, Optional, Tuple

# Bye quota policy literals
ByeQuotaPolicy = Literal["raise", "allow_extra_bye"]

# (player1_id, player2_id or None for a bye)
PairingIDs = Tuple[str, Optional[str]]
# Unordered pair of player ids who have met
PlayerPair = FrozenSet[str]
# player id -> reserved table number
StaticSeats = Dict[str, int]

#  LocalWords:  PairingIDs StaticSeats
