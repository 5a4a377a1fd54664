"""Exceptions for use in Swiss Pairing"""

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

from typing import Iterable, Optional


# ========== Base Application Exception ==========


class SwissPairingException(Exception):
    """Base exception for all Swiss Pairing errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all engine-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(SwissPairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when a generated round breaks a pairing invariant."""

    pass


class InsufficientPlayersError(PairingException):
    """Raised when fewer than two eligible players remain for a round."""

    def __init__(self, round_number: int, eligible_count: int):
        self.round_number = round_number
        self.eligible_count = eligible_count
        super().__init__(
            f"Round {round_number} needs at least 2 eligible players, "
            f"found {eligible_count}"
        )


class NoPairingAvailableException(PairingException):
    """Raised when no complete, legal pairing can be generated for a round.

    ``search_exhausted`` is set when the completion search stopped at its
    node budget, so a legal round may still exist.
    """

    def __init__(
        self,
        message: str,
        player_ids: Optional[Iterable[str]] = None,
        search_exhausted: bool = False,
    ):
        self.player_ids = list(player_ids or [])
        self.search_exhausted = search_exhausted
        super().__init__(message)


class UnresolvedByeQuotaError(NoPairingAvailableException):
    """Raised when a player needs a bye but has already used the bye quota.

    The round could only be completed by granting an extra bye to one of
    ``player_ids``.
    """

    pass


class DuplicatePairingRiskError(PairingException):
    """Raised when pairings for a round would overlap existing round matches.

    This signals that another pairing run for the same tournament and round
    has already placed some of the players.
    """

    def __init__(
        self, tournament_id: str, round_number: int, player_ids: Iterable[str]
    ):
        self.tournament_id = tournament_id
        self.round_number = round_number
        self.player_ids = sorted(player_ids)
        super().__init__(
            f"Tournament {tournament_id} round {round_number} already has matches "
            f"for players: {', '.join(self.player_ids)}"
        )


# ========== Tournament Exceptions ==========


class TournamentException(SwissPairingException):
    """Base exception for tournament-related errors."""

    pass


class RoundStateException(TournamentException):
    """Raised when a round is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class MatchNotFoundException(TournamentException):
    """Raised when no match of a round pairs the requested players."""

    pass


# ========== Player Exceptions ==========


class PlayerException(SwissPairingException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player is not on the roster."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when the same player id appears twice in a roster."""

    pass


# ========== Result Exceptions ==========


class ResultException(SwissPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result value is outside the closed result set."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(SwissPairingException):
    """Base exception for validation errors."""

    pass


class RoundNumberValidationException(ValidationException):
    """Raised when a round number is not a positive integer."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(SwissPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
