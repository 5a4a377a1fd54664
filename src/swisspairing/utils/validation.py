"""Validation utilities for Swiss Pairing.

This module provides reusable validation functions with consistent error handling.
"""

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

from typing import Any, Iterable, Optional

from swisspairing.constants import (
    RESULT_BYE,
    RESULT_DRAW,
    RESULT_WIN_P1,
    RESULT_WIN_P2,
)
from swisspairing.exceptions import (
    DuplicatePlayerException,
    InvalidResultException,
    RoundNumberValidationException,
)

VALID_RESULTS = (RESULT_WIN_P1, RESULT_WIN_P2, RESULT_DRAW, RESULT_BYE)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Result Validation ==========


def validate_result(value: Optional[str], required: bool = False) -> ValidationResult:
    """Validate a match result value.

    Accepts the four stored values in any letter case. An empty value means
    the match is still pending.

    Args:
        value: Result value to validate
        required: Whether a pending (empty) result is invalid

    Returns:
        ValidationResult with the canonical upper-case value

    Example:
        >>> result = validate_result("win_p1")
        >>> result.sanitized_value
        'WIN_P1'
    """
    if value is None or not str(value).strip():
        if required:
            return ValidationResult(
                is_valid=False, error_message="Match result is required"
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    canonical = str(value).strip().upper()
    if canonical in VALID_RESULTS:
        return ValidationResult(is_valid=True, sanitized_value=canonical)

    return ValidationResult(
        is_valid=False,
        error_message=(
            f"Invalid match result: {value!r} "
            f"(expected one of {', '.join(VALID_RESULTS)})"
        ),
    )


def validate_result_strict(value: Optional[str]) -> Optional[str]:
    """Validate a result and raise if invalid.

    Raises:
        InvalidResultException: If the value is not one of the stored results
    """
    result = validate_result(value)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value


# ========== Player Validation ==========


def validate_player_name(name: Optional[str]) -> ValidationResult:
    """Validate a player name (required, surrounding whitespace removed)."""
    if name is None or not str(name).strip():
        return ValidationResult(is_valid=False, error_message="Player name is required")
    return ValidationResult(is_valid=True, sanitized_value=str(name).strip())


def validate_round_number(value: Any, field_name: str = "round number") -> ValidationResult:
    """Validate a 1-based round number."""
    if isinstance(value, bool):
        return ValidationResult(
            is_valid=False, error_message=f"Invalid {field_name}: {value!r}"
        )
    try:
        number = int(value)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False, error_message=f"Invalid {field_name}: {value!r}"
        )
    if number < 1:
        return ValidationResult(
            is_valid=False, error_message=f"{field_name.capitalize()} must be >= 1"
        )
    return ValidationResult(is_valid=True, sanitized_value=number)


def validate_round_number_strict(value: Any, field_name: str = "round number") -> int:
    """Validate a round number and raise if invalid.

    Raises:
        RoundNumberValidationException: If the value is not a positive integer
    """
    result = validate_round_number(value, field_name)
    if not result.is_valid:
        raise RoundNumberValidationException(result.error_message)
    return result.sanitized_value


def ensure_unique_ids(player_ids: Iterable[str]) -> None:
    """Raise if a roster lists the same player twice.

    Raises:
        DuplicatePlayerException: On the first repeated id
    """
    seen = set()
    for player_id in player_ids:
        if player_id in seen:
            raise DuplicatePlayerException(f"Duplicate player id in roster: {player_id}")
        seen.add(player_id)
