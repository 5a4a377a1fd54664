"""Enumerations shared by the models."""

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

from enum import Enum
from typing import Optional

from swisspairing.constants import (
    RESULT_BYE,
    RESULT_DRAW,
    RESULT_WIN_P1,
    RESULT_WIN_P2,
    ROUND_COMPLETED,
    ROUND_PENDING,
    ROUND_STARTED,
)
from swisspairing.exceptions import RoundStateException
from swisspairing.utils.validation import validate_result_strict


class MatchOutcome(str, Enum):
    """Closed set of stored match results."""

    WIN_P1 = RESULT_WIN_P1
    WIN_P2 = RESULT_WIN_P2
    DRAW = RESULT_DRAW
    BYE = RESULT_BYE

    @classmethod
    def parse(cls, value) -> Optional["MatchOutcome"]:
        """Convert a stored value into an outcome; ``None``/empty means pending.

        Raises:
            InvalidResultException: If the value is outside the closed set
        """
        if isinstance(value, cls):
            return value
        canonical = validate_result_strict(value)
        return cls(canonical) if canonical is not None else None


class RoundStatus(str, Enum):
    """Lifecycle of a round: pending -> started -> completed."""

    PENDING = ROUND_PENDING
    STARTED = ROUND_STARTED
    COMPLETED = ROUND_COMPLETED

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    @classmethod
    def parse(cls, value) -> "RoundStatus":
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.PENDING
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise RoundStateException(f"Unknown round status: {value!r}") from None


_STATUS_ORDER = (RoundStatus.PENDING, RoundStatus.STARTED, RoundStatus.COMPLETED)
