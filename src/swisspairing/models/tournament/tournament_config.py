"""EngineConfig data class."""

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

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from swisspairing.constants import (
    BYE_POLICIES,
    BYE_POLICY_RAISE,
    DEFAULT_BACKTRACK_LIMIT,
    DEFAULT_MAX_BYES,
    RESISTANCE_FLOOR,
)
from swisspairing.exceptions import (
    FileLoadException,
    InvalidConfigurationException,
)
from swisspairing.type_hints import ByeQuotaPolicy
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class EngineConfig:
    """Pairing and tiebreak settings.

    Attributes
    ----------
    max_byes : int
        Byes a player may receive over the tournament.
    resistance_floor : float
        Minimum resistance any opponent contributes.
    bye_quota_policy : str
        What to do when a round can only be completed by exceeding
        ``max_byes``: "raise" or "allow_extra_bye".
    backtrack_limit : int
        Node budget of the completion search.
    seed : int or None
        Seed for first-round seat shuffling. None draws from system entropy.
    """

    max_byes: int = DEFAULT_MAX_BYES
    resistance_floor: float = RESISTANCE_FLOOR
    bye_quota_policy: ByeQuotaPolicy = BYE_POLICY_RAISE
    backtrack_limit: int = DEFAULT_BACKTRACK_LIMIT
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfigurationException on out-of-range values."""
        if isinstance(self.max_byes, bool) or not isinstance(self.max_byes, int):
            raise InvalidConfigurationException(
                f"max_byes must be an integer, got {self.max_byes!r}"
            )
        if self.max_byes < 0:
            raise InvalidConfigurationException("max_byes must be >= 0")
        if isinstance(self.resistance_floor, bool) or not isinstance(
            self.resistance_floor, (int, float)
        ):
            raise InvalidConfigurationException(
                f"resistance_floor must be a number, got {self.resistance_floor!r}"
            )
        if not 0.0 <= self.resistance_floor <= 1.0:
            raise InvalidConfigurationException(
                "resistance_floor must be between 0 and 1"
            )
        if self.bye_quota_policy not in BYE_POLICIES:
            raise InvalidConfigurationException(
                f"bye_quota_policy must be one of {', '.join(BYE_POLICIES)}, "
                f"got {self.bye_quota_policy!r}"
            )
        if isinstance(self.backtrack_limit, bool) or not isinstance(
            self.backtrack_limit, int
        ):
            raise InvalidConfigurationException(
                f"backtrack_limit must be an integer, got {self.backtrack_limit!r}"
            )
        if self.backtrack_limit < 1:
            raise InvalidConfigurationException("backtrack_limit must be >= 1")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise InvalidConfigurationException(
                f"seed must be an integer or null, got {self.seed!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "max_byes": self.max_byes,
            "resistance_floor": self.resistance_floor,
            "bye_quota_policy": self.bye_quota_policy,
            "backtrack_limit": self.backtrack_limit,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Deserialize configuration from dictionary."""
        unknown = set(data) - {
            "max_byes",
            "resistance_floor",
            "bye_quota_policy",
            "backtrack_limit",
            "seed",
        }
        if unknown:
            raise InvalidConfigurationException(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        return cls(
            max_byes=data.get("max_byes", DEFAULT_MAX_BYES),
            resistance_floor=data.get("resistance_floor", RESISTANCE_FLOOR),
            bye_quota_policy=data.get("bye_quota_policy", BYE_POLICY_RAISE),
            backtrack_limit=data.get("backtrack_limit", DEFAULT_BACKTRACK_LIMIT),
            seed=data.get("seed"),
        )


def load_engine_config(config_file: Union[str, Path, None]) -> EngineConfig:
    """Load an EngineConfig from a JSON file; defaults when no file is given.

    Raises:
        FileLoadException: If the file is missing or not valid JSON
        InvalidConfigurationException: If the values are invalid
    """
    if not config_file:
        return EngineConfig()

    config_path = Path(config_file)
    if not config_path.exists():
        raise FileLoadException(f"Configuration file not found: {config_file}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileLoadException(f"Failed to load configuration: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationException("Configuration file must hold a JSON object")

    logger.info("Loaded configuration from: %s", config_file)
    return EngineConfig.from_dict(data)
