"""DrawOptions data class."""

# Debate Draw
# Copyright (C) 2025  Debate Draw developers
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

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from debatedraw.constants import (
    DEFAULT_POSITION_COST_EXPONENT,
    DEFAULT_RENYI_ORDER,
    METHOD_BALANCED,
    METHOD_POWER_PAIRING,
    METHOD_RANDOM,
    METHOD_SWISS,
)
from debatedraw.exceptions import InvalidConfigurationException
from debatedraw.utils import parse_flag


class DrawMethod(Enum):
    """Draw generation method label.

    Every method currently produces a random draw with per-room local
    optimisation; the label is kept so callers can store what was asked for.
    """

    RANDOM = METHOD_RANDOM
    POWER_PAIRING = METHOD_POWER_PAIRING
    SWISS = METHOD_SWISS
    BALANCED = METHOD_BALANCED

    @classmethod
    def parse(cls, value: Any) -> "DrawMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(method.value for method in cls)
            raise InvalidConfigurationException(
                f"Unknown draw method {value!r} (expected one of: {valid})"
            ) from None


# camelCase keys accepted from web clients
_CAMEL_CASE_KEYS = {
    "avoidInstitutionClashes": "avoid_institution_clashes",
    "balanceExperience": "balance_experience",
    "avoidRepeatPairings": "avoid_repeat_pairings",
    "allowSwingTeams": "allow_swing_teams",
    "balancePositions": "balance_positions",
    "positionCostExponent": "position_cost_exponent",
    "renyiOrder": "renyi_order",
    "avoidJudgeClashes": "avoid_judge_clashes",
}

_FLAG_FIELDS = (
    "avoid_institution_clashes",
    "balance_experience",
    "avoid_repeat_pairings",
    "allow_swing_teams",
    "balance_positions",
    "avoid_judge_clashes",
)


@dataclass
class DrawOptions:
    """Draw generation settings.

    Attributes
    ----------
    method : DrawMethod
        Requested method label. Does not change the draw.
    avoid_institution_clashes : bool
        Penalise two teams from one institution sharing a room.
    balance_experience : bool
        Accepted for compatibility; experience is not balanced.
    avoid_repeat_pairings : bool
        Add the repeat penalty to a room whose four teams were already drawn
        together. The penalty is the same for every ordering of the room, and
        rooms are formed by the shuffle, so this never changes the draw; it
        only raises the reported room cost.
    allow_swing_teams : bool
        Fill short rooms with swing teams. When False every room must be
        filled by real teams.
    balance_positions : bool
        Assign positions inside each room by position history cost.
    position_cost_exponent : float
        Exponent applied to the entropy deficit of a position.
    renyi_order : float
        Entropy order, 1 for Shannon. ``math.inf`` gives min-entropy.
    avoid_judge_clashes : bool
        Skip judges sharing an institution with a team in the room.
    """

    method: DrawMethod = DrawMethod.RANDOM
    avoid_institution_clashes: bool = True
    balance_experience: bool = True
    avoid_repeat_pairings: bool = True
    allow_swing_teams: bool = True
    balance_positions: bool = False
    position_cost_exponent: float = DEFAULT_POSITION_COST_EXPONENT
    renyi_order: float = DEFAULT_RENYI_ORDER
    avoid_judge_clashes: bool = False

    def __post_init__(self) -> None:
        self.method = DrawMethod.parse(self.method)
        if not isinstance(self.position_cost_exponent, (int, float)) or math.isnan(
            self.position_cost_exponent
        ):
            raise InvalidConfigurationException(
                f"position_cost_exponent must be a number: {self.position_cost_exponent!r}"
            )
        if self.position_cost_exponent < 0:
            raise InvalidConfigurationException(
                f"position_cost_exponent must not be negative: {self.position_cost_exponent}"
            )
        if not isinstance(self.renyi_order, (int, float)) or math.isnan(
            self.renyi_order
        ):
            raise InvalidConfigurationException(
                f"renyi_order must be a number: {self.renyi_order!r}"
            )
        if self.renyi_order < 0:
            raise InvalidConfigurationException(
                f"renyi_order must not be negative: {self.renyi_order}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize options to dictionary."""
        return {
            "method": self.method.value,
            "avoid_institution_clashes": self.avoid_institution_clashes,
            "balance_experience": self.balance_experience,
            "avoid_repeat_pairings": self.avoid_repeat_pairings,
            "allow_swing_teams": self.allow_swing_teams,
            "balance_positions": self.balance_positions,
            "position_cost_exponent": self.position_cost_exponent,
            "renyi_order": self.renyi_order,
            "avoid_judge_clashes": self.avoid_judge_clashes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrawOptions":
        """Deserialize options from dictionary.

        Both snake_case and camelCase keys are read; unknown keys are ignored.
        Flags may arrive as strings such as ``"false"`` from web clients.

        Raises:
            InvalidConfigurationException: If ``data`` is not a mapping or a
                flag is not a boolean.
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Draw options must be a mapping: {data!r}"
            )
        values = {_CAMEL_CASE_KEYS.get(key, key): value for key, value in data.items()}
        defaults = cls()

        flags = {}
        for name in _FLAG_FIELDS:
            value = values.get(name, getattr(defaults, name))
            try:
                flags[name] = parse_flag(value)
            except ValueError as e:
                raise InvalidConfigurationException(f"{name}: {e}") from e

        return cls(
            method=values.get("method", defaults.method),
            position_cost_exponent=values.get(
                "position_cost_exponent", defaults.position_cost_exponent
            ),
            renyi_order=values.get("renyi_order", defaults.renyi_order),
            **flags,
        )
