"""Per-team position history and the used room compositions memo."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Sequence, Set, Tuple

from debatedraw.constants import POSITIONS
from debatedraw.exceptions import HistoryException
from debatedraw.models.draw import DrawRoom, composition_key
from debatedraw.models.team import Team


@dataclass
class PositionHistory:
    """How many times a team has spoken from each position."""

    OG: int = 0
    OO: int = 0
    CG: int = 0
    CO: int = 0

    def count(self, position: str) -> int:
        if position not in POSITIONS:
            raise KeyError(position)
        return getattr(self, position)

    def counts(self) -> Tuple[int, int, int, int]:
        """Counts in OG, OO, CG, CO order."""
        return (self.OG, self.OO, self.CG, self.CO)

    @property
    def total(self) -> int:
        return sum(self.counts())

    def increment(self, position: str) -> None:
        setattr(self, position, self.count(position) + 1)

    def with_increment(self, position: str) -> "PositionHistory":
        """Copy of this history with one more round at ``position``."""
        return replace(self, **{position: self.count(position) + 1})

    def to_dict(self) -> Dict[str, int]:
        return {position: self.count(position) for position in POSITIONS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PositionHistory":
        try:
            values = {position: int(data.get(position, 0)) for position in POSITIONS}
        except (TypeError, ValueError, AttributeError) as e:
            raise HistoryException(f"Malformed position history: {data!r}") from e
        if any(value < 0 for value in values.values()):
            raise HistoryException(f"Negative position count: {data!r}")
        return cls(**values)


@dataclass
class PositionHistoryBook:
    """Position histories for every team in a tournament.

    The book is owned by the caller: it is advanced only by :meth:`record`,
    which should run once per finalized round.

    Attributes
    ----------
    histories : dict of str to PositionHistory
        Team id to its counters.
    """

    histories: Dict[str, PositionHistory] = field(default_factory=dict)

    def seed(self, teams: Iterable[Team]) -> None:
        """Start zeroed counters for real teams not yet in the book."""
        for team in teams:
            if not team.is_swing:
                self.histories.setdefault(team.id, PositionHistory())

    def get(self, team_id: str) -> PositionHistory:
        """History for a team; an unknown team has an all-zero history."""
        return self.histories.get(team_id, PositionHistory())

    def record(self, draws: Sequence[DrawRoom]) -> int:
        """Add one round at the drawn position for every real team.

        Returns:
            Number of team positions recorded.
        """
        recorded = 0
        for draw in draws:
            for position, team in draw.teams.items():
                if team.is_swing:
                    continue
                self.histories.setdefault(team.id, PositionHistory()).increment(
                    position
                )
                recorded += 1
        return recorded

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the book to dictionary."""
        return {
            team_id: history.to_dict()
            for team_id, history in sorted(self.histories.items())
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PositionHistoryBook":
        """Deserialize the book from dictionary."""
        if not isinstance(data, dict):
            raise HistoryException(f"Position history book must be a mapping: {data!r}")
        return cls(
            histories={
                str(team_id): PositionHistory.from_dict(history)
                for team_id, history in data.items()
            }
        )


@dataclass
class PairingMemo:
    """Room compositions already drawn, to discourage repeats.

    Attributes
    ----------
    used : set of str
        Composition keys (sorted team ids joined by ``-``).
    """

    used: Set[str] = field(default_factory=set)

    def add(self, teams: Sequence[Team]) -> None:
        """Record that these teams shared a room."""
        self.used.add(composition_key(teams))

    def has_been_used(self, teams: Sequence[Team]) -> bool:
        """Check if these teams already shared a room."""
        return composition_key(teams) in self.used

    def clear(self) -> None:
        self.used.clear()

    def __len__(self) -> int:
        return len(self.used)

    def to_dict(self) -> Dict[str, Any]:
        return {"used": sorted(self.used)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingMemo":
        try:
            return cls(used=set(map(str, data.get("used", []))))
        except (AttributeError, TypeError) as e:
            raise HistoryException(f"Malformed pairing memo: {data!r}") from e
