"""Teams and judges as the draw engine reads them."""

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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from debatedraw.exceptions import InvalidJudgeDataException, InvalidTeamDataException
from debatedraw.utils import generate_id, parse_flag


class ExperienceLevel(Enum):
    """Experience bracket of a team or judge."""

    NOVICE = "novice"
    INTERMEDIATE = "intermediate"
    OPEN = "open"
    PRO = "pro"

    @classmethod
    def parse(cls, value: Any) -> Optional["ExperienceLevel"]:
        """Read a level from its value, case-insensitively. ``None`` stays ``None``."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(level.value for level in cls)
            raise ValueError(
                f"Unknown experience level {value!r} (expected one of: {valid})"
            ) from None


def institution_key(institution: Optional[str]) -> Optional[str]:
    """Normalise an institution for clash matching.

    Empty or blank institutions never clash, so they map to ``None``.
    """
    if institution is None:
        return None
    key = institution.strip().lower()
    return key or None


def _speakers_from_dict(data: Dict[str, Any]) -> List[str]:
    if "speakers" in data and data["speakers"] is not None:
        return [str(s) for s in data["speakers"]]
    # Flat speaker_1, speaker_2, ... columns
    speakers = []
    index = 1
    while f"speaker_{index}" in data:
        value = data[f"speaker_{index}"]
        if value:
            speakers.append(str(value))
        index += 1
    return speakers


@dataclass
class Team:
    """A debate team.

    Attributes
    ----------
    id : str
        Unique team id.
    tournament_id : str
        Owning tournament.
    name : str
        Display name.
    institution : str or None
        Free-text institution. Clashes compare it case-insensitively.
    speakers : list of str
        Speaker names, normally two.
    experience_level : ExperienceLevel or None
        Experience bracket.
    is_swing : bool
        True for synthetic swing teams created to fill a room. Swing teams
        never exist in storage.
    """

    id: str
    tournament_id: str
    name: str
    institution: Optional[str] = None
    speakers: List[str] = field(default_factory=list)
    experience_level: Optional[ExperienceLevel] = None
    is_swing: bool = False

    @property
    def institution_key(self) -> Optional[str]:
        return institution_key(self.institution)

    def shares_institution(self, other: "Team") -> bool:
        """True when both teams have the same non-empty institution."""
        mine = self.institution_key
        return mine is not None and mine == other.institution_key

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "name": self.name,
            "institution": self.institution,
            "speakers": list(self.speakers),
            "experience_level": (
                self.experience_level.value if self.experience_level else None
            ),
            "is_swing": self.is_swing,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary.

        Accepts either a ``speakers`` list or flat ``speaker_1``/``speaker_2``
        keys. A missing id is generated. A team is a swing team only when
        ``is_swing`` says so; the id prefix is not consulted.

        Raises:
            InvalidTeamDataException: If the name is missing, the experience
                level is unknown or ``is_swing`` is not a boolean.
        """
        name = data.get("name")
        if not name or not str(name).strip():
            raise InvalidTeamDataException(f"Team is missing a name: {data!r}")
        try:
            level = ExperienceLevel.parse(data.get("experience_level"))
            is_swing = parse_flag(data.get("is_swing") or False)
        except ValueError as e:
            raise InvalidTeamDataException(f"Team {name!r}: {e}") from e

        team_id = str(data.get("id") or generate_id("team"))
        return cls(
            id=team_id,
            tournament_id=str(data.get("tournament_id", "")),
            name=str(name).strip(),
            institution=data.get("institution"),
            speakers=_speakers_from_dict(data),
            experience_level=level,
            is_swing=is_swing,
        )


@dataclass
class Judge:
    """An adjudicator available for the round.

    Attributes
    ----------
    id : str
        Unique judge id.
    tournament_id : str
        Owning tournament.
    name : str
        Display name, stored next to the judge id on each draw row.
    institution : str or None
        Free-text institution.
    experience_level : ExperienceLevel or None
        Experience bracket.
    """

    id: str
    tournament_id: str
    name: str
    institution: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None

    @property
    def institution_key(self) -> Optional[str]:
        return institution_key(self.institution)

    def clashes_with(self, team: Team) -> bool:
        """True when the judge shares an institution with a real team."""
        if team.is_swing:
            return False
        mine = self.institution_key
        return mine is not None and mine == team.institution_key

    def to_dict(self) -> Dict[str, Any]:
        """Serialize judge to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "name": self.name,
            "institution": self.institution,
            "experience_level": (
                self.experience_level.value if self.experience_level else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Judge":
        """Deserialize judge from dictionary."""
        name = data.get("name")
        if not name or not str(name).strip():
            raise InvalidJudgeDataException(f"Judge is missing a name: {data!r}")
        try:
            level = ExperienceLevel.parse(data.get("experience_level"))
        except ValueError as e:
            raise InvalidJudgeDataException(f"Judge {name!r}: {e}") from e

        return cls(
            id=str(data.get("id") or generate_id("judge")),
            tournament_id=str(data.get("tournament_id", "")),
            name=str(name).strip(),
            institution=data.get("institution"),
            experience_level=level,
        )
