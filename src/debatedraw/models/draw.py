"""Data models for a generated draw."""

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

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from debatedraw.constants import DRAW_STATUS_PENDING, POSITIONS
from debatedraw.exceptions import InvalidDrawDataException
from debatedraw.models.team import Judge, Team
from debatedraw.type_hints import Arrangement, Position


@dataclass
class DrawRoom:
    """One room of a British Parliamentary draw.

    Attributes
    ----------
    id : str
        Synthesized room id, ``room-1``, ``room-2``, ...
    room : str
        Room label supplied by the caller.
    teams : dict of str to Team
        Exactly one team for each of OG, OO, CG and CO.
    judge : Judge or None
        Allocated judge. ``None`` when no judges were supplied.
    """

    id: str
    room: str
    teams: Dict[str, Team]
    judge: Optional[Judge] = None

    def __post_init__(self) -> None:
        if set(self.teams) != set(POSITIONS):
            raise InvalidDrawDataException(
                f"Room {self.room!r} needs exactly the positions {POSITIONS}, "
                f"got {sorted(self.teams)}"
            )

    @classmethod
    def from_arrangement(
        cls,
        room_id: str,
        room: str,
        arrangement: Sequence[Team],
        judge: Optional[Judge] = None,
    ) -> "DrawRoom":
        """Build a room from four teams in OG, OO, CG, CO order."""
        if len(arrangement) != len(POSITIONS):
            raise InvalidDrawDataException(
                f"Room {room!r} needs {len(POSITIONS)} teams, got {len(arrangement)}"
            )
        return cls(
            id=room_id,
            room=room,
            teams=dict(zip(POSITIONS, arrangement)),
            judge=judge,
        )

    def team_at(self, position: Position) -> Team:
        """Team drawn at ``position`` (OG, OO, CG or CO)."""
        return self.teams[position]

    @property
    def ordered_teams(self) -> Arrangement:
        """Teams in speaking order OG, OO, CG, CO."""
        return [self.team_at(position) for position in POSITIONS]

    @property
    def team_ids(self) -> List[str]:
        return [team.id for team in self.ordered_teams]

    @property
    def swing_teams(self) -> List[Team]:
        return [team for team in self.ordered_teams if team.is_swing]

    @property
    def composition_key(self) -> str:
        """Order-independent key of the four teams in this room."""
        return composition_key(self.ordered_teams)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize room to dictionary."""
        return {
            "id": self.id,
            "room": self.room,
            "teams": {
                position: self.teams[position].to_dict() for position in POSITIONS
            },
            "judge": self.judge.to_dict() if self.judge else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrawRoom":
        """Deserialize room from dictionary."""
        try:
            teams = {
                position: Team.from_dict(team_data)
                for position, team_data in data["teams"].items()
            }
            return cls(
                id=data["id"],
                room=data["room"],
                teams=teams,
                judge=Judge.from_dict(data["judge"]) if data.get("judge") else None,
            )
        except (KeyError, AttributeError, TypeError) as e:
            raise InvalidDrawDataException(f"Malformed draw room: {e}") from e


def composition_key(teams: Sequence[Team]) -> str:
    """Join the sorted team ids, so the same four teams give the same key."""
    return "-".join(sorted(team.id for team in teams))


@dataclass
class PersistableDraw:
    """Flat row layout the storage layer expects for one room.

    Attributes
    ----------
    round_id, tournament_id, room : str
        Where the room belongs.
    gov_team_id, opp_team_id, cg_team_id, co_team_id : str
        Team ids for OG, OO, CG and CO respectively.
    judge_id, judge : str or None
        Allocated judge id and display name.
    status : str
        Always ``pending`` for a freshly generated draw.
    gov_score, opp_score : float or None
        Unset until a ballot arrives.
    """

    round_id: str
    tournament_id: str
    room: str
    gov_team_id: str
    opp_team_id: str
    cg_team_id: str
    co_team_id: str
    judge_id: Optional[str] = None
    judge: Optional[str] = None
    status: str = DRAW_STATUS_PENDING
    gov_score: Optional[float] = None
    opp_score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize row to dictionary."""
        return {
            "round_id": self.round_id,
            "tournament_id": self.tournament_id,
            "room": self.room,
            "gov_team_id": self.gov_team_id,
            "opp_team_id": self.opp_team_id,
            "cg_team_id": self.cg_team_id,
            "co_team_id": self.co_team_id,
            "judge_id": self.judge_id,
            "judge": self.judge,
            "status": self.status,
            "gov_score": self.gov_score,
            "opp_score": self.opp_score,
        }
