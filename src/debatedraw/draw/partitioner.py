"""Room partitioning: shuffle the team pool and cut it into rooms of four.

The number of room labels decides the number of rooms. When the pool is short
of ``4 * rooms`` real teams, the empty slots are filled with synthetic swing
teams; when it is long, the surplus teams sit out the round.
"""

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

import random
import string
from dataclasses import dataclass, field
from typing import AbstractSet, List, Sequence

from debatedraw.constants import (
    DEFAULT_ROOM_LABEL,
    SWING_ID_PREFIX,
    SWING_INSTITUTION,
    SWING_NAME_PREFIX,
    SWING_SPEAKERS,
    TEAMS_PER_ROOM,
    UNKNOWN_TOURNAMENT_ID,
)
from debatedraw.exceptions import InsufficientInputError, InvalidTeamDataException
from debatedraw.models.team import Team
from debatedraw.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class Partition:
    """Teams grouped into rooms, before positions are optimised.

    Attributes
    ----------
    labels : list of str
        Room label for each group.
    groups : list of list of Team
        Four teams per room, in shuffled order.
    swing_teams : list of Team
        Swing teams synthesised to fill the last rooms.
    sitting_out : list of Team
        Real teams left over once every room was full.
    """

    labels: List[str] = field(default_factory=list)
    groups: List[List[Team]] = field(default_factory=list)
    swing_teams: List[Team] = field(default_factory=list)
    sitting_out: List[Team] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.groups)


def shuffle_teams(teams: Sequence[Team], rng: random.Random) -> List[Team]:
    """Return a uniformly shuffled copy of ``teams`` (Fisher-Yates)."""
    shuffled = list(teams)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def swing_label(index: int) -> str:
    """Letters for the ``index``-th swing team: A, B, ..., Z, AA, AB, ..."""
    letters = string.ascii_uppercase
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, len(letters))
        label = letters[remainder] + label
    return label


def create_swing_team(
    index: int, tournament_id: str, taken_ids: AbstractSet[str] = frozenset()
) -> Team:
    """Create the ``index``-th (0-based) swing team of a draw.

    The id is ``swing-N`` for the smallest ``N > index`` not in ``taken_ids``,
    so a real team registered as ``swing-1`` keeps its id to itself.
    """
    number = index + 1
    while f"{SWING_ID_PREFIX}{number}" in taken_ids:
        number += 1
    return Team(
        id=f"{SWING_ID_PREFIX}{number}",
        tournament_id=tournament_id,
        name=f"{SWING_NAME_PREFIX} {swing_label(index)}",
        institution=SWING_INSTITUTION,
        speakers=list(SWING_SPEAKERS),
        is_swing=True,
    )


def room_label(rooms: Sequence[str], room_index: int) -> str:
    """Caller's label for the room, or ``Room N`` when it is missing or blank."""
    if room_index < len(rooms) and rooms[room_index] and str(rooms[room_index]).strip():
        return str(rooms[room_index])
    return DEFAULT_ROOM_LABEL.format(number=room_index + 1)


def partition_rooms(
    teams: Sequence[Team],
    rooms: Sequence[str],
    rng: random.Random,
    allow_swing_teams: bool = True,
) -> Partition:
    """Shuffle ``teams`` and split them into ``len(rooms)`` rooms of four.

    Args:
        teams: Real teams available for the round
        rooms: Room labels, one per room to fill
        rng: Random source for the shuffle
        allow_swing_teams: Fill missing slots with swing teams. When False,
            fewer than ``4 * len(rooms)`` teams is an error.

    Returns:
        Partition with exactly ``len(rooms)`` groups

    Raises:
        InsufficientInputError: If ``rooms`` or ``teams`` is empty, or swing
            teams are disallowed and the pool cannot fill every room.
        InvalidTeamDataException: If two teams share an id.
    """
    if not rooms:
        raise InsufficientInputError("At least one room is required to generate a draw")
    if not teams:
        raise InsufficientInputError("At least one team is required to generate a draw")

    seen = set()
    for team in teams:
        if team.id in seen:
            raise InvalidTeamDataException(f"Duplicate team id in pool: {team.id}")
        seen.add(team.id)

    slots = TEAMS_PER_ROOM * len(rooms)
    if not allow_swing_teams and len(teams) < slots:
        raise InsufficientInputError(
            f"Need {slots} teams for {len(rooms)} rooms without swing teams, "
            f"got {len(teams)}"
        )

    shuffled = shuffle_teams(teams, rng)
    tournament_id = teams[0].tournament_id or UNKNOWN_TOURNAMENT_ID
    partition = Partition()

    for room_index in range(len(rooms)):
        group = []
        for offset in range(TEAMS_PER_ROOM):
            team_index = room_index * TEAMS_PER_ROOM + offset
            if team_index < len(shuffled):
                group.append(shuffled[team_index])
            else:
                swing = create_swing_team(
                    len(partition.swing_teams), tournament_id, seen
                )
                seen.add(swing.id)
                partition.swing_teams.append(swing)
                group.append(swing)
        partition.labels.append(room_label(rooms, room_index))
        partition.groups.append(group)

    partition.sitting_out = shuffled[slots:]

    if partition.swing_teams:
        logger.warning(
            "Only %s teams for %s rooms: added %s swing team(s)",
            len(teams),
            len(rooms),
            len(partition.swing_teams),
        )
    if partition.sitting_out:
        logger.warning(
            "%s team(s) sit out: %s teams for %s slots",
            len(partition.sitting_out),
            len(teams),
            slots,
        )
    return partition
