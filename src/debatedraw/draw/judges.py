"""Judge allocation, one judge per room at most."""

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

from typing import Optional, Sequence

from debatedraw.models.team import Judge, Team


def allocate_judge(judges: Sequence[Judge], room_index: int) -> Optional[Judge]:
    """Round-robin judge for a room: ``judges[room_index % len(judges)]``.

    Returns ``None`` when there are no judges; an unjudged room is valid.
    """
    if not judges:
        return None
    return judges[room_index % len(judges)]


def allocate_judge_avoiding_clashes(
    judges: Sequence[Judge], room_index: int, teams: Sequence[Team]
) -> Optional[Judge]:
    """Round-robin allocation that skips judges from a team's institution.

    Walks the judge cycle starting at the round-robin judge and returns the
    first judge with no institution in common with a real team in the room.
    If every judge clashes, the plain round-robin judge is returned.
    """
    if not judges:
        return None
    for step in range(len(judges)):
        judge = judges[(room_index + step) % len(judges)]
        if not any(judge.clashes_with(team) for team in teams):
            return judge
    return allocate_judge(judges, room_index)
