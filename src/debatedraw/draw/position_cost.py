"""Position-history cost model.

Over a tournament each team should rotate through OG, OO, CG and CO. The cost
of giving a team a position is computed from the entropy of its position
counts after hypothetically adding that position: the further the entropy
falls below the maximum (2 bits for four positions), the more expensive the
assignment. The deficit is raised to a configurable exponent, so positions a
team already dominates become sharply more expensive than ones it rarely held.
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

import math
from typing import Dict, Sequence, Tuple

from debatedraw.constants import (
    DEFAULT_POSITION_COST_EXPONENT,
    DEFAULT_RENYI_ORDER,
    POSITIONS,
    TEAMS_PER_ROOM,
)
from debatedraw.draw.clash import all_arrangements, optimize_arrangement
from debatedraw.models.history import PositionHistory, PositionHistoryBook
from debatedraw.models.team import Team
from debatedraw.type_hints import (
    Arrangement,
    ArrangementCost,
    CostMatrix,
    Position,
)

MAX_POSITION_ENTROPY = math.log2(len(POSITIONS))


def entropy(counts: Sequence[int], order: float = DEFAULT_RENYI_ORDER) -> float:
    """Rényi entropy in bits of the distribution given by ``counts``.

    Order 1 is Shannon entropy, order 0 is Hartley entropy and ``math.inf``
    is min-entropy. An empty history has zero entropy.
    """
    total = sum(counts)
    if total <= 0:
        return 0.0
    probabilities = [count / total for count in counts if count > 0]

    if order == 1:
        return -sum(p * math.log2(p) for p in probabilities)
    if math.isinf(order):
        return -math.log2(max(probabilities))
    return math.log2(sum(p**order for p in probabilities)) / (1 - order)


def position_cost(
    history: PositionHistory,
    position: Position,
    exponent: float = DEFAULT_POSITION_COST_EXPONENT,
    renyi_order: float = DEFAULT_RENYI_ORDER,
) -> float:
    """Cost of giving a team with ``history`` the given position."""
    hypothetical = history.with_increment(position)
    deficit = MAX_POSITION_ENTROPY - entropy(hypothetical.counts(), renyi_order)
    # Float noise can push a perfectly even history just below zero
    return max(0.0, deficit) ** exponent


def build_cost_matrix(
    teams: Sequence[Team],
    rooms: Sequence[str],
    book: PositionHistoryBook,
    exponent: float = DEFAULT_POSITION_COST_EXPONENT,
    renyi_order: float = DEFAULT_RENYI_ORDER,
) -> CostMatrix:
    """Team by (room, position) cost matrix.

    Row ``i`` belongs to ``teams[i]``; column ``r * 4 + p`` is room ``r`` at
    position ``POSITIONS[p]``. Swing teams have no history and cost nothing.
    """
    matrix = []
    for team in teams:
        if team.is_swing:
            matrix.append([0.0] * (len(rooms) * TEAMS_PER_ROOM))
            continue
        history = book.get(team.id)
        per_position = [
            position_cost(history, position, exponent, renyi_order)
            for position in POSITIONS
        ]
        matrix.append(per_position * len(rooms))
    return matrix


class PositionCostModel:
    """Looks up position costs for teams of one round from the cost matrix."""

    def __init__(
        self,
        teams: Sequence[Team],
        rooms: Sequence[str],
        book: PositionHistoryBook,
        exponent: float = DEFAULT_POSITION_COST_EXPONENT,
        renyi_order: float = DEFAULT_RENYI_ORDER,
    ):
        self.teams = list(teams)
        self.rooms = list(rooms)
        self._rows: Dict[str, int] = {team.id: i for i, team in enumerate(self.teams)}
        self.matrix = build_cost_matrix(
            self.teams, self.rooms, book, exponent, renyi_order
        )

    def cost(self, team: Team, room_index: int, position: Position) -> float:
        row = self._rows.get(team.id)
        if row is None or team.is_swing:
            return 0.0
        column = room_index * TEAMS_PER_ROOM + POSITIONS.index(position)
        return self.matrix[row][column]

    def arrangement_cost(self, room_index: int) -> ArrangementCost:
        """Cost function for arrangements of the teams in one room."""

        def cost(arrangement: Sequence[Team]) -> float:
            return sum(
                self.cost(team, room_index, position)
                for team, position in zip(arrangement, POSITIONS)
            )

        return cost


def best_position_assignment(
    teams: Sequence[Team], cost_fn: ArrangementCost
) -> Tuple[Arrangement, float]:
    """Exact assignment of a room's four teams to positions.

    Every ordering is evaluated, which for four teams is the optimal
    bipartite matching between teams and positions. Ties keep the current
    order.
    """
    return optimize_arrangement(teams, cost_fn, all_arrangements(teams))
