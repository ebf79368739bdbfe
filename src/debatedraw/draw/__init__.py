"""British Parliamentary draw engine.

Partitions teams into rooms of four, optimises positions inside each room,
allocates judges and tracks position history across rounds.
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

from debatedraw.draw.clash import (
    build_room_cost,
    generate_arrangements,
    institution_clash_cost,
    optimize_arrangement,
)
from debatedraw.draw.generator import DrawGenerator, to_database_rows
from debatedraw.draw.judges import allocate_judge, allocate_judge_avoiding_clashes
from debatedraw.draw.partitioner import (
    Partition,
    create_swing_team,
    partition_rooms,
    shuffle_teams,
)
from debatedraw.draw.position_cost import (
    PositionCostModel,
    best_position_assignment,
    build_cost_matrix,
    entropy,
    position_cost,
)

__all__ = [
    "DrawGenerator",
    "to_database_rows",
    "Partition",
    "partition_rooms",
    "shuffle_teams",
    "create_swing_team",
    "build_room_cost",
    "generate_arrangements",
    "institution_clash_cost",
    "optimize_arrangement",
    "allocate_judge",
    "allocate_judge_avoiding_clashes",
    "PositionCostModel",
    "best_position_assignment",
    "build_cost_matrix",
    "entropy",
    "position_cost",
]
