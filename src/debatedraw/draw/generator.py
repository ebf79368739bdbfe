"""British Parliamentary draw generation.

This module ties the room partitioner, the clash optimiser, the judge
allocator and the position cost model together behind :class:`DrawGenerator`,
and maps generated rooms onto the storage row layout.
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
from typing import Any, Dict, List, Optional, Sequence, Union

from debatedraw.constants import POSITION_COLUMNS, POSITIONS, ROOM_ID_PREFIX
from debatedraw.draw.clash import (
    build_room_cost,
    generate_arrangements,
    optimize_arrangement,
)
from debatedraw.draw.judges import allocate_judge, allocate_judge_avoiding_clashes
from debatedraw.draw.partitioner import partition_rooms
from debatedraw.draw.position_cost import PositionCostModel, best_position_assignment
from debatedraw.exceptions import SwingTeamPersistenceError
from debatedraw.models.draw import DrawRoom, PersistableDraw
from debatedraw.models.draw_options import DrawOptions
from debatedraw.models.history import PairingMemo, PositionHistoryBook
from debatedraw.models.team import Judge, Team
from debatedraw.type_hints import CostMatrix
from debatedraw.utils import setup_logger

logger = setup_logger(__name__)


class DrawGenerator:
    """Generates British Parliamentary draws for one tournament.

    Keep one instance per tournament, or persist :attr:`history` and
    :attr:`pairing_memo` between rounds and pass them back in. The generator
    does not advance position history by itself: call
    :meth:`update_histories` once a round's draw is final.

    Instances hold mutable history state and must not be shared between
    threads; use one generator per concurrent draw.
    """

    def __init__(
        self,
        teams: Sequence[Team],
        judges: Sequence[Judge],
        rooms: Sequence[str],
        options: Optional[Union[DrawOptions, Dict[str, Any]]] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        history: Optional[PositionHistoryBook] = None,
        pairing_memo: Optional[PairingMemo] = None,
    ):
        """Initialize the generator.

        Args:
            teams: Real teams available for the round
            judges: Judges to allocate, in allocation order
            rooms: Room labels; one room is drawn per label
            options: DrawOptions or a dict accepted by DrawOptions.from_dict
            seed: Seed for the generator's own random source
            rng: Random source to use instead of a seeded one
            history: Position history book carried over from earlier rounds
            pairing_memo: Room compositions drawn in earlier rounds
        """
        self.teams: List[Team] = list(teams)
        self.judges: List[Judge] = list(judges)
        self.rooms: List[str] = list(rooms)
        if options is None:
            options = DrawOptions()
        elif isinstance(options, dict):
            options = DrawOptions.from_dict(options)
        self.options: DrawOptions = options
        self.random = rng if rng is not None else random.Random(seed)
        self.history = history if history is not None else PositionHistoryBook()
        self.history.seed(self.teams)
        self.pairing_memo = pairing_memo if pairing_memo is not None else PairingMemo()
        self.sitting_out: List[Team] = []

    def generate(self) -> List[DrawRoom]:
        """Generate one draw, exactly one room per room label.

        Returns:
            Rooms in label order

        Raises:
            InsufficientInputError: If there are no rooms or no teams, or
                swing teams are disallowed and the pool is short.
        """
        options = self.options
        partition = partition_rooms(
            self.teams, self.rooms, self.random, options.allow_swing_teams
        )
        self.sitting_out = list(partition.sitting_out)

        if options.balance_experience:
            logger.debug("Experience balancing requested but not applied")

        position_model = None
        if options.balance_positions:
            position_model = PositionCostModel(
                self.teams,
                self.rooms,
                self.history,
                options.position_cost_exponent,
                options.renyi_order,
            )

        memo = self.pairing_memo if options.avoid_repeat_pairings else None
        draws = []
        for room_index, (label, group) in enumerate(
            zip(partition.labels, partition.groups)
        ):
            if position_model is not None:
                cost_fn = build_room_cost(
                    options.avoid_institution_clashes,
                    memo,
                    position_model.arrangement_cost(room_index),
                )
                arrangement, cost = best_position_assignment(group, cost_fn)
            else:
                cost_fn = build_room_cost(options.avoid_institution_clashes, memo)
                arrangement, cost = optimize_arrangement(
                    group, cost_fn, generate_arrangements(group)
                )
            logger.debug("%s arranged with cost %.2f", label, cost)

            draws.append(
                DrawRoom.from_arrangement(
                    f"{ROOM_ID_PREFIX}{room_index + 1}",
                    label,
                    arrangement,
                    self._judge_for_room(room_index, arrangement),
                )
            )
            self.pairing_memo.add(arrangement)

        logger.info(
            "Generated %s room(s) for %s team(s) using %s (%s swing, %s sitting out)",
            len(draws),
            len(self.teams),
            options.method.value,
            len(partition.swing_teams),
            len(partition.sitting_out),
        )
        return draws

    def regenerate(self) -> List[DrawRoom]:
        """Forget the used room compositions and draw again."""
        self.pairing_memo.clear()
        return self.generate()

    def update_histories(self, draws: Sequence[DrawRoom]) -> None:
        """Record a finalized round in each real team's position history."""
        recorded = self.history.record(draws)
        logger.info("Recorded %s team position(s) from %s room(s)", recorded, len(draws))

    def position_cost_matrix(self) -> CostMatrix:
        """Current team by (room, position) cost matrix for this round."""
        return PositionCostModel(
            self.teams,
            self.rooms,
            self.history,
            self.options.position_cost_exponent,
            self.options.renyi_order,
        ).matrix

    def _judge_for_room(
        self, room_index: int, arrangement: Sequence[Team]
    ) -> Optional[Judge]:
        if self.options.avoid_judge_clashes:
            return allocate_judge_avoiding_clashes(self.judges, room_index, arrangement)
        return allocate_judge(self.judges, room_index)

    @staticmethod
    def to_database_rows(
        draws: Sequence[DrawRoom],
        round_id: str,
        tournament_id: str,
        reject_swing_teams: bool = False,
    ) -> List[PersistableDraw]:
        return to_database_rows(draws, round_id, tournament_id, reject_swing_teams)


def to_database_rows(
    draws: Sequence[DrawRoom],
    round_id: str,
    tournament_id: str,
    reject_swing_teams: bool = False,
) -> List[PersistableDraw]:
    """Map generated rooms onto the storage row layout.

    OG goes to ``gov_team_id``, OO to ``opp_team_id``, CG to ``cg_team_id``
    and CO to ``co_team_id``. Every row starts ``pending`` with no scores.

    Args:
        draws: Generated rooms
        round_id: Round the rows belong to
        tournament_id: Tournament the rows belong to
        reject_swing_teams: Raise instead of writing synthetic team ids

    Raises:
        SwingTeamPersistenceError: If ``reject_swing_teams`` is set and a
            room holds a swing team.
    """
    rows = []
    for draw in draws:
        if reject_swing_teams and draw.swing_teams:
            raise SwingTeamPersistenceError(
                f"{draw.room} contains swing team(s) "
                f"{', '.join(team.id for team in draw.swing_teams)}"
            )
        team_columns = {
            POSITION_COLUMNS[position]: draw.team_at(position).id
            for position in POSITIONS
        }
        rows.append(
            PersistableDraw(
                round_id=round_id,
                tournament_id=tournament_id,
                room=draw.room,
                judge_id=draw.judge.id if draw.judge else None,
                judge=draw.judge.name if draw.judge else None,
                **team_columns,
            )
        )
    return rows
