"""Per-room clash optimisation.

Each room's four teams are scored by a compatibility cost (lower is better)
and a bounded set of alternative arrangements is searched: the original order
plus every single pairwise swap, seven candidates in all. The search never
looks outside the room and gives a local minimum, not a global one.
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

from itertools import combinations, permutations
from typing import Callable, List, Optional, Sequence, Tuple

from debatedraw.constants import INSTITUTION_CLASH_PENALTY, REPEAT_PAIRING_PENALTY
from debatedraw.models.history import PairingMemo
from debatedraw.models.team import Team
from debatedraw.type_hints import Arrangement, ArrangementCost


def institution_clash_count(teams: Sequence[Team]) -> int:
    """Number of unordered team pairs sharing a non-empty institution."""
    return sum(1 for a, b in combinations(teams, 2) if a.shares_institution(b))


def institution_clash_cost(
    teams: Sequence[Team], penalty: float = INSTITUTION_CLASH_PENALTY
) -> float:
    """Institution clash penalty summed over every pair of ``teams``."""
    return institution_clash_count(teams) * penalty


def generate_arrangements(teams: Sequence[Team]) -> List[Arrangement]:
    """The identity order followed by each single pairwise swap.

    Swaps are listed in (0, 1), (0, 2), ... order, so four teams give seven
    candidates.
    """
    arrangements = [list(teams)]
    for i, j in combinations(range(len(teams)), 2):
        swapped = list(teams)
        swapped[i], swapped[j] = swapped[j], swapped[i]
        arrangements.append(swapped)
    return arrangements


def all_arrangements(teams: Sequence[Team]) -> List[Arrangement]:
    """Every ordering of ``teams``, identity first (24 for a full room)."""
    return [list(perm) for perm in permutations(teams)]


def optimize_arrangement(
    teams: Sequence[Team],
    cost_fn: ArrangementCost,
    candidates: Optional[List[Arrangement]] = None,
) -> Tuple[Arrangement, float]:
    """Pick the lowest-cost arrangement among ``candidates``.

    Ties keep the earliest candidate, so the identity order wins unless an
    alternative is strictly cheaper.

    Args:
        teams: Teams in their current order
        cost_fn: Scores one arrangement, lower is better
        candidates: Arrangements to evaluate, defaults to
            :func:`generate_arrangements`

    Returns:
        Tuple of (best arrangement, its cost)
    """
    if candidates is None:
        candidates = generate_arrangements(teams)

    best_arrangement = list(teams)
    best_cost = cost_fn(best_arrangement)
    for arrangement in candidates:
        cost = cost_fn(arrangement)
        if cost < best_cost:
            best_cost = cost
            best_arrangement = arrangement
    return best_arrangement, best_cost


def build_room_cost(
    avoid_institution_clashes: bool = True,
    pairing_memo: Optional[PairingMemo] = None,
    position_cost: Optional[Callable[[Sequence[Team]], float]] = None,
) -> ArrangementCost:
    """Compose the compatibility cost used to compare arrangements of a room.

    Args:
        avoid_institution_clashes: Add the institution clash penalty
        pairing_memo: When given, add the repeat penalty for a room
            composition already in the memo
        position_cost: Optional position-dependent cost of an arrangement
    """

    def cost(arrangement: Sequence[Team]) -> float:
        total = 0.0
        if avoid_institution_clashes:
            total += institution_clash_cost(arrangement)
        if pairing_memo is not None and pairing_memo.has_been_used(arrangement):
            total += REPEAT_PAIRING_PENALTY
        if position_cost is not None:
            total += position_cost(arrangement)
        return total

    return cost
