"""Type hints used in Debate Draw."""

from typing import Callable, List, Literal, Sequence

# British Parliamentary positions, in speaking order
Position = Literal["OG", "OO", "CG", "CO"]

# Four teams in position order OG, OO, CG, CO
Arrangement = List["Team"]
# Scores an arrangement, lower is better
ArrangementCost = Callable[[Sequence["Team"]], float]
# Row per team, column per (room, position) slot
CostMatrix = List[List[float]]
