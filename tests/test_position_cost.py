import math

import pytest

from debatedraw.draw.clash import build_room_cost
from debatedraw.draw.position_cost import (
    PositionCostModel,
    best_position_assignment,
    build_cost_matrix,
    entropy,
    position_cost,
)
from debatedraw.models import PositionHistory, PositionHistoryBook, Team


def _team(index, is_swing=False):
    return Team(
        id=f"t{index}",
        tournament_id="t1",
        name=f"Team {index}",
        institution=f"Uni {index}",
        is_swing=is_swing,
    )


def test_shannon_entropy():
    assert entropy([1, 1, 1, 1]) == pytest.approx(2.0)
    assert entropy([3, 0, 0, 0]) == pytest.approx(0.0)
    assert entropy([1, 1, 0, 0]) == pytest.approx(1.0)


def test_empty_history_has_zero_entropy():
    assert entropy([0, 0, 0, 0]) == 0.0


def test_renyi_orders():
    assert entropy([2, 1, 1, 0], math.inf) == pytest.approx(1.0)
    assert entropy([1, 1, 1, 1], 2) == pytest.approx(2.0)
    assert entropy([1, 1, 1, 0], 0) == pytest.approx(math.log2(3))


def test_first_round_costs_the_full_deficit():
    assert position_cost(PositionHistory(), "OG") == pytest.approx(16.0)


def test_missing_position_is_cheapest():
    history = PositionHistory(OG=1, OO=1, CG=1)

    assert position_cost(history, "CO") == pytest.approx(0.0)
    assert position_cost(history, "OG") == pytest.approx(0.5**4)


def test_exponent_shapes_the_cost():
    history = PositionHistory(OG=1)

    # Repeating OG keeps the entropy at zero, so the deficit stays 2 bits
    assert position_cost(history, "OG", exponent=1) == pytest.approx(2.0)
    assert position_cost(history, "OO", exponent=1) == pytest.approx(1.0)


def test_cost_matrix_shape():
    teams = [_team(i) for i in range(4)] + [_team(4, is_swing=True)]
    book = PositionHistoryBook()
    book.seed(teams)

    matrix = build_cost_matrix(teams, ["R1", "R2"], book)

    assert len(matrix) == 5
    assert all(len(row) == 8 for row in matrix)
    assert matrix[4] == [0.0] * 8
    assert matrix[0][:4] == matrix[0][4:]


def test_model_looks_up_team_and_position():
    teams = [_team(i) for i in range(4)]
    book = PositionHistoryBook({"t0": PositionHistory(OG=1, OO=1, CG=1)})
    model = PositionCostModel(teams, ["R1"], book)

    assert model.cost(teams[0], 0, "CO") == pytest.approx(0.0)
    assert model.cost(teams[1], 0, "CO") == pytest.approx(16.0)
    assert model.cost(_team(99), 0, "OG") == 0.0


def test_assignment_moves_team_off_overused_position():
    teams = [_team(i) for i in range(4)]
    book = PositionHistoryBook({"t0": PositionHistory(OG=3)})
    book.seed(teams)
    model = PositionCostModel(teams, ["R1"], book)
    cost_fn = build_room_cost(position_cost=model.arrangement_cost(0))

    arrangement, cost = best_position_assignment(teams, cost_fn)

    assert arrangement[0].id != "t0"
    assert cost < cost_fn(teams)
