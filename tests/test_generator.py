import pytest

from debatedraw import DrawGenerator, DrawOptions, to_database_rows
from debatedraw.constants import POSITIONS
from debatedraw.exceptions import InsufficientInputError, SwingTeamPersistenceError
from debatedraw.models import Judge, PositionHistoryBook, Team


def _team(index, institution=None):
    return Team(
        id=f"t{index}",
        tournament_id="tour-1",
        name=f"Team {index}",
        institution=institution or f"Uni {index}",
        speakers=[f"S{index}a", f"S{index}b"],
    )


def _judge(index, institution=None):
    return Judge(
        id=f"j{index}",
        tournament_id="tour-1",
        name=f"Judge {index}",
        institution=institution,
    )


def _teams(count):
    return [_team(i) for i in range(count)]


def test_draw_has_one_room_per_label():
    generator = DrawGenerator(_teams(8), [_judge(0), _judge(1)], ["Hall", "Lab"], seed=1)
    draws = generator.generate()

    assert [draw.id for draw in draws] == ["room-1", "room-2"]
    assert [draw.room for draw in draws] == ["Hall", "Lab"]
    assert [draw.judge.id for draw in draws] == ["j0", "j1"]
    team_ids = [team_id for draw in draws for team_id in draw.team_ids]
    assert sorted(team_ids) == sorted(f"t{i}" for i in range(8))


def test_every_room_has_all_four_positions():
    draws = DrawGenerator(_teams(12), [], ["R1", "R2", "R3"], seed=9).generate()

    for draw in draws:
        assert set(draw.teams) == set(POSITIONS)
        assert draw.judge is None


def test_same_seed_gives_same_draw():
    rooms = ["R1", "R2", "R3"]
    first = DrawGenerator(_teams(12), [], rooms, seed=4).generate()
    second = DrawGenerator(_teams(12), [], rooms, seed=4).generate()

    assert [d.team_ids for d in first] == [d.team_ids for d in second]


def test_oxford_and_cambridge_are_both_drawn():
    teams = [_team(i, "Oxford") for i in range(4)] + [
        _team(i, "Cambridge") for i in range(4, 8)
    ]
    draws = DrawGenerator(teams, [_judge(0)], ["R1", "R2"], seed=11).generate()

    assert len(draws) == 2
    assert all(len(draw.ordered_teams) == 4 for draw in draws)
    assert all(draw.judge.id == "j0" for draw in draws)


def test_short_pool_gets_swing_team():
    draws = DrawGenerator(_teams(3), [], ["R1"], seed=0).generate()

    swing = draws[0].swing_teams
    assert len(swing) == 1
    assert swing[0].id == "swing-1"


def test_swing_teams_can_be_disallowed():
    generator = DrawGenerator(
        _teams(3), [], ["R1"], options={"allowSwingTeams": False}, seed=0
    )

    with pytest.raises(InsufficientInputError):
        generator.generate()


def test_surplus_teams_are_reported():
    generator = DrawGenerator(_teams(9), [], ["R1", "R2"], seed=2)
    generator.generate()

    assert len(generator.sitting_out) == 1


def test_draw_records_compositions_and_regenerate_forgets_them():
    generator = DrawGenerator(_teams(8), [], ["R1", "R2"], seed=5)
    generator.generate()
    generator.generate()
    assert len(generator.pairing_memo) >= 2

    generator.regenerate()
    assert len(generator.pairing_memo) == 2


def test_generate_does_not_touch_position_history():
    generator = DrawGenerator(_teams(4), [], ["R1"], seed=3)
    generator.generate()

    assert all(h.total == 0 for h in generator.history.histories.values())


def test_update_histories_counts_real_teams_only():
    generator = DrawGenerator(_teams(3), [], ["R1"], seed=3)
    draws = generator.generate()
    generator.update_histories(draws)

    histories = generator.history.histories
    assert sorted(histories) == ["t0", "t1", "t2"]
    for position, team in draws[0].teams.items():
        if not team.is_swing:
            assert histories[team.id].count(position) == 1


def test_balanced_positions_rotate_over_four_rounds():
    teams = _teams(4)
    book = PositionHistoryBook()
    generator = DrawGenerator(
        teams, [], ["R1"], options=DrawOptions(balance_positions=True), seed=8, history=book
    )

    for _ in range(4):
        generator.update_histories(generator.generate())

    for team in teams:
        assert book.get(team.id).counts() == (1, 1, 1, 1)


def test_cost_matrix_matches_pool():
    generator = DrawGenerator(_teams(6), [], ["R1", "R2"], seed=1)
    matrix = generator.position_cost_matrix()

    assert len(matrix) == 6
    assert all(len(row) == 8 for row in matrix)


def test_judge_clash_avoidance():
    teams = [_team(0, "A"), _team(1, "B"), _team(2, "C"), _team(3, "D")]
    judges = [_judge(0, "a"), _judge(1, "Z")]
    generator = DrawGenerator(
        teams, judges, ["R1"], options=DrawOptions(avoid_judge_clashes=True), seed=1
    )

    assert generator.generate()[0].judge.id == "j1"


def test_database_rows_follow_positions():
    draws = DrawGenerator(_teams(8), [_judge(0)], ["R1", "R2"], seed=6).generate()
    rows = to_database_rows(draws, "round-1", "tour-1")

    assert len(rows) == 2
    for draw, row in zip(draws, rows):
        assert row.gov_team_id == draw.teams["OG"].id
        assert row.opp_team_id == draw.teams["OO"].id
        assert row.cg_team_id == draw.teams["CG"].id
        assert row.co_team_id == draw.teams["CO"].id
        assert row.room == draw.room
        assert row.judge_id == "j0"
        assert row.judge == "Judge 0"
        assert row.status == "pending"
        assert row.gov_score is None and row.opp_score is None


def test_database_rows_can_reject_swing_teams():
    draws = DrawGenerator(_teams(3), [], ["R1"], seed=6).generate()

    rows = DrawGenerator.to_database_rows(draws, "round-1", "tour-1")
    assert "swing-1" in (
        rows[0].gov_team_id,
        rows[0].opp_team_id,
        rows[0].cg_team_id,
        rows[0].co_team_id,
    )
    with pytest.raises(SwingTeamPersistenceError):
        to_database_rows(draws, "round-1", "tour-1", reject_swing_teams=True)


def test_real_team_named_like_a_swing_team_keeps_a_unique_id():
    teams = [
        Team(id="swing-1", tournament_id="tour-1", name="Swing Kings"),
        _team(0),
        _team(1),
    ]
    generator = DrawGenerator(teams, [], ["R1"], seed=0)
    draws = generator.generate()

    assert len(set(draws[0].team_ids)) == 4
    generator.update_histories(draws)
    assert generator.history.get("swing-1").total == 1
