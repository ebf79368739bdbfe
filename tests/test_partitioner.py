import random

import pytest

from debatedraw.draw.partitioner import (
    create_swing_team,
    partition_rooms,
    room_label,
    shuffle_teams,
    swing_label,
)
from debatedraw.exceptions import InsufficientInputError, InvalidTeamDataException
from debatedraw.models import Team


def _team(index, institution=None, tournament_id="t1"):
    return Team(
        id=f"t{index}",
        tournament_id=tournament_id,
        name=f"Team {index}",
        institution=institution or f"Uni {index}",
        speakers=[f"S{index}a", f"S{index}b"],
    )


def _teams(count):
    return [_team(i) for i in range(count)]


def test_one_group_per_room_label():
    partition = partition_rooms(_teams(8), ["A", "B"], random.Random(1))

    assert len(partition) == 2
    assert partition.labels == ["A", "B"]
    assert all(len(group) == 4 for group in partition.groups)
    assert not partition.swing_teams
    assert not partition.sitting_out


def test_three_teams_fill_one_room_with_a_swing_team():
    partition = partition_rooms(_teams(3), ["Room 1"], random.Random(5))

    group = partition.groups[0]
    real = [team for team in group if not team.is_swing]
    swing = [team for team in group if team.is_swing]
    assert len(real) == 3
    assert len(swing) == 1
    assert swing[0].id == "swing-1"
    assert swing[0].name == "Swing Team A"
    assert swing[0].institution == "Swing"
    assert swing[0].tournament_id == "t1"


def test_swing_teams_are_numbered_in_order():
    partition = partition_rooms(_teams(5), ["R1", "R2"], random.Random(2))

    assert [team.id for team in partition.swing_teams] == [
        "swing-1",
        "swing-2",
        "swing-3",
    ]
    # Swing teams only ever fill the tail of the shuffled pool
    assert not any(team.is_swing for team in partition.groups[0])


def test_surplus_teams_sit_out():
    teams = _teams(10)
    partition = partition_rooms(teams, ["R1", "R2"], random.Random(3))

    assert len(partition.sitting_out) == 2
    placed = [team.id for group in partition.groups for team in group]
    sitting = [team.id for team in partition.sitting_out]
    assert sorted(placed + sitting) == sorted(team.id for team in teams)


def test_no_rooms_is_an_error():
    with pytest.raises(InsufficientInputError):
        partition_rooms(_teams(4), [], random.Random(0))


def test_no_teams_is_an_error():
    with pytest.raises(InsufficientInputError):
        partition_rooms([], ["R1"], random.Random(0))


def test_insufficient_input_is_a_value_error():
    with pytest.raises(ValueError):
        partition_rooms([], [], random.Random(0))


def test_disallowing_swing_teams_requires_full_rooms():
    with pytest.raises(InsufficientInputError):
        partition_rooms(_teams(7), ["R1", "R2"], random.Random(0), allow_swing_teams=False)

    partition = partition_rooms(
        _teams(8), ["R1", "R2"], random.Random(0), allow_swing_teams=False
    )
    assert not partition.swing_teams


def test_duplicate_team_ids_are_rejected():
    teams = _teams(4) + [_team(0)]
    with pytest.raises(InvalidTeamDataException):
        partition_rooms(teams, ["R1"], random.Random(0))


def test_same_seed_gives_same_partition():
    teams = _teams(12)
    rooms = ["R1", "R2", "R3"]
    first = partition_rooms(teams, rooms, random.Random(42))
    second = partition_rooms(teams, rooms, random.Random(42))

    assert [[t.id for t in g] for g in first.groups] == [
        [t.id for t in g] for g in second.groups
    ]


def test_shuffle_keeps_every_team_and_leaves_input_alone():
    teams = _teams(9)
    shuffled = shuffle_teams(teams, random.Random(7))

    assert sorted(t.id for t in shuffled) == sorted(t.id for t in teams)
    assert [t.id for t in teams] == [f"t{i}" for i in range(9)]


def test_swing_labels():
    assert swing_label(0) == "A"
    assert swing_label(25) == "Z"
    assert swing_label(26) == "AA"
    assert create_swing_team(1, "t9").name == "Swing Team B"


def test_blank_room_label_falls_back_to_number():
    assert room_label(["Hall", ""], 0) == "Hall"
    assert room_label(["Hall", ""], 1) == "Room 2"


def test_swing_ids_skip_ids_already_in_the_pool():
    teams = [
        Team(id="swing-1", tournament_id="t1", name="Swing Kings"),
        _team(0),
        _team(1),
    ]
    partition = partition_rooms(teams, ["R1"], random.Random(0))

    ids = [team.id for team in partition.groups[0]]
    assert len(set(ids)) == 4
    assert [team.id for team in partition.swing_teams] == ["swing-2"]
    assert partition.swing_teams[0].name == "Swing Team A"


def test_swing_id_skips_every_taken_number():
    swing = create_swing_team(0, "t1", {"swing-1", "swing-2"})

    assert swing.id == "swing-3"
    assert swing.is_swing
