import math

import pytest

from debatedraw.exceptions import (
    HistoryException,
    InvalidConfigurationException,
    InvalidDrawDataException,
    InvalidJudgeDataException,
    InvalidTeamDataException,
)
from debatedraw.models import (
    DrawMethod,
    DrawOptions,
    DrawRoom,
    ExperienceLevel,
    Judge,
    PairingMemo,
    PositionHistory,
    PositionHistoryBook,
    Team,
)


def _team(index):
    return Team(id=f"t{index}", tournament_id="t1", name=f"Team {index}")


def test_team_from_flat_speaker_columns():
    team = Team.from_dict(
        {
            "id": "t1",
            "tournament_id": "tour",
            "name": " Oxford A ",
            "institution": "Oxford",
            "speaker_1": "Ada",
            "speaker_2": "Grace",
            "experience_level": "Novice",
        }
    )

    assert team.name == "Oxford A"
    assert team.speakers == ["Ada", "Grace"]
    assert team.experience_level is ExperienceLevel.NOVICE
    assert not team.is_swing


def test_team_without_id_gets_one():
    team = Team.from_dict({"name": "Durham B"})

    assert team.id.startswith("team-")


def test_swing_flag_is_read_from_the_field_only():
    assert not Team.from_dict({"id": "swing-kings", "name": "Swing Kings"}).is_swing
    assert Team.from_dict({"id": "s-1", "name": "Swing", "is_swing": True}).is_swing
    assert not Team.from_dict({"id": "t1", "name": "LSE", "is_swing": "false"}).is_swing
    assert not Team.from_dict({"id": "t1", "name": "LSE", "is_swing": None}).is_swing


def test_unreadable_swing_flag_is_rejected():
    with pytest.raises(InvalidTeamDataException):
        Team.from_dict({"name": "LSE", "is_swing": "sometimes"})


def test_team_without_name_is_rejected():
    with pytest.raises(InvalidTeamDataException):
        Team.from_dict({"id": "t1"})


def test_unknown_experience_level_is_rejected():
    with pytest.raises(InvalidTeamDataException):
        Team.from_dict({"name": "X", "experience_level": "grandmaster"})
    with pytest.raises(InvalidJudgeDataException):
        Judge.from_dict({"name": "J", "experience_level": "grandmaster"})


def test_team_dict_round_trip():
    team = Team(
        id="t1",
        tournament_id="tour",
        name="LSE A",
        institution="LSE",
        speakers=["A", "B"],
        experience_level=ExperienceLevel.PRO,
    )

    assert Team.from_dict(team.to_dict()) == team


def test_room_needs_every_position():
    with pytest.raises(InvalidDrawDataException):
        DrawRoom(id="room-1", room="R1", teams={"OG": _team(0)})
    with pytest.raises(InvalidDrawDataException):
        DrawRoom.from_arrangement("room-1", "R1", [_team(0), _team(1)])


def test_room_serialises_with_its_judge():
    judge = Judge(id="j1", tournament_id="t1", name="Judge")
    room = DrawRoom.from_arrangement(
        "room-1", "R1", [_team(i) for i in range(4)], judge
    )

    restored = DrawRoom.from_dict(room.to_dict())

    assert restored == room
    assert restored.team_at("CO").id == "t3"


def test_malformed_room_dict_is_rejected():
    with pytest.raises(InvalidDrawDataException):
        DrawRoom.from_dict({"id": "room-1"})


def test_composition_key_ignores_order():
    teams = [_team(i) for i in range(4)]
    memo = PairingMemo()
    memo.add(teams)

    assert memo.has_been_used(list(reversed(teams)))
    assert memo.used == {"t0-t1-t2-t3"}
    memo.clear()
    assert len(memo) == 0


def test_position_history_increments():
    history = PositionHistory()
    history.increment("CG")

    assert history.counts() == (0, 0, 1, 0)
    assert history.with_increment("CG").CG == 2
    assert history.CG == 1
    with pytest.raises(KeyError):
        history.count("PM")


def test_negative_position_counts_are_rejected():
    with pytest.raises(HistoryException):
        PositionHistory.from_dict({"OG": -1})
    with pytest.raises(HistoryException):
        PositionHistoryBook.from_dict(["not", "a", "mapping"])


def test_history_book_seeds_real_teams_only():
    swing = Team(id="swing-1", tournament_id="t1", name="Swing", is_swing=True)
    book = PositionHistoryBook()
    book.seed([_team(0), swing])

    assert list(book.histories) == ["t0"]
    assert PositionHistoryBook.from_dict(book.to_dict()) == book


def test_options_defaults():
    options = DrawOptions()

    assert options.method is DrawMethod.RANDOM
    assert options.avoid_institution_clashes
    assert options.allow_swing_teams
    assert not options.balance_positions
    assert options.position_cost_exponent == 4.0


def test_options_accept_camel_case():
    options = DrawOptions.from_dict(
        {
            "method": "Power_Pairing",
            "avoidInstitutionClashes": False,
            "balancePositions": True,
            "renyiOrder": math.inf,
            "somethingElse": 1,
        }
    )

    assert options.method is DrawMethod.POWER_PAIRING
    assert not options.avoid_institution_clashes
    assert options.balance_positions
    assert math.isinf(options.renyi_order)


def test_invalid_options_are_rejected():
    with pytest.raises(InvalidConfigurationException):
        DrawOptions(position_cost_exponent=-1)
    with pytest.raises(InvalidConfigurationException):
        DrawOptions(renyi_order=float("nan"))
    with pytest.raises(InvalidConfigurationException):
        DrawOptions.from_dict({"method": "knockout"})


def test_options_read_string_flags():
    options = DrawOptions.from_dict(
        {"balancePositions": "false", "allowSwingTeams": "False", "avoidJudgeClashes": "true"}
    )

    assert not options.balance_positions
    assert not options.allow_swing_teams
    assert options.avoid_judge_clashes


def test_options_reject_non_boolean_flags():
    with pytest.raises(InvalidConfigurationException):
        DrawOptions.from_dict({"balancePositions": "perhaps"})
    with pytest.raises(InvalidConfigurationException):
        DrawOptions.from_dict({"allow_swing_teams": 2})
    with pytest.raises(InvalidConfigurationException):
        DrawOptions.from_dict(["balancePositions"])
