from debatedraw.draw.clash import (
    all_arrangements,
    build_room_cost,
    generate_arrangements,
    institution_clash_cost,
    institution_clash_count,
    optimize_arrangement,
)
from debatedraw.models import PairingMemo, Team


def _team(team_id, institution):
    return Team(id=team_id, tournament_id="t1", name=team_id, institution=institution)


def _room(*institutions):
    return [_team(f"t{i}", inst) for i, inst in enumerate(institutions)]


def test_clash_cost_counts_every_pair():
    room = _room("Oxford", "Oxford", "Oxford", "Cambridge")

    assert institution_clash_count(room) == 3
    assert institution_clash_cost(room) == 300


def test_institutions_match_case_insensitively():
    room = _room("Oxford", " oxford ", "LSE", "UCL")

    assert institution_clash_cost(room) == 100


def test_missing_institutions_never_clash():
    room = _room(None, None, "", "  ")

    assert institution_clash_cost(room) == 0


def test_seven_candidate_arrangements():
    room = _room("A", "B", "C", "D")
    arrangements = generate_arrangements(room)

    assert len(arrangements) == 7
    assert arrangements[0] == room
    assert [t.id for t in arrangements[1]] == ["t1", "t0", "t2", "t3"]
    assert [t.id for t in arrangements[-1]] == ["t0", "t1", "t3", "t2"]


def test_all_arrangements_start_with_identity():
    room = _room("A", "B", "C", "D")
    arrangements = all_arrangements(room)

    assert len(arrangements) == 24
    assert arrangements[0] == room


def test_ties_keep_the_identity_order():
    room = _room("Oxford", "Oxford", "Cambridge", "Cambridge")

    arrangement, cost = optimize_arrangement(room, build_room_cost())

    assert arrangement == room
    assert cost == 200


def test_strictly_cheaper_candidate_wins():
    room = _room("A", "B", "C", "D")

    def cost_fn(arrangement):
        return 0 if arrangement[0].id == "t3" else 1

    arrangement, cost = optimize_arrangement(room, cost_fn)

    assert [t.id for t in arrangement] == ["t3", "t1", "t2", "t0"]
    assert cost == 0


def test_chosen_cost_never_exceeds_identity_cost():
    room = _room("X", "Y", "X", "Z")
    cost_fn = build_room_cost()

    _, cost = optimize_arrangement(room, cost_fn)

    assert cost <= cost_fn(room)


def test_repeat_pairing_penalty():
    room = _room("A", "B", "C", "D")
    memo = PairingMemo()
    memo.add(list(reversed(room)))

    assert build_room_cost(pairing_memo=memo)(room) == 50
    assert build_room_cost()(room) == 0


def test_clash_avoidance_can_be_switched_off():
    room = _room("Oxford", "Oxford", "Oxford", "Oxford")

    assert build_room_cost(avoid_institution_clashes=False)(room) == 0
    assert build_room_cost()(room) == 600
