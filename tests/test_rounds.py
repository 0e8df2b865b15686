import pytest

from roundvote.core.rounds import RoundManager
from roundvote.errors import InvalidWindow, PreviousRoundOpen, RoundNotFound, WrongPhase
from roundvote.models.event_model import EventKind
from roundvote.models.round_model import Phase

from factories import policy


def _close(manager, round_id):
    for target in (1, 2, 3):
        manager.advance(round_id, target)


def test_first_round(manager, clock):
    rid = manager.create_round("R1")
    assert rid == 1
    meta = manager.get(rid).metadata
    assert (meta.name, meta.phase, meta.candidate_count, meta.voter_count, meta.vote_count) == \
        ("R1", Phase.SETUP, 0, 0, 0)
    assert meta.created_at == clock()
    (note,) = manager.events.of_kind(EventKind.ROUND_CREATED)
    assert note.round_id == 1 and note.data == {"name": "R1"}


def test_admin_count_snapshot_carried_forward(clock):
    manager = RoundManager(admin_count=3, policy=policy(), clock=clock)
    first = manager.create_round("R1")
    _close(manager, first)
    second = manager.create_round("R2")
    assert manager.get(first).metadata.admin_count == 3
    assert manager.get(second).metadata.admin_count == 3


def test_previous_round_must_be_closed(manager):
    rid = manager.create_round("R1")
    manager.advance(rid, 1)
    manager.advance(rid, 2)
    with pytest.raises(PreviousRoundOpen):
        manager.create_round("R2")
    assert manager.latest_id == 1
    assert len(manager) == 1


def test_round_ids_increase(manager):
    ids = []
    for i in range(3):
        rid = manager.create_round(f"R{i}")
        ids.append(rid)
        _close(manager, rid)
    assert ids == [1, 2, 3]
    assert manager.current().round_id == 3


def test_rounds_do_not_share_state(manager, clock):
    from factories import candidate
    first = manager.create_round("R1")
    manager.get(first).candidates.add(candidate(1, 10, "Alpha"), clock())
    _close(manager, first)
    second = manager.create_round("R2")
    manager.get(second).candidates.add(candidate(1, 10, "Alpha"), clock())
    assert manager.get(first).candidates is not manager.get(second).candidates


def test_unknown_round(manager):
    with pytest.raises(RoundNotFound):
        manager.get(1)
    with pytest.raises(RoundNotFound):
        manager.current()


@pytest.mark.parametrize(("kind", "start", "end"), [
    ("registration", 10, 10),
    ("voting", 20, 10),
    ("counting", 0, 10),
])
def test_invalid_windows(manager, kind, start, end):
    rid = manager.create_round("R1")
    with pytest.raises(InvalidWindow):
        manager.set_window(rid, kind, start, end)
    meta = manager.get(rid).metadata
    assert meta.registration_window is None and meta.voting_window is None


def test_window_cannot_change_after_close(manager):
    rid = manager.create_round("R1")
    manager.set_window(rid, "voting", 10, 20)
    _close(manager, rid)
    with pytest.raises(WrongPhase):
        manager.set_window(rid, "voting", 30, 40)
    assert manager.get(rid).metadata.voting_window.start == 10
