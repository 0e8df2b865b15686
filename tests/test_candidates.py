import pytest

from roundvote.core.rounds import RoundManager
from roundvote.errors import (
    CandidateNotFound,
    DuplicateId,
    DuplicateIdentity,
    DuplicateParty,
    InvalidIdentity,
    InvalidRange,
    OperationNotSupported,
    WrongPhase,
)
from roundvote.models.event_model import EventKind

from factories import candidate, identity, policy


def _round_with(clock, **overrides):
    manager = RoundManager(admin_count=1, policy=policy(**overrides), clock=clock)
    return manager, manager.get(manager.create_round("R"))


def test_add_candidate(election_round, clock):
    added = election_round.candidates.add(candidate(1, 10, "Alpha", name="Ann"), clock())
    assert added.vote_count == 0
    assert added.created_at == 1_000
    assert election_round.candidates.get(1).name == "Ann"
    assert election_round.candidates.by_party(10) is added
    assert election_round.metadata.candidate_count == 1
    assert election_round.eligibility.party_name_used("Alpha")


def test_add_emits_notification(manager, election_round, clock):
    election_round.candidates.add(candidate(3, 30, "Gamma"), clock())
    (note,) = manager.events.of_kind(EventKind.CANDIDATE_ADDED)
    assert note.round_id == election_round.round_id
    assert note.data == {"candidate_id": 3, "party_number": 30, "party_name": "Gamma"}


@pytest.mark.parametrize(("second", "error"), [
    (candidate(1, 20, "Beta"), DuplicateId),
    (candidate(2, 10, "Beta"), DuplicateParty),
    (candidate(2, 20, "Alpha"), DuplicateParty),
    (candidate(0, 20, "Beta"), InvalidRange),
    (candidate(256, 20, "Beta"), InvalidRange),
    (candidate(2, 0, "Beta"), InvalidRange),
    (candidate(2, 300, "Beta"), InvalidRange),
])
def test_rejections_leave_table_unchanged(election_round, clock, second, error):
    election_round.candidates.add(candidate(1, 10, "Alpha"), clock())
    with pytest.raises(error):
        election_round.candidates.add(second, clock())
    assert [c.candidate_id for c in election_round.candidates.list()] == [1]
    assert election_round.metadata.candidate_count == 1
    assert not election_round.eligibility.party_name_used("Beta")


def test_party_names_are_case_sensitive(election_round, clock):
    election_round.candidates.add(candidate(1, 10, "Alpha"), clock())
    election_round.candidates.add(candidate(2, 20, "alpha"), clock())
    assert len(election_round.candidates) == 2


def test_add_after_setup_is_wrong_phase(manager, election_round, clock):
    election_round.candidates.add(candidate(1, 10, "Alpha"), clock())
    manager.advance(election_round.round_id, 1)
    with pytest.raises(WrongPhase):
        election_round.candidates.add(candidate(2, 20, "Beta"), clock())
    assert [c.candidate_id for c in election_round.candidates.list()] == [1]


def test_count_tracks_max_id(election_round, clock):
    election_round.candidates.add(candidate(5, 50, "Five"), clock())
    election_round.candidates.add(candidate(2, 20, "Two"), clock())
    assert len(election_round.candidates) == 2
    assert election_round.metadata.candidate_count == 5
    assert [c.candidate_id for c in election_round.candidates.list()] == [2, 5]


def test_strict_party_numbers(clock):
    _, strict_round = _round_with(clock, strict_party_numbers=True)
    with pytest.raises(InvalidRange):
        strict_round.candidates.add(candidate(1, 10, "Alpha"), clock())
    strict_round.candidates.add(candidate(1, 1, "Alpha"), clock())


def test_candidate_identity_required_in_extended_mode(clock):
    _, ext_round = _round_with(clock, require_candidate_identity=True)
    with pytest.raises(InvalidIdentity):
        ext_round.candidates.add(candidate(1, 10, "Alpha"), clock())
    with pytest.raises(InvalidIdentity):
        ext_round.candidates.add(candidate(1, 10, "Alpha", identity="B1234568"), clock())
    ext_round.candidates.add(candidate(1, 10, "Alpha", identity=identity(1)), clock())
    with pytest.raises(DuplicateIdentity):
        ext_round.candidates.add(candidate(2, 20, "Beta", identity=identity(1)), clock())
    assert ext_round.eligibility.candidate_identity_used(identity(1))
    assert not ext_round.eligibility.party_name_used("Beta")


def test_removal_disabled_by_default(election_round, clock):
    election_round.candidates.add(candidate(1, 10, "Alpha"), clock())
    with pytest.raises(OperationNotSupported):
        election_round.candidates.remove(1, clock())
    assert 1 in election_round.candidates


def test_remove_frees_party_slots(clock):
    _, r = _round_with(clock, allow_candidate_removal=True)
    r.candidates.add(candidate(1, 10, "Alpha"), clock())
    r.candidates.remove(1, clock())
    assert 1 not in r.candidates
    assert r.candidates.by_party(10) is None
    assert not r.eligibility.party_name_used("Alpha")
    r.candidates.add(candidate(1, 10, "Alpha"), clock())
    assert r.candidates.get(1).party_name == "Alpha"


def test_remove_missing_candidate(clock):
    _, r = _round_with(clock, allow_candidate_removal=True)
    with pytest.raises(CandidateNotFound):
        r.candidates.remove(7, clock())


def test_remove_after_setup_is_wrong_phase(clock):
    manager, r = _round_with(clock, allow_candidate_removal=True)
    r.candidates.add(candidate(1, 10, "Alpha"), clock())
    manager.advance(r.round_id, 1)
    with pytest.raises(WrongPhase):
        r.candidates.remove(1, clock())


def test_remove_top_id_rescans_max(clock):
    _, r = _round_with(clock, allow_candidate_removal=True)
    for cid in (1, 3, 6):
        r.candidates.add(candidate(cid, cid * 10, f"P{cid}"), clock())
    r.candidates.remove(6, clock())
    assert r.metadata.candidate_count == 3


def test_remove_lower_id_keeps_max(clock):
    # the tracker is a running max, so it no longer equals the live count
    _, r = _round_with(clock, allow_candidate_removal=True)
    for cid in (1, 2, 3):
        r.candidates.add(candidate(cid, cid * 10, f"P{cid}"), clock())
    r.candidates.remove(1, clock())
    assert r.metadata.candidate_count == 3
    assert len(r.candidates) == 2


def test_get_missing_candidate(election_round):
    with pytest.raises(CandidateNotFound):
        election_round.candidates.get(1)
