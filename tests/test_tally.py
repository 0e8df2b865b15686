import pytest

from roundvote.core.rounds import RoundManager
from roundvote.errors import ElectionNotClosed, NoCandidates

from factories import candidate, identity, policy, profile


def _run(manager, election_round, clock, votes_by_party):
    """Register one voter per vote and cast them; leaves the round closed."""
    rid = election_round.round_id
    manager.advance(rid, 1)
    n = 0
    ballots = []
    for party, count in votes_by_party.items():
        for _ in range(count):
            n += 1
            election_round.voters.register(f"v{n}", identity(n), profile(), clock())
            ballots.append((f"v{n}", identity(n), party))
    manager.advance(rid, 2)
    for account, token, party in ballots:
        election_round.voters.cast(account, token, party, clock())
    manager.advance(rid, 3)


def test_queries_require_closed_round(election_round, clock):
    election_round.candidates.add(candidate(1, 10, "Alpha"), clock())
    for query in (election_round.tally.all_party_votes,
                  election_round.tally.winner,
                  election_round.tally.winning_party):
        with pytest.raises(ElectionNotClosed):
            query()


def test_tie_goes_to_lowest_id(manager, election_round, clock):
    for cid in (1, 2, 3):
        election_round.candidates.add(candidate(cid, cid, f"P{cid}", name=f"N{cid}"), clock())
    _run(manager, election_round, clock, {1: 5, 2: 7, 3: 7})
    assert election_round.tally.winner() == (2, "N2", 7)
    assert election_round.tally.winning_party() == (2, "P2", 7)


def test_all_zero_goes_to_first_candidate(manager, election_round, clock):
    election_round.candidates.add(candidate(4, 40, "Four"), clock())
    election_round.candidates.add(candidate(2, 20, "Two", name="Second"), clock())
    _run(manager, election_round, clock, {})
    assert election_round.tally.winner() == (2, "Second", 0)


def test_scenario(manager, clock):
    rid = manager.create_round("R1")
    r = manager.get(rid)
    r.candidates.add(candidate(1, 10, "Alpha", name="Alpha"), clock())
    r.candidates.add(candidate(2, 20, "Beta", name="Beta"), clock())
    manager.advance(rid, 1)
    r.voters.register("A", "B1234569", profile("A"), clock())
    manager.advance(rid, 2)
    r.voters.cast("A", "B1234569", 10, clock())
    manager.advance(rid, 3)
    assert r.tally.all_party_votes() == [(10, 1), (20, 0)]
    assert r.tally.winner() == (1, "Alpha", 1)


def test_vote_sum_matches_round_count(manager, election_round, clock):
    for cid in (1, 2, 3):
        election_round.candidates.add(candidate(cid, cid * 10, f"P{cid}"), clock())
    _run(manager, election_round, clock, {10: 3, 20: 1, 30: 4})
    assert election_round.tally.total_votes() == election_round.metadata.vote_count == 8
    assert sum(v for _, v in election_round.tally.all_party_votes()) == 8


def test_no_candidates(manager, election_round, clock):
    _run(manager, election_round, clock, {})
    assert election_round.tally.all_party_votes() == []
    with pytest.raises(NoCandidates):
        election_round.tally.winner()
    with pytest.raises(NoCandidates):
        election_round.tally.winning_party()


def test_scan_skips_gaps_and_removed_ids(clock):
    manager = RoundManager(admin_count=1, policy=policy(allow_candidate_removal=True), clock=clock)
    r = manager.get(manager.create_round("gaps"))
    for cid in (1, 3, 5):
        r.candidates.add(candidate(cid, cid * 10, f"P{cid}"), clock())
    r.candidates.remove(3, clock())
    _run(manager, r, clock, {50: 2})
    assert r.tally.all_party_votes() == [(10, 0), (50, 2)]
    assert r.tally.winner().candidate_id == 5
