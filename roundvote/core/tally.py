# roundvote/core/tally.py
from typing import List, NamedTuple

from roundvote.core.candidates import CandidateRegistry
from roundvote.core.phase import PhaseController
from roundvote.errors import ElectionNotClosed, NoCandidates
from roundvote.models.candidate_model import Candidate
from roundvote.models.round_model import RoundMetadata


class PartyVotes(NamedTuple):
    party_number: int
    votes: int


class WinningParty(NamedTuple):
    party_number: int
    party_name: str
    votes: int


class Winner(NamedTuple):
    candidate_id: int
    name: str
    votes: int


class TallyEngine:
    """
    Results of a closed round.

    Every query is one pass over candidate ids 1..max id, skipping ids that
    were never filled or were removed. The leader is replaced only on a
    strictly greater count, so ties go to the lowest id.
    """

    def __init__(self, metadata: RoundMetadata, phases: PhaseController, candidates: CandidateRegistry):
        self._meta = metadata
        self._phases = phases
        self._candidates = candidates

    def _scan(self) -> List[Candidate]:
        if not self._phases.is_closed:
            raise ElectionNotClosed(f"round {self._meta.round_id} is still in {self._phases.phase.name}")
        found = []
        for candidate_id in range(1, self._candidates.max_id + 1):
            candidate = self._candidates.find(candidate_id)
            if candidate is not None:
                found.append(candidate)
        return found

    def _leader(self) -> Candidate:
        leader = None
        for candidate in self._scan():
            if leader is None or candidate.vote_count > leader.vote_count:
                leader = candidate
        if leader is None:
            raise NoCandidates(f"round {self._meta.round_id} has no candidates")
        return leader

    def all_party_votes(self) -> List[PartyVotes]:
        return [PartyVotes(c.party_number, c.vote_count) for c in self._scan()]

    def total_votes(self) -> int:
        return sum(c.vote_count for c in self._scan())

    def winning_party(self) -> WinningParty:
        leader = self._leader()
        return WinningParty(leader.party_number, leader.party_name, leader.vote_count)

    def winner(self) -> Winner:
        leader = self._leader()
        return Winner(leader.candidate_id, leader.name, leader.vote_count)
