from typing import List, Optional

from pydantic import BaseModel, Field

from roundvote.models.candidate_model import Candidate
from roundvote.models.voter_model import VoterProfile


class RoundCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Student Council 2026"])


class WindowRequest(BaseModel):
    kind: str = Field(..., pattern="^(registration|voting)$")
    start: int
    end: int


class PhaseRequest(BaseModel):
    target: int


class CandidateOut(BaseModel):
    candidate_id: int
    party_number: int
    party_name: str
    name: str
    age: int
    branch: str
    policy: str
    created_at: int

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "CandidateOut":
        # vote counts are published only through the results endpoints
        return cls(**candidate.model_dump(exclude={"vote_count", "identity"}))


class RegisterRequest(BaseModel):
    identity: str
    profile: VoterProfile


class VoteRequest(BaseModel):
    identity: str
    party_number: int


class VoterStatus(BaseModel):
    round_id: int
    account: str
    registered: bool
    voted: bool


class PartyVotesOut(BaseModel):
    party_number: int
    votes: int


class ResultsOut(BaseModel):
    round_id: int
    total_votes: int
    results: List[PartyVotesOut]


class WinnerOut(BaseModel):
    candidate_id: int
    name: str
    votes: int


class WinningPartyOut(BaseModel):
    party_number: int
    party_name: str
    votes: int


class CurrentRound(BaseModel):
    round_id: Optional[int] = None
    phase: Optional[int] = None
