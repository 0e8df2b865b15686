from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from roundvote import config


class CandidateIn(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate_id: int
    party_number: int
    party_name: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=config.MIN_AGE)
    branch: str = ""
    policy: str = ""
    identity: Optional[str] = None  # required when the round demands candidate identities


class Candidate(BaseModel):
    candidate_id: int
    party_number: int
    party_name: str
    name: str
    age: int
    branch: str
    policy: str
    identity: Optional[str] = None
    vote_count: int = 0
    created_at: int

    @classmethod
    def from_input(cls, data: CandidateIn, created_at: int) -> "Candidate":
        return cls(**data.model_dump(), vote_count=0, created_at=created_at)
