from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator

from roundvote import config


class Phase(IntEnum):
    SETUP = 0
    REGISTRATION = 1
    VOTING = 2
    CLOSED = 3


class RoundPolicy(BaseModel):
    """Variant switches applied to every round a manager creates."""
    model_config = ConfigDict(frozen=True)

    enforce_time_window: bool = config.ENFORCE_TIME_WINDOW
    strict_party_numbers: bool = config.STRICT_PARTY_NUMBERS
    require_candidate_identity: bool = config.REQUIRE_CANDIDATE_IDENTITY
    allow_candidate_removal: bool = config.ALLOW_CANDIDATE_REMOVAL


class TimeWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def check_order(self):
        if self.start >= self.end:
            raise ValueError("window start must be before end")
        return self

    def contains(self, now: int) -> bool:
        return self.start <= now <= self.end


class RoundMetadata(BaseModel):
    round_id: int
    name: str
    phase: Phase = Phase.SETUP
    # running max candidate id seen, not a count of live entries
    candidate_count: int = 0
    voter_count: int = 0
    vote_count: int = 0
    admin_count: int = 0
    created_at: int
    policy: RoundPolicy = Field(default_factory=RoundPolicy)
    registration_window: Optional[TimeWindow] = None
    voting_window: Optional[TimeWindow] = None
