from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from roundvote import config


class VoterProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=config.MIN_AGE)
    branch: str = ""


class Voter(BaseModel):
    account: str
    identity: str
    profile: VoterProfile
    registered: bool = True
    voted: bool = False
    # single-use voting token, consumed by the one vote
    token: bool = True
    registered_at: int
    voted_at: Optional[int] = None
