from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field


class EventKind(str, Enum):
    ROUND_CREATED = "round-created"
    WINDOW_SET = "window-set"
    CANDIDATE_ADDED = "candidate-added"
    CANDIDATE_REMOVED = "candidate-removed"
    VOTER_REGISTERED = "voter-registered"
    VOTE_CAST = "vote-cast"
    PHASE_CHANGED = "phase-changed"


class Notification(BaseModel):
    kind: EventKind
    round_id: int
    at: int
    data: Dict[str, Any] = Field(default_factory=dict)
