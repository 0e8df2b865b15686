# roundvote/core/candidates.py
import logging
from typing import Dict, List, Optional

from roundvote import config
from roundvote import identity as identity_validator
from roundvote.core.eligibility import EligibilityRegistry
from roundvote.core.events import EventBus
from roundvote.core.phase import PhaseController
from roundvote.errors import (
    CandidateNotFound,
    DuplicateId,
    DuplicateIdentity,
    DuplicateParty,
    InvalidIdentity,
    InvalidRange,
    OperationNotSupported,
)
from roundvote.models.candidate_model import Candidate, CandidateIn
from roundvote.models.event_model import EventKind
from roundvote.models.round_model import Phase, RoundMetadata

logger = logging.getLogger(__name__)


class CandidateRegistry:
    """
    Candidate table of one round, keyed by candidate id.

    The round's candidate_count tracks the highest id ever added rather than
    the number of live entries. Removing the top entry rescans the ids below
    it; removing a lower one leaves the tracker alone, so the count can
    over-report after removals.
    """

    def __init__(
        self,
        metadata: RoundMetadata,
        phases: PhaseController,
        eligibility: EligibilityRegistry,
        events: EventBus,
    ):
        self._meta = metadata
        self._phases = phases
        self._eligibility = eligibility
        self._events = events
        self._by_id: Dict[int, Candidate] = {}
        self._id_by_party: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, candidate_id: int) -> bool:
        return candidate_id in self._by_id

    @property
    def max_id(self) -> int:
        return self._meta.candidate_count

    def add(self, data: CandidateIn, now: int) -> Candidate:
        self._phases.require(Phase.SETUP, "adding a candidate")
        policy = self._meta.policy

        if not config.MIN_CANDIDATE_ID <= data.candidate_id <= config.MAX_CANDIDATE_ID:
            raise InvalidRange(
                f"candidate id {data.candidate_id} outside "
                f"{config.MIN_CANDIDATE_ID}..{config.MAX_CANDIDATE_ID}"
            )
        if not config.MIN_PARTY_NUMBER <= data.party_number <= config.MAX_PARTY_NUMBER:
            raise InvalidRange(
                f"party number {data.party_number} outside "
                f"{config.MIN_PARTY_NUMBER}..{config.MAX_PARTY_NUMBER}"
            )
        if policy.strict_party_numbers and data.party_number != data.candidate_id:
            raise InvalidRange(
                f"party number {data.party_number} must equal candidate id {data.candidate_id}"
            )
        if data.candidate_id in self._by_id:
            raise DuplicateId(f"candidate id {data.candidate_id} already used in round {self._meta.round_id}")
        if data.party_number in self._id_by_party:
            raise DuplicateParty(f"party number {data.party_number} already used in round {self._meta.round_id}")
        if self._eligibility.party_name_used(data.party_name):
            raise DuplicateParty(f"party name {data.party_name!r} already used in round {self._meta.round_id}")
        if policy.require_candidate_identity:
            if not identity_validator.validate(data.identity):
                raise InvalidIdentity(f"candidate identity {data.identity!r} is not valid")
            if self._eligibility.candidate_identity_used(data.identity):
                raise DuplicateIdentity(f"identity {data.identity} already used by a candidate")

        candidate = Candidate.from_input(data, created_at=now)
        self._by_id[candidate.candidate_id] = candidate
        self._id_by_party[candidate.party_number] = candidate.candidate_id
        self._eligibility.mark_party_name(candidate.party_name)
        if policy.require_candidate_identity:
            self._eligibility.mark_candidate_identity(candidate.identity)
        if candidate.candidate_id > self._meta.candidate_count:
            self._meta.candidate_count = candidate.candidate_id

        self._events.emit(
            EventKind.CANDIDATE_ADDED, self._meta.round_id, now,
            candidate_id=candidate.candidate_id,
            party_number=candidate.party_number,
            party_name=candidate.party_name,
        )
        return candidate

    def remove(self, candidate_id: int, now: int) -> Candidate:
        if not self._meta.policy.allow_candidate_removal:
            raise OperationNotSupported(f"round {self._meta.round_id} does not allow removing candidates")
        self._phases.require(Phase.SETUP, "removing a candidate")
        candidate = self._by_id.get(candidate_id)
        if candidate is None:
            raise CandidateNotFound(f"no candidate {candidate_id} in round {self._meta.round_id}")

        del self._by_id[candidate_id]
        del self._id_by_party[candidate.party_number]
        self._eligibility.release_party_name(candidate.party_name)
        previous_max = self._meta.candidate_count
        new_max = 0
        for i in range(1, previous_max + 1):
            if i in self._by_id:
                new_max = i
        self._meta.candidate_count = new_max

        self._events.emit(
            EventKind.CANDIDATE_REMOVED, self._meta.round_id, now,
            candidate_id=candidate_id, party_number=candidate.party_number,
        )
        return candidate

    def get(self, candidate_id: int) -> Candidate:
        candidate = self._by_id.get(candidate_id)
        if candidate is None:
            raise CandidateNotFound(f"no candidate {candidate_id} in round {self._meta.round_id}")
        return candidate

    def find(self, candidate_id: int) -> Optional[Candidate]:
        return self._by_id.get(candidate_id)

    def by_party(self, party_number: int) -> Optional[Candidate]:
        candidate_id = self._id_by_party.get(party_number)
        return self._by_id.get(candidate_id) if candidate_id is not None else None

    def list(self) -> List[Candidate]:
        return [self._by_id[i] for i in sorted(self._by_id)]

    def record_vote(self, candidate: Candidate) -> None:
        # only the voter registry calls this, after all vote checks passed
        candidate.vote_count += 1
