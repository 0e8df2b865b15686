# roundvote/core/voters.py
import logging
from typing import Dict, List, Optional

from roundvote import identity as identity_validator
from roundvote.core.candidates import CandidateRegistry
from roundvote.core.eligibility import EligibilityRegistry
from roundvote.core.events import EventBus
from roundvote.core.phase import PhaseController, REGISTRATION_WINDOW, VOTING_WINDOW
from roundvote.errors import (
    AlreadyRegistered,
    AlreadyVoted,
    DuplicateIdentity,
    IdentityMismatch,
    InvalidIdentity,
    NoToken,
    NotRegistered,
    UnknownCandidate,
)
from roundvote.models.candidate_model import Candidate
from roundvote.models.event_model import EventKind
from roundvote.models.round_model import Phase, RoundMetadata
from roundvote.models.voter_model import Voter, VoterProfile

logger = logging.getLogger(__name__)


class VoterRegistry:
    """One ballot-eligibility record per account in a round."""

    def __init__(
        self,
        metadata: RoundMetadata,
        phases: PhaseController,
        eligibility: EligibilityRegistry,
        candidates: CandidateRegistry,
        events: EventBus,
    ):
        self._meta = metadata
        self._phases = phases
        self._eligibility = eligibility
        self._candidates = candidates
        self._events = events
        self._by_account: Dict[str, Voter] = {}

    def __len__(self) -> int:
        return len(self._by_account)

    def get(self, account: str) -> Optional[Voter]:
        return self._by_account.get(account)

    def list(self) -> List[Voter]:
        return list(self._by_account.values())

    def register(self, account: str, identity: str, profile: VoterProfile, now: int) -> Voter:
        """
        Register `account` for this round under `identity`.

        The identity must pass the checksum, must not have been used by
        another voter in this round, and (when candidates carry identities)
        must not belong to a candidate.
        """
        self._phases.require(Phase.REGISTRATION, "voter registration")
        self._phases.require_window(REGISTRATION_WINDOW, now)

        if not identity_validator.validate(identity):
            raise InvalidIdentity(f"identity {identity!r} is not valid")
        if self._eligibility.identity_used(identity):
            raise DuplicateIdentity(f"identity {identity} already registered in round {self._meta.round_id}")
        if self._meta.policy.require_candidate_identity and self._eligibility.candidate_identity_used(identity):
            raise DuplicateIdentity(f"identity {identity} belongs to a candidate in round {self._meta.round_id}")
        if account in self._by_account:
            raise AlreadyRegistered(f"{account} is already registered in round {self._meta.round_id}")

        voter = Voter(account=account, identity=identity, profile=profile, registered_at=now)
        self._by_account[account] = voter
        self._eligibility.mark_identity(identity)
        self._meta.voter_count += 1

        self._events.emit(EventKind.VOTER_REGISTERED, self._meta.round_id, now, account=account)
        return voter

    def cast(self, account: str, identity: str, party_number: int, now: int) -> Candidate:
        self._phases.require(Phase.VOTING, "casting a vote")
        self._phases.require_window(VOTING_WINDOW, now)

        voter = self._by_account.get(account)
        if voter is None or not voter.registered:
            raise NotRegistered(f"{account} is not registered in round {self._meta.round_id}")
        if identity != voter.identity:
            raise IdentityMismatch(f"identity does not match the one {account} registered with")
        if voter.voted:
            raise AlreadyVoted(f"{account} already voted in round {self._meta.round_id}")
        if not voter.token:
            raise NoToken(f"{account} has no voting token left in round {self._meta.round_id}")
        candidate = self._candidates.by_party(party_number)
        if candidate is None:
            raise UnknownCandidate(f"no candidate for party {party_number} in round {self._meta.round_id}")

        voter.voted = True
        voter.token = False
        voter.voted_at = now
        self._candidates.record_vote(candidate)
        self._meta.vote_count += 1

        self._events.emit(
            EventKind.VOTE_CAST, self._meta.round_id, now,
            account=account, candidate_id=candidate.candidate_id,
        )
        return candidate
