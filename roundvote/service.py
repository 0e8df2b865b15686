# roundvote/service.py
# Operations exposed to callers, grouped by the capability they require
import logging
import threading
from contextlib import contextmanager
from typing import List, Optional

from pymongo.errors import PyMongoError

from roundvote import config
from roundvote.core.access import AdminRoster
from roundvote.core.clock import Clock, system_clock
from roundvote.core.events import EventBus
from roundvote.core.rounds import ElectionRound, RoundManager
from roundvote.core.tally import PartyVotes, Winner, WinningParty
from roundvote.errors import ElectionError
from roundvote.models.candidate_model import Candidate, CandidateIn
from roundvote.models.round_model import Phase, RoundMetadata, RoundPolicy, TimeWindow
from roundvote.models.voter_model import Voter, VoterProfile

logger = logging.getLogger(__name__)


class ElectionService:
    def __init__(
        self,
        admins: Optional[AdminRoster] = None,
        policy: Optional[RoundPolicy] = None,
        clock: Clock = system_clock,
        events: Optional[EventBus] = None,
    ):
        self.admins = admins if admins is not None else AdminRoster(config.ADMIN_ACCOUNTS)
        self.clock = clock
        self.rounds = RoundManager(
            admin_count=len(self.admins), policy=policy, clock=clock, events=events,
        )
        # one operation at a time: routes run in the threadpool
        self._lock = threading.RLock()

    @contextmanager
    def _serialized(self, operation: str, caller: Optional[str] = None):
        with self._lock:
            try:
                yield
            except ElectionError as e:
                logger.warning(f"{operation} rejected ({e.code}) for {caller or 'anonymous'}: {e.message}")
                raise

    @property
    def events(self) -> EventBus:
        return self.rounds.events

    def _round(self, round_id: int) -> ElectionRound:
        return self.rounds.get(round_id)

    # --- Administrator-only ---

    def create_round(self, caller: str, name: str) -> int:
        with self._serialized("create round", caller):
            self.admins.require_admin(caller, "create round")
            return self.rounds.create_round(name)

    def set_window(self, caller: str, round_id: int, kind: str, start: int, end: int) -> TimeWindow:
        with self._serialized("set window", caller):
            self.admins.require_admin(caller, "set window")
            return self.rounds.set_window(round_id, kind, start, end)

    def add_candidate(self, caller: str, round_id: int, data: CandidateIn) -> Candidate:
        with self._serialized("add candidate", caller):
            self.admins.require_admin(caller, "add candidate")
            return self._round(round_id).candidates.add(data, self.clock())

    def remove_candidate(self, caller: str, round_id: int, candidate_id: int) -> Candidate:
        with self._serialized("remove candidate", caller):
            self.admins.require_admin(caller, "remove candidate")
            return self._round(round_id).candidates.remove(candidate_id, self.clock())

    def advance_phase(self, caller: str, round_id: int, target: int) -> Phase:
        with self._serialized("advance phase", caller):
            self.admins.require_admin(caller, "advance phase")
            return self.rounds.advance(round_id, target)

    def get_round(self, caller: str, round_id: int) -> RoundMetadata:
        with self._serialized("read round metadata", caller):
            self.admins.require_admin(caller, "read round metadata")
            return self._round(round_id).metadata.model_copy(deep=True)

    def list_admins(self, caller: str) -> List[str]:
        with self._serialized("read admin list", caller):
            self.admins.require_admin(caller, "read admin list")
            return self.admins.accounts()

    # --- Any caller with a valid identity ---

    def register_voter(self, caller: str, round_id: int, identity: str, profile: VoterProfile) -> Voter:
        with self._serialized("register voter", caller):
            return self._round(round_id).voters.register(caller, identity, profile, self.clock())

    def cast_vote(self, caller: str, round_id: int, identity: str, party_number: int) -> Candidate:
        with self._serialized("cast vote", caller):
            return self._round(round_id).voters.cast(caller, identity, party_number, self.clock())

    def voter_status(self, caller: str, round_id: int) -> Optional[Voter]:
        with self._serialized("read voter status", caller):
            return self._round(round_id).voters.get(caller)

    # --- Any caller ---

    def current_round_id(self) -> int:
        with self._lock:
            return self.rounds.latest_id

    def phase(self, round_id: int) -> Phase:
        with self._serialized("read phase"):
            return self._round(round_id).phase

    def list_candidates(self, round_id: int) -> List[Candidate]:
        with self._serialized("list candidates"):
            return self._round(round_id).candidates.list()

    def get_candidate(self, round_id: int, candidate_id: int) -> Candidate:
        with self._serialized("read candidate"):
            return self._round(round_id).candidates.get(candidate_id)

    def all_party_votes(self, round_id: int) -> List[PartyVotes]:
        with self._serialized("read party votes"):
            return self._round(round_id).tally.all_party_votes()

    def winning_party(self, round_id: int) -> WinningParty:
        with self._serialized("read winning party"):
            return self._round(round_id).tally.winning_party()

    def winner(self, round_id: int) -> Winner:
        with self._serialized("read winner"):
            return self._round(round_id).tally.winner()

    # --- Archiving ---

    def archive(self, archive, round_id: int, candidate_ids=(), accounts=(), removed_candidate=None) -> bool:
        """
        Copy a committed change to the archive.

        Documents are built under the lock and written outside it. A failed
        write is logged and leaves the in-memory round authoritative.
        """
        with self._lock:
            docs = archive.documents(self._round(round_id), candidate_ids, accounts)
        try:
            if removed_candidate is not None:
                archive.delete_candidate(round_id, removed_candidate)
            archive.write(docs)
        except PyMongoError:
            logger.exception(f"Failed to archive round {round_id}, keeping the in-memory state")
            return False
        return True
