# roundvote/core/rounds.py
import logging
from typing import Dict, Optional

from roundvote.core.candidates import CandidateRegistry
from roundvote.core.clock import Clock, system_clock
from roundvote.core.eligibility import EligibilityRegistry
from roundvote.core.events import EventBus
from roundvote.core.phase import PhaseController, REGISTRATION_WINDOW, VOTING_WINDOW
from roundvote.core.tally import TallyEngine
from roundvote.core.voters import VoterRegistry
from roundvote.errors import InvalidWindow, PreviousRoundOpen, RoundNotFound
from roundvote.models.event_model import EventKind
from roundvote.models.round_model import Phase, RoundMetadata, RoundPolicy, TimeWindow

logger = logging.getLogger(__name__)


class ElectionRound:
    """Everything one round owns: metadata, phase, registries and tally."""

    def __init__(self, metadata: RoundMetadata, events: EventBus):
        self.metadata = metadata
        self.eligibility = EligibilityRegistry()
        self.phases = PhaseController(metadata, events)
        self.candidates = CandidateRegistry(metadata, self.phases, self.eligibility, events)
        self.voters = VoterRegistry(metadata, self.phases, self.eligibility, self.candidates, events)
        self.tally = TallyEngine(metadata, self.phases, self.candidates)

    @property
    def round_id(self) -> int:
        return self.metadata.round_id

    @property
    def phase(self) -> Phase:
        return self.metadata.phase


class RoundManager:
    """
    Arena of election rounds indexed by round id.

    Round ids start at 1 and only grow. A new round can be opened only
    once the latest one is closed.
    """

    def __init__(
        self,
        admin_count: int,
        policy: Optional[RoundPolicy] = None,
        clock: Clock = system_clock,
        events: Optional[EventBus] = None,
    ):
        self.admin_count = admin_count
        self.policy = policy or RoundPolicy()
        self.clock = clock
        self.events = events or EventBus()
        self._rounds: Dict[int, ElectionRound] = {}
        self._latest = 0

    @property
    def latest_id(self) -> int:
        return self._latest

    def __len__(self) -> int:
        return len(self._rounds)

    def get(self, round_id: int) -> ElectionRound:
        election_round = self._rounds.get(round_id)
        if election_round is None:
            raise RoundNotFound(f"round {round_id} does not exist")
        return election_round

    def current(self) -> ElectionRound:
        return self.get(self._latest)

    def create_round(self, name: str) -> int:
        if self._latest and not self._rounds[self._latest].phases.is_closed:
            raise PreviousRoundOpen(f"round {self._latest} must be closed before opening another")

        now = self.clock()
        round_id = self._latest + 1
        metadata = RoundMetadata(
            round_id=round_id,
            name=name,
            admin_count=self.admin_count,
            created_at=now,
            policy=self.policy,
        )
        self._rounds[round_id] = ElectionRound(metadata, self.events)
        self._latest = round_id

        logger.info(f"Opened round {round_id} ({name!r})")
        self.events.emit(EventKind.ROUND_CREATED, round_id, now, name=name)
        return round_id

    def set_window(self, round_id: int, kind: str, start: int, end: int) -> TimeWindow:
        election_round = self.get(round_id)
        if kind not in (REGISTRATION_WINDOW, VOTING_WINDOW):
            raise InvalidWindow(f"unknown window kind {kind!r}")
        if start >= end:
            raise InvalidWindow(f"window start {start} must be before end {end}")
        election_round.phases.require_open(f"setting the {kind} window")

        window = TimeWindow(start=start, end=end)
        if kind == REGISTRATION_WINDOW:
            election_round.metadata.registration_window = window
        else:
            election_round.metadata.voting_window = window
        self.events.emit(EventKind.WINDOW_SET, round_id, self.clock(), window=kind, start=start, end=end)
        return window

    def advance(self, round_id: int, target: int) -> Phase:
        return self.get(round_id).phases.advance(target, self.clock())
