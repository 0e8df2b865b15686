# roundvote/core/phase.py
import logging

from roundvote.core.events import EventBus
from roundvote.errors import WrongPhase, InvalidTransition, OutsideWindow
from roundvote.models.event_model import EventKind
from roundvote.models.round_model import Phase, RoundMetadata

logger = logging.getLogger(__name__)

REGISTRATION_WINDOW = "registration"
VOTING_WINDOW = "voting"


class PhaseController:
    """
    Per-round state machine: Setup -> Registration -> Voting -> Closed.

    Phases only move forward one step at a time. Other components call
    `require` before mutating anything.
    """

    def __init__(self, metadata: RoundMetadata, events: EventBus):
        self._meta = metadata
        self._events = events

    @property
    def phase(self) -> Phase:
        return self._meta.phase

    @property
    def is_closed(self) -> bool:
        return self._meta.phase == Phase.CLOSED

    def require(self, phase: Phase, operation: str) -> None:
        if self._meta.phase != phase:
            raise WrongPhase(
                f"{operation} requires phase {phase.name}, round {self._meta.round_id} "
                f"is in {self._meta.phase.name}"
            )

    def require_open(self, operation: str) -> None:
        if self.is_closed:
            raise WrongPhase(f"{operation} is not allowed once round {self._meta.round_id} is closed")

    def require_window(self, kind: str, now: int) -> None:
        """Check the registration or voting window when the round enforces windows."""
        if not self._meta.policy.enforce_time_window:
            return
        window = self._meta.registration_window if kind == REGISTRATION_WINDOW else self._meta.voting_window
        if window is None:
            raise OutsideWindow(f"no {kind} window set for round {self._meta.round_id}")
        if not window.contains(now):
            raise OutsideWindow(
                f"{kind} window for round {self._meta.round_id} is {window.start}..{window.end}, now is {now}"
            )

    def advance(self, target: int, now: int) -> Phase:
        current = self._meta.phase
        if target != current + 1 or target > Phase.CLOSED:
            raise InvalidTransition(
                f"round {self._meta.round_id} cannot move from {current.name} to phase {target}"
            )
        new_phase = Phase(target)
        self._meta.phase = new_phase
        self._events.emit(
            EventKind.PHASE_CHANGED, self._meta.round_id, now,
            previous=int(current), phase=int(new_phase),
        )
        return new_phase
