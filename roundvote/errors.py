"""
Typed rejections raised by the election core.

Every error carries a stable ``code`` so callers (and the HTTP layer) can
react without parsing messages. Operations raise before touching state, so
catching one of these means nothing was committed.
"""


class ElectionError(Exception):
    code = "election_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


# --- Categories ---

class PhaseViolation(ElectionError):
    code = "phase_violation"


class UniquenessViolation(ElectionError):
    code = "uniqueness_violation"


class IntegrityViolation(ElectionError):
    code = "integrity_violation"


class StateViolation(ElectionError):
    code = "state_violation"


class AuthorizationViolation(ElectionError):
    code = "authorization_violation"


class NotFound(ElectionError):
    code = "not_found"


# --- Phase violations ---

class WrongPhase(PhaseViolation):
    code = "wrong_phase"


class OutsideWindow(PhaseViolation):
    code = "outside_window"


class InvalidTransition(PhaseViolation):
    code = "invalid_transition"


class PreviousRoundOpen(PhaseViolation):
    code = "previous_round_open"


class ElectionNotClosed(PhaseViolation):
    code = "election_not_closed"


# --- Uniqueness violations ---

class DuplicateId(UniquenessViolation):
    code = "duplicate_id"


class DuplicateParty(UniquenessViolation):
    code = "duplicate_party"


class DuplicateIdentity(UniquenessViolation):
    code = "duplicate_identity"


# --- Integrity violations ---

class InvalidIdentity(IntegrityViolation):
    code = "invalid_identity"


class IdentityMismatch(IntegrityViolation):
    code = "identity_mismatch"


class UnknownCandidate(IntegrityViolation):
    code = "unknown_candidate"


class InvalidRange(IntegrityViolation):
    code = "invalid_range"


class InvalidWindow(IntegrityViolation):
    code = "invalid_window"


# --- State violations ---

class AlreadyRegistered(StateViolation):
    code = "already_registered"


class NotRegistered(StateViolation):
    code = "not_registered"


class AlreadyVoted(StateViolation):
    code = "already_voted"


class NoToken(StateViolation):
    code = "no_token"


class NoCandidates(StateViolation):
    code = "no_candidates"


class OperationNotSupported(StateViolation):
    code = "operation_not_supported"


# --- Authorization ---

class NotAuthorized(AuthorizationViolation):
    code = "not_authorized"


# --- Not found ---

class RoundNotFound(NotFound):
    code = "round_not_found"


class CandidateNotFound(NotFound):
    code = "candidate_not_found"
