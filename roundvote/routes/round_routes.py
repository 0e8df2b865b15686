from typing import List

from fastapi import APIRouter, Depends, Request

from roundvote.models.candidate_model import CandidateIn
from roundvote.models.round_model import RoundMetadata
from roundvote.routes.deps import archive_round, get_caller, get_service
from roundvote.schemas import CandidateOut, CurrentRound, PhaseRequest, RoundCreate, WindowRequest
from roundvote.service import ElectionService

router = APIRouter(prefix="/rounds", tags=["Rounds"])


@router.post("", status_code=201)
def create_round(
    body: RoundCreate,
    request: Request,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    round_id = service.create_round(caller, body.name)
    archive_round(request, round_id)
    return {"message": "Round created successfully!", "round_id": round_id}


@router.get("/current", response_model=CurrentRound)
def current_round(service: ElectionService = Depends(get_service)):
    round_id = service.current_round_id()
    if not round_id:
        return CurrentRound()
    return CurrentRound(round_id=round_id, phase=int(service.phase(round_id)))


@router.get("/{round_id}", response_model=RoundMetadata)
def get_round(
    round_id: int,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    return service.get_round(caller, round_id)


@router.post("/{round_id}/windows")
def set_window(
    round_id: int,
    body: WindowRequest,
    request: Request,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    window = service.set_window(caller, round_id, body.kind, body.start, body.end)
    archive_round(request, round_id)
    return {"kind": body.kind, "start": window.start, "end": window.end}


@router.post("/{round_id}/phase")
def advance_phase(
    round_id: int,
    body: PhaseRequest,
    request: Request,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    phase = service.advance_phase(caller, round_id, body.target)
    archive_round(request, round_id)
    return {"round_id": round_id, "phase": int(phase), "name": phase.name}


@router.post("/{round_id}/candidates", response_model=CandidateOut, status_code=201)
def add_candidate(
    round_id: int,
    body: CandidateIn,
    request: Request,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    candidate = service.add_candidate(caller, round_id, body)
    archive_round(request, round_id, candidate_ids=[candidate.candidate_id])
    return CandidateOut.from_candidate(candidate)


@router.delete("/{round_id}/candidates/{candidate_id}")
def remove_candidate(
    round_id: int,
    candidate_id: int,
    request: Request,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    service.remove_candidate(caller, round_id, candidate_id)
    archive_round(request, round_id, removed_candidate=candidate_id)
    return {"message": "Candidate removed.", "candidate_id": candidate_id}


@router.get("/{round_id}/candidates", response_model=List[CandidateOut])
def list_candidates(round_id: int, service: ElectionService = Depends(get_service)):
    return [CandidateOut.from_candidate(c) for c in service.list_candidates(round_id)]


@router.get("/{round_id}/candidates/{candidate_id}", response_model=CandidateOut)
def get_candidate(round_id: int, candidate_id: int, service: ElectionService = Depends(get_service)):
    return CandidateOut.from_candidate(service.get_candidate(round_id, candidate_id))
