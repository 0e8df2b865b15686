from fastapi import APIRouter, Depends, Request

from roundvote.routes.deps import archive_round, get_caller, get_service
from roundvote.schemas import (
    PartyVotesOut,
    RegisterRequest,
    ResultsOut,
    VoteRequest,
    VoterStatus,
    WinnerOut,
    WinningPartyOut,
)
from roundvote.service import ElectionService

vote_router = APIRouter(prefix="/rounds", tags=["Vote"])


@vote_router.post("/{round_id}/voters", response_model=VoterStatus, status_code=201)
def register_voter(
    round_id: int,
    body: RegisterRequest,
    request: Request,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    voter = service.register_voter(caller, round_id, body.identity, body.profile)
    archive_round(request, round_id, accounts=[voter.account])
    return VoterStatus(round_id=round_id, account=voter.account, registered=voter.registered, voted=voter.voted)


@vote_router.get("/{round_id}/voters/me", response_model=VoterStatus)
def voter_status(
    round_id: int,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    voter = service.voter_status(caller, round_id)
    if voter is None:
        return VoterStatus(round_id=round_id, account=caller, registered=False, voted=False)
    return VoterStatus(round_id=round_id, account=caller, registered=voter.registered, voted=voter.voted)


@vote_router.post("/{round_id}/votes")
def cast_vote(
    round_id: int,
    body: VoteRequest,
    request: Request,
    caller: str = Depends(get_caller),
    service: ElectionService = Depends(get_service),
):
    """
    Cast the caller's single vote for a party.
    The identity must be the one the caller registered with.
    """
    candidate = service.cast_vote(caller, round_id, body.identity, body.party_number)
    archive_round(request, round_id, candidate_ids=[candidate.candidate_id], accounts=[caller])
    return {"message": "Vote cast successfully!", "round_id": round_id, "party_number": body.party_number}


@vote_router.get("/{round_id}/results", response_model=ResultsOut)
def get_results(round_id: int, service: ElectionService = Depends(get_service)):
    rows = service.all_party_votes(round_id)
    return ResultsOut(
        round_id=round_id,
        total_votes=sum(r.votes for r in rows),
        results=[PartyVotesOut(party_number=r.party_number, votes=r.votes) for r in rows],
    )


@vote_router.get("/{round_id}/winner", response_model=WinnerOut)
def get_winner(round_id: int, service: ElectionService = Depends(get_service)):
    w = service.winner(round_id)
    return WinnerOut(candidate_id=w.candidate_id, name=w.name, votes=w.votes)


@vote_router.get("/{round_id}/winning-party", response_model=WinningPartyOut)
def get_winning_party(round_id: int, service: ElectionService = Depends(get_service)):
    w = service.winning_party(round_id)
    return WinningPartyOut(party_number=w.party_number, party_name=w.party_name, votes=w.votes)
