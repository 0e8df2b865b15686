from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roundvote.security import decode_access_token
from roundvote.service import ElectionService

bearer = HTTPBearer(auto_error=False)


def get_service(request: Request) -> ElectionService:
    return request.app.state.service


def get_caller(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer),
) -> str:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing bearer token.")
    account = decode_access_token(credentials.credentials, secret_key=request.app.state.secret_key)
    if account is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")
    return account


def archive_round(request: Request, round_id: int, candidate_ids=(), accounts=(), removed_candidate=None) -> None:
    # runs after commit; archive failures are logged, never surfaced
    archive = request.app.state.archive
    if archive is not None:
        request.app.state.service.archive(
            archive, round_id,
            candidate_ids=candidate_ids, accounts=accounts, removed_candidate=removed_candidate,
        )
