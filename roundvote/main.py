# roundvote/main.py
import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roundvote import config
from roundvote.errors import (
    AuthorizationViolation,
    ElectionError,
    IntegrityViolation,
    NotFound,
)
from roundvote.routes.deps import get_caller, get_service
from roundvote.routes.round_routes import router as round_router
from roundvote.routes.vote_routes import vote_router
from roundvote.service import ElectionService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

origins = [
    "http://localhost:3000",  # For Create React App
    "http://localhost:5173",  # For Vite
]


def status_for(error: ElectionError) -> int:
    if isinstance(error, AuthorizationViolation):
        return 403
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, IntegrityViolation):
        return 422
    # phase, uniqueness and state violations
    return 409


def create_app(
    service: Optional[ElectionService] = None,
    archive=None,
    event_log=None,
    secret_key: Optional[str] = None,
) -> FastAPI:
    app = FastAPI(title="ROUNDVOTE - Round-based Election API")
    app.state.service = service or ElectionService()
    app.state.archive = archive
    app.state.secret_key = secret_key or config.SECRET_KEY
    if event_log is not None:
        app.state.service.events.subscribe(event_log)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ElectionError)
    async def election_error_handler(request: Request, exc: ElectionError):
        return JSONResponse(status_code=status_for(exc), content={"detail": exc.message, "code": exc.code})

    app.include_router(round_router)
    app.include_router(vote_router)

    @app.get("/", tags=["Root"])
    def read_root():
        return {"message": "Welcome to the ROUNDVOTE API"}

    @app.get("/health", tags=["Root"])
    def health_check():
        return {"status": "healthy", "archive": "MongoDB" if app.state.archive is not None else None}

    @app.get("/admins", tags=["Admin"])
    def list_admins(caller: str = Depends(get_caller), svc: ElectionService = Depends(get_service)):
        return {"admins": svc.list_admins(caller)}

    return app


def build_default_app() -> FastAPI:
    """App wired to MongoDB when MONGO_URI is configured, in-memory only otherwise."""
    if not config.MONGO_URI:
        logger.info("MONGO_URI not set, rounds are kept in memory only")
        return create_app()

    from roundvote.database.connection import get_database
    from roundvote.storage_mongo import MongoEventLog, RoundArchive

    db = get_database()
    logger.info(f"Archiving rounds to MongoDB database {config.MONGO_DB}")
    return create_app(archive=RoundArchive(db), event_log=MongoEventLog(db))

