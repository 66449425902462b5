"""
QuickNote FastAPI Application

A REST API over the note service. Stands in for the UI layer: it
creates, lists and deletes notes and turns every failure into an
error response the client can show and recover from.
"""

from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from quicknote.config import Config
from quicknote.core.factory import NoteStoreFactory
from quicknote.models import Note
from quicknote.services.note_service import NoteService
from quicknote.utils.exceptions import (
    ConfigurationError,
    CorruptRecordError,
    NotFoundError,
    QuickNoteError,
    StorageUnavailableError,
    ValidationError,
)
from quicknote.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_STATUS_CODES: dict[type[QuickNoteError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    StorageUnavailableError: 503,
    CorruptRecordError: 500,
    ConfigurationError: 500,
}


# Pydantic models for API
class CreateNoteRequest(BaseModel):
    """Request model for creating a note."""

    content: str = Field(default="", description="Note text")
    keywords: str = Field(default="", description="Comma-separated keywords (, or ，)")
    audio_uri: str | None = Field(default=None, description="Reference to a recorded clip")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    db_path: str
    notes: int


class ErrorResponse(BaseModel):
    """Error body returned for every handled failure."""

    error: str
    detail: str


def get_service(request: Request) -> NoteService:
    """Resolve the note service owned by the running app."""
    return request.app.state.service


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, service: NoteService = Depends(get_service)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        db_path=request.app.state.config.storage.db_path,
        notes=await service.store.count(),
    )


@router.post("/notes", response_model=Note, status_code=201)
async def create_note(request: CreateNoteRequest, service: NoteService = Depends(get_service)):
    """
    Create a note.

    Requires either non-blank content or an audio reference. Keywords are
    split on ASCII and full-width commas.
    """
    return await service.create_note(
        raw_content=request.content,
        raw_keywords=request.keywords,
        audio_uri=request.audio_uri,
    )


@router.get("/notes", response_model=list[Note])
async def list_notes(service: NoteService = Depends(get_service)):
    """List notes, most recently updated first."""
    return await service.list_notes()


@router.get("/notes/{note_id}", response_model=Note)
async def get_note(note_id: int, service: NoteService = Depends(get_service)):
    """Get a single note."""
    return await service.get_note(note_id)


@router.delete("/notes/{note_id}", status_code=204)
async def delete_note(note_id: int, service: NoteService = Depends(get_service)):
    """Delete a note. The client is responsible for confirming with the user first."""
    await service.remove_note(note_id)


async def handle_quicknote_error(request: Request, exc: QuickNoteError) -> JSONResponse:
    """Map domain errors to HTTP responses."""
    status_code = 500
    for error_type, code in _STATUS_CODES.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    logger.warning(
        f"{request.method} {request.url.path} failed: {exc.message}",
        extra={"status_code": status_code, "error_type": type(exc).__name__},
    )
    body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app(config: Config | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Configuration; loaded from the environment when omitted

    Returns:
        FastAPI app whose lifespan owns the note store
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown."""
        app_config = config or Config.from_env()
        app.state.config = app_config

        setup_logging(
            level=app_config.logging.level,
            log_to_file=app_config.logging.log_to_file,
            log_dir=app_config.logging.log_dir,
            file_rotation=app_config.logging.file_rotation,
            file_retention=app_config.logging.file_retention,
            compression=app_config.logging.compression,
            serialize=app_config.logging.serialize,
        )

        logger.info("Starting QuickNote server")
        logger.info(
            f"Configuration: storage={app_config.storage.backend}:{app_config.storage.db_path}, "
            f"device_id={app_config.notes.device_id}"
        )

        store = NoteStoreFactory.create(app_config.storage)
        await store.initialize()

        app.state.store = store
        app.state.service = NoteService(
            store=store,
            device_id=app_config.notes.device_id,
            title_format=app_config.notes.title_format,
        )

        yield

        logger.info("Shutting down QuickNote server")
        await store.close()
        logger.info("Cleanup complete")

    app = FastAPI(
        title="QuickNote API",
        description="Local note store with keyword tags and audio attachments",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QuickNoteError, handle_quicknote_error)
    app.include_router(router)

    return app


app = create_app()
