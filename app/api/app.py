"""FastAPI surface for the RFP document processor.

Exposes the run operation (multi-file upload) and read-only status
snapshots for polling clients.
"""

import shutil
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from app.documents.exceptions import UnsupportedDocumentError
from app.documents.models import InputDocument
from app.logging.logger import Log
from app.processor.exceptions import EmptySelectionError, RunInProgressError
from app.processor.orchestrator import Orchestrator
from app.processor.status import ProcessingState

from .schemas import HealthResponse, ProcessResponse, RecordResponse, StatusResponse

API_VERSION = "1.0.0"


def create_app(orchestrator: Orchestrator, tesseract_cmd: str | None = None) -> FastAPI:
    """Build the API around an already configured orchestrator.

    The orchestrator is closed when the application shuts down.
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        orchestrator.close()

    api = FastAPI(
        lifespan=lifespan,
        title="RFP Document Processor",
        description="Extract request-for-payment records from scanned invoices and receipts",
        version=API_VERSION,
    )
    api.state.orchestrator = orchestrator
    api.state.tesseract_cmd = tesseract_cmd or "tesseract"

    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    api.add_api_route("/health", health_check, methods=["GET"], response_model=HealthResponse)
    api.add_api_route("/status", get_status, methods=["GET"], response_model=StatusResponse)
    api.add_api_route("/process", process_files, methods=["POST"], response_model=ProcessResponse)
    return api


def _orchestrator(request: Request) -> Orchestrator:
    return request.app.state.orchestrator


def health_check(request: Request) -> HealthResponse:
    """Return service health and whether the configured OCR binary is runnable."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        tesseract_available=shutil.which(request.app.state.tesseract_cmd) is not None,
    )


def get_status(request: Request) -> StatusResponse:
    """Return the current processing status snapshot."""
    return StatusResponse.from_status(_orchestrator(request).status.snapshot())


def process_files(
    request: Request,
    files: Annotated[list[UploadFile] | None, File()] = None,
) -> ProcessResponse:
    """Run OCR, field extraction and dispatch over the uploaded batch.

    All files are treated as pages of one invoice or receipt and produce
    a single record.
    """
    try:
        documents = [
            InputDocument.from_upload(
                upload.filename,
                upload.file.read(),
                upload.content_type,
            )
            for upload in files or []
            if upload.filename
        ]
    except UnsupportedDocumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        result = _orchestrator(request).run(documents)
    except EmptySelectionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RunInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    if result.status.state is ProcessingState.ERROR:
        Log.error(f"Processing request failed: {result.status.message}")
        raise HTTPException(status_code=500, detail=result.status.message)

    return ProcessResponse(
        status=StatusResponse.from_status(result.status),
        record=RecordResponse.from_record(result.record) if result.record else None,
    )
