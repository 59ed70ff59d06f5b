"""
Session endpoints — the form model behind the matcher UI.
Thin HTTP layer, delegates all logic to MatchSession.
"""

import logging
import os

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from jobmatch.dependencies import get_document_parser, get_session
from jobmatch.domain.errors import AnalysisInProgressError
from jobmatch.domain.models import (
    JobDescription,
    JobUpdate,
    ResultView,
    ResumeUpdate,
    ResumeUploadResponse,
    SessionState,
)
from jobmatch.ports.document_port import DocumentPort
from jobmatch.services.session_service import MatchSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("", response_model=SessionState)
async def get_state(session: MatchSession = Depends(get_session)):
    """Return the whole form model: résumé, jobs, results, loading flag, error."""
    return session.state


@router.put("/resume", response_model=SessionState)
async def update_resume(
    body: ResumeUpdate,
    session: MatchSession = Depends(get_session),
):
    session.set_resume(body.resume)
    return session.state


@router.post("/resume/upload", response_model=ResumeUploadResponse)
async def upload_resume(
    file: UploadFile,
    session: MatchSession = Depends(get_session),
    doc_parser: DocumentPort = Depends(get_document_parser),
):
    """Replace the résumé with the text of an uploaded PDF or DOCX file."""
    ext = os.path.splitext(file.filename or "")[1].lower().strip(".")
    if ext not in doc_parser.supported_extensions():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only {', '.join('.' + e for e in doc_parser.supported_extensions())} files are accepted",
        )

    file_bytes = await file.read()
    if not file_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Empty file uploaded",
        )

    try:
        text = await doc_parser.extract_text(file_bytes, ext)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        )
    except Exception as exc:
        logger.error(f"Résumé upload {file.filename!r} failed: {type(exc).__name__}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not read the uploaded résumé.",
        )

    session.set_resume(text)
    return ResumeUploadResponse(characters_extracted=len(text))


@router.post(
    "/jobs",
    response_model=JobDescription,
    status_code=status.HTTP_201_CREATED,
)
async def add_job(session: MatchSession = Depends(get_session)):
    """Append a blank job row."""
    return session.add_job()


@router.patch("/jobs/{job_id}", response_model=SessionState)
async def update_job(
    job_id: str,
    body: JobUpdate,
    session: MatchSession = Depends(get_session),
):
    """Replace the title or description of a job. Unknown ids are ignored."""
    session.update_job(job_id, body.field, body.value)
    return session.state


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_job(
    job_id: str,
    session: MatchSession = Depends(get_session),
):
    """Remove a job row. Unknown ids are ignored."""
    session.remove_job(job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/analyze", response_model=SessionState)
async def analyze(session: MatchSession = Depends(get_session)):
    """
    Score the résumé against every job.
    Validation and analysis failures come back in the `error` field.
    """
    try:
        return await session.submit_analysis()
    except AnalysisInProgressError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        )


@router.get("/results", response_model=list[ResultView])
async def get_results(session: MatchSession = Depends(get_session)):
    """Results best-first, each with the full description of its job."""
    return session.result_views()
