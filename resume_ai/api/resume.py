import asyncio

from fastapi import APIRouter, Depends, File, Request, UploadFile

from resume_ai.api.deps import get_orchestrator
from resume_ai.core.config import settings
from resume_ai.core.rate_limit import rate_limit
from resume_ai.schemas.resume import AnalyzeTextRequest, GenerateQuestionsRequest
from resume_ai.services.resume_orchestrator import ResumeOrchestrator
from resume_ai.validation import FileInput

router = APIRouter()

_READ_CHUNK_BYTES = 1024 * 64


async def _read_upload(file: UploadFile, max_bytes: int) -> FileInput:
    """Read at most one chunk past ``max_bytes`` so oversized uploads stop early."""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        chunks.append(chunk)
        if total > max_bytes:
            break
    declared = file.size or 0
    return FileInput(content=b"".join(chunks), filename=file.filename or "", size=max(declared, total))


@router.post("/resume/upload")
@rate_limit()
async def upload_resume(
    request: Request,
    file: UploadFile = File(...),
    orchestrator: ResumeOrchestrator = Depends(get_orchestrator),
):
    _ = request
    try:
        file_input = await _read_upload(file, settings.max_upload_bytes)
    finally:
        await file.close()
    reply = await asyncio.to_thread(orchestrator.handle_upload, file_input)
    return reply.to_response()


@router.post("/resume/analyze-text")
@rate_limit()
async def analyze_resume_text(
    request: Request,
    payload: AnalyzeTextRequest,
    orchestrator: ResumeOrchestrator = Depends(get_orchestrator),
):
    _ = request
    reply = await asyncio.to_thread(orchestrator.handle_analyze_text, payload.text, payload.job_description)
    return reply.to_response()


@router.post("/resume/generate-interview-questions")
@rate_limit()
async def generate_interview_questions(
    request: Request,
    payload: GenerateQuestionsRequest,
    orchestrator: ResumeOrchestrator = Depends(get_orchestrator),
):
    _ = request
    reply = await asyncio.to_thread(
        orchestrator.handle_generate_interview_questions,
        payload.resume_text,
        payload.job_description,
    )
    return reply.to_response()

