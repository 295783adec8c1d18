"""Request pipelines for résumé upload, analysis and interview questions.

Every operation is a straight sequence of gates followed by at most one
collaborator call. The first rejected gate ends the pipeline, and any
exception from a collaborator is reported as ``UpstreamFailure`` without a
retry. Only lengths and presence flags are logged, never résumé content.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from resume_ai.ai.types import AIAnalysisClient
from resume_ai.core.config import settings
from resume_ai.core.errors import ErrorKind, UpstreamError
from resume_ai.parsing import DocumentParser
from resume_ai.schemas.resume import ExtractedDocument
from resume_ai.services.envelopes import (
    PipelineReply,
    rejected_reply,
    success_reply,
    upload_reply,
    upstream_failure_reply,
)
from resume_ai.validation import (
    RESUME_TEXT,
    RESUME_TEXT_FOR_QUESTIONS,
    FileInput,
    Rejected,
    TextInput,
    ValidationLimits,
    normalize_job_description,
    validate_extracted_text,
    validate_file,
    validate_job_description,
    validate_raw_text,
)

logger = logging.getLogger(__name__)

UPLOAD_SUCCESS_MESSAGE = "Trích xuất text thành công"
ANALYSIS_SUCCESS_MESSAGE = "Phân tích CV thành công"
QUESTIONS_SUCCESS_MESSAGE = "Tạo câu hỏi phỏng vấn thành công"

UPLOAD_FAILURE_PREFIX = "Lỗi xử lý file: "
ANALYSIS_FAILURE_PREFIX = "Lỗi phân tích CV: "
QUESTIONS_FAILURE_PREFIX = "Lỗi tạo câu hỏi phỏng vấn: "


def _error_code(exc: BaseException) -> str:
    if isinstance(exc, UpstreamError):
        return exc.code
    return type(exc).__name__


class ResumeOrchestrator:
    def __init__(
        self,
        parser: DocumentParser,
        ai_client: AIAnalysisClient,
        limits: ValidationLimits | None = None,
        *,
        redact_upstream_errors: bool | None = None,
    ):
        self._parser = parser
        self._ai_client = ai_client
        if limits is None:
            limits = replace(ValidationLimits.from_settings(), max_upload_bytes=parser.max_allowed_bytes())
        self._limits = limits
        self._redact = settings.redact_upstream_errors if redact_upstream_errors is None else redact_upstream_errors

    def _reject(self, operation: str, outcome: Rejected) -> PipelineReply:
        logger.info("%s_rejected kind=%s message=%s", operation, outcome.kind.value, outcome.message)
        return rejected_reply(outcome)

    def _upstream_failure(self, operation: str, prefix: str, exc: Exception) -> PipelineReply:
        logger.error(
            "%s_failed kind=%s code=%s error=%s",
            operation,
            ErrorKind.UPSTREAM_FAILURE.value,
            _error_code(exc),
            exc,
            exc_info=True,
        )
        return upstream_failure_reply(prefix, exc, redact=self._redact)

    def handle_upload(self, file: FileInput) -> PipelineReply:
        operation = "resume_upload"
        logger.info(
            "%s_started filename_ext=%s size=%s",
            operation,
            file.extension or "none",
            file.size,
        )

        outcome = validate_file(file, self._limits)
        if isinstance(outcome, Rejected):
            return self._reject(operation, outcome)

        try:
            extracted = self._parser.extract_text(file)
        except Exception as exc:
            return self._upstream_failure(operation, UPLOAD_FAILURE_PREFIX, exc)

        outcome = validate_extracted_text(extracted, self._limits)
        if isinstance(outcome, Rejected):
            return self._reject(operation, outcome)

        logger.info("%s_succeeded extracted_chars=%s", operation, len(extracted))
        return upload_reply(
            UPLOAD_SUCCESS_MESSAGE,
            ExtractedDocument(extracted_text=extracted, filename=file.filename),
        )

    def handle_analyze_text(self, resume_text: str | None, job_description_raw: str | None) -> PipelineReply:
        operation = "resume_analyze"
        job_description = normalize_job_description(job_description_raw)
        logger.info(
            "%s_started text_chars=%s has_job_description=%s",
            operation,
            len(resume_text or ""),
            job_description is not None,
        )

        if job_description is not None:
            outcome = validate_job_description(job_description, self._limits.max_job_description_chars)
            if isinstance(outcome, Rejected):
                return self._reject(operation, outcome)

        outcome = validate_raw_text(
            TextInput(resume_text), RESUME_TEXT, self._limits.max_resume_chars, self._limits
        )
        if isinstance(outcome, Rejected):
            return self._reject(operation, outcome)

        try:
            result = self._ai_client.analyze(outcome.text, job_description)
        except Exception as exc:
            return self._upstream_failure(operation, ANALYSIS_FAILURE_PREFIX, exc)

        logger.info("%s_succeeded items=1", operation)
        return success_reply(ANALYSIS_SUCCESS_MESSAGE, result)

    def handle_generate_interview_questions(
        self, resume_text: str | None, job_description_raw: str | None
    ) -> PipelineReply:
        operation = "interview_questions"
        job_description = normalize_job_description(job_description_raw)
        logger.info(
            "%s_started text_chars=%s has_job_description=%s",
            operation,
            len(resume_text or ""),
            job_description is not None,
        )

        outcome = validate_raw_text(TextInput(resume_text), RESUME_TEXT_FOR_QUESTIONS, None, self._limits)
        if isinstance(outcome, Rejected):
            return self._reject(operation, outcome)

        try:
            questions = self._ai_client.generate_questions(outcome.text, job_description)
        except Exception as exc:
            return self._upstream_failure(operation, QUESTIONS_FAILURE_PREFIX, exc)

        questions = list(questions or [])
        logger.info("%s_succeeded items=%s", operation, len(questions))
        return success_reply(QUESTIONS_SUCCESS_MESSAGE, questions)
