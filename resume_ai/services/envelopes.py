from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi.responses import JSONResponse

from resume_ai.core.errors import ErrorKind
from resume_ai.schemas.resume import ExtractedDocument, ResponseEnvelope, UploadEnvelope
from resume_ai.validation import Rejected

REDACTED_UPSTREAM_DETAIL = "Dịch vụ tạm thời không khả dụng. Vui lòng thử lại sau."


@dataclass(frozen=True)
class PipelineReply:
    status_code: int
    envelope: ResponseEnvelope

    @property
    def success(self) -> bool:
        return self.envelope.success

    def body(self) -> dict[str, Any]:
        return self.envelope.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.body())


def success_reply(message: str, data: Any) -> PipelineReply:
    return PipelineReply(status_code=200, envelope=ResponseEnvelope[Any](success=True, message=message, data=data))


def upload_reply(message: str, document: ExtractedDocument) -> PipelineReply:
    envelope = UploadEnvelope(
        success=True,
        message=message,
        data=document,
        extracted_text=document.extracted_text,
        filename=document.filename,
    )
    return PipelineReply(status_code=200, envelope=envelope)


def error_reply(kind: ErrorKind, message: str) -> PipelineReply:
    envelope = ResponseEnvelope[Any](success=False, message=message, error=message, error_kind=kind)
    return PipelineReply(status_code=kind.status_code, envelope=envelope)


def rejected_reply(outcome: Rejected) -> PipelineReply:
    return error_reply(outcome.kind, outcome.message)


def upstream_failure_reply(prefix: str, exc: BaseException, *, redact: bool = False) -> PipelineReply:
    detail = REDACTED_UPSTREAM_DETAIL if redact else str(exc)
    return error_reply(ErrorKind.UPSTREAM_FAILURE, f"{prefix}{detail}")
