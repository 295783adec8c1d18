from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from resume_ai.core.errors import ErrorKind

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Transport requests ---


class AnalyzeTextRequest(CamelModel):
    text: str | None = None
    job_description: str | None = None


class GenerateQuestionsRequest(CamelModel):
    resume_text: str | None = None
    job_description: str | None = None


# --- AI payloads ---


class SectionFeedback(BaseModel):
    noi_dung: str = ""
    de_xuat: str = ""
    ly_do: str = ""


class ResumeAnalysis(BaseModel):
    """Structured analysis returned by the AI provider and relayed as-is."""

    model_config = ConfigDict(extra="allow")

    score: float | None = Field(default=None, ge=0, le=100)
    summary: str = ""
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    kinh_nghiem_lam_viec: SectionFeedback | None = None
    hoc_van: SectionFeedback | None = None
    ky_nang: SectionFeedback | None = None


class InterviewQuestion(CamelModel):
    id: int = Field(ge=1)
    question: str = Field(min_length=1)
    expected_duration: int = Field(ge=1, description="Seconds allocated to answer.")


class ExtractedDocument(CamelModel):
    extracted_text: str
    filename: str


# --- Response envelope ---


class ResponseEnvelope(CamelModel, Generic[T]):
    success: bool
    message: str
    data: T | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None


class UploadEnvelope(ResponseEnvelope[ExtractedDocument]):
    """Upload reply; mirrors the document fields at top level for older clients."""

    extracted_text: str | None = None
    filename: str | None = None
