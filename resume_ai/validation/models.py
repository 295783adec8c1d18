from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from resume_ai.core.config import settings
from resume_ai.core.errors import ErrorKind


def extension_of(filename: str | None) -> str:
    """Lower-cased text after the last dot, or ``""`` when there is none."""
    name = (filename or "").strip()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


@dataclass(frozen=True)
class FileInput:
    content: bytes
    filename: str
    size: int

    @property
    def extension(self) -> str:
        return extension_of(self.filename)


@dataclass(frozen=True)
class TextInput:
    content: str | None


@dataclass(frozen=True)
class Accepted:
    text: str

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    kind: ErrorKind
    message: str

    @property
    def accepted(self) -> bool:
        return False


ValidationOutcome = Union[Accepted, Rejected]


@dataclass(frozen=True)
class ValidationLimits:
    """Tunable gate thresholds.

    ``scan_min_chars`` is a heuristic: image-only PDFs usually yield little or
    no text, so a very short extraction is treated as a probable scan. The value
    is a product decision and is exposed through ``SCAN_MIN_CHARS``.
    """

    max_upload_bytes: int = 10 * 1024 * 1024
    scan_min_chars: int = 50
    min_text_chars: int = 50
    max_resume_chars: int = 50000
    max_job_description_chars: int = 20000

    @classmethod
    def from_settings(cls) -> "ValidationLimits":
        return cls(
            max_upload_bytes=settings.max_upload_bytes,
            scan_min_chars=settings.scan_min_chars,
            min_text_chars=settings.min_text_chars,
            max_resume_chars=settings.max_resume_chars,
            max_job_description_chars=settings.max_job_description_chars,
        )


@dataclass(frozen=True)
class TextField:
    """User-facing messages for one kind of free-text input.

    A field only carries messages for the checks applied to it; the job
    description, for instance, is optional and only has an upper bound, and
    résumé text for interview questions has no upper bound.
    """

    name: str
    empty_message: Optional[str] = None
    too_short_message: Optional[str] = None
    too_long_message: Optional[str] = None


RESUME_TEXT = TextField(
    name="resume_text",
    empty_message="Text CV không được để trống",
    too_short_message="Nội dung CV quá ngắn. Vui lòng cung cấp thông tin chi tiết hơn.",
    too_long_message="Nội dung CV quá dài. Vui lòng rút gọn nội dung.",
)

RESUME_TEXT_FOR_QUESTIONS = TextField(
    name="resume_text",
    empty_message="Text CV không được để trống",
    too_short_message="Nội dung CV quá ngắn để tạo câu hỏi phỏng vấn.",
)

JOB_DESCRIPTION = TextField(
    name="job_description",
    too_long_message="Mô tả công việc quá dài. Vui lòng rút gọn nội dung.",
)
