"""Input gates applied before any text reaches the parser or the AI provider.

Each gate is an ordered tuple of named rules. Rules are evaluated in sequence
and the first one that fails decides the outcome, so emptiness is always
reported before any length bound.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union

from resume_ai.core.errors import ErrorKind

from .models import (
    JOB_DESCRIPTION,
    RESUME_TEXT,
    Accepted,
    FileInput,
    Rejected,
    TextField,
    TextInput,
    ValidationLimits,
    ValidationOutcome,
    extension_of,
)

ALLOWED_EXTENSIONS = frozenset({"pdf", "doc", "docx"})
DEFAULT_LIMITS = ValidationLimits()

EMPTY_FILE_MESSAGE = "File không được để trống"
UNSUPPORTED_FORMAT_MESSAGE = "Chỉ hỗ trợ file PDF, DOC, DOCX"
EMPTY_EXTRACTION_MESSAGE = (
    "Không thể trích xuất text từ file. File có thể là PDF dạng scan hoặc không chứa text."
)
LIKELY_SCANNED_MESSAGE = (
    "Nội dung text quá ngắn. File có thể là PDF dạng scan chứ không phải dạng text. "
    "Điều này có thể bị loại bởi hệ thống lọc CV tự động. "
    "Vui lòng chuyển CV thành dạng text trước khi upload."
)


@dataclass(frozen=True)
class Rule:
    name: str
    kind: ErrorKind
    fails: Callable[[Any], bool]
    message: str


def first_failure(value: Any, rules: Sequence[Rule]) -> Rejected | None:
    for rule in rules:
        if rule.fails(value):
            return Rejected(kind=rule.kind, message=rule.message)
    return None


def _trimmed(text: str | None) -> str:
    return (text or "").strip()


def is_supported_extension(filename: str | None) -> bool:
    return extension_of(filename) in ALLOWED_EXTENSIONS


def size_label(max_bytes: int) -> str:
    """Upload cap as shown to users, rounded up so small caps never read as 0MB."""
    mib = 1024 * 1024
    if max_bytes < mib:
        return f"{math.ceil(max_bytes / 1024)}KB"
    return f"{math.ceil(max_bytes / mib)}MB"


def _file_rules(limits: ValidationLimits) -> tuple[Rule, ...]:
    return (
        Rule(
            name="file_not_empty",
            kind=ErrorKind.EMPTY_INPUT,
            fails=lambda file: file.size <= 0 or not file.content,
            message=EMPTY_FILE_MESSAGE,
        ),
        Rule(
            name="file_extension_supported",
            kind=ErrorKind.UNSUPPORTED_FORMAT,
            fails=lambda file: file.extension not in ALLOWED_EXTENSIONS,
            message=UNSUPPORTED_FORMAT_MESSAGE,
        ),
        Rule(
            name="file_within_size_limit",
            kind=ErrorKind.TOO_LARGE,
            fails=lambda file: max(file.size, len(file.content)) > limits.max_upload_bytes,
            message=f"File quá lớn (tối đa {size_label(limits.max_upload_bytes)})",
        ),
    )


def _extraction_rules(limits: ValidationLimits) -> tuple[Rule, ...]:
    return (
        Rule(
            name="extraction_not_empty",
            kind=ErrorKind.EMPTY_EXTRACTION,
            fails=lambda text: not _trimmed(text),
            message=EMPTY_EXTRACTION_MESSAGE,
        ),
        Rule(
            name="extraction_not_scanned",
            kind=ErrorKind.LIKELY_SCANNED,
            fails=lambda text: len(_trimmed(text)) < limits.scan_min_chars,
            message=LIKELY_SCANNED_MESSAGE,
        ),
    )


def _text_rules(field: TextField, max_chars: int | None, limits: ValidationLimits) -> tuple[Rule, ...]:
    rules: list[Rule] = []
    if field.empty_message is not None:
        rules.append(
            Rule(
                name=f"{field.name}_not_empty",
                kind=ErrorKind.EMPTY_INPUT,
                fails=lambda text: not _trimmed(text),
                message=field.empty_message,
            )
        )
    if field.too_short_message is not None:
        rules.append(
            Rule(
                name=f"{field.name}_min_length",
                kind=ErrorKind.TOO_SHORT,
                fails=lambda text: len(_trimmed(text)) < limits.min_text_chars,
                message=field.too_short_message,
            )
        )
    if max_chars is not None:
        if field.too_long_message is None:
            raise ValueError(f"Field '{field.name}' has no upper bound message.")
        rules.append(
            Rule(
                name=f"{field.name}_max_length",
                kind=ErrorKind.TOO_LONG,
                fails=lambda text: len(text) > max_chars,
                message=field.too_long_message,
            )
        )
    return tuple(rules)


def validate_file(file: FileInput, limits: ValidationLimits = DEFAULT_LIMITS) -> ValidationOutcome:
    """Gate an upload on emptiness, extension and size. Does not read the content."""
    rejected = first_failure(file, _file_rules(limits))
    if rejected is not None:
        return rejected
    return Accepted(text="")


def validate_extracted_text(text: str | None, limits: ValidationLimits = DEFAULT_LIMITS) -> ValidationOutcome:
    rejected = first_failure(text, _extraction_rules(limits))
    if rejected is not None:
        return rejected
    return Accepted(text=_trimmed(text))


def validate_raw_text(
    text: Union[TextInput, str, None],
    field: TextField = RESUME_TEXT,
    max_chars: int | None = None,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> ValidationOutcome:
    """Gate free text. Accepted text is returned untouched so formatting survives."""
    content = text.content if isinstance(text, TextInput) else text
    rejected = first_failure(content, _text_rules(field, max_chars, limits))
    if rejected is not None:
        return rejected
    return Accepted(text=content or "")


def validate_job_description(
    text: str,
    max_chars: int = DEFAULT_LIMITS.max_job_description_chars,
) -> ValidationOutcome:
    return validate_raw_text(text, JOB_DESCRIPTION, max_chars)


def normalize_job_description(raw: str | None) -> str | None:
    """Map the legacy ``"null"`` sentinel and blank strings to ``None``."""
    if raw is None:
        return None
    stripped = raw.strip()
    if not stripped or stripped.lower() == "null":
        return None
    return raw
