from .models import (
    JOB_DESCRIPTION,
    RESUME_TEXT,
    RESUME_TEXT_FOR_QUESTIONS,
    Accepted,
    FileInput,
    Rejected,
    TextField,
    TextInput,
    ValidationLimits,
    ValidationOutcome,
)
from .rules import (
    ALLOWED_EXTENSIONS,
    DEFAULT_LIMITS,
    extension_of,
    is_supported_extension,
    normalize_job_description,
    validate_extracted_text,
    validate_file,
    validate_job_description,
    validate_raw_text,
)

__all__ = [
    "Accepted",
    "Rejected",
    "ValidationOutcome",
    "ValidationLimits",
    "FileInput",
    "TextInput",
    "TextField",
    "RESUME_TEXT",
    "RESUME_TEXT_FOR_QUESTIONS",
    "JOB_DESCRIPTION",
    "ALLOWED_EXTENSIONS",
    "DEFAULT_LIMITS",
    "extension_of",
    "is_supported_extension",
    "normalize_job_description",
    "validate_file",
    "validate_extracted_text",
    "validate_raw_text",
    "validate_job_description",
]
