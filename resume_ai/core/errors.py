from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    EMPTY_INPUT = "EmptyInput"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    TOO_LARGE = "TooLarge"
    EMPTY_EXTRACTION = "EmptyExtraction"
    LIKELY_SCANNED = "LikelyScanned"
    TOO_SHORT = "TooShort"
    TOO_LONG = "TooLong"
    UPSTREAM_FAILURE = "UpstreamFailure"
    INVALID_REQUEST = "InvalidRequest"

    @property
    def status_code(self) -> int:
        if self is ErrorKind.UPSTREAM_FAILURE:
            return 500
        return 400


class UpstreamError(RuntimeError):
    """Failure raised by a collaborator (document parser or AI provider)."""

    def __init__(self, message: str, *, code: str = "upstream_failed"):
        super().__init__(message)
        self.code = code


class ParseError(UpstreamError):
    def __init__(self, message: str, *, code: str = "parse_failed"):
        super().__init__(message, code=code)


class ProviderError(UpstreamError):
    def __init__(self, message: str, *, code: str = "provider_failed"):
        super().__init__(message, code=code)
