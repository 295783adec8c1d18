from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ParsedDoc(BaseModel):
    filename: str
    source_type: str
    text: str
    parsing_warnings: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("source_type")
    @classmethod
    def _validate_source_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"pdf", "doc", "docx"}:
            raise ValueError("source_type must be one of: pdf, doc, docx")
        return normalized
