from __future__ import annotations

import logging
import re
from io import BytesIO
from zipfile import BadZipFile, ZipFile

import defusedxml.ElementTree as ET

from resume_ai.core.config import settings
from resume_ai.core.errors import ParseError
from resume_ai.validation import FileInput, is_supported_extension

from .models import ParsedDoc
from .signatures import is_docx_payload, is_ole_payload, is_pdf_payload, is_zip_payload

logger = logging.getLogger(__name__)

# Runs of UTF-16LE text (Latin, Latin Extended and Vietnamese blocks) and of
# single-byte text, as stored in the WordDocument stream of Word 97-2003 files.
_UTF16_RUN = re.compile(rb"(?:[\x09\x0a\x0d\x20-\xff][\x00\x01\x1e]){12,}")
_CP1252_RUN = re.compile(rb"[\x09\x0a\x0d\x20-\x7e\x80-\xff]{12,}")
_LETTER = re.compile(r"[^\W\d_]", re.UNICODE)


def _parse_pdf(content: bytes) -> tuple[str, list[str], dict]:
    from pypdf import PdfReader

    warnings: list[str] = []
    if not is_pdf_payload(content):
        raise ParseError("File signature does not match .pdf content.", code="signature_mismatch")
    try:
        with BytesIO(content) as buffer:
            reader = PdfReader(buffer)
            page_chunks: list[str] = []
            for page in reader.pages:
                page_text = page.extract_text() or ""
                if page_text.strip():
                    page_chunks.append(page_text)
            page_count = len(reader.pages)
    except Exception as exc:
        raise ParseError(f"Unable to extract text from this PDF file: {exc}") from exc
    if not page_chunks:
        warnings.append("No extractable text found in PDF.")
    return "\n\n".join(page_chunks), warnings, {"pages": page_count}


def _extract_docx_text_fallback(content: bytes) -> tuple[str, int]:
    with ZipFile(BytesIO(content)) as archive:
        raw = archive.read("word/document.xml")
    root = ET.fromstring(raw)
    paragraphs: list[str] = []
    paragraph_count = 0
    for paragraph in root.iter():
        if not paragraph.tag.endswith("}p"):
            continue
        paragraph_count += 1
        texts: list[str] = []
        for node in paragraph.iter():
            if node.tag.endswith("}t") and node.text:
                value = node.text.strip()
                if value:
                    texts.append(value)
        if texts:
            paragraphs.append(" ".join(texts))
    return "\n".join(paragraphs), paragraph_count


def _docx_lines(document) -> list[str]:
    """Body paragraphs and table rows in document order, one line each."""
    from docx.table import Table

    lines: list[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                cells: list[str] = []
                for cell in row.cells:
                    # Merged cells repeat the same text across the span.
                    text = cell.text.strip()
                    if text and text not in cells:
                        cells.append(text)
                if cells:
                    lines.append(" ".join(cells))
        elif block.text.strip():
            lines.append(block.text)
    return lines


def _parse_docx(content: bytes) -> tuple[str, list[str], dict]:
    warnings: list[str] = []
    details: dict = {}
    try:
        from docx import Document

        with BytesIO(content) as buffer:
            document = Document(buffer)
            text = "\n".join(_docx_lines(document))
            details["paragraphs"] = len(document.paragraphs)
            details["tables"] = len(document.tables)
        details["parser"] = "python-docx"
    except Exception as exc:
        logger.info("docx_primary_parser_failed error=%s", exc)
        try:
            text, paragraph_count = _extract_docx_text_fallback(content)
        except (BadZipFile, KeyError, ValueError, ET.ParseError) as fallback_exc:
            raise ParseError(f"Unable to extract text from this Word document: {fallback_exc}") from fallback_exc
        details["paragraphs"] = paragraph_count
        details["parser"] = "zipxml-fallback"
        warnings.append("python-docx could not open the file; used raw XML fallback.")
    if not text.strip():
        warnings.append("No extractable text found in DOCX.")
    return text, warnings, details


def _letter_count(text: str) -> int:
    return len(_LETTER.findall(text))


def _extract_legacy_doc_text(content: bytes) -> str:
    utf16_runs = [match.decode("utf-16-le", errors="ignore") for match in _UTF16_RUN.findall(content)]
    cp1252_runs = [match.decode("cp1252", errors="ignore") for match in _CP1252_RUN.findall(content)]
    candidates = [
        "\n".join(run.strip() for run in runs if _letter_count(run) >= 4)
        for runs in (utf16_runs, cp1252_runs)
    ]
    return max(candidates, key=_letter_count)


def _parse_doc(content: bytes) -> tuple[str, list[str], dict]:
    if is_zip_payload(content):
        # A renamed .docx is common enough to be worth handling.
        if not is_docx_payload(content):
            raise ParseError("File signature does not match .doc content.", code="signature_mismatch")
        text, warnings, details = _parse_docx(content)
        warnings.append("File has a .doc extension but contains a DOCX document.")
        return text, warnings, details
    if not is_ole_payload(content):
        raise ParseError("File signature does not match .doc content.", code="signature_mismatch")
    text = _extract_legacy_doc_text(content)
    return text, ["Legacy .doc text is recovered on a best-effort basis."], {"parser": "ole-text-runs"}


class DocumentParser:
    """Turns uploaded PDF, DOC and DOCX bytes into plain text."""

    def __init__(self, max_bytes: int | None = None):
        self._max_bytes = max_bytes if max_bytes is not None else settings.max_upload_bytes

    def is_supported_extension(self, filename: str | None) -> bool:
        return is_supported_extension(filename)

    def max_allowed_bytes(self) -> int:
        return self._max_bytes

    def parse(self, file: FileInput) -> ParsedDoc:
        ext = file.extension
        if ext == "pdf":
            text, warnings, details = _parse_pdf(file.content)
        elif ext == "docx":
            if not is_docx_payload(file.content):
                raise ParseError("File signature does not match .docx content.", code="signature_mismatch")
            text, warnings, details = _parse_docx(file.content)
        elif ext == "doc":
            text, warnings, details = _parse_doc(file.content)
        else:
            raise ParseError(
                f"Unsupported file type '.{ext}'. Supported types: .pdf, .doc, .docx",
                code="unsupported_format",
            )
        return ParsedDoc(
            filename=file.filename,
            source_type=ext,
            text=text,
            parsing_warnings=warnings,
            details=details,
        )

    def extract_text(self, file: FileInput) -> str:
        parsed = self.parse(file)
        for warning in parsed.parsing_warnings:
            logger.info("document_parse_warning source_type=%s warning=%s", parsed.source_type, warning)
        return parsed.text
