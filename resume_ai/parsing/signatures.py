from __future__ import annotations

from io import BytesIO
from zipfile import BadZipFile, ZipFile

PDF_MAGIC = b"%PDF-"
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def is_pdf_payload(content: bytes) -> bool:
    # Some generators prepend a few bytes of junk before the header.
    return PDF_MAGIC in content[:1024]


def is_ole_payload(content: bytes) -> bool:
    return content.startswith(OLE_MAGIC)


def is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
    except BadZipFile:
        return False
    return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)


def is_docx_payload(content: bytes) -> bool:
    return is_zip_payload(content) and zip_has_paths(content, ("word/",))
