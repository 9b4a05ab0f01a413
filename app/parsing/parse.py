from __future__ import annotations

from io import BytesIO
from typing import Any
from zipfile import BadZipFile, ZipFile

import defusedxml.ElementTree as ET

from .models import ExtractedText

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


class UnsupportedFormat(ValueError):
    pass


class TextExtractionError(ValueError):
    pass


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
        return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)
    except (BadZipFile, OSError):
        return False


def _is_probably_text_payload(content: bytes) -> bool:
    if not content:
        return False
    return b"\x00" not in content[:4096]


def _parse_txt(content: bytes) -> tuple[str, dict[str, Any]]:
    if not _is_probably_text_payload(content):
        raise TextExtractionError("File signature does not match text content.")
    for encoding in ("utf-8", "utf-16", "latin-1"):
        try:
            return content.decode(encoding), {"encoding": encoding}
        except UnicodeDecodeError:
            continue
    raise TextExtractionError("Unable to decode text file.")


def _parse_pdf(content: bytes) -> tuple[str, dict[str, Any]]:
    if not content.startswith(PDF_MAGIC):
        raise TextExtractionError("File signature does not match .pdf content.")

    from pypdf import PdfReader

    try:
        reader = PdfReader(BytesIO(content))
        page_chunks: list[str] = []
        for page in reader.pages:
            page_text = page.extract_text() or ""
            if page_text.strip():
                page_chunks.append(page_text)
        return "\n\n".join(page_chunks), {"pages": len(reader.pages), "parser": "pypdf"}
    except Exception as exc:
        raise TextExtractionError("Unable to extract text from this PDF file.") from exc


_WORD_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def _extract_docx_text_fallback(content: bytes) -> tuple[str, int]:
    """Read ``word/document.xml`` directly when python-docx rejects the package."""
    with ZipFile(BytesIO(content)) as archive:
        document = ET.fromstring(archive.read("word/document.xml"))
    paragraphs = list(document.iter(f"{_WORD_NS}p"))
    lines = []
    for paragraph in paragraphs:
        runs = (node.text.strip() for node in paragraph.iter(f"{_WORD_NS}t") if node.text)
        line = " ".join(run for run in runs if run)
        if line:
            lines.append(line)
    return "\n".join(lines), len(paragraphs)


def _parse_docx(content: bytes) -> tuple[str, dict[str, Any]]:
    if not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",)):
        raise TextExtractionError("File signature does not match .docx content.")

    details: dict[str, Any] = {}
    try:
        try:
            from docx import Document

            doc = Document(BytesIO(content))
            text = "\n".join(paragraph.text for paragraph in doc.paragraphs if paragraph.text.strip())
            details["paragraphs"] = len(doc.paragraphs)
            details["parser"] = "python-docx"
        except Exception:
            text, paragraph_count = _extract_docx_text_fallback(content)
            details["paragraphs"] = paragraph_count
            details["parser"] = "zipxml-fallback"
    except Exception as exc:
        raise TextExtractionError("Unable to extract text from this Word document.") from exc
    return text, details


def extract_resume_text(file_type: str, content: bytes) -> ExtractedText:
    mime = (file_type or "").split(";", 1)[0].strip().lower()
    if mime == PDF_MIME:
        source_type = "pdf"
        text, details = _parse_pdf(content)
    elif mime == DOCX_MIME:
        source_type = "docx"
        text, details = _parse_docx(content)
    elif mime.startswith("text/"):
        source_type = "txt"
        text, details = _parse_txt(content)
    else:
        raise UnsupportedFormat("Unsupported file type. Please upload PDF, DOCX, or TXT files.")

    details["mime_type"] = mime
    details["characters"] = len(text)
    return ExtractedText(source_type=source_type, text=text, details=details)
