"""Extract raw text from uploaded resume files (PDF, DOCX, TXT). In-memory only."""

import re
import unicodedata
from io import BytesIO
from typing import Optional

import pdfplumber
from docx import Document

from resume_ai.config import MAX_RESUME_CHARS
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


def clean_resume_text(text: str, max_chars: int = MAX_RESUME_CHARS) -> str:
    """NFC-normalize, collapse runs of spaces and blank lines, truncate to max_chars."""
    if not text or not text.strip():
        return ""
    t = unicodedata.normalize("NFC", text)
    t = t.replace("\r\n", "\n").replace("\r", "\n")
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    t = t.strip()
    if len(t) > max_chars:
        logger.info("Resume text truncated from %s to %s chars", len(t), max_chars)
        t = t[:max_chars]
    return t


def _extract_pdf(bytes_io: BytesIO) -> Optional[str]:
    try:
        with pdfplumber.open(bytes_io) as pdf:
            parts = []
            for page in pdf.pages:
                ptext = page.extract_text()
                if ptext:
                    parts.append(ptext)
            return "\n\n".join(parts) if parts else None
    except Exception as e:
        logger.exception("PDF extraction failed: %s", e)
        return None


def _extract_docx(bytes_io: BytesIO) -> Optional[str]:
    try:
        doc = Document(bytes_io)
        parts = [p.text for p in doc.paragraphs if p.text.strip()]
        return "\n".join(parts) if parts else None
    except Exception as e:
        logger.exception("DOCX extraction failed: %s", e)
        return None


def _decode_text(file_bytes: bytes) -> Optional[str]:
    for encoding in ("utf-8-sig", "cp1251"):
        try:
            return file_bytes.decode(encoding)
        except UnicodeDecodeError:
            continue
    logger.warning("Text file is neither UTF-8 nor CP1251")
    return None


def is_supported_file(filename: str) -> bool:
    return (filename or "").lower().strip().endswith(SUPPORTED_EXTENSIONS)


def extract_text_from_file(file_bytes: bytes, filename: str) -> Optional[str]:
    """
    Extract and clean text from an uploaded resume file.
    File is read from bytes in memory; no disk write.
    Returns cleaned text or None if unsupported type or extraction fails.
    """
    name_lower = (filename or "").lower().strip()
    if not is_supported_file(name_lower):
        logger.warning("Unsupported file type: %s", filename)
        return None

    bio = BytesIO(file_bytes)
    if name_lower.endswith(".pdf"):
        raw = _extract_pdf(bio)
    elif name_lower.endswith(".docx"):
        raw = _extract_docx(bio)
    else:
        raw = _decode_text(file_bytes)

    if not raw or not raw.strip():
        return None
    return clean_resume_text(raw)
