"""Document-to-text converters: local (pdfplumber / python-docx) or the PDF.co service."""

import base64
from typing import Optional, Protocol

import httpx

from resume_ai.config import (
    DOCUMENT_CONVERTER,
    HTTP_TIMEOUT_SECONDS,
    PDF_CO_API_KEY,
    PDF_CO_BASE_URL,
    PDF_CO_PAGES,
)
from resume_ai.errors import DOCUMENT_CONVERSION_FAILED, ExtractionFailure
from resume_ai.resume_pipeline.text_extractor import clean_resume_text, extract_text_from_file
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentConverter(Protocol):
    async def convert_to_text(self, document_bytes: bytes, filename: str) -> str:
        ...


class LocalDocumentConverter:
    """In-process conversion; nothing leaves the machine."""

    async def convert_to_text(self, document_bytes: bytes, filename: str) -> str:
        if not document_bytes:
            raise ExtractionFailure(DOCUMENT_CONVERSION_FAILED, "Document is empty")
        text = extract_text_from_file(document_bytes, filename)
        if not text:
            raise ExtractionFailure(DOCUMENT_CONVERSION_FAILED, f"No text could be extracted from {filename or 'document'}")
        logger.info("Local conversion of %s produced %s chars", filename, len(text))
        return text


class PdfCoDocumentConverter:
    """
    Two calls against PDF.co: base64 upload, then pdf/convert/to/text on the returned URL.
    No retry; any HTTP or service-level failure is a conversion failure.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = PDF_CO_BASE_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        pages: str = PDF_CO_PAGES,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else PDF_CO_API_KEY
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.pages = pages
        self._transport = transport

    async def _post(self, client: httpx.AsyncClient, path: str, payload: dict) -> dict:
        response = await client.post(f"{self.base_url}{path}", json=payload)
        response.raise_for_status()
        body = response.json()
        if body.get("error") or body.get("success") is False:
            raise ExtractionFailure(
                DOCUMENT_CONVERSION_FAILED, f"PDF.co {path} failed: {body.get('message') or 'unsuccessful'}"
            )
        return body

    async def convert_to_text(self, document_bytes: bytes, filename: str) -> str:
        if not self.api_key:
            raise ExtractionFailure(DOCUMENT_CONVERSION_FAILED, "PDF_CO_API_KEY is not set")
        if not document_bytes:
            raise ExtractionFailure(DOCUMENT_CONVERSION_FAILED, "Document is empty")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"x-api-key": self.api_key},
                transport=self._transport,
            ) as client:
                upload = await self._post(
                    client,
                    "/file/upload/base64",
                    {"file": base64.b64encode(document_bytes).decode("ascii"), "name": filename or "resume.pdf"},
                )
                file_url = upload.get("url") or upload.get("fileUrl")
                if not file_url:
                    raise ExtractionFailure(DOCUMENT_CONVERSION_FAILED, "PDF.co upload returned no file URL")
                converted = await self._post(
                    client,
                    "/pdf/convert/to/text",
                    {"url": file_url, "inline": True, "pages": self.pages, "ocrMode": "auto"},
                )
        except ExtractionFailure:
            raise
        except httpx.HTTPStatusError as e:
            logger.warning("PDF.co HTTP error %s for %s", e.response.status_code, filename)
            raise ExtractionFailure(
                DOCUMENT_CONVERSION_FAILED, f"PDF.co HTTP error {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("PDF.co request failed for %s: %s", filename, e)
            raise ExtractionFailure(DOCUMENT_CONVERSION_FAILED, f"PDF.co request failed: {e}") from e

        text = clean_resume_text(converted.get("body") or "")
        if not text:
            raise ExtractionFailure(DOCUMENT_CONVERSION_FAILED, "PDF.co returned no text")
        logger.info("PDF.co conversion of %s produced %s chars", filename, len(text))
        return text


def get_document_converter(kind: Optional[str] = None) -> DocumentConverter:
    """Converter selected by DOCUMENT_CONVERTER ('local' or 'pdfco')."""
    name = (kind or DOCUMENT_CONVERTER or "local").strip().lower()
    if name == "pdfco":
        return PdfCoDocumentConverter()
    if name != "local":
        logger.warning("Unknown DOCUMENT_CONVERTER '%s'; using local conversion", name)
    return LocalDocumentConverter()
