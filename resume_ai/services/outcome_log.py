"""Write-only outcome reporting for processed resumes (one entry per request)."""

from collections import Counter
from typing import Dict, List, Literal, Optional, Protocol

from pydantic import BaseModel, Field

from resume_ai.utils.helpers import sanitize_for_log
from resume_ai.utils.logger import format_fields, get_logger

logger = get_logger(__name__)

InputType = Literal["text", "document"]


class RequestLogEntry(BaseModel):
    """What gets reported about one request. Never holds raw resume text."""

    request_id: str
    timestamp: str
    input_type: InputType = "text"
    input_size_chars: int = 0
    input_language: str
    input_preview: str = Field(default="", description="Sanitized first 200 chars")
    success: bool
    verdict: Optional[str] = None
    error_code: Optional[str] = None
    processing_time_ms: int = 0
    ai_model_used: str = ""
    extracted_fields_count: int = 0
    validation_errors_count: int = 0
    partial_fields_count: int = 0

    @classmethod
    def preview_of(cls, text: str) -> str:
        return sanitize_for_log(text or "")


class OutcomeReporter(Protocol):
    def report(self, entry: RequestLogEntry) -> None:
        ...


class LoggingOutcomeReporter:
    """Writes one line per request through the standard logger."""

    def report(self, entry: RequestLogEntry) -> None:
        logger.info(
            "Request outcome %s",
            format_fields(
                request_id=entry.request_id,
                input_type=entry.input_type,
                language=entry.input_language,
                success=entry.success,
                verdict=entry.verdict,
                error_code=entry.error_code,
                time_ms=entry.processing_time_ms,
                fields=entry.extracted_fields_count,
                validation_errors=entry.validation_errors_count,
                partial=entry.partial_fields_count,
            ),
        )


class InMemoryOutcomeReporter:
    """Keeps entries in process memory and aggregates them on demand."""

    def __init__(self) -> None:
        self.entries: List[RequestLogEntry] = []

    def report(self, entry: RequestLogEntry) -> None:
        self.entries.append(entry)

    def stats(self) -> Dict[str, object]:
        total = len(self.entries)
        succeeded = sum(1 for e in self.entries if e.success)
        partial = sum(1 for e in self.entries if e.verdict == "partial_accept")
        by_language = Counter(e.input_language for e in self.entries)
        by_input = Counter(e.input_type for e in self.entries)
        error_codes = Counter(e.error_code for e in self.entries if e.error_code)
        avg_ms = round(sum(e.processing_time_ms for e in self.entries) / total, 1) if total else 0.0
        return {
            "total_requests": total,
            "successful_requests": succeeded,
            "failed_requests": total - succeeded,
            "partial_requests": partial,
            "text_requests": by_input.get("text", 0),
            "document_requests": by_input.get("document", 0),
            "requests_by_language": dict(by_language),
            "error_codes": dict(error_codes),
            "average_processing_time_ms": avg_ms,
        }


def safe_report(reporter: Optional[OutcomeReporter], entry: RequestLogEntry) -> None:
    """Report and log any reporter failure; the request result is never affected."""
    if reporter is None:
        return
    try:
        reporter.report(entry)
    except Exception as e:
        logger.exception("Outcome reporter failed for %s: %s", entry.request_id, e)
