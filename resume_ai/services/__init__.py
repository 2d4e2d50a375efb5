"""Service exports."""

from .outcome_log import InMemoryOutcomeReporter, LoggingOutcomeReporter, OutcomeReporter, RequestLogEntry
from .llm_client import OpenAIModelClient
from .document_converter import LocalDocumentConverter, PdfCoDocumentConverter, get_document_converter
from .rate_limiter import FixedWindowRateLimiter

__all__ = [
    "FixedWindowRateLimiter",
    "InMemoryOutcomeReporter",
    "LocalDocumentConverter",
    "LoggingOutcomeReporter",
    "OpenAIModelClient",
    "OutcomeReporter",
    "PdfCoDocumentConverter",
    "RequestLogEntry",
    "get_document_converter",
]
