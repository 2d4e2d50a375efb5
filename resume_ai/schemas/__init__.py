"""Schema exports."""

from .api_response import (
    BatchResumeItem,
    BatchResumeResult,
    ProcessResumeBatchResponse,
    ProcessResumeResponse,
    ResponseMetadata,
)
from .extraction import ExtractionOptions, ExtractionResult, FormatDetection
from .resume_profile import (
    ExperienceEntry,
    LocationPreference,
    Link,
    ResumeProfile,
    SalaryExpectation,
    SkillRecord,
)
from .validation import ValidationIssue, ValidationOutcome

__all__ = [
    "BatchResumeItem",
    "BatchResumeResult",
    "ExperienceEntry",
    "ExtractionOptions",
    "ExtractionResult",
    "FormatDetection",
    "Link",
    "LocationPreference",
    "ProcessResumeBatchResponse",
    "ProcessResumeResponse",
    "ResponseMetadata",
    "ResumeProfile",
    "SalaryExpectation",
    "SkillRecord",
    "ValidationIssue",
    "ValidationOutcome",
]
