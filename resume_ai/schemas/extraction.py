"""Per-call options and intermediate results of the extraction pipeline."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from resume_ai.config import (
    DEFAULT_LANGUAGE,
    DETECT_FORMAT_DEFAULT,
    FLEXIBLE_VALIDATION_DEFAULT,
    INCLUDE_UNMAPPED_DEFAULT,
    STRICT_VALIDATION_DEFAULT,
    USE_FALLBACK_DEFAULT,
)
from resume_ai.schemas.resume_profile import ResumeProfile
from resume_ai.schemas.validation import ValidationOutcome

ResumeFormat = Literal["chronological", "functional", "hybrid"]


class ExtractionOptions(BaseModel):
    """Options recognized by the pipeline; defaults come from config."""

    language: str = Field(default=DEFAULT_LANGUAGE, description="ISO 639-1 code; only en/ru have full rule sets")
    flexible_validation: bool = FLEXIBLE_VALIDATION_DEFAULT
    strict_validation: bool = STRICT_VALIDATION_DEFAULT
    use_fallback: bool = USE_FALLBACK_DEFAULT
    detect_format: bool = DETECT_FORMAT_DEFAULT
    include_unmapped: bool = INCLUDE_UNMAPPED_DEFAULT


class FormatDetection(BaseModel):
    format: ResumeFormat
    confidence: float = Field(..., ge=0.0, le=1.0)


class ExtractionResult(BaseModel):
    """Everything one pipeline run produced. ``profile`` is None on extraction failure."""

    language: str
    options: ExtractionOptions = Field(default_factory=ExtractionOptions)
    profile: Optional[ResumeProfile] = None
    outcome: Optional[ValidationOutcome] = None
    format_detection: Optional[FormatDetection] = None
    unmapped_fields: List[str] = Field(default_factory=list)
    fallback_fields: List[str] = Field(default_factory=list, description="Fields filled by fallback extraction")
    notes: List[str] = Field(default_factory=list, description="Non-blocking notes, e.g. dates left as-is")
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.profile is None
