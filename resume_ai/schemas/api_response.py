"""Response shapes handed back to callers (single resume and batch)."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from resume_ai.schemas.extraction import ExtractionOptions
from resume_ai.schemas.validation import ValidationIssue


class ResponseMetadata(BaseModel):
    service_version: str
    ai_model_used: str
    timestamp: str
    language: str
    format_detected: Optional[str] = None
    format_confidence: Optional[float] = None


class ProcessResumeResponse(BaseModel):
    """Output contract: profile (or partial profile) plus diagnostics."""

    success: bool
    data: Optional[dict] = Field(default=None, description="Profile; carries partial_fields/confidence_scores when partial")
    unmapped_fields: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    validation_errors: Optional[List[ValidationIssue]] = None
    partial_fields: Optional[List[str]] = None
    verdict: Optional[Literal["full_accept", "partial_accept", "reject"]] = None
    error_code: Optional[str] = None
    processing_time_ms: int = 0
    metadata: Optional[ResponseMetadata] = None


class BatchResumeItem(BaseModel):
    id: str
    resume_text: str
    options: ExtractionOptions = Field(default_factory=ExtractionOptions)


class BatchResumeResult(BaseModel):
    id: str
    status: Literal["pending", "processing", "completed", "failed"] = "pending"
    result: Optional[ProcessResumeResponse] = None
    error: Optional[str] = None


class ProcessResumeBatchResponse(BaseModel):
    batch_id: str
    status: Literal["completed", "failed"]
    total_resumes: int
    completed_count: int
    failed_count: int
    results: List[BatchResumeResult]
    processing_time_ms: int = 0
