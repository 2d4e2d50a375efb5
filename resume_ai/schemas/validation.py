"""Validation diagnostics and the graded outcome returned by the validator."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

IssueKind = Literal["missing", "invalid", "empty", "duplicate"]
Severity = Literal["error", "warning"]
Verdict = Literal["full_accept", "partial_accept", "reject"]


class ValidationIssue(BaseModel):
    """One diagnostic about a field of the profile."""

    field: str = Field(..., description="Dotted path, e.g. experience[1].start")
    kind: IssueKind = Field(..., description="missing, invalid, empty or duplicate")
    severity: Severity = Field(..., description="error blocks acceptance, warning never does")
    suggestion: Optional[str] = Field(default=None, description="Hint for fixing the value")


class ValidationOutcome(BaseModel):
    """Graded result for one profile: diagnostics, partial fields and per-field confidence."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    validation_errors: List[ValidationIssue] = Field(default_factory=list)
    partial_fields: List[str] = Field(default_factory=list)
    confidence_scores: Dict[str, float] = Field(default_factory=dict)

    @property
    def verdict(self) -> Verdict:
        if not self.is_valid:
            return "reject"
        if self.partial_fields:
            return "partial_accept"
        return "full_accept"
