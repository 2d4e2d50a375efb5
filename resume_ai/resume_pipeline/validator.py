"""Grade a ResumeProfile: diagnostics, partial fields and per-field confidence.

Required fields go through one policy table (missing -> severity by mode, present ->
confidence scorer + structural checks). Optional fields get structural checks only.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from resume_ai.locales.registry import combined_schedule_synonyms
from resume_ai.resume_pipeline.date_normalizer import is_present
from resume_ai.schemas.resume_profile import (
    LOCATION_TYPES,
    REQUIRED_FIELDS,
    SALARY_PERIODS,
    SKILL_LEVEL_LABELS,
    SKILL_TYPES,
    ResumeProfile,
    SkillRecord,
)
from resume_ai.schemas.validation import IssueKind, Severity, ValidationIssue, ValidationOutcome
from resume_ai.utils.helpers import is_valid_url
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)

DATE_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
CURRENCY_RE = re.compile(r"^[A-Z]{3}$")

TITLES_CONFIDENCE = 0.9
TITLES_DEGRADED_CONFIDENCE = 0.5
SUMMARY_FULL_LENGTH = 200
SKILLS_FULL_COUNT = 10
EXPERIENCE_FULL_COUNT = 3


@dataclass
class _Report:
    """Mutable accumulator for one validation pass."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    def add(
        self,
        field_path: str,
        kind: IssueKind,
        severity: Severity,
        message: str,
        suggestion: Optional[str] = None,
    ) -> None:
        self.issues.append(ValidationIssue(field=field_path, kind=kind, severity=severity, suggestion=suggestion))
        if severity == "error":
            self.errors.append(message)
        else:
            self.warnings.append(message)


# ---- Required fields: confidence scorers with their structural checks ----


def _score_desired_titles(profile: ResumeProfile, report: _Report) -> float:
    titles = profile.desired_titles or []
    confidence = TITLES_CONFIDENCE
    if any(not (t or "").strip() for t in titles):
        report.add("desired_titles", "empty", "error", "desired_titles cannot contain empty strings",
                   "Remove blank titles")
        confidence = TITLES_DEGRADED_CONFIDENCE
    non_blank = [t.strip() for t in titles if (t or "").strip()]
    if len(set(non_blank)) != len(non_blank):
        report.add("desired_titles", "duplicate", "warning", "desired_titles contains duplicates",
                   "Keep each title once")
        confidence = TITLES_DEGRADED_CONFIDENCE
    return confidence


def _score_summary(profile: ResumeProfile, report: _Report) -> float:
    return min(1.0, len((profile.summary or "").strip()) / SUMMARY_FULL_LENGTH)


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def _check_skill(index: int, skill: Any, report: _Report) -> None:
    path = f"skills[{index}]"
    if isinstance(skill, str):
        if not skill.strip():
            report.add(path, "empty", "error", f"Skill at index {index} cannot be empty string")
        return
    if not isinstance(skill, SkillRecord):
        report.add(path, "invalid", "error", f"Skill at index {index} has invalid type: {_json_type_name(skill)}",
                   "Use a string or an object with a name")
        return
    if not (skill.name or "").strip():
        report.add(f"{path}.name", "missing", "error", f"Skill at index {index} must have a non-empty name")
    if skill.level is not None:
        if isinstance(skill.level, bool) or not isinstance(skill.level, int) or not 1 <= skill.level <= 5:
            report.add(f"{path}.level", "invalid", "error",
                       f'Skill "{skill.name}" has invalid level: {skill.level} (must be 1-5)',
                       "Use an integer level from 1 (basic) to 5 (expert)")
        elif skill.label and skill.label != SKILL_LEVEL_LABELS[skill.level]:
            report.add(f"{path}.label", "invalid", "warning",
                       f'Skill "{skill.name}" label "{skill.label}" doesn\'t match level {skill.level}',
                       f'Use "{SKILL_LEVEL_LABELS[skill.level]}" for level {skill.level}')
    if skill.type and skill.type not in SKILL_TYPES:
        report.add(f"{path}.type", "invalid", "warning", f'Skill "{skill.name}" has invalid type: {skill.type}',
                   "Use one of: " + ", ".join(SKILL_TYPES))


def _score_skills(profile: ResumeProfile, report: _Report) -> float:
    skills = profile.skills or []
    for index, skill in enumerate(skills):
        _check_skill(index, skill, report)
    return min(1.0, len(skills) / SKILLS_FULL_COUNT)


def _score_experience(profile: ResumeProfile, report: _Report) -> float:
    experience = profile.experience or []
    for index, entry in enumerate(experience):
        path = f"experience[{index}]"
        if not (entry.title or "").strip():
            report.add(f"{path}.title", "missing", "error", f"Experience at index {index} must have a non-empty title")
        if not entry.start:
            report.add(f"{path}.start", "missing", "error", f"Experience at index {index} must have a start date")
        elif not DATE_RE.match(entry.start):
            report.add(f"{path}.start", "invalid", "error",
                       f"Experience at index {index} has invalid start date format: {entry.start} (expected YYYY-MM)",
                       "Use YYYY-MM")
        if entry.end and not is_present(entry.end) and not DATE_RE.match(entry.end):
            report.add(f"{path}.end", "invalid", "error",
                       f'Experience at index {index} has invalid end date format: {entry.end} (expected YYYY-MM or "present")',
                       'Use YYYY-MM or "present"')
        if not entry.has_description():
            report.add(f"{path}.description", "missing", "error",
                       f"Experience at index {index} must have a non-empty description")
    return min(1.0, len(experience) / EXPERIENCE_FULL_COUNT)


@dataclass(frozen=True)
class RequiredFieldPolicy:
    name: str
    missing_message: str
    suggestion: str
    scorer: Callable[[ResumeProfile, _Report], float]


REQUIRED_FIELD_POLICIES: Dict[str, RequiredFieldPolicy] = {
    "desired_titles": RequiredFieldPolicy(
        "desired_titles", "desired_titles is required and must not be empty",
        "Add at least one target job title", _score_desired_titles,
    ),
    "summary": RequiredFieldPolicy(
        "summary", "summary is required and cannot be empty",
        "Add a short professional summary", _score_summary,
    ),
    "skills": RequiredFieldPolicy(
        "skills", "skills is required and must not be empty",
        "List key skills, optionally with levels 1-5", _score_skills,
    ),
    "experience": RequiredFieldPolicy(
        "experience", "experience is required and must not be empty",
        "Add work history entries with title, start date and description", _score_experience,
    ),
}


def missing_field_severity(flexible_validation: bool) -> Severity:
    return "warning" if flexible_validation else "error"


# ---- Optional fields: structural checks only ----


def _check_optional_fields(profile: ResumeProfile, report: _Report, schedule_severity: Severity) -> None:
    pref = profile.location_preference
    if pref is not None and pref.type and pref.type not in LOCATION_TYPES:
        report.add("location_preference.type", "invalid", "error",
                   f"Invalid location preference type: {pref.type}", "Use remote, hybrid or onsite")

    if profile.schedule:
        synonyms = combined_schedule_synonyms()
        if profile.schedule.strip().lower() not in synonyms:
            report.add("schedule", "invalid", schedule_severity, f"Invalid schedule: {profile.schedule}",
                       "Use one of: full_time, part_time, contract, freelance, internship, temporary")

    salary = profile.salary_expectation
    if salary is not None:
        if not salary.currency:
            report.add("salary_expectation.currency", "missing", "error", "salary_expectation must have currency")
        elif not CURRENCY_RE.match(salary.currency):
            report.add("salary_expectation.currency", "invalid", "error",
                       f"Invalid currency format: {salary.currency} (expected 3-letter code like USD)")
        if not salary.periodicity:
            report.add("salary_expectation.periodicity", "missing", "error", "salary_expectation must have periodicity")
        elif salary.periodicity not in SALARY_PERIODS:
            report.add("salary_expectation.periodicity", "invalid", "error", f"Invalid periodicity: {salary.periodicity}",
                       "Use one of: " + ", ".join(SALARY_PERIODS))
        if salary.min is not None and salary.min < 0:
            report.add("salary_expectation.min", "invalid", "error", "salary_expectation min cannot be negative")
        if salary.max is not None and salary.max < 0:
            report.add("salary_expectation.max", "invalid", "error", "salary_expectation max cannot be negative")
        if salary.min is not None and salary.max is not None and salary.min > salary.max:
            report.add("salary_expectation", "invalid", "warning", "salary_expectation min is greater than max")

    for index, link in enumerate(profile.links or []):
        if not (link.label or "").strip():
            report.add(f"links[{index}].label", "missing", "error", f"Link at index {index} must have a non-empty label")
        if not link.url:
            report.add(f"links[{index}].url", "missing", "error", f"Link at index {index} must have a URL")
        elif not is_valid_url(link.url):
            report.add(f"links[{index}].url", "invalid", "error", f"Link at index {index} has invalid URL: {link.url}")


def validate_profile(
    profile: ResumeProfile,
    flexible_validation: bool = True,
    strict_validation: bool = False,
    dropped_values: Iterable[Tuple[str, str]] = (),
) -> ValidationOutcome:
    """
    Produce the graded outcome without mutating the profile.

    is_valid = no errors AND (flexible mode OR no partial fields). In flexible mode a
    missing required field is a warning plus a partial field; otherwise it is an error.
    Structural problems are errors in every mode, including values the parser had to
    drop because they could not take the profile's shape (``dropped_values``: path, reason).
    """
    report = _Report()
    partial_fields: List[str] = []
    confidence: Dict[str, float] = {}
    missing_severity = missing_field_severity(flexible_validation)

    for name in REQUIRED_FIELDS:
        policy = REQUIRED_FIELD_POLICIES[name]
        if profile.is_field_empty(name):
            confidence[name] = 0.0
            if flexible_validation:
                partial_fields.append(name)
                report.add(name, "missing", missing_severity, f"{name} is missing; returned as partial", policy.suggestion)
            else:
                report.add(name, "missing", missing_severity, policy.missing_message, policy.suggestion)
            continue
        confidence[name] = round(policy.scorer(profile, report), 3)

    for path, reason in dropped_values:
        report.add(path, "invalid", "error", f"{path} has an invalid value and was dropped: {reason}")

    schedule_severity: Severity = "error" if strict_validation or not flexible_validation else "warning"
    _check_optional_fields(profile, report, schedule_severity)

    is_valid = not report.errors and (flexible_validation or not partial_fields)
    outcome = ValidationOutcome(
        is_valid=is_valid,
        errors=report.errors,
        warnings=report.warnings,
        validation_errors=report.issues,
        partial_fields=partial_fields,
        confidence_scores=confidence,
    )
    logger.info(
        "Validation verdict=%s errors=%s warnings=%s partial=%s",
        outcome.verdict,
        len(outcome.errors),
        len(outcome.warnings),
        partial_fields or "none",
    )
    return outcome
