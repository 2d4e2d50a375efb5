"""Structured resume profile produced by the extraction pipeline.

Levels, dates and enum-like fields hold whatever the model emitted; range and format
checks belong to the validator, which reports them as diagnostics.
"""

from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resume_ai.utils.helpers import split_list_items

SKILL_LEVEL_LABELS = {1: "basic", 2: "limited", 3: "proficient", 4: "advanced", 5: "expert"}
SKILL_TYPES = (
    "programming_language",
    "spoken_language",
    "framework",
    "tool",
    "domain",
    "methodology",
    "soft_skill",
    "other",
)
LOCATION_TYPES = ("remote", "hybrid", "onsite")
SCHEDULE_TYPES = ("full_time", "part_time", "contract", "freelance", "internship", "temporary")
SALARY_PERIODS = ("year", "month", "day", "hour", "project")
REQUIRED_FIELDS = ("desired_titles", "summary", "skills", "experience")


def _wrap_string(value: Any) -> Any:
    # Models sometimes emit a single string where a list is expected
    if isinstance(value, str):
        return [value] if value.strip() else []
    return value


class _ProfileModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class SkillRecord(_ProfileModel):
    """Structured skill; the legacy form is a plain string."""

    name: Optional[str] = Field(default=None, description="Skill name")
    level: Optional[Union[int, float, str]] = Field(default=None, description="1=basic .. 5=expert")
    label: Optional[str] = Field(default=None, description="Canonical word for the level")
    type: Optional[str] = Field(default=None, description="Skill category (programming_language, tool, ...)")
    notes: Optional[str] = Field(default=None, description="Free-form notes, e.g. years of use")

    @field_validator("level", mode="before")
    @classmethod
    def _level_from_label(cls, value: Any) -> Any:
        if isinstance(value, bool):
            # booleans are not levels; keep them out of int coercion
            return str(value).lower()
        if isinstance(value, str):
            word = value.strip().lower()
            for level, label in SKILL_LEVEL_LABELS.items():
                if word == label:
                    return level
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


Skill = Union[SkillRecord, str]

# Anything that is neither a skill object nor a string is kept as emitted and graded by the validator
RawSkill = Annotated[Union[SkillRecord, str, Any], Field(union_mode="left_to_right")]


class ExperienceEntry(_ProfileModel):
    """One work history entry; dates are YYYY-MM, end may be 'present' or absent."""

    employer: Optional[str] = Field(default=None, description="Company or organization")
    title: Optional[str] = Field(default=None, description="Job title")
    start: Optional[str] = Field(default=None, description="Start date, YYYY-MM")
    end: Optional[str] = Field(default=None, description="End date, YYYY-MM or 'present'")
    description: Optional[str] = Field(default=None, description="What the candidate did")
    location: Optional[str] = Field(default=None, description="City / country / remote")
    description_synthesized: Optional[bool] = Field(
        default=None, description="True when description was generated, not extracted"
    )

    def has_description(self) -> bool:
        return bool((self.description or "").strip())


class LocationPreference(_ProfileModel):
    type: Optional[str] = Field(default=None, description="remote, hybrid or onsite")
    preferred_locations: Optional[List[str]] = Field(default=None, description="Preferred cities/regions")

    @field_validator("preferred_locations", mode="before")
    @classmethod
    def _wrap_locations(cls, value: Any) -> Any:
        return _wrap_string(value)


class SalaryExpectation(_ProfileModel):
    currency: Optional[str] = Field(default=None, description="3-letter currency code")
    min: Optional[float] = Field(default=None, description="Lower bound")
    max: Optional[float] = Field(default=None, description="Upper bound")
    periodicity: Optional[str] = Field(default=None, description="year, month, day, hour or project")
    notes: Optional[str] = None


class Link(_ProfileModel):
    label: Optional[str] = Field(default=None, description="Link label, e.g. GitHub")
    url: Optional[str] = Field(default=None, description="Absolute URL")


class ResumeProfile(_ProfileModel):
    """The structured candidate record. Required fields may be missing until validated."""

    version: Optional[str] = None
    desired_titles: Optional[List[Optional[str]]] = Field(default=None, description="Target job titles")
    summary: Optional[str] = Field(default=None, description="Professional summary")
    skills: Optional[List[RawSkill]] = Field(default=None, description="Skills, structured or plain")
    experience: Optional[List[ExperienceEntry]] = Field(default=None, description="Work history")
    location_preference: Optional[LocationPreference] = None
    schedule: Optional[str] = Field(default=None, description="Employment type")
    salary_expectation: Optional[SalaryExpectation] = None
    availability: Optional[str] = None
    links: Optional[List[Link]] = None

    @field_validator("desired_titles", mode="before")
    @classmethod
    def _wrap_titles(cls, value: Any) -> Any:
        return _wrap_string(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _split_skills(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_list_items(value)
        return value

    @field_validator("location_preference", mode="before")
    @classmethod
    def _location_from_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"type": value} if value.strip() else None
        return value

    def is_field_empty(self, name: str) -> bool:
        """True when a top-level field is missing, blank, or an empty list."""
        value = getattr(self, name, None)
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        if isinstance(value, list):
            return len(value) == 0
        return False

    def missing_required_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if self.is_field_empty(name)]

    def to_output(self) -> dict:
        """JSON-ready dict without unset/None fields."""
        return self.model_dump(mode="json", exclude_none=True)
