"""Build the localized system message and user prompt for the extraction model."""

from typing import NamedTuple, Optional

from resume_ai.config import PROMPT_MAX_RESUME_CHARS
from resume_ai.locales.registry import (
    DEFAULT_LANGUAGE_CODE,
    get_bundle,
    language_display_name,
    normalize_language_code,
)

TARGET_JSON_SHAPE = """{
  "desired_titles": ["string"],
  "summary": "string",
  "skills": [
    {"name": "string", "level": 1, "label": "basic|limited|proficient|advanced|expert",
     "type": "programming_language|spoken_language|framework|tool|domain|methodology|soft_skill|other",
     "notes": "string"}
  ],
  "experience": [
    {"employer": "string", "title": "string", "start": "YYYY-MM", "end": "YYYY-MM or present",
     "description": "string", "location": "string"}
  ],
  "location_preference": {"type": "remote|hybrid|onsite", "preferred_locations": ["string"]},
  "schedule": "full_time|part_time|contract|freelance|internship|temporary",
  "salary_expectation": {"currency": "USD", "min": 0, "max": 0,
                         "periodicity": "year|month|day|hour|project", "notes": "string"},
  "availability": "string",
  "links": [{"label": "string", "url": "https://..."}]
}"""


class PromptPair(NamedTuple):
    system_message: str
    user_prompt: str


def build_prompt(resume_text: str, language: Optional[str] = None, detected_format: Optional[str] = None) -> PromptPair:
    """
    Build (system_message, user_prompt). Unknown language codes use the English bundle;
    any non-English code adds an instruction to write all values in that language.
    """
    code = normalize_language_code(language)
    bundle = get_bundle(code)

    rules = list(bundle.prompt_rules)
    if code != DEFAULT_LANGUAGE_CODE:
        rules.append(bundle.translation_instruction.format(language_name=language_display_name(code)))

    sections = [
        bundle.prompt_intro,
        TARGET_JSON_SHAPE,
        "\n".join(f"- {rule}" for rule in rules),
    ]
    hint = bundle.format_hints.get(detected_format or "")
    if hint:
        sections.append(hint)
    text = (resume_text or "").strip()[:PROMPT_MAX_RESUME_CHARS]
    sections.append(f"{bundle.resume_text_label}\n{text}")
    sections.append(bundle.closing_instruction)

    return PromptPair(system_message=bundle.system_message, user_prompt="\n\n".join(sections))
