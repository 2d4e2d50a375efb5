"""English language bundle (also the fallback for codes without a bundle)."""

import re

from resume_ai.locales.registry import (
    PATTERN_FLAGS,
    DescriptionTemplate,
    LanguageBundle,
    register_bundle,
    strategy,
)

# Section body: following non-blank lines up to the first blank line
_BODY = r"((?:[ \t]*\S[^\n]*(?:\n|\Z))+)"
_HEADER_END = r"[ \t]*(?::[ \t]*\n?|\n)"

ENGLISH = LanguageBundle(
    code="en",
    language_name="English",
    system_message=(
        "You are an expert resume parser. Extract structured data from resumes and return "
        "valid JSON only. If you cannot extract a field, omit it from the response."
    ),
    prompt_intro="Extract the following information from this resume and return ONLY a valid JSON object matching this shape:",
    prompt_rules=(
        "Convert every date to YYYY-MM (for example \"March 2022\" becomes \"2022-03\").",
        "Use \"present\" as the end date of any ongoing role.",
        "Skill levels: 1=basic, 2=limited, 3=proficient, 4=advanced, 5=expert; label must match the level.",
        "Every experience entry must have a non-empty description; summarize the role if the resume gives none.",
        "desired_titles, summary, skills and experience are required; omit optional fields you cannot find.",
        "Do not invent employers, dates or links that are not in the resume.",
    ),
    translation_instruction="All output values must be written in {language_name}; translate any text that is in another language.",
    format_hints={
        "chronological": "The resume appears to be chronological: experience is listed by date, so read roles and dates in order.",
        "functional": "The resume appears to be functional: skills are grouped by theme, so collect skills carefully and keep experience entries short.",
        "hybrid": "The resume appears to combine skill sections with a work history; extract both.",
    },
    resume_text_label="RESUME TEXT:",
    closing_instruction="Return only valid JSON:",
    month_table={
        "january": 1, "jan": 1,
        "february": 2, "feb": 2,
        "march": 3, "mar": 3,
        "april": 4, "apr": 4,
        "may": 5,
        "june": 6, "jun": 6,
        "july": 7, "jul": 7,
        "august": 8, "aug": 8,
        "september": 9, "sep": 9, "sept": 9,
        "october": 10, "oct": 10,
        "november": 11, "nov": 11,
        "december": 12, "dec": 12,
    },
    present_literals=(
        "present", "current", "currently", "now", "ongoing", "today",
        "to date", "till now", "until now", "to present",
    ),
    chronological_markers=(
        "work experience",
        "employment history",
        "professional experience",
        "work history",
        "career history",
    ),
    functional_markers=(
        "core competencies",
        "key qualifications",
        "areas of expertise",
        "summary of qualifications",
        "key skills",
        "skills summary",
    ),
    title_strategies=(
        strategy("desired_header", r"^[ \t]*(?:desired|target)[ \t]+(?:positions?|titles?|roles?)" + r"[ \t]*:[ \t]*([^\n]+)"),
        strategy("objective_header", r"^[ \t]*(?:career[ \t]+)?objective" + r"[ \t]*(?::[ \t]*|\n[ \t]*)([^\n]+)"),
        strategy(
            "looking_for",
            r"\b(?:looking[ \t]+for|seeking)[ \t]+(?:an?[ \t]+)?(?:new[ \t]+)?"
            r"(?:(?:position|role|job|opportunity)[ \t]+(?:as[ \t]+)?(?:an?[ \t]+)?)?([^\n.]+)",
        ),
    ),
    summary_strategies=(
        strategy(
            "summary_header",
            r"^[ \t]*(?:professional[ \t]+summary|executive[ \t]+summary|summary|about[ \t]+me|about|"
            r"professional[ \t]+profile|profile)" + _HEADER_END + _BODY,
            min_length=51,
        ),
    ),
    skill_strategies=(
        strategy(
            "skills_header",
            r"^[ \t]*(?:technical[ \t]+skills|key[ \t]+skills|core[ \t]+skills|skills|technologies|"
            r"tech[ \t]+stack|core[ \t]+competencies|competencies)" + _HEADER_END + _BODY,
        ),
    ),
    description_templates=(
        DescriptionTemplate(("engineer", "developer", "programmer"), "Designed, built and delivered software as {title}{employer}."),
        DescriptionTemplate(("manager", "lead", "head of"), "Led the team and coordinated delivery as {title}{employer}."),
        DescriptionTemplate(("analyst",), "Analyzed data and reported findings as {title}{employer}."),
    ),
    generic_description="Worked as {title}{employer}.",
    employer_clause=" at {employer}",
    unknown_title="a specialist",
    schedule_synonyms={
        "full_time": "full_time", "full-time": "full_time", "full time": "full_time",
        "part_time": "part_time", "part-time": "part_time", "part time": "part_time",
        "contract": "contract", "contractor": "contract",
        "freelance": "freelance",
        "internship": "internship", "intern": "internship",
        "temporary": "temporary", "temp": "temporary",
    },
    section_keywords={
        "education": ("education",),
        "certifications": ("certifications", "certificates"),
        "projects": ("projects",),
        "awards": ("awards",),
        "languages": ("languages",),
        "references": ("references",),
        "volunteer": ("volunteer",),
        "publications": ("publications",),
    },
    title_noise=re.compile(r"\s+(?:roles?|positions?|opportunit(?:y|ies)|jobs?)\s*$", PATTERN_FLAGS),
)

register_bundle(ENGLISH)
