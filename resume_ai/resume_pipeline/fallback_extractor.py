"""Deterministic regex fallback for fields the model left missing or empty."""

import re
from typing import Iterable, List, NamedTuple, Optional

from resume_ai.locales.registry import FallbackStrategy, LanguageBundle, all_bundles, get_bundle
from resume_ai.schemas.resume_profile import SKILL_LEVEL_LABELS, ExperienceEntry, ResumeProfile, Skill, SkillRecord
from resume_ai.utils.helpers import split_list_items, unique_preserving_order
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)

MAX_FALLBACK_SKILLS = 20
MAX_SKILL_LENGTH = 80

_TITLE_SEPARATORS = re.compile(r"[,;|]")
_SKILL_SEPARATORS = re.compile(r"[,;|•·\n]")
_LEFTOVER_BRACKETS = re.compile(r"\(\s*\)|\[\s*\]")
_LEVEL_LEAD = re.compile(r"(?:[(\[:,–—]|\s-)\s*\Z")


class FallbackResult(NamedTuple):
    profile: ResumeProfile
    filled_fields: List[str]
    unmapped_fields: List[str]
    synthesized_descriptions: int


def first_match(text: str, strategies: Iterable[FallbackStrategy]) -> Optional[str]:
    """Run strategies in order; the first accepted capture wins."""
    for strategy in strategies:
        captured = strategy.match(text)
        if captured:
            logger.debug("Fallback strategy '%s' matched", strategy.name)
            return captured
    return None


def extract_titles(text: str, bundle: LanguageBundle) -> Optional[List[str]]:
    captured = first_match(text, bundle.title_strategies)
    if not captured:
        return None
    titles = []
    for item in split_list_items(captured, _TITLE_SEPARATORS):
        if bundle.title_noise is not None:
            item = bundle.title_noise.sub("", item).strip()
        titles.append(item)
    titles = unique_preserving_order(titles)
    return titles or None


def extract_summary(text: str, bundle: LanguageBundle) -> Optional[str]:
    captured = first_match(text, bundle.summary_strategies)
    if not captured:
        return None
    return " ".join(captured.split())


def _level_match(candidate: str, pattern: "re.Pattern[str]") -> Optional["re.Match[str]"]:
    # a level word is a level only when bracketed, set off by a separator, or trailing
    for match in pattern.finditer(candidate):
        before = candidate[: match.start()]
        after = candidate[match.end():].strip(" \t)]")
        if _LEVEL_LEAD.search(before) or not after:
            return match
    return None


def detect_skill_level(candidate: str, bundle: LanguageBundle) -> Skill:
    """
    Turn 'Python (продвинутый)' or 'Английский — продвинутый' into a SkillRecord with a level;
    'Expert Systems' and 'Базовые алгоритмы' stay plain strings.
    """
    if not bundle.scan_skill_levels:
        return candidate
    for level, pattern in bundle.skill_level_patterns:
        match = _level_match(candidate, pattern)
        if match is None:
            continue
        name = _LEFTOVER_BRACKETS.sub("", candidate[: match.start()] + " " + candidate[match.end():])
        name = " ".join(name.split()).strip(" -–—:,;()[]")
        if not name:
            return candidate
        return SkillRecord(name=name, level=level, label=SKILL_LEVEL_LABELS[level])
    return candidate


def extract_skills(text: str, bundle: LanguageBundle) -> Optional[List[Skill]]:
    captured = first_match(text, bundle.skill_strategies)
    if not captured:
        return None
    candidates = [s for s in split_list_items(captured, _SKILL_SEPARATORS) if len(s) <= MAX_SKILL_LENGTH]
    candidates = unique_preserving_order(candidates)[:MAX_FALLBACK_SKILLS]
    if not candidates:
        return None
    return [detect_skill_level(c, bundle) for c in candidates]


def synthesize_description(entry: ExperienceEntry, bundle: LanguageBundle) -> str:
    """Pick the first template whose keyword starts a word in the title; else the generic one."""
    title = (entry.title or "").strip() or bundle.unknown_title
    employer = (entry.employer or "").strip()
    employer_part = bundle.employer_clause.format(employer=employer) if employer else ""
    lowered = title.lower()
    for template in bundle.description_templates:
        if any(re.search(r"\b" + re.escape(keyword), lowered) for keyword in template.keywords):
            return template.template.format(title=title, employer=employer_part)
    return bundle.generic_description.format(title=title, employer=employer_part)


def fill_missing_descriptions(profile: ResumeProfile, language: Optional[str]) -> int:
    """Give every experience entry without a description a synthesized one, flagged as such."""
    bundle = get_bundle(language)
    filled = 0
    for entry in profile.experience or []:
        if entry.has_description():
            continue
        entry.description = synthesize_description(entry, bundle)
        entry.description_synthesized = True
        filled += 1
    if filled:
        logger.info("Synthesized %s experience descriptions", filled)
    return filled


def _section_represented(section: str, profile: ResumeProfile) -> bool:
    experience = profile.experience or []
    if section == "languages":
        return any(isinstance(s, SkillRecord) and s.type == "spoken_language" for s in profile.skills or [])
    if section == "projects":
        return any("project" in (e.description or "").lower() or "проект" in (e.description or "").lower() for e in experience)
    if section == "education":
        return any(
            "student" in (e.title or "").lower() or "студент" in (e.title or "").lower() for e in experience
        )
    return False


def find_unmapped_sections(text: str, profile: Optional[ResumeProfile]) -> List[str]:
    """Sections present in the text (any supported language) that the schema does not hold."""
    lowered = (text or "").lower()
    sections: List[str] = []
    for bundle in all_bundles():
        for section, keywords in bundle.section_keywords.items():
            if section in sections:
                continue
            if any(keyword in lowered for keyword in keywords):
                sections.append(section)
    if profile is None:
        return sections
    return [s for s in sections if not _section_represented(s, profile)]


def apply_fallback(text: str, language: Optional[str], profile: ResumeProfile) -> FallbackResult:
    """
    Fill desired_titles, summary and skills only where they are missing or empty,
    synthesize missing experience descriptions, and list unmapped sections.
    Fields that already have content are never touched.
    """
    bundle = get_bundle(language)
    filled: List[str] = []

    if profile.is_field_empty("desired_titles"):
        titles = extract_titles(text, bundle)
        if titles:
            profile.desired_titles = titles
            filled.append("desired_titles")

    if profile.is_field_empty("summary"):
        summary = extract_summary(text, bundle)
        if summary:
            profile.summary = summary
            filled.append("summary")

    if profile.is_field_empty("skills"):
        skills = extract_skills(text, bundle)
        if skills:
            profile.skills = skills
            filled.append("skills")

    synthesized = fill_missing_descriptions(profile, language)
    unmapped = find_unmapped_sections(text, profile)

    still_missing = profile.missing_required_fields()
    logger.info(
        "Fallback (%s rules): filled=%s still_missing=%s unmapped=%s",
        bundle.code,
        filled or "none",
        still_missing or "none",
        unmapped or "none",
    )
    return FallbackResult(
        profile=profile,
        filled_fields=filled,
        unmapped_fields=unmapped,
        synthesized_descriptions=synthesized,
    )
