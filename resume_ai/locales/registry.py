"""Language registry: one bundle of prompts, tables and fallback patterns per language code."""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, FrozenSet, List, Optional, Pattern, Tuple

from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE_CODE = "en"
PATTERN_FLAGS = re.IGNORECASE | re.MULTILINE

# Display names for codes without their own bundle (still recorded as requested)
LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "ru": "Russian",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "pt": "Portuguese",
    "uk": "Ukrainian",
    "pl": "Polish",
    "kk": "Kazakh",
}


@dataclass(frozen=True)
class FallbackStrategy:
    """One ordered extraction rule: regex, capture group, minimum accepted length."""

    name: str
    pattern: Pattern[str]
    group: int = 1
    min_length: int = 2

    def match(self, text: str) -> Optional[str]:
        """Return the captured span if the pattern matches and the span is long enough."""
        if not text:
            return None
        m = self.pattern.search(text)
        if not m:
            return None
        captured = (m.group(self.group) or "").strip()
        if len(captured) < self.min_length:
            return None
        return captured


def strategy(name: str, regex: str, min_length: int = 2, group: int = 1) -> FallbackStrategy:
    return FallbackStrategy(name=name, pattern=re.compile(regex, PATTERN_FLAGS), group=group, min_length=min_length)


@dataclass(frozen=True)
class DescriptionTemplate:
    """Synthesized description chosen when any keyword occurs in the lowercased title."""

    keywords: Tuple[str, ...]
    template: str


@dataclass(frozen=True)
class LanguageBundle:
    """Everything language-dependent the pipeline needs, keyed by ISO 639-1 code."""

    code: str
    language_name: str
    system_message: str
    prompt_intro: str
    prompt_rules: Tuple[str, ...]
    translation_instruction: str
    format_hints: Dict[str, str]
    resume_text_label: str
    closing_instruction: str
    month_table: Dict[str, int]
    present_literals: Tuple[str, ...]
    chronological_markers: Tuple[str, ...]
    functional_markers: Tuple[str, ...]
    title_strategies: Tuple[FallbackStrategy, ...]
    summary_strategies: Tuple[FallbackStrategy, ...]
    skill_strategies: Tuple[FallbackStrategy, ...]
    description_templates: Tuple[DescriptionTemplate, ...]
    generic_description: str
    employer_clause: str
    unknown_title: str
    schedule_synonyms: Dict[str, str]
    section_keywords: Dict[str, Tuple[str, ...]]
    title_noise: Optional[Pattern[str]] = None
    scan_skill_levels: bool = False
    skill_level_patterns: Tuple[Tuple[int, Pattern[str]], ...] = field(default_factory=tuple)


_REGISTRY: Dict[str, LanguageBundle] = {}


def register_bundle(bundle: LanguageBundle) -> None:
    _REGISTRY[bundle.code] = bundle
    combined_month_table.cache_clear()
    combined_present_literals.cache_clear()
    combined_schedule_synonyms.cache_clear()


def _ensure_loaded() -> None:
    # Bundles register themselves on import
    from resume_ai.locales import en, ru  # noqa: F401


def normalize_language_code(code: Optional[str]) -> str:
    """Lowercase ISO 639-1 code; regional suffixes such as ``ru-RU`` are dropped."""
    value = (code or "").strip().lower().replace("_", "-")
    if not value:
        return DEFAULT_LANGUAGE_CODE
    return value.split("-", 1)[0]


def get_bundle(code: Optional[str]) -> LanguageBundle:
    """Return the bundle for a language code; unknown codes resolve to English."""
    _ensure_loaded()
    key = normalize_language_code(code)
    bundle = _REGISTRY.get(key)
    if bundle is None:
        logger.info("No language bundle for '%s'; using English rules", key)
        return _REGISTRY[DEFAULT_LANGUAGE_CODE]
    return bundle


def has_bundle(code: Optional[str]) -> bool:
    _ensure_loaded()
    return normalize_language_code(code) in _REGISTRY


def all_bundles() -> List[LanguageBundle]:
    _ensure_loaded()
    return list(_REGISTRY.values())


def supported_languages() -> List[str]:
    _ensure_loaded()
    return sorted(_REGISTRY.keys())


def language_display_name(code: Optional[str]) -> str:
    key = normalize_language_code(code)
    if has_bundle(key):
        return _REGISTRY[key].language_name
    return LANGUAGE_NAMES.get(key, key)


@lru_cache(maxsize=1)
def combined_month_table() -> Dict[str, int]:
    """Month names and abbreviations from every bundle, lowercased."""
    table: Dict[str, int] = {}
    for bundle in all_bundles():
        table.update(bundle.month_table)
    return table


@lru_cache(maxsize=1)
def combined_present_literals() -> FrozenSet[str]:
    return frozenset(lit for bundle in all_bundles() for lit in bundle.present_literals)


@lru_cache(maxsize=1)
def combined_schedule_synonyms() -> Dict[str, str]:
    synonyms: Dict[str, str] = {}
    for bundle in all_bundles():
        synonyms.update(bundle.schedule_synonyms)
    return synonyms
