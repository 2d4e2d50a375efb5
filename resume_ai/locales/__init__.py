"""Language registry exports."""

from .registry import (
    DEFAULT_LANGUAGE_CODE,
    FallbackStrategy,
    LanguageBundle,
    all_bundles,
    get_bundle,
    has_bundle,
    language_display_name,
    normalize_language_code,
    supported_languages,
)

__all__ = [
    "DEFAULT_LANGUAGE_CODE",
    "FallbackStrategy",
    "LanguageBundle",
    "all_bundles",
    "get_bundle",
    "has_bundle",
    "language_display_name",
    "normalize_language_code",
    "supported_languages",
]
