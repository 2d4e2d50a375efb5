from resume_ai.locales import get_bundle, has_bundle, language_display_name, normalize_language_code, supported_languages
from resume_ai.locales.registry import combined_month_table, combined_present_literals


def test_supported_languages():
    assert supported_languages() == ["en", "ru"]


def test_unknown_code_resolves_to_english():
    assert get_bundle("de").code == "en"
    assert get_bundle(None).code == "en"
    assert not has_bundle("de")


def test_regional_codes():
    assert normalize_language_code("ru_RU") == "ru"
    assert normalize_language_code(" EN-us ") == "en"
    assert get_bundle("ru-RU").code == "ru"


def test_display_names():
    assert language_display_name("ru") == "русский"
    assert language_display_name("fr") == "French"
    assert language_display_name("xx") == "xx"


def test_combined_tables_cover_both_languages():
    months = combined_month_table()
    assert months["sept"] == 9 and months["сентября"] == 9
    literals = combined_present_literals()
    assert "present" in literals and "настоящее время" in literals


def test_only_russian_scans_skill_levels():
    assert get_bundle("ru").scan_skill_levels
    assert not get_bundle("en").scan_skill_levels
