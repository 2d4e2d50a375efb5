from resume_ai.config import PROMPT_MAX_RESUME_CHARS
from resume_ai.locales.en import ENGLISH
from resume_ai.locales.ru import RUSSIAN
from resume_ai.resume_pipeline.prompt_builder import TARGET_JSON_SHAPE, build_prompt


def test_english_prompt_embeds_shape_rules_and_text(en_resume):
    prompt = build_prompt(en_resume, "en")
    assert prompt.system_message == ENGLISH.system_message
    assert TARGET_JSON_SHAPE in prompt.user_prompt
    assert "YYYY-MM" in prompt.user_prompt
    assert '"present"' in prompt.user_prompt
    assert "1=basic" in prompt.user_prompt
    assert "non-empty description" in prompt.user_prompt
    assert en_resume.strip() in prompt.user_prompt
    assert "translate" not in prompt.user_prompt


def test_russian_prompt_is_localized_and_asks_for_translation(ru_resume):
    prompt = build_prompt(ru_resume, "ru")
    assert prompt.system_message == RUSSIAN.system_message
    assert RUSSIAN.resume_text_label in prompt.user_prompt
    assert RUSSIAN.translation_instruction.format(language_name="русский") in prompt.user_prompt


def test_unknown_language_uses_english_bundle_with_translation(en_resume):
    prompt = build_prompt(en_resume, "de")
    assert prompt.system_message == ENGLISH.system_message
    assert "German" in prompt.user_prompt


def test_regional_code_resolves_to_base_language(ru_resume):
    assert build_prompt(ru_resume, "ru-RU").system_message == RUSSIAN.system_message


def test_format_hint_only_when_detected(en_resume):
    with_hint = build_prompt(en_resume, "en", "functional")
    without_hint = build_prompt(en_resume, "en")
    assert ENGLISH.format_hints["functional"] in with_hint.user_prompt
    for hint in ENGLISH.format_hints.values():
        assert hint not in without_hint.user_prompt


def test_resume_text_is_truncated():
    prompt = build_prompt("a" * (PROMPT_MAX_RESUME_CHARS + 500), "en")
    assert "a" * PROMPT_MAX_RESUME_CHARS in prompt.user_prompt
    assert "a" * (PROMPT_MAX_RESUME_CHARS + 1) not in prompt.user_prompt


def test_build_prompt_is_pure(en_resume):
    assert build_prompt(en_resume, "en", "hybrid") == build_prompt(en_resume, "en", "hybrid")
