from resume_ai.locales import get_bundle
from resume_ai.resume_pipeline.fallback_extractor import (
    MAX_FALLBACK_SKILLS,
    apply_fallback,
    detect_skill_level,
    extract_summary,
    extract_titles,
    fill_missing_descriptions,
    find_unmapped_sections,
    synthesize_description,
)
from resume_ai.schemas.resume_profile import ExperienceEntry, ResumeProfile, SkillRecord


def test_english_fallback_fills_missing_fields(en_resume):
    profile = ResumeProfile()
    result = apply_fallback(en_resume, "en", profile)
    assert result.filled_fields == ["desired_titles", "summary", "skills"]
    assert profile.desired_titles == ["Senior Backend Engineer", "Platform Engineer"]
    assert profile.summary.startswith("Backend engineer with nine years")
    assert profile.skills == ["Python", "Go", "PostgreSQL", "Kubernetes", "Docker"]
    assert result.unmapped_fields == ["education"]


def test_russian_fallback_detects_skill_levels(ru_resume):
    profile = ResumeProfile()
    result = apply_fallback(ru_resume, "ru", profile)
    assert "skills" in result.filled_fields
    assert profile.desired_titles == ["Python-разработчик", "Backend-разработчик"]
    assert profile.summary.startswith("Опытный разработчик")
    python, english, docker = profile.skills
    assert python == SkillRecord(name="Python", level=5, label="expert")
    assert english == SkillRecord(name="Английский", level=4, label="advanced")
    assert docker == "Docker"
    assert result.unmapped_fields == ["education"]


def test_english_skills_stay_plain_strings():
    text = "Skills\nPython (expert), Go\n"
    profile = ResumeProfile()
    apply_fallback(text, "en", profile)
    assert profile.skills == ["Python (expert)", "Go"]


def test_fallback_never_overwrites_existing_content(en_resume):
    profile = ResumeProfile(desired_titles=["Data Scientist"], summary="Existing summary", skills=["R"])
    result = apply_fallback(en_resume, "en", profile)
    assert result.filled_fields == []
    assert profile.desired_titles == ["Data Scientist"]
    assert profile.summary == "Existing summary"
    assert profile.skills == ["R"]


def test_blank_and_empty_fields_count_as_missing(en_resume):
    profile = ResumeProfile(desired_titles=[], summary="   ", skills=["Go"])
    result = apply_fallback(en_resume, "en", profile)
    assert result.filled_fields == ["desired_titles", "summary"]
    assert profile.skills == ["Go"]


def test_first_matching_strategy_wins():
    text = "Desired positions: Data Engineer\nSeeking a role as Manager\n"
    assert extract_titles(text, get_bundle("en")) == ["Data Engineer"]


def test_title_noise_is_stripped():
    text = "I am looking for backend engineer roles"
    assert extract_titles(text, get_bundle("en")) == ["backend engineer"]


def test_short_summary_is_rejected():
    assert extract_summary("Summary\nShort text here.\n", get_bundle("en")) is None


def test_skill_count_is_capped():
    names = ", ".join(f"Skill{i}" for i in range(30))
    profile = ResumeProfile()
    apply_fallback(f"Skills\n{names}\n", "en", profile)
    assert len(profile.skills) == MAX_FALLBACK_SKILLS
    assert profile.skills[0] == "Skill0"


def test_no_match_leaves_field_missing():
    profile = ResumeProfile()
    result = apply_fallback("Nothing useful here at all, just a name and a phone.", "en", profile)
    assert result.filled_fields == []
    assert profile.missing_required_fields() == ["desired_titles", "summary", "skills", "experience"]


def test_unknown_language_uses_english_patterns(en_resume):
    profile = ResumeProfile()
    result = apply_fallback(en_resume, "de", profile)
    assert result.filled_fields == ["desired_titles", "summary", "skills"]


def test_synthesized_descriptions_by_title_keyword():
    en = get_bundle("en")
    cases = [
        (ExperienceEntry(title="Backend Engineer", employer="Acme"), "Designed, built and delivered software as Backend Engineer at Acme."),
        (ExperienceEntry(title="Team Lead"), "Led the team and coordinated delivery as Team Lead."),
        (ExperienceEntry(title="Data Analyst", employer="Globex"), "Analyzed data and reported findings as Data Analyst at Globex."),
        (ExperienceEntry(title="Barista", employer="Cafe"), "Worked as Barista at Cafe."),
        (ExperienceEntry(), "Worked as a specialist."),
    ]
    for entry, expected in cases:
        assert synthesize_description(entry, en) == expected


def test_russian_synthesized_description():
    entry = ExperienceEntry(title="Руководитель отдела", employer="Яндекс")
    assert synthesize_description(entry, get_bundle("ru")) == (
        "Руководство командой и координация работ в должности «Руководитель отдела» в компании Яндекс."
    )


def test_synthesis_is_deterministic():
    entry = ExperienceEntry(title="Courier")
    en = get_bundle("en")
    assert len({synthesize_description(entry, en) for _ in range(10)}) == 1


def test_missing_descriptions_are_filled_and_flagged():
    profile = ResumeProfile(
        experience=[
            ExperienceEntry(title="Developer", description="Wrote code."),
            ExperienceEntry(title="Developer", description="  "),
            ExperienceEntry(title="Analyst"),
        ]
    )
    assert fill_missing_descriptions(profile, "en") == 2
    real, blank, missing = profile.experience
    assert real.description == "Wrote code." and real.description_synthesized is None
    assert blank.description_synthesized is True
    assert missing.description.startswith("Analyzed data")
    assert missing.description_synthesized is True
    assert "description_synthesized" not in real.model_dump(exclude_none=True)


def test_unmapped_sections_in_both_languages():
    text = "Education\nMIT\n\nСертификаты\nAWS\n\nНаграды\nЛучший сотрудник"
    assert find_unmapped_sections(text, None) == ["education", "certifications", "awards"]


def test_represented_sections_are_not_reported():
    text = "Languages\nEnglish\n\nProjects\nOpen source\n\nEducation\nUniversity"
    profile = ResumeProfile(
        skills=[SkillRecord(name="English", level=5, type="spoken_language")],
        experience=[ExperienceEntry(title="Student assistant", description="Worked on a research project")],
    )
    assert find_unmapped_sections(text, profile) == []


def test_skill_level_words_must_be_set_off():
    ru = get_bundle("ru")
    assert detect_skill_level("Python (эксперт)", ru) == SkillRecord(name="Python", level=5, label="expert")
    assert detect_skill_level("Английский — продвинутый", ru) == SkillRecord(name="Английский", level=4, label="advanced")
    assert detect_skill_level("SQL: базовый уровень", ru) == SkillRecord(name="SQL", level=1, label="basic")
    assert detect_skill_level("Docker уверенный", ru) == SkillRecord(name="Docker", level=3, label="proficient")


def test_level_words_inside_skill_names_are_kept():
    ru = get_bundle("ru")
    assert detect_skill_level("Expert Systems", ru) == "Expert Systems"
    assert detect_skill_level("Базовые алгоритмы", ru) == "Базовые алгоритмы"
    assert detect_skill_level("Advanced Excel", ru) == "Advanced Excel"
    assert detect_skill_level("эксперт", ru) == "эксперт"
