"""Russian language bundle."""

import re

from resume_ai.locales.registry import (
    PATTERN_FLAGS,
    DescriptionTemplate,
    LanguageBundle,
    register_bundle,
    strategy,
)

_BODY = r"((?:[ \t]*\S[^\n]*(?:\n|\Z))+)"
_HEADER_END = r"[ \t]*(?::[ \t]*\n?|\n)"


def _level(regex: str) -> "re.Pattern[str]":
    return re.compile(r"\b(?:" + regex + r")(?:[ \t]+уровень|[ \t]+level)?\b", PATTERN_FLAGS)


RUSSIAN = LanguageBundle(
    code="ru",
    language_name="русский",
    system_message=(
        "Вы опытный парсер резюме. Извлеките структурированные данные из резюме и верните "
        "только корректный JSON. Если поле извлечь невозможно, не включайте его в ответ."
    ),
    prompt_intro="Извлеките из резюме следующую информацию и верните ТОЛЬКО корректный JSON-объект такой структуры:",
    prompt_rules=(
        "Преобразуйте все даты в формат YYYY-MM (например, \"март 2022\" становится \"2022-03\").",
        "Для текущего места работы используйте \"present\" в качестве даты окончания.",
        "Уровни навыков: 1=basic, 2=limited, 3=proficient, 4=advanced, 5=expert; label должен соответствовать уровню.",
        "У каждой записи опыта работы должно быть непустое описание; если его нет, кратко опишите роль.",
        "Поля desired_titles, summary, skills и experience обязательны; необязательные поля опускайте, если их нет.",
        "Не придумывайте работодателей, даты и ссылки, которых нет в резюме.",
    ),
    translation_instruction="Все значения в ответе должны быть на языке: {language_name}. Переведите текст, написанный на другом языке.",
    format_hints={
        "chronological": "Резюме составлено в хронологическом формате: опыт перечислен по датам, сохраняйте порядок мест работы.",
        "functional": "Резюме составлено в функциональном формате: навыки сгруппированы по темам, внимательно соберите навыки.",
        "hybrid": "Резюме сочетает разделы навыков и историю работы; извлеките и то, и другое.",
    },
    resume_text_label="ТЕКСТ РЕЗЮМЕ:",
    closing_instruction="Верните только корректный JSON:",
    month_table={
        "январь": 1, "января": 1, "янв": 1,
        "февраль": 2, "февраля": 2, "фев": 2, "февр": 2,
        "март": 3, "марта": 3, "мар": 3,
        "апрель": 4, "апреля": 4, "апр": 4,
        "май": 5, "мая": 5,
        "июнь": 6, "июня": 6, "июн": 6,
        "июль": 7, "июля": 7, "июл": 7,
        "август": 8, "августа": 8, "авг": 8,
        "сентябрь": 9, "сентября": 9, "сен": 9, "сент": 9,
        "октябрь": 10, "октября": 10, "окт": 10,
        "ноябрь": 11, "ноября": 11, "ноя": 11, "нояб": 11,
        "декабрь": 12, "декабря": 12, "дек": 12,
    },
    present_literals=(
        "настоящее время", "по настоящее время", "наст. время", "н.в.", "н. в.", "по н.в.",
        "сейчас", "текущее время", "по сей день", "до сих пор", "по текущее время",
    ),
    chronological_markers=(
        "опыт работы",
        "трудовая деятельность",
        "история работы",
        "места работы",
    ),
    functional_markers=(
        "ключевые компетенции",
        "ключевые навыки",
        "основные квалификации",
        "профессиональные навыки",
        "сферы компетенции",
    ),
    title_strategies=(
        strategy(
            "desired_position",
            r"^[ \t]*(?:желаемая[ \t]+(?:должность|позиция)|должность)" + r"[ \t]*(?::[ \t]*|\n[ \t]*)([^\n]+)",
        ),
        strategy(
            "looking_for_job",
            r"\bищу[ \t]+(?:работу|позицию|вакансию)(?:[ \t]+(?:в[ \t]+качестве|на[ \t]+позицию|на[ \t]+должность))?"
            r"[ \t]*[:\-–—]?[ \t]*([^\n.]+)",
        ),
        strategy("goal_header", r"^[ \t]*цель" + r"[ \t]*(?::[ \t]*|\n[ \t]*)([^\n]+)"),
    ),
    summary_strategies=(
        strategy(
            "about_header",
            r"^[ \t]*(?:о[ \t]+себе|обо[ \t]+мне|профессиональный[ \t]+профиль|профиль|краткое[ \t]+описание)"
            + _HEADER_END + _BODY,
            min_length=51,
        ),
    ),
    skill_strategies=(
        strategy(
            "skills_header",
            r"^[ \t]*(?:ключевые[ \t]+навыки|профессиональные[ \t]+навыки|навыки|компетенции|умения|технологии)"
            + _HEADER_END + _BODY,
        ),
    ),
    description_templates=(
        DescriptionTemplate(
            ("инженер", "разработчик", "программист", "engineer", "developer"),
            "Разработка и внедрение программных решений в должности «{title}»{employer}.",
        ),
        DescriptionTemplate(
            ("руководитель", "менеджер", "лид", "manager", "lead"),
            "Руководство командой и координация работ в должности «{title}»{employer}.",
        ),
        DescriptionTemplate(("аналитик", "analyst"), "Анализ данных и подготовка выводов в должности «{title}»{employer}."),
    ),
    generic_description="Работа в должности «{title}»{employer}.",
    employer_clause=" в компании {employer}",
    unknown_title="специалист",
    schedule_synonyms={
        "полная занятость": "full_time",
        "частичная занятость": "part_time",
        "контракт": "contract",
        "договор": "contract",
        "фриланс": "freelance",
        "проектная работа": "freelance",
        "стажировка": "internship",
        "временная работа": "temporary",
    },
    section_keywords={
        "education": ("образование",),
        "certifications": ("сертификаты", "сертификации"),
        "projects": ("проекты",),
        "awards": ("награды",),
        "languages": ("языки", "знание языков"),
        "references": ("рекомендации",),
        "volunteer": ("волонтерство", "волонтёрство"),
        "publications": ("публикации",),
    },
    scan_skill_levels=True,
    skill_level_patterns=(
        (5, _level(r"эксперт\w*|expert")),
        (4, _level(r"продвинут\w*|advanced")),
        (3, _level(r"уверенн\w*|proficient")),
        (2, _level(r"ограниченн\w*|limited")),
        (1, _level(r"базов\w*|начальн\w*|basic")),
    ),
)

register_bundle(RUSSIAN)
