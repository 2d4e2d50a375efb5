"""Shared fixtures: sample resumes, a complete profile payload and a fake model."""

import copy
import json
from typing import List, Optional, Tuple

import pytest

EN_RESUME = """Jane Doe
jane.doe@example.com | +1 555 123 4567
Seeking a position as Senior Backend Engineer, Platform Engineer

Summary
Backend engineer with nine years of experience building distributed systems in Python and Go.

Skills
Python, Go, PostgreSQL, Kubernetes, Docker

Work Experience
Senior Backend Engineer, Acme Corp, March 2020 - present
Backend Engineer, Globex, 2016 - 2020
Developer, Initech, 2014 - 2016

Education
BSc Computer Science, 2010 - 2014
"""

RU_RESUME = """Иван Петров
Желаемая должность: Python-разработчик, Backend-разработчик

О себе
Опытный разработчик с восьмилетним стажем коммерческой разработки на Python и Go.

Ключевые навыки
Python (эксперт), Английский — продвинутый, Docker

Опыт работы
ООО Ромашка, Python-разработчик, март 2020 — настоящее время
ООО Лютик, Разработчик, январь 2016 — февраль 2020

Образование
МГУ, 2010 — 2015
"""

_SUMMARY = (
    "Backend engineer with nine years of experience designing, building and operating "
    "distributed systems in Python and Go. Led migrations to Kubernetes, owned PostgreSQL "
    "performance work and mentored a team of five engineers across two product lines."
)

FULL_PROFILE = {
    "desired_titles": ["Senior Backend Engineer", "Platform Engineer"],
    "summary": _SUMMARY,
    "skills": [
        {"name": "Python", "level": 5, "label": "expert", "type": "programming_language"},
        {"name": "Go", "level": 4, "label": "advanced", "type": "programming_language"},
        {"name": "PostgreSQL", "level": 4, "label": "advanced", "type": "tool"},
        {"name": "Kubernetes", "level": 3, "label": "proficient", "type": "tool"},
        {"name": "Docker", "level": 4, "label": "advanced", "type": "tool"},
        {"name": "FastAPI", "level": 3, "label": "proficient", "type": "framework"},
        {"name": "Kafka", "level": 2, "label": "limited", "type": "tool"},
        {"name": "Scrum", "level": 3, "label": "proficient", "type": "methodology"},
        {"name": "English", "level": 4, "label": "advanced", "type": "spoken_language"},
        {"name": "Mentoring", "level": 1, "label": "basic", "type": "soft_skill"},
    ],
    "experience": [
        {
            "employer": "Acme Corp",
            "title": "Senior Backend Engineer",
            "start": "2020-03",
            "end": "present",
            "description": "Own the billing platform and its Kubernetes migration.",
        },
        {
            "employer": "Globex",
            "title": "Backend Engineer",
            "start": "2016-01",
            "end": "2020-02",
            "description": "Built order processing services in Go.",
        },
        {
            "employer": "Initech",
            "title": "Developer",
            "start": "2014-06",
            "end": "2015-12",
            "description": "Maintained internal reporting tools in Python.",
        },
    ],
    "location_preference": {"type": "remote", "preferred_locations": ["Berlin"]},
    "schedule": "full_time",
    "salary_expectation": {"currency": "EUR", "min": 80000, "max": 95000, "periodicity": "year"},
    "links": [{"label": "GitHub", "url": "https://github.com/janedoe"}],
}


class FakeModel:
    """Stands in for the external model: records calls, returns or raises what it was given."""

    def __init__(self, response=None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def __call__(self, system_message: str, user_prompt: str) -> str:
        self.calls.append((system_message, user_prompt))
        if self.error is not None:
            raise self.error
        if isinstance(self.response, str):
            return self.response
        return json.dumps(self.response, ensure_ascii=False)


@pytest.fixture
def en_resume() -> str:
    return EN_RESUME


@pytest.fixture
def ru_resume() -> str:
    return RU_RESUME


@pytest.fixture
def full_profile() -> dict:
    return copy.deepcopy(FULL_PROFILE)


@pytest.fixture
def fake_model():
    """Factory: ``fake_model(response)`` or ``fake_model(error=...)``."""
    return FakeModel
