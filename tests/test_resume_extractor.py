import pytest

from resume_ai.errors import (
    AI_PROCESSING_FAILED,
    DOCUMENT_CONVERSION_FAILED,
    NO_JSON_OBJECT,
    RESUME_TEXT_TOO_SHORT,
    ExtractionFailure,
)
from resume_ai.locales.en import ENGLISH
from resume_ai.locales.ru import RUSSIAN
from resume_ai.resume_pipeline.resume_extractor import (
    build_response,
    extract_resume,
    process_document,
    process_resume,
    run_resume_pipeline,
)
from resume_ai.schemas.extraction import ExtractionOptions
from resume_ai.services.outcome_log import InMemoryOutcomeReporter

PARTIAL_PAYLOAD = {
    "summary": "",
    "experience": [{"title": "Senior Backend Engineer", "employer": "Acme Corp", "start": "March 2020", "end": "present"}],
}


async def test_complete_extraction_is_full_accept(en_resume, full_profile, fake_model):
    model = fake_model(full_profile)
    result = await extract_resume(en_resume, model)
    assert not result.failed
    assert result.outcome.verdict == "full_accept"
    assert result.format_detection.format == "chronological"
    assert result.unmapped_fields == ["education"]
    assert result.fallback_fields == []

    response = build_response(result, 12)
    assert response.success is True
    assert response.data["desired_titles"] == full_profile["desired_titles"]
    assert "partial_fields" not in response.data
    assert response.partial_fields is None
    assert response.metadata.format_detected == "chronological"
    assert response.processing_time_ms == 12


async def test_fallback_repairs_partial_model_output(en_resume, fake_model):
    result = await extract_resume(en_resume, fake_model(PARTIAL_PAYLOAD))
    profile = result.profile
    assert result.fallback_fields == ["desired_titles", "summary", "skills"]
    assert profile.experience[0].start == "2020-03"
    assert profile.experience[0].description_synthesized is True
    assert profile.experience[0].description.startswith("Designed, built and delivered software")
    assert result.outcome.verdict == "full_accept"


async def test_without_fallback_missing_fields_are_partial(en_resume, fake_model):
    options = ExtractionOptions(use_fallback=False)
    result = await extract_resume(en_resume, fake_model(PARTIAL_PAYLOAD), options)
    assert result.fallback_fields == []
    assert result.profile.experience[0].description_synthesized is True
    assert result.outcome.verdict == "partial_accept"
    assert result.unmapped_fields == ["education"]

    response = build_response(result, 5)
    assert response.success is True
    assert response.partial_fields == ["desired_titles", "summary", "skills"]
    assert response.data["partial_fields"] == ["desired_titles", "summary", "skills"]
    assert response.data["confidence_scores"]["summary"] == 0


async def test_non_flexible_missing_fields_return_no_data(en_resume, fake_model):
    options = ExtractionOptions(use_fallback=False, flexible_validation=False)
    response = build_response(await extract_resume(en_resume, fake_model(PARTIAL_PAYLOAD), options), 1)
    assert response.success is False
    assert response.data is None
    assert response.verdict == "reject"
    assert len(response.errors) >= 3


async def test_flexible_structural_error_keeps_profile_with_diagnostics(en_resume, full_profile, fake_model):
    full_profile["skills"][0] = {"name": "Go", "level": 6}
    response = build_response(await extract_resume(en_resume, fake_model(full_profile)), 1)
    assert response.success is False
    assert response.error_code is None
    assert response.data["confidence_scores"]["skills"] == 1.0
    assert any(issue.field == "skills[0].level" for issue in response.validation_errors)


async def test_model_error_is_extraction_failure(en_resume, fake_model):
    result = await extract_resume(en_resume, fake_model(error=RuntimeError("timeout")))
    assert result.failed
    assert result.error_code == AI_PROCESSING_FAILED

    response = build_response(result, 3)
    assert response.success is False
    assert response.data is None
    assert response.error_code == AI_PROCESSING_FAILED
    assert response.verdict == "reject"


async def test_collaborator_failure_code_is_kept(en_resume, fake_model):
    model = fake_model(error=ExtractionFailure(AI_PROCESSING_FAILED, "empty completion"))
    result = await extract_resume(en_resume, model)
    assert (result.error_code, result.error_message) == (AI_PROCESSING_FAILED, "empty completion")


async def test_unparseable_output_is_extraction_failure(en_resume, fake_model):
    result = await extract_resume(en_resume, fake_model("Sorry, I cannot help with that."))
    assert result.failed
    assert result.error_code == NO_JSON_OBJECT


async def test_short_text_never_reaches_the_model(fake_model):
    model = fake_model({})
    result = await extract_resume("too short", model)
    assert result.error_code == RESUME_TEXT_TOO_SHORT
    assert model.calls == []


async def test_language_selects_bundle_and_is_recorded(ru_resume, en_resume, fake_model):
    model = fake_model({})
    result = await extract_resume(ru_resume, model, ExtractionOptions(language="ru"))
    assert model.calls[0][0] == RUSSIAN.system_message
    assert result.language == "ru"
    assert result.profile.skills[0].level == 5

    model = fake_model({})
    result = await extract_resume(en_resume, model, ExtractionOptions(language="de"))
    assert model.calls[0][0] == ENGLISH.system_message
    assert result.language == "de"
    assert build_response(result, 1).metadata.language == "de"


async def test_format_detection_can_be_disabled(en_resume, fake_model):
    model = fake_model({})
    result = await extract_resume(en_resume, model, ExtractionOptions(detect_format=False))
    assert result.format_detection is None
    for hint in ENGLISH.format_hints.values():
        assert hint not in model.calls[0][1]


async def test_unmapped_sections_can_be_suppressed(en_resume, fake_model):
    result = await extract_resume(en_resume, fake_model({}), ExtractionOptions(include_unmapped=False))
    assert result.unmapped_fields == []


async def test_unnormalized_dates_surface_as_warnings(en_resume, fake_model):
    payload = {"experience": [{"title": "Developer", "start": "Q3 2021", "description": "Built things."}]}
    response = build_response(await extract_resume(en_resume, fake_model(payload)), 1)
    assert "experience[0].start left as 'Q3 2021'" in response.warnings
    assert response.success is False


async def test_outcome_is_reported(en_resume, full_profile, fake_model):
    reporter = InMemoryOutcomeReporter()
    response = await process_resume(en_resume, fake_model(full_profile), reporter=reporter, request_id="r1")
    [entry] = reporter.entries
    assert entry.request_id == "r1"
    assert entry.success is True
    assert entry.verdict == "full_accept"
    assert "jane.doe@example.com" not in entry.input_preview
    assert entry.processing_time_ms == response.processing_time_ms


async def test_reporter_failure_does_not_change_result(en_resume, full_profile, fake_model):
    class BrokenReporter:
        def report(self, entry):
            raise RuntimeError("disk full")

    response = await process_resume(en_resume, fake_model(full_profile), reporter=BrokenReporter())
    assert response.success is True


class _StubConverter:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    async def convert_to_text(self, document_bytes, filename):
        if self.error is not None:
            raise self.error
        return self.text


async def test_document_conversion_failure(full_profile, fake_model):
    reporter = InMemoryOutcomeReporter()
    converter = _StubConverter(error=ExtractionFailure(DOCUMENT_CONVERSION_FAILED, "bad pdf"))
    model = fake_model(full_profile)
    response = await process_document(b"%PDF", "cv.pdf", model, converter, reporter=reporter)
    assert response.error_code == DOCUMENT_CONVERSION_FAILED
    assert response.data is None
    assert model.calls == []
    assert reporter.entries[0].input_type == "document"


async def test_document_is_converted_then_extracted(en_resume, full_profile, fake_model):
    response = await process_document(b"%PDF", "cv.pdf", fake_model(full_profile), _StubConverter(text=en_resume))
    assert response.success is True
    assert response.verdict == "full_accept"


def test_sync_wrapper_runs_the_pipeline(en_resume, full_profile, fake_model):
    response = run_resume_pipeline(en_resume, ExtractionOptions(), invoke=fake_model(full_profile))
    assert response.success is True


@pytest.mark.parametrize("text", ["", "   "])
async def test_blank_text(text, fake_model):
    result = await extract_resume(text, fake_model({}))
    assert result.error_code == RESUME_TEXT_TOO_SHORT


def _set_path(payload, path, value):
    *parents, last = path
    for key in parents:
        payload = payload[key]
    payload[last] = value


@pytest.mark.parametrize(
    "path, value, issue_field",
    [
        (("skills", 0), {"name": "Go", "level": 4.5}, "skills[0].level"),
        (("desired_titles",), ["Engineer", None], "desired_titles"),
        (("experience", 0), None, "experience[0]"),
        (("salary_expectation", "min"), "negotiable", "salary_expectation.min"),
    ],
)
async def test_badly_typed_model_output_is_graded_not_failed(en_resume, full_profile, fake_model, path, value, issue_field):
    _set_path(full_profile, path, value)
    result = await extract_resume(en_resume, fake_model(full_profile))
    assert not result.failed
    assert result.profile is not None
    assert result.outcome.verdict == "reject"
    assert any(i.field == issue_field and i.severity == "error" for i in result.outcome.validation_errors)

    response = build_response(result, 5)
    assert response.error_code is None
    assert response.data is not None


async def test_string_skills_from_model_are_split(en_resume, full_profile, fake_model):
    full_profile["skills"] = "Python, Go"
    result = await extract_resume(en_resume, fake_model(full_profile))
    assert result.profile.skills == ["Python", "Go"]
    assert result.outcome.verdict == "full_accept"
    assert result.outcome.confidence_scores["skills"] == 0.2
