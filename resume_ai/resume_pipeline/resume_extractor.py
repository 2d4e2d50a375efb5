"""Resume extraction pipeline: format detection, model call, parsing, fallback, validation."""

import asyncio
import time
import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from resume_ai.config import MIN_RESUME_CHARS, MODEL_NAME, OPENAI_API_KEY, SERVICE_VERSION
from resume_ai.errors import (
    AI_PROCESSING_FAILED,
    DOCUMENT_CONVERSION_FAILED,
    RESUME_TEXT_TOO_SHORT,
    ExtractionFailure,
)
from resume_ai.resume_pipeline.fallback_extractor import apply_fallback, fill_missing_descriptions, find_unmapped_sections
from resume_ai.resume_pipeline.format_detector import detect_format
from resume_ai.resume_pipeline.prompt_builder import build_prompt
from resume_ai.resume_pipeline.response_parser import parse_model_output
from resume_ai.resume_pipeline.validator import validate_profile
from resume_ai.schemas.api_response import ProcessResumeResponse, ResponseMetadata
from resume_ai.schemas.extraction import ExtractionOptions, ExtractionResult
from resume_ai.schemas.resume_profile import ResumeProfile
from resume_ai.services.outcome_log import InputType, OutcomeReporter, RequestLogEntry, safe_report
from resume_ai.utils.helpers import sanitize_for_log
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)

ModelInvoker = Callable[[str, str], Awaitable[str]]


def _failure(options: ExtractionOptions, code: str, message: str, **kwargs) -> ExtractionResult:
    return ExtractionResult(language=options.language, options=options, error_code=code, error_message=message, **kwargs)


async def extract_resume(
    resume_text: str,
    invoke: ModelInvoker,
    options: Optional[ExtractionOptions] = None,
) -> ExtractionResult:
    """
    Run one resume through the pipeline. Never raises for extraction failures:
    they come back as an ExtractionResult with profile=None and an error code.
    """
    options = options or ExtractionOptions()
    text = (resume_text or "").strip()
    if len(text) < MIN_RESUME_CHARS:
        logger.warning("Resume text too short for extraction (%s chars)", len(text))
        return _failure(options, RESUME_TEXT_TOO_SHORT, f"Resume text must be at least {MIN_RESUME_CHARS} characters")

    detection = detect_format(text) if options.detect_format else None
    prompt = build_prompt(text, options.language, detection.format if detection else None)

    try:
        raw_output = await invoke(prompt.system_message, prompt.user_prompt)
    except ExtractionFailure as e:
        logger.warning("Model call failed (%s): %s", e.code, e.message)
        return _failure(options, e.code, e.message, format_detection=detection)
    except Exception as e:
        logger.exception("Model call failed: %s", e)
        return _failure(options, AI_PROCESSING_FAILED, f"Model call failed: {e}", format_detection=detection)

    parsed = parse_model_output(raw_output)
    if parsed.profile is None:
        return _failure(
            options,
            parsed.error_code or AI_PROCESSING_FAILED,
            parsed.error_message or "Model output could not be parsed",
            format_detection=detection,
        )
    profile = parsed.profile

    fill_missing_descriptions(profile, options.language)
    fallback_fields = []
    if options.use_fallback:
        fallback = apply_fallback(text, options.language, profile)
        fallback_fields = fallback.filled_fields
        unmapped = fallback.unmapped_fields
    else:
        unmapped = find_unmapped_sections(text, profile)

    outcome = validate_profile(
        profile,
        flexible_validation=options.flexible_validation,
        strict_validation=options.strict_validation,
        dropped_values=parsed.dropped,
    )
    return ExtractionResult(
        language=options.language,
        options=options,
        profile=profile,
        outcome=outcome,
        format_detection=detection,
        unmapped_fields=unmapped if options.include_unmapped else [],
        fallback_fields=fallback_fields,
        notes=list(parsed.notes),
    )


def _response_data(result: ExtractionResult) -> Optional[dict]:
    """Profile as returned to the caller; partial and flexible-invalid results carry their grading."""
    outcome = result.outcome
    data = result.profile.to_output()
    if outcome.is_valid and not outcome.partial_fields:
        return data
    if outcome.is_valid or result.options.flexible_validation:
        data["partial_fields"] = list(outcome.partial_fields)
        data["confidence_scores"] = dict(outcome.confidence_scores)
        return data
    return None


def build_response(result: ExtractionResult, processing_time_ms: int, model_name: str = MODEL_NAME) -> ProcessResumeResponse:
    """Shape an ExtractionResult into the caller-facing response."""
    detection = result.format_detection
    metadata = ResponseMetadata(
        service_version=SERVICE_VERSION,
        ai_model_used=model_name,
        timestamp=datetime.now(timezone.utc).isoformat(),
        language=result.language,
        format_detected=detection.format if detection else None,
        format_confidence=detection.confidence if detection else None,
    )
    if result.failed:
        return ProcessResumeResponse(
            success=False,
            data=None,
            errors=[result.error_message or result.error_code or "Extraction failed"],
            verdict="reject",
            error_code=result.error_code,
            processing_time_ms=processing_time_ms,
            metadata=metadata,
        )

    outcome = result.outcome
    return ProcessResumeResponse(
        success=outcome.is_valid,
        data=_response_data(result),
        unmapped_fields=list(result.unmapped_fields),
        errors=list(outcome.errors),
        warnings=list(outcome.warnings) + list(result.notes),
        validation_errors=list(outcome.validation_errors) or None,
        partial_fields=list(outcome.partial_fields) or None,
        verdict=outcome.verdict,
        processing_time_ms=processing_time_ms,
        metadata=metadata,
    )


def _count_fields(profile: Optional[ResumeProfile]) -> int:
    if profile is None:
        return 0
    return sum(1 for name in ResumeProfile.model_fields if not profile.is_field_empty(name))


def _log_entry(
    request_id: str,
    resume_text: str,
    input_type: InputType,
    result: Optional[ExtractionResult],
    response: ProcessResumeResponse,
) -> RequestLogEntry:
    return RequestLogEntry(
        request_id=request_id,
        timestamp=response.metadata.timestamp if response.metadata else datetime.now(timezone.utc).isoformat(),
        input_type=input_type,
        input_size_chars=len(resume_text or ""),
        input_language=response.metadata.language if response.metadata else "",
        input_preview=RequestLogEntry.preview_of(resume_text),
        success=response.success,
        verdict=response.verdict,
        error_code=response.error_code,
        processing_time_ms=response.processing_time_ms,
        ai_model_used=response.metadata.ai_model_used if response.metadata else "",
        extracted_fields_count=_count_fields(result.profile if result else None),
        validation_errors_count=len(response.validation_errors or []),
        partial_fields_count=len(response.partial_fields or []),
    )


async def process_resume(
    resume_text: str,
    invoke: ModelInvoker,
    options: Optional[ExtractionOptions] = None,
    reporter: Optional[OutcomeReporter] = None,
    request_id: Optional[str] = None,
    input_type: InputType = "text",
) -> ProcessResumeResponse:
    """Extract, build the response, and report the outcome."""
    request_id = request_id or uuid.uuid4().hex
    started = time.perf_counter()
    result = await extract_resume(resume_text, invoke, options)
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    response = build_response(result, elapsed_ms)
    logger.info(
        "Resume %s processed: verdict=%s error_code=%s time_ms=%s",
        request_id,
        response.verdict,
        response.error_code or "none",
        elapsed_ms,
    )
    safe_report(reporter, _log_entry(request_id, resume_text, input_type, result, response))
    return response


async def process_document(
    document_bytes: bytes,
    filename: str,
    invoke: ModelInvoker,
    converter,
    options: Optional[ExtractionOptions] = None,
    reporter: Optional[OutcomeReporter] = None,
) -> ProcessResumeResponse:
    """Convert a document to text first; a conversion failure ends the request."""
    request_id = uuid.uuid4().hex
    options = options or ExtractionOptions()
    started = time.perf_counter()
    try:
        text = await converter.convert_to_text(document_bytes, filename)
    except ExtractionFailure as e:
        failure = _failure(options, e.code, e.message)
        response = build_response(failure, int((time.perf_counter() - started) * 1000))
        safe_report(reporter, _log_entry(request_id, "", "document", failure, response))
        return response
    except Exception as e:
        logger.exception("Document conversion failed for %s: %s", filename, e)
        failure = _failure(options, DOCUMENT_CONVERSION_FAILED, f"Document conversion failed: {e}")
        response = build_response(failure, int((time.perf_counter() - started) * 1000))
        safe_report(reporter, _log_entry(request_id, "", "document", failure, response))
        return response
    logger.info("Converted %s to text: %s", filename, sanitize_for_log(text, max_length=80))
    return await process_resume(text, invoke, options, reporter, request_id=request_id, input_type="document")


def _missing_key_response(options: ExtractionOptions) -> ProcessResumeResponse:
    logger.error("OPENAI_API_KEY is not set; cannot run resume extraction")
    failure = _failure(options, AI_PROCESSING_FAILED, "OPENAI_API_KEY is not set")
    return build_response(failure, 0)


def run_resume_pipeline(
    resume_text: str,
    options: Optional[ExtractionOptions] = None,
    invoke: Optional[ModelInvoker] = None,
    reporter: Optional[OutcomeReporter] = None,
) -> ProcessResumeResponse:
    """
    Run the pipeline on plain text from a sync context (e.g. Streamlit).
    Uses the OpenAI client unless an ``invoke`` coroutine is supplied.
    """
    from resume_ai.services.llm_client import OpenAIModelClient

    options = options or ExtractionOptions()
    if invoke is None:
        if not OPENAI_API_KEY:
            return _missing_key_response(options)
        invoke = OpenAIModelClient().invoke
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(process_resume(resume_text, invoke, options, reporter))
    finally:
        loop.close()


def run_document_pipeline(
    file_bytes: bytes,
    filename: str,
    options: Optional[ExtractionOptions] = None,
    invoke: Optional[ModelInvoker] = None,
    converter=None,
    reporter: Optional[OutcomeReporter] = None,
) -> ProcessResumeResponse:
    """Sync entry point for uploaded PDF/DOCX files."""
    from resume_ai.services.document_converter import get_document_converter
    from resume_ai.services.llm_client import OpenAIModelClient

    options = options or ExtractionOptions()
    if invoke is None:
        if not OPENAI_API_KEY:
            return _missing_key_response(options)
        invoke = OpenAIModelClient().invoke
    converter = converter or get_document_converter()
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(process_document(file_bytes, filename, invoke, converter, options, reporter))
    finally:
        loop.close()
