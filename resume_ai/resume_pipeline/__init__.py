"""Resume pipeline: format detection, prompt, parsing, fallback, validation."""

from resume_ai.resume_pipeline.text_extractor import extract_text_from_file
from resume_ai.resume_pipeline.date_normalizer import normalize_date, normalize_date_tagged
from resume_ai.resume_pipeline.format_detector import detect_format
from resume_ai.resume_pipeline.prompt_builder import build_prompt
from resume_ai.resume_pipeline.response_parser import parse_model_output
from resume_ai.resume_pipeline.fallback_extractor import apply_fallback
from resume_ai.resume_pipeline.validator import validate_profile
from resume_ai.resume_pipeline.resume_extractor import (
    build_response,
    extract_resume,
    process_resume,
    run_document_pipeline,
    run_resume_pipeline,
)

__all__ = [
    "apply_fallback",
    "build_prompt",
    "build_response",
    "detect_format",
    "extract_resume",
    "extract_text_from_file",
    "normalize_date",
    "normalize_date_tagged",
    "parse_model_output",
    "process_resume",
    "run_document_pipeline",
    "run_resume_pipeline",
    "validate_profile",
]
