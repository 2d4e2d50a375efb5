"""
Resume extraction – Streamlit frontend.
No business logic in layout; extraction and validation live in the pipeline.
"""

import json
import uuid

import streamlit as st

from resume_ai.config import (
    DETECT_FORMAT_DEFAULT,
    FLEXIBLE_VALIDATION_DEFAULT,
    INCLUDE_UNMAPPED_DEFAULT,
    OPENAI_API_KEY,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
    STRICT_VALIDATION_DEFAULT,
    USE_FALLBACK_DEFAULT,
)
from resume_ai.errors import RateLimitExceeded
from resume_ai.locales.registry import language_display_name, supported_languages
from resume_ai.resume_pipeline.resume_extractor import run_document_pipeline, run_resume_pipeline
from resume_ai.schemas.api_response import ProcessResumeResponse
from resume_ai.schemas.extraction import ExtractionOptions
from resume_ai.services.outcome_log import LoggingOutcomeReporter
from resume_ai.services.rate_limiter import FixedWindowRateLimiter

VERDICT_DISPLAY = {
    "full_accept": ("Full accept", st.success),
    "partial_accept": ("Partial accept", st.warning),
    "reject": ("Reject", st.error),
}
OTHER_LANGUAGES = ["de", "fr", "es"]


@st.cache_resource
def _rate_limiter() -> FixedWindowRateLimiter:
    """One limiter per process, shared by every session."""
    return FixedWindowRateLimiter(RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS)


@st.cache_resource
def _reporter() -> LoggingOutcomeReporter:
    return LoggingOutcomeReporter()


def _session_id() -> str:
    if "session_id" not in st.session_state:
        st.session_state["session_id"] = uuid.uuid4().hex
    return st.session_state["session_id"]


def _language_label(code: str) -> str:
    name = language_display_name(code)
    return f"{name} ({code})" if name else code


def _render_response(response: ProcessResumeResponse) -> None:
    label, show = VERDICT_DISPLAY.get(response.verdict or "reject", VERDICT_DISPLAY["reject"])
    show(f"**{label}**" + (f" · `{response.error_code}`" if response.error_code else ""))
    if response.metadata:
        meta = response.metadata
        fmt = f"{meta.format_detected} ({meta.format_confidence:.2f})" if meta.format_detected else "not detected"
        st.caption(
            f"Language: {meta.language} · Format: {fmt} · Model: {meta.ai_model_used} · "
            f"{response.processing_time_ms} ms"
        )

    data = response.data or {}
    scores = data.get("confidence_scores")
    if scores:
        cols = st.columns(len(scores))
        for col, (field, score) in zip(cols, scores.items()):
            col.metric(field.replace("_", " ").title(), f"{score:.2f}")
    if response.partial_fields:
        st.markdown(f"**Partial fields:** {', '.join(response.partial_fields)}")
    if response.unmapped_fields:
        st.markdown(f"**Sections not mapped to the profile:** {', '.join(response.unmapped_fields)}")

    if response.errors:
        with st.expander(f"Errors ({len(response.errors)})", expanded=True):
            for message in response.errors:
                st.markdown(f"- {message}")
    if response.warnings:
        with st.expander(f"Warnings ({len(response.warnings)})"):
            for message in response.warnings:
                st.markdown(f"- {message}")
    if response.validation_errors:
        with st.expander("Validation details"):
            st.dataframe([issue.model_dump() for issue in response.validation_errors], use_container_width=True)

    if response.data is not None:
        st.subheader("Profile")
        st.json(response.data)
        st.download_button(
            "Download JSON",
            data=json.dumps(response.data, ensure_ascii=False, indent=2).encode("utf-8"),
            file_name="resume_profile.json",
            mime="application/json",
            key="download_json",
        )


def render_layout() -> None:
    """Streamlit page layout; extraction runs in the pipeline layer."""
    st.set_page_config(page_title="Resume Extraction", layout="wide")
    st.title("Resume Extraction")
    st.markdown("*Turn a free-form resume into a structured, graded profile.*")
    st.divider()

    languages = supported_languages() + OTHER_LANGUAGES
    with st.sidebar:
        st.subheader("Options")
        language = st.selectbox("Language", options=languages, index=0, format_func=_language_label, key="language")
        flexible = st.checkbox("Flexible validation", value=FLEXIBLE_VALIDATION_DEFAULT, key="flexible")
        strict = st.checkbox("Strict validation", value=STRICT_VALIDATION_DEFAULT, key="strict")
        use_fallback = st.checkbox("Fallback extraction", value=USE_FALLBACK_DEFAULT, key="use_fallback")
        detect = st.checkbox("Detect format", value=DETECT_FORMAT_DEFAULT, key="detect_format")
        include_unmapped = st.checkbox("Report unmapped sections", value=INCLUDE_UNMAPPED_DEFAULT, key="unmapped")

    options = ExtractionOptions(
        language=language,
        flexible_validation=flexible,
        strict_validation=strict,
        use_fallback=use_fallback,
        detect_format=detect,
        include_unmapped=include_unmapped,
    )

    text_tab, file_tab = st.tabs(["Paste text", "Upload file"])
    with text_tab:
        resume_text = st.text_area("Resume text", height=300, key="resume_text")
        text_clicked = st.button("Extract", type="primary", key="extract_text_btn")
    with file_tab:
        uploaded = st.file_uploader("Resume file", type=["pdf", "docx"], key="resume_file")
        file_clicked = st.button("Extract from file", type="primary", key="extract_file_btn")

    if "response" not in st.session_state:
        st.session_state["response"] = None
    if "error" not in st.session_state:
        st.session_state["error"] = None

    if text_clicked or file_clicked:
        st.session_state["response"] = None
        if not OPENAI_API_KEY:
            st.session_state["error"] = "OPENAI_API_KEY is not set. Add it to your .env file."
        elif text_clicked and not (resume_text or "").strip():
            st.session_state["error"] = "Please paste the resume text."
        elif file_clicked and uploaded is None:
            st.session_state["error"] = "Please choose a PDF or DOCX file."
        else:
            st.session_state["error"] = None
            try:
                _rate_limiter().hit(_session_id())
                with st.spinner("Extracting and validating…"):
                    if text_clicked:
                        response = run_resume_pipeline(resume_text, options, reporter=_reporter())
                    else:
                        response = run_document_pipeline(
                            uploaded.getvalue(), uploaded.name, options, reporter=_reporter()
                        )
                st.session_state["response"] = response
            except RateLimitExceeded as e:
                st.session_state["error"] = f"Too many requests. Retry after {e.retry_after} seconds."

    if st.session_state.get("error"):
        st.error(st.session_state["error"])

    response = st.session_state.get("response")
    st.divider()
    st.subheader("Result")
    if response is None:
        if not st.session_state.get("error"):
            st.info("Paste resume text or upload a file, then click **Extract**.")
        return
    _render_response(response)


if __name__ == "__main__":
    render_layout()
