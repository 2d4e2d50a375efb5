"""Parse raw model output into a ResumeProfile and normalize experience dates."""

import json
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from resume_ai.errors import INVALID_JSON, NO_JSON_OBJECT, SCHEMA_MISMATCH, ExtractionFailure
from resume_ai.resume_pipeline.date_normalizer import is_present, normalize_date_tagged
from resume_ai.schemas.resume_profile import ResumeProfile
from resume_ai.utils.helpers import sanitize_for_log
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)


class DroppedValue(NamedTuple):
    """A value removed from model output because it could not take the profile's shape."""

    path: str
    message: str


class ParseResult(NamedTuple):
    """Parsed profile, or profile=None with an error code. ``notes`` lists dates left as-is."""

    profile: Optional[ResumeProfile]
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    notes: Tuple[str, ...] = ()
    dropped: Tuple[DroppedValue, ...] = ()


def extract_json_object(raw_output: str) -> dict:
    """Take the span from the first '{' to the last '}' and parse it as a JSON object."""
    text = (raw_output or "").strip()
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ExtractionFailure(NO_JSON_OBJECT, "No JSON object found in model response")
    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise ExtractionFailure(INVALID_JSON, f"Model response is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ExtractionFailure(INVALID_JSON, "Model response JSON is not an object")
    return parsed


def normalize_experience_dates(profile: ResumeProfile) -> List[str]:
    """
    Normalize start/end of every experience entry in place.
    Returns a note for each date no rule could normalize.
    """
    notes: List[str] = []
    for index, entry in enumerate(profile.experience or []):
        if entry.start:
            result = normalize_date_tagged(entry.start)
            entry.start = result.value
            if result.status == "unchanged":
                notes.append(f"experience[{index}].start left as '{entry.start}'")
        if entry.end and not is_present(entry.end):
            result = normalize_date_tagged(entry.end)
            entry.end = result.value
            if result.status == "unchanged":
                notes.append(f"experience[{index}].end left as '{entry.end}'")
    if notes:
        logger.warning("Dates not normalized: %s", "; ".join(notes))
    return notes


def format_path(parts: Sequence[Union[str, int]]) -> str:
    """('experience', 0, 'title') -> 'experience[0].title'"""
    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else part
    return path


def _locate(data: dict, loc: Sequence[Union[str, int]]) -> Tuple[Any, Any, List[Union[str, int]]]:
    """Follow an error location through the raw data as far as it exists."""
    parent: Any = None
    key: Any = None
    parts: List[Union[str, int]] = []
    node: Any = data
    for step in loc:
        in_dict = isinstance(node, dict) and isinstance(step, str) and step in node
        in_list = isinstance(node, list) and isinstance(step, int) and 0 <= step < len(node)
        if not (in_dict or in_list):
            break
        parent, key = node, step
        node = node[step]
        parts.append(step)
    return parent, key, parts


def _drop_invalid_values(data: dict, error: ValidationError) -> List[DroppedValue]:
    """Remove each rejected value in place: dict keys are popped, list items deleted."""
    targets: Dict[Tuple[int, Any], Tuple[Any, Any]] = {}
    dropped: List[DroppedValue] = []
    for detail in error.errors():
        parent, key, parts = _locate(data, detail["loc"])
        if parent is None or (id(parent), key) in targets:
            continue
        targets[(id(parent), key)] = (parent, key)
        dropped.append(DroppedValue(format_path(parts), detail["msg"]))

    list_items = []
    for parent, key in targets.values():
        if isinstance(parent, dict):
            parent.pop(key, None)
        else:
            list_items.append((parent, key))
    # highest index first so earlier positions stay valid
    for parent, key in sorted(list_items, key=lambda item: item[1], reverse=True):
        del parent[key]
    return dropped


def shape_profile(data: dict) -> Tuple[ResumeProfile, List[DroppedValue]]:
    """
    Build a ResumeProfile from a parsed JSON object.
    Values pydantic cannot shape are dropped and returned so the validator can report them.
    """
    dropped: List[DroppedValue] = []
    while True:
        try:
            return ResumeProfile.model_validate(data), dropped
        except ValidationError as e:
            removed = _drop_invalid_values(data, e)
            if not removed:
                raise ExtractionFailure(
                    SCHEMA_MISMATCH, f"Model output does not fit the profile schema: {e.error_count()} errors"
                ) from e
            dropped.extend(removed)


def parse_model_output(raw_output: str) -> ParseResult:
    """Parse model output; failures come back as a ParseResult, never as an exception."""
    try:
        data = extract_json_object(raw_output)
        profile, dropped = shape_profile(data)
    except ExtractionFailure as e:
        logger.warning(
            "Failed to parse model response (%s): %s | preview=%s",
            e.code,
            e.message,
            sanitize_for_log(raw_output or ""),
        )
        return ParseResult(profile=None, error_code=e.code, error_message=e.message)

    if dropped:
        logger.warning("Dropped values that do not fit the profile: %s", ", ".join(d.path for d in dropped))
    missing = profile.missing_required_fields()
    if missing:
        logger.warning("Model response missing required fields: %s", ", ".join(missing))
    notes = normalize_experience_dates(profile)
    return ParseResult(profile=profile, notes=tuple(notes), dropped=tuple(dropped))
