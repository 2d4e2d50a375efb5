"""Classify resume structure as chronological, functional or hybrid."""

import re
from functools import lru_cache
from typing import List, Pattern

from resume_ai.locales.registry import all_bundles, combined_month_table
from resume_ai.schemas.extraction import FormatDetection
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)

MARKER_WEIGHT = 2
DOMINANCE_RATIO = 1.5
MIN_DATE_RANGES = 3  # date ranges only count when more than two are present
MAX_CONFIDENCE = 0.9
MAX_HYBRID_CONFIDENCE = 0.8

_YEAR = r"(?:19|20)\d{2}(?!\d)"
_DASH = r"\s*[-–—]\s*"
_OPEN_END = r"(?:present|current|now|по\s+настоящее\s+время|настоящее\s+время|н\.\s?в\.)"


@lru_cache(maxsize=1)
def _date_span_pattern() -> Pattern[str]:
    """One alternation so each range or month-name date is consumed, and counted, once."""
    months = sorted(combined_month_table().keys(), key=len, reverse=True)
    month_date = rf"(?:{'|'.join(re.escape(m) for m in months)})\.?\s+{_YEAR}"
    point = rf"(?:{month_date}|{_YEAR})"
    return re.compile(
        rf"(?<!\w)(?:{point}{_DASH}(?:{point}|{_OPEN_END})|{month_date})",
        re.IGNORECASE,
    )


def _marker_score(lowered: str, markers: List[str]) -> int:
    return sum(lowered.count(marker) * MARKER_WEIGHT for marker in markers)


def count_date_ranges(text: str) -> int:
    """Number of date ranges (closed or open-ended) plus standalone month-name dates in text."""
    return sum(1 for _ in _date_span_pattern().finditer(text))


def detect_format(text: str) -> FormatDetection:
    """
    Score chronological vs functional markers (weight 2 per occurrence, all languages).
    Dense date ranges (more than two) add their count to the chronological score.
    A bucket wins when it exceeds 1.5x the other; otherwise the resume is hybrid.
    """
    lowered = (text or "").lower()
    bundles = all_bundles()
    chronological = _marker_score(lowered, [m for b in bundles for m in b.chronological_markers])
    functional = _marker_score(lowered, [m for b in bundles for m in b.functional_markers])

    date_ranges = count_date_ranges(text or "")
    if date_ranges >= MIN_DATE_RANGES:
        chronological += date_ranges

    total = chronological + functional
    denominator = total if total > 0 else 1

    if chronological > DOMINANCE_RATIO * functional:
        result = FormatDetection(format="chronological", confidence=min(chronological / denominator, MAX_CONFIDENCE))
    elif functional > DOMINANCE_RATIO * chronological:
        result = FormatDetection(format="functional", confidence=min(functional / denominator, MAX_CONFIDENCE))
    else:
        dominant = max(chronological, functional)
        result = FormatDetection(format="hybrid", confidence=min(dominant / denominator, MAX_HYBRID_CONFIDENCE))

    logger.info(
        "Format detected: %s (confidence=%.2f chronological=%s functional=%s date_ranges=%s)",
        result.format,
        result.confidence,
        chronological,
        functional,
        date_ranges,
    )
    return result
